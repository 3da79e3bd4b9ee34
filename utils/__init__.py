"""
Utilities package for the Banker's Safety Checker.
Contains the scenario loader, verdict formatting and logger.
"""
