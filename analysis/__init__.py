"""
Analysis package for the Banker's Safety Checker.
Contains the event trace recorded during a safety analysis.
"""
