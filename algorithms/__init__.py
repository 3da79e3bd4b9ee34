"""
Algorithms package for the Banker's Safety Checker.
Contains the snapshot integrity checker and the Banker's safety algorithm.
"""
