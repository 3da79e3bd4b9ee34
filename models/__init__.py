"""
Models package for the Banker's Safety Checker.
Contains the snapshot and verdict data models.
"""
