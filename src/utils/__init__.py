"""
Utility helpers for the Electricity Price API.
"""
