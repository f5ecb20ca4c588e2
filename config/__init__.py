"""
Configuration for the fraud view dashboard.
"""
