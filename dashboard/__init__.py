"""
Web dashboard for the fraud view demo.
"""
