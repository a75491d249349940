"""
Rental property deal analyzer.
"""
