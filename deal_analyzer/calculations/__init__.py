"""
Financial Calculation Engine

Pure calculation modules for rental property investment analysis.
"""

from deal_analyzer.calculations import irr, amortization, metrics

__all__ = ["irr", "amortization", "metrics"]
