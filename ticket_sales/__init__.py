"""
Ticket Sales Service.
Ticket tier catalog with oversell-safe purchases.
"""

__version__ = "1.0.0"
