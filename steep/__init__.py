"""
Steep - keep track of your teas and how you brew them.
"""

__version__ = "0.1.0"
