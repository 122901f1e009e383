"""
Day Timeline - model one day of fixed obligations and place habits into it.
"""

__version__ = "1.0.0"
