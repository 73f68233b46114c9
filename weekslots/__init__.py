"""
weekslots - open appointment slots for the week ahead.
"""

__version__ = "0.1.0"
