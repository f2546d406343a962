"""A small interpreter for a Forth-like stack language"""

__version__ = "0.3.0"
