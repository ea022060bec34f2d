"""
Voyage travel-memory journal backend
"""
__version__ = "1.0.0"
