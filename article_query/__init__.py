"""
Article Query Engine
Dynamic filter, sort and pagination over article collections
"""

__version__ = "1.0.0"
