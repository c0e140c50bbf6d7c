"""
Courtfile - court filing validation and e-filing guidance.
"""

__version__ = "1.0.0"
