"""
Clubhouse
Membership management API for a small club
"""

__version__ = "1.0.0"
