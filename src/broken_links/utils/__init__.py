"""
Utilities Package.

Provides timestamp helpers shared by navigation and aggregation.
"""

from .timestamps import iso_now

__all__ = [
    "iso_now",
]
