"""
Models for single-item lookups.

- ItemLookup: validated request
- Found / NotFound: the two possible successful outcomes
- LookupResult: union of the two
"""

from .lookup import Found, ItemLookup, LookupResult, NotFound

__all__ = [
    "Found",
    "ItemLookup",
    "LookupResult",
    "NotFound",
]
