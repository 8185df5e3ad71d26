# ==============================================
# REFLECTION ENGINE
# ==============================================
#
# This package implements the metadata operations on top of the
# store: own lookups, chain lookups through the parent relation, and
# dispatch to registered interceptors.
#
# Modules:
# --------
# - parents.py  → parent relations (class_parent, no_parent)
# - engine.py   → MetadataEngine: the public operations
#
# ==============================================

from .engine import MetadataEngine
from .parents import ParentLookup, class_parent, no_parent

__all__ = [
    "MetadataEngine",
    "ParentLookup",
    "class_parent",
    "no_parent",
]
