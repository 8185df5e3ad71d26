# ==============================================
# Parent Lookup
# ==============================================
#
# PURPOSE:
#   The one capability the engine needs from the host object system:
#   "given a target, return its parent target or None".
#
#   Chain lookups (has_metadata, get_metadata, get_metadata_keys) walk
#   this relation until it returns None. The relation MUST be acyclic;
#   a cycle makes chain lookups loop forever.
#
# FUNCTIONS:
# ----------
# - class_parent(target)  → default; single inheritance over Python classes
# - no_parent(target)     → always None; chain lookups become own lookups
#
# ==============================================

from typing import Any, Callable, Optional

ParentLookup = Callable[[Any], Optional[Any]]


def class_parent(target: Any) -> Optional[Any]:
    """
    Default parent relation for Python objects.

    - a class's parent is its first base class; `object` has none
    - any other object's parent is its class

    So metadata defined on a class is visible from its subclasses and
    from its instances.
    """
    if isinstance(target, type):
        bases = target.__bases__
        return bases[0] if bases else None
    return type(target)


def no_parent(target: Any) -> Optional[Any]:
    return None
