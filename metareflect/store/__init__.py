# ==============================================
# METADATA STORE
# ==============================================
#
# This package holds the raw storage layer: where metadata lives,
# keyed by target identity, with no notion of inheritance.
#
# Modules:
# --------
# - identity_map.py    → IdentityWeakMap: identity-keyed, weakly-held keys
# - metadata_store.py  → MetadataStore: target -> member -> key -> value
#
# ==============================================

from .identity_map import IdentityWeakMap, check_readable_target, check_target
from .metadata_store import MetadataStore

__all__ = [
    "IdentityWeakMap",
    "MetadataStore",
    "check_readable_target",
    "check_target",
]
