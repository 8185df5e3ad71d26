# ==============================================
# MetadataEngine — Reflection Engine
# ==============================================
#
# PURPOSE:
#   The public metadata API. Ties together:
#
#     MetadataStore        → where metadata lives (own lookups)
#     ParentLookup         → how to find a target's parent (chain lookups)
#     InterceptorRegistry  → per-target hooks consulted before each operation
#
# OPERATIONS (stable name → Python name):
# ---------------------------------------
#   defineMetadata      → define_metadata(key, value, target, member_name=None)
#   hasOwnMetadata      → has_own_metadata(key, target, member_name=None)
#   hasMetadata         → has_metadata(key, target, member_name=None)
#   getOwnMetadata      → get_own_metadata(key, target, member_name=None)
#   getMetadata         → get_metadata(key, target, member_name=None)
#   getOwnMetadataKeys  → get_own_metadata_keys(target, member_name=None)
#   getMetadataKeys     → get_metadata_keys(target, member_name=None)
#   deleteMetadata      → delete_metadata(key, target, member_name=None)
#
#   plus get_parent(target), which chain walks go through so that an
#   interceptor can also override the parent relation.
#
# DISPATCH:
# ---------
#   public op ──► interceptor registered for target?
#                   ├─ yes → hook(fallback, *args)
#                   │         └─ returned DECLINE? → default
#                   └─ no  → default (_define_metadata, ...)
#
#   Chain walks call the PUBLIC own-level operations for each ancestor,
#   so an interceptor on an ancestor answers for that ancestor.
#
# ==============================================

import logging
from typing import Any, Callable, Hashable, Iterator, List, Optional

from metareflect.errors import InvalidKeyError
from metareflect.interception.interceptor import DECLINE, MetadataInterceptor
from metareflect.interception.registry import InterceptorRegistry
from metareflect.store.identity_map import check_readable_target, check_target
from metareflect.store.metadata_store import MetadataStore

from .parents import ParentLookup, class_parent

logger = logging.getLogger(__name__)


def _check_hashable(value: Any, role: str) -> None:
    try:
        hash(value)
    except TypeError:
        raise InvalidKeyError(value, role) from None


class MetadataEngine:
    """
    Attach metadata to objects (or their members) and read it back,
    either from the object itself or through its parent chain.

    An engine owns its store and interceptor registry; two engines never
    see each other's metadata. See metareflect.runtime for the shared
    process-wide instance.
    """

    def __init__(
        self,
        store: Optional[MetadataStore] = None,
        parent_lookup: Optional[ParentLookup] = None,
        interceptors: Optional[InterceptorRegistry] = None,
    ):
        """
        Args:
            store: Storage backend, a fresh MetadataStore by default
            parent_lookup: target -> parent or None; class_parent by default.
                Must be acyclic.
            interceptors: Interceptor registry, a fresh one by default
        """
        self.store = store if store is not None else MetadataStore()
        self.parent_lookup = parent_lookup if parent_lookup is not None else class_parent
        self.interceptors = interceptors if interceptors is not None else InterceptorRegistry()

    def __repr__(self) -> str:
        return (
            f"<MetadataEngine targets={len(self.store)} "
            f"interceptors={len(self.interceptors)}>"
        )

    # ------------------------------------------
    # Dispatch helpers
    # ------------------------------------------

    def _dispatch(self, operation: str, default: Callable, target: Any, *args: Any) -> Any:
        interceptor = self.interceptors.get(target)
        if interceptor is not None:
            result = getattr(interceptor, operation)(default, *args)
            if result is not DECLINE:
                return result
        return default(*args)

    @staticmethod
    def _check(target: Any, member_name: Optional[Hashable], key: Any = None,
               has_key: bool = False, storing: bool = False) -> None:
        if storing:
            check_target(target)
        else:
            check_readable_target(target)
        if member_name is not None:
            _check_hashable(member_name, "member name")
        if has_key:
            _check_hashable(key, "metadata key")

    # ------------------------------------------
    # Public operations
    # ------------------------------------------

    def define_metadata(self, key: Hashable, value: Any, target: Any,
                        member_name: Optional[Hashable] = None) -> None:
        """
        Attach `value` under `key` to `target` (or to its member).

        Overwrites any value previously defined for the same key.

        Raises:
            InvalidTargetError: target cannot be weakly referenced
            InvalidKeyError: key or member_name is not hashable
        """
        self._dispatch("define_metadata", self._define_metadata, target,
                       key, value, target, member_name)

    def has_own_metadata(self, key: Hashable, target: Any,
                         member_name: Optional[Hashable] = None) -> bool:
        """True if `key` is defined directly on (target, member_name)."""
        return self._dispatch("has_own_metadata", self._has_own_metadata, target,
                              key, target, member_name)

    def has_metadata(self, key: Hashable, target: Any,
                     member_name: Optional[Hashable] = None) -> bool:
        """True if `key` is defined on target or on any of its ancestors."""
        return self._dispatch("has_metadata", self._has_metadata, target,
                              key, target, member_name)

    def get_own_metadata(self, key: Hashable, target: Any,
                         member_name: Optional[Hashable] = None) -> Any:
        """Value defined directly on (target, member_name), or None."""
        return self._dispatch("get_own_metadata", self._get_own_metadata, target,
                              key, target, member_name)

    def get_metadata(self, key: Hashable, target: Any,
                     member_name: Optional[Hashable] = None) -> Any:
        """
        Value for `key` from the nearest of target and its ancestors that
        defines it, or None when none does.
        """
        return self._dispatch("get_metadata", self._get_metadata, target,
                              key, target, member_name)

    def get_own_metadata_keys(self, target: Any,
                              member_name: Optional[Hashable] = None) -> List[Hashable]:
        """Keys defined directly on (target, member_name), in insertion order."""
        return self._dispatch("get_own_metadata_keys", self._get_own_metadata_keys, target,
                              target, member_name)

    def get_metadata_keys(self, target: Any,
                          member_name: Optional[Hashable] = None) -> List[Hashable]:
        """
        Keys visible on target through its chain.

        Own keys come first in insertion order, then each ancestor's keys
        in insertion order, skipping keys already listed by a nearer one.
        """
        return self._dispatch("get_metadata_keys", self._get_metadata_keys, target,
                              target, member_name)

    def delete_metadata(self, key: Hashable, target: Any,
                        member_name: Optional[Hashable] = None) -> bool:
        """
        Remove `key` from (target, member_name). Ancestors are untouched.

        Returns:
            True if a value was removed
        """
        return self._dispatch("delete_metadata", self._delete_metadata, target,
                              key, target, member_name)

    def get_parent(self, target: Any) -> Optional[Any]:
        """Parent of `target` according to the parent relation, or None."""
        return self._dispatch("get_parent", self._get_parent, target, target)

    def iter_chain(self, target: Any) -> Iterator[Any]:
        """Yield target followed by each of its ancestors, nearest first."""
        current = target
        while current is not None:
            yield current
            current = self.get_parent(current)

    # Stable camelCase names for cooperating tools
    defineMetadata = define_metadata
    hasOwnMetadata = has_own_metadata
    hasMetadata = has_metadata
    getOwnMetadata = get_own_metadata
    getMetadata = get_metadata
    getOwnMetadataKeys = get_own_metadata_keys
    getMetadataKeys = get_metadata_keys
    deleteMetadata = delete_metadata

    # ------------------------------------------
    # Interceptors
    # ------------------------------------------

    def register_interceptor(self, target: Any, interceptor: MetadataInterceptor) -> None:
        self.interceptors.register(target, interceptor)

    def unregister_interceptor(self, target: Any) -> bool:
        return self.interceptors.unregister(target)

    def get_own_member_names(self, target: Any) -> List[Optional[Hashable]]:
        """
        Members of `target` that carry own metadata (None = the target
        itself). Reads the store directly; interceptors are not consulted.
        """
        check_readable_target(target)
        return self.store.get_member_names(target)

    def clear(self) -> None:
        """Forget all metadata and interceptors held by this engine."""
        self.store.clear()
        self.interceptors.clear()

    # ------------------------------------------
    # Default behavior
    # ------------------------------------------

    def _define_metadata(self, key, value, target, member_name=None) -> None:
        self._check(target, member_name, key, has_key=True, storing=True)
        member_map = self.store.get_member_map(target, member_name, create_if_missing=True)
        member_map[key] = value
        logger.debug("Defined %r on %r member=%r", key, target, member_name)

    def _has_own_metadata(self, key, target, member_name=None) -> bool:
        self._check(target, member_name, key, has_key=True)
        member_map = self.store.get_member_map(target, member_name)
        return member_map is not None and key in member_map

    def _has_metadata(self, key, target, member_name=None) -> bool:
        self._check(target, member_name, key, has_key=True)
        for current in self.iter_chain(target):
            if self.has_own_metadata(key, current, member_name):
                return True
        return False

    def _get_own_metadata(self, key, target, member_name=None) -> Any:
        self._check(target, member_name, key, has_key=True)
        member_map = self.store.get_member_map(target, member_name)
        if member_map is None:
            return None
        return member_map.get(key)

    def _get_metadata(self, key, target, member_name=None) -> Any:
        self._check(target, member_name, key, has_key=True)
        for current in self.iter_chain(target):
            if self.has_own_metadata(key, current, member_name):
                return self.get_own_metadata(key, current, member_name)
        return None

    def _get_own_metadata_keys(self, target, member_name=None) -> List[Hashable]:
        self._check(target, member_name)
        member_map = self.store.get_member_map(target, member_name)
        return list(member_map) if member_map else []

    def _get_metadata_keys(self, target, member_name=None) -> List[Hashable]:
        self._check(target, member_name)
        keys: List[Hashable] = []
        seen = set()
        for current in self.iter_chain(target):
            for key in self.get_own_metadata_keys(current, member_name):
                if key not in seen:
                    seen.add(key)
                    keys.append(key)
        return keys

    def _delete_metadata(self, key, target, member_name=None) -> bool:
        self._check(target, member_name, key, has_key=True)
        member_map = self.store.get_member_map(target, member_name)
        if member_map is None or key not in member_map:
            return False

        del member_map[key]
        if not member_map:
            self.store.discard_member_map(target, member_name)
        logger.debug("Deleted %r from %r member=%r", key, target, member_name)
        return True

    def _get_parent(self, target) -> Optional[Any]:
        return self.parent_lookup(target)
