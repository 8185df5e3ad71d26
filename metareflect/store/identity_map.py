# ==============================================
# IdentityWeakMap
# ==============================================
#
# PURPOSE:
#   A mapping keyed by object IDENTITY that holds its keys weakly.
#
# WHY NOT weakref.WeakKeyDictionary:
#   WeakKeyDictionary compares keys with __eq__/__hash__. Two distinct
#   objects that compare equal would share one entry, and objects that
#   define __eq__ without __hash__ could not be keys at all. Targets here
#   must be told apart by `is`, so entries are indexed by id() and pinned
#   to the object with a weakref whose callback drops the entry.
#
# ENTRY LAYOUT:
#   _entries[id(obj)] = (weakref.ref(obj, reaper), value)
#
#   A lookup only counts as a hit when the stored ref still resolves to
#   the very object being looked up, so a recycled id() never aliases
#   a dead object's entry.
#
# ==============================================

import weakref
from typing import Any, Callable, Dict, Iterator, Tuple

from metareflect.errors import InvalidTargetError


# Plain values are never targets, not even for reads.
VALUE_TYPES = (type(None), bool, int, float, complex, str, bytes, tuple)


def check_target(target: Any) -> None:
    """
    Raise InvalidTargetError unless `target` can be weakly referenced.

    None, numbers, strings, tuples and instances of __slots__ classes
    without __weakref__ are rejected.
    """
    try:
        weakref.ref(target)
    except TypeError:
        raise InvalidTargetError(target) from None


def check_readable_target(target: Any) -> None:
    """
    Raise InvalidTargetError if `target` is a plain value.

    Objects that cannot be weakly referenced (object(), lists, __slots__
    instances) pass: they can be read from but never hold metadata.
    """
    if isinstance(target, VALUE_TYPES):
        raise InvalidTargetError(target)


class IdentityWeakMap:
    """Identity-keyed mapping whose entries vanish with their key object."""

    def __init__(self):
        self._entries: Dict[int, Tuple[weakref.ref, Any]] = {}

    def _make_ref(self, target: Any) -> weakref.ref:
        key = id(target)
        entries = self._entries

        # Closes over the entries dict only, never over self.
        def _reap(ref: weakref.ref) -> None:
            entry = entries.get(key)
            if entry is not None and entry[0] is ref:
                del entries[key]

        try:
            return weakref.ref(target, _reap)
        except TypeError:
            raise InvalidTargetError(target) from None

    def _live_entry(self, target: Any):
        entry = self._entries.get(id(target))
        if entry is not None and entry[0]() is target:
            return entry
        return None

    def get(self, target: Any, default: Any = None) -> Any:
        entry = self._live_entry(target)
        return entry[1] if entry is not None else default

    def set(self, target: Any, value: Any) -> None:
        self._entries[id(target)] = (self._make_ref(target), value)

    def setdefault(self, target: Any, factory: Callable[[], Any]) -> Any:
        """
        Return the value stored for `target`, creating it with `factory()`
        when missing.

        Args:
            target: Key object (must be weak-referenceable)
            factory: Zero-argument callable producing the initial value

        Returns:
            The live value for `target`
        """
        entry = self._live_entry(target)
        if entry is not None:
            return entry[1]
        value = factory()
        self.set(target, value)
        return value

    def pop(self, target: Any, default: Any = None) -> Any:
        entry = self._live_entry(target)
        if entry is None:
            return default
        del self._entries[id(target)]
        return entry[1]

    def clear(self) -> None:
        self._entries.clear()

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Yield (target, value) pairs for targets that are still alive."""
        for ref, value in list(self._entries.values()):
            target = ref()
            if target is not None:
                yield target, value

    def __contains__(self, target: Any) -> bool:
        return self._live_entry(target) is not None

    def __len__(self) -> int:
        return sum(1 for _ in self.items())
