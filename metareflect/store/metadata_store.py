# ==============================================
# MetadataStore
# ==============================================
#
# PURPOSE:
#   Hold every piece of metadata attached to any target, without
#   knowing anything about inheritance. The reflection engine is the
#   only intended caller.
#
# LAYOUT:
#   IdentityWeakMap
#     target ──► { member slot ──► { metadata key ──► value } }
#
#   The "no member" slot is the private _TARGET_SLOT sentinel, so
#   metadata attached to the target itself never collides with
#   metadata attached to a member, whatever that member is named.
#
# LIFETIME:
#   - member map created on demand (create_if_missing=True)
#   - the same live dict is returned for the same (target, member)
#   - empty member maps are discarded after a delete
#   - the whole target entry goes away when the target is collected
#
# ==============================================

import logging
from typing import Any, Dict, Hashable, List, Optional

from .identity_map import IdentityWeakMap

logger = logging.getLogger(__name__)


class _TargetSlot:
    """Sentinel type for the 'target itself' member slot."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<target>"


_TARGET_SLOT = _TargetSlot()


def _slot(member_name: Optional[Hashable]) -> Hashable:
    return _TARGET_SLOT if member_name is None else member_name


class MetadataStore:
    """
    Identity-keyed nested storage: target -> member -> key -> value.

    The store never keeps a target alive; entries for a target are
    dropped automatically once the target is garbage collected.
    """

    def __init__(self):
        self._targets = IdentityWeakMap()

    def get_member_map(
        self,
        target: Any,
        member_name: Optional[Hashable] = None,
        create_if_missing: bool = False,
    ) -> Optional[Dict[Hashable, Any]]:
        """
        Return the metadata mapping for (target, member_name).

        Args:
            target: Target identity (weak-referenceable object)
            member_name: Member of the target, None for the target itself
            create_if_missing: Create an empty mapping when none exists

        Returns:
            The live key -> value dict, or None when absent and not created
        """
        members = self._targets.get(target)
        if members is None:
            if not create_if_missing:
                return None
            members = self._targets.setdefault(target, dict)

        slot = _slot(member_name)
        member_map = members.get(slot)
        if member_map is None and create_if_missing:
            member_map = {}
            members[slot] = member_map
            logger.debug("Created metadata map for %r member=%r", target, member_name)
        return member_map

    def discard_member_map(self, target: Any, member_name: Optional[Hashable] = None) -> bool:
        """
        Drop the mapping for (target, member_name) if it is empty.

        The target entry is dropped too once it has no member maps left.

        Returns:
            True if a mapping was removed
        """
        members = self._targets.get(target)
        if members is None:
            return False

        slot = _slot(member_name)
        member_map = members.get(slot)
        if member_map is None or member_map:
            return False

        del members[slot]
        if not members:
            self._targets.pop(target)
        return True

    def get_member_names(self, target: Any) -> List[Optional[Hashable]]:
        """
        List the members of `target` that carry metadata.

        Returns:
            Member names in creation order; None stands for the target itself
        """
        members = self._targets.get(target)
        if not members:
            return []
        return [None if slot is _TARGET_SLOT else slot for slot in members]

    def clear(self) -> None:
        """Forget all metadata for all targets."""
        self._targets.clear()

    def __contains__(self, target: Any) -> bool:
        return target in self._targets

    def __len__(self) -> int:
        return len(self._targets)
