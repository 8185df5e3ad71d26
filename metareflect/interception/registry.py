# ==============================================
# InterceptorRegistry
# ==============================================
#
# PURPOSE:
#   Associate at most one MetadataInterceptor with a target identity.
#   Held weakly by target, like the metadata itself, so registering an
#   interceptor never keeps its target alive.
#
# ==============================================

import logging
from typing import Any, Optional

from metareflect.errors import InterceptorError
from metareflect.store.identity_map import IdentityWeakMap, check_target

from .interceptor import MetadataInterceptor

logger = logging.getLogger(__name__)


class InterceptorRegistry:
    """Registry mapping target identity -> MetadataInterceptor."""

    def __init__(self):
        self._interceptors = IdentityWeakMap()

    def register(self, target: Any, interceptor: MetadataInterceptor) -> None:
        """
        Register `interceptor` for `target`, replacing any previous one.

        Raises:
            InvalidTargetError: target cannot be weakly referenced
            InterceptorError: interceptor is not a MetadataInterceptor
        """
        check_target(target)
        if not isinstance(interceptor, MetadataInterceptor):
            raise InterceptorError(
                f"Expected a MetadataInterceptor, got {type(interceptor).__name__!r}"
            )
        self._interceptors.set(target, interceptor)
        logger.debug("Registered %s for %r", type(interceptor).__name__, target)

    def unregister(self, target: Any) -> bool:
        """
        Remove the interceptor for `target`.

        Returns:
            True if an interceptor was registered
        """
        removed = self._interceptors.pop(target)
        if removed is not None:
            logger.debug("Unregistered %s for %r", type(removed).__name__, target)
        return removed is not None

    def get(self, target: Any) -> Optional[MetadataInterceptor]:
        return self._interceptors.get(target)

    def clear(self) -> None:
        self._interceptors.clear()

    def __contains__(self, target: Any) -> bool:
        return target in self._interceptors

    def __len__(self) -> int:
        return len(self._interceptors)
