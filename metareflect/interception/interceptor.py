# ==============================================
# MetadataInterceptor
# ==============================================
#
# PURPOSE:
#   Proxy-style hook that lets a wrapper around a target substitute
#   its own behavior for any of the metadata operations.
#
# CALLING CONVENTION:
#   Every hook method receives `fallback` first, followed by the same
#   arguments as the engine operation:
#
#     define_metadata(fallback, key, value, target, member_name)
#     has_own_metadata(fallback, key, target, member_name)
#     has_metadata(fallback, key, target, member_name)
#     get_own_metadata(fallback, key, target, member_name)
#     get_metadata(fallback, key, target, member_name)
#     get_own_metadata_keys(fallback, target, member_name)
#     get_metadata_keys(fallback, target, member_name)
#     delete_metadata(fallback, key, target, member_name)
#     get_parent(fallback, target)
#
#   `fallback` is the engine's default behavior for that operation. It
#   takes the operation's arguments, so a hook can forward the call to
#   a different target.
#
#   Returning DECLINE makes the engine run its default behavior. The
#   base class declines everything, so subclasses override only the
#   operations they care about.
#
# ==============================================

from typing import Any, Callable, Hashable, Optional


class _Decline:
    __slots__ = ()

    def __repr__(self) -> str:
        return "DECLINE"


DECLINE = _Decline()

OPERATIONS = (
    "define_metadata",
    "has_own_metadata",
    "has_metadata",
    "get_own_metadata",
    "get_metadata",
    "get_own_metadata_keys",
    "get_metadata_keys",
    "delete_metadata",
    "get_parent",
)


class MetadataInterceptor:
    """Base interceptor: declines every operation."""

    def define_metadata(self, fallback: Callable, key: Hashable, value: Any,
                        target: Any, member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def has_own_metadata(self, fallback: Callable, key: Hashable,
                         target: Any, member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def has_metadata(self, fallback: Callable, key: Hashable,
                     target: Any, member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def get_own_metadata(self, fallback: Callable, key: Hashable,
                         target: Any, member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def get_metadata(self, fallback: Callable, key: Hashable,
                     target: Any, member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def get_own_metadata_keys(self, fallback: Callable, target: Any,
                              member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def get_metadata_keys(self, fallback: Callable, target: Any,
                          member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def delete_metadata(self, fallback: Callable, key: Hashable,
                        target: Any, member_name: Optional[Hashable]) -> Any:
        return DECLINE

    def get_parent(self, fallback: Callable, target: Any) -> Any:
        return DECLINE


class ForwardingInterceptor(MetadataInterceptor):
    """
    Interceptor that makes a wrapper behave as the object it wraps.

    Every operation is forwarded to `wrapped` through the default
    behavior, so metadata defined through the wrapper lands on the
    wrapped object and vice versa.
    """

    def __init__(self, wrapped: Any):
        self.wrapped = wrapped

    def define_metadata(self, fallback, key, value, target, member_name):
        return fallback(key, value, self.wrapped, member_name)

    def has_own_metadata(self, fallback, key, target, member_name):
        return fallback(key, self.wrapped, member_name)

    def has_metadata(self, fallback, key, target, member_name):
        return fallback(key, self.wrapped, member_name)

    def get_own_metadata(self, fallback, key, target, member_name):
        return fallback(key, self.wrapped, member_name)

    def get_metadata(self, fallback, key, target, member_name):
        return fallback(key, self.wrapped, member_name)

    def get_own_metadata_keys(self, fallback, target, member_name):
        return fallback(self.wrapped, member_name)

    def get_metadata_keys(self, fallback, target, member_name):
        return fallback(self.wrapped, member_name)

    def delete_metadata(self, fallback, key, target, member_name):
        return fallback(key, self.wrapped, member_name)

    def get_parent(self, fallback, target):
        return fallback(self.wrapped)
