# ==============================================
# Errors
# ==============================================
#
# Exception taxonomy shared by every layer.
#
#   MetadataError
#   ├── InvalidTargetError   (also a TypeError)
#   ├── InvalidKeyError      (also a TypeError)
#   └── InterceptorError     (also a TypeError)
#
# Missing metadata is NOT an error: lookups return None / False.
# ==============================================

from typing import Any


class MetadataError(Exception):
    """Base class for all metareflect errors."""


class InvalidTargetError(MetadataError, TypeError):
    """Raised when a value cannot be used as a target identity."""

    def __init__(self, target: Any):
        self.target = target
        super().__init__(
            f"Invalid metadata target of type {type(target).__name__!r}: "
            f"target must be an object that supports weak references"
        )


class InvalidKeyError(MetadataError, TypeError):
    """Raised when a metadata key or member name is not hashable."""

    def __init__(self, key: Any, role: str = "metadata key"):
        self.key = key
        self.role = role
        super().__init__(
            f"Invalid {role} of type {type(key).__name__!r}: must be hashable"
        )


class InterceptorError(MetadataError, TypeError):
    """Raised when registering something that is not a MetadataInterceptor."""
