# ==============================================
# INTERCEPTION HOOK
# ==============================================
#
# This package lets a proxy-like wrapper take over any metadata
# operation for one target before the engine's default runs.
#
# Modules:
# --------
# - interceptor.py  → MetadataInterceptor base, DECLINE, ForwardingInterceptor
# - registry.py     → InterceptorRegistry: target -> interceptor
#
# ==============================================

from .interceptor import DECLINE, OPERATIONS, ForwardingInterceptor, MetadataInterceptor
from .registry import InterceptorRegistry

__all__ = [
    "DECLINE",
    "OPERATIONS",
    "ForwardingInterceptor",
    "InterceptorRegistry",
    "MetadataInterceptor",
]
