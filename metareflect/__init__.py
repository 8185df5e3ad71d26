# ==============================================
# metareflect — Metadata Reflection Engine
# ==============================================
#
# Package Structure:
#
# metareflect/
# ├── store/           # Identity-keyed weak storage (no inheritance)
# ├── reflection/      # MetadataEngine: own + chain lookups, parent relation
# ├── interception/    # Per-target interceptors (proxy-style overrides)
# ├── decorators.py    # metadata(), decorate(), member_metadata()
# ├── runtime.py       # Default engine, global binding, module-level API
# ├── config.py        # Configuration management
# ├── errors.py        # Exception taxonomy
# └── cli.py           # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from .errors import InterceptorError, InvalidKeyError, InvalidTargetError, MetadataError
from .store import IdentityWeakMap, MetadataStore
from .reflection import MetadataEngine, class_parent, no_parent
from .interception import (
    DECLINE,
    ForwardingInterceptor,
    InterceptorRegistry,
    MetadataInterceptor,
)
from .runtime import (
    create_engine,
    define_metadata,
    delete_metadata,
    get_default_engine,
    get_global,
    get_metadata,
    get_metadata_keys,
    get_own_metadata,
    get_own_metadata_keys,
    has_metadata,
    has_own_metadata,
    install_global,
    reset_default_engine,
    uninstall_global,
)
from .decorators import decorate, member_metadata, metadata, reflect_members

__all__ = [
    "DECLINE",
    "ForwardingInterceptor",
    "IdentityWeakMap",
    "InterceptorError",
    "InterceptorRegistry",
    "InvalidKeyError",
    "InvalidTargetError",
    "MetadataEngine",
    "MetadataError",
    "MetadataInterceptor",
    "MetadataStore",
    "class_parent",
    "create_engine",
    "decorate",
    "define_metadata",
    "delete_metadata",
    "get_default_engine",
    "get_global",
    "get_metadata",
    "get_metadata_keys",
    "get_own_metadata",
    "get_own_metadata_keys",
    "has_metadata",
    "has_own_metadata",
    "install_global",
    "member_metadata",
    "metadata",
    "no_parent",
    "reflect_members",
    "reset_default_engine",
    "uninstall_global",
]
