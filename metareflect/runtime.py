# ==============================================
# Runtime — Deployment Modes
# ==============================================
#
# PURPOSE:
#   Decide WHICH engine a caller talks to.
#
# MODES:
# ------
# 1. Isolated:
#      engine = create_engine()
#    An explicit handle, no global footprint. Use this wherever global
#    state is unwelcome (tests, sandboxes, plugins).
#
# 2. Default (process-wide):
#      get_default_engine()
#      define_metadata(...), get_metadata(...), ...
#    One engine created lazily on first use and kept until exit. The
#    module-level functions below delegate to it.
#
# 3. Global binding:
#      install_global()       → builtins.Reflect = default engine
#      uninstall_global()
#    Lets cooperating tools discover the engine without importing this
#    package. The binding name comes from config.runtime.global_name and
#    the binding happens automatically when config.runtime.auto_install
#    is set.
#
# ==============================================

import builtins
import logging
from typing import Any, Hashable, List, Optional

from metareflect.config import get_config
from metareflect.errors import MetadataError
from metareflect.reflection.engine import MetadataEngine
from metareflect.reflection.parents import ParentLookup

logger = logging.getLogger(__name__)

_default_engine: Optional[MetadataEngine] = None
_installed_name: Optional[str] = None


def create_engine(parent_lookup: Optional[ParentLookup] = None) -> MetadataEngine:
    """Build a new engine that shares nothing with the default one."""
    return MetadataEngine(parent_lookup=parent_lookup)


def get_default_engine() -> MetadataEngine:
    """
    Return the process-wide engine, creating it on first call.

    Returns:
        MetadataEngine: The shared default engine
    """
    global _default_engine

    if _default_engine is not None:
        return _default_engine

    _default_engine = MetadataEngine()
    logger.debug("Created default metadata engine")

    if get_config().runtime.auto_install:
        install_global()

    return _default_engine


def reset_default_engine() -> None:
    """Drop the default engine (and its global binding, if any)."""
    global _default_engine
    uninstall_global()
    _default_engine = None


def install_global(name: Optional[str] = None) -> MetadataEngine:
    """
    Bind the default engine into builtins under `name`.

    Args:
        name: Binding name, config.runtime.global_name by default

    Returns:
        The bound engine

    Raises:
        MetadataError: the name is already bound to something else
    """
    global _installed_name

    name = name or get_config().runtime.global_name
    engine = get_default_engine()

    existing = getattr(builtins, name, None)
    if existing is not None and existing is not engine:
        raise MetadataError(f"builtins.{name} is already bound to {existing!r}")

    if _installed_name is not None and _installed_name != name:
        uninstall_global()

    setattr(builtins, name, engine)
    _installed_name = name
    logger.debug("Installed default metadata engine as builtins.%s", name)
    return engine


def uninstall_global() -> bool:
    """
    Remove the global binding created by install_global().

    Returns:
        True if a binding was removed
    """
    global _installed_name

    if _installed_name is None:
        return False

    name = _installed_name
    _installed_name = None
    if getattr(builtins, name, None) is _default_engine:
        delattr(builtins, name)
        logger.debug("Removed builtins.%s", name)
        return True
    return False


def get_global() -> Optional[MetadataEngine]:
    """Engine currently bound by install_global(), or None."""
    if _installed_name is None:
        return None
    return getattr(builtins, _installed_name, None)


# ==============================================
# Module-level API (default engine)
# ==============================================

def define_metadata(key: Hashable, value: Any, target: Any,
                    member_name: Optional[Hashable] = None) -> None:
    get_default_engine().define_metadata(key, value, target, member_name)


def has_own_metadata(key: Hashable, target: Any,
                     member_name: Optional[Hashable] = None) -> bool:
    return get_default_engine().has_own_metadata(key, target, member_name)


def has_metadata(key: Hashable, target: Any,
                 member_name: Optional[Hashable] = None) -> bool:
    return get_default_engine().has_metadata(key, target, member_name)


def get_own_metadata(key: Hashable, target: Any,
                     member_name: Optional[Hashable] = None) -> Any:
    return get_default_engine().get_own_metadata(key, target, member_name)


def get_metadata(key: Hashable, target: Any,
                 member_name: Optional[Hashable] = None) -> Any:
    return get_default_engine().get_metadata(key, target, member_name)


def get_own_metadata_keys(target: Any,
                          member_name: Optional[Hashable] = None) -> List[Hashable]:
    return get_default_engine().get_own_metadata_keys(target, member_name)


def get_metadata_keys(target: Any,
                      member_name: Optional[Hashable] = None) -> List[Hashable]:
    return get_default_engine().get_metadata_keys(target, member_name)


def delete_metadata(key: Hashable, target: Any,
                    member_name: Optional[Hashable] = None) -> bool:
    return get_default_engine().delete_metadata(key, target, member_name)
