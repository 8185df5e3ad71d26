# ==============================================
# Decorators — Declarative Application
# ==============================================
#
# Thin sugar over MetadataEngine.define_metadata. Nothing here has
# behavior of its own; every helper ends in a define_metadata call.
#
# FUNCTIONS:
# ----------
# - metadata(key, value, engine=None)
#     Decorator factory. The returned decorator takes
#     (target, member_name=None), defines the metadata and returns target:
#
#       @metadata("role", "admin")
#       class Account: ...
#
#       metadata("column", "id")(Account, "id")
#
# - decorate(decorators, target, member_name=None)
#     Apply a list of decorators the way stacked @-syntax would
#     (last one first). For a class target, a decorator returning a
#     new class replaces the target for the remaining decorators.
#
# - member_metadata(key, value) + reflect_members
#     For methods inside a class body, where the class does not exist
#     yet: member_metadata marks the function, reflect_members (a class
#     decorator) defines the marked metadata on (cls, attribute name).
#
#       @reflect_members
#       class Account:
#           @member_metadata("route", "/login")
#           def login(self): ...
#
# ==============================================

from typing import Any, Callable, Hashable, Optional, Sequence

from metareflect.reflection.engine import MetadataEngine
from metareflect.runtime import get_default_engine
from metareflect.store.identity_map import check_target

_PENDING_ATTR = "__metareflect_pending__"


def _resolve(engine: Optional[MetadataEngine]) -> MetadataEngine:
    return engine if engine is not None else get_default_engine()


def metadata(key: Hashable, value: Any,
             engine: Optional[MetadataEngine] = None) -> Callable[..., Any]:
    """
    Build a decorator that attaches `value` under `key`.

    Args:
        key: Metadata key
        value: Metadata value
        engine: Engine to define on; the default engine when None

    Returns:
        decorator(target, member_name=None) -> target
    """
    def decorator(target: Any, member_name: Optional[Hashable] = None) -> Any:
        _resolve(engine).define_metadata(key, value, target, member_name)
        return target

    return decorator


def decorate(decorators: Sequence[Callable[..., Any]], target: Any,
             member_name: Optional[Hashable] = None) -> Any:
    """
    Apply `decorators` to target (or to its member), last to first.

    Returns:
        The final target; for classes, possibly replaced by a decorator

    Raises:
        TypeError: decorators is not a sequence, or a class decorator
            returned something other than a class
    """
    if not isinstance(decorators, (list, tuple)):
        raise TypeError("decorators must be a list or tuple")
    check_target(target)

    for decorator in reversed(decorators):
        if member_name is not None:
            decorator(target, member_name)
            continue

        decorated = decorator(target)
        if decorated is None:
            continue
        if isinstance(target, type) and not isinstance(decorated, type):
            raise TypeError(
                f"Class decorator {decorator!r} returned {type(decorated).__name__!r}, "
                f"expected a class"
            )
        target = decorated

    return target


def _unwrap(member: Any) -> Any:
    while True:
        if isinstance(member, (staticmethod, classmethod)):
            member = member.__func__
        elif isinstance(member, property):
            member = member.fget
        else:
            return member


def _own_marks(func: Any) -> Optional[list]:
    # vars(), not getattr(): a marked nested class must not lend its
    # marks to subclasses.
    try:
        return vars(func).get(_PENDING_ATTR)
    except TypeError:
        return None


def member_metadata(key: Hashable, value: Any) -> Callable[[Any], Any]:
    """
    Mark a class-body member with metadata for reflect_members.

    Raises:
        TypeError: the member cannot carry attributes (no __dict__)
    """
    def mark(member: Any) -> Any:
        func = _unwrap(member)
        try:
            pending = vars(func).get(_PENDING_ATTR)
            if pending is None:
                pending = []
                setattr(func, _PENDING_ATTR, pending)
        except (AttributeError, TypeError):
            raise TypeError(
                f"member_metadata cannot mark {member!r}: it does not accept attributes"
            ) from None
        pending.append((key, value))
        return member

    return mark


def reflect_members(cls: Optional[type] = None, *,
                    engine: Optional[MetadataEngine] = None) -> Any:
    """
    Class decorator: define metadata marked by member_metadata on the
    class's own attributes, keyed by attribute name.

    Usable bare (@reflect_members) or with arguments
    (@reflect_members(engine=my_engine)).
    """
    def apply(klass: type) -> type:
        target_engine = _resolve(engine)
        for name, member in vars(klass).items():
            func = _unwrap(member)
            pending = _own_marks(func)
            for key, value in pending or ():
                target_engine.define_metadata(key, value, klass, name)
        return klass

    if cls is None:
        return apply
    return apply(cls)
