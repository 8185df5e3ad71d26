# ==============================================
# Tests for Interception Module
# ==============================================

import gc

import pytest

from metareflect.errors import InterceptorError, InvalidTargetError
from metareflect.interception.interceptor import (
    DECLINE,
    OPERATIONS,
    ForwardingInterceptor,
    MetadataInterceptor,
)
from metareflect.interception.registry import InterceptorRegistry
from metareflect.reflection.engine import MetadataEngine


class Target:
    pass


class RecordingInterceptor(MetadataInterceptor):
    """Handles define itself, records every call, declines the rest."""

    def __init__(self):
        self.calls = []
        self.defined = {}

    def define_metadata(self, fallback, key, value, target, member_name):
        self.calls.append("define_metadata")
        self.defined[key] = value
        return None

    def get_own_metadata(self, fallback, key, target, member_name):
        self.calls.append("get_own_metadata")
        return DECLINE


class UppercaseInterceptor(MetadataInterceptor):
    """Uses the fallback explicitly and post-processes its result."""

    def get_metadata(self, fallback, key, target, member_name):
        value = fallback(key, target, member_name)
        return value.upper() if isinstance(value, str) else value


class VirtualParentInterceptor(MetadataInterceptor):
    """Overrides the parent relation for one target."""

    def __init__(self, parent):
        self.parent = parent

    def get_parent(self, fallback, target):
        return self.parent


# ==============================================
# InterceptorRegistry
# ==============================================

class TestInterceptorRegistry:
    """Register / lookup / unregister."""

    def test_register_and_get(self):
        registry = InterceptorRegistry()
        target, interceptor = Target(), MetadataInterceptor()
        registry.register(target, interceptor)
        assert registry.get(target) is interceptor
        assert target in registry

    def test_unregister(self):
        registry = InterceptorRegistry()
        target = Target()
        registry.register(target, MetadataInterceptor())
        assert registry.unregister(target) is True
        assert registry.get(target) is None
        assert registry.unregister(target) is False

    def test_rejects_non_interceptor(self):
        registry = InterceptorRegistry()
        with pytest.raises(InterceptorError):
            registry.register(Target(), object())

    def test_rejects_invalid_target(self):
        registry = InterceptorRegistry()
        with pytest.raises(InvalidTargetError):
            registry.register(5, MetadataInterceptor())

    def test_registration_is_weak(self):
        registry = InterceptorRegistry()
        target = Target()
        registry.register(target, MetadataInterceptor())
        del target
        gc.collect()
        assert len(registry) == 0


# ==============================================
# Engine Dispatch
# ==============================================

class TestDispatch:
    """Engine consults interceptors before default behavior."""

    def test_base_interceptor_declines_everything(self, engine):
        target = Target()
        engine.register_interceptor(target, MetadataInterceptor())
        engine.define_metadata("k", 1, target)
        assert engine.get_metadata("k", target) == 1
        assert engine.get_own_metadata_keys(target) == ["k"]
        assert engine.delete_metadata("k", target) is True

    def test_base_interceptor_covers_all_operations(self):
        for name in OPERATIONS:
            assert callable(getattr(MetadataInterceptor, name))

    def test_interceptor_handles_define(self, engine):
        target = Target()
        interceptor = RecordingInterceptor()
        engine.register_interceptor(target, interceptor)

        engine.define_metadata("k", 1, target)
        assert interceptor.defined == {"k": 1}
        assert engine.store.get_member_map(target) is None

    def test_declined_call_runs_default(self, engine):
        target = Target()
        interceptor = RecordingInterceptor()
        engine.register_interceptor(target, interceptor)
        engine.store.get_member_map(target, None, create_if_missing=True)["k"] = "stored"

        assert engine.get_own_metadata("k", target) == "stored"
        assert interceptor.calls == ["get_own_metadata"]

    def test_explicit_fallback(self, engine):
        target = Target()
        engine.register_interceptor(target, UppercaseInterceptor())
        engine.define_metadata("name", "widget", target)
        assert engine.get_metadata("name", target) == "WIDGET"
        assert engine.get_own_metadata("name", target) == "widget"

    def test_no_interceptor_no_change(self, engine):
        intercepted, plain = Target(), Target()
        engine.register_interceptor(intercepted, RecordingInterceptor())
        engine.define_metadata("k", 1, plain)
        assert engine.get_own_metadata("k", plain) == 1

    def test_unregister_restores_default(self, engine):
        target = Target()
        engine.register_interceptor(target, RecordingInterceptor())
        engine.unregister_interceptor(target)
        engine.define_metadata("k", 1, target)
        assert engine.get_own_metadata("k", target) == 1

    def test_parent_override(self, engine):
        virtual_parent = Target()
        target = Target()
        engine.register_interceptor(target, VirtualParentInterceptor(virtual_parent))
        engine.define_metadata("k", "from-virtual", virtual_parent)
        assert engine.get_parent(target) is virtual_parent
        assert engine.get_metadata("k", target) == "from-virtual"
        assert engine.get_metadata_keys(target) == ["k"]

    def test_ancestor_interceptor_answers_for_ancestor(self, hierarchy, engine):
        Base, Child, _ = hierarchy

        class FixedOwn(MetadataInterceptor):
            def has_own_metadata(self, fallback, key, target, member_name):
                return key == "virtual"

            def get_own_metadata(self, fallback, key, target, member_name):
                return "from-hook" if key == "virtual" else DECLINE

            def get_own_metadata_keys(self, fallback, target, member_name):
                return ["virtual"] + fallback(target, member_name)

        engine.register_interceptor(Base, FixedOwn())
        engine.define_metadata("real", 1, Child)
        assert engine.get_metadata("virtual", Child) == "from-hook"
        assert engine.has_metadata("virtual", Child) is True
        assert engine.get_metadata_keys(Child) == ["real", "virtual"]


# ==============================================
# ForwardingInterceptor
# ==============================================

class TestForwardingInterceptor:
    """A wrapper that behaves as the object it wraps."""

    def test_define_through_wrapper(self, engine):
        wrapped, wrapper = Target(), Target()
        engine.register_interceptor(wrapper, ForwardingInterceptor(wrapped))

        engine.define_metadata("k", 1, wrapper)
        assert engine.get_own_metadata("k", wrapped) == 1
        assert engine.has_own_metadata("k", wrapper) is True
        assert engine.get_own_metadata_keys(wrapper) == ["k"]
        assert engine.delete_metadata("k", wrapper) is True
        assert engine.has_own_metadata("k", wrapped) is False

    def test_chain_follows_wrapped(self, engine, hierarchy):
        Base, Child, _ = hierarchy
        wrapper = Target()
        engine.register_interceptor(wrapper, ForwardingInterceptor(Child))
        engine.define_metadata("table", "base", Base)

        assert engine.get_parent(wrapper) is Base
        assert engine.get_metadata("table", wrapper) == "base"
        assert engine.has_metadata("table", wrapper) is True
        assert engine.get_metadata_keys(wrapper) == ["table"]


def test_engine_with_shared_registry():
    registry = InterceptorRegistry()
    target = Target()
    registry.register(target, RecordingInterceptor())
    engine = MetadataEngine(interceptors=registry)
    engine.define_metadata("k", 1, target)
    assert engine.has_own_metadata("k", target) is False
