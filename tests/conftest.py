# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - engine            → fresh isolated MetadataEngine
# - hierarchy         → (Base, Child, GrandChild) class chain
# - clean_runtime     → default engine + global binding + config reset
#                       before and after the test
# ==============================================

import pytest

from metareflect.config import reset_config
from metareflect.reflection.engine import MetadataEngine
from metareflect.runtime import reset_default_engine


@pytest.fixture
def engine():
    """Provide an isolated engine with the default class parent relation."""
    return MetadataEngine()


@pytest.fixture
def hierarchy():
    """Return a three-level single-inheritance chain."""
    class Base:
        def handle(self):
            pass

    class Child(Base):
        pass

    class GrandChild(Child):
        pass

    return Base, Child, GrandChild


@pytest.fixture
def clean_runtime(monkeypatch):
    """Reset process-wide state so tests never leak into each other."""
    for name in ("METAREFLECT_GLOBAL_NAME", "METAREFLECT_AUTO_INSTALL", "METAREFLECT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_default_engine()
    reset_config()
    yield
    reset_default_engine()
    reset_config()
