"""
Test Configuration and Fixtures

Provides shared fixtures and tier markers for the test suite.
"""

import os

import pytest

# Keep settings deterministic regardless of the developer's environment.
os.environ.setdefault("THREADCLEAN_LOG_LEVEL", "WARNING")
os.environ.setdefault("THREADCLEAN_LOG_FORMAT", "text")


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """
    Auto-assign tier markers so we can run:
    - pytest -m unit
    - pytest -m integration

    Convention:
    - tests/integration/** => integration
    - everything else      => unit
    """
    for item in items:
        path = str(getattr(item, "fspath", ""))
        if item.get_closest_marker("integration") or item.get_closest_marker("unit"):
            continue
        if "/tests/integration/" in path or "\\tests\\integration\\" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached; tests that patch env vars need a fresh instance."""
    from threadclean.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# THREAD FIXTURES
# =============================================================================


@pytest.fixture
def two_message_thread() -> str:
    from tests.support.threads import assistant, thread_json, user

    return thread_json(
        user("¿Qué comí hoy?", author_name="Ana", created_at="2025-01-01T10:00:00Z", message_id="m1"),
        assistant(
            "Aquí tienes:\n```html\n<h1>Resumen</h1><p>Desayuno: avena</p>\n```",
            author_name="TwinAgent",
            created_at="2025-01-01T10:00:05Z",
            message_id="m2",
        ),
    )
