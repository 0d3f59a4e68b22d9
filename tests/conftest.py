"""Pytest configuration for tradefeed test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tradefeed.core.logging import configure_logging


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--tradefeed-run-integration",
        action="store_true",
        default=False,
        help="Run tradefeed integration tests that hit the live upstream sites.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for tradefeed tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks tradefeed tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--tradefeed-run-integration"):
        return

    tradefeed_skip_integration = pytest.mark.skip(
        reason="integration tests require --tradefeed-run-integration",
    )
    for tradefeed_item in items:
        if "integration" in tradefeed_item.keywords:
            tradefeed_item.add_marker(tradefeed_skip_integration)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Point loguru back at the current stderr once a test has swapped sinks."""

    yield
    configure_logging("WARNING")
