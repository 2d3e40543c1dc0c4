"""Shared fixtures and pytest configuration for all umple_diagram tests.

Unit and property tests use MockCompiler / MockRenderer and never spawn umple
or dot. Integration tests need both on PATH and run only with
--run-integration.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from umple_diagram.toolchain.mock_tools import MockCompiler, MockRenderer
from umple_diagram.utils.config import ToolchainConfig
from umple_diagram.utils.logging import set_log_level

PROJECT_ROOT = Path(__file__).parent.parent
CONFIGS_DIR = PROJECT_ROOT / "configs"

LIGHT_CONTROLLER_UMP = """\
class LightController {
  status {
    Off { turnOn -> On; }
    On { turnOff -> Off; }
  }
}
"""

FIXED_NOW = datetime(2026, 10, 19, 12, 34, 56, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def toolchain_config_path() -> Path:
    return CONFIGS_DIR / "toolchain.yaml"


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    """A small state-machine model in its own source directory."""
    src = tmp_path / "src"
    src.mkdir()
    path = src / "model.ump"
    path.write_text(LIGHT_CONTROLLER_UMP, encoding="utf-8")
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Toolchain fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def toolchain_config() -> ToolchainConfig:
    return ToolchainConfig()


@pytest.fixture
def mock_compiler() -> MockCompiler:
    """Compiler that writes only the .gv file, like umple's Gv generators."""
    return MockCompiler(emit_graph=True, emit_image=False)


@pytest.fixture
def mock_renderer() -> MockRenderer:
    return MockRenderer()


# ---------------------------------------------------------------------------
# Pytest mark registration and integration-test gating
# ---------------------------------------------------------------------------

def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: requires --run-integration and umple + dot on PATH"
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if not config.getoption("--run-integration", default=False):
        skip_integration = pytest.mark.skip(reason="need --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests (requires umple and Graphviz dot on PATH)",
    )


@pytest.fixture(autouse=True)
def reset_log_level():
    """--verbose raises the global level; restore WARNING after each test."""
    yield
    set_log_level(logging.WARNING)
