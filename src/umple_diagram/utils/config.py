"""ConfigLoader — typed YAML toolchain configuration with Pydantic v2 validation.

The packaged defaults live in ``configs/toolchain.yaml`` under PROJECT_ROOT.
A user-supplied ``--config`` path is resolved against the current working
directory instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

# PROJECT_ROOT: three parents up from this file:
#   src/umple_diagram/utils/config.py → src/umple_diagram/utils → src/umple_diagram → src → PROJECT_ROOT
PROJECT_ROOT = Path(__file__).parents[3]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "toolchain.yaml"


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised for missing files, invalid YAML, or Pydantic validation failures."""


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ToolchainConfig(BaseModel):
    """External tools, artifact extensions and timeouts.

    Every field has a default matching a stock umple + Graphviz install, so
    an empty mapping is a valid config.
    """

    compiler_command: str = "umple"
    renderer_command: str = "dot"
    renderer_format: str = "svg"
    model_extension: str = ".ump"
    graph_extension: str = ".gv"
    image_extension: str = ".svg"
    timeout_s: float | None = 300.0
    compiler_install_hint: str = (
        "Install from: https://cruise.umple.org/umpleonline/download_umple.shtml"
    )
    renderer_install_hint: str = "Install via: brew install graphviz"

    @field_validator("model_extension", "graph_extension", "image_extension")
    @classmethod
    def extension_must_start_with_dot(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"extension must look like '.ext', got {v!r}")
        return v

    @field_validator("timeout_s")
    @classmethod
    def timeout_must_be_positive(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("timeout_s must be positive (or null to wait forever)")
        return v

    @field_validator("compiler_command", "renderer_command", "renderer_format")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


# ---------------------------------------------------------------------------
# ConfigLoader
# ---------------------------------------------------------------------------


class ConfigLoader:
    """Loads and validates the YAML toolchain configuration.

    Usage::

        loader = ConfigLoader()
        cfg = loader.load_toolchain_config()              # packaged defaults
        cfg = loader.load_toolchain_config("my.yaml")     # user override
    """

    def load(self, path: str | Path) -> dict[str, Any]:
        """Load a YAML file and return it as a plain dict.

        Raises:
            ConfigError: if the file does not exist, is not valid YAML, or is empty.
        """
        resolved = Path(path).expanduser().resolve()
        if not resolved.exists():
            raise ConfigError(f"Config file not found: {resolved}")
        try:
            with resolved.open("r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error in {resolved}: {exc}") from exc
        if data is None:
            raise ConfigError(f"Config file is empty: {resolved}")
        if not isinstance(data, dict):
            raise ConfigError(
                f"Expected a YAML mapping at top level in {resolved}, got {type(data).__name__}"
            )
        return data

    def load_toolchain_config(self, path: str | Path | None = None) -> ToolchainConfig:
        """Load ``path`` (or the packaged defaults) → ToolchainConfig.

        When no path is given and the packaged file is absent (e.g. a wheel
        install without the configs directory), the model defaults are used.

        Raises:
            ConfigError: on file/parse/validation failure.
        """
        if path is None:
            if not DEFAULT_CONFIG_PATH.exists():
                return ToolchainConfig()
            path = DEFAULT_CONFIG_PATH
        data = self.load(path)
        toolchain = data.get("toolchain", data)
        if not isinstance(toolchain, dict):
            raise ConfigError(f"'toolchain' section in {path} must be a mapping")
        return self._parse(ToolchainConfig, toolchain, path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(model_cls: type[BaseModel], data: dict[str, Any], path: str | Path) -> Any:
        """Instantiate a Pydantic model, wrapping ValidationError as ConfigError."""
        try:
            return model_cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(
                f"Validation failed for {path}:\n{exc}"
            ) from exc
