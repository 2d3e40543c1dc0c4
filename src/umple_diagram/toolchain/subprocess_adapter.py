"""Subprocess adapters — run the real umple and Graphviz executables.

Usage:
    compiler = UmpleCompiler.from_config(cfg)
    result = compiler.compile(Path("/tmp/model.ump"), "GvStateDiagram", ["hideguards"])

    renderer = DotRenderer.from_config(cfg)
    ok = renderer.render(Path("/tmp/model.gv"), Path("/tmp/model.svg"))
"""
from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from umple_diagram.toolchain.interface import Compiler, GenerationResult, Renderer
from umple_diagram.utils.config import ToolchainConfig
from umple_diagram.utils.logging import get_logger

logger = get_logger(__name__)


def command_exists(command: str) -> bool:
    """Return True if ``command`` resolves on PATH (or is an executable path)."""
    return shutil.which(command) is not None


def _text(value: str | bytes | None) -> str:
    # TimeoutExpired carries bytes even when the run used text=True
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class UmpleCompiler(Compiler):
    """Invokes ``umple <input> -g <generator> [-s <opt>]...`` synchronously.

    Args:
        command: Executable name or path.
        timeout_s: Seconds to wait before killing the process; None waits forever.
    """

    def __init__(self, command: str = "umple", timeout_s: float | None = None) -> None:
        self._command = command
        self._timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: ToolchainConfig) -> "UmpleCompiler":
        return cls(command=config.compiler_command, timeout_s=config.timeout_s)

    @property
    def name(self) -> str:
        return self._command

    def is_available(self) -> bool:
        return command_exists(self._command)

    def build_command(self, input_path: Path, generator: str, suboptions: Sequence[str] = ()) -> list[str]:
        """Return the argv for one compile; suboptions keep order and duplicates."""
        cmd = [self._command, str(input_path), "-g", generator]
        for opt in suboptions:
            cmd.extend(["-s", opt])
        return cmd

    def compile(
        self,
        input_path: Path,
        generator: str,
        suboptions: Sequence[str] = (),
    ) -> GenerationResult:
        cmd = self.build_command(input_path, generator, suboptions)
        logger.debug("Running compiler", command=cmd)
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self._timeout_s,
            )
        except subprocess.TimeoutExpired as exc:
            partial = (_text(exc.stdout) + _text(exc.stderr)).strip()
            message = f"{self._command} timed out after {self._timeout_s:g}s"
            if partial:
                message = f"{message}\n{partial}"
            logger.warning("Compiler timed out", command=cmd, timeout_s=self._timeout_s)
            return GenerationResult(success=False, output=message)
        except OSError as exc:
            logger.warning("Compiler could not be started", command=cmd, error=str(exc))
            return GenerationResult(success=False, output=f"Failed to run {self._command}: {exc}")

        output = (proc.stdout or "") + (proc.stderr or "")
        logger.debug("Compiler finished", returncode=proc.returncode)
        return GenerationResult(success=proc.returncode == 0, output=output.strip())


class DotRenderer(Renderer):
    """Invokes ``dot -T<format> <graph> -o <image>`` synchronously.

    All failures collapse into ``False``; the captured stderr only reaches the
    debug log.
    """

    def __init__(
        self,
        command: str = "dot",
        output_format: str = "svg",
        timeout_s: float | None = None,
    ) -> None:
        self._command = command
        self._format = output_format
        self._timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: ToolchainConfig) -> "DotRenderer":
        return cls(
            command=config.renderer_command,
            output_format=config.renderer_format,
            timeout_s=config.timeout_s,
        )

    @property
    def name(self) -> str:
        return self._command

    def is_available(self) -> bool:
        return command_exists(self._command)

    def build_command(self, graph_path: Path, image_path: Path) -> list[str]:
        return [self._command, f"-T{self._format}", str(graph_path), "-o", str(image_path)]

    def render(self, graph_path: Path, image_path: Path) -> bool:
        cmd = self.build_command(graph_path, image_path)
        logger.debug("Running renderer", command=cmd)
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self._timeout_s,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            logger.debug("Renderer failed to run", command=cmd, error=str(exc))
            return False
        if proc.returncode != 0:
            logger.debug("Renderer exited non-zero", returncode=proc.returncode, stderr=proc.stderr)
            return False
        return Path(image_path).exists()
