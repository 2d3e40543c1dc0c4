"""Toolchain ports — abstract interfaces for the model compiler and the renderer.

Both the subprocess adapters (real umple / dot) and the mocks (unit tests)
implement these contracts. DiagramGenerator depends only on the ports, never
on concrete implementations.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a single compiler invocation.

    ``output`` is stdout followed by stderr, stripped of surrounding whitespace.
    """
    success: bool
    output: str = ""


class Compiler(ABC):
    """Contract for model-to-graph compilers (umple)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Executable or display name, used in diagnostics."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the compiler can be invoked in this environment."""

    @abstractmethod
    def compile(
        self,
        input_path: Path,
        generator: str,
        suboptions: Sequence[str] = (),
    ) -> GenerationResult:
        """Compile ``input_path`` with generator ``generator``.

        Writes its artifacts next to ``input_path``. Must not raise for tool
        failures; report them through ``GenerationResult.success``.
        """


class Renderer(ABC):
    """Contract for graph-layout renderers (Graphviz dot)."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Executable or display name, used in diagnostics."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the renderer can be invoked in this environment."""

    @abstractmethod
    def render(self, graph_path: Path, image_path: Path) -> bool:
        """Render ``graph_path`` into ``image_path``.

        Returns True only if ``image_path`` exists afterwards. Never raises
        for tool failures.
        """
