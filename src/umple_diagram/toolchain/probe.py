"""Dependency probing for the compiler and renderer ports."""
from __future__ import annotations

from dataclasses import dataclass

from umple_diagram.toolchain.interface import Compiler, Renderer


@dataclass(frozen=True)
class DependencyStatus:
    compiler_available: bool
    renderer_available: bool

    @property
    def all_available(self) -> bool:
        return self.compiler_available and self.renderer_available


def check_dependencies(compiler: Compiler, renderer: Renderer) -> DependencyStatus:
    """Probe both tools independently.

    Both are always checked, even when the compiler may end up emitting the
    image itself and the renderer is never needed.
    """
    return DependencyStatus(
        compiler_available=compiler.is_available(),
        renderer_available=renderer.is_available(),
    )
