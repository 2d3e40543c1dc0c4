"""umple_diagram.toolchain — ports and adapters for the external tools.

Public API:
    Compiler, Renderer         — abstract ports the pipeline depends on
    GenerationResult           — outcome of one compiler run
    UmpleCompiler, DotRenderer — subprocess-backed default adapters
    MockCompiler, MockRenderer — deterministic doubles for unit tests
    DependencyStatus           — result of check_dependencies()
"""
from umple_diagram.toolchain.interface import Compiler, GenerationResult, Renderer
from umple_diagram.toolchain.mock_tools import MockCompiler, MockRenderer
from umple_diagram.toolchain.probe import DependencyStatus, check_dependencies
from umple_diagram.toolchain.subprocess_adapter import DotRenderer, UmpleCompiler, command_exists

__all__ = [
    "Compiler",
    "Renderer",
    "GenerationResult",
    "UmpleCompiler",
    "DotRenderer",
    "command_exists",
    "MockCompiler",
    "MockRenderer",
    "DependencyStatus",
    "check_dependencies",
]
