"""Exception taxonomy for the generation pipeline.

Every error carries the process exit code the CLI terminates with. Stages
raise; only ``umple_diagram.cli`` catches, prints and exits.
"""
from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_MISSING_DEPS = 1
EXIT_VALIDATION_FAILED = 2
EXIT_SVG_GENERATION_FAILED = 3


class DiagramError(Exception):
    """Base class for all pipeline failures."""

    exit_code: int = EXIT_VALIDATION_FAILED


class MissingDependencyError(DiagramError):
    """umple or dot is not reachable, or required CLI flags are absent."""

    exit_code = EXIT_MISSING_DEPS


class ValidationFailedError(DiagramError):
    """Input file missing, or the compiler exited non-zero.

    ``output`` holds the compiler's combined stdout/stderr; None when the
    compiler never ran.
    """

    exit_code = EXIT_VALIDATION_FAILED

    def __init__(self, message: str, output: str | None = None) -> None:
        super().__init__(message)
        self.output = output


class SvgGenerationFailedError(DiagramError):
    """No image was produced or it could not be placed at the output."""

    exit_code = EXIT_SVG_GENERATION_FAILED


class UnsupportedDiagramTypeError(SvgGenerationFailedError):
    """The diagram type has no generator mapping; raised before compiling."""


class OutputPlacementError(SvgGenerationFailedError):
    """Copying artifacts to the output location failed."""
