"""umple_diagram — render Umple models to SVG diagrams via umple + Graphviz."""

__version__ = "0.1.0"

from umple_diagram.pipeline.diagram_types import SUPPORTED_DIAGRAM_TYPES, get_generator_flag
from umple_diagram.pipeline.errors import (
    DiagramError,
    MissingDependencyError,
    OutputPlacementError,
    SvgGenerationFailedError,
    UnsupportedDiagramTypeError,
    ValidationFailedError,
)
from umple_diagram.pipeline.generator import DiagramGenerator, InvocationRequest
from umple_diagram.pipeline.placement import OutputMode
from umple_diagram.pipeline.report import GenerationReport

__all__ = [
    "__version__",
    # Pipeline
    "DiagramGenerator",
    "InvocationRequest",
    "GenerationReport",
    "OutputMode",
    "SUPPORTED_DIAGRAM_TYPES",
    "get_generator_flag",
    # Errors
    "DiagramError",
    "MissingDependencyError",
    "ValidationFailedError",
    "SvgGenerationFailedError",
    "UnsupportedDiagramTypeError",
    "OutputPlacementError",
]
