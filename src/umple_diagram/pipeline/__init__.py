"""umple_diagram.pipeline — umple → Graphviz → placed SVG.

Public API:
    DiagramGenerator       — runs every stage for one InvocationRequest
    InvocationRequest      — resolved CLI inputs
    GenerationReport       — success record (plain path or JSON)
    OutputMode             — exact | folder
    generate_folder_name   — pure label/type/time → folder name
    get_generator_flag     — diagram type → umple generator
"""
from umple_diagram.pipeline.artifacts import ArtifactSet, ensure_image, find_generated_files
from umple_diagram.pipeline.diagram_types import SUPPORTED_DIAGRAM_TYPES, get_generator_flag
from umple_diagram.pipeline.generator import DiagramGenerator, InvocationRequest
from umple_diagram.pipeline.placement import (
    OutputMode,
    PlacementResult,
    generate_folder_name,
    place_artifacts,
    select_output_mode,
)
from umple_diagram.pipeline.report import GenerationReport

__all__ = [
    "DiagramGenerator",
    "InvocationRequest",
    "GenerationReport",
    "ArtifactSet",
    "find_generated_files",
    "ensure_image",
    "OutputMode",
    "PlacementResult",
    "generate_folder_name",
    "place_artifacts",
    "select_output_mode",
    "SUPPORTED_DIAGRAM_TYPES",
    "get_generator_flag",
]
