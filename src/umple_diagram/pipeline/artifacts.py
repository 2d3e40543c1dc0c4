"""Artifact location and the Graphviz fallback.

umple writes ``<base>.gv`` and/or ``<base>.svg`` next to the input, where
``<base>`` is the input file name with a trailing ``.ump`` removed. Nothing
here inspects file contents; only existence matters.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from umple_diagram.toolchain.interface import Renderer
from umple_diagram.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ArtifactSet:
    """Generated files next to the input. None means the file does not exist."""
    intermediate_path: Path | None = None
    image_path: Path | None = None


def artifact_base_name(input_path: Path, model_extension: str = ".ump") -> str:
    name = Path(input_path).name
    if name.endswith(model_extension) and len(name) > len(model_extension):
        return name[: -len(model_extension)]
    return name


def expected_artifact_paths(
    input_path: Path,
    model_extension: str = ".ump",
    graph_extension: str = ".gv",
    image_extension: str = ".svg",
) -> tuple[Path, Path]:
    """Return ``(graph_path, image_path)`` where the compiler writes its output."""
    input_path = Path(input_path)
    base = artifact_base_name(input_path, model_extension)
    return (
        input_path.parent / f"{base}{graph_extension}",
        input_path.parent / f"{base}{image_extension}",
    )


def find_generated_files(
    input_path: Path,
    model_extension: str = ".ump",
    graph_extension: str = ".gv",
    image_extension: str = ".svg",
) -> ArtifactSet:
    graph_path, image_path = expected_artifact_paths(
        input_path, model_extension, graph_extension, image_extension
    )
    return ArtifactSet(
        intermediate_path=graph_path if graph_path.exists() else None,
        image_path=image_path if image_path.exists() else None,
    )


def image_path_for_graph(graph_path: Path, graph_extension: str = ".gv", image_extension: str = ".svg") -> Path:
    """Sibling of ``graph_path`` with the graph extension swapped for the image one."""
    graph_path = Path(graph_path)
    name = graph_path.name
    if name.endswith(graph_extension):
        name = name[: -len(graph_extension)]
    return graph_path.parent / f"{name}{image_extension}"


def ensure_image(
    artifacts: ArtifactSet,
    renderer: Renderer,
    graph_extension: str = ".gv",
    image_extension: str = ".svg",
) -> bool:
    """Fill in ``artifacts.image_path`` by rendering the graph file if needed.

    The renderer runs only when the image is missing and the graph file is
    present, and at most once. Returns True if an image path is set afterwards.
    """
    if artifacts.image_path is not None:
        return True
    if artifacts.intermediate_path is None:
        return False

    target = image_path_for_graph(artifacts.intermediate_path, graph_extension, image_extension)
    logger.info(
        "Compiler produced no image; rendering graph",
        graph_path=str(artifacts.intermediate_path),
        image_path=str(target),
    )
    if renderer.render(artifacts.intermediate_path, target):
        artifacts.image_path = target
        return True
    logger.debug("Renderer fallback failed", graph_path=str(artifacts.intermediate_path))
    return False
