"""Output placement — exact single-file copy or a named, timestamped folder.

Mode selection happens once per run:

    output ends with .svg AND no --name   → exact   (copy the image only)
    anything else                         → folder  (copy source, graph, image)

Folder names are ``<label>_<YYYYMMDDHHMMSS_>`` in UTC. Two runs with the same
label inside the same second map to the same folder; the second run's copies
overwrite the first's.
"""
from __future__ import annotations

import os
import re
import shutil
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterator

from umple_diagram.pipeline.artifacts import ArtifactSet
from umple_diagram.pipeline.diagram_types import folder_prefix
from umple_diagram.pipeline.errors import OutputPlacementError
from umple_diagram.utils.logging import get_logger

logger = get_logger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"  # second resolution; token adds a trailing "_" (15 chars)


class OutputMode(str, Enum):
    EXACT = "exact"
    FOLDER = "folder"


@dataclass(frozen=True)
class PlacementResult:
    """Where the artifacts ended up.

    ``output_dir`` is set in folder mode only; ``source_path`` and
    ``intermediate_path`` are None when that artifact was not copied.
    """
    mode: OutputMode
    image_path: Path
    output_dir: Path | None = None
    source_path: Path | None = None
    intermediate_path: Path | None = None


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def select_output_mode(
    output_path: Path | str,
    output_name: str | None,
    image_extension: str = ".svg",
) -> OutputMode:
    if str(output_path).endswith(image_extension) and output_name is None:
        return OutputMode.EXACT
    return OutputMode.FOLDER


def sanitize_name(name: str) -> str:
    """Replace characters outside ``[a-zA-Z0-9_-]`` with ``-`` and lower-case."""
    return _UNSAFE_NAME_CHARS.sub("-", name).lower()


def timestamp_token(now: datetime | None = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT) + "_"


def generate_folder_name(
    base_name: str | None,
    diagram_type: str,
    now: datetime | None = None,
) -> str:
    """Folder name from an optional label, the diagram type and the time.

    Naive ``now`` values are taken as already being UTC.
    """
    prefix = sanitize_name(base_name) if base_name else folder_prefix(diagram_type)
    return f"{prefix}_{timestamp_token(now)}"


# ---------------------------------------------------------------------------
# File-system operations
# ---------------------------------------------------------------------------


def place_exact(image_path: Path, output_path: Path) -> PlacementResult:
    """Copy only the image to ``output_path``, creating parents and overwriting.

    When ``output_path`` already is the generated image (e.g. ``-o model.svg``
    next to ``model.ump``) nothing is copied.
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if output_path.exists() and os.path.samefile(image_path, output_path):
            logger.debug("Image already at output path", image_path=str(output_path))
        else:
            shutil.copyfile(image_path, output_path)
    except OSError as exc:
        raise OutputPlacementError(f"Failed to write {output_path}: {exc}") from exc
    logger.info("Placed image", mode=OutputMode.EXACT.value, image_path=str(output_path))
    return PlacementResult(mode=OutputMode.EXACT, image_path=output_path)


@contextmanager
def _staged_folder(folder: Path) -> Iterator[Path]:
    """Create ``folder``; remove it again if the body fails and we created it."""
    created = not folder.exists()
    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputPlacementError(f"Failed to create output folder {folder}: {exc}") from exc
    try:
        yield folder
    except OSError as exc:
        if created:
            shutil.rmtree(folder, ignore_errors=True)
            logger.warning("Removed partially populated output folder", output_dir=str(folder))
        raise OutputPlacementError(f"Failed to copy artifacts into {folder}: {exc}") from exc


def place_in_folder(
    artifacts: ArtifactSet,
    input_path: Path,
    output_base: Path,
    folder_name: str,
) -> PlacementResult:
    """Copy image, graph (if any) and source into ``output_base/folder_name``."""
    if artifacts.image_path is None:
        raise OutputPlacementError("No image to place")

    folder = Path(output_base) / folder_name
    with _staged_folder(folder):
        image_out = folder / artifacts.image_path.name
        shutil.copyfile(artifacts.image_path, image_out)

        graph_out: Path | None = None
        if artifacts.intermediate_path is not None:
            graph_out = folder / artifacts.intermediate_path.name
            shutil.copyfile(artifacts.intermediate_path, graph_out)

        source_out = folder / Path(input_path).name
        shutil.copyfile(input_path, source_out)

    logger.info("Placed artifacts", mode=OutputMode.FOLDER.value, output_dir=str(folder))
    return PlacementResult(
        mode=OutputMode.FOLDER,
        image_path=image_out,
        output_dir=folder,
        source_path=source_out,
        intermediate_path=graph_out,
    )


def place_artifacts(
    artifacts: ArtifactSet,
    input_path: Path,
    output_path: Path,
    output_name: str | None,
    diagram_type: str,
    image_extension: str = ".svg",
    now: datetime | None = None,
) -> PlacementResult:
    """Select the output mode and copy artifacts accordingly."""
    if artifacts.image_path is None:
        raise OutputPlacementError("No image to place")

    mode = select_output_mode(output_path, output_name, image_extension)
    if mode is OutputMode.EXACT:
        return place_exact(artifacts.image_path, output_path)

    folder_name = generate_folder_name(output_name, diagram_type, now=now)
    return place_in_folder(artifacts, input_path, output_path, folder_name)
