"""Diagram-type resolution: logical type name → umple generator flag."""
from __future__ import annotations

STATE_MACHINE = "state-machine"
CLASS_DIAGRAM = "class-diagram"
DEFAULT_DIAGRAM_TYPE = STATE_MACHINE

_GENERATOR_FLAGS: dict[str, str] = {
    STATE_MACHINE: "GvStateDiagram",
    CLASS_DIAGRAM: "GvClassDiagram",
}

SUPPORTED_DIAGRAM_TYPES: tuple[str, ...] = tuple(_GENERATOR_FLAGS)


def get_generator_flag(diagram_type: str) -> str | None:
    """Return the umple ``-g`` value for ``diagram_type``, or None if unmapped."""
    return _GENERATOR_FLAGS.get(diagram_type)


def unsupported_message(diagram_type: str) -> str:
    return (
        f"Unsupported diagram type: {diagram_type}. "
        f"Supported types: {', '.join(SUPPORTED_DIAGRAM_TYPES)}"
    )


def folder_prefix(diagram_type: str) -> str:
    """Default folder-name prefix when no ``--name`` is given."""
    return CLASS_DIAGRAM if diagram_type == CLASS_DIAGRAM else STATE_MACHINE
