"""Result reporting — the plain path line or the ``--json`` success record.

The JSON record uses camelCase keys and omits absent entries:

    {
      "success": true,
      "mode": "folder",
      "inputPath": "/abs/model.ump",
      "diagramType": "state-machine",
      "outputDir": "/abs/out/light-controller_20261019_120000",
      "files": {"source": "...", "intermediate": "...", "image": "..."}
    }
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from umple_diagram.pipeline.placement import OutputMode, PlacementResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ArtifactPaths(_CamelModel):
    source: str | None = None
    intermediate: str | None = None
    image: str


class GenerationReport(_CamelModel):
    success: bool = True
    mode: OutputMode
    input_path: str
    diagram_type: str
    output_dir: str | None = None
    output_path: str | None = None
    files: ArtifactPaths

    @classmethod
    def from_placement(
        cls,
        placement: PlacementResult,
        input_path: str,
        diagram_type: str,
    ) -> "GenerationReport":
        files = ArtifactPaths(
            source=str(placement.source_path) if placement.source_path else None,
            intermediate=str(placement.intermediate_path) if placement.intermediate_path else None,
            image=str(placement.image_path),
        )
        if placement.mode is OutputMode.FOLDER:
            return cls(
                mode=placement.mode,
                input_path=input_path,
                diagram_type=diagram_type,
                output_dir=str(placement.output_dir),
                files=files,
            )
        return cls(
            mode=placement.mode,
            input_path=input_path,
            diagram_type=diagram_type,
            output_path=str(placement.image_path),
            files=files,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def to_text(self) -> str:
        """Plain-text form: just the produced image path."""
        return self.files.image
