"""DiagramGenerator — drives umple and Graphviz to produce one diagram.

Pipeline:
    InvocationRequest
        → input check                 (ValidationFailedError, exit 2)
        → check_dependencies()        (MissingDependencyError, exit 1)
        → get_generator_flag()        (UnsupportedDiagramTypeError, exit 3)
        → Compiler.compile()          (ValidationFailedError, exit 2)
        → find_generated_files()
        → ensure_image()  [dot fallback when only .gv exists]
                                      (SvgGenerationFailedError, exit 3)
        → place_artifacts()           (OutputPlacementError, exit 3)
        → GenerationReport

Usage:
    generator = DiagramGenerator.from_config(cfg)
    report = generator.run(InvocationRequest.build("model.ump", "./out", output_name="light"))
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Sequence

from umple_diagram.pipeline.artifacts import ArtifactSet, ensure_image, find_generated_files
from umple_diagram.pipeline.diagram_types import (
    DEFAULT_DIAGRAM_TYPE,
    get_generator_flag,
    unsupported_message,
)
from umple_diagram.pipeline.errors import (
    MissingDependencyError,
    SvgGenerationFailedError,
    UnsupportedDiagramTypeError,
    ValidationFailedError,
)
from umple_diagram.pipeline.placement import PlacementResult, place_artifacts
from umple_diagram.pipeline.report import GenerationReport
from umple_diagram.toolchain.interface import Compiler, Renderer
from umple_diagram.toolchain.probe import check_dependencies
from umple_diagram.toolchain.subprocess_adapter import DotRenderer, UmpleCompiler
from umple_diagram.utils.config import ToolchainConfig
from umple_diagram.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class InvocationRequest:
    """One CLI invocation. Paths are absolute once built via ``build()``."""
    input_path: Path
    output_path: Path
    diagram_type: str = DEFAULT_DIAGRAM_TYPE
    suboptions: tuple[str, ...] = field(default_factory=tuple)
    output_name: str | None = None
    json_output: bool = False

    @classmethod
    def build(
        cls,
        input_path: str | Path,
        output_path: str | Path,
        diagram_type: str = DEFAULT_DIAGRAM_TYPE,
        suboptions: Sequence[str] = (),
        output_name: str | None = None,
        json_output: bool = False,
    ) -> "InvocationRequest":
        return cls(
            input_path=Path(input_path).resolve(),
            output_path=Path(output_path).resolve(),
            diagram_type=diagram_type,
            suboptions=tuple(suboptions),
            output_name=output_name,
            json_output=json_output,
        )


class DiagramGenerator:
    """Runs the full generation pipeline for a single request.

    Args:
        compiler: Compiler port (UmpleCompiler in production).
        renderer: Renderer port (DotRenderer in production).
        config: Toolchain settings; only the extensions and install hints are
            read here, the adapters carry their own commands and timeouts.
    """

    def __init__(
        self,
        compiler: Compiler,
        renderer: Renderer,
        config: ToolchainConfig | None = None,
    ) -> None:
        self._compiler = compiler
        self._renderer = renderer
        self._config = config or ToolchainConfig()

    @classmethod
    def from_config(cls, config: ToolchainConfig) -> "DiagramGenerator":
        return cls(
            compiler=UmpleCompiler.from_config(config),
            renderer=DotRenderer.from_config(config),
            config=config,
        )

    # ── Public API ────────────────────────────────────────────────────────────

    def run(self, request: InvocationRequest, now: datetime | None = None) -> GenerationReport:
        """Execute every stage; the first failing stage raises.

        Raises:
            DiagramError: subclass matching the failing stage.
        """
        self.validate_input(request.input_path)
        self.check_dependencies()
        generator_flag = self.resolve_generator(request.diagram_type)
        self.compile(request.input_path, generator_flag, request.suboptions)
        artifacts = self.collect_artifacts(request.input_path)
        placement = self.place(artifacts, request, now=now)
        return GenerationReport.from_placement(
            placement,
            input_path=str(request.input_path),
            diagram_type=request.diagram_type,
        )

    # ── Stages ────────────────────────────────────────────────────────────────

    def validate_input(self, input_path: Path) -> None:
        if not Path(input_path).exists():
            raise ValidationFailedError(f"Input file not found: {input_path}")

    def check_dependencies(self) -> None:
        status = check_dependencies(self._compiler, self._renderer)
        logger.debug(
            "Dependency status",
            compiler_available=status.compiler_available,
            renderer_available=status.renderer_available,
        )
        if not status.compiler_available:
            raise MissingDependencyError(
                f"{self._compiler.name} CLI not found.\n{self._config.compiler_install_hint}"
            )
        if not status.renderer_available:
            raise MissingDependencyError(
                f"Graphviz ({self._renderer.name}) not found.\n{self._config.renderer_install_hint}"
            )

    def resolve_generator(self, diagram_type: str) -> str:
        flag = get_generator_flag(diagram_type)
        if flag is None:
            raise UnsupportedDiagramTypeError(unsupported_message(diagram_type))
        return flag

    def compile(self, input_path: Path, generator_flag: str, suboptions: Sequence[str] = ()) -> None:
        logger.info(
            "Compiling model",
            input_path=str(input_path),
            generator=generator_flag,
            suboptions=list(suboptions),
        )
        result = self._compiler.compile(input_path, generator_flag, suboptions)
        if not result.success:
            raise ValidationFailedError("Umple generation failed:", output=result.output)

    def collect_artifacts(self, input_path: Path) -> ArtifactSet:
        """Locate the compiler output and fall back to the renderer if needed."""
        cfg = self._config
        artifacts = find_generated_files(
            input_path,
            model_extension=cfg.model_extension,
            graph_extension=cfg.graph_extension,
            image_extension=cfg.image_extension,
        )
        ensure_image(
            artifacts,
            self._renderer,
            graph_extension=cfg.graph_extension,
            image_extension=cfg.image_extension,
        )
        if artifacts.image_path is None:
            raise SvgGenerationFailedError("SVG file was not generated")
        return artifacts

    def place(
        self,
        artifacts: ArtifactSet,
        request: InvocationRequest,
        now: datetime | None = None,
    ) -> PlacementResult:
        return place_artifacts(
            artifacts,
            input_path=request.input_path,
            output_path=request.output_path,
            output_name=request.output_name,
            diagram_type=request.diagram_type,
            image_extension=self._config.image_extension,
            now=now,
        )
