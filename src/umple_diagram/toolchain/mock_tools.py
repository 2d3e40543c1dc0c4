"""MockCompiler / MockRenderer — deterministic toolchain doubles for unit testing.

MockCompiler writes placeholder artifacts next to the input exactly where
umple would, so the rest of the pipeline runs unmodified:
- emit_graph / emit_image choose which sibling files appear
- returncode / output simulate compiler failures
- timeout simulates a hung compiler (reported as a failed generation)
- calls records every invocation for assertions

These doubles MUST NOT be used in integration tests.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from umple_diagram.toolchain.interface import Compiler, GenerationResult, Renderer

PLACEHOLDER_GRAPH = "digraph mock {\n  Off -> On;\n}\n"
PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
    "<title>mock</title></svg>\n"
)


def _sibling(input_path: Path, model_extension: str, extension: str) -> Path:
    name = input_path.name
    if name.endswith(model_extension):
        name = name[: -len(model_extension)]
    return input_path.parent / f"{name}{extension}"


class MockCompiler(Compiler):
    """Simulates umple without spawning a process."""

    def __init__(
        self,
        available: bool = True,
        emit_graph: bool = True,
        emit_image: bool = False,
        returncode: int = 0,
        output: str = "",
        timeout: bool = False,
        model_extension: str = ".ump",
        graph_extension: str = ".gv",
        image_extension: str = ".svg",
    ) -> None:
        self._available = available
        self._emit_graph = emit_graph
        self._emit_image = emit_image
        self._returncode = returncode
        self._output = output
        self._timeout = timeout
        self._model_ext = model_extension
        self._graph_ext = graph_extension
        self._image_ext = image_extension

        self.calls: list[tuple[Path, str, list[str]]] = []
        self.n_probes: int = 0

    @property
    def name(self) -> str:
        return "mock-umple"

    def is_available(self) -> bool:
        self.n_probes += 1
        return self._available

    def compile(
        self,
        input_path: Path,
        generator: str,
        suboptions: Sequence[str] = (),
    ) -> GenerationResult:
        input_path = Path(input_path)
        self.calls.append((input_path, generator, list(suboptions)))

        if self._timeout:
            return GenerationResult(success=False, output=f"{self.name} timed out")
        if self._returncode != 0:
            return GenerationResult(success=False, output=self._output.strip())

        if self._emit_graph:
            _sibling(input_path, self._model_ext, self._graph_ext).write_text(
                PLACEHOLDER_GRAPH, encoding="utf-8"
            )
        if self._emit_image:
            _sibling(input_path, self._model_ext, self._image_ext).write_text(
                PLACEHOLDER_SVG, encoding="utf-8"
            )
        return GenerationResult(success=True, output=self._output.strip())


class MockRenderer(Renderer):
    """Simulates Graphviz dot; ``succeed=False`` produces no image."""

    def __init__(self, available: bool = True, succeed: bool = True) -> None:
        self._available = available
        self._succeed = succeed
        self.calls: list[tuple[Path, Path]] = []
        self.n_probes: int = 0

    @property
    def name(self) -> str:
        return "mock-dot"

    def is_available(self) -> bool:
        self.n_probes += 1
        return self._available

    def render(self, graph_path: Path, image_path: Path) -> bool:
        self.calls.append((Path(graph_path), Path(image_path)))
        if not self._succeed:
            return False
        Path(image_path).write_text(PLACEHOLDER_SVG, encoding="utf-8")
        return Path(image_path).exists()
