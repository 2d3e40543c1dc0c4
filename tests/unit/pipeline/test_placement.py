"""Tests for output-mode selection, folder naming and artifact placement."""
from __future__ import annotations

import shutil
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from umple_diagram.pipeline.artifacts import ArtifactSet
from umple_diagram.pipeline.errors import OutputPlacementError, SvgGenerationFailedError
from umple_diagram.pipeline.placement import (
    OutputMode,
    generate_folder_name,
    place_artifacts,
    place_exact,
    place_in_folder,
    sanitize_name,
    select_output_mode,
    timestamp_token,
)

_real_copyfile = shutil.copyfile


@pytest.fixture
def generated(model_file) -> ArtifactSet:
    """umple-style output next to the model: model.gv + model.svg."""
    gv = model_file.parent / "model.gv"
    svg = model_file.parent / "model.svg"
    gv.write_text("digraph LightController { Off -> On; }")
    svg.write_bytes(b"<svg>\x00rendered bytes</svg>")
    return ArtifactSet(intermediate_path=gv, image_path=svg)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

class TestSelectOutputMode:
    def test_svg_path_without_name_is_exact(self):
        assert select_output_mode("/out/diagram.svg", None) is OutputMode.EXACT

    def test_directory_is_folder(self):
        assert select_output_mode("/out", None) is OutputMode.FOLDER

    def test_name_forces_folder_even_for_svg_path(self):
        assert select_output_mode("/out/diagram.svg", "light") is OutputMode.FOLDER

    def test_empty_name_still_counts_as_supplied(self):
        assert select_output_mode("/out/diagram.svg", "") is OutputMode.FOLDER

    def test_custom_image_extension(self):
        assert select_output_mode("/out/diagram.png", None, ".png") is OutputMode.EXACT


class TestFolderName:
    def test_sanitize(self):
        assert sanitize_name("Light Controller/v2!") == "light-controller-v2-"
        assert sanitize_name("user_auth-01") == "user_auth-01"

    def test_timestamp_token_is_15_chars(self, fixed_now):
        token = timestamp_token(fixed_now)
        assert token == "20261019123456_"
        assert len(token) == 15

    def test_timestamp_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        local = datetime(2026, 10, 19, 14, 34, 56, tzinfo=plus_two)
        assert timestamp_token(local) == "20261019123456_"

    def test_label_based(self, fixed_now):
        assert generate_folder_name("Light Controller", "state-machine", fixed_now) == (
            "light-controller_20261019123456_"
        )

    def test_type_based_default(self, fixed_now):
        assert generate_folder_name(None, "class-diagram", fixed_now) == "class-diagram_20261019123456_"
        assert generate_folder_name(None, "state-machine", fixed_now) == "state-machine_20261019123456_"

    def test_same_second_collides(self, fixed_now):
        later = fixed_now + timedelta(milliseconds=400)
        assert generate_folder_name("x", "state-machine", fixed_now) == generate_folder_name(
            "x", "state-machine", later
        )


# ---------------------------------------------------------------------------
# Exact mode
# ---------------------------------------------------------------------------

class TestPlaceExact:
    def test_copies_image_bytes_unmodified(self, generated, tmp_path):
        target = tmp_path / "nested" / "dir" / "diagram.svg"
        result = place_exact(generated.image_path, target)
        assert result.mode is OutputMode.EXACT
        assert result.image_path == target
        assert target.read_bytes() == generated.image_path.read_bytes()
        assert list(target.parent.iterdir()) == [target]

    def test_overwrites_existing_file(self, generated, tmp_path):
        target = tmp_path / "diagram.svg"
        target.write_text("stale")
        place_exact(generated.image_path, target)
        assert target.read_bytes() == generated.image_path.read_bytes()

    def test_originals_left_in_place(self, generated, tmp_path):
        place_exact(generated.image_path, tmp_path / "diagram.svg")
        assert generated.image_path.exists()
        assert generated.intermediate_path.exists()

    def test_target_is_the_generated_image(self, generated):
        original = generated.image_path.read_bytes()
        result = place_exact(generated.image_path, generated.image_path)
        assert result.image_path == generated.image_path
        assert generated.image_path.read_bytes() == original

    def test_target_reached_through_other_spelling(self, generated):
        target = generated.image_path.parent / "." / generated.image_path.name
        with patch("umple_diagram.pipeline.placement.shutil.copyfile") as copy:
            result = place_exact(generated.image_path, target)
        copy.assert_not_called()
        assert result.image_path == target

    def test_copy_failure_raises_placement_error(self, generated, tmp_path):
        target = tmp_path / "diagram.svg"
        target.mkdir()
        with pytest.raises(OutputPlacementError):
            place_exact(generated.image_path, target)


# ---------------------------------------------------------------------------
# Folder mode
# ---------------------------------------------------------------------------

class TestPlaceInFolder:
    def test_copies_all_three_artifacts(self, generated, model_file, output_dir):
        result = place_in_folder(generated, model_file, output_dir, "light-controller_20261019123456_")
        folder = output_dir / "light-controller_20261019123456_"
        assert result.output_dir == folder
        assert sorted(p.name for p in folder.iterdir()) == ["model.gv", "model.svg", "model.ump"]
        assert result.image_path == folder / "model.svg"
        assert result.intermediate_path == folder / "model.gv"
        assert result.source_path == folder / "model.ump"

    def test_without_graph_file(self, generated, model_file, output_dir):
        artifacts = ArtifactSet(image_path=generated.image_path)
        result = place_in_folder(artifacts, model_file, output_dir, "f")
        assert result.intermediate_path is None
        assert sorted(p.name for p in (output_dir / "f").iterdir()) == ["model.svg", "model.ump"]

    def test_partial_copy_is_rolled_back(self, generated, model_file, output_dir):
        calls = {"n": 0}

        def flaky_copy(src, dst):
            calls["n"] += 1
            if calls["n"] == 2:
                raise PermissionError("disk said no")
            return _real_copyfile(src, dst)

        with patch("umple_diagram.pipeline.placement.shutil.copyfile", side_effect=flaky_copy):
            with pytest.raises(OutputPlacementError, match="disk said no"):
                place_in_folder(generated, model_file, output_dir, "f")
        assert not (output_dir / "f").exists()

    def test_existing_folder_is_not_removed_on_failure(self, generated, model_file, output_dir):
        folder = output_dir / "f"
        folder.mkdir(parents=True)
        (folder / "keep.txt").write_text("from an earlier run")

        with patch(
            "umple_diagram.pipeline.placement.shutil.copyfile",
            side_effect=PermissionError("disk said no"),
        ):
            with pytest.raises(OutputPlacementError):
                place_in_folder(generated, model_file, output_dir, "f")
        assert (folder / "keep.txt").exists()

    def test_placement_error_is_svg_generation_failure(self):
        assert issubclass(OutputPlacementError, SvgGenerationFailedError)


class TestPlaceArtifacts:
    def test_dispatches_exact(self, generated, model_file, tmp_path, fixed_now):
        result = place_artifacts(
            generated, model_file, tmp_path / "d.svg", None, "state-machine", now=fixed_now
        )
        assert result.mode is OutputMode.EXACT

    def test_name_with_svg_looking_output_creates_folder_under_it(
        self, generated, model_file, tmp_path, fixed_now
    ):
        result = place_artifacts(
            generated, model_file, tmp_path / "d.svg", "Light", "state-machine", now=fixed_now
        )
        assert result.mode is OutputMode.FOLDER
        assert result.output_dir == tmp_path / "d.svg" / "light_20261019123456_"

    def test_default_folder_uses_type_prefix(self, generated, model_file, output_dir, fixed_now):
        result = place_artifacts(generated, model_file, output_dir, None, "class-diagram", now=fixed_now)
        assert result.output_dir == output_dir / "class-diagram_20261019123456_"

    def test_missing_image_rejected(self, model_file, output_dir):
        with pytest.raises(OutputPlacementError):
            place_artifacts(ArtifactSet(), model_file, output_dir, None, "state-machine")
