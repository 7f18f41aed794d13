"""Tests for layout loading and JSON persistence."""

import json
from pathlib import Path

import pytest
from pydantic import BaseModel

from ledgrid.exceptions import (
    ConfigFileInvalidError,
    ConfigValidationError,
    LayoutNotFoundError,
)
from ledgrid.layouts import BUILTIN_LAYOUTS_DIR, list_layouts, load_layout, load_layout_file
from ledgrid.models import ColorMapping, LayoutModel
from ledgrid.persistence import PydanticPersistence


def write_layout(directory: Path, name: str, **overrides) -> Path:
    data = {
        "name": name,
        "window_width": 300,
        "window_height": 300,
        "panels": [{"id": "P1", "device_ip": "10.1.1.1", "x": 0, "y": 0}],
    }
    data.update(overrides)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.json"
    path.write_text(json.dumps(data))
    return path


@pytest.mark.unit
class TestBuiltinLayouts:
    """Test the layouts shipped with the package."""

    def test_builtins_listed(self):
        names = list_layouts()
        assert {"OneGrid", "TwoGrids", "FourGrids"} <= set(names)

    @pytest.mark.parametrize("name,panels", [("OneGrid", 1), ("TwoGrids", 2), ("FourGrids", 4)])
    def test_builtins_load(self, name, panels):
        layout = load_layout(name)
        assert layout.name == name
        assert layout.panel_count == panels
        assert all(p.led_count == 256 for p in layout.panels)
        assert all(p.color_mapping is ColorMapping.GBR for p in layout.panels)

    @pytest.mark.parametrize("name", ["TwoGrids", "FourGrids"])
    def test_grid01_is_mirrored(self, name):
        layout = load_layout(name)
        assert layout.get_panel("Grid01").mirror is True
        assert [p.id for p in layout.panels if p.mirror] == ["Grid01"]

    def test_panels_fit_window(self):
        for name in ("OneGrid", "TwoGrids", "FourGrids"):
            layout = load_layout(name)
            for panel in layout.panels:
                assert panel.x + panel.width <= layout.window_width
                assert panel.y + panel.height <= layout.window_height


@pytest.mark.unit
class TestUserLayouts:
    """Test user layout directory handling."""

    def test_user_layout_listed_first(self, temp_dir):
        write_layout(temp_dir, "Custom")
        names = list_layouts(temp_dir)
        assert names[0] == "Custom"
        assert "OneGrid" in names

    def test_user_layout_overrides_builtin(self, temp_dir):
        write_layout(temp_dir, "OneGrid", title="Mine")
        layout = load_layout("OneGrid", temp_dir)
        assert layout.title == "Mine"
        assert list_layouts(temp_dir).count("OneGrid") == 1

    def test_load_by_path(self, temp_dir):
        path = write_layout(temp_dir, "ByPath")
        assert load_layout(str(path)).name == "ByPath"

    def test_missing_directory_is_skipped(self, temp_dir):
        assert "OneGrid" in list_layouts(temp_dir / "does-not-exist")

    def test_unknown_layout(self, temp_dir):
        with pytest.raises(LayoutNotFoundError) as exc_info:
            load_layout("Nope", temp_dir)
        assert "ledgrid layouts" in exc_info.value.recovery_hint
        assert str(BUILTIN_LAYOUTS_DIR) in exc_info.value.technical_message

    def test_duplicate_panel_ids(self, temp_dir):
        path = write_layout(temp_dir, "Dupes", panels=[{"id": "A"}, {"id": "A"}])
        with pytest.raises(ConfigValidationError):
            load_layout_file(path)

    def test_bad_color_mapping_has_hint(self, temp_dir):
        path = write_layout(temp_dir, "BadMap", panels=[{"id": "A", "color_mapping": "RGBW"}])
        with pytest.raises(ConfigValidationError) as exc_info:
            load_layout_file(path)
        assert "color_mapping" in exc_info.value.field
        assert "GBR" in exc_info.value.recovery_hint

    def test_malformed_json(self, temp_dir):
        path = temp_dir / "Broken.json"
        path.write_text('{"name": "Broken",}')
        with pytest.raises(ConfigFileInvalidError):
            load_layout_file(path)

    def test_empty_file(self, temp_dir):
        path = temp_dir / "Empty.json"
        path.write_text("  ")
        with pytest.raises(ConfigFileInvalidError) as exc_info:
            load_layout_file(path)
        assert exc_info.value.user_message == "Configuration file is empty"


class SampleModel(BaseModel):
    """Simple model for testing."""

    name: str = "test"
    value: int = 42


@pytest.mark.unit
class TestPersistenceSafety:
    """Test safety features of PydanticPersistence."""

    def test_save_creates_backup(self, tmp_path: Path):
        path = tmp_path / "config.json"
        PydanticPersistence.save_json(SampleModel(name="original", value=1), path, backup=False)

        PydanticPersistence.save_json(SampleModel(name="modified", value=2), path)

        backup = PydanticPersistence.load_json(path.with_suffix(".json.bak"), SampleModel)
        assert backup.name == "original"
        assert PydanticPersistence.load_json(path, SampleModel).name == "modified"

    def test_save_without_backup(self, tmp_path: Path):
        path = tmp_path / "config.json"
        PydanticPersistence.save_json(SampleModel(), path)
        PydanticPersistence.save_json(SampleModel(value=2), path, backup=False)
        assert not path.with_suffix(".json.bak").exists()

    def test_temp_file_cleaned_up(self, tmp_path: Path):
        path = tmp_path / "nested" / "config.json"
        PydanticPersistence.save_json(SampleModel(), path)
        assert path.exists()
        assert not path.with_suffix(".json.tmp").exists()

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PydanticPersistence.load_json(tmp_path / "missing.json", SampleModel)

    def test_load_or_default_uses_factory(self, tmp_path: Path):
        model = PydanticPersistence.load_json_or_default(
            tmp_path / "missing.json", SampleModel, lambda: SampleModel(value=7)
        )
        assert model.value == 7

    def test_corrupt_file_is_not_masked(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigFileInvalidError):
            PydanticPersistence.load_json_or_default(path, SampleModel)

    def test_layout_round_trip(self, tmp_path: Path):
        layout = load_layout("TwoGrids")
        path = tmp_path / "TwoGrids.json"

        PydanticPersistence.save_json(layout, path)

        assert load_layout_file(path) == layout
