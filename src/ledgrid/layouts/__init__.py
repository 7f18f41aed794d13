"""Layout loading.

Layouts are JSON documents validated into ``LayoutModel``. A name is
resolved against the user's layouts directory first, then against the
layouts shipped with the package, so a user file can override a built-in
one of the same name.
"""

import logging
from pathlib import Path
from typing import Optional

from ledgrid.exceptions import LayoutNotFoundError
from ledgrid.models import LayoutModel
from ledgrid.persistence import PydanticPersistence

logger = logging.getLogger(__name__)

BUILTIN_LAYOUTS_DIR = Path(__file__).parent


def _search_dirs(layouts_dir: Optional[Path]) -> list[Path]:
    dirs = []
    if layouts_dir is not None:
        dirs.append(Path(layouts_dir).expanduser())
    dirs.append(BUILTIN_LAYOUTS_DIR)
    return dirs


def load_layout_file(path: Path) -> LayoutModel:
    """
    Load a layout from an explicit JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigFileInvalidError: If the JSON is malformed
        ConfigValidationError: If the layout is invalid (e.g. duplicate panel ids)
    """
    layout = PydanticPersistence.load_json(Path(path), LayoutModel)
    logger.info(f"Loaded layout '{layout.name}' ({layout.panel_count} panels) from {path}")
    return layout


def load_layout(name: str, layouts_dir: Optional[Path] = None) -> LayoutModel:
    """
    Load a layout by name (file stem) or by path.

    Args:
        name: Layout name such as "TwoGrids", or a path to a .json file
        layouts_dir: User layouts directory searched before the built-ins

    Raises:
        LayoutNotFoundError: If no layout of that name exists
    """
    candidate = Path(name).expanduser()
    if candidate.suffix == ".json" and candidate.is_file():
        return load_layout_file(candidate)

    searched = []
    for directory in _search_dirs(layouts_dir):
        path = directory / f"{name}.json"
        searched.append(str(directory))
        if path.is_file():
            return load_layout_file(path)

    raise LayoutNotFoundError(name, searched)


def list_layouts(layouts_dir: Optional[Path] = None) -> list[str]:
    """
    List available layout names, user layouts first, without duplicates.
    """
    names: list[str] = []
    for directory in _search_dirs(layouts_dir):
        if not directory.is_dir():
            continue
        for path in sorted(directory.glob("*.json")):
            if path.stem not in names:
                names.append(path.stem)
    return names


__all__ = [
    "BUILTIN_LAYOUTS_DIR",
    "list_layouts",
    "load_layout",
    "load_layout_file",
]
