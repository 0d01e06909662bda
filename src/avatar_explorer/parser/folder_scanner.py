"""Scan an item folder and group its files into subfolder categories."""

from __future__ import annotations

import logging
from pathlib import Path

from avatar_explorer.models.constants import (
    EXTENSION_SUBFOLDERS,
    SUBFOLDER_MATERIAL,
    SUBFOLDER_UNKNOWN,
)
from avatar_explorer.models.item import FileData, ItemFolderInfo


logger = logging.getLogger(__name__)


def classify_file(path: Path) -> str:
    return EXTENSION_SUBFOLDERS.get(path.suffix.lower(), SUBFOLDER_UNKNOWN)


def _file_data(path: Path) -> FileData:
    return FileData(
        file_name=path.name,
        file_path=str(path),
        file_extension=path.suffix.lower(),
    )


def _walk_files(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob("*") if p.is_file())


def scan_item_folder(item_path: str, material_path: str = "") -> ItemFolderInfo:
    """List the files of an item folder by category.

    Files under ``material_path`` always count as materials. A folder that
    doesn't exist produces an empty listing.
    """
    info = ItemFolderInfo()
    root = Path(item_path)
    material_root = Path(material_path).resolve() if material_path else None

    seen: set[Path] = set()
    for path in _walk_files(root):
        resolved = path.resolve()
        seen.add(resolved)
        if material_root is not None and resolved.is_relative_to(material_root):
            info.add(SUBFOLDER_MATERIAL, _file_data(path))
        else:
            info.add(classify_file(path), _file_data(path))

    if material_root is not None:
        for path in _walk_files(material_root):
            if path.resolve() in seen:
                continue
            info.add(SUBFOLDER_MATERIAL, _file_data(path))

    logger.debug("Scanned %s: %d file(s)", item_path, len(info.all_items()))
    return info
