"""Read and write the catalog data files.

The data directory holds three files:

- ``ItemsData.json``: list of item objects.
- ``CommonAvatar.json``: list of ``{"Name": ..., "Avatars": [...]}``.
- ``CustomCategory.txt``: one custom category label per line.

A missing file loads as an empty collection. Content that exists but
can't be understood raises ``ValueError``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from avatar_explorer.models.constants import NO_BOOTH_ID, ItemType
from avatar_explorer.models.item import CommonAvatarGroup, Item


logger = logging.getLogger(__name__)

ITEMS_FILE = "ItemsData.json"
COMMON_AVATARS_FILE = "CommonAvatar.json"
CUSTOM_CATEGORIES_FILE = "CustomCategory.txt"
DATA_FILES: tuple[str, ...] = (ITEMS_FILE, COMMON_AVATARS_FILE, CUSTOM_CATEGORIES_FILE)


# -- Field coercion -------------------------------------------------------------


def _parse_type(raw: Any) -> ItemType:
    if isinstance(raw, bool):
        raise ValueError(f"Invalid item type: {raw!r}")
    if isinstance(raw, int):
        try:
            return ItemType(raw)
        except ValueError:
            raise ValueError(f"Invalid item type: {raw!r}") from None
    if isinstance(raw, str):
        key = raw.strip()
        if key.isdigit():
            return _parse_type(int(key))
        # "HairStyle", "Hair Style" and "HAIR_STYLE" all name the same member.
        folded = key.replace(" ", "").replace("_", "").upper()
        for member in ItemType:
            if member.name.replace("_", "") == folded:
                return member
        raise ValueError(f"Invalid item type: {raw!r}")
    if raw is None:
        return ItemType.UNKNOWN
    raise ValueError(f"Invalid item type: {raw!r}")


def _str(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _str_list(obj: dict[str, Any], key: str) -> list[str]:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings")
    return list(value)


def _booth_id(obj: dict[str, Any]) -> int:
    value = obj.get("BoothId", NO_BOOTH_ID)
    if value is None:
        return NO_BOOTH_ID
    if isinstance(value, bool):
        raise ValueError(f"BoothId must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"BoothId must be an integer, got {value!r}") from None


def item_from_json(obj: Any) -> Item:
    if not isinstance(obj, dict):
        raise ValueError(f"Item entry must be an object, got {type(obj).__name__}")
    item_path = _str(obj, "ItemPath")
    if not item_path:
        raise ValueError("Item entry is missing ItemPath")
    return Item(
        title=_str(obj, "Title"),
        author_name=_str(obj, "AuthorName"),
        item_path=item_path,
        type=_parse_type(obj.get("Type")),
        author_image_path=_str(obj, "AuthorImageFilePath"),
        image_path=_str(obj, "ImagePath"),
        custom_category=_str(obj, "CustomCategory"),
        supported_avatars=_str_list(obj, "SupportedAvatar"),
        booth_id=_booth_id(obj),
        material_path=_str(obj, "MaterialPath"),
    )


def item_to_json(item: Item) -> dict[str, Any]:
    return {
        "Title": item.title,
        "AuthorName": item.author_name,
        "AuthorImageFilePath": item.author_image_path,
        "ImagePath": item.image_path,
        "Type": int(item.type),
        "CustomCategory": item.custom_category,
        "SupportedAvatar": list(item.supported_avatars),
        "BoothId": item.booth_id,
        "ItemPath": item.item_path,
        "MaterialPath": item.material_path,
    }


def group_from_json(obj: Any) -> CommonAvatarGroup:
    if not isinstance(obj, dict):
        raise ValueError(f"Common avatar entry must be an object, got {type(obj).__name__}")
    name = _str(obj, "Name")
    if not name.strip():
        raise ValueError("Common avatar entry is missing Name")
    return CommonAvatarGroup(name=name, avatars=_str_list(obj, "Avatars"))


def group_to_json(group: CommonAvatarGroup) -> dict[str, Any]:
    return {"Name": group.name, "Avatars": list(group.avatars)}


# -- Files ---------------------------------------------------------------------------


def _read_json_list(path: Path) -> list[Any] | None:
    if not path.is_file():
        return None
    text = path.read_text(encoding="utf-8-sig")
    if not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path.name} is not valid JSON: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must contain a JSON list")
    return data


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=4), encoding="utf-8")


class CatalogFiles:
    """The data files of one catalog directory."""

    __slots__ = ("data_dir",)

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    @property
    def items_path(self) -> Path:
        return self.data_dir / ITEMS_FILE

    @property
    def common_avatars_path(self) -> Path:
        return self.data_dir / COMMON_AVATARS_FILE

    @property
    def custom_categories_path(self) -> Path:
        return self.data_dir / CUSTOM_CATEGORIES_FILE

    def existing_files(self) -> list[Path]:
        return [self.data_dir / name for name in DATA_FILES if (self.data_dir / name).is_file()]

    def load_items(self) -> list[Item]:
        raw = _read_json_list(self.items_path)
        if raw is None:
            logger.info("No %s in %s, starting empty", ITEMS_FILE, self.data_dir)
            return []
        items = [item_from_json(obj) for obj in raw]
        logger.debug("Loaded %d item(s) from %s", len(items), self.items_path)
        return items

    def save_items(self, items: list[Item] | tuple[Item, ...]) -> None:
        _write_json(self.items_path, [item_to_json(item) for item in items])
        logger.debug("Saved %d item(s) to %s", len(items), self.items_path)

    def load_common_groups(self) -> list[CommonAvatarGroup]:
        raw = _read_json_list(self.common_avatars_path)
        if raw is None:
            return []
        return [group_from_json(obj) for obj in raw]

    def save_common_groups(self, groups: list[CommonAvatarGroup] | tuple[CommonAvatarGroup, ...]) -> None:
        _write_json(self.common_avatars_path, [group_to_json(g) for g in groups])

    def load_custom_categories(self) -> list[str]:
        path = self.custom_categories_path
        if not path.is_file():
            return []
        labels: list[str] = []
        for line in path.read_text(encoding="utf-8-sig").splitlines():
            label = line.strip()
            if label and label not in labels:
                labels.append(label)
        return labels

    def save_custom_categories(self, labels: list[str] | tuple[str, ...]) -> None:
        path = self.custom_categories_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{label}\n" for label in labels), encoding="utf-8")
