"""Catalog data models: items, common avatar groups, authors, folder files.

Items reference each other only through ``item_path``. Titles are
user-editable and not unique, so nothing joins on them.
"""

from dataclasses import dataclass, field

from avatar_explorer.models.constants import (
    NO_BOOTH_ID,
    SUBFOLDER_CATEGORIES,
    ItemType,
)


@dataclass(slots=True)
class Item:
    """A cataloged avatar or add-on asset."""
    title: str
    author_name: str
    item_path: str                # unique identity key (folder on disk)
    type: ItemType = ItemType.UNKNOWN
    author_image_path: str = ""
    image_path: str = ""
    custom_category: str = ""     # only meaningful when type is CUSTOM
    supported_avatars: list[str] = field(default_factory=list)  # avatar item paths; empty = all
    booth_id: int = NO_BOOTH_ID
    material_path: str = ""

    @property
    def has_booth_id(self) -> bool:
        return self.booth_id != NO_BOOTH_ID

    @property
    def supports_all_avatars(self) -> bool:
        return not self.supported_avatars

    def in_category(self, category: ItemType, custom_category: str | None) -> bool:
        """Type equality, plus custom label equality for CUSTOM."""
        if self.type != category:
            return False
        if category == ItemType.CUSTOM:
            return self.custom_category == (custom_category or "")
        return True


@dataclass(slots=True)
class CommonAvatarGroup:
    """Named set of avatar item paths that share a body."""
    name: str
    avatars: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Author:
    """Derived from items; not stored."""
    author_name: str
    author_image_path: str = ""


@dataclass(frozen=True, slots=True)
class FileData:
    """A file found inside an item folder."""
    file_name: str
    file_path: str
    file_extension: str   # lower-case, with leading dot


@dataclass(slots=True)
class ItemFolderInfo:
    """Files of one item folder, grouped by subfolder label."""
    files_by_category: dict[str, list[FileData]] = field(
        default_factory=lambda: {label: [] for label in SUBFOLDER_CATEGORIES}
    )

    def add(self, category: str, file: FileData) -> None:
        if category not in self.files_by_category:
            raise ValueError(f"Unknown subfolder category: {category!r}")
        self.files_by_category[category].append(file)

    def item_count(self, category: str) -> int:
        return len(self.files_by_category.get(category, ()))

    def items(self, category: str) -> list[FileData]:
        return list(self.files_by_category.get(category, ()))

    def all_items(self) -> list[FileData]:
        out: list[FileData] = []
        for label in SUBFOLDER_CATEGORIES:
            out.extend(self.files_by_category.get(label, ()))
        return out
