"""Navigation commands emitted by rows and dispatched to the Navigator.

Commands carry identifiers only (item paths, author names, labels), never
live entities, so a command stays valid while the catalog changes under
it.
"""

from dataclasses import dataclass

from avatar_explorer.models.constants import ItemType


@dataclass(frozen=True, slots=True)
class SelectAvatar:
    item_path: str


@dataclass(frozen=True, slots=True)
class SelectWildcardAvatar:
    """Browse items regardless of which avatar they support."""


@dataclass(frozen=True, slots=True)
class SelectAuthor:
    author_name: str


@dataclass(frozen=True, slots=True)
class SelectRootCategory:
    category: ItemType
    custom_category: str | None = None


@dataclass(frozen=True, slots=True)
class SelectCategory:
    category: ItemType
    custom_category: str | None = None


@dataclass(frozen=True, slots=True)
class SelectItem:
    item_path: str


@dataclass(frozen=True, slots=True)
class SelectSubfolder:
    label: str


@dataclass(frozen=True, slots=True)
class OpenSearchResult:
    item_path: str


@dataclass(frozen=True, slots=True)
class OpenFile:
    """Launch a file from an item folder (handled by the front-end)."""
    file_path: str


@dataclass(frozen=True, slots=True)
class Back:
    pass


NavigationCommand = (
    SelectAvatar
    | SelectWildcardAvatar
    | SelectAuthor
    | SelectRootCategory
    | SelectCategory
    | SelectItem
    | SelectSubfolder
    | OpenSearchResult
    | Back
)

RowCommand = NavigationCommand | OpenFile
