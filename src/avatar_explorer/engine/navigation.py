"""Navigation state machine for the browse hierarchy.

The current location is a tagged union with one variant per browse mode.
Each variant carries only the fields that mode allows, so e.g. an author
and an avatar can never both be selected:

    EmptyPath                                   nothing selected
    AvatarPath(title, path) / category / item / subfolder
    AuthorPath(author)      / category / item / subfolder
    CategoryPath(category)  / item / subfolder

Forward transitions go one level deeper and always exit search. ``back``
unwinds exactly one level, most specific first. A search overlay sits on
top of the path without changing it; the first ``back`` after a search
only removes the overlay.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.engine.commands import (
    Back,
    NavigationCommand,
    OpenSearchResult,
    SelectAuthor,
    SelectAvatar,
    SelectCategory,
    SelectItem,
    SelectRootCategory,
    SelectSubfolder,
    SelectWildcardAvatar,
)
from avatar_explorer.engine.search_filter import SearchFilter, describe_filter, parse_search_filter
from avatar_explorer.models.constants import SUBFOLDER_CATEGORIES, WILDCARD_AVATAR, ItemType
from avatar_explorer.models.item import Author, Item, ItemFolderInfo
from avatar_explorer.models.translations import Translator
from avatar_explorer.parser.folder_scanner import scan_item_folder


class Window(Enum):
    """Which list was produced last."""
    NOTHING = "nothing"
    ITEM_CATEGORY_LIST = "item-category-list"
    ITEM_LIST = "item-list"
    ITEM_FOLDER_CATEGORY_LIST = "item-folder-category-list"
    ITEM_FOLDER_ITEMS_LIST = "item-folder-items-list"


FOLDER_WINDOWS = frozenset({Window.ITEM_FOLDER_CATEGORY_LIST, Window.ITEM_FOLDER_ITEMS_LIST})


class BrowseMode(Enum):
    AVATAR = "avatar"
    AUTHOR = "author"
    CATEGORY = "category"


class ItemFolderMissingError(FileNotFoundError):
    """The selected item's folder no longer exists on disk."""

    def __init__(self, item_path: str) -> None:
        super().__init__(f"Item folder not found: {item_path}")
        self.item_path = item_path


# ---------------------------------------------------------------------------
# Path variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EmptyPath:
    pass


@dataclass(frozen=True, slots=True)
class AvatarPath:
    avatar_title: str               # WILDCARD_AVATAR for "any avatar"
    avatar_path: str | None         # None for the wildcard
    category: ItemType = ItemType.UNKNOWN
    custom_category: str | None = None
    item_path: str | None = None
    subfolder: str | None = None

    @property
    def is_wildcard(self) -> bool:
        return self.avatar_path is None


@dataclass(frozen=True, slots=True)
class AuthorPath:
    author: Author
    category: ItemType = ItemType.UNKNOWN
    custom_category: str | None = None
    item_path: str | None = None
    subfolder: str | None = None


@dataclass(frozen=True, slots=True)
class CategoryPath:
    category: ItemType
    custom_category: str | None = None
    item_path: str | None = None
    subfolder: str | None = None


NavigationPath = EmptyPath | AvatarPath | AuthorPath | CategoryPath


def _remove_format(text: str) -> str:
    return text.replace("\r", "").replace("\n", "")


# ---------------------------------------------------------------------------
# Navigator
# ---------------------------------------------------------------------------


class Navigator:
    """Tracks where the user is and what Back does."""

    __slots__ = (
        "_store",
        "_scan_folder",
        "_folder_exists",
        "path",
        "window",
        "folder_info",
        "search_filter",
    )

    def __init__(
        self,
        store: CatalogStore,
        scan_folder: Callable[[str, str], ItemFolderInfo] = scan_item_folder,
        folder_exists: Callable[[str], bool] = lambda p: Path(p).is_dir(),
    ) -> None:
        self._store = store
        self._scan_folder = scan_folder
        self._folder_exists = folder_exists
        self.path: NavigationPath = EmptyPath()
        self.window = Window.NOTHING
        self.folder_info: ItemFolderInfo | None = None
        self.search_filter: SearchFilter | None = None

    # -- Queries ------------------------------------------------------------

    @property
    def mode(self) -> BrowseMode | None:
        if isinstance(self.path, AvatarPath):
            return BrowseMode.AVATAR
        if isinstance(self.path, AuthorPath):
            return BrowseMode.AUTHOR
        if isinstance(self.path, CategoryPath):
            return BrowseMode.CATEGORY
        return None

    @property
    def is_empty(self) -> bool:
        return isinstance(self.path, EmptyPath)

    @property
    def searching(self) -> bool:
        return self.search_filter is not None

    @property
    def can_go_back(self) -> bool:
        return self.searching or not self.is_empty

    @property
    def selected_avatar_title(self) -> str | None:
        return self.path.avatar_title if isinstance(self.path, AvatarPath) else None

    @property
    def selected_avatar_path(self) -> str | None:
        return self.path.avatar_path if isinstance(self.path, AvatarPath) else None

    @property
    def selected_author(self) -> Author | None:
        return self.path.author if isinstance(self.path, AuthorPath) else None

    @property
    def selected_category(self) -> ItemType:
        if isinstance(self.path, EmptyPath):
            return ItemType.UNKNOWN
        return self.path.category

    @property
    def selected_custom_category(self) -> str | None:
        if isinstance(self.path, EmptyPath):
            return None
        return self.path.custom_category

    @property
    def selected_item_path(self) -> str | None:
        if isinstance(self.path, EmptyPath):
            return None
        return self.path.item_path

    @property
    def selected_item(self) -> Item | None:
        return self._store.find_item(self.selected_item_path)

    @property
    def selected_subfolder(self) -> str | None:
        if isinstance(self.path, EmptyPath):
            return None
        return self.path.subfolder

    # -- Dispatch -----------------------------------------------------------

    def dispatch(self, command: NavigationCommand) -> bool:
        """Apply a command. Returns False only when Back had nothing to undo."""
        if isinstance(command, Back):
            return self.back()
        if isinstance(command, SelectAvatar):
            self.select_avatar(command.item_path)
        elif isinstance(command, SelectWildcardAvatar):
            self.select_wildcard_avatar()
        elif isinstance(command, SelectAuthor):
            self.select_author(command.author_name)
        elif isinstance(command, SelectRootCategory):
            self.select_root_category(command.category, command.custom_category)
        elif isinstance(command, SelectCategory):
            self.select_category(command.category, command.custom_category)
        elif isinstance(command, SelectItem):
            self.select_item(command.item_path)
        elif isinstance(command, SelectSubfolder):
            self.select_subfolder(command.label)
        elif isinstance(command, OpenSearchResult):
            self.open_search_result(command.item_path)
        else:
            raise TypeError(f"Unsupported navigation command: {command!r}")
        return True

    # -- Forward transitions -------------------------------------------------

    def select_avatar(self, item_path: str) -> None:
        avatar = self._store.get_item(item_path)
        self._enter(AvatarPath(avatar.title, avatar.item_path), Window.ITEM_CATEGORY_LIST)

    def select_wildcard_avatar(self) -> None:
        self._enter(AvatarPath(WILDCARD_AVATAR, None), Window.ITEM_CATEGORY_LIST)

    def select_author(self, author_name: str) -> None:
        author = self._store.find_author(author_name)
        if author is None:
            raise KeyError(author_name)
        self._enter(AuthorPath(author), Window.ITEM_CATEGORY_LIST)

    def select_root_category(self, category: ItemType, custom_category: str | None = None) -> None:
        self._enter(
            CategoryPath(category, _custom_for(category, custom_category)),
            Window.ITEM_LIST,
        )

    def select_category(self, category: ItemType, custom_category: str | None = None) -> None:
        if not isinstance(self.path, (AvatarPath, AuthorPath)):
            raise ValueError("Select an avatar or author before choosing a category")
        self._enter(
            replace(
                self.path,
                category=category,
                custom_category=_custom_for(category, custom_category),
                item_path=None,
                subfolder=None,
            ),
            Window.ITEM_LIST,
        )

    def select_item(self, item_path: str) -> None:
        if isinstance(self.path, EmptyPath):
            raise ValueError("Select a browse root before choosing an item")
        item = self._require_folder(item_path)
        folder_info = self._scan_folder(item.item_path, item.material_path)
        self._enter(
            replace(self.path, item_path=item.item_path, subfolder=None),
            Window.ITEM_FOLDER_CATEGORY_LIST,
        )
        self.folder_info = folder_info

    def select_subfolder(self, label: str) -> None:
        if self.selected_item_path is None:
            raise ValueError("Select an item before choosing a subfolder")
        if label not in SUBFOLDER_CATEGORIES:
            raise ValueError(f"Unknown subfolder category: {label!r}")
        folder_info = self.folder_info
        self._enter(replace(self.path, subfolder=label), Window.ITEM_FOLDER_ITEMS_LIST)
        self.folder_info = folder_info

    def open_search_result(self, item_path: str) -> None:
        """Jump from a search hit straight into the item's folder view."""
        item = self._require_folder(item_path)
        avatar_path = item.supported_avatars[0] if item.supported_avatars else None
        avatar_name = self._store.avatar_name(avatar_path)
        if avatar_name is None:
            path = AvatarPath(WILDCARD_AVATAR, None)
        else:
            path = AvatarPath(avatar_name, avatar_path)
        folder_info = self._scan_folder(item.item_path, item.material_path)
        self._enter(
            replace(
                path,
                category=item.type,
                custom_category=_custom_for(item.type, item.custom_category),
                item_path=item.item_path,
            ),
            Window.ITEM_FOLDER_CATEGORY_LIST,
        )
        self.folder_info = folder_info

    # -- Back -----------------------------------------------------------------

    def back(self) -> bool:
        """Unwind one level. Returns False if there was nothing to undo."""
        if self.searching:
            self.search_filter = None
            self.window = self._window_for_depth()
            if self.window == Window.NOTHING:
                self.reset()
            return True

        path = self.path
        if isinstance(path, EmptyPath):
            return False

        if path.subfolder is not None:
            self.path = replace(path, subfolder=None)
            self.window = Window.ITEM_FOLDER_CATEGORY_LIST
            return True

        if path.item_path is not None:
            self.path = replace(path, item_path=None)
            self.folder_info = None
            self.window = Window.ITEM_LIST
            return True

        if isinstance(path, (AvatarPath, AuthorPath)) and path.category != ItemType.UNKNOWN:
            self.path = replace(path, category=ItemType.UNKNOWN, custom_category=None)
            self.window = Window.ITEM_CATEGORY_LIST
            return True

        # Avatar/author root (wildcard included) or a root category.
        self.reset()
        return True

    def reset(self) -> None:
        self.path = EmptyPath()
        self.window = Window.NOTHING
        self.folder_info = None
        self.search_filter = None

    # -- Search overlay ---------------------------------------------------------

    def search(self, query: str) -> SearchFilter | None:
        """Enter search mode, or leave it when the query is empty."""
        if not query:
            self.clear_search()
            return None
        self.search_filter = parse_search_filter(query)
        return self.search_filter

    def clear_search(self) -> None:
        self.search_filter = None
        self.window = self._window_for_depth()

    @property
    def searching_in_folder(self) -> bool:
        return self.searching and self.window in FOLDER_WINDOWS

    # -- Catalog change hooks ---------------------------------------------------

    def on_item_deleted(self, item_path: str) -> bool:
        """Drop references to a deleted item. Returns True if state changed."""
        path = self.path
        if isinstance(path, AvatarPath) and path.avatar_path == item_path:
            self.reset()
            return True
        if not isinstance(path, EmptyPath) and path.item_path == item_path:
            was_in_folder = self.window in FOLDER_WINDOWS
            self.path = replace(path, item_path=None, subfolder=None)
            self.folder_info = None
            if was_in_folder:
                self.window = Window.ITEM_LIST
                self.search_filter = None
            return True
        return False

    def on_item_edited(self, previous_path: str, item: Item) -> bool:
        """Follow an edited item's new title and path."""
        path = self.path
        changed = False
        if isinstance(path, AvatarPath) and path.avatar_path == previous_path:
            path = replace(path, avatar_title=item.title, avatar_path=item.item_path)
            changed = True
        if not isinstance(path, EmptyPath) and path.item_path == previous_path:
            path = replace(path, item_path=item.item_path)
            changed = True
        self.path = path
        return changed

    # -- Breadcrumb -------------------------------------------------------------

    def breadcrumb(self, translator: Translator) -> str:
        if self.search_filter is not None:
            return describe_filter(self.search_filter, translator)

        path = self.path
        if isinstance(path, EmptyPath):
            return translator.translate("The current path is shown here")

        segments: list[str] = []
        if isinstance(path, AvatarPath):
            segments.append(_remove_format(path.avatar_title))
        elif isinstance(path, AuthorPath):
            segments.append(_remove_format(path.author.author_name))

        if path.category != ItemType.UNKNOWN:
            segments.append(translator.category_name(path.category, path.custom_category))
        else:
            return " / ".join(segments)

        item = self.selected_item
        if path.item_path is None or item is None:
            return " / ".join(segments)
        segments.append(_remove_format(item.title))

        if path.subfolder is not None:
            segments.append(translator.translate(path.subfolder))
        return " / ".join(segments)

    # -- Internal -----------------------------------------------------------------

    def _enter(self, path: NavigationPath, window: Window) -> None:
        self.path = path
        self.window = window
        self.folder_info = None
        self.search_filter = None

    def _require_folder(self, item_path: str) -> Item:
        item = self._store.get_item(item_path)
        if not self._folder_exists(item.item_path):
            raise ItemFolderMissingError(item.item_path)
        return item

    def _window_for_depth(self) -> Window:
        path = self.path
        if isinstance(path, EmptyPath):
            return Window.NOTHING
        if path.subfolder is not None:
            return Window.ITEM_FOLDER_ITEMS_LIST
        if path.item_path is not None:
            return Window.ITEM_FOLDER_CATEGORY_LIST
        if path.category != ItemType.UNKNOWN:
            return Window.ITEM_LIST
        return Window.ITEM_CATEGORY_LIST


def _custom_for(category: ItemType, custom_category: str | None) -> str | None:
    return custom_category if category == ItemType.CUSTOM else None
