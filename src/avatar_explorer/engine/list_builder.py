"""Row lists for every explorer view.

This module intentionally contains no GUI code. It turns the catalog, the
navigation state, and an optional search filter into ordered row
descriptors that any UI toolkit can render one per line.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.engine.commands import (
    OpenFile,
    OpenSearchResult,
    RowCommand,
    SelectAuthor,
    SelectAvatar,
    SelectCategory,
    SelectItem,
    SelectRootCategory,
    SelectSubfolder,
    SelectWildcardAvatar,
)
from avatar_explorer.engine.navigation import (
    AuthorPath,
    AvatarPath,
    Navigator,
    Window,
)
from avatar_explorer.engine.search_filter import (
    SearchFilter,
    match_files,
    match_items,
    result_text,
)
from avatar_explorer.engine.support_resolver import is_visible_under_avatar, resolve_support
from avatar_explorer.models.constants import (
    BROWSE_CATEGORIES,
    IMAGE_EXTENSIONS,
    SUBFOLDER_CATEGORIES,
    WILDCARD_AVATAR,
    ItemType,
    SortKey,
    booth_url,
)
from avatar_explorer.models.item import FileData, Item, ItemFolderInfo
from avatar_explorer.models.translations import Translator


ActionKind = Literal[
    "copy_booth_link",
    "open_booth_link",
    "search_author",
    "change_thumbnail",
    "change_author_image",
    "edit_item",
    "delete_item",
    "open_folder",
    "reveal_file",
]


@dataclass(frozen=True, slots=True)
class RowAction:
    """Context-menu entry. ``payload`` is a URL, query, or path."""

    kind: ActionKind
    label: str
    payload: str


@dataclass(frozen=True, slots=True)
class Row:
    """One rendered line: thumbnail, title, subtitle, click command."""

    title: str
    subtitle: str
    command: RowCommand | None
    thumbnail_path: str = ""
    tooltip: str = ""
    actions: tuple[RowAction, ...] = ()


@dataclass(frozen=True, slots=True)
class ExplorerView:
    """Everything the right-hand explorer pane shows."""

    window: Window
    rows: tuple[Row, ...]
    breadcrumb: str
    search_result_text: str = ""
    searching: bool = False


def _sort_value(item: Item, sort_key: SortKey) -> str:
    if sort_key == SortKey.AUTHOR:
        return item.author_name
    return item.title


def sort_items(items: list[Item], sort_key: SortKey) -> list[Item]:
    """Stable sort, so ties keep catalog order."""
    return sorted(items, key=lambda item: _sort_value(item, sort_key))


def author_search_query(author_name: str) -> str:
    return f'Author="{author_name}"'


class ListBuilder:
    """Builds row lists from the store for a navigator's current state."""

    __slots__ = ("_store", "translator", "_folder_exists")

    def __init__(
        self,
        store: CatalogStore,
        translator: Translator,
        folder_exists: Callable[[str], bool] = lambda p: Path(p).is_dir(),
    ) -> None:
        self._store = store
        self.translator = translator
        self._folder_exists = folder_exists

    # -- Left-hand browse lists ------------------------------------------------

    def avatar_rows(self, sort_key: SortKey = SortKey.TITLE, include_wildcard: bool = True) -> list[Row]:
        t = self.translator.translate
        rows: list[Row] = []
        if include_wildcard:
            rows.append(Row(
                title=WILDCARD_AVATAR,
                subtitle=t("Any avatar"),
                command=SelectWildcardAvatar(),
            ))
        for item in sort_items(self._store.avatars(), sort_key):
            rows.append(Row(
                title=item.title,
                subtitle=t("Author: ") + item.author_name,
                command=SelectAvatar(item.item_path),
                thumbnail_path=item.image_path,
                tooltip=item.title,
                actions=self._item_actions(item, include_open_folder=False),
            ))
        return rows

    def author_rows(self) -> list[Row]:
        t = self.translator.translate
        rows: list[Row] = []
        for author in self._store.authors():
            count = self._store.author_item_count(author.author_name)
            rows.append(Row(
                title=author.author_name,
                subtitle=f"{count}{t(' items')}",
                command=SelectAuthor(author.author_name),
                thumbnail_path=author.author_image_path,
                tooltip=author.author_name,
                actions=(
                    RowAction("change_author_image", t("Change thumbnail"), author.author_name),
                ),
            ))
        return rows

    def root_category_rows(self) -> list[Row]:
        """Every category with its catalog-wide count, empty ones included."""
        t = self.translator.translate
        items = self._store.items
        rows: list[Row] = []
        for category in BROWSE_CATEGORIES:
            count = sum(1 for item in items if item.type == category)
            rows.append(Row(
                title=self.translator.category_name(category),
                subtitle=f"{count}{t(' items')}",
                command=SelectRootCategory(category),
            ))
        for label in self._store.custom_categories:
            count = sum(1 for item in items if item.in_category(ItemType.CUSTOM, label))
            rows.append(Row(
                title=label,
                subtitle=f"{count}{t(' items')}",
                command=SelectRootCategory(ItemType.CUSTOM, label),
            ))
        return rows

    # -- Explorer lists ----------------------------------------------------------

    def category_rows(self, navigator: Navigator) -> list[Row]:
        """Categories under the selected avatar/author; empty ones are omitted."""
        t = self.translator.translate
        visible = self._visible_predicate(navigator)
        candidates = [item for item in self._store.items if visible(item)]

        buckets: list[tuple[ItemType, str | None, str]] = [
            (category, None, self.translator.category_name(category))
            for category in BROWSE_CATEGORIES
        ]
        buckets.extend(
            (ItemType.CUSTOM, label, label) for label in self._store.custom_categories
        )

        rows: list[Row] = []
        for category, custom, title in buckets:
            count = sum(1 for item in candidates if item.in_category(category, custom))
            if count == 0:
                continue
            rows.append(Row(
                title=title,
                subtitle=f"{count}{t(' items')}",
                command=SelectCategory(category, custom),
            ))
        return rows

    def visible_items(self, navigator: Navigator, sort_key: SortKey = SortKey.TITLE) -> list[Item]:
        category = navigator.selected_category
        custom = navigator.selected_custom_category
        visible = self._visible_predicate(navigator)
        items = [
            item for item in self._store.items
            if item.in_category(category, custom) and visible(item)
        ]
        return sort_items(items, sort_key)

    def item_rows(self, navigator: Navigator, sort_key: SortKey = SortKey.TITLE) -> list[Row]:
        t = self.translator.translate
        selected_path = navigator.selected_avatar_path
        groups = self._store.common_groups
        rows: list[Row] = []
        for item in self.visible_items(navigator, sort_key):
            subtitle = t("Author: ") + item.author_name
            if isinstance(navigator.path, AvatarPath):
                support = resolve_support(item, groups, selected_path)
                if (
                    support.only_common
                    and support.common_group_name
                    and selected_path not in item.supported_avatars
                ):
                    subtitle += "\n" + t("Common avatar: ") + support.common_group_name
            rows.append(Row(
                title=item.title,
                subtitle=subtitle,
                command=SelectItem(item.item_path),
                thumbnail_path=item.image_path,
                tooltip=item.title,
                actions=self._item_actions(item),
            ))
        return rows

    def subfolder_rows(self, folder_info: ItemFolderInfo | None) -> list[Row]:
        if folder_info is None:
            return []
        t = self.translator.translate
        rows: list[Row] = []
        for label in SUBFOLDER_CATEGORIES:
            count = folder_info.item_count(label)
            if count == 0:
                continue
            rows.append(Row(
                title=t(label),
                subtitle=f"{count}{t(' items')}",
                command=SelectSubfolder(label),
            ))
        return rows

    def file_rows(self, files: list[FileData], *, sort_by_name: bool = True) -> list[Row]:
        t = self.translator.translate
        if sort_by_name:
            files = sorted(files, key=lambda f: f.file_name)
        rows: list[Row] = []
        for file in files:
            rows.append(Row(
                title=file.file_name,
                subtitle=file.file_extension.replace(".", "") + t(" file"),
                command=OpenFile(file.file_path),
                thumbnail_path=file.file_path if file.file_extension in IMAGE_EXTENSIONS else "",
                tooltip=file.file_path,
                actions=(RowAction("reveal_file", t("Open file location"), file.file_path),),
            ))
        return rows

    # -- Search ---------------------------------------------------------------------

    def search_item_rows(self, search_filter: SearchFilter) -> tuple[list[Row], str]:
        t = self.translator.translate
        items = self._store.items
        matched = match_items(items, search_filter, self._store, self.translator)
        rows = [
            Row(
                title=item.title,
                subtitle=t("Author: ") + item.author_name,
                command=OpenSearchResult(item.item_path),
                thumbnail_path=item.image_path,
                tooltip=item.title,
                actions=self._item_actions(item),
            )
            for item in matched
        ]
        return rows, result_text(len(matched), len(items), self.translator)

    def search_file_rows(self, navigator: Navigator, search_filter: SearchFilter) -> tuple[list[Row], str]:
        files: list[FileData] = []
        info = navigator.folder_info
        if info is not None:
            if navigator.window == Window.ITEM_FOLDER_ITEMS_LIST and navigator.selected_subfolder:
                files = info.items(navigator.selected_subfolder)
            elif navigator.window == Window.ITEM_FOLDER_CATEGORY_LIST:
                files = info.all_items()
        matched = match_files(files, search_filter)
        rows = self.file_rows(matched, sort_by_name=False)
        return rows, result_text(len(matched), len(files), self.translator, in_folder=True)

    # -- Whole view -------------------------------------------------------------------

    def explorer_view(self, navigator: Navigator, sort_key: SortKey = SortKey.TITLE) -> ExplorerView:
        breadcrumb = navigator.breadcrumb(self.translator)
        search_filter = navigator.search_filter
        if search_filter is not None:
            if navigator.searching_in_folder:
                rows, text = self.search_file_rows(navigator, search_filter)
            else:
                rows, text = self.search_item_rows(search_filter)
            return ExplorerView(navigator.window, tuple(rows), breadcrumb, text, searching=True)

        window = navigator.window
        if window == Window.ITEM_CATEGORY_LIST:
            rows = self.category_rows(navigator)
        elif window == Window.ITEM_LIST:
            rows = self.item_rows(navigator, sort_key)
        elif window == Window.ITEM_FOLDER_CATEGORY_LIST:
            rows = self.subfolder_rows(navigator.folder_info)
        elif window == Window.ITEM_FOLDER_ITEMS_LIST:
            info = navigator.folder_info
            subfolder = navigator.selected_subfolder
            rows = self.file_rows(info.items(subfolder)) if info is not None and subfolder else []
        else:
            rows = []
        return ExplorerView(window, tuple(rows), breadcrumb)

    # -- Internal -----------------------------------------------------------------------

    def _visible_predicate(self, navigator: Navigator) -> Callable[[Item], bool]:
        path = navigator.path
        if isinstance(path, AuthorPath):
            author_name = path.author.author_name
            return lambda item: item.author_name == author_name
        if isinstance(path, AvatarPath):
            groups = self._store.common_groups
            return lambda item: is_visible_under_avatar(
                item, groups, path.avatar_path, wildcard=path.is_wildcard
            )
        return lambda item: True

    def _item_actions(self, item: Item, include_open_folder: bool = True) -> tuple[RowAction, ...]:
        t = self.translator.translate
        actions: list[RowAction] = []
        if include_open_folder and self._folder_exists(item.item_path):
            actions.append(RowAction("open_folder", t("Open folder"), item.item_path))
        if item.has_booth_id:
            url = booth_url(item.booth_id, self.translator.language)
            actions.append(RowAction("copy_booth_link", t("Copy Booth link"), url))
            actions.append(RowAction("open_booth_link", t("Open Booth link"), url))
        actions.append(RowAction(
            "search_author",
            t("Show other items by this author"),
            author_search_query(item.author_name),
        ))
        actions.append(RowAction("change_thumbnail", t("Change thumbnail"), item.item_path))
        actions.append(RowAction("edit_item", t("Edit"), item.item_path))
        actions.append(RowAction("delete_item", t("Delete"), item.item_path))
        return tuple(actions)
