"""In-memory catalog of items, common avatar groups, and custom categories.

The store is the single owner of these collections. Every mutation that
can leave another entity pointing at a stale item path (rename, delete)
runs its reference repair inside the same method call, so list building
never observes a half-updated catalog.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from avatar_explorer.models.constants import ItemType
from avatar_explorer.models.item import Author, CommonAvatarGroup, Item


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """What a delete removed, for status messages and view refresh."""

    item: Item
    supported_refs_removed: int = 0
    group_refs_removed: int = 0


class CatalogStore:
    """Source of truth queried by the resolver, matcher, and list builder."""

    __slots__ = ("_items", "_groups", "_custom_categories")

    def __init__(
        self,
        items: Iterable[Item] = (),
        common_groups: Iterable[CommonAvatarGroup] = (),
        custom_categories: Iterable[str] = (),
    ) -> None:
        self._items: list[Item] = []
        self._groups: list[CommonAvatarGroup] = []
        self._custom_categories: list[str] = []
        for item in items:
            self.add_item(item)
        for group in common_groups:
            self.set_group(group.name, group.avatars)
        for label in custom_categories:
            self.add_custom_category(label)

    # -- Items --------------------------------------------------------------

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def find_item(self, item_path: str | None) -> Item | None:
        if not item_path:
            return None
        for item in self._items:
            if item.item_path == item_path:
                return item
        return None

    def get_item(self, item_path: str) -> Item:
        item = self.find_item(item_path)
        if item is None:
            raise KeyError(item_path)
        return item

    def avatars(self) -> list[Item]:
        return [item for item in self._items if item.type == ItemType.AVATAR]

    def avatar_name(self, item_path: str | None) -> str | None:
        """Display name of the avatar at ``item_path``, if it still exists."""
        item = self.find_item(item_path)
        if item is None:
            return None
        return item.title

    def add_item(self, item: Item) -> None:
        if not item.item_path:
            raise ValueError("Item path must not be empty")
        if self.find_item(item.item_path) is not None:
            raise ValueError(f"Duplicate item path: {item.item_path!r}")
        self._items.append(item)

    def apply_edit(self, previous_path: str, edited: Item) -> int:
        """Replace the item stored at ``previous_path`` with ``edited``.

        When the edit moved the item to a new path, every supported-avatar
        list and common group is rewritten to the new path. Returns the
        number of references rewritten.
        """
        index = self._index_of(previous_path)
        if edited.item_path != previous_path and self.find_item(edited.item_path) is not None:
            raise ValueError(f"Duplicate item path: {edited.item_path!r}")
        self._items[index] = edited
        if edited.item_path == previous_path:
            return 0
        return self.rename_item_path(previous_path, edited.item_path)

    def rename_item_path(self, old_path: str, new_path: str) -> int:
        rewritten = 0
        for item in self._items:
            if old_path in item.supported_avatars:
                item.supported_avatars = _dedupe(
                    new_path if p == old_path else p for p in item.supported_avatars
                )
                rewritten += 1
        for group in self._groups:
            if old_path in group.avatars:
                group.avatars = _dedupe(
                    new_path if p == old_path else p for p in group.avatars
                )
                rewritten += 1
        return rewritten

    def delete_item(
        self,
        item_path: str,
        *,
        strip_supported_avatars: bool = False,
        strip_from_groups: bool = False,
    ) -> DeletionResult:
        """Remove an item; optionally strip references to it.

        Declined strips leave dangling references behind. Those are
        tolerated everywhere: the resolver treats them as "not supported".
        """
        index = self._index_of(item_path)
        item = self._items.pop(index)

        supported_removed = 0
        if strip_supported_avatars:
            supported_removed = self.remove_supported_avatar(item_path)
        group_removed = 0
        if strip_from_groups:
            group_removed = self.remove_avatar_from_groups(item_path)
        return DeletionResult(item, supported_removed, group_removed)

    def remove_supported_avatar(self, avatar_path: str) -> int:
        removed = 0
        for item in self._items:
            if avatar_path in item.supported_avatars:
                item.supported_avatars = [p for p in item.supported_avatars if p != avatar_path]
                removed += 1
        return removed

    def set_image_path(self, item_path: str, image_path: str) -> None:
        self.get_item(item_path).image_path = image_path

    def set_author_image(self, author_name: str, image_path: str) -> int:
        changed = 0
        for item in self._items:
            if item.author_name == author_name:
                item.author_image_path = image_path
                changed += 1
        if changed == 0:
            raise KeyError(author_name)
        return changed

    def fix_supported_avatar_paths(self) -> int:
        """Rewrite legacy avatar titles in supported-avatar lists to paths."""
        paths = {item.item_path for item in self._items}
        path_by_title: dict[str, str] = {}
        for avatar in self.avatars():
            path_by_title.setdefault(avatar.title, avatar.item_path)

        fixed = 0
        for item in self._items:
            updated: list[str] = []
            changed = False
            for entry in item.supported_avatars:
                if entry not in paths and entry in path_by_title:
                    updated.append(path_by_title[entry])
                    changed = True
                else:
                    updated.append(entry)
            if changed:
                item.supported_avatars = _dedupe(updated)
                fixed += 1
        return fixed

    # -- Authors ------------------------------------------------------------

    def authors(self) -> list[Author]:
        """Authors grouped by name (first image wins), sorted by name."""
        seen: dict[str, Author] = {}
        for item in self._items:
            if item.author_name in seen:
                continue
            seen[item.author_name] = Author(item.author_name, item.author_image_path)
        return sorted(seen.values(), key=lambda a: a.author_name)

    def find_author(self, author_name: str) -> Author | None:
        for item in self._items:
            if item.author_name == author_name:
                return Author(item.author_name, item.author_image_path)
        return None

    def author_item_count(self, author_name: str) -> int:
        return sum(1 for item in self._items if item.author_name == author_name)

    # -- Common avatar groups ------------------------------------------------

    @property
    def common_groups(self) -> tuple[CommonAvatarGroup, ...]:
        return tuple(self._groups)

    def group_names(self) -> list[str]:
        return [group.name for group in self._groups]

    def find_group(self, name: str | None) -> CommonAvatarGroup | None:
        if name is None or not name.strip():
            return None
        for group in self._groups:
            if group.name == name:
                return group
        return None

    def set_group(self, name: str, avatars: Iterable[str]) -> CommonAvatarGroup:
        """Create the named group or replace its members."""
        if not name or not name.strip():
            raise ValueError("Common avatar group name must not be empty")
        members = _dedupe(p for p in avatars if p and p.strip())
        group = self.find_group(name)
        if group is None:
            group = CommonAvatarGroup(name=name, avatars=members)
            self._groups.append(group)
        else:
            group.avatars = members
        return group

    def delete_group(self, name: str) -> CommonAvatarGroup:
        group = self.find_group(name)
        if group is None:
            raise KeyError(name)
        self._groups.remove(group)
        return group

    def groups_containing(self, avatar_path: str) -> list[CommonAvatarGroup]:
        return [group for group in self._groups if avatar_path in group.avatars]

    def remove_avatar_from_groups(self, avatar_path: str) -> int:
        removed = 0
        for group in self._groups:
            if avatar_path in group.avatars:
                group.avatars = [p for p in group.avatars if p != avatar_path]
                removed += 1
        return removed

    # -- Custom categories ----------------------------------------------------

    @property
    def custom_categories(self) -> tuple[str, ...]:
        return tuple(self._custom_categories)

    def add_custom_category(self, label: str) -> None:
        label = label.strip()
        if not label:
            raise ValueError("Custom category must not be empty")
        if label in self._custom_categories:
            raise ValueError(f"Duplicate custom category: {label!r}")
        self._custom_categories.append(label)

    def remove_custom_category(self, label: str) -> None:
        if label not in self._custom_categories:
            raise KeyError(label)
        self._custom_categories.remove(label)

    # -- Internal -------------------------------------------------------------

    def _index_of(self, item_path: str) -> int:
        for index, item in enumerate(self._items):
            if item.item_path == item_path:
                return index
        raise KeyError(item_path)


def _dedupe(paths: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(paths))
