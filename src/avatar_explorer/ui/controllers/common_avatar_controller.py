"""Controller for the common-avatar group editor."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.models.translations import Translator
from avatar_explorer.parser.catalog_files import CatalogFiles


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AvatarChoice:
    """One avatar in the editor, with its membership in the open group."""

    item_path: str
    title: str
    subtitle: str
    image_path: str
    selected: bool


@dataclass(slots=True)
class CommonAvatarController:
    """Owns group add/edit/delete. Saves the group file after each change."""

    store: CatalogStore
    files: CatalogFiles
    translator: Translator
    on_change: Callable[[], None] | None = None

    def group_names(self) -> list[str]:
        return self.store.group_names()

    def avatar_choices(self, group_name: str | None) -> list[AvatarChoice]:
        group = self.store.find_group(group_name)
        members = set(group.avatars) if group is not None else set()
        author_label = self.translator.translate("Author: ")
        return [
            AvatarChoice(
                item_path=avatar.item_path,
                title=avatar.title,
                subtitle=author_label + avatar.author_name,
                image_path=avatar.image_path,
                selected=avatar.item_path in members,
            )
            for avatar in self.store.avatars()
        ]

    def save_group(self, name: str, selected_paths: list[str]) -> tuple[bool, str | None]:
        """Create the group, or replace the members of an existing one."""
        if not name.strip():
            return False, "Enter a common avatar name."
        self.store.set_group(name, selected_paths)
        return self._save(self.translator.translate("Common avatar saved."))

    def delete_group(self, name: str) -> tuple[bool, str | None]:
        try:
            self.store.delete_group(name)
        except KeyError:
            return False, f"Unknown common avatar: {name!r}"
        return self._save(self.translator.translate("Common avatar deleted."))

    def _save(self, message: str) -> tuple[bool, str | None]:
        try:
            self.files.save_common_groups(self.store.common_groups)
        except OSError:
            logger.exception("Saving common avatars failed")
            return False, self.translator.translate("Could not save data.")
        if self.on_change is not None:
            self.on_change()
        return True, message
