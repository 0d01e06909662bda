"""Controller for the explorer page: browsing, searching, and catalog edits."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import logging
from typing import Callable

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.engine.commands import OpenFile, RowCommand
from avatar_explorer.engine.explorer_config import ExplorerConfig
from avatar_explorer.engine.list_builder import ExplorerView, ListBuilder, Row
from avatar_explorer.engine.navigation import ItemFolderMissingError, Navigator
from avatar_explorer.models.constants import ItemType, SortKey
from avatar_explorer.models.item import Item
from avatar_explorer.models.translations import Translator
from avatar_explorer.parser.catalog_files import CatalogFiles
from avatar_explorer.services.backup import BackupStatus, auto_backup, make_backup
from avatar_explorer.services.export import export_csv
from avatar_explorer.ui.state import UiState


logger = logging.getLogger(__name__)

# Yes/no prompt shown to the user; receives the translated question.
Confirm = Callable[[str], bool]


def _always(_question: str) -> bool:
    return True


@dataclass(slots=True)
class ExplorerController:
    """Owns explorer page actions.

    Mutating calls persist immediately and return ``(ok, message)``; the
    message is already translated and may be None on silent success.
    """

    store: CatalogStore
    navigator: Navigator
    builder: ListBuilder
    files: CatalogFiles
    config: ExplorerConfig
    state: UiState
    backup_status: BackupStatus = field(default_factory=BackupStatus)
    on_change: Callable[[], None] | None = None

    @property
    def translator(self) -> Translator:
        return self.builder.translator

    def _t(self, key: str) -> str:
        return self.translator.translate(key)

    # -- Views ------------------------------------------------------------------

    def view(self) -> ExplorerView:
        view = self.builder.explorer_view(self.navigator, self.state.sort_key)
        self.state.breadcrumb = view.breadcrumb
        self.state.search_result_text = view.search_result_text
        return view

    def avatar_rows(self) -> list[Row]:
        return self.builder.avatar_rows(self.state.sort_key)

    def author_rows(self) -> list[Row]:
        return self.builder.author_rows()

    def root_category_rows(self) -> list[Row]:
        return self.builder.root_category_rows()

    # -- Navigation ---------------------------------------------------------------

    def dispatch(self, command: RowCommand) -> tuple[bool, str | None]:
        """Apply a row's command. OpenFile is left to the front-end."""
        if isinstance(command, OpenFile):
            return True, None
        try:
            moved = self.navigator.dispatch(command)
        except ItemFolderMissingError:
            logger.warning("Item folder missing: %s", getattr(command, "item_path", "?"))
            return False, self._t("Folder not found.")
        except KeyError:
            return False, self._t("Item not found.")
        except ValueError as exc:
            return False, str(exc)
        if not moved:
            return False, self._t("Nothing to go back to.")
        self._after_navigation()
        return True, None

    def back(self) -> tuple[bool, str | None]:
        if not self.navigator.back():
            return False, self._t("Nothing to go back to.")
        self._after_navigation()
        return True, None

    def reset(self) -> None:
        self.navigator.reset()
        self._after_navigation()

    def search(self, query: str) -> None:
        self.state.search_text = query
        self.navigator.search(query)
        self._notify_changed()

    def clear_search(self) -> None:
        self.state.search_text = ""
        self.navigator.clear_search()
        self._notify_changed()

    def search_author(self, query: str) -> None:
        """Context-menu "other items by this author": search from the root."""
        self.navigator.reset()
        self.search(query)

    def set_sort(self, sort_key: SortKey) -> None:
        self.state.sort_key = sort_key
        self._notify_changed()

    def set_language(self, language: str) -> None:
        self.builder.translator = Translator(language)
        self.state.language = language
        self._notify_changed()

    # -- Catalog edits --------------------------------------------------------------

    def add_item(self, item: Item) -> tuple[bool, str | None]:
        try:
            self.store.add_item(item)
        except ValueError as exc:
            return False, str(exc)
        return self._save_and_notify()

    def edit_item(self, previous_path: str, edited: Item) -> tuple[bool, str | None]:
        """Replace an item, repairing references when its path changed."""
        try:
            repaired = self.store.apply_edit(previous_path, edited)
        except KeyError:
            return False, self._t("Item not found.")
        except ValueError as exc:
            return False, str(exc)
        if repaired:
            logger.info("Rewrote %d reference(s) from %s to %s", repaired, previous_path, edited.item_path)
        self.navigator.on_item_edited(previous_path, edited)
        return self._save_and_notify()

    def delete_item(
        self,
        item_path: str,
        confirm_delete: Confirm = _always,
        confirm_strip_supported: Confirm = _always,
        confirm_strip_groups: Confirm = _always,
    ) -> tuple[bool, str | None]:
        """Delete an item after asking up to three questions.

        For an avatar the user chooses whether to remove it from other items'
        supported lists and, if any group holds it, from common groups.
        """
        item = self.store.find_item(item_path)
        if item is None:
            return False, self._t("Item not found.")
        if not confirm_delete(self._t("Really delete this item?")):
            return False, None

        strip_supported = False
        strip_groups = False
        if item.type == ItemType.AVATAR:
            strip_supported = confirm_strip_supported(
                self._t("Remove this avatar from items that list it as supported?")
            )
            if self.store.groups_containing(item_path):
                strip_groups = confirm_strip_groups(
                    self._t("Remove this avatar from common avatar groups?")
                )

        result = self.store.delete_item(
            item_path,
            strip_supported_avatars=strip_supported,
            strip_from_groups=strip_groups,
        )
        logger.info(
            "Deleted %s (%d supported ref(s), %d group ref(s) removed)",
            item_path, result.supported_refs_removed, result.group_refs_removed,
        )
        self.navigator.on_item_deleted(item_path)
        ok, message = self._save_and_notify()
        if not ok:
            return ok, message
        return True, self._t("Deleted.")

    def change_thumbnail(self, item_path: str, image_path: str) -> tuple[bool, str | None]:
        try:
            self.store.set_image_path(item_path, image_path)
        except KeyError:
            return False, self._t("Item not found.")
        return self._save_and_notify()

    def change_author_image(self, author_name: str, image_path: str) -> tuple[bool, str | None]:
        try:
            self.store.set_author_image(author_name, image_path)
        except KeyError:
            return False, self._t("Item not found.")
        return self._save_and_notify()

    def add_custom_category(self, label: str) -> tuple[bool, str | None]:
        try:
            self.store.add_custom_category(label.strip())
        except ValueError as exc:
            return False, str(exc)
        return self._save_and_notify()

    def remove_custom_category(self, label: str) -> tuple[bool, str | None]:
        try:
            self.store.remove_custom_category(label)
        except KeyError:
            return False, f"Unknown custom category: {label!r}"
        return self._save_and_notify()

    # -- Persistence ------------------------------------------------------------------

    def save(self) -> tuple[bool, str | None]:
        try:
            self.files.save_items(self.store.items)
            self.files.save_common_groups(self.store.common_groups)
            self.files.save_custom_categories(self.store.custom_categories)
        except OSError:
            logger.exception("Saving catalog data to %s failed", self.files.data_dir)
            return False, self._t("Could not save data.")
        return True, None

    def make_backup(self) -> tuple[bool, str | None]:
        try:
            path = make_backup(
                self.files.data_dir,
                self.config.backup_dir,
                max_attempts=self.config.max_backup_name_attempts,
            )
        except (OSError, RuntimeError):
            logger.exception("Manual backup failed")
            return False, self._t("Backup failed.")
        return True, self._t("Backup saved: ") + path.name

    def export_csv(self) -> tuple[bool, str | None]:
        try:
            path = export_csv(
                self.store,
                self.config.output_dir,
                max_attempts=self.config.max_backup_name_attempts,
            )
        except (OSError, RuntimeError):
            logger.exception("CSV export failed")
            return False, self._t("Export failed.")
        return True, self._t("Exported: ") + path.name

    def run_auto_backup(self) -> bool:
        """One tick of the periodic backup timer."""
        return self.backup_status.run(
            lambda: auto_backup(self.files.existing_files(), self.config.auto_backup_dir)
        )

    def window_title(self, now: datetime | None = None) -> str:
        return self.state.banner_title + self.backup_status.title_suffix(self.translator, now)

    # -- Internal -------------------------------------------------------------------------

    def _after_navigation(self) -> None:
        if not self.navigator.searching:
            self.state.search_text = ""
        self._notify_changed()

    def _save_and_notify(self) -> tuple[bool, str | None]:
        ok, message = self.save()
        self._notify_changed()
        return ok, message

    def _notify_changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
