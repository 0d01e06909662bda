"""Bootstrap helpers for loading catalog data into UI runtime state."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.engine.explorer_config import ExplorerConfig
from avatar_explorer.engine.list_builder import ListBuilder
from avatar_explorer.engine.navigation import Navigator
from avatar_explorer.models.item import CommonAvatarGroup, Item
from avatar_explorer.models.translations import Translator
from avatar_explorer.parser.catalog_files import CatalogFiles
from avatar_explorer.ui.controllers.common_avatar_controller import CommonAvatarController
from avatar_explorer.ui.controllers.explorer_controller import ExplorerController
from avatar_explorer.ui.state import UiState


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExplorerSession:
    """Runtime objects needed by UI pages/controllers."""

    config: ExplorerConfig
    files: CatalogFiles
    store: CatalogStore
    navigator: Navigator
    builder: ListBuilder

    def explorer_controller(self, state: UiState) -> ExplorerController:
        return ExplorerController(
            store=self.store,
            navigator=self.navigator,
            builder=self.builder,
            files=self.files,
            config=self.config,
            state=state,
        )

    def common_avatar_controller(self) -> CommonAvatarController:
        return CommonAvatarController(
            store=self.store,
            files=self.files,
            translator=self.builder.translator,
        )


def _load_items(files: CatalogFiles) -> list[Item]:
    try:
        return files.load_items()
    except (OSError, ValueError):
        logger.exception("Could not load %s, starting with an empty catalog", files.items_path)
        return []


def _load_groups(files: CatalogFiles) -> list[CommonAvatarGroup]:
    try:
        return files.load_common_groups()
    except (OSError, ValueError):
        logger.exception("Could not load %s", files.common_avatars_path)
        return []


def _load_custom_categories(files: CatalogFiles) -> list[str]:
    try:
        return files.load_custom_categories()
    except OSError:
        logger.exception("Could not load %s", files.custom_categories_path)
        return []


def _dedupe_items(items: list[Item]) -> list[Item]:
    seen: set[str] = set()
    out: list[Item] = []
    for item in items:
        if item.item_path in seen:
            logger.warning("Skipping duplicate item path %s", item.item_path)
            continue
        seen.add(item.item_path)
        out.append(item)
    return out


def load_store(files: CatalogFiles) -> CatalogStore:
    """Load the three data files and migrate legacy supported-avatar titles."""
    store = CatalogStore(
        items=_dedupe_items(_load_items(files)),
        common_groups=_load_groups(files),
        custom_categories=_load_custom_categories(files),
    )
    fixed = store.fix_supported_avatar_paths()
    if fixed:
        logger.info("Migrated supported avatars of %d item(s) from titles to paths", fixed)
    return store


def bootstrap_default_session(
    config: ExplorerConfig | None = None,
) -> tuple[ExplorerSession, UiState]:
    if config is None:
        config = ExplorerConfig.from_env()
    files = CatalogFiles(config.data_dir)
    store = load_store(files)
    translator = Translator(config.language)
    state = UiState(
        language=config.language,
        sort_key=config.sort_key,
        breadcrumb=translator.translate("The current path is shown here"),
    )
    logger.info(
        "Loaded %d item(s), %d common avatar group(s) from %s",
        len(store), len(store.common_groups), config.data_dir,
    )
    return ExplorerSession(
        config=config,
        files=files,
        store=store,
        navigator=Navigator(store),
        builder=ListBuilder(store, translator),
    ), state
