"""CSV export of the catalog."""

from __future__ import annotations

import csv
from datetime import datetime
import logging
from pathlib import Path

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.models.constants import CATEGORY_LABELS
from avatar_explorer.services.backup import MAX_NAME_ATTEMPTS, unique_output_path


logger = logging.getLogger(__name__)

CSV_HEADER: tuple[str, ...] = (
    "Title",
    "AuthorName",
    "AuthorImageFilePath",
    "ImagePath",
    "Type",
    "SupportedAvatar",
    "BoothId",
    "ItemPath",
)


def csv_rows(store: CatalogStore) -> list[list[str]]:
    rows: list[list[str]] = []
    for item in store.items:
        names = [store.avatar_name(path) for path in item.supported_avatars]
        rows.append([
            item.title,
            item.author_name,
            item.author_image_path,
            item.image_path,
            CATEGORY_LABELS[item.type],
            ";".join(name for name in names if name is not None),
            str(item.booth_id),
            item.item_path,
        ])
    return rows


def export_csv(
    store: CatalogStore,
    output_dir: Path,
    now: datetime | None = None,
    max_attempts: int = MAX_NAME_ATTEMPTS,
) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = unique_output_path(output_dir, ".csv", now or datetime.now(), max_attempts)
    with target.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(CSV_HEADER)
        writer.writerows(csv_rows(store))
    logger.info("Exported %d item(s) to %s", len(store), target)
    return target
