"""Manual zip backups and the periodic automatic backup."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
import logging
from pathlib import Path
import shutil
import zipfile

from avatar_explorer.models.translations import Translator


logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
MAX_NAME_ATTEMPTS = 60


def unique_output_path(
    directory: Path,
    suffix: str,
    now: datetime,
    max_attempts: int = MAX_NAME_ATTEMPTS,
) -> Path:
    """``<timestamp><suffix>``, then ``<timestamp>_1<suffix>`` and so on.

    Raises RuntimeError once ``max_attempts`` numbered names are taken.
    """
    stamp = now.strftime(TIMESTAMP_FORMAT)
    candidate = directory / f"{stamp}{suffix}"
    index = 1
    while candidate.exists():
        if index > max_attempts:
            raise RuntimeError(f"Too many files named {stamp}* in {directory}")
        candidate = directory / f"{stamp}_{index}{suffix}"
        index += 1
    return candidate


def make_backup(
    data_dir: Path,
    backup_dir: Path,
    now: datetime | None = None,
    max_attempts: int = MAX_NAME_ATTEMPTS,
) -> Path:
    """Zip the whole data directory into ``backup_dir``; returns the archive path."""
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")
    backup_dir = Path(backup_dir)
    backup_dir.mkdir(parents=True, exist_ok=True)
    target = unique_output_path(backup_dir, ".zip", now or datetime.now(), max_attempts)

    with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(data_dir.rglob("*")):
            if path.is_file():
                archive.write(path, path.relative_to(data_dir).as_posix())
    logger.info("Backup written to %s", target)
    return target


def auto_backup(files: Iterable[Path], backup_root: Path, now: datetime | None = None) -> Path:
    """Copy the existing data files into a new timestamped directory."""
    backup_root = Path(backup_root)
    backup_root.mkdir(parents=True, exist_ok=True)
    target = unique_output_path(backup_root, "", now or datetime.now())
    target.mkdir()
    copied = 0
    for path in files:
        path = Path(path)
        if not path.is_file():
            continue
        shutil.copy2(path, target / path.name)
        copied += 1
    logger.debug("Auto backup copied %d file(s) into %s", copied, target)
    return target


@dataclass(slots=True)
class BackupStatus:
    """Outcome of the most recent automatic backup."""

    last_success: datetime | None = None
    last_error: bool = False

    def run(self, backup: Callable[[], object], now: Callable[[], datetime] = datetime.now) -> bool:
        try:
            backup()
        except (OSError, RuntimeError):
            logger.exception("Automatic backup failed")
            self.last_error = True
            return False
        self.last_error = False
        self.last_success = now()
        return True

    def title_suffix(self, translator: Translator, now: datetime | None = None) -> str:
        """Text appended to the window title, or "" before any attempt."""
        t = translator.translate
        if self.last_success is None:
            return f" - {t('Backup error')}" if self.last_error else ""
        elapsed = (now or datetime.now()) - self.last_success
        minutes = max(0, int(elapsed.total_seconds() // 60))
        text = f" - {t('Last auto backup: ')}{minutes}{t(' min ago')}"
        if self.last_error:
            text += f" - {t('Backup error')}"
        return text
