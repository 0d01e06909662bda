"""Configuration knobs for the explorer.

Defaults keep every directory relative to the working directory, next to
the data the catalog was created with.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from avatar_explorer.models.constants import SortKey
from avatar_explorer.models.translations import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


@dataclass(slots=True)
class ExplorerConfig:
    """Where data lives and how the app behaves on start-up."""

    data_dir: Path = Path("Datas")
    backup_dir: Path = Path("Backup")
    output_dir: Path = Path("Output")
    language: str = DEFAULT_LANGUAGE
    sort_key: SortKey = SortKey.TITLE
    backup_interval_seconds: int = 300     # automatic backup every 5 minutes
    max_backup_name_attempts: int = 60

    @property
    def auto_backup_dir(self) -> Path:
        return self.backup_dir / "Auto"

    @classmethod
    def from_env(cls) -> ExplorerConfig:
        config = cls()
        data = os.environ.get("AVATAR_EXPLORER_DATA")
        if data:
            config.data_dir = Path(data).expanduser()
        backup = os.environ.get("AVATAR_EXPLORER_BACKUP")
        if backup:
            config.backup_dir = Path(backup).expanduser()
        language = os.environ.get("AVATAR_EXPLORER_LANG")
        if language:
            if language not in SUPPORTED_LANGUAGES:
                raise ValueError(
                    f"AVATAR_EXPLORER_LANG must be one of {', '.join(SUPPORTED_LANGUAGES)}, got {language!r}"
                )
            config.language = language
        return config
