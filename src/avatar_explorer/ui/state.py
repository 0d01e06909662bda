"""Shared UI state and lightweight app metadata."""

from dataclasses import dataclass

from avatar_explorer.models.constants import SortKey
from avatar_explorer.models.translations import DEFAULT_LANGUAGE


@dataclass(slots=True)
class UiState:
    """Top-level app state used by controllers and views."""

    language: str = DEFAULT_LANGUAGE
    sort_key: SortKey = SortKey.TITLE
    search_text: str = ""
    search_result_text: str = ""
    breadcrumb: str = ""
    banner_title: str = "Avatar Explorer"
    status_message: str = ""
