"""Structured search queries: parsing, matching, and ranking.

A query is a whitespace-separated sequence of tokens. A token is either
``Key=value`` / ``Key="quoted value"`` for one of the structured keys, or
a bare search word::

    Author="Jane Doe" Category=Accessory cute hat

Values of the same key are alternatives (any may match). Search words
must all match. Parsing never fails: anything that doesn't look like a
structured token becomes a search word.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import re

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.models.item import FileData, Item
from avatar_explorer.models.translations import Translator


FILTER_KEYS: tuple[str, ...] = ("Author", "Title", "BoothId", "Avatar", "Category")

_KEY_PREFIX = re.compile(r"(Author|Title|BoothId|Avatar|Category)=")


@dataclass(frozen=True, slots=True)
class SearchFilter:
    """Parsed query. Every tuple is de-duplicated in first-seen order."""

    author: tuple[str, ...] = ()
    title: tuple[str, ...] = ()
    booth_id: tuple[str, ...] = ()
    avatar: tuple[str, ...] = ()
    category: tuple[str, ...] = ()
    search_words: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.author or self.title or self.booth_id
            or self.avatar or self.category or self.search_words
        )


def _tokenize(query: str) -> list[tuple[str | None, str]]:
    tokens: list[tuple[str | None, str]] = []
    pos = 0
    end = len(query)
    while pos < end:
        if query[pos].isspace():
            pos += 1
            continue

        key: str | None = None
        match = _KEY_PREFIX.match(query, pos)
        if match is not None:
            key = match.group(1)
            pos = match.end()

        if pos < end and query[pos] == '"':
            close = query.find('"', pos + 1)
            if close == -1:
                # Unterminated quote runs to the end of the query.
                value = query[pos + 1:]
                pos = end
            else:
                value = query[pos + 1:close]
                pos = close + 1
        else:
            start = pos
            while pos < end and not query[pos].isspace():
                pos += 1
            value = query[start:pos]

        tokens.append((key, value))
    return tokens


def parse_search_filter(query: str) -> SearchFilter:
    values: dict[str, dict[str, None]] = {key: {} for key in FILTER_KEYS}
    words: dict[str, None] = {}
    for key, value in _tokenize(query):
        if not value:
            continue
        if key is None:
            words[value] = None
        else:
            values[key][value] = None
    return SearchFilter(
        author=tuple(values["Author"]),
        title=tuple(values["Title"]),
        booth_id=tuple(values["BoothId"]),
        avatar=tuple(values["Avatar"]),
        category=tuple(values["Category"]),
        search_words=tuple(words),
    )


# ---------------------------------------------------------------------------
# Item matching
# ---------------------------------------------------------------------------


def _matches_structured(
    item: Item,
    search_filter: SearchFilter,
    store: CatalogStore,
    translator: Translator,
) -> bool:
    if search_filter.author and item.author_name not in search_filter.author:
        return False
    if search_filter.title and item.title not in search_filter.title:
        return False
    if search_filter.booth_id and str(item.booth_id) not in search_filter.booth_id:
        return False

    if search_filter.avatar:
        names = [store.avatar_name(path) for path in item.supported_avatars]
        names = [name for name in names if name is not None]
        if not any(value in name for value in search_filter.avatar for name in names):
            return False

    if search_filter.category:
        category_name = translator.category_name(item.type, item.custom_category)
        if not any(
            value in category_name or value in item.custom_category
            for value in search_filter.category
        ):
            return False

    return True


def _matches_words(item: Item, words: Iterable[str]) -> bool:
    title = item.title.lower()
    author = item.author_name.lower()
    avatars = [path.lower() for path in item.supported_avatars]
    booth_id = str(item.booth_id)
    for word in words:
        w = word.lower()
        if w in title or w in author or w in booth_id:
            continue
        if any(w in path for path in avatars):
            continue
        return False
    return True


def word_rank(item: Item, words: Iterable[str]) -> int:
    """Words found in the title plus words found in the author name."""
    title = item.title.lower()
    author = item.author_name.lower()
    score = 0
    for word in words:
        w = word.lower()
        if w in title:
            score += 1
        if w in author:
            score += 1
    return score


def match_items(
    items: Iterable[Item],
    search_filter: SearchFilter,
    store: CatalogStore,
    translator: Translator,
) -> list[Item]:
    """Items passing every filter layer, best word matches first.

    Structured keys only filter; ranking counts search words alone. The
    sort is stable, so equal ranks keep catalog order.
    """
    words = search_filter.search_words
    matched = [
        item for item in items
        if _matches_structured(item, search_filter, store, translator)
        and _matches_words(item, words)
    ]
    return sorted(matched, key=lambda item: word_rank(item, words), reverse=True)


# ---------------------------------------------------------------------------
# In-folder file matching
# ---------------------------------------------------------------------------


def match_files(files: Iterable[FileData], search_filter: SearchFilter) -> list[FileData]:
    words = [w.lower() for w in search_filter.search_words]
    matched = [f for f in files if all(w in f.file_name.lower() for w in words)]
    return sorted(
        matched,
        key=lambda f: sum(1 for w in words if w in f.file_name.lower()),
        reverse=True,
    )


# ---------------------------------------------------------------------------
# Display strings
# ---------------------------------------------------------------------------


def describe_filter(search_filter: SearchFilter, translator: Translator) -> str:
    """Breadcrumb text shown while a search is active."""
    parts: list[str] = []
    if search_filter.author:
        parts.append(f"{translator.translate('Author')}: {', '.join(search_filter.author)}")
    if search_filter.title:
        parts.append(f"{translator.translate('Title')}: {', '.join(search_filter.title)}")
    if search_filter.booth_id:
        parts.append(f"BoothID: {', '.join(search_filter.booth_id)}")
    if search_filter.avatar:
        parts.append(f"{translator.translate('Avatar')}: {', '.join(search_filter.avatar)}")
    if search_filter.category:
        parts.append(f"{translator.translate('Category')}: {', '.join(search_filter.category)}")
    parts.append(", ".join(search_filter.search_words))
    return translator.translate("Searching... - ") + " / ".join(parts)


def result_text(count: int, total: int, translator: Translator, *, in_folder: bool = False) -> str:
    template = (
        "In-folder search results: {count} (of {total})"
        if in_folder
        else "Search results: {count} (of {total})"
    )
    return translator.translate(template).format(count=count, total=total)
