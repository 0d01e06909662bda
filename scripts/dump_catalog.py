"""Print browse lists or search results for a catalog data directory.

Usage:
    python -m scripts.dump_catalog [--data DIR] [--lang ja-JP|en-US|ko-KR]
                                   [--avatars] [--authors] [--categories]
                                   [--search QUERY] [--avatar PATH]
                                   [--sort title|author] [--verbose]

If no list flag is given, all three browse lists are shown.
"""

import argparse
import logging
from pathlib import Path

from rich.logging import RichHandler

from avatar_explorer.engine.explorer_config import ExplorerConfig
from avatar_explorer.engine.list_builder import ListBuilder, Row
from avatar_explorer.engine.navigation import Navigator
from avatar_explorer.models.constants import SortKey
from avatar_explorer.models.translations import SUPPORTED_LANGUAGES, Translator
from avatar_explorer.parser.catalog_files import CatalogFiles
from avatar_explorer.ui.bootstrap import load_store


logger = logging.getLogger(__name__)


def format_rows(title: str, rows: list[Row]) -> list[str]:
    lines = [f"== {title} ({len(rows)}) =="]
    for row in rows:
        subtitle = row.subtitle.replace("\n", " | ")
        lines.append(f"  {row.title:<40}  {subtitle}")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump an avatar/item catalog")
    parser.add_argument("--data", type=Path, help="Data directory (default: $AVATAR_EXPLORER_DATA or ./Datas)")
    parser.add_argument("--lang", choices=SUPPORTED_LANGUAGES, help="Display language")
    parser.add_argument("--avatars", action="store_true", help="Show the avatar list")
    parser.add_argument("--authors", action="store_true", help="Show the author list")
    parser.add_argument("--categories", action="store_true", help="Show the category list")
    parser.add_argument("--search", help='Search query, e.g. \'Author="Jane Doe" hat\'')
    parser.add_argument("--avatar", help="Avatar item path; list its categories")
    parser.add_argument("--sort", choices=[k.value for k in SortKey], default=SortKey.TITLE.value)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level="DEBUG" if args.verbose else "INFO",
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler()],
    )

    try:
        config = ExplorerConfig.from_env()
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1
    data_dir = args.data or config.data_dir
    translator = Translator(args.lang or config.language)
    sort_key = SortKey(args.sort)

    store = load_store(CatalogFiles(data_dir))
    builder = ListBuilder(store, translator)
    lines: list[str] = []

    if args.search is not None:
        navigator = Navigator(store)
        navigator.search(args.search)
        view = builder.explorer_view(navigator, sort_key)
        lines.append(view.breadcrumb)
        lines.append(view.search_result_text)
        lines.extend(format_rows("Results", list(view.rows)))
    elif args.avatar is not None:
        navigator = Navigator(store)
        try:
            navigator.select_avatar(args.avatar)
        except KeyError:
            print(f"Error: no item at {args.avatar}")
            return 1
        lines.extend(format_rows(navigator.breadcrumb(translator), builder.category_rows(navigator)))
    else:
        show_all = not (args.avatars or args.authors or args.categories)
        if show_all or args.avatars:
            lines.extend(format_rows("Avatars", builder.avatar_rows(sort_key, include_wildcard=False)))
        if show_all or args.authors:
            lines.extend(format_rows("Authors", builder.author_rows()))
        if show_all or args.categories:
            lines.extend(format_rows("Categories", builder.root_category_rows()))

    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
