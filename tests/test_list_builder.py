from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.engine.commands import (
    OpenFile,
    OpenSearchResult,
    SelectAvatar,
    SelectCategory,
    SelectItem,
    SelectRootCategory,
    SelectSubfolder,
    SelectWildcardAvatar,
)
from avatar_explorer.engine.list_builder import ListBuilder, sort_items
from avatar_explorer.engine.navigation import Navigator, Window
from avatar_explorer.models.constants import ItemType, SortKey
from avatar_explorer.models.item import CommonAvatarGroup, FileData, Item, ItemFolderInfo
from avatar_explorer.models.translations import Translator


def _item(
    title: str,
    item_type: ItemType,
    supported: list[str] | None = None,
    *,
    author: str = "Jane",
    booth_id: int = -1,
    custom: str = "",
) -> Item:
    return Item(
        title=title,
        author_name=author,
        item_path=f"/{title.lower()}",
        type=item_type,
        supported_avatars=list(supported or []),
        booth_id=booth_id,
        custom_category=custom,
    )


def _scan(_item_path: str, _material_path: str = "") -> ItemFolderInfo:
    info = ItemFolderInfo()
    info.add("Texture", FileData("b.png", "/x/b.png", ".png"))
    info.add("Texture", FileData("a.png", "/x/a.png", ".png"))
    info.add("Document", FileData("readme.txt", "/x/readme.txt", ".txt"))
    return info


def _setup(store: CatalogStore) -> tuple[Navigator, ListBuilder]:
    nav = Navigator(store, scan_folder=_scan, folder_exists=lambda _p: True)
    return nav, ListBuilder(store, Translator(), folder_exists=lambda _p: True)


def _hat_socks_store() -> CatalogStore:
    return CatalogStore(items=[
        _item("A1", ItemType.AVATAR),
        _item("Hat", ItemType.ACCESSORY),
        _item("Socks", ItemType.ACCESSORY, ["/a1"]),
    ])


def test_avatar_then_accessory_lists_universal_and_direct_items():
    nav, builder = _setup(_hat_socks_store())
    nav.dispatch(SelectAvatar("/a1"))
    nav.dispatch(SelectCategory(ItemType.ACCESSORY))
    assert [r.title for r in builder.item_rows(nav)] == ["Hat", "Socks"]


def test_wildcard_avatar_lists_every_item():
    nav, builder = _setup(_hat_socks_store())
    nav.dispatch(SelectWildcardAvatar())
    nav.dispatch(SelectCategory(ItemType.ACCESSORY))
    assert [r.title for r in builder.item_rows(nav)] == ["Hat", "Socks"]


def test_avatar_rows_start_with_wildcard_and_sort():
    store = CatalogStore(items=[
        _item("Zeta", ItemType.AVATAR, author="Amy"),
        _item("Alpha", ItemType.AVATAR, author="Zoe"),
    ])
    builder = ListBuilder(store, Translator())
    rows = builder.avatar_rows(SortKey.TITLE)
    assert rows[0].command == SelectWildcardAvatar()
    assert [r.title for r in rows[1:]] == ["Alpha", "Zeta"]
    assert rows[1].command == SelectAvatar("/alpha")
    by_author = builder.avatar_rows(SortKey.AUTHOR, include_wildcard=False)
    assert [r.title for r in by_author] == ["Zeta", "Alpha"]


def test_sort_is_stable_for_ties():
    items = [_item("Same", ItemType.CLOTHING, author="B"), _item("Other", ItemType.CLOTHING, author="B")]
    assert sort_items(items, SortKey.AUTHOR) == items


def test_author_rows_show_item_counts():
    store = CatalogStore(items=[
        _item("A", ItemType.CLOTHING, author="Bob"),
        _item("B", ItemType.CLOTHING, author="Amy"),
        _item("C", ItemType.TOOL, author="Bob"),
    ])
    rows = ListBuilder(store, Translator()).author_rows()
    assert [(r.title, r.subtitle) for r in rows] == [("Amy", "1 items"), ("Bob", "2 items")]


def test_root_category_rows_include_empty_and_custom_categories():
    store = CatalogStore(
        items=[_item("Chair", ItemType.CUSTOM, custom="Props"), _item("Hat", ItemType.ACCESSORY)],
        custom_categories=["Props", "Stage"],
    )
    rows = ListBuilder(store, Translator()).root_category_rows()
    titles = [r.title for r in rows]
    assert titles[:9] == [
        "Avatar", "Clothing", "Texture", "Gimmick", "Accessory",
        "Hair Style", "Animation", "Tool", "Shader",
    ]
    assert titles[9:] == ["Props", "Stage"]
    assert rows[0].subtitle == "0 items"
    assert rows[4].subtitle == "1 items"
    assert rows[9].command == SelectRootCategory(ItemType.CUSTOM, "Props")
    assert rows[10].subtitle == "0 items"


def test_category_rows_under_avatar_omit_empty_buckets():
    store = CatalogStore(
        items=[
            _item("A1", ItemType.AVATAR),
            _item("B1", ItemType.AVATAR),
            _item("Hat", ItemType.ACCESSORY, ["/a1"]),
            _item("Coat", ItemType.CLOTHING, ["/b1"]),
            _item("Chair", ItemType.CUSTOM, custom="Props"),
        ],
        custom_categories=["Props"],
    )
    nav, builder = _setup(store)
    nav.select_avatar("/a1")
    rows = builder.category_rows(nav)
    assert [(r.title, r.subtitle) for r in rows] == [
        ("Avatar", "2 items"),
        ("Accessory", "1 items"),
        ("Props", "1 items"),
    ]
    assert rows[2].command == SelectCategory(ItemType.CUSTOM, "Props")


def test_item_rows_annotate_common_group_support():
    store = CatalogStore(
        items=[
            _item("A1", ItemType.AVATAR),
            _item("B1", ItemType.AVATAR),
            _item("Hat", ItemType.ACCESSORY, ["/a1"]),
        ],
        common_groups=[CommonAvatarGroup("Base", ["/a1", "/b1"])],
    )
    nav, builder = _setup(store)
    nav.select_avatar("/b1")
    nav.select_category(ItemType.ACCESSORY)
    rows = builder.item_rows(nav)
    assert len(rows) == 1
    assert rows[0].subtitle == "Author: Jane\nCommon avatar: Base"
    assert rows[0].command == SelectItem("/hat")


def test_item_actions_include_booth_links_only_with_booth_id():
    store = CatalogStore(items=[
        _item("Hat", ItemType.ACCESSORY, booth_id=42),
        _item("Cap", ItemType.ACCESSORY),
    ])
    nav, builder = _setup(store)
    nav.select_root_category(ItemType.ACCESSORY)
    rows = {r.title: r for r in builder.item_rows(nav)}
    hat_kinds = [a.kind for a in rows["Hat"].actions]
    cap_kinds = [a.kind for a in rows["Cap"].actions]
    assert "open_booth_link" in hat_kinds
    assert "copy_booth_link" not in cap_kinds
    booth = next(a for a in rows["Hat"].actions if a.kind == "open_booth_link")
    assert booth.payload == "https://booth.pm/en/items/42"
    search = next(a for a in rows["Cap"].actions if a.kind == "search_author")
    assert search.payload == 'Author="Jane"'


def test_folder_views_list_subfolders_and_sorted_files():
    nav, builder = _setup(_hat_socks_store())
    nav.select_root_category(ItemType.ACCESSORY)
    nav.select_item("/hat")
    view = builder.explorer_view(nav)
    assert view.window == Window.ITEM_FOLDER_CATEGORY_LIST
    assert [(r.title, r.subtitle) for r in view.rows] == [
        ("Texture", "2 items"),
        ("Document", "1 items"),
    ]
    assert view.rows[0].command == SelectSubfolder("Texture")

    nav.select_subfolder("Texture")
    view = builder.explorer_view(nav)
    assert [r.title for r in view.rows] == ["a.png", "b.png"]
    assert view.rows[0].command == OpenFile("/x/a.png")
    assert view.rows[0].subtitle == "png file"
    assert view.rows[0].thumbnail_path == "/x/a.png"


def test_search_view_lists_ranked_results_with_count():
    nav, builder = _setup(_hat_socks_store())
    nav.search("s")
    view = builder.explorer_view(nav)
    assert view.searching
    assert [r.title for r in view.rows] == ["Socks"]
    assert view.rows[0].command == OpenSearchResult("/socks")
    assert view.search_result_text == "Search results: 1 (of 3)"
    assert view.breadcrumb == "Searching... - s"


def test_in_folder_search_filters_current_subfolder():
    nav, builder = _setup(_hat_socks_store())
    nav.select_root_category(ItemType.ACCESSORY)
    nav.select_item("/hat")
    nav.search("read")
    view = builder.explorer_view(nav)
    assert [r.title for r in view.rows] == ["readme.txt"]
    assert view.search_result_text == "In-folder search results: 1 (of 3)"
