import pytest

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.models.constants import ItemType
from avatar_explorer.models.item import CommonAvatarGroup, Item


def _item(
    title: str,
    item_type: ItemType = ItemType.CLOTHING,
    *,
    author: str = "Jane",
    supported: list[str] | None = None,
    author_image: str = "",
) -> Item:
    return Item(
        title=title,
        author_name=author,
        item_path=f"/items/{title}",
        type=item_type,
        author_image_path=author_image,
        supported_avatars=list(supported or []),
    )


def _store() -> CatalogStore:
    return CatalogStore(
        items=[
            _item("Alice", ItemType.AVATAR),
            _item("Bella", ItemType.AVATAR, author="Bob"),
            _item("Hat", supported=["/items/Alice"]),
            _item("Socks"),
        ],
        common_groups=[CommonAvatarGroup("Base", ["/items/Alice", "/items/Bella"])],
        custom_categories=["Props"],
    )


def test_add_item_rejects_duplicate_and_empty_paths():
    store = _store()
    with pytest.raises(ValueError):
        store.add_item(_item("Hat"))
    with pytest.raises(ValueError):
        store.add_item(Item(title="X", author_name="Y", item_path=""))


def test_get_item_raises_key_error_for_unknown_path():
    with pytest.raises(KeyError):
        _store().get_item("/nope")


def test_authors_are_grouped_sorted_and_first_image_wins():
    store = CatalogStore(items=[
        _item("A", author="Zed", author_image="z1.png"),
        _item("B", author="Amy", author_image="a.png"),
        _item("C", author="Zed", author_image="z2.png"),
    ])
    authors = store.authors()
    assert [a.author_name for a in authors] == ["Amy", "Zed"]
    assert authors[1].author_image_path == "z1.png"
    assert store.author_item_count("Zed") == 2


def test_delete_avatar_with_strip_accepted_removes_references():
    store = _store()
    result = store.delete_item(
        "/items/Alice", strip_supported_avatars=True, strip_from_groups=True
    )
    assert result.supported_refs_removed == 1
    assert result.group_refs_removed == 1
    assert store.get_item("/items/Hat").supported_avatars == []
    assert store.find_group("Base").avatars == ["/items/Bella"]


def test_delete_avatar_with_strip_declined_leaves_dangling_references():
    store = _store()
    store.delete_item("/items/Alice")
    assert store.get_item("/items/Hat").supported_avatars == ["/items/Alice"]
    assert "/items/Alice" in store.find_group("Base")
    assert store.avatar_name("/items/Alice") is None


def test_apply_edit_with_new_path_repairs_references():
    store = _store()
    edited = _item("Alice2", ItemType.AVATAR)
    rewritten = store.apply_edit("/items/Alice", edited)
    assert rewritten == 2
    assert store.get_item("/items/Hat").supported_avatars == ["/items/Alice2"]
    assert store.find_group("Base").avatars == ["/items/Alice2", "/items/Bella"]
    assert store.find_item("/items/Alice") is None


def test_apply_edit_rejects_collision_with_other_item():
    store = _store()
    with pytest.raises(ValueError):
        store.apply_edit("/items/Alice", _item("Bella", ItemType.AVATAR))


def test_fix_supported_avatar_paths_migrates_titles():
    store = CatalogStore(items=[
        _item("Alice", ItemType.AVATAR),
        _item("Hat", supported=["Alice", "/items/Alice", "Unknown Avatar"]),
    ])
    assert store.fix_supported_avatar_paths() == 1
    assert store.get_item("/items/Hat").supported_avatars == ["/items/Alice", "Unknown Avatar"]


def test_set_group_creates_and_replaces():
    store = _store()
    store.set_group("Base", ["/items/Bella", "/items/Bella", ""])
    assert store.find_group("Base").avatars == ["/items/Bella"]
    store.set_group("New", ["/items/Alice"])
    assert store.group_names() == ["Base", "New"]
    with pytest.raises(ValueError):
        store.set_group("  ", [])


def test_delete_group_unknown_raises():
    with pytest.raises(KeyError):
        _store().delete_group("Missing")


def test_custom_categories_add_and_remove():
    store = _store()
    store.add_custom_category(" Stage ")
    assert store.custom_categories == ("Props", "Stage")
    with pytest.raises(ValueError):
        store.add_custom_category("Props")
    store.remove_custom_category("Props")
    assert store.custom_categories == ("Stage",)
    with pytest.raises(KeyError):
        store.remove_custom_category("Props")


def test_set_author_image_updates_every_item_of_author():
    store = _store()
    assert store.set_author_image("Jane", "jane.png") == 3
    assert all(i.author_image_path == "jane.png" for i in store.items if i.author_name == "Jane")
    with pytest.raises(KeyError):
        store.set_author_image("Nobody", "x.png")
