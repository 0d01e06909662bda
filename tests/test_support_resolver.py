from avatar_explorer.engine.support_resolver import is_visible_under_avatar, resolve_support
from avatar_explorer.models.constants import ItemType
from avatar_explorer.models.item import CommonAvatarGroup, Item


def _item(title: str, supported: list[str] | None = None) -> Item:
    return Item(
        title=title,
        author_name="Author",
        item_path=f"/items/{title}",
        type=ItemType.CLOTHING,
        supported_avatars=list(supported or []),
    )


GROUPS = [
    CommonAvatarGroup("Base", ["/a", "/b"]),
    CommonAvatarGroup("Other", ["/c"]),
]


def test_empty_supported_list_supports_everything():
    item = _item("Socks")
    for selected in ("/a", "/z", None):
        result = resolve_support(item, GROUPS, selected)
        assert result.is_supported_or_common is True
        assert result.only_common is False


def test_direct_support():
    result = resolve_support(_item("Hat", ["/a"]), GROUPS, "/a")
    assert result.is_supported_or_common is True
    assert result.only_common is False
    assert result.common_group_name is None


def test_common_group_support_reports_group_name():
    result = resolve_support(_item("Hat", ["/a"]), GROUPS, "/b")
    assert result.is_supported_or_common is True
    assert result.only_common is True
    assert result.common_group_name == "Base"


def test_common_group_support_is_symmetric_within_group():
    hat_a = _item("HatA", ["/a"])
    hat_b = _item("HatB", ["/b"])
    assert resolve_support(hat_a, GROUPS, "/b").is_supported_or_common
    assert resolve_support(hat_b, GROUPS, "/a").is_supported_or_common


def test_unrelated_avatar_is_unsupported():
    result = resolve_support(_item("Hat", ["/a"]), GROUPS, "/c")
    assert result.is_supported_or_common is False
    assert result.common_group_name is None


def test_no_selected_avatar_with_listed_avatars_is_unsupported():
    assert resolve_support(_item("Hat", ["/a"]), GROUPS, None).is_supported_or_common is False


def test_dangling_reference_is_not_supported():
    result = resolve_support(_item("Hat", ["/deleted"]), GROUPS, "/a")
    assert result.is_supported_or_common is False


def test_first_matching_group_wins():
    groups = [
        CommonAvatarGroup("First", ["/a", "/b"]),
        CommonAvatarGroup("Second", ["/a", "/b"]),
    ]
    assert resolve_support(_item("Hat", ["/a"]), groups, "/b").common_group_name == "First"


def test_resolver_is_total_over_small_domain():
    paths = ["/a", "/b", "/c", "/missing"]
    items = [_item("Any")] + [_item(f"I{p[1:]}", [p]) for p in paths]
    for item in items:
        for selected in paths + [None]:
            result = resolve_support(item, GROUPS, selected)
            assert isinstance(result.is_supported_or_common, bool)
            if result.only_common:
                assert result.is_supported_or_common
                assert result.common_group_name is not None


def test_visibility_gate_honors_wildcard():
    hat = _item("Hat", ["/a"])
    assert is_visible_under_avatar(hat, GROUPS, "/c") is False
    assert is_visible_under_avatar(hat, GROUPS, None, wildcard=True) is True
    assert is_visible_under_avatar(_item("Socks"), GROUPS, "/c") is True
