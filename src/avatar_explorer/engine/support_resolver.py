"""Decide whether an item supports the selected avatar.

Support is direct (the avatar is listed on the item, or the item lists no
avatars at all) or indirect through a common avatar group that contains
both the selected avatar and one of the item's listed avatars.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from avatar_explorer.models.item import CommonAvatarGroup, Item


@dataclass(frozen=True, slots=True)
class SupportResult:
    is_supported_or_common: bool
    only_common: bool = False
    common_group_name: str | None = None


_SUPPORTED = SupportResult(is_supported_or_common=True)
_UNSUPPORTED = SupportResult(is_supported_or_common=False)


def resolve_support(
    item: Item,
    common_groups: Iterable[CommonAvatarGroup],
    selected_avatar_path: str | None,
) -> SupportResult:
    if not item.supported_avatars:
        return _SUPPORTED
    if selected_avatar_path is not None and selected_avatar_path in item.supported_avatars:
        return _SUPPORTED
    if selected_avatar_path is None:
        return _UNSUPPORTED

    supported = set(item.supported_avatars)
    for group in common_groups:
        if selected_avatar_path not in group.avatars:
            continue
        if supported.intersection(group.avatars):
            return SupportResult(
                is_supported_or_common=True,
                only_common=True,
                common_group_name=group.name,
            )
    return _UNSUPPORTED


def is_visible_under_avatar(
    item: Item,
    common_groups: Iterable[CommonAvatarGroup],
    selected_avatar_path: str | None,
    wildcard: bool = False,
) -> bool:
    """List gate used in avatar mode: supported, universal, or wildcard."""
    if wildcard or item.supports_all_avatars:
        return True
    return resolve_support(item, common_groups, selected_avatar_path).is_supported_or_common
