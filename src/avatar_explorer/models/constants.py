"""Item categories, subfolder labels, and other fixed catalog values.

Category and subfolder labels double as translation keys; see
``avatar_explorer.models.translations``.
"""

from enum import Enum, IntEnum


class ItemType(IntEnum):
    """Item category.

    The integer values are the on-disk representation in ItemsData.json.
    """
    AVATAR = 0
    CLOTHING = 1
    TEXTURE = 2
    GIMMICK = 3
    ACCESSORY = 4
    HAIR_STYLE = 5
    ANIMATION = 6
    TOOL = 7
    SHADER = 8
    CUSTOM = 9
    UNKNOWN = 10


# Categories enumerated by browse lists, in display order.
BROWSE_CATEGORIES: tuple[ItemType, ...] = tuple(
    t for t in ItemType if t not in (ItemType.CUSTOM, ItemType.UNKNOWN)
)

CATEGORY_LABELS: dict[ItemType, str] = {
    ItemType.AVATAR: "Avatar",
    ItemType.CLOTHING: "Clothing",
    ItemType.TEXTURE: "Texture",
    ItemType.GIMMICK: "Gimmick",
    ItemType.ACCESSORY: "Accessory",
    ItemType.HAIR_STYLE: "Hair Style",
    ItemType.ANIMATION: "Animation",
    ItemType.TOOL: "Tool",
    ItemType.SHADER: "Shader",
    ItemType.CUSTOM: "Custom",
    ItemType.UNKNOWN: "Unknown",
}


class SortKey(Enum):
    """User-selectable ordering for avatar and item lists."""
    TITLE = "title"
    AUTHOR = "author"


# Subfolder labels inside an item folder, in display order.
SUBFOLDER_MODIFICATION_DATA = "Modification Data"
SUBFOLDER_TEXTURE = "Texture"
SUBFOLDER_DOCUMENT = "Document"
SUBFOLDER_UNITY_PACKAGE = "Unity Package"
SUBFOLDER_MATERIAL = "Material"
SUBFOLDER_UNKNOWN = "Unknown"

SUBFOLDER_CATEGORIES: tuple[str, ...] = (
    SUBFOLDER_MODIFICATION_DATA,
    SUBFOLDER_TEXTURE,
    SUBFOLDER_DOCUMENT,
    SUBFOLDER_UNITY_PACKAGE,
    SUBFOLDER_MATERIAL,
    SUBFOLDER_UNKNOWN,
)

# File extension -> subfolder label. Anything missing lands in "Unknown".
EXTENSION_SUBFOLDERS: dict[str, str] = {
    ".unitypackage": SUBFOLDER_UNITY_PACKAGE,
    ".png": SUBFOLDER_TEXTURE,
    ".jpg": SUBFOLDER_TEXTURE,
    ".jpeg": SUBFOLDER_TEXTURE,
    ".psd": SUBFOLDER_TEXTURE,
    ".tga": SUBFOLDER_TEXTURE,
    ".txt": SUBFOLDER_DOCUMENT,
    ".md": SUBFOLDER_DOCUMENT,
    ".pdf": SUBFOLDER_DOCUMENT,
    ".html": SUBFOLDER_DOCUMENT,
    ".url": SUBFOLDER_DOCUMENT,
    ".mat": SUBFOLDER_MATERIAL,
    ".fbx": SUBFOLDER_MODIFICATION_DATA,
    ".blend": SUBFOLDER_MODIFICATION_DATA,
    ".prefab": SUBFOLDER_MODIFICATION_DATA,
    ".unity": SUBFOLDER_MODIFICATION_DATA,
    ".anim": SUBFOLDER_MODIFICATION_DATA,
    ".controller": SUBFOLDER_MODIFICATION_DATA,
    ".asset": SUBFOLDER_MODIFICATION_DATA,
    ".spp": SUBFOLDER_MODIFICATION_DATA,
    ".clip": SUBFOLDER_MODIFICATION_DATA,
}

IMAGE_EXTENSIONS = frozenset({".png", ".jpg"})

# "Show items usable by any avatar" entry in the avatar list.
WILDCARD_AVATAR = "*"

NO_BOOTH_ID = -1

LANGUAGE_CODES: dict[str, str] = {
    "ja-JP": "ja",
    "en-US": "en",
    "ko-KR": "ko",
}


def booth_url(booth_id: int, language: str) -> str:
    code = LANGUAGE_CODES.get(language, "ja")
    return f"https://booth.pm/{code}/items/{booth_id}"
