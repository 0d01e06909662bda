"""UI string tables and the translation lookup.

Keys are the English UI strings. A key missing from a table falls back to
the key itself, so English needs no table of its own.
"""

from avatar_explorer.models.constants import CATEGORY_LABELS, ItemType


DEFAULT_LANGUAGE = "en-US"
SUPPORTED_LANGUAGES: tuple[str, ...] = ("ja-JP", "en-US", "ko-KR")

_JA_JP: dict[str, str] = {
    "Avatar": "アバター",
    "Clothing": "衣装",
    "Texture": "テクスチャ",
    "Gimmick": "ギミック",
    "Accessory": "アクセサリー",
    "Hair Style": "髪型",
    "Animation": "アニメーション",
    "Tool": "ツール",
    "Shader": "シェーダー",
    "Custom": "カスタム",
    "Unknown": "不明",
    "Modification Data": "改変用データ",
    "Document": "ドキュメント",
    "Unity Package": "Unityパッケージ",
    "Material": "マテリアル",
    "Author: ": "作者: ",
    "Author": "作者",
    "Title": "タイトル",
    "Category": "カテゴリ",
    " items": "個の項目",
    " file": "ファイル",
    "Common avatar: ": "共通素体: ",
    "The current path is shown here": "ここには現在のパスが表示されます",
    "Searching... - ": "検索中... - ",
    "Search results: {count} (of {total})": "検索結果: {count}件 (全{total}件)",
    "In-folder search results: {count} (of {total})": "フォルダー内検索結果: {count}件 (全{total}件)",
    "Copy Booth link": "Boothリンクのコピー",
    "Open Booth link": "Boothリンクを開く",
    "Show other items by this author": "この作者の他のアイテムを表示",
    "Change thumbnail": "サムネイル変更",
    "Edit": "編集",
    "Delete": "削除",
    "Open folder": "フォルダを開く",
    "Open file location": "ファイルのパスを開く",
    "Folder not found.": "フォルダが見つかりませんでした。",
    "Nothing to go back to.": "戻る場所がありません。",
    "Could not save data.": "データを保存できませんでした。",
    "Deleted.": "削除が完了しました。",
    "Backup error": "バックアップエラー",
    "Last auto backup: ": "最終自動バックアップ: ",
    " min ago": "分前",
    "Any avatar": "全てのアバター",
    "Really delete this item?": "本当に削除しますか？",
    "Remove this avatar from items that list it as supported?":
        "このアバターを対応アバターとしているアイテムの対応アバターからこのアバターを削除しますか？",
    "Remove this avatar from common avatar groups?": "このアバターを共通素体グループから削除しますか？",
    "Saved.": "保存しました。",
    "Backup saved: ": "バックアップが完了しました: ",
    "Backup failed.": "バックアップに失敗しました。",
    "Exported: ": "エクスポートが完了しました: ",
    "Export failed.": "エクスポートに失敗しました",
    "Item not found.": "アイテムが見つかりませんでした。",
    "Common avatar saved.": "共通素体を保存しました。",
    "Common avatar deleted.": "共通素体を削除しました。",
}

_KO_KR: dict[str, str] = {
    "Avatar": "아바타",
    "Clothing": "의상",
    "Texture": "텍스처",
    "Gimmick": "기믹",
    "Accessory": "액세서리",
    "Hair Style": "헤어스타일",
    "Animation": "애니메이션",
    "Tool": "툴",
    "Shader": "셰이더",
    "Custom": "커스텀",
    "Unknown": "알 수 없음",
    "Modification Data": "개변용 데이터",
    "Document": "문서",
    "Unity Package": "Unity 패키지",
    "Material": "머티리얼",
    "Author: ": "작성자: ",
    "Author": "작성자",
    "Title": "제목",
    "Category": "카테고리",
    " items": "개의 항목",
    " file": " 파일",
    "Common avatar: ": "공통 소체: ",
    "The current path is shown here": "여기에 현재 경로가 표시됩니다",
    "Searching... - ": "검색 중... - ",
    "Search results: {count} (of {total})": "검색 결과: {count}건 (전체 {total}건)",
    "In-folder search results: {count} (of {total})": "폴더 내 검색 결과: {count}건 (전체 {total}건)",
    "Folder not found.": "폴더를 찾을 수 없습니다.",
    "Backup error": "백업 오류",
    "Last auto backup: ": "마지막 자동 백업: ",
    " min ago": "분 전",
}

_TABLES: dict[str, dict[str, str]] = {
    "ja-JP": _JA_JP,
    "ko-KR": _KO_KR,
}


class Translator:
    """Looks up UI strings for one language."""

    __slots__ = ("language",)

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language!r}")
        self.language = language

    def translate(self, key: str) -> str:
        return _TABLES.get(self.language, {}).get(key, key)

    def category_name(self, category: ItemType, custom_category: str | None = None) -> str:
        if category == ItemType.CUSTOM:
            return custom_category or self.translate(CATEGORY_LABELS[ItemType.CUSTOM])
        return self.translate(CATEGORY_LABELS.get(category, "Unknown"))
