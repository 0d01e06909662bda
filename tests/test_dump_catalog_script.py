import json

from avatar_explorer.engine.list_builder import Row
from scripts.dump_catalog import format_rows, main


def test_format_rows_flattens_multiline_subtitles():
    lines = format_rows("Items", [Row(title="Hat", subtitle="Author: Jane\nCommon avatar: Base", command=None)])
    assert lines[0] == "== Items (1) =="
    assert lines[1].strip().endswith("Author: Jane | Common avatar: Base")


def test_main_prints_browse_lists_and_search(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("AVATAR_EXPLORER_LANG", raising=False)
    data = tmp_path / "Datas"
    data.mkdir()
    (data / "ItemsData.json").write_text(
        json.dumps([
            {"Title": "A1", "AuthorName": "Jane", "ItemPath": "/a1", "Type": 0},
            {"Title": "Cute Hat", "AuthorName": "Jane", "ItemPath": "/hat", "Type": 4},
        ]),
        encoding="utf-8",
    )

    assert main(["--data", str(data), "--avatars"]) == 0
    out = capsys.readouterr().out
    assert "== Avatars (1) ==" in out
    assert "A1" in out

    assert main(["--data", str(data), "--search", "cute"]) == 0
    out = capsys.readouterr().out
    assert "Search results: 1 (of 2)" in out
    assert "Cute Hat" in out

    assert main(["--data", str(data), "--avatar", "/nope"]) == 1
