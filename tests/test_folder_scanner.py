from pathlib import Path

from avatar_explorer.parser.folder_scanner import classify_file, scan_item_folder


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")


def test_classify_by_extension():
    assert classify_file(Path("a.unitypackage")) == "Unity Package"
    assert classify_file(Path("a.PNG")) == "Texture"
    assert classify_file(Path("readme.txt")) == "Document"
    assert classify_file(Path("body.fbx")) == "Modification Data"
    assert classify_file(Path("skin.mat")) == "Material"
    assert classify_file(Path("weird.xyz")) == "Unknown"


def test_scan_groups_files_recursively(tmp_path):
    root = tmp_path / "Hat"
    _touch(root / "Hat.unitypackage")
    _touch(root / "tex" / "hat.png")
    _touch(root / "docs" / "readme.txt")
    _touch(root / "misc.bin")
    info = scan_item_folder(str(root))
    assert info.item_count("Unity Package") == 1
    assert info.item_count("Texture") == 1
    assert info.item_count("Document") == 1
    assert info.item_count("Unknown") == 1
    tex = info.items("Texture")[0]
    assert tex.file_name == "hat.png"
    assert tex.file_extension == ".png"


def test_material_folder_counts_as_material_and_is_not_duplicated(tmp_path):
    root = tmp_path / "Hat"
    materials = root / "Materials"
    _touch(materials / "hat.png")
    _touch(root / "hat.fbx")
    outside = tmp_path / "ExtraMats"
    _touch(outside / "extra.png")

    info = scan_item_folder(str(root), str(materials))
    assert [f.file_name for f in info.items("Material")] == ["hat.png"]
    assert info.item_count("Modification Data") == 1

    info = scan_item_folder(str(root), str(outside))
    assert [f.file_name for f in info.items("Material")] == ["extra.png"]
    assert info.item_count("Texture") == 1


def test_missing_folder_yields_empty_listing(tmp_path):
    info = scan_item_folder(str(tmp_path / "gone"))
    assert info.all_items() == []
