from datetime import timedelta

from avatar_explorer.engine.catalog_store import CatalogStore
from avatar_explorer.engine.commands import Back, OpenFile, SelectAvatar, SelectCategory, SelectItem
from avatar_explorer.engine.explorer_config import ExplorerConfig
from avatar_explorer.engine.list_builder import ListBuilder
from avatar_explorer.engine.navigation import Navigator, Window
from avatar_explorer.models.constants import ItemType, SortKey
from avatar_explorer.models.item import CommonAvatarGroup, Item, ItemFolderInfo
from avatar_explorer.models.translations import Translator
from avatar_explorer.parser.catalog_files import CatalogFiles
from avatar_explorer.ui.controllers.explorer_controller import ExplorerController
from avatar_explorer.ui.state import UiState


def _item(title: str, item_type: ItemType, supported: list[str] | None = None) -> Item:
    return Item(
        title=title,
        author_name="Jane",
        item_path=f"/{title.lower()}",
        type=item_type,
        supported_avatars=list(supported or []),
    )


def _controller(tmp_path, missing: set[str] | None = None) -> ExplorerController:
    store = CatalogStore(
        items=[
            _item("A1", ItemType.AVATAR),
            _item("B1", ItemType.AVATAR),
            _item("Hat", ItemType.ACCESSORY, ["/a1"]),
        ],
        common_groups=[CommonAvatarGroup("Base", ["/a1", "/b1"])],
    )
    gone = missing or set()
    navigator = Navigator(
        store,
        scan_folder=lambda _p, _m="": ItemFolderInfo(),
        folder_exists=lambda p: p not in gone,
    )
    config = ExplorerConfig(
        data_dir=tmp_path / "Datas",
        backup_dir=tmp_path / "Backup",
        output_dir=tmp_path / "Output",
    )
    return ExplorerController(
        store=store,
        navigator=navigator,
        builder=ListBuilder(store, Translator(), folder_exists=lambda _p: True),
        files=CatalogFiles(config.data_dir),
        config=config,
        state=UiState(),
    )


def test_dispatch_and_back_update_state_and_notify(tmp_path):
    controller = _controller(tmp_path)
    calls = []
    controller.on_change = lambda: calls.append(1)
    assert controller.dispatch(SelectAvatar("/a1")) == (True, None)
    assert controller.dispatch(SelectCategory(ItemType.ACCESSORY)) == (True, None)
    view = controller.view()
    assert view.window == Window.ITEM_LIST
    assert controller.state.breadcrumb == "A1 / Accessory"
    assert controller.back() == (True, None)
    assert controller.back() == (True, None)
    assert controller.back() == (False, "Nothing to go back to.")
    assert controller.dispatch(Back()) == (False, "Nothing to go back to.")
    assert len(calls) == 4


def test_dispatch_reports_missing_folder(tmp_path):
    controller = _controller(tmp_path, missing={"/hat"})
    controller.dispatch(SelectAvatar("/a1"))
    controller.dispatch(SelectCategory(ItemType.ACCESSORY))
    ok, message = controller.dispatch(SelectItem("/hat"))
    assert ok is False
    assert message == "Folder not found."
    assert controller.navigator.window == Window.ITEM_LIST


def test_dispatch_open_file_is_left_to_front_end(tmp_path):
    controller = _controller(tmp_path)
    assert controller.dispatch(OpenFile("/x/a.png")) == (True, None)
    assert controller.navigator.is_empty


def test_search_sets_result_text(tmp_path):
    controller = _controller(tmp_path)
    controller.search("hat")
    view = controller.view()
    assert [r.title for r in view.rows] == ["Hat"]
    assert controller.state.search_result_text == "Search results: 1 (of 3)"
    controller.clear_search()
    assert controller.view().rows == ()


def test_empty_query_clears_result_text_and_keeps_view(tmp_path):
    controller = _controller(tmp_path)
    controller.dispatch(SelectAvatar("/a1"))
    controller.dispatch(SelectCategory(ItemType.ACCESSORY))
    controller.search("hat")
    assert controller.view().search_result_text == "Search results: 1 (of 3)"
    controller.search("")
    view = controller.view()
    assert view.search_result_text == ""
    assert view.searching is False
    assert view.window == Window.ITEM_LIST
    assert [r.title for r in view.rows] == ["Hat"]
    assert controller.state.search_text == ""


def test_search_author_searches_from_the_root(tmp_path):
    controller = _controller(tmp_path)
    calls = []
    controller.on_change = lambda: calls.append(1)
    controller.dispatch(SelectAvatar("/b1"))
    controller.search_author('Author="Jane"')
    assert controller.navigator.is_empty
    assert controller.navigator.searching
    view = controller.view()
    assert [r.title for r in view.rows] == ["A1", "B1", "Hat"]
    assert controller.state.search_text == 'Author="Jane"'
    assert calls


def test_delete_avatar_accepting_repairs_and_persists(tmp_path):
    controller = _controller(tmp_path)
    controller.dispatch(SelectAvatar("/a1"))
    questions = []

    def yes(question: str) -> bool:
        questions.append(question)
        return True

    ok, message = controller.delete_item("/a1", yes, yes, yes)
    assert (ok, message) == (True, "Deleted.")
    assert len(questions) == 3
    assert controller.store.get_item("/hat").supported_avatars == []
    assert controller.store.find_group("Base").avatars == ["/b1"]
    assert controller.navigator.is_empty
    loaded = CatalogFiles(tmp_path / "Datas").load_items()
    assert [i.item_path for i in loaded] == ["/b1", "/hat"]


def test_delete_avatar_declining_strips_keeps_references(tmp_path):
    controller = _controller(tmp_path)
    ok, _ = controller.delete_item(
        "/a1",
        confirm_delete=lambda _q: True,
        confirm_strip_supported=lambda _q: False,
        confirm_strip_groups=lambda _q: False,
    )
    assert ok
    assert controller.store.get_item("/hat").supported_avatars == ["/a1"]
    assert controller.store.find_group("Base").avatars == ["/a1", "/b1"]


def test_delete_cancelled_changes_nothing(tmp_path):
    controller = _controller(tmp_path)
    assert controller.delete_item("/hat", confirm_delete=lambda _q: False) == (False, None)
    assert controller.store.find_item("/hat") is not None
    assert not (tmp_path / "Datas").exists()


def test_delete_non_avatar_asks_only_once(tmp_path):
    controller = _controller(tmp_path)
    questions = []
    controller.delete_item("/hat", confirm_delete=lambda q: questions.append(q) or True)
    assert questions == ["Really delete this item?"]


def test_edit_item_repairs_references_and_follows_navigation(tmp_path):
    controller = _controller(tmp_path)
    controller.dispatch(SelectAvatar("/a1"))
    edited = Item(title="A1 v2", author_name="Jane", item_path="/a1v2", type=ItemType.AVATAR)
    assert controller.edit_item("/a1", edited) == (True, None)
    assert controller.store.get_item("/hat").supported_avatars == ["/a1v2"]
    assert controller.navigator.selected_avatar_title == "A1 v2"
    assert controller.edit_item("/missing", edited) == (False, "Item not found.")


def test_add_item_rejects_duplicates(tmp_path):
    controller = _controller(tmp_path)
    ok, message = controller.add_item(_item("Hat", ItemType.ACCESSORY))
    assert ok is False
    assert "Duplicate" in message
    assert controller.add_item(_item("Coat", ItemType.CLOTHING)) == (True, None)


def test_save_failure_is_reported(tmp_path):
    controller = _controller(tmp_path)
    (tmp_path / "Datas").write_text("not a directory", encoding="utf-8")
    assert controller.save() == (False, "Could not save data.")


def test_custom_categories_and_images(tmp_path):
    controller = _controller(tmp_path)
    assert controller.add_custom_category("Props") == (True, None)
    assert controller.add_custom_category("Props")[0] is False
    assert controller.remove_custom_category("Props") == (True, None)
    assert controller.change_thumbnail("/hat", "/img/hat.png") == (True, None)
    assert controller.store.get_item("/hat").image_path == "/img/hat.png"
    assert controller.change_author_image("Nobody", "x.png") == (False, "Item not found.")


def test_set_language_and_sort(tmp_path):
    controller = _controller(tmp_path)
    controller.set_language("ja-JP")
    controller.set_sort(SortKey.AUTHOR)
    assert controller.state.language == "ja-JP"
    assert controller.state.sort_key == SortKey.AUTHOR
    assert controller.root_category_rows()[0].title == "アバター"


def test_auto_backup_and_window_title(tmp_path):
    controller = _controller(tmp_path)
    controller.save()
    assert controller.run_auto_backup() is True
    assert any((tmp_path / "Backup" / "Auto").iterdir())
    later = controller.backup_status.last_success + timedelta(minutes=3)
    assert controller.window_title(later) == "Avatar Explorer - Last auto backup: 3 min ago"


def test_manual_backup_and_export(tmp_path):
    controller = _controller(tmp_path)
    controller.save()
    ok, message = controller.make_backup()
    assert ok and message.startswith("Backup saved: ")
    ok, message = controller.export_csv()
    assert ok and message.endswith(".csv")
    assert list((tmp_path / "Output").glob("*.csv"))


def test_manual_backup_without_data_dir_fails(tmp_path):
    controller = _controller(tmp_path)
    assert controller.make_backup() == (False, "Backup failed.")
    assert not (tmp_path / "Backup").exists()
