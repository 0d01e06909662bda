"""Main application window."""

from gi.repository import Adw, GLib, Gtk

from avatar_explorer.models.translations import SUPPORTED_LANGUAGES
from avatar_explorer.ui.bootstrap import ExplorerSession
from avatar_explorer.ui.state import UiState
from avatar_explorer.ui.views.common_avatar_dialog import CommonAvatarDialog
from avatar_explorer.ui.views.explorer_page import ExplorerPage


class MainWindow(Adw.ApplicationWindow):
    """Top-level window: header actions plus the explorer page."""

    def __init__(self, app: Adw.Application, state: UiState, session: ExplorerSession) -> None:
        super().__init__(application=app, title=state.banner_title)
        self._state = state
        self._session = session
        self._controller = session.explorer_controller(state)

        self.set_default_size(1280, 820)
        self.set_size_request(900, 600)

        toolbar_view = Adw.ToolbarView()
        self.set_content(toolbar_view)

        header = Adw.HeaderBar()
        toolbar_view.add_top_bar(header)

        self._title_label = Gtk.Label()
        self._title_label.add_css_class("title-4")
        header.set_title_widget(self._title_label)

        groups_button = Gtk.Button(label="Common avatars")
        groups_button.connect("clicked", self._on_groups_clicked)
        header.pack_start(groups_button)

        backup_button = Gtk.Button(label="Backup")
        backup_button.connect("clicked", self._on_backup_clicked)
        header.pack_end(backup_button)

        export_button = Gtk.Button(label="Export CSV")
        export_button.connect("clicked", self._on_export_clicked)
        header.pack_end(export_button)

        self._language = Gtk.DropDown.new_from_strings(list(SUPPORTED_LANGUAGES))
        self._language.set_selected(SUPPORTED_LANGUAGES.index(state.language))
        self._language.connect("notify::selected", self._on_language_changed)
        header.pack_end(self._language)

        self._page = ExplorerPage(self._controller)
        toolbar_view.set_content(self._page)

        self._controller.run_auto_backup()
        GLib.timeout_add_seconds(session.config.backup_interval_seconds, self._on_backup_timer)
        GLib.timeout_add_seconds(1, self._on_title_timer)
        self._sync_title()

    def _sync_title(self) -> None:
        title = self._controller.window_title()
        self._title_label.set_label(title)
        self.set_title(title)

    def _on_backup_timer(self) -> bool:
        self._controller.run_auto_backup()
        return GLib.SOURCE_CONTINUE

    def _on_title_timer(self) -> bool:
        self._sync_title()
        return GLib.SOURCE_CONTINUE

    def _on_backup_clicked(self, button: Gtk.Button) -> None:
        button.set_sensitive(False)
        try:
            ok, message = self._controller.make_backup()
        finally:
            button.set_sensitive(True)
        self._toast(message)

    def _on_export_clicked(self, button: Gtk.Button) -> None:
        button.set_sensitive(False)
        try:
            ok, message = self._controller.export_csv()
        finally:
            button.set_sensitive(True)
        self._toast(message)

    def _on_language_changed(self, dropdown: Gtk.DropDown, _pspec: object) -> None:
        self._controller.set_language(SUPPORTED_LANGUAGES[dropdown.get_selected()])
        self._page.refresh()
        self._sync_title()

    def _on_groups_clicked(self, _button: Gtk.Button) -> None:
        controller = self._session.common_avatar_controller()
        controller.translator = self._controller.translator
        controller.on_change = self._page.refresh
        CommonAvatarDialog(self, controller).present()

    def _toast(self, message: str | None) -> None:
        if not message:
            return
        dialog = Adw.MessageDialog(transient_for=self, heading=message)
        dialog.add_response("ok", "OK")
        dialog.present()
