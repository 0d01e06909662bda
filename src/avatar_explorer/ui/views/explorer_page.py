"""Explorer page view: browse lists on the left, explorer rows on the right."""

from __future__ import annotations

from typing import Callable

from gi.repository import Adw, Gdk, Gio, GLib, Gtk, Pango

from avatar_explorer.engine.commands import OpenFile
from avatar_explorer.engine.list_builder import Row, RowAction
from avatar_explorer.models.constants import ItemType, SortKey
from avatar_explorer.ui.controllers.explorer_controller import ExplorerController
from avatar_explorer.ui.views.item_dialog import ItemDialog


BROWSE_MODES: tuple[tuple[str, str], ...] = (
    ("avatar", "Avatar"),
    ("author", "Author"),
    ("category", "Category"),
)


class ExplorerPage(Gtk.Box):
    """Avatar/author/category browser with search and context actions."""

    def __init__(self, controller: ExplorerController) -> None:
        super().__init__(orientation=Gtk.Orientation.VERTICAL, spacing=8)
        self._controller = controller
        self._updating = False
        self._browse_mode = "avatar"
        self._rows_by_widget: dict[Gtk.ListBoxRow, Row] = {}

        self.set_margin_top(12)
        self.set_margin_bottom(12)
        self.set_margin_start(12)
        self.set_margin_end(12)
        self.set_hexpand(True)
        self.set_vexpand(True)

        controls = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        self.append(controls)

        self._back_button = Gtk.Button(icon_name="go-previous-symbolic")
        self._back_button.set_tooltip_text("Back")
        self._back_button.connect("clicked", self._on_back_clicked)
        controls.append(self._back_button)

        self._search = Gtk.SearchEntry()
        self._search.set_placeholder_text('Author="Name" Category=Accessory words...')
        self._search.set_hexpand(True)
        self._search.connect("search-changed", self._on_search_changed)
        controls.append(self._search)

        self._sort_dropdown = Gtk.DropDown.new_from_strings(["Title", "Author"])
        self._sort_dropdown.connect("notify::selected", self._on_sort_changed)
        controls.append(self._sort_dropdown)

        add_button = Gtk.Button(label="Add item")
        add_button.connect("clicked", self._on_add_clicked)
        controls.append(add_button)

        self._breadcrumb = Gtk.Label(xalign=0)
        self._breadcrumb.add_css_class("dim-label")
        self._breadcrumb.set_ellipsize(Pango.EllipsizeMode.END)
        self.append(self._breadcrumb)

        self._status_label = Gtk.Label(xalign=0)
        self.append(self._status_label)

        split = Gtk.Paned(orientation=Gtk.Orientation.HORIZONTAL)
        split.set_wide_handle(True)
        split.set_shrink_start_child(False)
        split.set_hexpand(True)
        split.set_vexpand(True)
        self.append(split)

        browse_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        browse_box.set_size_request(300, -1)
        split.set_start_child(browse_box)

        mode_row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=4)
        mode_row.add_css_class("linked")
        browse_box.append(mode_row)
        anchor: Gtk.ToggleButton | None = None
        self._mode_buttons: dict[str, Gtk.ToggleButton] = {}
        for mode, label in BROWSE_MODES:
            btn = Gtk.ToggleButton(label=label)
            if anchor is None:
                anchor = btn
            else:
                btn.set_group(anchor)
            btn.connect("toggled", self._on_mode_toggled, mode)
            mode_row.append(btn)
            self._mode_buttons[mode] = btn

        self._browse_list = self._make_list(browse_box)

        explorer_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        split.set_end_child(explorer_box)
        self._result_label = Gtk.Label(xalign=0)
        explorer_box.append(self._result_label)
        self._explorer_list = self._make_list(explorer_box)

        self._mode_buttons["avatar"].set_active(True)
        self.refresh()

    # -- Rendering ---------------------------------------------------------------

    def refresh(self) -> None:
        self._updating = True
        try:
            self._rows_by_widget = {}
            self._render_browse()
            self._render_explorer()
            self._back_button.set_sensitive(self._controller.navigator.can_go_back)
        finally:
            self._updating = False

    def _render_browse(self) -> None:
        if self._browse_mode == "author":
            rows = self._controller.author_rows()
        elif self._browse_mode == "category":
            rows = self._controller.root_category_rows()
        else:
            rows = self._controller.avatar_rows()
        self._fill(self._browse_list, rows)

    def _render_explorer(self) -> None:
        view = self._controller.view()
        t = self._controller.translator.translate
        self._breadcrumb.set_text(view.breadcrumb or t("The current path is shown here"))
        self._result_label.set_text(view.search_result_text)
        self._fill(self._explorer_list, list(view.rows))

    def _fill(self, listbox: Gtk.ListBox, rows: list[Row]) -> None:
        self._clear_list(listbox)
        for row in rows:
            widget = Gtk.ListBoxRow()
            widget.set_activatable(row.command is not None)
            widget.set_child(self._row_content(row))
            if row.tooltip:
                widget.set_tooltip_text(row.tooltip)
            if row.actions:
                click = Gtk.GestureClick(button=Gdk.BUTTON_SECONDARY)
                click.connect("pressed", self._on_row_secondary_click, widget, row)
                widget.add_controller(click)
            listbox.append(widget)
            self._rows_by_widget[widget] = row

    def _row_content(self, row: Row) -> Gtk.Widget:
        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        box.set_margin_top(4)
        box.set_margin_bottom(4)
        image = Gtk.Image()
        image.set_pixel_size(48)
        if row.thumbnail_path and GLib.file_test(row.thumbnail_path, GLib.FileTest.EXISTS):
            image.set_from_file(row.thumbnail_path)
        else:
            image.set_from_icon_name("image-missing-symbolic")
        box.append(image)

        text = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        title = Gtk.Label(label=row.title, xalign=0)
        title.add_css_class("heading")
        title.set_wrap(True)
        text.append(title)
        subtitle = Gtk.Label(label=row.subtitle, xalign=0)
        subtitle.add_css_class("dim-label")
        text.append(subtitle)
        box.append(text)
        return box

    # -- Signal handlers -------------------------------------------------------

    def _on_row_activated(self, _list: Gtk.ListBox, widget: Gtk.ListBoxRow) -> None:
        if self._updating:
            return
        row = self._rows_by_widget.get(widget)
        if row is None or row.command is None:
            return
        if isinstance(row.command, OpenFile):
            self._launch(GLib.filename_to_uri(row.command.file_path, None))
            return
        if self._search.get_text():
            self._updating = True
            self._search.set_text("")
            self._updating = False
        ok, message = self._controller.dispatch(row.command)
        self._show_status(ok, message)
        self.refresh()

    def _on_back_clicked(self, _button: Gtk.Button) -> None:
        was_searching = self._controller.navigator.searching
        ok, message = self._controller.back()
        if was_searching:
            self._updating = True
            self._search.set_text("")
            self._updating = False
        self._show_status(ok, message)
        self.refresh()

    def _on_search_changed(self, entry: Gtk.SearchEntry) -> None:
        if self._updating:
            return
        self._controller.search(entry.get_text())
        self.refresh()

    def _on_sort_changed(self, dropdown: Gtk.DropDown, _pspec: object) -> None:
        key = SortKey.AUTHOR if dropdown.get_selected() == 1 else SortKey.TITLE
        self._controller.set_sort(key)
        self.refresh()

    def _on_mode_toggled(self, button: Gtk.ToggleButton, mode: str) -> None:
        if not button.get_active() or not hasattr(self, "_explorer_list"):
            return
        self._browse_mode = mode
        self.refresh()

    def _on_add_clicked(self, _button: Gtk.Button) -> None:
        dialog = ItemDialog(self.get_root(), self._controller, None, on_done=self._on_dialog_done)
        dialog.present()

    def _on_dialog_done(self, ok: bool, message: str | None) -> None:
        self._show_status(ok, message)
        self.refresh()

    def _on_row_secondary_click(
        self,
        _gesture: Gtk.GestureClick,
        _n_press: int,
        _x: float,
        _y: float,
        widget: Gtk.ListBoxRow,
        row: Row,
    ) -> None:
        popover = Gtk.Popover()
        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        for action in row.actions:
            btn = Gtk.Button(label=action.label)
            btn.add_css_class("flat")
            btn.connect("clicked", self._on_action_clicked, popover, action)
            box.append(btn)
        popover.set_child(box)
        popover.set_parent(widget)
        popover.popup()

    def _on_action_clicked(self, _button: Gtk.Button, popover: Gtk.Popover, action: RowAction) -> None:
        popover.popdown()
        kind = action.kind
        if kind == "copy_booth_link":
            self.get_clipboard().set(action.payload)
        elif kind == "open_booth_link":
            self._launch(action.payload)
        elif kind == "open_folder":
            self._launch(GLib.filename_to_uri(action.payload, None))
        elif kind == "reveal_file":
            parent = GLib.path_get_dirname(action.payload)
            self._launch(GLib.filename_to_uri(parent, None))
        elif kind == "search_author":
            self._updating = True
            self._search.set_text(action.payload)
            self._updating = False
            self._controller.search_author(action.payload)
            self.refresh()
        elif kind == "change_thumbnail":
            self._pick_image(lambda path: self._controller.change_thumbnail(action.payload, path))
        elif kind == "change_author_image":
            self._pick_image(lambda path: self._controller.change_author_image(action.payload, path))
        elif kind == "edit_item":
            item = self._controller.store.find_item(action.payload)
            if item is not None:
                ItemDialog(self.get_root(), self._controller, item, on_done=self._on_dialog_done).present()
        elif kind == "delete_item":
            self._delete_with_prompts(action.payload)

    # -- Helpers -------------------------------------------------------------------

    def _delete_with_prompts(self, item_path: str) -> None:
        """Collect the yes/no answers asynchronously, then delete."""
        item = self._controller.store.find_item(item_path)
        if item is None:
            return
        t = self._controller.translator.translate
        questions = [t("Really delete this item?")]
        if item.type == ItemType.AVATAR:
            questions.append(t("Remove this avatar from items that list it as supported?"))
            if self._controller.store.groups_containing(item_path):
                questions.append(t("Remove this avatar from common avatar groups?"))
        answers: dict[str, bool] = {}

        def ask(index: int) -> None:
            if index == len(questions):
                ok, message = self._controller.delete_item(
                    item_path,
                    confirm_delete=lambda q: answers.get(q, False),
                    confirm_strip_supported=lambda q: answers.get(q, False),
                    confirm_strip_groups=lambda q: answers.get(q, False),
                )
                self._show_status(ok, message)
                self.refresh()
                return

            def on_answer(yes: bool) -> None:
                answers[questions[index]] = yes
                if index == 0 and not yes:
                    return
                ask(index + 1)

            self._confirm(questions[index], on_answer)

        ask(0)

    def _confirm(self, question: str, callback: Callable[[bool], None]) -> None:
        dialog = Adw.MessageDialog(transient_for=self.get_root(), heading=question)
        dialog.add_response("no", "No")
        dialog.add_response("yes", "Yes")
        dialog.set_response_appearance("yes", Adw.ResponseAppearance.DESTRUCTIVE)
        dialog.connect("response", lambda _d, response: callback(response == "yes"))
        dialog.present()

    def _pick_image(self, apply: Callable[[str], tuple[bool, str | None]]) -> None:
        dialog = Gtk.FileDialog()
        images = Gtk.FileFilter()
        images.add_pixbuf_formats()
        filters = Gio.ListStore.new(Gtk.FileFilter)
        filters.append(images)
        dialog.set_filters(filters)

        def on_open(source: Gtk.FileDialog, result: Gio.AsyncResult) -> None:
            try:
                file = source.open_finish(result)
            except GLib.Error:
                return  # cancelled
            if file is None:
                return
            ok, message = apply(file.get_path())
            self._show_status(ok, message)
            self.refresh()

        dialog.open(self.get_root(), None, on_open)

    def _launch(self, uri: str) -> None:
        try:
            Gio.AppInfo.launch_default_for_uri(uri, None)
        except GLib.Error as exc:
            self._show_status(False, exc.message)

    def _show_status(self, ok: bool, message: str | None) -> None:
        self._status_label.set_text(message or "")
        if ok:
            self._status_label.remove_css_class("error")
        else:
            self._status_label.add_css_class("error")

    def _make_list(self, parent: Gtk.Box) -> Gtk.ListBox:
        scroll = Gtk.ScrolledWindow()
        scroll.set_policy(Gtk.PolicyType.NEVER, Gtk.PolicyType.AUTOMATIC)
        scroll.set_vexpand(True)
        parent.append(scroll)
        listbox = Gtk.ListBox()
        listbox.set_selection_mode(Gtk.SelectionMode.NONE)
        listbox.connect("row-activated", self._on_row_activated)
        scroll.set_child(listbox)
        return listbox

    def _clear_list(self, listbox: Gtk.ListBox) -> None:
        child = listbox.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            listbox.remove(child)
            child = next_child
