"""Common avatar group editor."""

from gi.repository import Adw, Gtk

from avatar_explorer.ui.controllers.common_avatar_controller import CommonAvatarController


class CommonAvatarDialog(Adw.Window):
    """Pick a group by name, toggle member avatars, save or delete."""

    def __init__(self, parent: Gtk.Window | None, controller: CommonAvatarController) -> None:
        super().__init__(modal=True, title="Common avatars")
        if parent is not None:
            self.set_transient_for(parent)
        self.set_default_size(560, 640)
        self._controller = controller
        self._updating = False
        self._toggles: list[tuple[str, Gtk.ToggleButton]] = []

        toolbar_view = Adw.ToolbarView()
        self.set_content(toolbar_view)
        toolbar_view.add_top_bar(Adw.HeaderBar())

        body = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)
        body.set_margin_top(12)
        body.set_margin_bottom(12)
        body.set_margin_start(12)
        body.set_margin_end(12)
        toolbar_view.set_content(body)

        name_row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        body.append(name_row)
        self._name = Gtk.Entry()
        self._name.set_placeholder_text("Group name")
        self._name.set_hexpand(True)
        self._name.connect("changed", self._on_name_changed)
        name_row.append(self._name)

        self._existing = Gtk.DropDown.new_from_strings([""] + controller.group_names())
        self._existing.connect("notify::selected", self._on_existing_selected)
        name_row.append(self._existing)

        scroll = Gtk.ScrolledWindow()
        scroll.set_vexpand(True)
        body.append(scroll)
        self._avatar_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        scroll.set_child(self._avatar_box)

        buttons = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        body.append(buttons)
        save = Gtk.Button(label="Add / update")
        save.add_css_class("suggested-action")
        save.connect("clicked", self._on_save_clicked)
        buttons.append(save)
        delete = Gtk.Button(label="Delete group")
        delete.add_css_class("destructive-action")
        delete.connect("clicked", self._on_delete_clicked)
        buttons.append(delete)

        self._status = Gtk.Label(xalign=0)
        body.append(self._status)

        self._render_avatars()

    def _render_avatars(self) -> None:
        child = self._avatar_box.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            self._avatar_box.remove(child)
            child = next_child
        self._toggles = []
        for choice in self._controller.avatar_choices(self._name.get_text()):
            toggle = Gtk.ToggleButton(label=f"{choice.title}\n{choice.subtitle}")
            toggle.set_active(choice.selected)
            self._avatar_box.append(toggle)
            self._toggles.append((choice.item_path, toggle))

    def _reload_names(self) -> None:
        self._updating = True
        try:
            names = Gtk.StringList.new([""] + self._controller.group_names())
            self._existing.set_model(names)
            self._existing.set_selected(0)
        finally:
            self._updating = False

    def _on_name_changed(self, _entry: Gtk.Entry) -> None:
        if not self._updating:
            self._render_avatars()

    def _on_existing_selected(self, dropdown: Gtk.DropDown, _pspec: object) -> None:
        if self._updating:
            return
        item = dropdown.get_selected_item()
        name = item.get_string() if item is not None else ""
        if name:
            self._name.set_text(name)

    def _on_save_clicked(self, _button: Gtk.Button) -> None:
        selected = [path for path, toggle in self._toggles if toggle.get_active()]
        ok, message = self._controller.save_group(self._name.get_text(), selected)
        self._status.set_text(message or "")
        if ok:
            self._reload_names()

    def _on_delete_clicked(self, _button: Gtk.Button) -> None:
        ok, message = self._controller.delete_group(self._name.get_text())
        self._status.set_text(message or "")
        if ok:
            self._name.set_text("")
            self._reload_names()
