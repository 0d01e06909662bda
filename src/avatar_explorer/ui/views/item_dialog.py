"""Add/edit dialog for a single item."""

from __future__ import annotations

from typing import Callable

from gi.repository import Adw, Gtk

from avatar_explorer.models.constants import NO_BOOTH_ID, ItemType
from avatar_explorer.models.item import Item
from avatar_explorer.ui.controllers.explorer_controller import ExplorerController


class ItemDialog(Adw.Window):
    """Form over the editable fields of an Item."""

    def __init__(
        self,
        parent: Gtk.Root | None,
        controller: ExplorerController,
        item: Item | None,
        on_done: Callable[[bool, str | None], None] | None = None,
    ) -> None:
        super().__init__(modal=True, title="Edit item" if item else "Add item")
        if isinstance(parent, Gtk.Window):
            self.set_transient_for(parent)
        self.set_default_size(520, 640)
        self._controller = controller
        self._original = item
        self._on_done = on_done
        self._types: list[ItemType] = list(ItemType)

        toolbar_view = Adw.ToolbarView()
        self.set_content(toolbar_view)
        header = Adw.HeaderBar()
        toolbar_view.add_top_bar(header)
        save = Gtk.Button(label="Save")
        save.add_css_class("suggested-action")
        save.connect("clicked", self._on_save_clicked)
        header.pack_end(save)

        form = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)
        form.set_margin_top(12)
        form.set_margin_bottom(12)
        form.set_margin_start(12)
        form.set_margin_end(12)
        toolbar_view.set_content(form)

        t = controller.translator.translate
        self._title = self._entry(form, t("Title"), item.title if item else "")
        self._author = self._entry(form, t("Author"), item.author_name if item else "")
        self._path = self._entry(form, "Folder", item.item_path if item else "")
        self._material = self._entry(form, t("Material"), item.material_path if item else "")
        booth = str(item.booth_id) if item and item.has_booth_id else ""
        self._booth = self._entry(form, "Booth ID", booth)

        labels = [controller.translator.category_name(t_) for t_ in self._types]
        self._type = Gtk.DropDown.new_from_strings(labels)
        self._type.set_selected(self._types.index(item.type if item else ItemType.AVATAR))
        form.append(Gtk.Label(label=t("Category"), xalign=0))
        form.append(self._type)
        self._custom = self._entry(form, t("Custom"), item.custom_category if item else "")

        form.append(Gtk.Label(label=t("Avatar"), xalign=0))
        scroll = Gtk.ScrolledWindow()
        scroll.set_vexpand(True)
        form.append(scroll)
        avatar_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        scroll.set_child(avatar_box)
        supported = set(item.supported_avatars) if item else set()
        self._avatar_checks: list[tuple[str, Gtk.CheckButton]] = []
        for avatar in controller.store.avatars():
            if item is not None and avatar.item_path == item.item_path:
                continue
            check = Gtk.CheckButton(label=avatar.title)
            check.set_active(avatar.item_path in supported)
            avatar_box.append(check)
            self._avatar_checks.append((avatar.item_path, check))

        self._error = Gtk.Label(xalign=0)
        self._error.add_css_class("error")
        form.append(self._error)

    def _entry(self, form: Gtk.Box, label: str, value: str) -> Gtk.Entry:
        form.append(Gtk.Label(label=label, xalign=0))
        entry = Gtk.Entry()
        entry.set_text(value)
        form.append(entry)
        return entry

    def _collect(self) -> Item:
        booth_text = self._booth.get_text().strip()
        if booth_text and not booth_text.isdigit():
            raise ValueError("Booth ID must be a number")
        item_type = self._types[self._type.get_selected()]
        previous = self._original
        return Item(
            title=self._title.get_text().strip(),
            author_name=self._author.get_text().strip(),
            item_path=self._path.get_text().strip(),
            type=item_type,
            author_image_path=previous.author_image_path if previous else "",
            image_path=previous.image_path if previous else "",
            custom_category=self._custom.get_text().strip() if item_type == ItemType.CUSTOM else "",
            supported_avatars=[path for path, check in self._avatar_checks if check.get_active()],
            booth_id=int(booth_text) if booth_text else NO_BOOTH_ID,
            material_path=self._material.get_text().strip(),
        )

    def _on_save_clicked(self, _button: Gtk.Button) -> None:
        try:
            item = self._collect()
        except ValueError as exc:
            self._error.set_text(str(exc))
            return
        if self._original is None:
            ok, message = self._controller.add_item(item)
        else:
            ok, message = self._controller.edit_item(self._original.item_path, item)
        if not ok:
            self._error.set_text(message or "Could not save item")
            return
        if self._on_done is not None:
            self._on_done(ok, message)
        self.close()
