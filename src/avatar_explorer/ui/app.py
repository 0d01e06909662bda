"""GTK4 + Libadwaita application bootstrap."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

try:
    import gi
except ImportError as exc:  # pragma: no cover - import guard for missing system deps
    raise SystemExit(
        "PyGObject is required to run the UI. "
        "Install GTK4/Libadwaita bindings, then run `python -m avatar_explorer.ui.app`."
    ) from exc

gi.require_version("Gtk", "4.0")
gi.require_version("Adw", "1")

from gi.repository import Adw, Gio, Gtk
from rich.logging import RichHandler

from avatar_explorer.engine.explorer_config import ExplorerConfig
from avatar_explorer.models.translations import SUPPORTED_LANGUAGES
from avatar_explorer.ui.bootstrap import ExplorerSession, bootstrap_default_session
from avatar_explorer.ui.state import UiState
from avatar_explorer.ui.views.window import MainWindow


APP_ID = "io.github.avatarexplorer.App"

logger = logging.getLogger(__name__)


class AvatarExplorerApp(Adw.Application):
    """Application object and activation lifecycle."""

    def __init__(self, config: ExplorerConfig) -> None:
        super().__init__(application_id=APP_ID, flags=Gio.ApplicationFlags.FLAGS_NONE)
        self._session: ExplorerSession
        self._state: UiState
        self._session, self._state = bootstrap_default_session(config)

    def do_activate(self) -> None:  # type: ignore[override]
        window = self.props.active_window
        if window is None:
            try:
                window = MainWindow(self, self._state, self._session)
            except RuntimeError as exc:
                raise SystemExit(
                    "Gtk couldn't initialize a display. Run this app from a desktop session."
                ) from exc
        window.present()


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse an avatar/item catalog.")
    parser.add_argument("--data", help="Data directory (default: $AVATAR_EXPLORER_DATA or ./Datas)")
    parser.add_argument("--lang", choices=SUPPORTED_LANGUAGES, help="UI language")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args()


def main() -> None:
    """Run the desktop app."""
    args = _parse_args()
    logging.basicConfig(
        level="DEBUG" if args.verbose else "INFO",
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler()],
    )
    try:
        config = ExplorerConfig.from_env()
        if args.data:
            config.data_dir = Path(args.data)
        if args.lang:
            config.language = args.lang
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    init_ok = Gtk.init_check()
    if isinstance(init_ok, tuple):
        init_ok = init_ok[0]
    if not init_ok:
        raise SystemExit(
            "Gtk display initialization failed. Run the UI inside a desktop session."
        )
    app = AvatarExplorerApp(config)
    try:
        app.run([])
    except KeyboardInterrupt:
        logger.debug("Interrupted")
        return


if __name__ == "__main__":
    main()
