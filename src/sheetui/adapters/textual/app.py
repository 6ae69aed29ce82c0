"""Executable Textual app that hosts the spreadsheet engine."""

from __future__ import annotations

import argparse
import os
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use sheetui.adapters.textual.app"
    ) from exc

from sheetui.collaborators import InMemoryWorkbook, PyperclipClipboard
from sheetui.controller import InteractionController
from sheetui.errors import SheetUIError
from sheetui.model import RenderState
from sheetui.modes import KeyInput
from sheetui.runtime import EngineConfig, telemetry
from sheetui.runtime.input_log import InputLogWriter, read_input_log, replay

from .controller import TextualSheetAdapter, TextualUIHooks, format_grid, normalize_key


def build_controller(path: str, config: EngineConfig) -> InteractionController:
    """Open (or start) the workbook at ``path`` and wrap it in a controller."""

    workbook = InMemoryWorkbook(
        path=path,
        rows=config.sheet_rows,
        cols=config.sheet_cols,
        locale=config.locale,
        timezone=config.timezone,
    )
    if os.path.exists(path):
        workbook.load(path)
    system_clipboard = PyperclipClipboard() if config.system_clipboard else None
    return InteractionController(
        workbook, system_clipboard=system_clipboard, config=config
    )


class SheetApp(App[None]):
    """Plain text grid plus status and command lines."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#grid-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#help-popup {
		height: auto;
		max-height: 50%;
		border: double $warning;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        controller: InteractionController,
        *,
        replay_keys: Sequence[KeyInput] = (),
        input_log_path: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.adapter: TextualSheetAdapter | None = None
        self._replay_keys = list(replay_keys)
        self._input_log_path = input_log_path
        self._input_log: InputLogWriter | None = None
        self._grid_widget: Static | None = None
        self._popup_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="grid-area"):
            self._grid_widget = Static("", id="grid-view", markup=False)
            yield self._grid_widget
            self._popup_widget = Static("", id="help-popup", markup=False)
            self._popup_widget.display = False
            yield self._popup_widget
        self._status_widget = Static("", id="status-line", markup=False)
        self._command_widget = Static("", id="command-line", markup=False)
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        if self._input_log_path:
            self._input_log = InputLogWriter(self._input_log_path)
        hooks = TextualUIHooks(
            update_grid=self._update_grid,
            update_status=self._update_status,
            show_command=self._show_command,
            show_popup=self._show_popup,
            log=self._log_line,
        )
        self.adapter = TextualSheetAdapter(
            self.controller, hooks, input_log=self._input_log
        )
        if self._replay_keys:
            replay(self.controller, self._replay_keys)
            self.adapter.refresh()
        if not self.controller.running:
            self.exit()

    async def on_unmount(self) -> None:
        if self._input_log is not None:
            self._input_log.close()
            self._input_log = None

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = normalize_key(event.key, event.character)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        if not self.controller.running:
            self.exit()

    def _update_grid(self, state: RenderState) -> None:
        if self._grid_widget:
            rows = self._grid_widget.size.height - 1
            grid = format_grid(self.controller, state, height=rows if rows > 0 else 20)
            self._grid_widget.update(grid)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        if self._command_widget:
            self._command_widget.update(command)

    def _show_popup(self, text: Optional[str]) -> None:
        if self._popup_widget:
            self._popup_widget.update(text or "")
            self._popup_widget.display = bool(text)

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("sheetui.adapters.textual").debug(line)


def _parse_args(
    argv: Optional[Sequence[str]] = None,
) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(
        prog="sheetui", description="Modal terminal spreadsheet editor."
    )
    parser.add_argument("workbook", help="Workbook file (created on first write)")
    parser.add_argument(
        "--locale", default=None, help="Locale for value display (default: $SHEETUI_LOCALE or en)"
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="Timezone for date values (default: $SHEETUI_TIMEZONE or America/New_York)",
    )
    parser.add_argument(
        "--input-log", default=None, help="Record every key event to this JSON-lines file"
    )
    parser.add_argument(
        "--replay", default=None, help="Replay a recorded input log before accepting keys"
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default="production",
        help="Telemetry preset (default: production, file only)",
    )
    return parser, parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser, args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    replay_keys: List[KeyInput] = []
    try:
        config = EngineConfig.from_env().override(
            locale=args.locale, timezone=args.timezone, input_log=args.input_log
        )
        controller = build_controller(args.workbook, config)
        if args.replay:
            replay_keys = read_input_log(args.replay)
    except (SheetUIError, OSError) as exc:
        parser.exit(2, f"sheetui: {exc}\n")
    app = SheetApp(controller, replay_keys=replay_keys, input_log_path=config.input_log)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
