"""Main application for the Waveform Editor"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import Optional

from .constants import SeriesConstants, UIConstants
from .core.errors import WaveformEditorError
from .core.renderer import WaveformRenderer
from .core.selection_model import (
    DragTarget,
    SelectedRange,
    SelectionModel,
    SelectorGeometry,
)
from .io.results import (
    FileIsTooBig,
    InvalidFile,
    LoadResult,
    NotEnoughPoints,
    SaveError,
    SaveResult,
    SaveSuccess,
    Success,
    UnknownError,
)
from .io.task_runner import FileTaskRunner, TaskKind, TaskResult
from .utils.settings_manager import SettingsManager

MIN_EXPORT_POINTS = 2


class WaveformEditor:
    """Main application class for the Waveform Editor.

    Connects the selection model and renderer to the window and runs file
    operations in the background.

    Attributes:
        settings_manager: Persistent user settings
        model: Selector handle state and sample series
        renderer: Turns the model into draw commands
        task_runner: Background file loading and saving
        window: User interface
    """

    def __init__(
        self,
        settings_manager: SettingsManager,
        debug: bool = False,
        window=None,
        task_runner: Optional[FileTaskRunner] = None,
    ):
        """Initialize the application.

        Args:
            settings_manager: Persistent user settings
            debug: Enable debug output
            window: User interface, a MainWindow is created if not given
            task_runner: Background file runner
        """
        self.settings_manager = settings_manager
        self.debug = debug

        density = settings_manager.get_setting("density", 1.0)
        if not isinstance(density, (int, float)) or density <= 0:
            print(f"Warning: Invalid density in settings: {density!r}, using 1.0")
            density = 1.0
        self.model = SelectionModel(SelectorGeometry.for_density(density), debug=debug)
        self.model.add_listener(self._on_new_selection)
        self.renderer = WaveformRenderer()
        self.task_runner = task_runner or FileTaskRunner(debug=debug)

        if window is None:
            from .ui.main_window import MainWindow

            window = MainWindow(
                self, geometry=settings_manager.get_setting("window_geometry")
            )
        self.window = window
        self.window.set_waveform_visible(False)

    # --- Loading ---

    def open_file(self, path: Optional[str] = None) -> None:
        """Start loading a sample file.

        Args:
            path: File to load, asks the user if not given
        """
        if path is None:
            path = self.window.ask_open_filename(
                self.settings_manager.get_setting("last_import_dir")
            )
        if not path:
            self.window.show_message("Error occurred while opening file!")
            return

        path = Path(path)
        self.settings_manager.update_setting("last_import_dir", str(path.parent))
        generation = self.task_runner.submit_load(path)
        if self.debug:
            print(f"[WaveformEditor] Loading {path} (#{generation})")

    def handle_load_result(self, result: LoadResult) -> None:
        """React to a finished load.

        Args:
            result: Outcome of reading the sample file
        """
        if isinstance(result, Success):
            self.show_samples(result.samples)
        elif isinstance(result, FileIsTooBig):
            self.window.show_message("File is too big, imported only part")
            self.show_samples(result.samples)
        elif isinstance(result, InvalidFile):
            if self.debug:
                print(
                    f"[WaveformEditor] Invalid file at line {result.line_number}: "
                    f"{result.reason}"
                )
            self.window.show_message("File is invalid!")
        elif isinstance(result, NotEnoughPoints):
            self.window.show_message(
                f"File must have at least {result.min_points} points!"
            )
        elif isinstance(result, UnknownError):
            print(f"Error loading samples: {result.message}", file=sys.stderr)
            self.window.show_message("Unknown error occurred while opening file!")
        else:
            raise TypeError(f"Unexpected load result: {result!r}")

    def show_samples(self, samples) -> None:
        """Display a new series with a full-width selection.

        Args:
            samples: Sequence of (neg_lobe, pos_lobe) pairs
        """
        try:
            self.model.load_series(samples)
        except WaveformEditorError as e:
            print(f"Error showing samples: {e}", file=sys.stderr)
            self.window.show_message("File is invalid!")
            return

        self.window.set_waveform_visible(len(samples) > 0)
        self.redraw()

    # --- Saving ---

    def save_file(self) -> None:
        """Export the committed selection to a new file."""
        selection = self.model.selected_range
        if len(selection) < MIN_EXPORT_POINTS:
            self.window.show_message(
                f"Please choose a valid slice with at least "
                f"{MIN_EXPORT_POINTS} points!"
            )
            return

        self.task_runner.submit_save(
            self.settings_manager.export_dir(), selection.samples
        )

    def handle_save_result(self, result: SaveResult) -> None:
        """React to a finished save.

        Args:
            result: Outcome of writing the selection
        """
        if isinstance(result, SaveSuccess):
            if self.debug:
                print(f"[WaveformEditor] Saved selection to {result.path}")
            self.window.show_message("Success!")
        elif isinstance(result, SaveError):
            print(f"Error saving selection: {result.message}", file=sys.stderr)
            self.window.show_message("Error!")
        else:
            raise TypeError(f"Unexpected save result: {result!r}")

    # --- Background results ---

    def poll_tasks(self) -> None:
        """Dispatch finished file tasks and schedule the next poll."""
        for task_result in self.task_runner.poll():
            self._dispatch(task_result)
        self.window.schedule(UIConstants.TASK_POLL_MS, self.poll_tasks)

    def _dispatch(self, task_result: TaskResult) -> None:
        if task_result.kind is TaskKind.LOAD:
            self.handle_load_result(task_result.result)
        else:
            self.handle_save_result(task_result.result)

    # --- Pointer and layout events ---

    def on_pointer_down(self, x: float) -> None:
        self.model.pointer_down(x)
        self.redraw()

    def on_pointer_move(self, x: float) -> None:
        if self.model.dragging is DragTarget.NONE:
            return
        self.model.pointer_move(x)
        self.redraw()

    def on_pointer_up(self) -> None:
        self.model.pointer_up()
        self.redraw()

    def on_resize(self, width: float, height: float) -> None:
        self.model.resize(width, height)
        self.redraw()

    def _on_new_selection(self, selection: SelectedRange) -> None:
        if self.debug and not selection.is_empty:
            print(
                f"[WaveformEditor] Selected samples {selection.start_index}"
                f"..{selection.end_index} ({len(selection)} points)"
            )

    def redraw(self) -> None:
        """Render the model and draw it."""
        self.window.draw(self.renderer.render(self.model))

    # --- Lifecycle ---

    def run(self) -> None:
        """Run the application."""
        self.poll_tasks()
        self.window.focus_window()
        self.window.run()

    def quit(self) -> None:
        """Persist settings, stop background work and close the window."""
        try:
            self.settings_manager.update_setting(
                "window_geometry", self.window.get_geometry()
            )
        finally:
            self.task_runner.shutdown()
            self.window.destroy()


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list, defaults to sys.argv

    Returns:
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Waveform Editor - select and export sample ranges",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    files = parser.add_argument_group("files")
    files.add_argument(
        "--file",
        type=str,
        help=(
            "sample file to open on start (one '<neg> <pos>' pair per line, "
            f"{SeriesConstants.MIN_POINTS}-{SeriesConstants.MAX_POINTS} lines)"
        ),
    )
    files.add_argument(
        "--export-dir", type=str, default=None, help="directory for exported selections"
    )

    display = parser.add_argument_group("display")
    display.add_argument(
        "--density",
        type=float,
        default=None,
        help="device pixels per density-independent pixel",
    )

    # Debug options
    parser.add_argument("--debug", action="store_true", help="enable debug output")

    return parser.parse_args(argv)


def _apply_command_line_overrides(args, settings_manager: SettingsManager) -> None:
    """Apply command line arguments to the persisted settings.

    Args:
        args: Parsed command line arguments
        settings_manager: Settings to modify
    """
    if args.export_dir is not None:
        settings_manager.update_setting("export_dir", args.export_dir)
    if args.density is not None:
        if args.density <= 0:
            print(f"Error: Density must be positive: {args.density}")
            sys.exit(1)
        settings_manager.update_setting("density", args.density)


def main(argv=None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    settings_manager = SettingsManager()
    _apply_command_line_overrides(args, settings_manager)

    if args.file and not Path(args.file).exists():
        print(f"Error: Sample file not found: {args.file}")
        sys.exit(1)

    # Create and run application
    try:
        app = WaveformEditor(settings_manager, debug=args.debug)
        if args.file:
            app.open_file(args.file)
        app.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        if args.debug:
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
