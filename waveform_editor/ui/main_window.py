"""Main window for the Waveform Editor.

The window hosts the waveform figure, the open/save buttons and a status
line for short messages. It forwards pointer and resize events to the
application and has no editing logic of its own.
"""

import tkinter as tk
from tkinter import filedialog
from typing import Callable, Optional, Protocol

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from ..constants import FileConstants, UIConstants
from ..core.renderer import DrawCommands
from .waveform_canvas import WaveformCanvas


class WindowCallbacks(Protocol):
    """Callbacks the window invokes on user interaction."""

    def open_file(self, path: Optional[str] = None) -> None: ...

    def save_file(self) -> None: ...

    def on_pointer_down(self, x: float) -> None: ...

    def on_pointer_move(self, x: float) -> None: ...

    def on_pointer_up(self) -> None: ...

    def on_resize(self, width: float, height: float) -> None: ...

    def quit(self) -> None: ...


class MainWindow:
    """Tkinter window with the waveform view and the file buttons.

    Attributes:
        root: Tkinter root window
        callbacks: Receiver of user interaction events
        fig: Matplotlib figure of the waveform view
        waveform: Canvas drawing the waveform frames
    """

    def __init__(
        self,
        callbacks: WindowCallbacks,
        root: Optional[tk.Tk] = None,
        geometry: Optional[str] = None,
    ):
        """Initialize the main window.

        Args:
            callbacks: Receiver of user interaction events
            root: Existing root window, created if not given
            geometry: Saved window geometry string
        """
        self.callbacks = callbacks
        self.root = root or tk.Tk()
        self.root.title("Waveform Editor")
        self.root.configure(bg=UIConstants.COLOR_BACKGROUND)
        self.root.geometry(
            geometry
            or f"{UIConstants.DEFAULT_WINDOW_WIDTH}x{UIConstants.DEFAULT_WINDOW_HEIGHT}"
        )
        self.root.protocol("WM_DELETE_WINDOW", self.callbacks.quit)

        self.status_var = tk.StringVar(value="")
        self._message_after_id: Optional[str] = None

        self._create_widgets()
        self._setup_event_bindings()

    def _create_widgets(self) -> None:
        """Create the waveform view, buttons and status line."""
        self.main_frame = tk.Frame(
            self.root,
            bg=UIConstants.COLOR_BACKGROUND,
            padx=UIConstants.MAIN_FRAME_PADDING,
            pady=UIConstants.MAIN_FRAME_PADDING,
        )
        self.main_frame.pack(fill=tk.BOTH, expand=True)

        self.wave_frame = tk.Frame(
            self.main_frame,
            bg=UIConstants.COLOR_BACKGROUND,
            height=UIConstants.WAVEFORM_HEIGHT,
        )
        self.wave_frame.pack(fill=tk.X)
        self.wave_frame.pack_propagate(False)

        self.fig = Figure(dpi=UIConstants.FIGURE_DPI)
        self.fig.patch.set_facecolor(UIConstants.COLOR_BACKGROUND)
        ax = self.fig.add_subplot(111)
        self.waveform = WaveformCanvas(ax)

        self.canvas = FigureCanvasTkAgg(self.fig, master=self.wave_frame)
        self.canvas_widget = self.canvas.get_tk_widget()
        self.canvas_widget.configure(highlightthickness=0)
        self._waveform_visible = False

        self.open_button = tk.Button(
            self.main_frame,
            text="Open File Picker",
            command=lambda: self.callbacks.open_file(),
        )
        self.open_button.pack(fill=tk.X, pady=(UIConstants.BUTTON_SPACING, 0))

        self.save_button = tk.Button(
            self.main_frame,
            text="Save new file",
            command=self.callbacks.save_file,
        )
        self.save_button.pack(fill=tk.X, pady=(UIConstants.BUTTON_SPACING, 0))

        self.status_label = tk.Label(
            self.main_frame,
            textvariable=self.status_var,
            bg=UIConstants.COLOR_BACKGROUND,
            fg=UIConstants.COLOR_TEXT_NORMAL,
        )
        self.status_label.pack(fill=tk.X, pady=(UIConstants.BUTTON_SPACING, 0))

    def _setup_event_bindings(self) -> None:
        """Set up mouse and resize event bindings."""
        self.canvas_widget.bind("<ButtonPress-1>", self._on_press)
        self.canvas_widget.bind("<B1-Motion>", self._on_motion)
        self.canvas_widget.bind("<ButtonRelease-1>", self._on_release)
        # The matplotlib canvas resizes itself on <Configure>; keep its handler
        self.canvas_widget.bind("<Configure>", self._on_configure, add="+")

    # --- Event adapters ---

    def _on_press(self, event) -> None:
        self.callbacks.on_pointer_down(event.x)

    def _on_motion(self, event) -> None:
        self.callbacks.on_pointer_move(event.x)

    def _on_release(self, event) -> None:
        self.callbacks.on_pointer_up()

    def _on_configure(self, event) -> None:
        self.callbacks.on_resize(event.width, event.height)

    # --- Display ---

    def draw(self, commands: DrawCommands) -> None:
        """Draw a new waveform frame.

        Args:
            commands: Output of the renderer
        """
        self.waveform.draw(commands)
        self.canvas.draw_idle()

    def set_waveform_visible(self, visible: bool) -> None:
        """Show or hide the waveform view."""
        if visible == self._waveform_visible:
            return
        self._waveform_visible = visible
        if visible:
            self.canvas_widget.pack(fill=tk.BOTH, expand=True)
        else:
            self.canvas_widget.pack_forget()

    def show_message(
        self, message: str, duration: int = UIConstants.MESSAGE_DURATION_MS
    ) -> None:
        """Show a temporary message in the status line.

        Args:
            message: Message text to display
            duration: Display duration in milliseconds
        """
        if self._message_after_id is not None:
            self.root.after_cancel(self._message_after_id)
        self.status_var.set(message)
        self._message_after_id = self.root.after(duration, self._clear_message)

    def _clear_message(self) -> None:
        self._message_after_id = None
        self.status_var.set("")

    # --- Dialogs and scheduling ---

    def ask_open_filename(self, initial_dir: Optional[str] = None) -> Optional[str]:
        """Ask the user for a sample file.

        Args:
            initial_dir: Directory the dialog starts in

        Returns:
            Selected path, or None if cancelled
        """
        filename = filedialog.askopenfilename(
            parent=self.root,
            title="Open sample file",
            initialdir=initial_dir,
            filetypes=FileConstants.SAMPLE_FILE_TYPES,
        )
        return filename or None

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> str:
        """Run a callback on the UI thread after a delay."""
        return self.root.after(delay_ms, callback)

    def get_geometry(self) -> str:
        """Get the current window geometry string."""
        return self.root.geometry()

    def focus_window(self) -> None:
        """Bring the window to the front."""
        self.root.lift()
        self.root.focus_force()

    def run(self) -> None:
        """Enter the Tk main loop."""
        self.root.mainloop()

    def destroy(self) -> None:
        """Close the window."""
        self.root.destroy()
