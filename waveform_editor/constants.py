"""Constants for the Waveform Editor application.

This module defines all constant values used throughout the application,
organized into logical groups for sample series limits, selector geometry,
user interface and file handling.
"""


class SeriesConstants:
    """Sample series related constants.

    Defines the accepted size of a sample series and the valid range
    of each lobe value.
    """

    MIN_POINTS = 3
    MAX_POINTS = 500

    # Lobe ranges (inclusive)
    NEG_LOBE_MIN = -1.0
    NEG_LOBE_MAX = 0.0
    POS_LOBE_MIN = 0.0
    POS_LOBE_MAX = 1.0


class SelectorConstants:
    """Selector handle geometry and appearance.

    All sizes are density-independent pixels and are scaled by the
    display density at runtime.
    """

    SELECTOR_WIDTH = 2  # Width of the handle line
    GRIP_WIDTH = 8  # Side of the square grip marker
    TOUCH_AREA = 16  # Extra hit area on both sides of a handle
    MIN_SELECTION_WIDTH = 50  # Minimum gap between the two handles

    # Alpha (0-255) of a handle that is not being dragged
    INACTIVE_ALPHA = 170
    ACTIVE_ALPHA = 255


class UIConstants:
    """User interface related constants.

    Defines visual appearance settings, timing parameters and
    window layout for the graphical user interface.
    """

    # Colors
    COLOR_BACKGROUND = "black"
    COLOR_WAVE_BACKGROUND = "dimgray"
    COLOR_SELECTED_WAVE = "#03dac5"
    COLOR_UNSELECTED_WAVE = "gray"
    COLOR_SELECTOR = "white"
    COLOR_TEXT_NORMAL = "white"

    # Window layout
    DEFAULT_WINDOW_WIDTH = 900
    DEFAULT_WINDOW_HEIGHT = 560
    WAVEFORM_HEIGHT = 400
    MAIN_FRAME_PADDING = 16
    BUTTON_SPACING = 8

    # Figure
    FIGURE_DPI = 100

    # Timing (milliseconds)
    TASK_POLL_MS = 50
    MESSAGE_DURATION_MS = 2000


class FileConstants:
    """File and path related constants.

    Defines the text encoding of sample files and the naming scheme
    for exported selections.
    """

    ENCODING = "ascii"
    FIELD_SEPARATOR = " "
    LINE_SEPARATOR = "\n"

    EXPORT_PREFIX = "audiowave-"
    EXPORT_EXTENSION = ".txt"
    DEFAULT_EXPORT_DIR = "Downloads"

    SAMPLE_FILE_TYPES = [("Text files", "*.txt"), ("All files", "*")]
