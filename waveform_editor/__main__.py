"""Allow running the editor with ``python -m waveform_editor``."""

from .app import main

if __name__ == "__main__":
    main()
