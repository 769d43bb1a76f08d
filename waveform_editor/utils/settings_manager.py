"""Settings manager for persisting user preferences."""

import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict

from ..constants import FileConstants


@dataclass
class UserSettings:
    """User settings that persist between sessions.

    These settings override default configuration values.
    """

    # Display settings
    density: float = 1.0  # Device pixels per density-independent pixel

    # Window settings
    window_geometry: Optional[str] = None

    # File settings
    last_import_dir: Optional[str] = None
    export_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSettings":
        """Create settings from dictionary."""
        # Filter out unknown keys
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered_data)


class SettingsManager:
    """Manages loading and saving user settings.

    Settings are stored in ~/.waveform_editor_settings as JSON.
    """

    def __init__(self, settings_file: Optional[Path] = None):
        """Initialize settings manager.

        Args:
            settings_file: Override for the settings location
        """
        self.settings_file = (
            Path(settings_file)
            if settings_file is not None
            else Path.home() / ".waveform_editor_settings"
        )
        self.settings = self.load_settings()

    def load_settings(self) -> UserSettings:
        """Load settings from file.

        Returns:
            UserSettings object with loaded or default values
        """
        if self.settings_file.exists():
            try:
                with open(self.settings_file, "r") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise TypeError("settings file must contain a JSON object")
                return UserSettings.from_dict(data)
            except (json.JSONDecodeError, KeyError, TypeError, OSError) as e:
                print(f"Error loading settings: {e}")
                print("Using default settings")

        return UserSettings()

    def save_settings(self) -> None:
        """Save current settings to file."""
        try:
            with open(self.settings_file, "w") as f:
                json.dump(self.settings.to_dict(), f, indent=2)
        except OSError as e:
            print(f"Error saving settings: {e}")

    def update_setting(self, key: str, value: Any) -> None:
        """Update a single setting and save.

        Args:
            key: Setting name
            value: New value
        """
        if hasattr(self.settings, key):
            setattr(self.settings, key, value)
            self.save_settings()
        else:
            print(f"Warning: Unknown setting '{key}'")

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting name
            default: Default value if setting not found

        Returns:
            Setting value or default
        """
        return getattr(self.settings, key, default)

    def export_dir(self) -> Path:
        """Get the export directory, falling back to ~/Downloads."""
        if self.settings.export_dir:
            return Path(self.settings.export_dir).expanduser()
        return Path.home() / FileConstants.DEFAULT_EXPORT_DIR
