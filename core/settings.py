import json
import logging
from typing import Optional

from core.constants import DEFAULT_MASTER_COLOR, DEFAULT_SESSION_NAME, DEFAULT_SHUFFLE_COLORS
from core.folder_setup import folder_setup
from core.types import ColorOptions

log = logging.getLogger()


def default_settings() -> dict:
    return {
        "ignore_grayscale": True,
        "preserve_intensity": True,
        "show_grayscale": True,
        "master_color": DEFAULT_MASTER_COLOR,
        "shuffle_colors": list(DEFAULT_SHUFFLE_COLORS),
        "session_name": DEFAULT_SESSION_NAME,
        "last_output_directory": None,
        "dictionary_path": None,
    }


class SettingsManager:
    def __init__(self, settings_file=None):
        self.settings_file = settings_file or folder_setup.settings_file
        self.settings = self._load_settings()

    def _load_settings(self) -> dict:
        settings = default_settings()
        if self.settings_file.exists():
            try:
                with open(self.settings_file, "r") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    settings.update({k: v for k, v in data.items() if k in settings})
                else:
                    log.warning(f"Ignoring malformed settings file {self.settings_file}")
            except Exception:
                log.exception("Error loading settings")
        return settings

    def save_settings(self):
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except Exception:
            log.exception("Error saving settings")

    def _set(self, key, value):
        self.settings[key] = value
        self.save_settings()

    def get_color_options(self) -> ColorOptions:
        return ColorOptions(
            ignore_grayscale=bool(self.settings["ignore_grayscale"]),
            preserve_intensity=bool(self.settings["preserve_intensity"]),
        )

    def set_color_options(self, options: ColorOptions):
        self.settings["ignore_grayscale"] = options.ignore_grayscale
        self.settings["preserve_intensity"] = options.preserve_intensity
        self.save_settings()

    def get_show_grayscale(self) -> bool:
        return bool(self.settings["show_grayscale"])

    def set_show_grayscale(self, show):
        self._set("show_grayscale", show)

    def get_master_color(self) -> str:
        return self.settings["master_color"]

    def set_master_color(self, color: str):
        self._set("master_color", color)

    def get_shuffle_colors(self) -> list[str]:
        return list(self.settings["shuffle_colors"]) or list(DEFAULT_SHUFFLE_COLORS)

    def set_shuffle_colors(self, colors: list[str]):
        self._set("shuffle_colors", list(colors))

    def get_session_name(self) -> str:
        return self.settings["session_name"]

    def set_session_name(self, name: str):
        self._set("session_name", name)

    def get_last_output_directory(self) -> Optional[str]:
        return self.settings["last_output_directory"]

    def set_last_output_directory(self, directory: Optional[str]):
        self._set("last_output_directory", directory)

    def get_dictionary_path(self) -> Optional[str]:
        return self.settings["dictionary_path"]

    def reset_editor_defaults(self):
        # long-press reset restores the toggles and staged colors, not the dictionary override
        dictionary_path = self.settings["dictionary_path"]
        self.settings = default_settings()
        self.settings["dictionary_path"] = dictionary_path
        self.save_settings()
