import logging
import os
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from core.constants import DICTIONARY_FILE, PROGRAM_AUTHOR, PROGRAM_NAME

log = logging.getLogger()


def _env_portable() -> bool:
    # packagers and portable zips set RVFX_PORTABLE=1 to keep settings next to the install
    return os.environ.get("RVFX_PORTABLE", "").strip().lower() in ("1", "true", "yes")


@dataclass
class FolderConfig:
    # configuration class for managing folder paths
    install_dir = Path(os.path.dirname(os.path.abspath(__file__))).parent
    data_dir = Path(os.path.dirname(os.path.abspath(__file__))) / "data"
    portable = _env_portable()

    if portable:
        settings_dir = install_dir
    else:
        settings_dir = Path(platformdirs.user_config_dir(PROGRAM_NAME, PROGRAM_AUTHOR))

    _settings_file = "settings.json"

    def __post_init__(self):
        self.settings_file = self.settings_dir / self._settings_file
        self.dictionary_file = self.data_dir / DICTIONARY_FILE

    def create_required_folders(self) -> None:
        self.settings_dir.mkdir(parents=True, exist_ok=True)
        log.debug(f"Settings folder: {self.settings_dir}")


# create a default instance for import
folder_setup = FolderConfig()
