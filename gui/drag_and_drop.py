import logging
from pathlib import Path

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QFileDialog, QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from gui.theme import DROP_ZONE_STYLE

log = logging.getLogger()


class FileDropZone(QFrame):
    files_dropped = pyqtSignal(list)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("dropZone")
        self.setAcceptDrops(True)
        self.setStyleSheet(DROP_ZONE_STYLE)
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        title = QLabel("Drag and drop exported .json files or folders here")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setProperty("header", True)
        layout.addWidget(title)

        hint = QLabel("Materials, RichText data tables and blueprint exports are supported.\n"
                      "Dropping more files later adds them to the current session.")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hint.setProperty("muted", True)
        layout.addWidget(hint)

        buttons = QHBoxLayout()
        buttons.setAlignment(Qt.AlignmentFlag.AlignCenter)
        browse_files = QPushButton("Browse Files...")
        browse_files.clicked.connect(self.browse_files)
        browse_folder = QPushButton("Browse Folder...")
        browse_folder.clicked.connect(self.browse_folder)
        buttons.addWidget(browse_files)
        buttons.addWidget(browse_folder)
        layout.addLayout(buttons)

    def browse_files(self):
        files, _ = QFileDialog.getOpenFileNames(self, "Select JSON Files", "", "JSON Files (*.json)")
        if files:
            self.files_dropped.emit(files)

    def browse_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select Folder")
        if folder:
            self.files_dropped.emit([folder])

    @staticmethod
    def _accepts(file_path: str) -> bool:
        return Path(file_path).is_dir() or file_path.lower().endswith(".json")

    def _set_drag_over(self, value: bool):
        self.setProperty("dragOver", value)
        self.style().polish(self)

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            for url in event.mimeData().urls():
                if self._accepts(url.toLocalFile()):
                    event.accept()
                    self._set_drag_over(True)
                    return
        event.ignore()

    def dragLeaveEvent(self, event):
        self._set_drag_over(False)

    def dropEvent(self, event):
        self._set_drag_over(False)

        dropped = [url.toLocalFile() for url in event.mimeData().urls()]
        accepted = [path for path in dropped if self._accepts(path)]
        for path in set(dropped) - set(accepted):
            log.debug(f"Ignoring dropped item {path}")

        if accepted:
            self.files_dropped.emit(accepted)
