import logging
from pathlib import Path

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core import selection
from core.constants import OUTPUT_FOLDER, PROGRAM_NAME, SESSION_SUFFIX, STATUS_CLEAR_MS
from core.dictionary import load_keyword_dictionary
from core.errors import EditorError, MissingResourceError
from core.session import EditorSession
from core.settings import SettingsManager
from core.view import next_sort
from gui.controls_panel import ControlsPanel
from gui.drag_and_drop import FileDropZone
from gui.parameter_table import ParameterTable
from gui.reset_button import HoldToResetButton

log = logging.getLogger()

DROP_PAGE, EDITOR_PAGE = range(2)


class EditorWindow(QMainWindow):
    def __init__(self, dictionary_path=None):
        super().__init__()
        self.setWindowTitle(PROGRAM_NAME)
        self.setMinimumSize(1200, 760)
        self.setAcceptDrops(True)

        self.stack = None
        self.drop_zone = None
        self.controls = None
        self.table = None
        self.search_edit = None
        self.status_label = None
        self.undo_action = None
        self.redo_action = None
        self.anchor_row = None

        self.settings_manager = SettingsManager()
        self.session = EditorSession()
        self.status_timer = QTimer(self)
        self.status_timer.setSingleShot(True)
        self.status_timer.timeout.connect(lambda: self.status_label.setText(""))

        self.setup_ui()
        self.setup_actions()
        self.setup_signals()
        self.load_dictionary(dictionary_path or self.settings_manager.get_dictionary_path())
        self.apply_settings()

    def setup_ui(self):
        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)

        self.drop_zone = FileDropZone()
        self.stack.addWidget(self.drop_zone)

        editor = QWidget()
        layout = QHBoxLayout(editor)

        controls_scroll = QScrollArea()
        controls_scroll.setWidgetResizable(True)
        controls_scroll.setFixedWidth(344)
        self.controls = ControlsPanel()
        controls_scroll.setWidget(self.controls)
        layout.addWidget(controls_scroll)

        right = QVBoxLayout()
        top_bar = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search parameters or files...")
        self.search_edit.setClearButtonEnabled(True)
        top_bar.addWidget(self.search_edit, stretch=1)

        add_files_button = QPushButton("Add Files...")
        add_files_button.clicked.connect(self.drop_zone.browse_files)
        top_bar.addWidget(add_files_button)

        undo_button = QPushButton("Undo")
        undo_button.clicked.connect(self.undo)
        redo_button = QPushButton("Redo")
        redo_button.clicked.connect(self.redo)
        top_bar.addWidget(undo_button)
        top_bar.addWidget(redo_button)

        reset_button = HoldToResetButton()
        reset_button.reset_confirmed.connect(self.reset_session)
        top_bar.addWidget(reset_button)
        right.addLayout(top_bar)

        self.table = ParameterTable()
        right.addWidget(self.table, stretch=1)

        self.status_label = QLabel("")
        self.status_label.setProperty("muted", True)
        right.addWidget(self.status_label)

        layout.addLayout(right, stretch=1)
        self.stack.addWidget(editor)

    def setup_actions(self):
        self.undo_action = QAction("Undo", self)
        self.undo_action.setShortcut(QKeySequence("Ctrl+Z"))
        self.undo_action.triggered.connect(self.undo)

        self.redo_action = QAction("Redo", self)
        self.redo_action.setShortcuts([QKeySequence("Ctrl+Shift+Z"), QKeySequence("Ctrl+Y")])
        self.redo_action.triggered.connect(self.redo)

        self.addAction(self.undo_action)
        self.addAction(self.redo_action)

    def setup_signals(self):
        self.drop_zone.files_dropped.connect(self.load_paths)
        self.search_edit.textChanged.connect(self.on_search_changed)

        # table signals
        self.table.selection_clicked.connect(self.on_selection_clicked)
        self.table.select_all_requested.connect(self.on_select_all)
        self.table.sort_requested.connect(self.on_sort_requested)
        self.table.color_edited.connect(self.on_color_edited)
        self.table.channel_edited.connect(self.on_channel_edited)

        # controls signals
        self.controls.master_color_changed.connect(self.on_master_color_changed)
        self.controls.master_color_applied.connect(lambda: self.run_transform(self.session.apply_master_color))
        self.controls.hue_shift_changed.connect(self.on_hue_shift_changed)
        self.controls.hue_shift_applied.connect(self.on_hue_shift_applied)
        self.controls.shuffle_colors_changed.connect(self.on_shuffle_colors_changed)
        self.controls.shuffle_applied.connect(lambda: self.run_transform(self.session.apply_shuffle))
        self.controls.options_changed.connect(self.on_options_changed)
        self.controls.show_grayscale_changed.connect(self.on_show_grayscale_changed)
        self.controls.folders_changed.connect(self.on_folders_changed)
        self.controls.session_name_changed.connect(self.on_session_name_changed)
        self.controls.save_requested.connect(self.save_files)
        self.controls.export_requested.connect(self.export_session)
        self.controls.import_requested.connect(self.import_session)

    def load_dictionary(self, path):
        try:
            self.session.dictionary = load_keyword_dictionary(path)
        except MissingResourceError as e:
            # materials still load, vector parameters just aren't classified
            log.warning(f"{e}, material parameters will be skipped")
            self.show_status(str(e))

    def apply_settings(self):
        settings = self.settings_manager
        self.session.options = settings.get_color_options()
        self.session.master_color = settings.get_master_color()
        self.session.shuffle_colors = settings.get_shuffle_colors()
        self.session.session_name = settings.get_session_name()
        self.session.display.show_grayscale = settings.get_show_grayscale()

        self.controls.set_master_color(self.session.master_color)
        self.controls.set_shuffle_colors(self.session.shuffle_colors)
        self.controls.set_options(self.session.options, self.session.display.show_grayscale)
        self.controls.set_session_name(self.session.session_name)
        self.controls.reset_hue_slider()

    # loading

    def load_paths(self, paths):
        try:
            report = self.session.load_paths([Path(p) for p in paths])
        except EditorError as e:
            log.exception("Failed to load files")
            self.show_error(str(e))
            return

        if report.errors:
            failed = "\n".join(str(error) for error in report.errors)
            QMessageBox.warning(self, "Some Files Failed", f"These files could not be parsed:\n\n{failed}")

        message = f"Loaded {len(report.loaded)} file(s), {report.parameter_count} color parameter(s)"
        if report.skipped:
            message += f", skipped {len(report.skipped)} already loaded"
        self.show_status(message)

        self.anchor_row = None
        self.controls.set_folders(self.session.folders, self.session.display.selected_folders)
        self.refresh_table()
        if self.session.parameters:
            self.stack.setCurrentIndex(EDITOR_PAGE)

    def dragEnterEvent(self, event):
        self.drop_zone.dragEnterEvent(event)

    def dragLeaveEvent(self, event):
        self.drop_zone.dragLeaveEvent(event)

    def dropEvent(self, event):
        self.drop_zone.dropEvent(event)

    # table

    def refresh_table(self):
        self.table.populate(self.session)
        self.table.set_sort_label(self.session.display.sort)

    def on_selection_clicked(self, param_id, row, shift, alt):
        visible_ids = [param.id for param in self.table.rows]
        if shift or alt:
            self.session.selection = selection.select_range(
                self.session.selection, visible_ids, self.anchor_row, row, deselect=alt)
        else:
            self.session.selection = selection.toggle(self.session.selection, param_id)
        self.anchor_row = row
        self.table.refresh_selection(self.session)
        self.table.refresh_colors(self.session)

    def on_select_all(self):
        visible_ids = [param.id for param in self.table.rows]
        self.session.selection = selection.toggle_all(self.session.selection, visible_ids)
        self.table.refresh_selection(self.session)
        self.table.refresh_colors(self.session)

    def on_sort_requested(self):
        self.session.display.sort = next_sort(self.session.display.sort)
        self.anchor_row = None
        self.refresh_table()

    def on_search_changed(self, text):
        self.session.display.search = text.strip()
        self.anchor_row = None
        self.refresh_table()

    def on_folders_changed(self, folders):
        self.session.display.selected_folders = folders
        self.anchor_row = None
        self.refresh_table()

    def on_color_edited(self, param_id, hex_color):
        self.session.edit_color(param_id, hex_color)
        # the edit came from a widget inside the table, rebuild after its handler returns
        QTimer.singleShot(0, self.refresh_table)

    def on_channel_edited(self, param_id, channel, value):
        self.session.edit_channel(param_id, channel, value)
        self.table.refresh_colors(self.session)

    # transforms

    def run_transform(self, transform):
        try:
            transform()
        except EditorError as e:
            self.show_status(str(e))
            return False
        self.refresh_table()
        return True

    def on_master_color_changed(self, hex_color):
        self.session.master_color = hex_color
        self.settings_manager.set_master_color(hex_color)

    def on_hue_shift_changed(self, degrees):
        # staged only, nothing is committed until Apply
        self.session.hue_shift = degrees
        self.table.refresh_colors(self.session)

    def on_hue_shift_applied(self):
        if not self.run_transform(self.session.apply_hue_shift):
            return
        self.session.hue_shift = 0
        self.controls.reset_hue_slider()
        self.table.refresh_colors(self.session)

    def on_shuffle_colors_changed(self, colors):
        self.session.shuffle_colors = list(colors)
        self.settings_manager.set_shuffle_colors(colors)

    def on_options_changed(self, options):
        self.session.options = options
        self.settings_manager.set_color_options(options)
        self.table.refresh_colors(self.session)

    def on_show_grayscale_changed(self, show):
        self.session.display.show_grayscale = show
        self.settings_manager.set_show_grayscale(show)
        self.refresh_table()

    def undo(self):
        if self.session.undo():
            self.refresh_table()
        else:
            self.show_status("Nothing to undo")

    def redo(self):
        if self.session.redo():
            self.refresh_table()
        else:
            self.show_status("Nothing to redo")

    def reset_session(self):
        self.session.reset()
        self.settings_manager.reset_editor_defaults()
        self.apply_settings()
        self.anchor_row = None
        self.search_edit.clear()
        self.controls.set_folders([], set())
        self.refresh_table()
        self.stack.setCurrentIndex(DROP_PAGE)

    # output

    def save_files(self):
        if self.session.output_directory is None:
            start = self.settings_manager.get_last_output_directory() or ""
            directory = QFileDialog.getExistingDirectory(self, "Select Output Directory", start)
            if not directory:
                return
            base_directory = Path(directory)
        else:
            base_directory = None

        try:
            written = self.session.save(base_directory)
        except EditorError as e:
            log.exception("Save failed")
            self.show_error(str(e))
            return

        self.settings_manager.set_last_output_directory(str(self.session.output_directory))
        self.show_status(f"Saved {len(written)} file(s) to {self.session.output_directory / OUTPUT_FOLDER}")

    def on_session_name_changed(self, name):
        if name:
            self.session.session_name = name
            self.settings_manager.set_session_name(name)

    def export_session(self):
        if not self.session.selection:
            self.show_status("Select the parameters to export first")
            return
        directory = QFileDialog.getExistingDirectory(self, "Export Session To")
        if not directory:
            return
        try:
            path = self.session.export_session(Path(directory))
        except EditorError as e:
            log.exception("Session export failed")
            self.show_error(str(e))
            return
        self.show_status(f"Exported session to {path}")

    def import_session(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Import Session", "", f"Session Files (*{SESSION_SUFFIX});;All Files (*)")
        if not path:
            return
        try:
            updated = self.session.import_session(Path(path))
        except EditorError as e:
            log.exception("Session import failed")
            self.show_error(str(e))
            return
        self.refresh_table()
        self.show_status(f"Imported session, updated {updated} parameter(s)")

    def show_status(self, message):
        self.status_label.setText(message)
        self.status_timer.start(STATUS_CLEAR_MS)

    def show_error(self, message):
        QMessageBox.critical(self, "Error", message)
