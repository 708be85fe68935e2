import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from core.constants import HUE_SHIFT_RANGE
from core.types import ColorOptions
from gui.parameter_table import HexInput
from gui.theme import swatch_style

log = logging.getLogger()


class ControlsPanel(QWidget):
    """Left-hand tool column. Holds no editor state, every change goes out as a signal."""
    master_color_changed = pyqtSignal(str)
    master_color_applied = pyqtSignal()
    hue_shift_changed = pyqtSignal(int)
    hue_shift_applied = pyqtSignal()
    shuffle_colors_changed = pyqtSignal(list)
    shuffle_applied = pyqtSignal()
    options_changed = pyqtSignal(object)
    show_grayscale_changed = pyqtSignal(bool)
    folders_changed = pyqtSignal(set)
    session_name_changed = pyqtSignal(str)
    export_requested = pyqtSignal()
    import_requested = pyqtSignal()
    save_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.master_swatch = None
        self.master_hex = None
        self.hue_slider = None
        self.hue_label = None
        self.shuffle_list = None
        self.remove_shuffle_button = None
        self.ignore_grayscale_checkbox = None
        self.preserve_intensity_checkbox = None
        self.show_grayscale_checkbox = None
        self.folder_list = None
        self.session_name_edit = None
        self.setFixedWidth(320)
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._master_color_group())
        layout.addWidget(self._hue_shift_group())
        layout.addWidget(self._shuffle_group())
        layout.addWidget(self._options_group())
        layout.addWidget(self._folder_group(), stretch=1)
        layout.addWidget(self._session_group())

        save_button = QPushButton("Save Files")
        save_button.setProperty("primary", True)
        save_button.clicked.connect(self.save_requested)
        layout.addWidget(save_button)

    def _master_color_group(self) -> QGroupBox:
        group = QGroupBox("Master Color")
        layout = QHBoxLayout(group)

        self.master_swatch = QPushButton()
        self.master_swatch.setFixedSize(32, 32)
        self.master_swatch.clicked.connect(self._pick_master_color)
        self.master_hex = HexInput("#ffffff")
        self.master_hex.committed.connect(self.set_master_color)
        self.master_hex.committed.connect(self.master_color_changed)

        apply_button = QPushButton("Apply")
        apply_button.setToolTip("Recolor every selected parameter")
        apply_button.clicked.connect(self.master_color_applied)

        layout.addWidget(self.master_swatch)
        layout.addWidget(self.master_hex)
        layout.addStretch()
        layout.addWidget(apply_button)
        return group

    def _hue_shift_group(self) -> QGroupBox:
        group = QGroupBox("Hue Shift")
        layout = QVBoxLayout(group)

        row = QHBoxLayout()
        self.hue_slider = QSlider(Qt.Orientation.Horizontal)
        self.hue_slider.setRange(*HUE_SHIFT_RANGE)
        self.hue_slider.setValue(0)
        self.hue_slider.valueChanged.connect(self._on_hue_changed)
        self.hue_label = QLabel("0°")
        self.hue_label.setFixedWidth(44)
        row.addWidget(self.hue_slider)
        row.addWidget(self.hue_label)
        layout.addLayout(row)

        buttons = QHBoxLayout()
        apply_button = QPushButton("Apply")
        apply_button.clicked.connect(self.hue_shift_applied)
        clear_button = QPushButton("Clear")
        clear_button.clicked.connect(lambda: self.hue_slider.setValue(0))
        buttons.addWidget(apply_button)
        buttons.addWidget(clear_button)
        layout.addLayout(buttons)
        return group

    def _shuffle_group(self) -> QGroupBox:
        group = QGroupBox("Shuffle Palette")
        layout = QVBoxLayout(group)

        self.shuffle_list = QListWidget()
        self.shuffle_list.setFixedHeight(96)
        layout.addWidget(self.shuffle_list)

        buttons = QHBoxLayout()
        add_button = QPushButton("Add")
        add_button.clicked.connect(self._add_shuffle_color)
        self.remove_shuffle_button = QPushButton("Remove")
        self.remove_shuffle_button.clicked.connect(self._remove_shuffle_color)
        apply_button = QPushButton("Shuffle")
        apply_button.setToolTip("Give each selected file one color from the palette, in turn")
        apply_button.clicked.connect(self.shuffle_applied)
        buttons.addWidget(add_button)
        buttons.addWidget(self.remove_shuffle_button)
        buttons.addWidget(apply_button)
        layout.addLayout(buttons)
        return group

    def _options_group(self) -> QGroupBox:
        group = QGroupBox("Options")
        layout = QVBoxLayout(group)

        self.ignore_grayscale_checkbox = QCheckBox("Ignore grayscale colors")
        self.ignore_grayscale_checkbox.setToolTip("Leave pure grays untouched by bulk recolors")
        self.preserve_intensity_checkbox = QCheckBox("Preserve intensity")
        self.preserve_intensity_checkbox.setToolTip("Keep the brightest channel of HDR colors when recoloring")
        self.show_grayscale_checkbox = QCheckBox("Show grayscale colors")

        self.ignore_grayscale_checkbox.toggled.connect(self._emit_options)
        self.preserve_intensity_checkbox.toggled.connect(self._emit_options)
        self.show_grayscale_checkbox.toggled.connect(self.show_grayscale_changed)

        layout.addWidget(self.ignore_grayscale_checkbox)
        layout.addWidget(self.preserve_intensity_checkbox)
        layout.addWidget(self.show_grayscale_checkbox)
        return group

    def _folder_group(self) -> QGroupBox:
        group = QGroupBox("Folders")
        layout = QVBoxLayout(group)
        self.folder_list = QListWidget()
        self.folder_list.itemChanged.connect(self._emit_folders)
        layout.addWidget(self.folder_list)
        return group

    def _session_group(self) -> QGroupBox:
        group = QGroupBox("Session")
        layout = QVBoxLayout(group)

        self.session_name_edit = QLineEdit()
        self.session_name_edit.setPlaceholderText("Session name")
        self.session_name_edit.editingFinished.connect(
            lambda: self.session_name_changed.emit(self.session_name_edit.text().strip()))
        layout.addWidget(self.session_name_edit)

        buttons = QHBoxLayout()
        export_button = QPushButton("Export")
        export_button.setToolTip("Write the selected parameters to a session file")
        export_button.clicked.connect(self.export_requested)
        import_button = QPushButton("Import")
        import_button.clicked.connect(self.import_requested)
        buttons.addWidget(export_button)
        buttons.addWidget(import_button)
        layout.addLayout(buttons)
        return group

    def _on_hue_changed(self, value):
        self.hue_label.setText(f"{value}°")
        self.hue_shift_changed.emit(value)

    def reset_hue_slider(self):
        self.hue_slider.blockSignals(True)
        self.hue_slider.setValue(0)
        self.hue_slider.blockSignals(False)
        self.hue_label.setText("0°")

    def _pick_master_color(self):
        color = QColorDialog.getColor(QColor(self.master_hex.current), self, "Master Color")
        if color.isValid():
            self.set_master_color(color.name())
            self.master_color_changed.emit(color.name())

    def set_master_color(self, hex_color: str):
        self.master_swatch.setStyleSheet(swatch_style(hex_color))
        self.master_hex.set_color(hex_color)

    def shuffle_colors(self) -> list[str]:
        return [self.shuffle_list.item(i).data(Qt.ItemDataRole.UserRole) for i in range(self.shuffle_list.count())]

    def set_shuffle_colors(self, colors):
        self.shuffle_list.clear()
        for hex_color in colors:
            item = QListWidgetItem(hex_color.upper())
            item.setData(Qt.ItemDataRole.UserRole, hex_color)
            item.setBackground(QColor(hex_color))
            item.setForeground(QColor("#000000") if QColor(hex_color).lightness() > 128 else QColor("#ffffff"))
            self.shuffle_list.addItem(item)
        # the palette never goes empty
        self.remove_shuffle_button.setEnabled(len(colors) > 1)

    def _add_shuffle_color(self):
        color = QColorDialog.getColor(QColor("#ffffff"), self, "Add Shuffle Color")
        if color.isValid():
            colors = self.shuffle_colors() + [color.name()]
            self.set_shuffle_colors(colors)
            self.shuffle_colors_changed.emit(colors)

    def _remove_shuffle_color(self):
        colors = self.shuffle_colors()
        row = self.shuffle_list.currentRow()
        if len(colors) <= 1:
            return
        del colors[row if row >= 0 else -1]
        self.set_shuffle_colors(colors)
        self.shuffle_colors_changed.emit(colors)

    def set_options(self, options: ColorOptions, show_grayscale: bool):
        for checkbox, value in ((self.ignore_grayscale_checkbox, options.ignore_grayscale),
                                (self.preserve_intensity_checkbox, options.preserve_intensity),
                                (self.show_grayscale_checkbox, show_grayscale)):
            checkbox.blockSignals(True)
            checkbox.setChecked(value)
            checkbox.blockSignals(False)

    def _emit_options(self):
        self.options_changed.emit(ColorOptions(
            ignore_grayscale=self.ignore_grayscale_checkbox.isChecked(),
            preserve_intensity=self.preserve_intensity_checkbox.isChecked(),
        ))

    def set_folders(self, folders, selected):
        self.folder_list.blockSignals(True)
        self.folder_list.clear()
        for folder in folders:
            item = QListWidgetItem(folder)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if folder in selected else Qt.CheckState.Unchecked)
            self.folder_list.addItem(item)
        self.folder_list.blockSignals(False)

    def _emit_folders(self):
        selected = set()
        for i in range(self.folder_list.count()):
            item = self.folder_list.item(i)
            if item.checkState() == Qt.CheckState.Checked:
                selected.add(item.text())
        self.folders_changed.emit(selected)

    def set_session_name(self, name: str):
        self.session_name_edit.setText(name)
