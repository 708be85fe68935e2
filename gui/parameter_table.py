import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QCheckBox,
    QColorDialog,
    QDoubleSpinBox,
    QHBoxLayout,
    QHeaderView,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QWidget,
)

from core.color import is_valid_hex, rgb_to_display_hex
from core.constants import CHANNELS, SortDirection
from core.session_file import strip_json_suffix
from gui.theme import PREVIEW_ROW_COLOR, swatch_style

log = logging.getLogger()

CHECK_COLUMN, PATH_COLUMN, NAME_COLUMN, COLOR_COLUMN = range(4)
CHANNEL_COLUMNS = {channel: COLOR_COLUMN + 1 + i for i, channel in enumerate(CHANNELS)}
SORT_LABELS = {
    SortDirection.NONE: "Color",
    SortDirection.ASCENDING: "Color ▲",
    SortDirection.DESCENDING: "Color ▼",
}


class HexInput(QLineEdit):
    """Hex text box that only reports valid values and reverts anything else."""
    committed = pyqtSignal(str)

    def __init__(self, hex_color: str, parent=None):
        super().__init__(parent)
        self.setMaxLength(7)
        self.setFixedWidth(80)
        self.current = hex_color
        self.setText(hex_color.upper())
        self.editingFinished.connect(self._commit)

    def set_color(self, hex_color: str):
        self.current = hex_color
        if not self.hasFocus():
            self.setText(hex_color.upper())

    def _commit(self):
        text = self.text().strip()
        if is_valid_hex(text) and text.lower() != self.current.lower():
            self.committed.emit(text)
        else:
            self.setText(self.current.upper())

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Escape:
            self.setText(self.current.upper())
            self.clearFocus()
            return
        super().keyPressEvent(event)


class ParameterTable(QTableWidget):
    selection_clicked = pyqtSignal(str, int, bool, bool)  # id, row, shift, alt
    select_all_requested = pyqtSignal()
    sort_requested = pyqtSignal()
    color_edited = pyqtSignal(str, str)
    channel_edited = pyqtSignal(str, str, float)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.rows = []
        self.setColumnCount(COLOR_COLUMN + 1 + len(CHANNELS))
        self.setHorizontalHeaderLabels(["✓", "Path", "Parameter Name", SORT_LABELS[SortDirection.NONE], *CHANNELS])
        self.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.verticalHeader().setVisible(False)

        header = self.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(NAME_COLUMN, QHeaderView.ResizeMode.Stretch)
        header.sectionClicked.connect(self._on_header_clicked)

    def _on_header_clicked(self, section):
        if section == CHECK_COLUMN:
            self.select_all_requested.emit()
        elif section == COLOR_COLUMN:
            self.sort_requested.emit()

    def set_sort_label(self, direction: SortDirection):
        self.horizontalHeaderItem(COLOR_COLUMN).setText(SORT_LABELS[direction])

    def populate(self, session):
        self.rows = session.visible_parameters()
        self.setRowCount(len(self.rows))

        for row, param in enumerate(self.rows):
            checkbox = QCheckBox()
            checkbox.setChecked(param.id in session.selection)
            checkbox.clicked.connect(lambda _, pid=param.id, r=row: self._on_check_clicked(pid, r))
            self.setCellWidget(row, CHECK_COLUMN, self._centered(checkbox))

            self.setItem(row, PATH_COLUMN, QTableWidgetItem(strip_json_suffix(param.relative_path)))
            self.setItem(row, NAME_COLUMN, QTableWidgetItem(param.param_name))

            self.setCellWidget(row, COLOR_COLUMN, self._color_cell(param))

            for channel, column in CHANNEL_COLUMNS.items():
                spin = QDoubleSpinBox()
                spin.setDecimals(4)
                spin.setSingleStep(0.01)
                spin.setRange(-1e6, 1e6)
                spin.setKeyboardTracking(False)
                spin.setValue(getattr(param.rgba, channel.lower()))
                spin.valueChanged.connect(
                    lambda value, pid=param.id, ch=channel: self.channel_edited.emit(pid, ch, value))
                self.setCellWidget(row, column, spin)

        self.refresh_colors(session)

    def _color_cell(self, param) -> QWidget:
        cell = QWidget()
        layout = QHBoxLayout(cell)
        layout.setContentsMargins(4, 2, 4, 2)

        swatch = QPushButton()
        swatch.setFixedSize(28, 28)
        swatch.clicked.connect(lambda _, pid=param.id, s=swatch: self._pick_color(pid, s))
        hex_input = HexInput(rgb_to_display_hex(*param.rgba.rgb))
        hex_input.committed.connect(lambda hex_color, pid=param.id: self.color_edited.emit(pid, hex_color))

        layout.addWidget(swatch)
        layout.addWidget(hex_input)
        cell.swatch = swatch
        cell.hex_input = hex_input
        return cell

    @staticmethod
    def _centered(widget) -> QWidget:
        cell = QWidget()
        layout = QHBoxLayout(cell)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(widget)
        return cell

    def _on_check_clicked(self, param_id: str, row: int):
        modifiers = QApplication.keyboardModifiers()
        shift = bool(modifiers & Qt.KeyboardModifier.ShiftModifier)
        alt = bool(modifiers & Qt.KeyboardModifier.AltModifier)
        self.selection_clicked.emit(param_id, row, shift, alt)

    def _pick_color(self, param_id: str, swatch: QPushButton):
        initial = QColor(swatch.property("hex") or "#ffffff")
        color = QColorDialog.getColor(initial, self, "Pick Color")
        if color.isValid():
            self.color_edited.emit(param_id, color.name())

    def refresh_colors(self, session):
        """Update swatches and hex text only, used while a hue shift preview is staged."""
        # rows hold the snapshot from the last rebuild, rebind them to the committed parameters
        current = {p.id: p for p in session.parameters}
        self.rows = [current.get(p.id, p) for p in self.rows]
        for row, param in enumerate(self.rows):
            rgba = session.preview(param)
            hex_color = rgb_to_display_hex(*rgba.rgb)

            cell = self.cellWidget(row, COLOR_COLUMN)
            cell.swatch.setStyleSheet(swatch_style(hex_color))
            cell.swatch.setProperty("hex", hex_color)
            cell.hex_input.set_color(hex_color)

            background = QColor(PREVIEW_ROW_COLOR) if session.is_previewing(param) else QColor(0, 0, 0, 0)
            for column in (PATH_COLUMN, NAME_COLUMN):
                self.item(row, column).setBackground(background)

    def refresh_selection(self, session):
        for row, param in enumerate(self.rows):
            checkbox = self.cellWidget(row, CHECK_COLUMN).findChild(QCheckBox)
            checkbox.setChecked(param.id in session.selection)
