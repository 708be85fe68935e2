# Palette, ice cyan to match the default shuffle colors
PRIMARY = "#88eeee"
PRIMARY_LIGHT = "#ccffff"
PRIMARY_DARK = "#66dddd"
PRIMARY_TINT = "rgba(136, 238, 238, 0.08)"

BG = "#15161c"
SURFACE = "#1d1f26"
SURFACE_RAISED = "#2a2d36"
SURFACE_HOVER = "#363a45"

TEXT = "#e4e6ec"
TEXT_MUTED = "#9ea1ab"
TEXT_DISABLED = "#6b6e78"
OUTLINE = "#4d505a"

DANGER = "#c9534a"

FONT_STACK = '"Segoe UI", "Inter", "Noto Sans", sans-serif'

# table rows whose color is a staged hue shift, not the committed value
PREVIEW_ROW_COLOR = "#1f3033"


GLOBAL_STYLESHEET = f"""
    QWidget {{
        font-family: {FONT_STACK};
        font-size: 13px;
        color: {TEXT};
    }}
    QMainWindow, QDialog, QScrollArea, QScrollArea > QWidget > QWidget {{
        background-color: {BG};
    }}
    QLabel[muted="true"] {{
        color: {TEXT_MUTED};
        font-size: 11px;
    }}
    QLabel[header="true"] {{
        font-size: 18px;
        font-weight: 600;
    }}

    QPushButton {{
        background-color: {SURFACE_RAISED};
        border: none;
        padding: 6px 14px;
    }}
    QPushButton:hover {{ background-color: {SURFACE_HOVER}; }}
    QPushButton:disabled {{ color: {TEXT_DISABLED}; }}
    QPushButton[primary="true"] {{
        background-color: {PRIMARY};
        color: {BG};
        font-weight: 600;
        padding: 10px;
    }}
    QPushButton[primary="true"]:hover {{ background-color: {PRIMARY_LIGHT}; }}
    QPushButton[primary="true"]:pressed {{ background-color: {PRIMARY_DARK}; }}
    QPushButton[danger="true"] {{
        background-color: transparent;
        color: {TEXT_MUTED};
        padding: 4px 10px;
    }}
    QPushButton[danger="true"]:pressed {{
        background-color: {DANGER};
        color: {TEXT};
    }}

    QGroupBox {{
        font-weight: 600;
        border: 1px solid {SURFACE_RAISED};
        margin-top: 14px;
        padding: 10px 8px 8px 8px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 8px;
        padding: 0 4px;
    }}

    QLineEdit, QDoubleSpinBox {{
        background-color: {SURFACE_RAISED};
        border: 1px solid {SURFACE_RAISED};
        padding: 3px 6px;
    }}
    QLineEdit:focus, QDoubleSpinBox:focus {{ border: 1px solid {PRIMARY}; }}

    QSlider::groove:horizontal {{
        background-color: {SURFACE_RAISED};
        height: 6px;
    }}
    QSlider::handle:horizontal {{
        background-color: {PRIMARY};
        width: 14px;
        margin: -5px 0;
    }}

    QListWidget, QTableWidget {{
        background-color: {SURFACE};
        border: none;
        outline: none;
    }}
    QListWidget::item:hover {{ background-color: {PRIMARY_TINT}; }}
    QTableWidget {{ gridline-color: {SURFACE_RAISED}; }}
    QHeaderView::section {{
        background-color: {SURFACE_RAISED};
        border: none;
        padding: 6px;
    }}

    QCheckBox::indicator {{
        width: 15px;
        height: 15px;
        border: 1px solid {OUTLINE};
        background-color: {SURFACE_RAISED};
    }}
    QCheckBox::indicator:checked {{
        background-color: {PRIMARY};
        border-color: {PRIMARY};
    }}
"""


DROP_ZONE_STYLE = f"""
    QFrame#dropZone {{
        background-color: {SURFACE};
        border: 2px dashed {OUTLINE};
        min-height: 240px;
    }}
    QFrame#dropZone[dragOver="true"] {{
        border: 2px dashed {PRIMARY};
        background-color: {PRIMARY_TINT};
    }}
"""


def swatch_style(hex_color: str) -> str:
    return f"background-color: {hex_color}; border: 1px solid {OUTLINE}; padding: 0px;"
