from enum import StrEnum


PROGRAM_NAME = "rvfx-editor"
PROGRAM_AUTHOR = "saturn"
DESCRIPTION = "Recolor VFX parameters inside exported UAssetAPI JSON files."


class ExportFormat(StrEnum):
    # recognised document shapes, in detection priority order
    VECTOR_PARAMETERS = "vector_parameters"
    DATA_TABLE = "data_table"
    GENERIC = "generic"


class SortDirection(StrEnum):
    NONE = "none"
    ASCENDING = "ascending"
    DESCENDING = "descending"


# format 1 markers
VECTOR_PARAMETER_VALUES = "VectorParameterValues"
PARAMETER_INFO = "ParameterInfo"
PARAMETER_VALUE = "ParameterValue"

# technical names that look like colors but never are
KEYWORD_EXCLUSIONS = ("offset", "uv")

# format 2 markers
DATA_TABLE_EXPORT_TYPE = "UAssetAPI.ExportTypes.DataTableExport, UAssetAPI"
RICH_TEXT_STYLE_ROW = "RichTextStyleRow"

# format 2/3 color leaves
COLOR_FIELD_NAMES = frozenset({
    "ColorAndOpacity",
    "SpecifiedColor",
    "BaseColor",
    "HighlightColor",
    "FontTopColor",
    "FontButtomColor",  # sic, this is how the game names it
})
LINEAR_COLOR_STRUCT = "LinearColor"

CHANNELS = ("R", "G", "B", "A")

ROOT_FOLDER = "/"
JSON_SUFFIX = ".json"
SESSION_SUFFIX = ".rvfxp"
DEFAULT_SESSION_NAME = "YourProjectName"
FALLBACK_SESSION_NAME = "project"
OUTPUT_FOLDER = "output"
DICTIONARY_FILE = "filter_dictionary.json"

DEFAULT_MASTER_COLOR = "#ffffff"
DEFAULT_SHUFFLE_COLORS = ["#ccffff", "#88eeee", "#66dddd"]
HUE_SHIFT_RANGE = (-180, 180)

RESET_HOLD_MS = 2000
STATUS_CLEAR_MS = 10000
IO_MAX_WORKERS = 8
