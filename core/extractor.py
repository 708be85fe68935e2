import json
import logging
from typing import Any, List, Optional, Tuple

from core.color import rgba_from_mapping
from core.constants import (
    DATA_TABLE_EXPORT_TYPE,
    KEYWORD_EXCLUSIONS,
    PARAMETER_INFO,
    PARAMETER_VALUE,
    RICH_TEXT_STYLE_ROW,
    ROOT_FOLDER,
    VECTOR_PARAMETER_VALUES,
    ExportFormat,
)
from core.traversal import JsonTraversal, child_record
from core.types import ColorParameter, JsonPath, KeywordDictionary

log = logging.getLogger()


def _exports(document: Any) -> Optional[list]:
    if isinstance(document, dict) and isinstance(document.get("Exports"), list):
        return document["Exports"]
    return None


def _first_export(document: Any) -> Optional[dict]:
    exports = _exports(document)
    if exports and isinstance(exports[0], dict):
        return exports[0]
    return None


def find_vector_parameters(document: Any) -> Tuple[Optional[int], Optional[list]]:
    # returns (index inside Exports[0].Data, the VectorParameterValues list)
    export = _first_export(document)
    if export is None:
        return None, None
    index, record = child_record(export.get("Data"), VECTOR_PARAMETER_VALUES)
    if record is None or not isinstance(record.get("Value"), list):
        return None, None
    return index, record["Value"]


def _table_rows(document: Any) -> Optional[list]:
    export = _first_export(document)
    if export is None or export.get("$type") != DATA_TABLE_EXPORT_TYPE:
        return None
    table = export.get("Table")
    if isinstance(table, dict) and isinstance(table.get("Data"), list):
        return table["Data"]
    return None


def detect_format(document: Any) -> Optional[ExportFormat]:
    if find_vector_parameters(document)[1] is not None:
        return ExportFormat.VECTOR_PARAMETERS
    if _table_rows(document) is not None:
        return ExportFormat.DATA_TABLE
    if _exports(document) is not None:
        return ExportFormat.GENERIC
    return None


def is_color_parameter(name: str, dictionary: KeywordDictionary) -> bool:
    lowered = name.lower()
    if not any(keyword in lowered for keyword in dictionary.include_keywords):
        return False
    if name in dictionary.exclude_exact:
        return False
    return not any(keyword in lowered for keyword in KEYWORD_EXCLUSIONS)


def make_parameter_id(relative_path: str, parent: str, field: str, ordinal: int) -> str:
    # a JSON array keeps the parts apart whatever characters paths and names contain
    return json.dumps([relative_path, parent, field, ordinal], ensure_ascii=False)


def folder_of(relative_path: str) -> str:
    last_slash = relative_path.rfind("/")
    return relative_path[:last_slash] if last_slash > 0 else ROOT_FOLDER


def folders_of(params) -> List[str]:
    return sorted({folder_of(p.relative_path) for p in params})


class ColorExtractor:
    """Finds color parameters in the three known UAssetAPI export shapes."""

    def __init__(self, dictionary: Optional[KeywordDictionary] = None):
        self.dictionary = dictionary

    def extract(self, document: Any, file_name: str, relative_path: str) -> List[ColorParameter]:
        export_format = detect_format(document)
        if export_format is None:
            log.debug(f"{relative_path}: unrecognized export format, no colors extracted")
            return []

        if export_format is ExportFormat.VECTOR_PARAMETERS:
            params = self._extract_vector_parameters(document, file_name, relative_path)
        elif export_format is ExportFormat.DATA_TABLE:
            params = self._extract_table_rows(document, file_name, relative_path)
        else:
            params = self._extract_generic(document, file_name, relative_path)

        log.debug(f"{relative_path}: {export_format} format, {len(params)} color(s)")
        return params

    @staticmethod
    def _make(params: list, file_name: str, relative_path: str, parent: str, field: str,
              param_name: str, path: JsonPath, color: dict) -> None:
        params.append(ColorParameter(
            id=make_parameter_id(relative_path, parent, field, len(params)),
            file_name=file_name,
            relative_path=relative_path,
            param_name=param_name,
            path=tuple(path),
            rgba=rgba_from_mapping(color),
        ))

    def _extract_vector_parameters(self, document, file_name, relative_path) -> List[ColorParameter]:
        if self.dictionary is None:
            log.warning(f"{relative_path}: keyword dictionary not loaded, material parameters skipped")
            return []

        data_index, entries = find_vector_parameters(document)
        params = []
        for param_index, entry in enumerate(entries):
            members = entry.get("Value") if isinstance(entry, dict) else None

            _, info = child_record(members, PARAMETER_INFO)
            _, name_record = child_record(info.get("Value"), "Name") if info else (None, None)
            name = name_record.get("Value") if name_record else None
            if not isinstance(name, str) or not name:
                continue
            if not is_color_parameter(name, self.dictionary):
                continue

            outer_index, outer = child_record(members, PARAMETER_VALUE)
            if outer is None:
                continue
            inner_index, inner = child_record(outer.get("Value"), PARAMETER_VALUE)
            if inner is None or not isinstance(inner.get("Value"), dict):
                continue

            path = ("Exports", 0, "Data", data_index, "Value", param_index,
                    "Value", outer_index, "Value", inner_index, "Value")
            self._make(params, file_name, relative_path, name, PARAMETER_VALUE, name, path, inner["Value"])
        return params

    def _extract_table_rows(self, document, file_name, relative_path) -> List[ColorParameter]:
        traversal = JsonTraversal(document)
        params = []
        for row_index, row in enumerate(_table_rows(document)):
            if not isinstance(row, dict) or row.get("StructType") != RICH_TEXT_STYLE_ROW:
                continue
            if "Value" not in row:
                continue
            style_name = str(row.get("Name"))
            root = ("Exports", 0, "Table", "Data", row_index, "Value")
            for field, color, path in traversal.iter_color_fields(root):
                self._make(params, file_name, relative_path, style_name, field,
                           f"{style_name} - {field}", path, color)
        return params

    def _extract_generic(self, document, file_name, relative_path) -> List[ColorParameter]:
        traversal = JsonTraversal(document)
        params = []
        for export_index, export in enumerate(_exports(document)):
            if not isinstance(export, dict) or not isinstance(export.get("Data"), list):
                continue
            parent = export.get("ObjectName") or f"Export_{export_index}"
            for field, color, path in traversal.iter_color_fields(("Exports", export_index, "Data")):
                self._make(params, file_name, relative_path, parent, field,
                           f"{parent} - {field}", path, color)
        return params


def extract(document: Any, file_name: str, relative_path: str,
            dictionary: Optional[KeywordDictionary] = None) -> List[ColorParameter]:
    return ColorExtractor(dictionary).extract(document, file_name, relative_path)
