import json
import logging
import re
from dataclasses import replace
from typing import Any, List, Sequence, Tuple

from core.color import rgba_from_mapping
from core.constants import FALLBACK_SESSION_NAME, SESSION_SUFFIX
from core.errors import SessionFormatError
from core.transforms import require_selection
from core.types import ColorParameter

log = logging.getLogger()

JSON_SUFFIX_PATTERN = re.compile(r"\.json$", re.IGNORECASE)


def strip_json_suffix(relative_path: str) -> str:
    return JSON_SUFFIX_PATTERN.sub("", relative_path)


def session_key(relative_path: str, param_name: str) -> str:
    return f"{relative_path}-{param_name}"


def session_file_name(session_name: str) -> str:
    name = (session_name or "").strip() or FALLBACK_SESSION_NAME
    return name if name.endswith(SESSION_SUFFIX) else f"{name}{SESSION_SUFFIX}"


def export_session(params: Sequence[ColorParameter], selection) -> List[dict]:
    require_selection(selection, "exporting a session")
    return [
        {
            "relativePath": strip_json_suffix(p.relative_path),
            "paramName": p.param_name,
            "rgba": p.rgba.to_dict(),
        }
        for p in params if p.id in selection
    ]


def dumps_session(entries: List[dict]) -> str:
    return json.dumps(entries, indent=2)


def loads_session(text: str) -> List[dict]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SessionFormatError(f"Session file is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise SessionFormatError("Invalid project file format.")
    return data


def import_session(params: Sequence[ColorParameter], entries: Any) -> Tuple[List[ColorParameter], int]:
    """
    Overwrite the colors of every parameter that has a matching session entry.

    This is an authoritative restore, neither the grayscale guard nor intensity
    preservation apply. Returns the new list and the number of parameters updated.
    """
    if not isinstance(entries, list):
        raise SessionFormatError("Invalid project file format.")

    lookup = {}
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("rgba"), dict):
            log.debug(f"Ignoring malformed session entry: {entry!r}")
            continue
        key = session_key(str(entry.get("relativePath")), str(entry.get("paramName")))
        lookup[key] = rgba_from_mapping(entry["rgba"])

    updated = 0
    result = []
    for param in params:
        rgba = lookup.get(session_key(strip_json_suffix(param.relative_path), param.param_name))
        if rgba is not None:
            updated += 1
            param = replace(param, rgba=rgba)
        result.append(param)

    log.info(f"Session import matched {updated} of {len(params)} parameter(s)")
    return result, updated
