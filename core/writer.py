import copy
import json
import logging
from typing import Any, Dict, List, Sequence, Tuple

from core.types import ColorParameter, JsonPath, RGBA

log = logging.getLogger()

FilePayload = Tuple[str, str]


def set_nested_color(document: Any, path: JsonPath, rgba: RGBA):
    # updates the channels in place so sibling keys like "$type" survive
    parent = document
    for step in path[:-1]:
        parent = parent[step]
    target = parent[path[-1]]
    if isinstance(target, dict):
        target.update(rgba.to_dict())
    else:
        parent[path[-1]] = rgba.to_dict()


def dumps_document(document: Any) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def apply_parameters(original_files: Dict[str, Any], params: Sequence[ColorParameter]) -> Dict[str, Any]:
    """Deep copy of the original documents with every parameter's color written back."""
    modified = copy.deepcopy(original_files)
    for param in params:
        document = modified.get(param.relative_path)
        if document is None:
            log.error(f"Cannot write {param.param_name}: {param.relative_path} is not a loaded file")
            continue
        try:
            set_nested_color(document, param.path, param.rgba)
        except (KeyError, IndexError, TypeError):
            log.exception(f"Cannot write {param.param_name}: path {list(param.path)} "
                          f"no longer resolves in {param.relative_path}")
    return modified


def serialize(original_files: Dict[str, Any], params: Sequence[ColorParameter]) -> List[FilePayload]:
    # every loaded file is written, changed or not
    modified = apply_parameters(original_files, params)
    return [(relative_path, dumps_document(document)) for relative_path, document in modified.items()]
