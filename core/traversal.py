from typing import Any, Iterator, Optional, Tuple

from core.constants import COLOR_FIELD_NAMES, LINEAR_COLOR_STRUCT
from core.types import JsonPath

ColorLeaf = Tuple[str, dict, JsonPath]


def child_record(items: Any, name: str) -> Tuple[Optional[int], Optional[dict]]:
    # UAssetAPI stores struct members as a list of {"Name": ..., "Value": ...} records
    if not isinstance(items, list):
        return None, None
    for index, item in enumerate(items):
        if isinstance(item, dict) and item.get("Name") == name:
            return index, item
    return None, None


def linear_color_of(node: dict) -> Optional[dict]:
    # node["Value"][0]["Value"], if it looks like a color struct
    value = node.get("Value")
    if not isinstance(value, list) or not value:
        return None
    first = value[0]
    if not isinstance(first, dict):
        return None
    color = first.get("Value")
    if isinstance(color, dict) and "R" in color:
        return color
    return None


def is_color_leaf(node: dict) -> bool:
    return (
        node.get("Name") in COLOR_FIELD_NAMES
        and node.get("StructType") == LINEAR_COLOR_STRUCT
        and linear_color_of(node) is not None
    )


class JsonTraversal:
    def __init__(self, document: Any):
        self.document = document

    def iter_color_fields(self, root: JsonPath = ()) -> Iterator[ColorLeaf]:
        """
        Depth first walk below `root` yielding (field_name, color_struct, path) for every color leaf.

        The path points at the color struct itself (the node path plus Value, 0, Value),
        recursion does not continue below a leaf.
        """
        yield from self._walk(self.resolve(self.document, root), tuple(root))

    def _walk(self, node: Any, path: JsonPath) -> Iterator[ColorLeaf]:
        if isinstance(node, dict):
            if is_color_leaf(node):
                yield node["Name"], linear_color_of(node), path + ("Value", 0, "Value")
                return
            for key, value in node.items():
                yield from self._walk(value, path + (key,))
        elif isinstance(node, list):
            for index, item in enumerate(node):
                yield from self._walk(item, path + (index,))
        # scalars and null end the walk

    @staticmethod
    def resolve(document: Any, path: JsonPath) -> Any:
        node = document
        for step in path:
            node = node[step]
        return node
