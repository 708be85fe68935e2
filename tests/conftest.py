import json
import pytest

from core.constants import DATA_TABLE_EXPORT_TYPE
from core.session import EditorSession
from core.types import KeywordDictionary, SourceFile

LINEAR_COLOR_TYPE = "UAssetAPI.UnrealTypes.FLinearColor, UAssetAPI"


def linear_color(r, g, b, a=1.0):
    return {"$type": LINEAR_COLOR_TYPE, "R": r, "G": g, "B": b, "A": a}


def color_leaf(name, r, g, b, a=1.0):
    return {
        "$type": "UAssetAPI.PropertyTypes.Structs.StructPropertyData, UAssetAPI",
        "Name": name,
        "StructType": "LinearColor",
        "Value": [{"Name": name, "Value": linear_color(r, g, b, a)}],
    }


def vector_parameter(name, r, g, b, a=1.0):
    return {
        "Name": "VectorParameterValues",
        "StructType": "VectorParameterValue",
        "Value": [
            {"Name": "ParameterInfo", "Value": [
                {"Name": "Name", "Value": name},
                {"Name": "Association", "Value": "GlobalParameter"},
            ]},
            {"Name": "ParameterValue", "Value": [
                {"Name": "ParameterValue", "Value": linear_color(r, g, b, a)},
            ]},
        ],
    }


@pytest.fixture
def dictionary():
    return KeywordDictionary(include_keywords=["color", "tint", "emissive"], exclude_exact=["ColorMask"])


@pytest.fixture
def material_document():
    return {
        "Exports": [{
            "ObjectName": "MI_Fireball",
            "Data": [
                {"Name": "ScalarParameterValues", "Value": []},
                {"Name": "VectorParameterValues", "Value": [
                    vector_parameter("Emissive_Color", 2.0, 0.5, 0.5),
                    vector_parameter("UV_Offset_Color", 0.1, 0.2, 0.0),
                    vector_parameter("ColorMask", 1.0, 0.0, 0.0),
                    vector_parameter("Roughness", 0.3, 0.3, 0.3),
                    vector_parameter("Rim_Tint", 0.5, 0.5, 0.5),
                ]},
            ],
        }]
    }


@pytest.fixture
def datatable_document():
    return {
        "Exports": [{
            "$type": DATA_TABLE_EXPORT_TYPE,
            "Table": {"Data": [
                {"Name": "Default", "StructType": "RichTextStyleRow", "Value": [
                    {"Name": "TextStyle", "StructType": "TextBlockStyle", "Value": [
                        {"Name": "ColorAndOpacity", "StructType": "SlateColor", "Value": [
                            color_leaf("SpecifiedColor", 1.0, 0.2, 0.1),
                        ]},
                    ]},
                ]},
                {"Name": "Ignored", "StructType": "SomeOtherRow", "Value": [
                    color_leaf("SpecifiedColor", 0.0, 1.0, 0.0),
                ]},
            ]},
        }]
    }


@pytest.fixture
def generic_document():
    return {
        "Exports": [
            {"ObjectName": "WBP_Button", "Data": [
                color_leaf("BaseColor", 0.0, 0.0, 1.0),
                {"Name": "Brush", "StructType": "SlateBrush", "Value": [
                    color_leaf("HighlightColor", 0.3, 0.3, 0.3),
                    {"Name": "Margin", "Value": None},
                ]},
            ]},
            {"Data": [color_leaf("FontTopColor", 1.0, 1.0, 0.0)]},
            {"ObjectName": "NoData"},
        ]
    }


@pytest.fixture
def source_files(material_document, datatable_document, generic_document):
    return [
        SourceFile("MI_Fireball.json", json.dumps(material_document), "vfx/MI_Fireball.json"),
        SourceFile("Styles.json", json.dumps(datatable_document), "ui/Styles.json"),
        SourceFile("WBP_Button.json", json.dumps(generic_document), "WBP_Button.json"),
    ]


@pytest.fixture
def session(dictionary, source_files):
    editor = EditorSession(dictionary)
    editor.load(source_files)
    return editor


@pytest.fixture
def export_tree(tmp_path, material_document, generic_document):
    # a dropped folder with one nested file and one unrelated file
    root = tmp_path / "Exports"
    (root / "vfx").mkdir(parents=True)
    (root / "vfx" / "MI_Fireball.json").write_text(json.dumps(material_document), encoding="utf-8")
    (root / "WBP_Button.JSON").write_text(json.dumps(generic_document), encoding="utf-8")
    (root / "notes.txt").write_text("not an export", encoding="utf-8")
    return root

