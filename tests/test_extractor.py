import copy
import pytest

from core.constants import ExportFormat
from core.extractor import (
    ColorExtractor,
    detect_format,
    extract,
    folder_of,
    folders_of,
    is_color_parameter,
    make_parameter_id,
)
from core.traversal import JsonTraversal
from core.types import RGBA, KeywordDictionary


class TestFormatDetection:
    def test_material(self, material_document):
        assert detect_format(material_document) is ExportFormat.VECTOR_PARAMETERS

    def test_data_table(self, datatable_document):
        assert detect_format(datatable_document) is ExportFormat.DATA_TABLE

    def test_generic(self, generic_document):
        assert detect_format(generic_document) is ExportFormat.GENERIC

    @pytest.mark.parametrize("document", [{}, [], "text", None, {"Exports": "nope"}, {"Name": "Other"}])
    def test_unrecognized(self, document):
        assert detect_format(document) is None
        assert extract(document, "x.json", "x.json") == []

    def test_empty_vector_parameters_still_material(self, material_document, dictionary):
        material_document["Exports"][0]["Data"][1]["Value"] = []
        assert detect_format(material_document) is ExportFormat.VECTOR_PARAMETERS
        assert extract(material_document, "m.json", "m.json", dictionary) == []


class TestKeywordClassification:
    @pytest.mark.parametrize("name,expected", [
        ("Emissive_Color", True),
        ("BASE_TINT", True),
        ("UV_Offset_Color", False),
        ("ColorOffset", False),
        ("ColorMask", False),
        ("colormask", True),
        ("Roughness", False),
    ])
    def test_is_color_parameter(self, dictionary, name, expected):
        assert is_color_parameter(name, dictionary) is expected

    def test_dictionary_keywords_lowercased(self):
        dictionary = KeywordDictionary.from_dict({"include_keywords": ["GLOW"], "exclude_exact": ["GlowMask"]})
        assert dictionary.include_keywords == ["glow"]
        assert is_color_parameter("InnerGlow", dictionary)
        assert not is_color_parameter("GlowMask", dictionary)


class TestVectorParameters:
    def test_extracts_accepted_names(self, material_document, dictionary):
        params = extract(material_document, "MI_Fireball.json", "vfx/MI_Fireball.json", dictionary)

        assert [p.param_name for p in params] == ["Emissive_Color", "Rim_Tint"]
        assert [p.id for p in params] == [
            make_parameter_id("vfx/MI_Fireball.json", "Emissive_Color", "ParameterValue", 0),
            make_parameter_id("vfx/MI_Fireball.json", "Rim_Tint", "ParameterValue", 1),
        ]
        assert params[0].rgba == RGBA(2.0, 0.5, 0.5, 1.0)
        assert params[0].file_name == "MI_Fireball.json"

    def test_paths_use_found_indices(self, material_document, dictionary):
        params = extract(material_document, "MI_Fireball.json", "vfx/MI_Fireball.json", dictionary)

        assert params[0].path == ("Exports", 0, "Data", 1, "Value", 0, "Value", 1, "Value", 0, "Value")
        assert params[1].path == ("Exports", 0, "Data", 1, "Value", 4, "Value", 1, "Value", 0, "Value")
        for param in params:
            assert JsonTraversal.resolve(material_document, param.path)["R"] == param.rgba.r

    def test_no_dictionary_yields_nothing(self, material_document):
        assert extract(material_document, "m.json", "m.json", None) == []

    def test_entries_without_name_or_value_are_skipped(self, material_document, dictionary):
        entries = material_document["Exports"][0]["Data"][1]["Value"]
        entries.insert(0, {"Name": "VectorParameterValues", "Value": [{"Name": "ParameterInfo", "Value": []}]})
        entries.insert(0, "garbage")
        params = extract(material_document, "m.json", "m.json", dictionary)
        assert [p.param_name for p in params] == ["Emissive_Color", "Rim_Tint"]
        assert params[0].path[5] == 2

    def test_channels_sanitized(self, material_document, dictionary):
        color = material_document["Exports"][0]["Data"][1]["Value"][0]["Value"][1]["Value"][0]["Value"]
        color["G"] = "bad"
        del color["B"]
        params = extract(material_document, "m.json", "m.json", dictionary)
        assert params[0].rgba == RGBA(2.0, 0.0, 0.0, 1.0)


class TestDataTable:
    def test_extracts_rich_text_rows_only(self, datatable_document):
        params = extract(datatable_document, "Styles.json", "ui/Styles.json")

        assert len(params) == 1
        param = params[0]
        assert param.id == make_parameter_id("ui/Styles.json", "Default", "SpecifiedColor", 0)
        assert param.param_name == "Default - SpecifiedColor"
        assert param.rgba == RGBA(1.0, 0.2, 0.1, 1.0)
        assert param.path == ("Exports", 0, "Table", "Data", 0, "Value",
                              0, "Value", 0, "Value", 0, "Value", 0, "Value")

    def test_row_without_value_is_skipped(self, datatable_document):
        del datatable_document["Exports"][0]["Table"]["Data"][0]["Value"]
        assert extract(datatable_document, "Styles.json", "ui/Styles.json") == []


class TestGeneric:
    def test_walks_every_export(self, generic_document):
        params = extract(generic_document, "WBP_Button.json", "WBP_Button.json")

        assert [p.id for p in params] == [
            make_parameter_id("WBP_Button.json", "WBP_Button", "BaseColor", 0),
            make_parameter_id("WBP_Button.json", "WBP_Button", "HighlightColor", 1),
            make_parameter_id("WBP_Button.json", "Export_1", "FontTopColor", 2),
        ]
        assert [p.param_name for p in params] == [
            "WBP_Button - BaseColor",
            "WBP_Button - HighlightColor",
            "Export_1 - FontTopColor",
        ]
        assert params[1].path == ("Exports", 0, "Data", 1, "Value", 0, "Value", 0, "Value")

    def test_leaf_requires_linear_color_struct(self, generic_document):
        generic_document["Exports"][0]["Data"][0]["StructType"] = "Vector"
        params = extract(generic_document, "WBP_Button.json", "WBP_Button.json")
        assert "WBP_Button - BaseColor" not in [p.param_name for p in params]

    def test_does_not_descend_into_leaf(self):
        inner = {"Name": "BaseColor", "StructType": "LinearColor",
                 "Value": [{"Value": {"R": 0.1, "G": 0.2, "B": 0.3, "A": 1}}]}
        outer = {"Name": "SpecifiedColor", "StructType": "LinearColor",
                 "Value": [{"Value": {"R": 1, "G": 0, "B": 0, "A": 1}, "Nested": inner}]}
        params = extract({"Exports": [{"ObjectName": "Obj", "Data": [outer]}]}, "a.json", "a.json")
        assert [p.param_name for p in params] == ["Obj - SpecifiedColor"]


class TestDeterminism:
    def test_same_input_same_output(self, material_document, datatable_document, generic_document, dictionary):
        extractor = ColorExtractor(dictionary)
        for document in (material_document, datatable_document, generic_document):
            first = extractor.extract(document, "a.json", "dir/a.json")
            second = extractor.extract(copy.deepcopy(document), "a.json", "dir/a.json")
            assert first == second

    def test_ids_keep_parts_apart(self):
        assert make_parameter_id("a.json", "X.json-P", "F", 0) != make_parameter_id("a.json-X.json", "P", "F", 0)
        assert make_parameter_id("a.json", "P-F", "G", 1) != make_parameter_id("a.json", "P", "F-G", 1)

    def test_dashed_paths_and_names_stay_distinct(self):
        def document(object_name):
            return {"Exports": [{"ObjectName": object_name, "Data": [
                {"Name": "Tint", "StructType": "LinearColor",
                 "Value": [{"Value": {"R": 1, "G": 0, "B": 0, "A": 1}}]},
            ]}]}

        # dash-joined, both would read "ui/a-b.json-Button-Tint-0"
        first = extract(document("b.json-Button"), "a", "ui/a")
        second = extract(document("Button"), "a-b.json", "ui/a-b.json")
        assert first[0].id != second[0].id

    def test_extraction_does_not_modify_document(self, generic_document):
        before = copy.deepcopy(generic_document)
        extract(generic_document, "a.json", "a.json")
        assert generic_document == before


class TestFolders:
    @pytest.mark.parametrize("relative_path,folder", [
        ("a.json", "/"),
        ("dir/a.json", "dir"),
        ("dir/sub/a.json", "dir/sub"),
        ("/a.json", "/"),
    ])
    def test_folder_of(self, relative_path, folder):
        assert folder_of(relative_path) == folder

    def test_folders_sorted_and_distinct(self, session):
        assert folders_of(session.parameters) == ["/", "ui", "vfx"]
