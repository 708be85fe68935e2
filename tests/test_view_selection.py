import pytest

from core.constants import SortDirection
from core.selection import select_range, toggle, toggle_all
from core.types import RGBA, ColorParameter
from core.view import DisplayState, next_sort, visible_parameters


def param(relative_path, name, rgba):
    return ColorParameter(f"{relative_path}-{name}", relative_path.rsplit("/", 1)[-1], relative_path, name, (), rgba)


@pytest.fixture
def params():
    return [
        param("fx/Fire.json", "Flame_Color", RGBA(0.0, 0.0, 1.0, 1.0)),
        param("fx/Fire.json", "Smoke_Tint", RGBA(0.4, 0.4, 0.4, 1.0)),
        param("ui/Menu.json", "Menu - BaseColor", RGBA(1.0, 0.0, 0.0, 1.0)),
        param("Root.json", "Glow_Color", RGBA(0.0, 1.0, 0.0, 1.0)),
    ]


FOLDERS = ["/", "fx", "ui"]


class TestVisibleParameters:
    def test_default_keeps_load_order(self, params):
        state = DisplayState(selected_folders=set(FOLDERS))
        assert visible_parameters(params, FOLDERS, state) == params

    def test_sort_by_hue(self, params):
        state = DisplayState(selected_folders=set(FOLDERS), sort=SortDirection.ASCENDING)
        names = [p.param_name for p in visible_parameters(params, FOLDERS, state)]
        # gray has hue 0 and zero saturation, so it sorts before pure red
        assert names == ["Smoke_Tint", "Menu - BaseColor", "Glow_Color", "Flame_Color"]

        state.sort = SortDirection.DESCENDING
        names = [p.param_name for p in visible_parameters(params, FOLDERS, state)]
        assert names == ["Flame_Color", "Glow_Color", "Menu - BaseColor", "Smoke_Tint"]

    def test_folder_filter(self, params):
        state = DisplayState(selected_folders={"/", "ui"})
        names = [p.param_name for p in visible_parameters(params, FOLDERS, state)]
        assert names == ["Menu - BaseColor", "Glow_Color"]

    def test_no_folders_means_no_filter(self, params):
        assert visible_parameters(params, [], DisplayState()) == params

    def test_hide_grayscale(self, params):
        state = DisplayState(selected_folders=set(FOLDERS), show_grayscale=False)
        assert "Smoke_Tint" not in [p.param_name for p in visible_parameters(params, FOLDERS, state)]

    @pytest.mark.parametrize("search,expected", [
        ("color", ["Flame_Color", "Menu - BaseColor", "Glow_Color"]),
        ("FIRE", ["Flame_Color", "Smoke_Tint"]),
        ("menu.json", ["Menu - BaseColor"]),
        ("nothing", []),
    ])
    def test_search(self, params, search, expected):
        state = DisplayState(selected_folders=set(FOLDERS), search=search)
        assert [p.param_name for p in visible_parameters(params, FOLDERS, state)] == expected

    def test_next_sort_cycles(self):
        direction = SortDirection.NONE
        seen = []
        for _ in range(3):
            direction = next_sort(direction)
            seen.append(direction)
        assert seen == [SortDirection.ASCENDING, SortDirection.DESCENDING, SortDirection.NONE]


class TestSelection:
    ids = ["a", "b", "c", "d", "e"]

    def test_toggle(self):
        selection = toggle(set(), "a")
        assert selection == {"a"}
        assert toggle(selection, "a") == set()

    def test_toggle_does_not_mutate(self):
        original = {"a"}
        toggle(original, "b")
        assert original == {"a"}

    def test_range_either_direction(self):
        assert select_range(set(), self.ids, 1, 3) == {"b", "c", "d"}
        assert select_range({"a"}, self.ids, 3, 1) == {"a", "b", "c", "d"}

    def test_range_deselect(self):
        assert select_range(set(self.ids), self.ids, 0, 2, deselect=True) == {"d", "e"}

    @pytest.mark.parametrize("anchor", [None, -1, 10])
    def test_range_without_valid_anchor_toggles(self, anchor):
        assert select_range({"a"}, self.ids, anchor, 2) == {"a", "c"}

    def test_toggle_all(self):
        assert toggle_all({"z"}, self.ids[:2]) == {"a", "b"}
        assert toggle_all({"a", "b", "z"}, self.ids[:2]) == set()
        assert toggle_all({"z"}, []) == set()
