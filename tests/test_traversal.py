"""
Traversal driver tests

Callback order, grouping of flat items and conversion of nested documents.
"""

from menuwalk.models.context import RenderContext
from menuwalk.lib.traversal import tree_walk, items_flatten, items_group, rawItem_normalize

from conftest import item


class Recorder:
    """Records callbacks instead of rendering"""

    def __init__(self):
        self.calls = []

    def level_enter(self, output, depth, context):
        self.calls.append(("level_enter", depth))

    def level_exit(self, output, depth, context):
        self.calls.append(("level_exit", depth))

    def item_start(self, output, raw, depth, context):
        self.calls.append(("item_start", raw["ID"], depth))

    def item_end(self, output, raw, depth, context):
        self.calls.append(("item_end", raw["ID"], depth))


def record(items, max_depth=0):
    recorder = Recorder()
    tree_walk(items, recorder, [], RenderContext(), max_depth=max_depth)
    return recorder.calls


class TestCallbackOrder:
    """Depth-first callback sequence"""

    def test_sequence(self, shop_tree):
        """Parents open and close their level between item_start and item_end"""
        assert record(shop_tree) == [
            ("item_start", 1, 0),
            ("item_end", 1, 0),
            ("item_start", 2, 0),
            ("level_enter", 0),
            ("item_start", 3, 1),
            ("item_end", 3, 1),
            ("item_start", 4, 1),
            ("item_end", 4, 1),
            ("level_exit", 0),
            ("item_end", 2, 0),
        ]

    def test_max_depth_stops_descent(self, deep_tree):
        """The driver does not enter levels at or beyond max_depth"""
        calls = record(deep_tree, max_depth=2)
        assert ("item_start", 43, 2) not in calls
        assert ("level_enter", 1) not in calls
        assert ("item_start", 42, 1) in calls

    def test_orphans_become_top_level(self):
        """Items whose parent is missing are walked at the top level"""
        calls = record([item(1, "A"), item(2, "B", parent=99)])
        assert [c for c in calls if c[0] == "item_start"] == [("item_start", 1, 0), ("item_start", 2, 0)]

    def test_self_parent_is_top_level(self):
        """An item naming itself as parent is top level"""
        calls = record([item(5, "Loop", parent=5)])
        assert calls == [("item_start", 5, 0), ("item_end", 5, 0)]

    def test_children_marker_added(self, shop_tree):
        """Items with children get the marker class"""
        seen = {}

        class Classes(Recorder):
            def item_start(self, output, raw, depth, context):
                seen[raw["ID"]] = raw["classes"]

        tree_walk(shop_tree, Classes(), [], RenderContext())
        assert "menu-item-has-children" in seen[2]
        assert "menu-item-has-children" not in seen[1]

    def test_input_not_modified(self, shop_tree):
        """Walking does not change the caller's items"""
        before = [dict(i) for i in shop_tree]
        record(shop_tree)
        assert shop_tree == before


class TestGrouping:
    """Flat item normalization and grouping"""

    def test_normalize_classes(self):
        """Class strings, None classes and lowercase id keys are normalized"""
        assert rawItem_normalize({"ID": 1, "classes": "a b"})["classes"] == ["a", "b"]
        assert rawItem_normalize({"ID": 1, "classes": None})["classes"] == []
        assert rawItem_normalize({"id": 3})["ID"] == 3

    def test_group_preserves_order(self):
        """Siblings keep their input order within a group"""
        items = [rawItem_normalize(i) for i in [item(1, "A"), item(3, "C", parent=1), item(2, "B", parent=1)]]
        groups = items_group(items)
        assert [i["ID"] for i in groups[1]] == [3, 2]
        assert [i["ID"] for i in groups[0]] == [1]


class TestFlatten:
    """Nested documents to flat host items"""

    def test_nested_children(self):
        """Nested children become flat items with parent ids"""
        flat = items_flatten([
            {"ID": 1, "title": "Shop", "children": [{"ID": 2, "title": "Shoes"}, {"ID": 3, "title": "Hats"}]},
            {"ID": 4, "title": "About"},
        ])
        assert [(i["ID"], i["menu_item_parent"]) for i in flat] == [(1, 0), (2, 1), (3, 1), (4, 0)]

    def test_missing_ids_assigned(self):
        """Items without ids get fresh ones above the largest existing id"""
        flat = items_flatten([{"title": "A", "children": [{"title": "B"}]}, {"ID": 1, "title": "C"}])
        ids = [i["ID"] for i in flat]
        assert ids == [2, 3, 1]
        assert flat[1]["menu_item_parent"] == 2

    def test_flat_parents_kept_at_top(self):
        """Explicit parent ids in nested input are kept"""
        flat = items_flatten([{"ID": 1, "title": "A"}, {"ID": 2, "title": "B", "menu_item_parent": 1}])
        assert flat[1]["menu_item_parent"] == 1

    def test_round_trip_through_walk(self):
        """Flattened documents walk at the expected depths"""
        flat = items_flatten([{"ID": 1, "title": "Shop", "children": [{"ID": 2, "title": "Shoes"}]}])
        assert ("item_start", 2, 1) in record(flat)
