"""Tests for the recursive node transformer."""

import datetime

import pytest

from objserial.exceptions import ReconstructionError
from objserial.registry import GLOBAL_NAMESPACE
from objserial.registry import StrategyRegistry
from objserial.registry import namespace_chain
from objserial.transform import Transformer
from tests.examples.models import Line
from tests.examples.models import Point
from tests.examples.models import Vector

VECTOR = "tests.examples.models.Vector"


@pytest.fixture
def registry():
    registry = StrategyRegistry()
    registry.register_type(Point)
    return registry


def make_transformer(registry, namespace=None, marker="__CLASS__"):
    return Transformer(registry, namespace_chain(namespace), marker)


class TestCollapse:
    """Tests for the collapse direction."""

    def test_tagged_mapping_passes_through(self, registry):
        """Test that tagged mappings without a strategy keep their marker."""
        node = {"__CLASS__": "Point", "x": 1, "y": 2}
        assert make_transformer(registry).transform(node, "collapse") == node

    def test_untagged_mapping_unchanged(self, registry):
        """Test that plain mappings are never tagged or altered."""
        node = {"x": 1, "nested": {"y": [1, 2]}}
        result = make_transformer(registry).transform(node, "collapse")
        assert result == node
        assert "__CLASS__" not in result

    def test_input_is_not_mutated(self, registry):
        """Test that the transformer builds new containers."""
        node = {"items": [{"__CLASS__": "Point", "x": 1, "y": 2}]}
        result = make_transformer(registry).transform(node, "collapse")
        assert result is not node
        assert result["items"] is not node["items"]

    def test_collapse_routine_receives_instance(self, registry):
        """Test that collapse routines receive an instance rebuilt from the tagged mapping."""
        seen = []

        def collapse(point):
            seen.append(point)
            return f"{point.x},{point.y}"

        registry.register(GLOBAL_NAMESPACE, "Point", collapse=collapse)
        node = {"start": {"__CLASS__": "Point", "x": 1, "y": 2}}
        assert make_transformer(registry).transform(node, "collapse") == {"start": "1,2"}
        assert seen == [Point(1, 2)]

    def test_children_are_collapsed_first(self, registry):
        """Test that nested values are collapsed before their parent."""
        registry.register(GLOBAL_NAMESPACE, "Point", collapse=lambda p: [p.x, p.y])
        registry.register(GLOBAL_NAMESPACE, Line, collapse=lambda line: [line.start, line.end])
        node = {
            "__CLASS__": "tests.examples.models.Line",
            "start": {"__CLASS__": "Point", "x": 0, "y": 0},
            "end": {"__CLASS__": "Point", "x": 1, "y": 1},
        }
        assert make_transformer(registry).transform(node, "collapse") == [[0, 0], [1, 1]]

    def test_leaf_strategy(self, registry):
        """Test that typed leaves are collapsed by their runtime type."""
        registry.register(GLOBAL_NAMESPACE, datetime.date, collapse=lambda d: d.isoformat())
        node = [datetime.date(2024, 1, 2), "2024"]
        assert make_transformer(registry).transform(node, "collapse") == ["2024-01-02", "2024"]

    def test_class_namespace_precedence(self, registry):
        """Test that the consuming class's strategy wins over the global one."""
        registry.register(GLOBAL_NAMESPACE, datetime.date, collapse=lambda d: "global")
        registry.register(Line, datetime.date, collapse=lambda d: "line")
        node = {"when": datetime.date(2024, 1, 1)}
        assert make_transformer(registry, Line).transform(node, "collapse") == {"when": "line"}
        assert make_transformer(registry).transform(node, "collapse") == {"when": "global"}

    def test_non_string_tag_passes_through(self, registry):
        """Test that a marker holding a non-string value is left alone when collapsing."""
        node = {"__CLASS__": 42, "x": 1}
        assert make_transformer(registry).transform(node, "collapse") == node

    def test_marker_disabled(self, registry):
        """Test that no mapping is treated as tagged when the marker is None."""
        registry.register(GLOBAL_NAMESPACE, "Point", collapse=lambda p: "collapsed")
        node = {"__CLASS__": "Point", "x": 1, "y": 2}
        assert make_transformer(registry, marker=None).transform(node, "collapse") == node

    def test_string_matching_identity_is_not_collapsed(self, registry):
        """Test that string values are looked up by their type, not by their text."""
        registry.register(GLOBAL_NAMESPACE, datetime.datetime, collapse=lambda dt: dt.isoformat())
        registry.register(GLOBAL_NAMESPACE, "Point", collapse=lambda p: "collapsed")
        node = {"kind": "datetime.datetime", "name": "Point"}
        assert make_transformer(registry).transform(node, "collapse") == node

    def test_str_strategy_applies_to_strings(self, registry):
        """Test that a strategy registered for str collapses every string leaf."""
        registry.register(GLOBAL_NAMESPACE, str, collapse=str.upper)
        node = {"a": "hello", "b": ["x", 1]}
        result = make_transformer(registry).transform(node, "collapse")
        assert result == {"a": "HELLO", "b": ["X", 1]}

    def test_marker_value_is_not_transformed(self, registry):
        """Test that the tag is copied through untouched while attributes are transformed."""
        registry.register(GLOBAL_NAMESPACE, str, collapse=str.upper)
        node = {"__CLASS__": "Point", "x": "a", "y": "b"}
        assert make_transformer(registry).transform(node, "collapse") == {
            "__CLASS__": "Point",
            "x": "A",
            "y": "B",
        }

    def test_unresolvable_type_collapses_mapping(self, registry):
        """Test that a collapse routine for an unknown type receives the tagged mapping."""
        registry.register(GLOBAL_NAMESPACE, "nowhere.Money", collapse=lambda m: f"${m['amount']}")
        node = {"price": {"__CLASS__": "nowhere.Money", "amount": 5}}
        assert make_transformer(registry).transform(node, "collapse") == {"price": "$5"}

    def test_unknown_direction(self, registry):
        """Test that an unknown direction is rejected."""
        with pytest.raises(ValueError, match="Unknown transform direction"):
            make_transformer(registry).transform({}, "sideways")


class TestExpand:
    """Tests for the expand direction."""

    def test_tagged_mapping_becomes_instance(self, registry):
        """Test that tagged mappings are rebuilt into their type without the marker."""
        result = make_transformer(registry).transform(
            {"__CLASS__": "Point", "x": 10, "y": 10}, "expand"
        )
        assert result == Point(10, 10)
        assert not hasattr(result, "__CLASS__")

    def test_nested_instances(self, registry):
        """Test that nested tagged mappings are rebuilt bottom-up."""
        node = {
            "__CLASS__": VECTOR,
            "dx": {"__CLASS__": "Point", "x": 1, "y": 1},
            "dy": [{"__CLASS__": "Point", "x": 2, "y": 2}],
        }
        result = make_transformer(registry).transform(node, "expand")
        assert isinstance(result, Vector)
        assert result.dx == Point(1, 1)
        assert result.dy == [Point(2, 2)]

    def test_expand_routine_applied(self, registry):
        """Test that a registered expand routine post-processes the instance."""
        registry.register(GLOBAL_NAMESPACE, "Point", expand=lambda p: (p.x, p.y))
        node = {"__CLASS__": "Point", "x": 3, "y": 4}
        assert make_transformer(registry).transform(node, "expand") == (3, 4)

    def test_marker_value_is_not_expanded(self, registry):
        """Test that a str expand strategy does not rewrite the tag before reconstruction."""
        registry.register(GLOBAL_NAMESPACE, str, expand=str.upper)
        result = make_transformer(registry).transform(
            {"__CLASS__": "Point", "x": "a", "y": "b"}, "expand"
        )
        assert result == Point("A", "B")

    def test_collapse_only_strategy_ignored(self, registry):
        """Test that a collapse-only strategy leaves expansion to the default."""
        registry.register(GLOBAL_NAMESPACE, "Point", collapse=lambda p: "collapsed")
        node = {"__CLASS__": "Point", "x": 3, "y": 4}
        assert make_transformer(registry).transform(node, "expand") == Point(3, 4)

    def test_unknown_type_raises(self, registry):
        """Test that unresolvable tags raise a reconstruction error."""
        with pytest.raises(ReconstructionError, match="nope.Missing"):
            make_transformer(registry).transform({"__CLASS__": "nope.Missing"}, "expand")

    def test_non_string_tag_raises(self, registry):
        """Test that a marker holding a non-string value cannot be expanded."""
        with pytest.raises(ReconstructionError, match="type identity string"):
            make_transformer(registry).transform({"__CLASS__": 42}, "expand")

    def test_custom_marker(self, registry):
        """Test that only the configured marker key identifies tagged mappings."""
        node = {"_type": "Point", "x": 1, "y": 2, "other": {"__CLASS__": "Point"}}
        result = make_transformer(registry, marker="_type").transform(node, "expand")
        assert result == Point(1, 2)
        assert result.other == {"__CLASS__": "Point"}
