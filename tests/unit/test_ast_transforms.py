#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for ready-made visitors and transformation helpers."""

import pytest
from utils import Add, Arg, Block, Echo, FuncCall, Name, Nop, Num, Print, String, left_nested_chain

from astwalk.ast import REMOVE_NODE, SKIP_CHILDREN, ReplaceNode, SourceLocation
from astwalk.ast.transforms import (
    CallbackVisitor,
    FirstNodeFinder,
    NodeCollector,
    NodeRemover,
    NodeReplacer,
    NodeTypeCollector,
    clone_forest,
    clone_node,
    extract_nodes,
    filter_nodes,
    find_first,
    transform_nodes,
    walk,
)
from astwalk.exceptions import InvalidVisitorActionError
from astwalk.options import TraverserOptions


@pytest.fixture
def program():
    """Create a small program forest."""
    return [
        Echo(exprs=[String("a"), Num(1)]),
        Nop("comment"),
        Print(expr=Add(left=Num(2), right=Num(3))),
        [FuncCall(name=Name(parts=["f"]), args=[Arg(value=String("b")), Nop("inner")])],
    ]


@pytest.mark.unit
class TestCloning:
    """Test node and forest cloning."""

    def test_clone_node(self) -> None:
        """Test cloning produces an equal but independent tree."""
        original = Print(expr=Add(left=Num(1), right=Num(2)))
        cloned = clone_node(original)

        assert cloned == original
        assert cloned is not original
        assert cloned.expr is not original.expr

    def test_clone_forest_keeps_sharing(self) -> None:
        """Test nodes shared within a forest stay shared in the copy."""
        shared = String("shared")
        forest = [Print(expr=shared), [Arg(value=shared)]]

        cloned = clone_forest(forest)

        assert cloned == forest
        assert cloned[0].expr is not shared
        assert cloned[0].expr is cloned[1][0].value


@pytest.mark.unit
class TestSourceLocation:
    """Test source locations attached through a bookkeeping field."""

    @pytest.fixture
    def located(self):
        location = SourceLocation(file="main.php", line=3, column=5, end_line=3, end_column=12)
        name = Name(parts=["strlen"], source_location=location)
        return [FuncCall(name=name, args=[Arg(value=String("abc"))])], name, location

    def test_location_is_not_a_slot(self) -> None:
        """Test the location field is not reported as a child slot."""
        assert Name.slot_names() == ("parts",)

    def test_location_survives_traversal(self, located) -> None:
        """Test traversal leaves the location in place and never enters it."""
        forest, name, location = located
        entered = []

        result = transform_nodes(forest, CallbackVisitor(enter=entered.append))

        assert result[0].name is name
        assert name.source_location is location
        assert all(not isinstance(node, SourceLocation) for node in entered)
        assert len(entered) == 4

    def test_location_survives_cloning(self, located) -> None:
        """Test clone_node copies the location along with the node."""
        forest, name, location = located

        cloned = clone_node(forest[0])

        assert cloned.name.source_location == location
        assert cloned.name.source_location is not location

    def test_location_survives_filtering(self, located) -> None:
        """Test filter_nodes keeps locations on the nodes it keeps."""
        forest, name, location = located

        result = filter_nodes(forest, lambda n: not isinstance(n, Arg))

        assert result[0].args == []
        assert result[0].name.source_location == SourceLocation("main.php", 3, 5, 3, 12)
        assert result[0].name.source_location is not location
        assert name.source_location is location


@pytest.mark.unit
class TestWalk:
    """Test visitor-free iteration."""

    def test_walk_pre_order(self, program) -> None:
        """Test walk yields every node parents-first, flattening lists."""
        kinds = [type(node).__name__ for node in walk(program)]

        assert kinds == [
            "Echo",
            "String",
            "Num",
            "Nop",
            "Print",
            "Add",
            "Num",
            "Num",
            "FuncCall",
            "Name",
            "Arg",
            "String",
            "Nop",
        ]

    def test_walk_empty(self) -> None:
        """Test walking an empty forest yields nothing."""
        assert list(walk([])) == []

    def test_walk_deep_chain(self) -> None:
        """Test walk handles nesting deeper than the recursion limit."""
        depth = 5000
        chain = left_nested_chain(depth)

        nodes = walk([chain])

        assert next(nodes) is chain
        assert sum(1 for _ in nodes) == 2 * depth - 2


@pytest.mark.unit
class TestCollectors:
    """Test collecting and finding visitors."""

    def test_extract_by_type(self, program) -> None:
        """Test extracting nodes by type in pre-order."""
        numbers = extract_nodes(program, Num)

        assert [n.value for n in numbers] == [1, 2, 3]

    def test_extract_by_type_tuple(self, program) -> None:
        """Test a tuple of types matches any of them."""
        found = extract_nodes(program, (String, Nop))

        assert [type(n).__name__ for n in found] == ["String", "Nop", "String", "Nop"]

    def test_extract_by_predicate(self, program) -> None:
        """Test extracting with a callable."""
        found = extract_nodes(program, lambda n: isinstance(n, Nop) and n.comment == "inner")

        assert found == [Nop("inner")]

    def test_extract_all(self, program) -> None:
        """Test None matches every node."""
        assert len(extract_nodes(program)) == len(list(walk(program)))

    def test_extract_rejects_bad_matcher(self, program) -> None:
        """Test matchers that are neither types nor callables raise TypeError."""
        with pytest.raises(TypeError):
            extract_nodes(program, "Num")

    def test_extract_does_not_modify(self, program) -> None:
        """Test extraction leaves the forest unchanged."""
        before = clone_forest(program)

        extract_nodes(program, Num)

        assert program == before

    def test_collector_resets_between_traversals(self) -> None:
        """Test a reused collector starts empty on every traversal."""
        collector = NodeCollector(lambda n: isinstance(n, Num))

        transform_nodes([Num(1), Num(2)], collector)
        transform_nodes([Num(3)], collector)

        assert collector.collected == [Num(3)]

    def test_type_collector(self, program) -> None:
        """Test NodeTypeCollector collects subclasses too."""

        class Special(Nop):
            pass

        collector = NodeTypeCollector(Nop)
        transform_nodes(program + [Special("x")], collector)

        assert [n.comment for n in collector.collected] == ["comment", "inner", "x"]

    def test_type_collector_requires_types(self) -> None:
        """Test NodeTypeCollector needs at least one type."""
        with pytest.raises(TypeError):
            NodeTypeCollector()

    def test_find_first(self, program) -> None:
        """Test find_first returns the first pre-order match."""
        first = find_first(program, Num)

        assert first is program[0].exprs[1]

    def test_find_first_missing(self, program) -> None:
        """Test find_first returns None without a match."""
        assert find_first(program, Block) is None

    def test_first_node_finder_skips_after_match(self) -> None:
        """Test the finder skips descent once a match is found."""
        target = Print(expr=Num(1))
        later = Print(expr=Num(2))
        finder = FirstNodeFinder(lambda n: isinstance(n, Print))
        collector = NodeCollector()

        transform_nodes([target, later], finder, collector)

        assert finder.found is target
        assert collector.collected == [target, later]


@pytest.mark.unit
class TestRemoversAndReplacers:
    """Test node removal and replacement visitors."""

    def test_node_remover_in_lists(self, program) -> None:
        """Test removing list items in place and counting them."""
        remover = NodeRemover(lambda n: isinstance(n, Nop))

        result = transform_nodes(program, remover)

        assert remover.removed == 2
        assert extract_nodes(result, Nop) == []
        assert result[1] == Print(expr=Add(left=Num(2), right=Num(3)))

    def test_node_remover_single_slot_needs_clear(self) -> None:
        """Test removing a single-slot child fails under the default policy."""
        remover = NodeRemover(lambda n: isinstance(n, Add))

        with pytest.raises(InvalidVisitorActionError):
            transform_nodes([Print(expr=Add(left=Num(1), right=Num(2)))], remover)

    def test_node_remover_single_slot_clear(self) -> None:
        """Test the clear policy empties a single slot."""
        remover = NodeRemover(lambda n: isinstance(n, Add))
        options = TraverserOptions(single_slot_removal="clear")

        result = transform_nodes([Print(expr=Add(left=Num(1), right=Num(2)))], remover, options=options)

        assert result == [Print(expr=None)]

    def test_node_replacer(self) -> None:
        """Test replacing nodes on leave, keeping unchanged ones."""
        replacer = NodeReplacer(lambda n: Num(n.value * 10) if isinstance(n, Num) else n)

        result = transform_nodes([Add(left=Num(1), right=Num(2))], replacer)

        assert result == [Add(left=Num(10), right=Num(20))]

    def test_node_replacer_none_keeps(self) -> None:
        """Test returning None from the replace function keeps the node."""
        node = Num(1)
        replacer = NodeReplacer(lambda n: None)

        assert transform_nodes([node], replacer)[0] is node

    def test_constant_folding_with_replacer(self) -> None:
        """Test bottom-up folding sees already-folded children."""

        def fold(node):
            if isinstance(node, Add) and isinstance(node.left, Num) and isinstance(node.right, Num):
                return Num(node.left.value + node.right.value)
            return node

        forest = [Print(expr=Add(left=Add(left=Num(1), right=Num(2)), right=Num(4)))]

        result = transform_nodes(forest, NodeReplacer(fold))

        assert result == [Print(expr=Num(7))]


@pytest.mark.unit
class TestFilterNodes:
    """Test filtering helper."""

    def test_filter_returns_copy(self, program) -> None:
        """Test filter_nodes never mutates its input."""
        before = clone_forest(program)

        result = filter_nodes(program, lambda n: not isinstance(n, Nop))

        assert program == before
        assert extract_nodes(result, Nop) == []
        assert len(result) == 3

    def test_filter_clears_single_slots(self) -> None:
        """Test filtering out a single-slot child leaves None behind."""
        forest = [Print(expr=String("x")), Print(expr=Num(1))]

        result = filter_nodes(forest, lambda n: not isinstance(n, String))

        assert result == [Print(expr=None), Print(expr=Num(1))]

    def test_filter_removes_subtrees(self) -> None:
        """Test a removed node takes its descendants with it."""
        forest = [Block(stmts=[Num(1), Num(2)]), Num(3)]

        result = filter_nodes(forest, lambda n: not isinstance(n, Block))

        assert result == [Num(3)]


@pytest.mark.unit
class TestCallbackVisitor:
    """Test the callable-backed visitor."""

    def test_defaults_keep(self) -> None:
        """Test a visitor without callables is a no-op."""
        forest = [Print(expr=Num(1))]

        assert transform_nodes(forest, CallbackVisitor()) == [Print(expr=Num(1))]

    def test_all_hooks_called(self) -> None:
        """Test every provided callable receives its hook's value."""
        seen = []
        visitor = CallbackVisitor(
            before=lambda forest: seen.append(("before", len(forest))),
            enter=lambda node: seen.append(("enter", type(node).__name__)),
            leave=lambda node: seen.append(("leave", type(node).__name__)),
            after=lambda forest: seen.append(("after", len(forest))),
        )

        transform_nodes([Nop()], visitor)

        assert seen == [("before", 1), ("enter", "Nop"), ("leave", "Nop"), ("after", 1)]

    def test_returns_actions(self) -> None:
        """Test callables may return actions."""
        visitor = CallbackVisitor(
            enter=lambda node: SKIP_CHILDREN if isinstance(node, Print) else None,
            leave=lambda node: REMOVE_NODE if isinstance(node, Nop) else ReplaceNode(Num(0)),
        )

        result = transform_nodes([Nop(), Print(expr=Nop())], visitor)

        assert result == [Num(0)]
