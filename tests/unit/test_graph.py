"""Unit tests for graph algorithms."""

import pytest

from graphex.core.graph import (
    Graph,
    TreeNode,
    all_deps_on,
    all_paths_to,
    direct_deps_on,
    flatten_tree,
    graph_to_tree,
    ranked,
    rankings,
    restrict_to,
    reverse_edges,
    select,
    why,
)
from graphex.core.graph.traversal import bfs_on, dfs_on, flood


@pytest.fixture
def linear_graph() -> Graph:
    """Create a linear graph: A -> B -> C -> D."""
    return Graph.from_edges([("A", "B"), ("B", "C"), ("C", "D")])


@pytest.fixture
def branching_graph() -> Graph:
    r"""Create a branching graph: A -> B -> D, A -> C -> D (diamond shape)."""
    return Graph.from_edges([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def cyclic_graph() -> Graph:
    """Create a graph with a cycle: A -> B -> C -> A."""
    return Graph.from_edges([("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def disconnected_graph() -> Graph:
    """Create a disconnected graph: A -> B, C -> D (two separate components)."""
    return Graph.from_edges([("A", "B"), ("C", "D")])


class TestGraph:
    """Tests for the Graph value."""

    def test_targets_become_keys(self) -> None:
        graph = Graph({"A": ["B", "C"]})
        assert set(graph) == {"A", "B", "C"}
        assert graph["B"] == frozenset()
        assert graph["C"] == frozenset()

    def test_repeated_sources_union(self) -> None:
        graph = Graph.from_edges([("A", "B"), ("A", "C"), ("A", "B")])
        assert graph["A"] == frozenset({"B", "C"})
        assert graph.num_edges == 2

    def test_isolated_nodes(self) -> None:
        graph = Graph.from_edges([], nodes=["lonely"])
        assert "lonely" in graph
        assert graph["lonely"] == frozenset()

    def test_self_edge_preserved(self) -> None:
        graph = Graph.from_edges([("A", "A")])
        assert graph["A"] == frozenset({"A"})

    def test_unknown_vs_edgeless(self, linear_graph: Graph) -> None:
        assert "D" in linear_graph
        assert linear_graph.edges_of("D") == frozenset()
        assert "missing" not in linear_graph
        assert linear_graph.edges_of("missing") == frozenset()
        with pytest.raises(KeyError):
            linear_graph["missing"]

    def test_equality_is_structural(self) -> None:
        assert Graph({"A": ["B"]}) == Graph.from_edges([("A", "B")])
        assert Graph({"A": ["B"]}) != Graph({"A": ["C"]})

    def test_iteration_is_sorted(self) -> None:
        graph = Graph.from_edges([("z", "a"), ("m", "b")])
        assert list(graph) == ["a", "b", "m", "z"]
        assert list(graph.iter_edges()) == [("m", "b"), ("z", "a")]

    def test_counts(self, branching_graph: Graph) -> None:
        assert branching_graph.num_nodes == 4
        assert branching_graph.num_edges == 4
        assert repr(branching_graph) == "Graph(nodes=4, edges=4)"


class TestViews:
    """Tests for reversal and restriction."""

    def test_reverse_linear(self, linear_graph: Graph) -> None:
        reversed_graph = reverse_edges(linear_graph)
        assert reversed_graph["D"] == frozenset({"C"})
        assert reversed_graph["A"] == frozenset()

    def test_reverse_keeps_keys(self, disconnected_graph: Graph) -> None:
        assert set(reverse_edges(disconnected_graph)) == set(disconnected_graph)

    def test_reverse_twice(self, cyclic_graph: Graph) -> None:
        assert reverse_edges(reverse_edges(cyclic_graph)) == cyclic_graph

    def test_reverse_leaves_input_intact(self, linear_graph: Graph) -> None:
        before = Graph.from_edges(linear_graph.iter_edges())
        reverse_edges(linear_graph)
        assert linear_graph == before

    def test_restrict_drops_outside_edges(self, branching_graph: Graph) -> None:
        restricted = restrict_to(branching_graph, {"A", "B", "D"})
        assert set(restricted) == {"A", "B", "D"}
        assert restricted["A"] == frozenset({"B"})
        assert restricted["B"] == frozenset({"D"})

    def test_restrict_ignores_unknown(self, linear_graph: Graph) -> None:
        assert set(restrict_to(linear_graph, {"A", "nope"})) == {"A"}

    def test_select(self, linear_graph: Graph) -> None:
        assert select(linear_graph, "B") == Graph.from_edges([("B", "C"), ("C", "D")])

    def test_select_unknown(self, linear_graph: Graph) -> None:
        assert select(linear_graph, "missing") == Graph()


class TestTraversal:
    """Tests for direct and transitive dependencies."""

    def test_direct_deps(self, branching_graph: Graph) -> None:
        assert direct_deps_on(branching_graph, "A") == frozenset({"B", "C"})

    def test_direct_deps_unknown(self, branching_graph: Graph) -> None:
        assert direct_deps_on(branching_graph, "missing") == frozenset()

    def test_all_deps_linear(self, linear_graph: Graph) -> None:
        assert all_deps_on(linear_graph, "A") == {"B", "C", "D"}
        assert all_deps_on(linear_graph, "D") == set()

    def test_all_deps_branching(self, branching_graph: Graph) -> None:
        assert all_deps_on(branching_graph, "A") == {"B", "C", "D"}

    def test_all_deps_cycle_terminates(self, cyclic_graph: Graph) -> None:
        assert all_deps_on(cyclic_graph, "A") == {"B", "C"}

    def test_all_deps_two_cycle_excludes_start(self) -> None:
        graph = Graph.from_edges([("A", "B"), ("B", "A")])
        assert all_deps_on(graph, "A") == {"B"}
        assert all_deps_on(graph, "B") == {"A"}

    def test_all_deps_self_edge(self) -> None:
        graph = Graph.from_edges([("A", "A"), ("A", "B")])
        assert all_deps_on(graph, "A") == {"A", "B"}

    def test_all_deps_unknown(self, linear_graph: Graph) -> None:
        assert all_deps_on(linear_graph, "missing") == set()

    def test_flood_includes_start(self, linear_graph: Graph) -> None:
        assert flood(linear_graph.edges_of, "B") == {"B", "C", "D"}

    def test_bfs_order(self, branching_graph: Graph) -> None:
        assert bfs_on(branching_graph.edges_of, "A") == ["A", "B", "C", "D"]

    def test_dfs_order(self, branching_graph: Graph) -> None:
        assert dfs_on(branching_graph.edges_of, "A") == ["A", "B", "D", "C"]


class TestRankings:
    """Tests for dependency rankings."""

    def test_rankings_linear(self, linear_graph: Graph) -> None:
        assert rankings(linear_graph) == {"A": 0, "B": 1, "C": 2, "D": 3}

    def test_rankings_branching(self, branching_graph: Graph) -> None:
        assert rankings(branching_graph) == {"A": 0, "B": 1, "C": 1, "D": 3}

    def test_ranked_sorted_stable(self, branching_graph: Graph) -> None:
        assert ranked(branching_graph) == [("D", 3), ("B", 1), ("C", 1), ("A", 0)]

    def test_ranked_top(self, linear_graph: Graph) -> None:
        assert ranked(linear_graph, top_k=2) == [("D", 3), ("C", 2)]


class TestPathfinding:
    """Tests for path finding algorithms."""

    def test_why_linear(self, linear_graph: Graph) -> None:
        assert why(linear_graph, "A", "D") == ["A", "B", "C", "D"]

    def test_why_same_node(self, linear_graph: Graph) -> None:
        assert why(linear_graph, "A", "A") == ["A"]

    def test_why_shortest(self) -> None:
        graph = Graph.from_edges([("A", "B"), ("B", "C"), ("C", "D"), ("A", "D")])
        assert why(graph, "A", "D") == ["A", "D"]

    def test_why_deterministic_choice(self, branching_graph: Graph) -> None:
        assert why(branching_graph, "A", "D") == ["A", "B", "D"]

    def test_why_no_path(self, disconnected_graph: Graph) -> None:
        assert why(disconnected_graph, "A", "D") == []

    def test_why_against_edges(self, linear_graph: Graph) -> None:
        assert why(linear_graph, "D", "A") == []

    def test_why_unknown_node(self, linear_graph: Graph) -> None:
        assert why(linear_graph, "A", "missing") == []
        assert why(linear_graph, "missing", "A") == []

    def test_why_through_cycle(self, cyclic_graph: Graph) -> None:
        assert why(cyclic_graph, "B", "A") == ["B", "C", "A"]

    def test_all_paths_branching(self) -> None:
        graph = Graph.from_edges(
            [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("A", "E"), ("F", "D")]
        )
        paths = all_paths_to(graph, "A", "D")
        assert paths == Graph.from_edges([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])

    def test_all_paths_no_path(self, disconnected_graph: Graph) -> None:
        assert all_paths_to(disconnected_graph, "A", "D") == Graph()

    def test_all_paths_unknown(self, linear_graph: Graph) -> None:
        assert all_paths_to(linear_graph, "A", "missing") == Graph()

    def test_all_paths_keeps_shortest(self) -> None:
        graph = Graph.from_edges([("A", "B"), ("B", "C"), ("A", "X"), ("X", "Y")])
        assert why(all_paths_to(graph, "A", "C"), "A", "C") == why(graph, "A", "C")


class TestTree:
    """Tests for tree rendering."""

    def test_tree_linear(self, linear_graph: Graph) -> None:
        tree = graph_to_tree(linear_graph, "A")
        assert tree.label == "A"
        assert [c.label for c in tree.children] == ["B"]
        assert flatten_tree(tree) == ["A", "B", "C", "D"]

    def test_tree_branching_repeats_shared_nodes(self, branching_graph: Graph) -> None:
        tree = graph_to_tree(branching_graph, "A")
        assert [node.label for node in tree] == ["A", "B", "D", "C", "D"]
        assert len(tree) == 5

    def test_tree_cycle_truncated(self) -> None:
        graph = Graph.from_edges([("A", "B"), ("B", "A")])
        tree = graph_to_tree(graph, "A")
        assert tree.label == "A"
        assert [c.label for c in tree.children] == ["B"]
        assert tree.children[0].children == []

    def test_tree_depths(self, linear_graph: Graph) -> None:
        assert [node.depth for node in graph_to_tree(linear_graph, "A")] == [0, 1, 2, 3]

    def test_tree_respects_depth(self, linear_graph: Graph) -> None:
        tree = graph_to_tree(linear_graph, "A", max_depth=1)
        assert flatten_tree(tree) == ["A", "B"]

    def test_tree_nonexistent_root(self, linear_graph: Graph) -> None:
        assert graph_to_tree(linear_graph, "missing") == TreeNode(label="missing")

    def test_flatten_without_root(self, linear_graph: Graph) -> None:
        tree = graph_to_tree(linear_graph, "B")
        assert flatten_tree(tree, include_root=False) == ["C", "D"]

    def test_tree_long_chain(self) -> None:
        graph = Graph.from_edges([(f"m{i}", f"m{i + 1}") for i in range(1500)])
        tree = graph_to_tree(graph, "m0")

        assert len(tree) == 1501
        assert flatten_tree(tree) == [f"m{i}" for i in range(1501)]
        assert flatten_tree(tree, include_root=False)[-1] == "m1500"
        assert tree == graph_to_tree(graph, "m0")

        deepest = tree.to_dict()
        for _ in range(1500):
            (deepest,) = deepest["children"]
        assert deepest == {"name": "m1500", "depth": 1500, "children": []}

    def test_tree_long_cycle(self) -> None:
        edges = [(f"m{i}", f"m{i + 1}") for i in range(1499)] + [("m1499", "m0")]
        tree = graph_to_tree(Graph.from_edges(edges), "m0")
        assert len(tree) == 1500

    def test_tree_depth_bounds_stacked_diamonds(self) -> None:
        edges = []
        for i in range(30):
            top, bottom = f"d{i}", f"d{i + 1}"
            edges += [(top, f"b{i}"), (top, f"c{i}"), (f"b{i}", bottom), (f"c{i}", bottom)]
        graph = Graph.from_edges(edges)

        tree = graph_to_tree(graph, "d0", max_depth=4)
        assert max(node.depth for node in tree) == 4
        assert len(tree) == 1 + 2 + 2 + 4 + 4

    def test_tree_equality(self) -> None:
        assert TreeNode("A", children=[TreeNode("B", 1)]) == TreeNode("A", children=[TreeNode("B", 1)])
        assert TreeNode("A", children=[TreeNode("B", 1)]) != TreeNode("A", children=[TreeNode("C", 1)])
        assert TreeNode("A") != TreeNode("A", children=[TreeNode("B", 1)])

    def test_tree_to_dict(self) -> None:
        tree = graph_to_tree(Graph.from_edges([("A", "B")]), "A")
        assert tree.to_dict() == {
            "name": "A",
            "depth": 0,
            "children": [{"name": "B", "depth": 1, "children": []}],
        }


class TestScenarios:
    """Worked examples."""

    def test_chain(self) -> None:
        graph = Graph({"A": ["B"], "B": ["C"], "C": []})
        assert all_deps_on(graph, "A") == {"B", "C"}
        assert sorted(direct_deps_on(graph, "A")) == ["B"]
        assert why(graph, "A", "C") == ["A", "B", "C"]
        assert rankings(graph) == {"A": 0, "B": 1, "C": 2}

    def test_two_cycle(self) -> None:
        graph = Graph({"A": ["B"], "B": ["A"]})
        assert all_deps_on(graph, "A") == {"B"}
        tree = graph_to_tree(graph, "A")
        assert tree.children == [TreeNode(label="B", depth=1)]
