"""Unit tests for merging per-module import contributions."""

from hypothesis import given
from hypothesis import strategies as st

from graphex.core.graph import Graph, ModuleGraph

modules = st.sampled_from(["A", "B", "C", "D", "E"])

module_graphs = st.dictionaries(modules, st.frozensets(modules, max_size=4), max_size=5).map(
    ModuleGraph
)


class TestModuleGraphLaws:
    """Merging is a commutative monoid."""

    @given(a=module_graphs, b=module_graphs, c=module_graphs)
    def test_associative(self, a: ModuleGraph, b: ModuleGraph, c: ModuleGraph) -> None:
        assert (a | b) | c == a | (b | c)

    @given(a=module_graphs, b=module_graphs)
    def test_commutative(self, a: ModuleGraph, b: ModuleGraph) -> None:
        assert a | b == b | a

    @given(a=module_graphs)
    def test_identity(self, a: ModuleGraph) -> None:
        assert a | ModuleGraph() == a
        assert ModuleGraph() | a == a

    @given(a=module_graphs)
    def test_idempotent(self, a: ModuleGraph) -> None:
        assert a | a == a


class TestModuleGraph:
    """Construction and conversion."""

    def test_singleton(self) -> None:
        assert ModuleGraph.singleton("A", "B") == ModuleGraph.of("A", ["B"])
        assert ModuleGraph.singleton("A", "B")["A"] == frozenset({"B"})

    def test_of_without_imports_records_importer(self) -> None:
        graph = ModuleGraph.of("Lonely", [])
        assert list(graph) == ["Lonely"]
        assert graph.to_graph() == Graph.from_edges([], nodes=["Lonely"])

    def test_merge_unions_imports(self) -> None:
        merged = ModuleGraph.singleton("A", "B") | ModuleGraph.singleton("A", "C")
        assert merged["A"] == frozenset({"B", "C"})

    def test_concat(self) -> None:
        merged = ModuleGraph.concat(
            [ModuleGraph.singleton("A", "B"), ModuleGraph.of("B", ["C"]), ModuleGraph()]
        )
        assert merged == ModuleGraph({"A": ["B"], "B": ["C"]})
        assert len(merged) == 2

    def test_to_graph_is_total(self) -> None:
        graph = ModuleGraph.singleton("A", "External.Thing").to_graph()
        assert graph["External.Thing"] == frozenset()

    def test_from_graph_round_trip(self) -> None:
        graph = Graph.from_edges([("A", "B"), ("B", "C")], nodes=["Z"])
        assert ModuleGraph.from_graph(graph).to_graph() == graph

    def test_repr(self) -> None:
        assert repr(ModuleGraph({"A": ["B", "C"]})) == "ModuleGraph(modules=1, imports=2)"
