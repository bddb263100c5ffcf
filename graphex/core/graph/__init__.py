"""
Dependency graph data structures and algorithms.

All operations are pure functions over an immutable Graph:

Data Structures:
    - Graph: Total adjacency map from node name to its edge set
    - ModuleGraph: Order-independent merge of importer -> imported contributions
    - TreeNode: Tree representation for rendered dependency hierarchies

Algorithms:
    - traversal: direct/transitive dependencies, flood fill, tree extraction
    - pathfinding: BFS example path, all-paths subgraph
    - analysis: dependency rankings
    - views: edge reversal, node-set restriction

Exchange:
    - exchange: Dep node/edge records, JSON and CSV renderings
    - load_graph(): Read a Graph from a JSON file
"""

from graphex.core.graph.analysis import ranked, rankings
from graphex.core.graph.base import Graph
from graphex.core.graph.exchange import Dep, DepEdge, DepNode, dep_to_graph, graph_to_dep
from graphex.core.graph.loader import load_graph
from graphex.core.graph.models import TreeNode
from graphex.core.graph.module_graph import ModuleGraph
from graphex.core.graph.pathfinding import all_paths_to, why
from graphex.core.graph.traversal import (
    all_deps_on,
    direct_deps_on,
    flatten_tree,
    graph_to_tree,
)
from graphex.core.graph.views import restrict_to, reverse_edges, select

__all__ = [
    "Graph",
    "ModuleGraph",
    "TreeNode",
    "Dep",
    "DepEdge",
    "DepNode",
    "all_deps_on",
    "all_paths_to",
    "dep_to_graph",
    "direct_deps_on",
    "flatten_tree",
    "graph_to_dep",
    "graph_to_tree",
    "load_graph",
    "ranked",
    "rankings",
    "restrict_to",
    "reverse_edges",
    "select",
    "why",
]
