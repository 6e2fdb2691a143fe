"""Incompatibility graph of a split system."""

from itertools import combinations
from typing import Iterator, List, Optional

import networkx as nx

from splitarchitect.compatibility import are_compatible
from splitarchitect.elements.split_system import SplitSystem

SCORE_SCALE = 10000


class IncompatibilityGraph:
    """
    Graph with one node per split and an edge between every pair of
    incompatible splits.

    Nodes are the 1-based split indices; each carries an integer ``score``,
    ``round(10000 * weight)``. Node and neighbour iteration follow insertion
    order, i.e. increasing split index.
    """

    def __init__(self, graph: Optional[nx.Graph] = None):
        self.graph: nx.Graph = graph if graph is not None else nx.Graph()

    @classmethod
    def from_splits(cls, splits: SplitSystem) -> "IncompatibilityGraph":
        incompatibility = cls()
        split_list = list(splits)
        for s, split in enumerate(split_list, start=1):
            incompatibility.add_node(s, round(SCORE_SCALE * split.weight))
        for (s, a), (t, b) in combinations(enumerate(split_list, start=1), 2):
            if not are_compatible(splits.ntax, a, b):
                incompatibility.graph.add_edge(s, t)
        return incompatibility

    def add_node(self, split_index: int, score: int) -> None:
        self.graph.add_node(split_index, score=score)

    def delete_node(self, v: int) -> None:
        self.graph.remove_node(v)

    def nodes(self) -> List[int]:
        return list(self.graph.nodes)

    def neighbors(self, v: int) -> Iterator[int]:
        return iter(self.graph.adj[v])

    def degree(self, v: int) -> int:
        return len(self.graph.adj[v])

    def is_adjacent(self, u: int, v: int) -> bool:
        return v in self.graph.adj[u]

    def score(self, v: int) -> int:
        return self.graph.nodes[v]["score"]

    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, v: object) -> bool:
        return v in self.graph

    def compatibility_score(self, v: int) -> int:
        """Own score minus the scores of all incompatible (adjacent) splits."""
        return self.score(v) - sum(self.score(w) for w in self.neighbors(v))

    def worst_node(self) -> Optional[int]:
        """Node with the lowest compatibility score; the first one wins ties."""
        worst = None
        worst_score = 0
        for v in self.graph.nodes:
            score = self.compatibility_score(v)
            if worst is None or score < worst_score:
                worst = v
                worst_score = score
        return worst

    def is_connected_to_all(self, w: int, nodes: List[int]) -> bool:
        adjacency = self.graph.adj[w]
        return all(u in adjacency for u in nodes)

    def has_degree_but_not_in_clique(self, d: int, v: int) -> bool:
        """
        True if v has degree exactly d but its neighbours do not form a clique,
        i.e. v is not contained in a (d+1)-clique.
        """
        if self.degree(v) != d:
            return False
        neighbours = list(self.neighbors(v))
        return any(
            not self.is_adjacent(a, b) for a, b in combinations(neighbours, 2)
        )

    def max_clique_size(self) -> int:
        """Size of a largest clique (exhaustive search)."""
        if self.graph.number_of_nodes() == 0:
            return 0
        return max(len(clique) for clique in nx.find_cliques(self.graph))

    def copy(self) -> "IncompatibilityGraph":
        return IncompatibilityGraph(self.graph.copy())

    def __repr__(self) -> str:
        return (
            f"IncompatibilityGraph(nodes={self.number_of_nodes()}, "
            f"edges={self.number_of_edges()})"
        )
