"""
Dimension filter: remove splits until the splits graph contains no boxes of
dimension greater than a given bound.

A set of k pairwise incompatible splits produces a k-dimensional box in the
splits graph, i.e. a k-clique in the incompatibility graph. The filter
greedily deletes the split of lowest compatibility score from the part of the
incompatibility graph that can still take part in a too large clique.
"""

import logging
from typing import List, Optional, Set

from splitarchitect.elements.split_system import SplitSystem
from splitarchitect.exceptions import OperationCancelled
from splitarchitect.filters.incompatibility_graph import IncompatibilityGraph
from splitarchitect.logger import format_split, sa_logger
from splitarchitect.progress import NullProgressListener, ProgressListener

logger = logging.getLogger(__name__)

# Up to this dimension cliques are searched for exactly, above it the
# degree heuristic is used.
EXACT_MAX_DIMENSION = 5
# Degree above which the neighbourhood clique test of the heuristic is skipped.
MAX_DEGREE_HEURISTIC_THRESHOLD = 6


class DimensionFilter:
    """Greedy filter bounding the dimension of boxes in the splits graph."""

    def __init__(self, progress: Optional[ProgressListener] = None):
        self.progress = progress if progress is not None else NullProgressListener()

    def apply(self, splits: SplitSystem, max_dimension: int) -> int:
        """
        Remove splits so that no ``max_dimension + 1`` of the remaining splits
        are pairwise incompatible.

        The split system is modified in place. If the computation is cancelled,
        the splits selected so far are still removed.

        Args:
            splits: Split system to filter
            max_dimension: Maximal dimension of boxes to keep

        Returns:
            int: Number of splits removed
        """
        self.progress.set_tasks("Dimension filter", f"maxDimension={max_dimension}")
        sa_logger.section(f"Dimension filter (d={max_dimension})")

        to_delete: Set[int] = set()
        graph = IncompatibilityGraph.from_splits(splits)
        original_nodes = graph.number_of_nodes()
        self.progress.set_maximum(original_nodes)
        self.progress.set_progress(0)

        exact = max_dimension <= EXACT_MAX_DIMENSION
        logger.info(
            f"Dimension filter d={max_dimension}: {original_nodes} splits, "
            f"{graph.number_of_edges()} incompatible pairs, "
            f"{'clique search' if exact else 'max degree heuristic'}"
        )

        try:
            self._reduce(graph, max_dimension)
            while graph.number_of_nodes() > 0:
                worst = graph.worst_node()
                to_delete.add(worst)
                graph.delete_node(worst)
                self._reduce(graph, max_dimension)
                self.progress.set_progress(original_nodes - graph.number_of_nodes())
                self.progress.raise_if_cancelled()
        except OperationCancelled as e:
            logger.warning(f"{e}; removing the {len(to_delete)} splits selected so far")
            sa_logger.warning(str(e))

        for s in sorted(to_delete):
            sa_logger.info(f"[{s}] {format_split(splits.get(s))}")
        removed = remove_splits(splits, to_delete)
        sa_logger.result("Splits removed", removed)
        sa_logger.end_section()
        logger.info(f"Splits removed: {removed}")
        return removed

    def _reduce(self, graph: IncompatibilityGraph, max_dimension: int) -> None:
        if max_dimension <= EXACT_MAX_DIMENSION:
            self.compute_d_subgraph(graph, max_dimension + 1)
        else:
            self.relax_graph(graph, max_dimension - 1)

    def compute_d_subgraph(self, graph: IncompatibilityGraph, d: int) -> None:
        """Delete every node that is not contained in a clique of size ``d``."""
        keep: Set[int] = set()
        discard: Set[int] = set()
        for v in graph.nodes():
            if v not in keep:
                clique = [v]
                if self._find_clique(graph, list(graph.neighbors(v)), 0, 1, d, clique, discard):
                    keep.update(clique)
                else:
                    discard.add(v)
            self.progress.raise_if_cancelled()
        for v in discard:
            graph.delete_node(v)

    def _find_clique(
        self,
        graph: IncompatibilityGraph,
        candidates: List[int],
        start: int,
        size: int,
        d: int,
        clique: List[int],
        discard: Set[int],
    ) -> bool:
        """
        Backtracking search extending ``clique`` to ``d`` nodes, taking further
        nodes from ``candidates[start:]`` (the neighbours of the first node).
        """
        if size == d:
            return True
        for position in range(start, len(candidates)):
            w = candidates[position]
            if w not in discard and graph.is_connected_to_all(w, clique):
                clique.append(w)
                if self._find_clique(graph, candidates, position + 1, size + 1, d, clique, discard):
                    return True
                clique.pop()
        return False

    def relax_graph(self, graph: IncompatibilityGraph, max_degree: int) -> None:
        """
        Delete nodes that cannot lie in a large clique: nodes of degree below
        ``max_degree`` and, for small degrees, nodes of degree ``max_degree + 1``
        whose neighbours are not pairwise adjacent. Deleting a node may make its
        former neighbours deletable, so they are checked again.
        """

        def deletable(v: int) -> bool:
            return graph.degree(v) < max_degree or (
                max_degree <= MAX_DEGREE_HEURISTIC_THRESHOLD
                and graph.has_degree_but_not_in_clique(max_degree + 1, v)
            )

        # insertion ordered worklist
        active = {v: None for v in graph.nodes() if deletable(v)}
        while active:
            v = next(iter(active))
            del active[v]
            if v in graph and deletable(v):
                for w in graph.neighbors(v):
                    active[w] = None
                graph.delete_node(v)
            self.progress.raise_if_cancelled()


def remove_splits(splits: SplitSystem, to_delete: Set[int]) -> int:
    """Remove the splits with the given 1-based indices, in increasing order."""
    for shift, s in enumerate(sorted(to_delete)):
        splits.remove(s - shift)
    return len(to_delete)


def apply_dimension_filter(
    splits: SplitSystem,
    max_dimension: int,
    progress: Optional[ProgressListener] = None,
) -> int:
    """Convenience wrapper around :class:`DimensionFilter`."""
    return DimensionFilter(progress).apply(splits, max_dimension)
