"""
Structural queries over the topic parent/child graph.

TopicGraph does not own any topics. It is handed the live topic mapping of
an EntityStore and derives a NetworkX DiGraph (parent -> child edges) from
it on every call, so results always reflect the collection as it is at call
time.

Ordering rules:
- Nodes are added in collection (insertion) order, so a topic's children
  appear in collection order
- Path search explores the parent first, then children in collection order;
  among several shortest paths the first discovered wins
"""

from collections import deque
from typing import Dict, List, Mapping, Optional, Set

import networkx as nx

from .models import Topic, TopicNode


class TopicGraph:
    """Hierarchy and shortest-path queries over a borrowed topic mapping."""

    def __init__(self, topics: Mapping[str, Topic]):
        """
        Args:
            topics: Live id -> Topic mapping, typically EntityStore.items
        """
        self._topics = topics

    def _build_graph(self) -> nx.DiGraph:
        """Derive the parent -> child graph from the current topics."""
        graph = nx.DiGraph()
        for topic_id, topic in self._topics.items():
            graph.add_node(topic_id, topic=topic)

        # Parent references to missing topics are tolerated and produce no edge
        for topic_id, topic in self._topics.items():
            parent_id = topic.parent_topic_id
            if parent_id and parent_id in graph:
                graph.add_edge(parent_id, topic_id)

        return graph

    def build_hierarchy(self, root_id: Optional[str] = None) -> List[TopicNode]:
        """
        Build topic trees.

        With root_id, returns the single tree rooted at that topic (empty list
        if it does not exist). Without it, returns one tree per topic that has
        no parent reference, in collection order.

        Each topic is placed at most once per call, so a cycle of parent
        references ends where it would revisit a topic.
        """
        graph = self._build_graph()

        if root_id:
            root_ids = [root_id] if root_id in graph else []
        else:
            root_ids = [
                topic_id for topic_id, topic in self._topics.items()
                if not topic.parent_topic_id
            ]

        placed: Set[str] = set()
        return [self._build_tree(graph, topic_id, placed) for topic_id in root_ids]

    def _build_tree(self, graph: nx.DiGraph, root_id: str, placed: Set[str]) -> TopicNode:
        # Breadth-first so deep chains do not hit the recursion limit
        root = TopicNode(topic=graph.nodes[root_id]["topic"])
        placed.add(root_id)
        queue = deque([(root_id, root)])

        while queue:
            topic_id, node = queue.popleft()
            for child_id in graph.successors(topic_id):
                if child_id in placed:
                    continue
                placed.add(child_id)
                child = TopicNode(topic=graph.nodes[child_id]["topic"])
                node.children.append(child)
                queue.append((child_id, child))

        return root

    def find_shortest_path(self, start_id: str, end_id: str) -> List[Topic]:
        """
        Unweighted shortest path between two topics.

        Neighbours of a topic are its parent (if present) followed by its
        children. Returns the topics from start to end inclusive, or an empty
        list if the start topic does not exist or the end is unreachable.
        """
        graph = self._build_graph()
        if start_id not in graph:
            return []

        came_from: Dict[str, Optional[str]] = {start_id: None}
        queue = deque([start_id])

        while queue:
            topic_id = queue.popleft()
            if topic_id == end_id:
                return self._trace_path(graph, came_from, topic_id)

            for neighbor_id in self._neighbors(graph, topic_id):
                if neighbor_id not in came_from:
                    came_from[neighbor_id] = topic_id
                    queue.append(neighbor_id)

        return []

    @staticmethod
    def _neighbors(graph: nx.DiGraph, topic_id: str) -> List[str]:
        # Siblings are reached through the parent, never directly
        neighbors = list(graph.predecessors(topic_id))
        neighbors.extend(graph.successors(topic_id))
        return neighbors

    @staticmethod
    def _trace_path(
        graph: nx.DiGraph,
        came_from: Dict[str, Optional[str]],
        end_id: str,
    ) -> List[Topic]:
        path = []
        current: Optional[str] = end_id
        while current is not None:
            path.append(graph.nodes[current]["topic"])
            current = came_from[current]
        path.reverse()
        return path
