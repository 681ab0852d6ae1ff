"""
Unit tests for TopicGraph hierarchy and shortest-path queries
"""

from knowledge_base.core import Topic, TopicGraph


def _names(topics):
    return [t.name for t in topics]


def _shape(node):
    """Reduce a TopicNode tree to (name, [children...]) tuples."""
    return (node.topic.name, [_shape(child) for child in node.children])


class TestBuildHierarchy:
    """Tests for build_hierarchy"""

    def test_chain(self, topic_graph, chain):
        trees = topic_graph.build_hierarchy()

        assert len(trees) == 1
        assert _shape(trees[0]) == ("A", [("B", [("C", [])])])

    def test_tree_holds_live_topics(self, topic_graph, chain):
        a, _, _ = chain
        trees = topic_graph.build_hierarchy()
        assert trees[0].topic is a

    def test_multiple_roots_in_collection_order(self, topic_store, topic_graph):
        topic_store.create({"name": "R1"})
        topic_store.create({"name": "R2"})
        topic_store.create({"name": "R3"})

        trees = topic_graph.build_hierarchy()
        assert [t.topic.name for t in trees] == ["R1", "R2", "R3"]

    def test_children_in_collection_order(self, topic_store, topic_graph):
        root = topic_store.create({"name": "root"})
        for name in ["x", "y", "z"]:
            topic_store.create({"name": name, "parent_topic_id": root.id})

        trees = topic_graph.build_hierarchy()
        assert [c.topic.name for c in trees[0].children] == ["x", "y", "z"]

    def test_root_id_selects_subtree(self, topic_graph, chain):
        _, b, _ = chain
        trees = topic_graph.build_hierarchy(b.id)

        assert len(trees) == 1
        assert _shape(trees[0]) == ("B", [("C", [])])

    def test_unknown_root_id(self, topic_graph, chain):
        assert topic_graph.build_hierarchy("missing") == []

    def test_empty_collection(self, topic_graph):
        assert topic_graph.build_hierarchy() == []

    def test_orphans_are_not_roots(self, topic_store, topic_graph):
        """A topic whose parent does not exist is tolerated but not a root"""
        topic_store.create({"name": "root"})
        orphan = topic_store.create({"name": "orphan", "parent_topic_id": "gone"})

        trees = topic_graph.build_hierarchy()
        assert [t.topic.name for t in trees] == ["root"]
        assert _shape(topic_graph.build_hierarchy(orphan.id)[0]) == ("orphan", [])

    def test_reflects_mutations_without_resync(self, topic_store, topic_graph, chain):
        a, b, c = chain
        topic_store.update(c.id, {"parent_topic_id": a.id})

        trees = topic_graph.build_hierarchy()
        assert _shape(trees[0]) == ("A", [("B", []), ("C", [])])

    def test_parent_cycle_terminates(self, topic_store, topic_graph):
        """Parent references forming a loop do not recurse forever"""
        x = topic_store.create({"name": "X"})
        y = topic_store.create({"name": "Y", "parent_topic_id": x.id})
        topic_store.update(x.id, {"parent_topic_id": y.id})

        # Both have parents, so there are no roots
        assert topic_graph.build_hierarchy() == []

        trees = topic_graph.build_hierarchy(x.id)
        assert _shape(trees[0]) == ("X", [("Y", [])])

    def test_self_parent_terminates(self, topic_store, topic_graph):
        loop = topic_store.create({"name": "loop"})
        topic_store.update(loop.id, {"parent_topic_id": loop.id})

        trees = topic_graph.build_hierarchy(loop.id)
        assert _shape(trees[0]) == ("loop", [])

    def test_deep_chain(self, topic_store, topic_graph):
        """Deep hierarchies build without hitting the recursion limit"""
        parent = topic_store.create({"name": "0"})
        for i in range(1, 2000):
            parent = topic_store.create({"name": str(i), "parent_topic_id": parent.id})

        node = topic_graph.build_hierarchy()[0]
        depth = 1
        while node.children:
            node = node.children[0]
            depth += 1
        assert depth == 2000


class TestFindShortestPath:
    """Tests for find_shortest_path"""

    def test_child_to_root(self, topic_graph, chain):
        a, b, c = chain
        assert _names(topic_graph.find_shortest_path(c.id, a.id)) == ["C", "B", "A"]

    def test_root_to_leaf(self, topic_graph, chain):
        a, b, c = chain
        assert _names(topic_graph.find_shortest_path(a.id, c.id)) == ["A", "B", "C"]

    def test_same_topic(self, topic_graph, chain):
        a, _, _ = chain
        assert _names(topic_graph.find_shortest_path(a.id, a.id)) == ["A"]

    def test_missing_start(self, topic_graph, chain):
        a, _, _ = chain
        assert topic_graph.find_shortest_path("missing", a.id) == []

    def test_missing_end(self, topic_graph, chain):
        a, _, _ = chain
        assert topic_graph.find_shortest_path(a.id, "missing") == []

    def test_disconnected_trees(self, topic_store, topic_graph):
        left = topic_store.create({"name": "left"})
        right = topic_store.create({"name": "right"})
        assert topic_graph.find_shortest_path(left.id, right.id) == []

    def test_siblings_through_parent(self, topic_store, topic_graph):
        root = topic_store.create({"name": "root"})
        s1 = topic_store.create({"name": "s1", "parent_topic_id": root.id})
        s2 = topic_store.create({"name": "s2", "parent_topic_id": root.id})

        assert _names(topic_graph.find_shortest_path(s1.id, s2.id)) == ["s1", "root", "s2"]

    def test_cousins(self, topic_store, topic_graph):
        root = topic_store.create({"name": "root"})
        p1 = topic_store.create({"name": "p1", "parent_topic_id": root.id})
        p2 = topic_store.create({"name": "p2", "parent_topic_id": root.id})
        c1 = topic_store.create({"name": "c1", "parent_topic_id": p1.id})
        c2 = topic_store.create({"name": "c2", "parent_topic_id": p2.id})

        path = topic_graph.find_shortest_path(c1.id, c2.id)
        assert _names(path) == ["c1", "p1", "root", "p2", "c2"]

    def test_cycle_terminates(self, topic_store, topic_graph):
        x = topic_store.create({"name": "X"})
        y = topic_store.create({"name": "Y", "parent_topic_id": x.id})
        topic_store.update(x.id, {"parent_topic_id": y.id})
        lonely = topic_store.create({"name": "lonely"})

        assert _names(topic_graph.find_shortest_path(x.id, y.id)) == ["X", "Y"]
        assert topic_graph.find_shortest_path(x.id, lonely.id) == []

    def test_orphan_parent_reference_is_ignored(self, topic_store, topic_graph):
        orphan = topic_store.create({"name": "orphan", "parent_topic_id": "gone"})
        child = topic_store.create({"name": "child", "parent_topic_id": orphan.id})

        assert _names(topic_graph.find_shortest_path(child.id, orphan.id)) == ["child", "orphan"]
        assert topic_graph.find_shortest_path(child.id, "gone") == []

    def test_works_on_plain_mapping(self):
        """TopicGraph only needs an id -> Topic mapping"""
        a = Topic(name="A", content="")
        b = Topic(name="B", content="", parent_topic_id=a.id)
        graph = TopicGraph({a.id: a, b.id: b})

        assert _names(graph.find_shortest_path(b.id, a.id)) == ["B", "A"]
