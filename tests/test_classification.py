"""
Unit Tests — Classification
===========================
State precedence, transitive dependency counts and edge labels.
"""
from bugprogress.models.bug import Attachment, Bug
from bugprogress.models.bug_graph import BugGraph
from bugprogress.parser.classification import (
    State,
    classify,
    dependency_counts,
    node_status,
    reachable_from,
)

UNASSIGNED = "nobody@mozilla.org"


def _graph(*bugs: Bug) -> BugGraph:
    return BugGraph({bug.id: bug for bug in bugs})


# ---------------------------------------------------------------------------
# 1. classify()
# ---------------------------------------------------------------------------
class TestClassify:

    def test_unassigned_new_without_dependencies_is_available(self):
        bug = Bug(id=1, status="NEW", assigned_to=UNASSIGNED)
        assert classify(bug, is_empty=True, leaf=True) == State.AVAILABLE

    def test_assigned_with_open_dependency_is_blocked_in_progress(self):
        bug = Bug(id=1, status="ASSIGNED", depends_on=[2])
        assert classify(bug, is_empty=False, leaf=False) == State.BLOCKED_IN_PROGRESS

    def test_live_patch_without_dependencies_is_review(self):
        bug = Bug(
            id=1,
            status="NEW",
            assigned_to=UNASSIGNED,
            attachments=[Attachment(file_name="phabricator-D123.diff")],
        )
        assert classify(bug, is_empty=True, leaf=True) == State.REVIEW

    def test_live_patch_with_open_dependency_is_unlandable(self):
        bug = Bug(id=1, status="NEW", attachments=[Attachment(file_name="phabricator-D9.diff")])
        assert classify(bug, is_empty=False, leaf=False) == State.UNLANDABLE

    def test_unassigned_with_open_dependency_is_blocked(self):
        bug = Bug(id=1, status="NEW", assigned_to=UNASSIGNED, depends_on=[2])
        assert classify(bug, is_empty=False, leaf=False) == State.BLOCKED

    def test_assigned_without_dependencies_is_in_progress(self):
        bug = Bug(id=1, status="NEW", assigned_to="dev@example.com")
        assert classify(bug, is_empty=True, leaf=False) == State.IN_PROGRESS

    def test_leaf_context_overrides_open_dependencies(self):
        bug = Bug(id=1, status="NEW", assigned_to=UNASSIGNED)
        assert classify(bug, is_empty=False, leaf=True) == State.AVAILABLE

    def test_resolved(self):
        bug = Bug(id=1, status="VERIFIED", resolution="FIXED")
        assert classify(bug, is_empty=False, leaf=False) == State.RESOLVED

    def test_duplicate_beats_resolved(self):
        bug = Bug(id=1, status="RESOLVED", resolution="DUPLICATE")
        for is_empty in (True, False):
            for leaf in (True, False):
                assert classify(bug, is_empty, leaf) == State.DUPLICATE

    def test_stub_is_available(self):
        assert classify(Bug.make_stub(7), is_empty=True, leaf=True) == State.AVAILABLE

    def test_pure_function(self):
        bug = Bug(id=1, status="ASSIGNED", depends_on=[2])
        first = classify(bug, is_empty=False, leaf=False)
        assert classify(bug, is_empty=False, leaf=False) == first


# ---------------------------------------------------------------------------
# 2. Transitive closure and counts
# ---------------------------------------------------------------------------
class TestDependencyCounts:

    def test_reachable_includes_indirect_dependencies(self):
        graph = _graph(
            Bug(id=1, depends_on=[2, 3]),
            Bug(id=2, depends_on=[4]),
            Bug(id=3, depends_on=[4]),
            Bug(id=4),
        )
        ids = sorted(bug.id for bug in reachable_from(graph[1], graph))
        assert ids == [2, 3, 4]

    def test_reachable_terminates_on_cycle(self):
        graph = _graph(Bug(id=1, depends_on=[2]), Bug(id=2, depends_on=[1]))
        ids = sorted(bug.id for bug in reachable_from(graph[1], graph))
        assert ids == [1, 2]

    def test_unknown_dependency_resolves_to_stub(self):
        graph = _graph(Bug(id=1, depends_on=[99]))
        (dep,) = reachable_from(graph[1], graph)
        assert dep.id == 99
        assert dep.stub
        assert 99 not in graph

    def test_counts_skip_duplicates_and_meta_bugs(self):
        graph = _graph(
            Bug(id=1, depends_on=[2, 3, 4, 5]),
            Bug(id=2, status="RESOLVED", resolution="FIXED"),
            Bug(id=3, status="RESOLVED", resolution="DUPLICATE"),
            Bug(id=4, status="NEW", summary="[meta] tracking"),
            Bug(id=5, status="NEW"),
        )
        counts = dependency_counts(graph[1], graph)
        assert (counts.closed, counts.total) == (1, 2)
        assert not counts.is_empty

    def test_all_counted_dependencies_closed_is_empty(self):
        graph = _graph(
            Bug(id=1, status="NEW", assigned_to=UNASSIGNED, depends_on=[2, 3]),
            Bug(id=2, status="RESOLVED", resolution="FIXED"),
            Bug(id=3, status="NEW", resolution="DUPLICATE"),
        )
        counts = dependency_counts(graph[1], graph)
        assert counts.is_empty
        status = node_status(graph, graph[1], graph[2])
        assert status.from_state == State.AVAILABLE

    def test_stub_counts_as_open_dependency(self):
        graph = _graph(Bug(id=1, status="NEW", depends_on=[2, 99]), Bug(id=2, status="RESOLVED"))
        counts = dependency_counts(graph[1], graph)
        assert (counts.closed, counts.total) == (1, 2)


# ---------------------------------------------------------------------------
# 3. Edge labels
# ---------------------------------------------------------------------------
class TestNodeStatus:

    def test_labels_for_leaf_dependency(self):
        graph = _graph(
            Bug(id=10, status="ASSIGNED", depends_on=[11]),
            Bug(id=11, status="NEW", assigned_to=UNASSIGNED),
        )
        status = node_status(graph, graph[10], graph[11])
        assert status.from_label == "[10 0/1]"
        assert status.to_label == "[11]"
        assert status.from_state == State.BLOCKED_IN_PROGRESS

    def test_dependency_with_own_dependencies_is_unlabelled(self):
        graph = _graph(
            Bug(id=10, depends_on=[11]),
            Bug(id=11, depends_on=[12]),
            Bug(id=12, status="RESOLVED"),
        )
        status = node_status(graph, graph[10], graph[11])
        assert status.to_label == ""
        assert status.from_label == "[10 1/2]"

    def test_stub_dependency_is_marked_unknown(self):
        graph = _graph(Bug(id=10, status="NEW", depends_on=[404]))
        status = node_status(graph, graph[10], graph.get_node(404))
        assert status.to_label == "[404 unknown]"
        assert status.from_label == "[10 0/1]"
        assert status.from_state == State.BLOCKED
