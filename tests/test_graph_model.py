"""Tests for building the graph model from tasks."""

from workflow_diagram.layout.graph_model import build_graph_model, dep_status_from_task
from workflow_diagram.parser.model import DependencyStatus, Task, TaskStatus


def _abc(a_status=TaskStatus.COMPLETED, b_status=TaskStatus.PENDING):
    return [
        Task(id=1, name="A", status=a_status),
        Task(id=2, name="B", deps=("A",), status=b_status),
        Task(id=3, name="C", deps=("A", "B")),
    ]


def test_nodes_keep_input_order():
    model = build_graph_model(_abc())
    assert [n.id for n in model.nodes] == ["1", "2", "3"]
    assert all(n.width == 256 and n.height == 44 for n in model.nodes)
    assert all(n.position is None for n in model.nodes)


def test_edge_ids_and_order():
    model = build_graph_model(_abc())
    assert [e.id for e in model.edges] == ["e-1-2", "e-1-3", "e-2-3"]
    edge = model.edges[0]
    assert (edge.source, edge.target) == ("1", "2")


def test_dependency_flags():
    model = build_graph_model(_abc())
    a, b, c = model.nodes
    assert (a.has_upstream_deps, a.has_downstream_deps) == (False, True)
    assert (b.has_upstream_deps, b.has_downstream_deps) == (True, True)
    assert (c.has_upstream_deps, c.has_downstream_deps) == (True, False)


def test_dep_status_mapping():
    assert dep_status_from_task(Task(1, "x", status=TaskStatus.COMPLETED)) is DependencyStatus.UNBLOCKED
    assert dep_status_from_task(Task(1, "x", status=TaskStatus.CANCELLED)) is DependencyStatus.FAILED
    assert dep_status_from_task(Task(1, "x", status=TaskStatus.DISCARDED)) is DependencyStatus.FAILED
    for status in (TaskStatus.PENDING, TaskStatus.RUNNING, TaskStatus.RETRYABLE,
                   TaskStatus.SCHEDULED, TaskStatus.AVAILABLE):
        assert dep_status_from_task(Task(1, "x", status=status)) is DependencyStatus.BLOCKED


def test_animation_only_for_blocked_edges_into_pending_tasks():
    model = build_graph_model(_abc())
    edges = {e.id: e for e in model.edges}
    # A completed: unblocked, never animated
    assert edges["e-1-2"].dep_status is DependencyStatus.UNBLOCKED
    assert not edges["e-1-2"].animated
    # B pending blocks C, which is pending
    assert edges["e-2-3"].dep_status is DependencyStatus.BLOCKED
    assert edges["e-2-3"].animated


def test_blocked_edge_into_running_task_is_not_animated():
    tasks = [
        Task(id=1, name="A", status=TaskStatus.RUNNING),
        Task(id=2, name="B", deps=("A",), status=TaskStatus.RUNNING),
    ]
    (edge,) = build_graph_model(tasks).edges
    assert edge.dep_status is DependencyStatus.BLOCKED
    assert not edge.animated


def test_unknown_dependencies_are_dropped():
    tasks = [Task(id=1, name="A", deps=("ghost",))]
    model = build_graph_model(tasks)
    assert model.edges == ()
    # The flag reflects the declared list, resolvable or not
    assert model.nodes[0].has_upstream_deps


def test_repeated_dependency_yields_one_edge():
    tasks = [Task(id=1, name="A"), Task(id=2, name="B", deps=("A", "A"))]
    assert [e.id for e in build_graph_model(tasks).edges] == ["e-1-2"]


def test_null_deps_treated_as_empty():
    model = build_graph_model([Task(id=1, name="A", deps=None)])
    assert model.edges == ()
    assert not model.nodes[0].has_upstream_deps


def test_empty_input():
    model = build_graph_model([])
    assert model.nodes == ()
    assert model.edges == ()


def test_duplicate_names_resolve_to_last_task():
    tasks = [
        Task(id=1, name="A"),
        Task(id=2, name="A", status=TaskStatus.COMPLETED),
        Task(id=3, name="B", deps=("A",)),
    ]
    (edge,) = build_graph_model(tasks).edges
    assert edge.id == "e-2-3"
    assert edge.dep_status is DependencyStatus.UNBLOCKED


def test_custom_node_size():
    model = build_graph_model([Task(id=1, name="A")], node_width=100, node_height=30)
    assert (model.nodes[0].width, model.nodes[0].height) == (100, 30)


def test_build_is_deterministic():
    assert build_graph_model(_abc()) == build_graph_model(_abc())
