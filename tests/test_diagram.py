"""Tests for the staged diagram pipeline and its caches."""

from workflow_diagram.diagram import DiagramPipeline, StageCache, task_content_key
from workflow_diagram.layout.sugiyama import SugiyamaLayout
from workflow_diagram.parser.model import Task, TaskStatus
from workflow_diagram.themes import DARK_THEME


class CountingLayout(SugiyamaLayout):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def layout(self, sizes, edges):
        self.calls += 1
        return super().layout(sizes, edges)


def _tasks(b_status=TaskStatus.PENDING, extra_dep=False):
    deps = ("A", "B") if extra_dep else ("B",)
    return [
        Task(id=1, name="A", status=TaskStatus.COMPLETED),
        Task(id=2, name="B", deps=("A",), status=b_status),
        Task(id=3, name="C", deps=deps),
    ]


def test_stage_cache_hits_and_eviction():
    cache = StageCache("test", max_entries=2)
    calls = []

    def compute(value):
        calls.append(value)
        return value

    assert cache.get_or_compute("a", lambda: compute(1)) == 1
    assert cache.get_or_compute("a", lambda: compute(2)) == 1
    cache.get_or_compute("b", lambda: compute(3))
    cache.get_or_compute("c", lambda: compute(4))
    assert "a" not in cache
    assert len(cache) == 2
    assert calls == [1, 3, 4]
    assert (cache.hits, cache.misses) == (1, 3)


def test_content_key_tracks_status():
    assert task_content_key(_tasks()) == task_content_key(_tasks())
    assert task_content_key(_tasks()) != task_content_key(_tasks(TaskStatus.COMPLETED))


def test_render_data_shape():
    data = DiagramPipeline().render_data(_tasks(), selected_id=2)
    assert [n["id"] for n in data.nodes] == ["1", "2", "3"]
    assert [n["selected"] for n in data.nodes] == [False, True, False]
    edge = data.edges[0]
    assert set(edge) == {"id", "source", "target", "path", "style", "animated", "dep_status"}
    assert edge["path"].startswith("M ")
    assert data.as_dict()["edges"] == data.edges


def test_status_change_reuses_layout():
    engine = CountingLayout()
    pipeline = DiagramPipeline(engine=engine)
    before = pipeline.render_data(_tasks(TaskStatus.PENDING))
    after = pipeline.render_data(_tasks(TaskStatus.COMPLETED))
    assert engine.calls == 1
    assert [n["x"] for n in before.nodes] == [n["x"] for n in after.nodes]
    assert [e["path"] for e in before.edges] == [e["path"] for e in after.edges]

    # Status-dependent fields follow the new statuses
    edge_before = next(e for e in before.edges if e["id"] == "e-2-3")
    edge_after = next(e for e in after.edges if e["id"] == "e-2-3")
    assert (edge_before["dep_status"], edge_before["animated"]) == ("blocked", True)
    assert (edge_after["dep_status"], edge_after["animated"]) == ("unblocked", False)
    assert edge_after["style"]["stroke_dasharray"] == "0"


def test_theme_and_selection_changes_reuse_layout_and_routes():
    engine = CountingLayout()
    pipeline = DiagramPipeline(engine=engine)
    light = pipeline.render_data(_tasks())
    dark = pipeline.render_data(_tasks(), theme=DARK_THEME, selected_id="3")
    pipeline.render_data(_tasks(), theme="dark", selected_id="1")
    assert engine.calls == 1
    assert pipeline.routes.misses == 1
    assert light.edges[0]["style"]["stroke"] != dark.edges[0]["style"]["stroke"]
    assert pipeline.styles.misses == 2


def test_topology_change_reruns_layout():
    engine = CountingLayout()
    pipeline = DiagramPipeline(engine=engine)
    pipeline.render_data(_tasks())
    pipeline.render_data(_tasks(extra_dep=True))
    assert engine.calls == 2


def test_identical_input_hits_every_cache():
    pipeline = DiagramPipeline()
    first = pipeline.render_data(_tasks())
    second = pipeline.render_data(_tasks())
    assert first == second
    stats = pipeline.cache_stats()
    assert stats["positioned"][1] == 1
    assert stats["routing"] == (1, 1)


def test_unknown_theme_name_falls_back_to_light():
    data = DiagramPipeline().render_data(_tasks(), theme="neon")
    assert data.edges[0]["style"]["stroke"] == "#cbd5e1"


def test_empty_task_list():
    data = DiagramPipeline().render_data([])
    assert data.nodes == []
    assert data.edges == []
