"""Tests for the SVG preview renderer."""

import xml.etree.ElementTree as ET

from workflow_diagram.diagram import DiagramPipeline
from workflow_diagram.parser.model import Task, TaskStatus
from workflow_diagram.render import DiagramData, render_svg
from workflow_diagram.render.svg import arrow_points
from workflow_diagram.themes import DARK_THEME, LIGHT_THEME


def _data(**kwargs):
    tasks = [
        Task(id=1, name="extract", status=TaskStatus.COMPLETED),
        Task(id=2, name="transform", deps=("extract",), status=TaskStatus.RUNNING),
        Task(id=3, name="load", deps=("transform", "extract")),
    ]
    return DiagramPipeline().render_data(tasks, **kwargs)


def test_render_produces_valid_svg():
    svg = render_svg(_data(), LIGHT_THEME)
    root = ET.fromstring(svg)
    assert root.tag.endswith("svg")


def test_render_contains_task_labels():
    svg = render_svg(_data(), LIGHT_THEME)
    for name in ("extract", "transform", "load"):
        assert name in svg


def test_render_draws_every_edge_path():
    data = _data()
    svg = render_svg(data, LIGHT_THEME)
    for edge in data.edges:
        assert edge["path"] in svg


def test_animated_edges_march():
    data = _data()
    assert any(e["animated"] for e in data.edges)
    svg = render_svg(data, LIGHT_THEME)
    assert "stroke-dashoffset" in svg
    assert 'repeatCount="indefinite"' in svg


def test_selected_node_uses_highlight_stroke():
    svg = render_svg(_data(selected_id=2), LIGHT_THEME)
    assert LIGHT_THEME.node_selected_stroke in svg
    plain = render_svg(_data(), LIGHT_THEME)
    assert LIGHT_THEME.node_selected_stroke not in plain


def test_dark_theme_background():
    svg = render_svg(_data(theme="dark"), DARK_THEME)
    assert DARK_THEME.background_color in svg


def test_empty_diagram():
    assert render_svg(DiagramData(), LIGHT_THEME) == '<svg xmlns="http://www.w3.org/2000/svg"></svg>'


def test_arrow_points_along_rightward_edge():
    assert arrow_points("M 100,20 L 200,20 L 200,140 L 300,140") == [
        (300, 140), (294, 137), (294, 143),
    ]


def test_arrow_points_along_leftward_edge():
    # Cycle-closing edges arrive from the right
    assert arrow_points("M 968,22 L 40,22 L 40,63 L 0,63") == [
        (0, 63), (6, 60), (6, 66),
    ]


def test_arrow_points_along_vertical_segment():
    assert arrow_points("M 0,0 L 0,50") == [(0, 50), (-3, 44), (3, 44)]


def test_arrow_points_needs_two_points():
    assert arrow_points("M 0,0") is None
    assert arrow_points("") is None


def test_cycle_edges_render():
    tasks = [
        Task(id=1, name="a", deps=("c",)),
        Task(id=2, name="b", deps=("a",)),
        Task(id=3, name="c", deps=("b",)),
    ]
    data = DiagramPipeline().render_data(tasks)
    root = ET.fromstring(render_svg(data, LIGHT_THEME))
    assert root.tag.endswith("svg")
