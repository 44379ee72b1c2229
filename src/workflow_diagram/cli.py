"""CLI for workflow-diagram."""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path

import click

from workflow_diagram import __version__
from workflow_diagram.diagram import DiagramPipeline
from workflow_diagram.layout.constants import NODE_SEP, RANK_SEP
from workflow_diagram.layout.sugiyama import SugiyamaLayout
from workflow_diagram.parser import Task, TaskParseError, load_tasks
from workflow_diagram.render import render_svg
from workflow_diagram.themes import THEMES


def _read_tasks(input_file: Path) -> list[Task]:
    try:
        return load_tasks(input_file.read_text())
    except TaskParseError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _pipeline(rank_sep: float, node_sep: float) -> DiagramPipeline:
    return DiagramPipeline(engine=SugiyamaLayout(rank_sep=rank_sep, node_sep=node_sep))


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log layout and routing decisions.")
def cli(verbose: bool) -> None:
    """workflow-diagram: Lay out and route task dependency graphs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--selected", default=None, help="Id of the task to highlight")
@click.option("--rank-sep", type=float, default=RANK_SEP,
              help=f"Horizontal gap between ranks (default: {RANK_SEP:g})")
@click.option("--node-sep", type=float, default=NODE_SEP,
              help=f"Vertical gap between cards in a rank (default: {NODE_SEP:g})")
def render(
    input_file: Path,
    output: Path | None,
    theme: str,
    selected: str | None,
    rank_sep: float,
    node_sep: float,
) -> None:
    """Render a JSON task list to an SVG preview."""
    tasks = _read_tasks(input_file)
    theme_obj = THEMES[theme]
    data = _pipeline(rank_sep, node_sep).render_data(tasks, theme_obj, selected_id=selected)
    svg = render_svg(data, theme_obj)

    if output is None:
        output = input_file.with_suffix(".svg")

    output.write_text(svg)
    click.echo(f"Rendered {len(data.nodes)} tasks, {len(data.edges)} edges -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write JSON here instead of stdout")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Theme used for edge styles (default: light)")
@click.option("--selected", default=None, help="Id of the task to mark as selected")
@click.option("--rank-sep", type=float, default=RANK_SEP,
              help=f"Horizontal gap between ranks (default: {RANK_SEP:g})")
@click.option("--node-sep", type=float, default=NODE_SEP,
              help=f"Vertical gap between cards in a rank (default: {NODE_SEP:g})")
def layout(
    input_file: Path,
    output: Path | None,
    theme: str,
    selected: str | None,
    rank_sep: float,
    node_sep: float,
) -> None:
    """Emit renderer-ready nodes and edges as JSON."""
    tasks = _read_tasks(input_file)
    data = _pipeline(rank_sep, node_sep).render_data(tasks, theme, selected_id=selected)
    text = json.dumps(data.as_dict(), indent=2)

    if output is None:
        click.echo(text)
    else:
        output.write_text(text + "\n")
        click.echo(f"Wrote layout for {len(data.nodes)} tasks -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate a JSON task list."""
    tasks = _read_tasks(input_file)

    errors = []
    names = Counter(task.name for task in tasks)
    for name, count in names.items():
        if count > 1:
            errors.append(f"Task name '{name}' is used {count} times")

    ids = Counter(str(task.id) for task in tasks)
    for task_id, count in ids.items():
        if count > 1:
            errors.append(f"Task id '{task_id}' is used {count} times")

    for task in tasks:
        for dep in task.dependency_names:
            if dep not in names:
                errors.append(f"Task '{task.name}' depends on unknown task '{dep}'")
            elif dep == task.name:
                errors.append(f"Task '{task.name}' depends on itself")

    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    edge_count = sum(len(set(task.dependency_names)) for task in tasks)
    click.echo(f"Valid: {len(tasks)} tasks, {edge_count} dependencies")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a JSON task list."""
    tasks = _read_tasks(input_file)
    pipeline = DiagramPipeline()
    model = pipeline.model(tasks)
    layout = pipeline.layout(tasks)
    # Every rank is centred on its own column
    ranks = {node.rect.center.x for node in layout.nodes}

    click.echo(f"Tasks: {len(model.nodes)}")
    click.echo(f"Edges: {len(model.edges)}")
    click.echo(f"Ranks: {len(ranks)}")
    statuses = Counter(task.status.value for task in tasks)
    click.echo("Statuses:")
    for status, count in sorted(statuses.items()):
        click.echo(f"  {status}: {count}")
    dep_statuses = Counter(edge.dep_status.value for edge in model.edges)
    if dep_statuses:
        click.echo("Dependencies:")
        for status, count in sorted(dep_statuses.items()):
            click.echo(f"  {status}: {count}")
