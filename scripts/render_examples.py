#!/usr/bin/env python3
"""Batch render the topology fixtures and examples to SVG in every theme.

Outputs go to /tmp/workflow_diagram_renders/.

Usage:
    python scripts/render_examples.py [--selected ID]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from workflow_diagram.diagram import DiagramPipeline  # noqa: E402
from workflow_diagram.parser import TaskParseError, load_tasks  # noqa: E402
from workflow_diagram.render import render_svg  # noqa: E402
from workflow_diagram.themes import THEMES  # noqa: E402

OUTPUT_DIR = Path("/tmp/workflow_diagram_renders")
TOPOLOGIES_DIR = project_root / "tests" / "fixtures" / "topologies"
EXAMPLES_DIR = project_root / "examples"

FIXTURE_FILES = sorted(TOPOLOGIES_DIR.glob("*.json"))
EXTRA_FILES = sorted(EXAMPLES_DIR.glob("*.json"))


def render_file(
    json_path: Path,
    output_dir: Path,
    pipeline: DiagramPipeline,
    selected: str | None = None,
) -> tuple[str, list[str]]:
    """Load and render a task file once per theme.

    Returns (name, list_of_issues).
    """
    name = json_path.stem

    try:
        tasks = load_tasks(json_path.read_text())
    except TaskParseError as e:
        return name, [f"PARSE ERROR: {e}"]

    for theme_name, theme in THEMES.items():
        data = pipeline.render_data(tasks, theme, selected_id=selected)
        svg_path = output_dir / f"{name}_{theme_name}.svg"
        svg_path.write_text(render_svg(data, theme))

    return name, []


def main():
    parser = argparse.ArgumentParser(description="Batch render workflow fixtures")
    parser.add_argument("--selected", default=None, help="Task id to highlight in every render")
    args = parser.parse_args()

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    all_files = list(FIXTURE_FILES) + EXTRA_FILES
    print(f"Rendering {len(all_files)} files to {OUTPUT_DIR}/")
    print()

    # One pipeline for all files: each theme after the first reuses layout and routes
    pipeline = DiagramPipeline()
    max_name_len = max(len(f.stem) for f in all_files)
    any_errors = False

    for json_path in all_files:
        name, issues = render_file(json_path, OUTPUT_DIR, pipeline, args.selected)
        status = "OK" if not issues else "FAIL"
        any_errors = any_errors or bool(issues)

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    stats = pipeline.cache_stats()
    print("\nCache (hits/misses): " + ", ".join(
        f"{stage} {hits}/{misses}" for stage, (hits, misses) in stats.items()
    ))
    print(f"Outputs in: {OUTPUT_DIR}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
