"""
HTML report of a tour: an SVG route plot followed by the visiting order.
"""

import html
import io
import logging
from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .TSP import TourSolution
from .io import DEFAULT_GOAL_SCALE

logger = logging.getLogger(__name__)

_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 2em; }}
table {{ border-collapse: collapse; }}
td, th {{ border: 1px solid #999; padding: 0.2em 0.6em; text-align: right; }}
</style>
</head>
<body>
<h1>{title}</h1>
<p>Goal: {goal:.6f}</p>
{figure}
<table>
<tr><th>#</th><th>City</th><th>Coordinate 1</th><th>Coordinate 2</th></tr>
{rows}
</table>
</body>
</html>
"""


def render_route_svg(solution: TourSolution) -> str:
    """Plot the closed route and return it as an inline SVG document."""
    cities = solution.cities()
    coords = np.array([(c.x, c.y) for c in cities] + [(cities[0].x, cities[0].y)])

    fig, ax = plt.subplots(figsize=(8, 8))
    try:
        ax.plot(coords[:, 0], coords[:, 1], 'o-', color='blue', alpha=0.7, label='Route')
        ax.plot(coords[0, 0], coords[0, 1], 'go', markersize=12, alpha=0.5, label='Start')
        for city in cities:
            ax.annotate(city.name, (city.x, city.y), xytext=(5, 5), textcoords='offset points')
        ax.set_title(f'Tour length: {solution.goal():.2f}')
        ax.set_xlabel('Coordinate 1')
        ax.set_ylabel('Coordinate 2')
        ax.grid(True)
        ax.legend()
        buffer = io.StringIO()
        fig.savefig(buffer, format='svg', bbox_inches='tight')
    finally:
        plt.close(fig)
    svg = buffer.getvalue()
    # Drop the XML prolog so the SVG can be embedded directly.
    return svg[svg.index('<svg'):]


def write_html_report(solution: TourSolution, path: Union[str, Path],
                      goal_scale: float = DEFAULT_GOAL_SCALE, title: str = "TSP solution") -> Path:
    """Write the report to `path` and return the path."""
    rows = "\n".join(
        f"<tr><td>{i}</td><td>{html.escape(c.name)}</td><td>{c.x}</td><td>{c.y}</td></tr>"
        for i, c in enumerate(solution.cities(), 1)
    )
    page = _PAGE.format(
        title=html.escape(title),
        goal=solution.goal() / goal_scale,
        figure=render_route_svg(solution),
        rows=rows,
    )
    out = Path(path)
    out.write_text(page, encoding="utf-8")
    logger.info("HTML report saved to '%s'", out)
    return out
