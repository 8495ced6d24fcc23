import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from TSP.report import render_route_svg, write_html_report
from TSP.TSP import City, TourSolution, TSPProblem


def test_render_route_svg_returns_bare_svg(square_problem):
    svg = render_route_svg(TourSolution.identity(square_problem))
    assert svg.startswith("<svg")
    assert svg.rstrip().endswith("</svg>")


def test_html_report_contains_plot_and_escaped_table(tmp_path):
    problem = TSPProblem([City("<A&B>", 0.0, 0.0), City("C", 3.0, 4.0)])
    out = write_html_report(TourSolution.identity(problem), tmp_path / "report.html", goal_scale=1.0)
    page = out.read_text(encoding="utf-8")
    assert "<svg" in page
    assert "<td>&lt;A&amp;B&gt;</td>" in page
    assert "Goal: 10.000000" in page
