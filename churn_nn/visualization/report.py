"""
HTML Report Module
==================

Writes all figures into one HTML page, one ``<div>`` per fixed container id.
"""

from pathlib import Path
from typing import Dict, Optional

import plotly.graph_objects as go
from loguru import logger

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
</head>
<body>
  <h1>{title}</h1>
  <div id="app">
{body}
  </div>
</body>
</html>
"""


def metrics_table(metrics: Dict[str, float], precision: int = 4) -> str:
    """Render a metrics dictionary as an HTML table."""
    rows = "\n".join(
        f"      <tr><th>{name}</th><td>{value:.{precision}f}</td></tr>"
        for name, value in metrics.items()
    )
    return f'    <table id="metrics">\n{rows}\n    </table>'


def render_report(
    figures: Dict[str, go.Figure],
    metrics: Optional[Dict[str, float]] = None,
    title: str = "Customer Churn"
) -> str:
    """
    Render figures into an HTML document.

    Args:
        figures: Mapping of container id to figure, in page order
        metrics: Optional test metrics shown above the charts
        title: Page title

    Returns:
        HTML text
    """
    parts = []
    if metrics:
        parts.append(metrics_table(metrics))

    include_js = True
    for container_id, fig in figures.items():
        parts.append(fig.to_html(
            full_html=False,
            include_plotlyjs="cdn" if include_js else False,
            div_id=container_id,
        ))
        include_js = False

    return PAGE_TEMPLATE.format(title=title, body="\n".join(parts))


def write_report(
    figures: Dict[str, go.Figure],
    path: Path,
    metrics: Optional[Dict[str, float]] = None,
    title: str = "Customer Churn"
) -> Path:
    """
    Write the HTML report to disk.

    Returns:
        Path to the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(figures, metrics, title), encoding="utf-8")

    logger.info(f"Saved report with {len(figures)} charts to {path}")
    return path
