from __future__ import annotations
from html import escape
from typing import Dict, Any, List, Optional

from .config import AUDIT_EXPORT_ENABLED


def _pct(v: Any) -> str:
    try:
        return f"{float(v):.0f}%"
    except (TypeError, ValueError):
        return "-"


def _row_dimension(d: Dict[str, Any]) -> str:
    return f"<tr><td>{escape(str(d.get('dimension')))}</td><td>{escape(str(d.get('name')))}</td><td>{_pct(d.get('score'))}</td></tr>"


def _row_job(j: Dict[str, Any]) -> str:
    return (
        f"<tr><td>{escape(str(j.get('title')))}</td><td>{_pct(j.get('match'))}</td>"
        f"<td>{escape(str(j.get('badge','')))}</td><td>{escape(str(j.get('description','')))}</td></tr>"
    )


def render_html(result: Dict[str, Any], session_id: Optional[str] = None) -> str:
    """result is the dict form of a ResultsView (see ResultsView.as_dict)."""
    scores = result.get("scores", {}) or {}
    dims: List[Dict[str, Any]] = result.get("dimension_breakdown", []) or []
    jobs: List[Dict[str, Any]] = result.get("job_matches", []) or []
    path: List[Dict[str, Any]] = result.get("learning_path", []) or []

    rows_dim = "\n".join(_row_dimension(d) for d in dims)
    rows_job = "\n".join(_row_job(j) for j in jobs)
    stages = "".join(
        f"<div class=\"stage\"><h4>{int(s.get('step', 0))}. {escape(str(s.get('title','')))}</h4>"
        + "<ul>" + "".join(f"<li>{escape(str(t))}</li>" for t in (s.get("topics") or [])) + "</ul></div>"
        for s in path
    )

    audit_links = ""
    if AUDIT_EXPORT_ENABLED and session_id:
        sid = escape(str(session_id))
        audit_links = (
            "<p class=\"audit-links\">"
            f"<a href=\"/session/{sid}/audit.json\">Download audit (JSON)</a> · "
            f"<a href=\"/session/{sid}/audit.csv\">Download audit (CSV)</a>"
            "</p>"
        )

    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>Market Research Analyst Fit Report</title>
<style>
 body{{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,'Helvetica Neue',Arial}}
 .wrap{{max-width:960px;margin:40px auto;padding:0 16px}}
 h1{{margin:0 0 16px}}
 .overall{{font-size:1.1rem;margin:8px 0 16px}}
 .stage{{display:inline-block;vertical-align:top;width:30%;margin-right:3%}}
 table{{border-collapse:collapse;width:100%}}
 th,td{{text-align:left}}
</style>
</head>
<body>
<div class="wrap">
  <h1>Your Assessment Results</h1>
  <h2>{escape(str(result.get('tier', '')))}</h2>
  <p>{escape(str(result.get('message', '')))}</p>
  <div class="overall"><b>{int(result.get('confidence_percent', 0) or 0)}% Confidence Score</b></div>

  <h3>Assessment Scores</h3>
  <ul>
    <li><b>Psychological Fit</b>: {_pct(scores.get('psychometricFit'))}</li>
    <li><b>Technical Readiness</b>: {_pct(scores.get('technicalReadiness'))}</li>
    <li><b>Overall Confidence</b>: {_pct(scores.get('overallConfidence'))}</li>
  </ul>

  <h3>WISCAR Framework Analysis</h3>
  <table border='1' cellpadding='6' cellspacing='0'>
    <thead><tr><th>Dimension</th><th>Name</th><th>Score</th></tr></thead>
    <tbody>{rows_dim}</tbody>
  </table>

  <h3>Recommended Job Roles</h3>
  <table border='1' cellpadding='6' cellspacing='0'>
    <thead><tr><th>Role</th><th>Match</th><th>Fit</th><th>Description</th></tr></thead>
    <tbody>{rows_job}</tbody>
  </table>

  <h3>Recommended Learning Path</h3>
  {stages}
  {audit_links}
</div>
</body>
</html>"""


def export_report_html(result: Dict[str, Any], path: str, session_id: Optional[str] = None) -> str:
    html = render_html(result, session_id=session_id)
    with open(path, "w", encoding="utf-8") as f:
        f.write(html)
    return path
