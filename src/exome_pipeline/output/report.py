"""HTML fragment summarising filter counts and priority messages."""

from pathlib import Path
from typing import Sequence

from exome_pipeline.priority import Priority, messages_to_html
from exome_pipeline.runner import FilterReport


def build_html_report(filter_reports: Sequence[FilterReport], priorities: Sequence[Priority]) -> str:
    """Render filter before/after counts, then each priority's message list."""
    lines = ["<h2>Variant filters</h2>\n", "<table>\n"]
    lines.append("<tr><th>Filter</th><th>Before</th><th>After</th></tr>\n")
    for report in filter_reports:
        lines.append(
            f"<tr><td>{report.kind.value}</td><td>{report.before}</td>"
            f"<td>{report.after}</td></tr>\n"
        )
    lines.append("</table>\n")

    for priority in priorities:
        lines.append(f"<h2>{priority.name}</h2>\n")
        lines.append(messages_to_html(priority.messages))

    return "".join(lines)


def write_html_report(html: str, output_path: Path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html)
    return output_path
