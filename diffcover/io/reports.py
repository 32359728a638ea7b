"""
Summary report generators for diff coverage results.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Union

from diffcover.core.errors import OutputWriteError

if TYPE_CHECKING:
    from diffcover.core.pipeline import DiffCoverageResult

logger = logging.getLogger(__name__)


def build_summary(result: "DiffCoverageResult", threshold: float) -> Dict[str, Any]:
    """Build a JSON-serializable summary of a result."""
    return {
        "summary": {
            "covered": result.covered,
            "total": result.total,
            "percent": round(result.percent, 2),
            "threshold": threshold,
            "passed": result.passes(threshold),
        },
        "files": [
            {
                "file": stats.file,
                "covered": stats.covered,
                "total": stats.total,
                "percent": round(stats.percent, 2),
            }
            for stats in result.files
        ],
        "excluded": list(result.excluded),
    }


def render_markdown(result: "DiffCoverageResult", threshold: float) -> str:
    """Render a Markdown summary of a result."""
    status = "passed" if result.passes(threshold) else "failed"
    lines = [
        "# Diff Coverage Summary",
        "",
        "## Overview",
        "",
        f"- **Coverage**: {result.percent:.2f}%",
        f"- **Statements**: {result.covered}/{result.total} covered",
        f"- **Threshold**: {threshold:.2f}% ({status})",
        f"- **Blocks on changed lines**: {len(result.filtered)}",
        "",
    ]

    files = result.files
    if files:
        lines.extend([
            "## Files",
            "",
            "| File | Covered | Total | Coverage |",
            "| --- | ---: | ---: | ---: |",
        ])
        for stats in files:
            lines.append(f"| `{stats.file}` | {stats.covered} | {stats.total} | {stats.percent:.2f}% |")
        lines.append("")

    if result.excluded:
        lines.extend(["## Excluded", ""])
        lines.extend(f"- `{path}`" for path in result.excluded)
        lines.append("")

    return "\n".join(lines)


def write_summary(
    result: "DiffCoverageResult",
    path: Union[str, Path],
    output_format: str,
    threshold: float,
) -> None:
    """
    Write a summary report.

    Args:
        result: Diff coverage result
        path: Output file
        output_format: ``json`` or ``markdown``
        threshold: Minimum percentage the run was checked against

    Raises:
        OutputWriteError: If the report cannot be written
    """
    if output_format == "json":
        content = json.dumps(build_summary(result, threshold), indent=2) + "\n"
    elif output_format == "markdown":
        content = render_markdown(result, threshold)
    else:
        raise ValueError(f"Unsupported summary format: {output_format}")

    report_file = Path(path)
    try:
        with report_file.open("w") as f:
            f.write(content)
    except OSError as e:
        raise OutputWriteError(str(path), str(e)) from e

    logger.info(f"Wrote {output_format} summary to {report_file}")
