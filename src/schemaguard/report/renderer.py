"""Report renderers for check results.

- text:      one fixed block per breaking change, for CI logs
- markdown:  GitHub-flavored summary for PR comments
- json:      machine-readable dump of the whole result
"""

from __future__ import annotations

import json

from schemaguard.checker import CheckResult, Finding

SEPARATOR = "------"


def render_finding(finding: Finding) -> str:
    """Render one finding as the plain-text report block."""
    return "\n".join(
        [
            SEPARATOR,
            f"Breaking change in file {finding.file} on line {finding.line}.",
            finding.message,
            SEPARATOR,
        ]
    )


def render_text(result: CheckResult) -> str:
    """Render every breaking finding, one block each."""
    return "\n".join(render_finding(f) for f in result.breaking)


def render_markdown(result: CheckResult) -> str:
    """Render the result as a GitHub markdown comment."""
    sections: list[str] = []

    sections.append("## Schema Rollout Check")
    sections.append("")

    breaking = result.breaking
    status = ":x: **Breaking changes found**" if breaking else ":white_check_mark: **No breaking changes**"
    sections.append("| Status | Changelogs | Events | Breaking |")
    sections.append("|:---:|:---:|:---:|:---:|")
    sections.append(
        f"| {status} | {len(result.files)} | {result.total_events} | {len(breaking)} |"
    )
    sections.append("")

    if result.findings:
        sections.append("### Changes")
        sections.append("")
        sections.append("| Change | Target | Location | Breaking |")
        sections.append("|:-------|:-------|:---------|:--------:|")
        for f in result.findings:
            target = f"{f.table}.{f.column}" if f.column else f.table
            sections.append(
                f"| {f.kind} | `{target}` | `{f.file}:{f.line}` | "
                f"{'yes' if f.breaking else 'no'} |"
            )
        sections.append("")

    if breaking:
        sections.append("<details>")
        sections.append("<summary>Details</summary>")
        sections.append("")
        for f in breaking:
            sections.append(f"- `{f.file}:{f.line}`: {f.message}")
        sections.append("")
        sections.append("</details>")
        sections.append("")

    return "\n".join(sections)


def render_json(result: CheckResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


RENDERERS = {
    "text": render_text,
    "markdown": render_markdown,
    "json": render_json,
}


def render(result: CheckResult, output_format: str = "text") -> str:
    try:
        renderer = RENDERERS[output_format]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format}") from None
    return renderer(result)
