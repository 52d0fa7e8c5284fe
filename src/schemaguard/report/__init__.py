"""Rendering of check results."""

from schemaguard.report.renderer import (
    render,
    render_finding,
    render_json,
    render_markdown,
    render_text,
)

__all__ = [
    "render",
    "render_finding",
    "render_json",
    "render_markdown",
    "render_text",
]
