"""Breaking-change check pipeline.

Runs the full analysis over a set of changelog files:
1. Parses every changelog (includes resolved)
2. Extracts the complete event set across all files
3. Classifies each event against that complete set
4. Locates the source line of every reported event
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from schemaguard.analysis.classifier import classify
from schemaguard.analysis.events import event_column
from schemaguard.analysis.extract import extract_from_changelogs
from schemaguard.analysis.locator import SourceLocator
from schemaguard.changelog.core import collect_changelogs, parse_changelogs
from schemaguard.config import ProjectConfig
from schemaguard.logging_config import get_logger

logger = get_logger("checker")


@dataclass
class Finding:
    """A classified, located event ready for reporting."""

    kind: str
    file: str
    line: int
    breaking: bool
    message: str
    table: str
    column: str | None = None


@dataclass
class CheckResult:
    """Outcome of one check invocation."""

    files: list[str] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)
    total_events: int = 0

    @property
    def breaking(self) -> list[Finding]:
        return [f for f in self.findings if f.breaking]

    @property
    def has_breaking(self) -> bool:
        return any(f.breaking for f in self.findings)

    def to_dict(self) -> dict:
        return {
            "files": self.files,
            "total_events": self.total_events,
            "breaking_count": len(self.breaking),
            "findings": [asdict(f) for f in self.findings],
        }


def run_check(
    paths: list[str],
    config: ProjectConfig | None = None,
    progress_callback: callable | None = None,
) -> CheckResult:
    """Run the check over `paths` (changelog files or directories).

    Raises:
        ChangelogParseError: a changelog could not be parsed.
        OSError: a changelog could not be re-read while locating.
    """
    if config is None:
        config = ProjectConfig()

    files = collect_changelogs(paths, config)
    changelogs = parse_changelogs(files, config, progress_callback)

    # Classification needs every event of every file first
    events = extract_from_changelogs(changelogs)
    classifications = classify(events)
    logger.info("Extracted %d event(s) from %d changelog(s)", len(events), len(files))

    locator = SourceLocator()
    findings = []
    for c in classifications:
        if not (c.breaking or config.report_all):
            continue
        findings.append(
            Finding(
                kind=c.event.kind.value,
                file=c.event.file,
                line=locator.locate(c.event),
                breaking=c.breaking,
                message=c.message,
                table=c.event.table,
                column=event_column(c.event),
            )
        )

    result = CheckResult(files=files, findings=findings, total_events=len(events))
    logger.info("%d breaking change(s) found", len(result.breaking))
    return result
