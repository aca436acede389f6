"""Doctor finding and analysis result models."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone

from kss.constants.enums import ResourceKind, Severity


@dataclass(frozen=True)
class Finding:
    """One diagnostic observation about a container.

    Build findings with ``kss.doctor.classifier.classify_finding`` so that
    severity and remediation always follow from the message.
    """

    severity: Severity
    message: str
    remediation: str
    container: str
    is_init: bool = False


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of a doctor run over one resource."""

    resource_name: str
    resource_kind: ResourceKind
    findings: tuple[Finding, ...] = ()
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def count(self, severity: Severity) -> int:
        return sum(1 for finding in self.findings if finding.severity is severity)

    def by_container(self) -> dict[tuple[str, bool], list[Finding]]:
        """Group findings per (container, is_init), preserving finding order."""
        grouped: dict[tuple[str, bool], list[Finding]] = defaultdict(list)
        for finding in self.findings:
            grouped[(finding.container, finding.is_init)].append(finding)
        return dict(grouped)
