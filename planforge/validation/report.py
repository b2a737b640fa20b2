"""ValidationReport — violations envelope and VALIDATION.md generation."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from planforge.models.violation import Severity, Violation


class ValidationReport:
    """Validation result for one layout revision."""

    def __init__(
        self,
        project_id: str = "",
        revision_id: str = "",
        violations: list[Violation] | None = None,
        validated_at: datetime | str | None = None,
    ) -> None:
        self.project_id = project_id
        self.revision_id = revision_id
        self.violations = violations or []
        if validated_at is None:
            self.validated_at = datetime.now(timezone.utc)
        elif isinstance(validated_at, str):
            self.validated_at = datetime.fromisoformat(validated_at)
        else:
            self.validated_at = validated_at

    @property
    def status(self) -> str:
        """'passed', 'warnings' or 'failed'."""
        severities = {v.severity for v in self.violations}
        if Severity.ERROR in severities:
            return "failed"
        if Severity.WARNING in severities:
            return "warnings"
        return "passed"

    def count(self, severity: Severity) -> int:
        return sum(1 for v in self.violations if v.severity == severity)

    def to_envelope(self) -> dict[str, Any]:
        """The ``{"violations": [...]}`` response shape."""
        return {"violations": [v.to_dict() for v in self.violations]}

    def to_markdown(self) -> str:
        """Generate VALIDATION.md content."""
        lines: list[str] = []

        lines.append(f"# Layout Validation — {self.project_id or 'Unknown'}")
        lines.append("")
        lines.append(f"**Revision:** `{self.revision_id}`")
        lines.append(f"**Status:** {self.status.upper()}")
        lines.append(f"**Validated:** {self.validated_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append("")

        errors = self.count(Severity.ERROR)
        warnings = self.count(Severity.WARNING)
        infos = self.count(Severity.INFO)
        lines.append(f"**Summary:** {errors} errors, {warnings} warnings, {infos} info")
        lines.append("")

        if self.violations:
            lines.append("## Violations")
            lines.append("")
            lines.append("| Severity | Code | Message | Objects |")
            lines.append("|----------|------|---------|---------|")
            for v in self.violations:
                msg = v.message.replace("|", "\\|")
                ids = ", ".join(v.object_ids) or "-"
                lines.append(f"| {v.severity.value.upper()} | {v.code} | {msg} | {ids} |")
            lines.append("")
        else:
            lines.append("No violations found. Layout passes all constraint checks.")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Return structured JSON report for audit trail."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project_id": self.project_id,
            "revision_id": self.revision_id,
            "status": self.status,
            "validated_at": self.validated_at.isoformat(),
            **self.to_envelope(),
        }
