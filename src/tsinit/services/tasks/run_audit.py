"""Task to run npm audit and summarise the result."""

import logging

from tsinit.adapters.npm_client import audit_args, parse_audit_report
from tsinit.domain.events import AuditReady
from tsinit.domain.exceptions import AuditParseError, WizardFatalError
from tsinit.domain.models import AuditReport, Context
from tsinit.services.settings import get_npm_executable
from tsinit.services.tasks import register

logger = logging.getLogger(__name__)


class RunAudit:
    """Task to run ``npm audit --json`` in the project directory."""

    name = "run_audit"

    def get_status_message(self, ctx: Context) -> str:
        """Generate status message for this task."""
        return "Run npm audit"

    def run(self, ctx: Context) -> AuditReady:
        """
        Run the audit and parse its report.

        npm exits non-zero when it finds vulnerabilities but still prints the
        report, so a failed run is only fatal when neither stream parses.
        """
        if ctx.project_path is None:
            raise WizardFatalError("Project has not been created", source=self.name)

        result = ctx.runner.run(audit_args(get_npm_executable()), ctx.project_path)

        if result.ok:
            try:
                return AuditReady(report=parse_audit_report(result.stdout))
            except AuditParseError as e:
                raise AuditParseError(e.message, source=self.name)

        report = self._parse_failed_output(result.stdout, result.stderr)
        if report is None:
            raise WizardFatalError(result.error_text(), source=self.name)

        logger.info("npm audit exited with %s but produced a report", result.returncode)
        return AuditReady(report=report)

    def _parse_failed_output(self, *streams: str) -> AuditReport | None:
        for text in streams:
            if not text.strip():
                continue
            try:
                return parse_audit_report(text)
            except AuditParseError:
                continue
        return None


# Auto-register this task
register(RunAudit())
