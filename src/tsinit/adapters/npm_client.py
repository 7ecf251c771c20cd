"""npm CLI adapter: command lines and audit output parsing."""

import json

from tsinit.domain.exceptions import AuditParseError
from tsinit.domain.models import AuditReport, Dependency, DependencyCounts, VulnerabilityCounts


def install_args(npm: str, dependency: Dependency) -> list[str]:
    """Build the install command line for a single dependency."""
    args = [npm, "install"]
    if dependency.dev:
        args.append("-D")
    args.extend([dependency.name, "--color=always"])
    return args


def audit_args(npm: str) -> list[str]:
    """Build the audit command line requesting JSON output."""
    return [npm, "audit", "--json"]


def _count(section: dict, key: str) -> int:
    value = section.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def parse_audit_report(text: str) -> AuditReport:
    """
    Parse ``npm audit --json`` output into an AuditReport.

    Args:
        text: Raw JSON document

    Returns:
        AuditReport with vulnerability and dependency counts

    Raises:
        AuditParseError: If the text is not a JSON object with a metadata section
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise AuditParseError(f"Failed to parse npm audit JSON output: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("metadata"), dict):
        raise AuditParseError("npm audit output has no metadata section")

    metadata = data["metadata"]
    vulns = metadata.get("vulnerabilities") or {}
    deps = metadata.get("dependencies") or {}
    if not isinstance(vulns, dict) or not isinstance(deps, dict):
        raise AuditParseError("npm audit metadata is malformed")

    return AuditReport(
        vulnerabilities=VulnerabilityCounts(
            info=_count(vulns, "info"),
            low=_count(vulns, "low"),
            moderate=_count(vulns, "moderate"),
            high=_count(vulns, "high"),
            critical=_count(vulns, "critical"),
            total=_count(vulns, "total"),
        ),
        dependencies=DependencyCounts(
            prod=_count(deps, "prod"),
            dev=_count(deps, "dev"),
            optional=_count(deps, "optional"),
            peer=_count(deps, "peer"),
            peer_optional=_count(deps, "peerOptional"),
            total=_count(deps, "total"),
        ),
    )
