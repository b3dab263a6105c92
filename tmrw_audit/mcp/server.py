"""FastMCP server exposing tmrw-audit tools."""

import json

from mcp.server.fastmcp import FastMCP

from tmrw_audit.errors import AuditError
from tmrw_audit.report import load_report, report_to_json
from tmrw_audit.scanner import scan_codebase

mcp = FastMCP("tmrw-audit")


@mcp.tool()
async def audit_codebase_tool(directory: str, patterns: list[str] | None = None) -> str:
    """Audit a codebase for cloud vendor lock-in and deplatforming risk.

    Parses Terraform, serverless/docker-compose/Helm YAML, CloudFormation
    JSON and package.json files, then returns the Freedom Score, lock-in,
    deplatforming and portability metrics, detected providers and services,
    and recommendations.

    Args:
        directory: Path to the project root to scan.
        patterns: Optional glob patterns overriding the defaults (prefix ! to exclude).
    """
    try:
        result = await scan_codebase(directory, patterns)
    except AuditError as e:
        return json.dumps({"error": str(e)})
    return report_to_json(result)


@mcp.tool()
def read_report_tool(path: str) -> str:
    """Read a saved tmrw-audit JSON report.

    Args:
        path: Path to a report written by ``tmrw audit``.
    """
    try:
        saved = load_report(path)
    except AuditError as e:
        return json.dumps({"error": str(e)})
    return report_to_json(saved)


if __name__ == "__main__":
    mcp.run()
