"""CloudFormation JSON extractor: AWS resource types under ``Resources``."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tmrw_audit.models import ParsedFileFacts

logger = logging.getLogger(__name__)


def resource_service_name(resource_type: str) -> str | None:
    """Map ``AWS::Lambda::Function`` to ``aws_lambda_function``; None for non-AWS types."""
    segments = resource_type.split("::")
    if segments[0] != "AWS":
        return None
    return "_".join(segments).lower()


def parse_cloudformation(content: str, source: str = "<string>") -> ParsedFileFacts:
    """Extract AWS services from a CloudFormation template.

    JSON documents without a ``Resources`` mapping are not templates and
    yield no facts.
    """
    try:
        template = json.loads(content)
    except json.JSONDecodeError as e:
        logger.debug("Skipping invalid JSON file %s: %s", source, e)
        return ParsedFileFacts()

    resources = template.get("Resources") if isinstance(template, dict) else None
    if not isinstance(resources, dict):
        return ParsedFileFacts()

    providers: list[str] = []
    services: list[str] = []
    for resource in resources.values():
        if not isinstance(resource, dict):
            continue
        resource_type = resource.get("Type")
        if not isinstance(resource_type, str):
            continue
        service = resource_service_name(resource_type)
        if service is None:
            continue
        providers.append("aws")
        services.append(service)

    return ParsedFileFacts(providers=providers, services=services)


def extract_cloudformation(path: Path) -> ParsedFileFacts:
    return parse_cloudformation(path.read_text(encoding="utf-8-sig"), source=str(path))
