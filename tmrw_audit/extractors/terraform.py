"""Terraform (.tf) extractor: provider blocks and resource types."""

from __future__ import annotations

import logging
from pathlib import Path

import hcl2

from tmrw_audit.models import ParsedFileFacts

logger = logging.getLogger(__name__)


def _labels(blocks: object) -> list[str]:
    """Return the first label of each block in a python-hcl2 block list.

    python-hcl2 renders ``resource "aws_s3_bucket" "x" {}`` as
    ``[{"aws_s3_bucket": {"x": {...}}}]``; depending on the library version
    labels may keep their surrounding quotes, and metadata keys start with
    a double underscore.
    """
    labels: list[str] = []
    if not isinstance(blocks, list):
        return labels
    for block in blocks:
        if not isinstance(block, dict):
            continue
        for key in block:
            if not isinstance(key, str) or key.startswith("__"):
                continue
            labels.append(key.strip('"'))
    return labels


def parse_terraform(content: str, source: str = "<string>") -> ParsedFileFacts:
    """Extract providers and resource types from Terraform source."""
    try:
        document = hcl2.loads(content)
    except Exception as e:
        logger.debug("Skipping invalid Terraform file %s: %s", source, e)
        return ParsedFileFacts()

    if not isinstance(document, dict):
        return ParsedFileFacts()

    return ParsedFileFacts(
        providers=_labels(document.get("provider")),
        services=_labels(document.get("resource")),
    )


def extract_terraform(path: Path) -> ParsedFileFacts:
    return parse_terraform(path.read_text(encoding="utf-8-sig"), source=str(path))
