"""Pick an extractor for a file by name."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from tmrw_audit.extractors.cloudformation import extract_cloudformation
from tmrw_audit.extractors.package_manifest import extract_package_manifest
from tmrw_audit.extractors.terraform import extract_terraform
from tmrw_audit.extractors.yaml_manifest import extract_yaml
from tmrw_audit.models import ParsedFileFacts

Extractor = Callable[[Path], ParsedFileFacts]


def select_extractor(filename: str) -> Extractor | None:
    """Return the extractor for ``filename``, or None when the file is not analyzed.

    ``package.json`` is matched before the generic ``.json`` rule so that
    manifests never reach the CloudFormation extractor.
    """
    if filename.endswith(".tf"):
        return extract_terraform
    if filename.endswith((".yml", ".yaml")):
        return extract_yaml
    if filename.endswith("package.json"):
        return extract_package_manifest
    if filename.endswith(".json"):
        return extract_cloudformation
    return None
