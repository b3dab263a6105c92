"""package.json extractor: cloud vendor SDK dependencies."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from tmrw_audit.models import ParsedFileFacts


@dataclass(frozen=True)
class SdkSignature:
    """A vendor SDK recognised by one or more npm package names."""
    provider: str
    service: str
    packages: frozenset[str]
    high_risk: float = 0.1


SDK_SIGNATURES: list[SdkSignature] = [
    SdkSignature("aws", "aws_sdk", frozenset({"aws-sdk", "@aws-sdk/client-s3"})),
    SdkSignature("azure", "azure_blob", frozenset({"@azure/storage-blob"})),
    SdkSignature("gcp", "gcp_storage", frozenset({"@google-cloud/storage"})),
]


def merged_dependencies(manifest: dict) -> dict:
    """Merge ``dependencies`` and ``devDependencies``; dev entries win on conflict."""
    deps: dict = {}
    for dep_key in ("dependencies", "devDependencies"):
        section = manifest.get(dep_key)
        if isinstance(section, dict):
            deps.update(section)
    return deps


def parse_package_manifest(content: str) -> ParsedFileFacts:
    """Extract vendor SDK usage from package.json source.

    Raises:
        json.JSONDecodeError: if the manifest is not valid JSON.
    """
    manifest = json.loads(content)
    deps = merged_dependencies(manifest) if isinstance(manifest, dict) else {}

    providers: list[str] = []
    services: list[str] = []
    high_risk = 0.0
    for signature in SDK_SIGNATURES:
        if signature.packages.isdisjoint(deps):
            continue
        providers.append(signature.provider)
        services.append(signature.service)
        high_risk += signature.high_risk

    return ParsedFileFacts(providers=providers, services=services, high_risk_increment=high_risk)


def extract_package_manifest(path: Path) -> ParsedFileFacts:
    return parse_package_manifest(path.read_text(encoding="utf-8-sig"))
