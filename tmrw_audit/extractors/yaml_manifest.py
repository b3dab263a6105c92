"""YAML extractor: serverless manifests, docker-compose files and Helm charts.

Three detections run independently on the same document:

1. ``provider.name`` present: a serverless-framework manifest. Each entry
   under ``functions`` is one vendor function service (+0.2 high risk each).
2. File name contains ``docker-compose``: each entry under ``services`` is a
   ``docker`` service. This replaces the service list built by detection 1
   rather than extending it; providers and high risk from 1 are kept.
3. ``apiVersion`` mentions ``helm.sh`` or ``kind`` is ``Chart``: one ``helm``
   service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from tmrw_audit.models import ParsedFileFacts

logger = logging.getLogger(__name__)

FUNCTION_SERVICE_NAMES: dict[str, str] = {
    "aws": "aws_lambda_function",
    "azure": "azurerm_function_app",
    "gcp": "google_cloud_functions",
    "ibm": "ibm_cloud_function",
    "oracle": "oci_functions_function",
}

FUNCTION_HIGH_RISK = 0.2


@dataclass(frozen=True)
class YamlManifest:
    """The optional top-level fields the extractor cares about."""
    provider_name: str | None = None
    function_count: int = 0
    service_count: int = 0
    api_version: str | None = None
    kind: str | None = None


def _count_entries(value: object) -> int:
    if isinstance(value, (list, dict)):
        return len(value)
    return 0


def read_manifest(document: object) -> YamlManifest:
    """Project a parsed YAML document onto :class:`YamlManifest`."""
    if not isinstance(document, dict):
        return YamlManifest()

    provider = document.get("provider")
    provider_name = provider.get("name") if isinstance(provider, dict) else None
    api_version = document.get("apiVersion")
    kind = document.get("kind")

    return YamlManifest(
        provider_name=provider_name if isinstance(provider_name, str) and provider_name else None,
        function_count=_count_entries(document.get("functions")),
        service_count=_count_entries(document.get("services")),
        api_version=api_version if isinstance(api_version, str) else None,
        kind=kind if isinstance(kind, str) else None,
    )


def function_service_name(provider: str) -> str:
    return FUNCTION_SERVICE_NAMES.get(provider, f"{provider}_function")


def is_helm_chart(manifest: YamlManifest) -> bool:
    return bool(manifest.api_version and "helm.sh" in manifest.api_version) or manifest.kind == "Chart"


def facts_from_manifest(manifest: YamlManifest, filename: str) -> ParsedFileFacts:
    providers: list[str] = []
    services: list[str] = []
    high_risk = 0.0

    if manifest.provider_name:
        providers.append(manifest.provider_name)
        services = [function_service_name(manifest.provider_name)] * manifest.function_count
        high_risk = manifest.function_count * FUNCTION_HIGH_RISK

    if "docker-compose" in Path(filename).name:
        services = ["docker"] * manifest.service_count

    if is_helm_chart(manifest):
        services.append("helm")

    return ParsedFileFacts(providers=providers, services=services, high_risk_increment=high_risk)


def parse_yaml(content: str, filename: str = "") -> ParsedFileFacts:
    """Extract facts from YAML source; ``filename`` drives docker-compose detection."""
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug("Skipping invalid YAML file %s: %s", filename or "<string>", e)
        return ParsedFileFacts()

    return facts_from_manifest(read_manifest(document), filename)


def extract_yaml(path: Path) -> ParsedFileFacts:
    return parse_yaml(path.read_text(encoding="utf-8-sig"), filename=str(path))
