"""Vendor catalog and static reference data.

The catalog maps service names to their lock-in and deplatforming metadata.
It is loaded once from the bundled dataset and never mutated afterwards.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import ValidationError

from tmrw_audit.errors import CatalogError
from tmrw_audit.models import VendorService

DATA_DIR = Path(__file__).parent / "data"
VENDOR_SERVICES_PATH = DATA_DIR / "vendor_services.json"
DEPLATFORMING_PATH = DATA_DIR / "deplatforming.json"

PORTABLE_BUCKET = "portable"

RECOMMENDATIONS: tuple[str, ...] = (
    "Ditch proprietary services like Lambda for Dockerized functions. Run them anywhere.",
    "Replace vendor-locked storage like S3 with MinIO or self-hosted solutions. Own your data.",
    "Spread your infra across multiple providers or go local. Don't trust one cloud's mercy.",
    "Deploy the Sovereign Stack: tmrw.it/stack",
)


class VendorCatalog:
    """Read-only lookup over provider buckets of vendor services.

    Lookup scans buckets in dataset order and returns the first match, so a
    name that appears in several buckets resolves to its earliest entry.
    """

    def __init__(self, buckets: Mapping[str, list[VendorService]]):
        if PORTABLE_BUCKET not in buckets:
            raise CatalogError(f"Vendor catalog has no '{PORTABLE_BUCKET}' bucket")

        self._buckets = MappingProxyType({name: tuple(services) for name, services in buckets.items()})
        index: dict[str, VendorService] = {}
        for services in self._buckets.values():
            for service in services:
                index.setdefault(service.name, service)
        self._index = MappingProxyType(index)
        self._portable = frozenset(s.name for s in self._buckets[PORTABLE_BUCKET])

    @property
    def buckets(self) -> Mapping[str, tuple[VendorService, ...]]:
        return self._buckets

    def lookup(self, name: str) -> VendorService | None:
        return self._index.get(name)

    def is_portable(self, name: str) -> bool:
        return name in self._portable

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._index)

    @classmethod
    def from_dict(cls, data: object) -> VendorCatalog:
        """Build a catalog from the raw ``{bucket: [service, ...]}`` mapping."""
        if not isinstance(data, dict):
            raise CatalogError("Vendor catalog must be a mapping of provider buckets")

        buckets: dict[str, list[VendorService]] = {}
        for bucket, entries in data.items():
            if not isinstance(entries, list):
                raise CatalogError(f"Catalog bucket '{bucket}' must be a list")
            try:
                buckets[bucket] = [VendorService.model_validate(e) for e in entries]
            except ValidationError as e:
                raise CatalogError(f"Invalid entry in catalog bucket '{bucket}': {e}") from e

        return cls(buckets)


class ReferenceData:
    """Static inputs shared by every scan: catalog, recommendations, incident examples."""

    def __init__(
        self,
        catalog: VendorCatalog,
        deplatforming_examples: tuple[str, ...] = (),
        recommendations: tuple[str, ...] = RECOMMENDATIONS,
    ):
        self.catalog = catalog
        self.deplatforming_examples = tuple(deplatforming_examples)
        self.recommendations = tuple(recommendations)


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"Cannot read reference data {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Reference data {path} is not valid JSON: {e}") from e


def load_vendor_catalog(path: Path = VENDOR_SERVICES_PATH) -> VendorCatalog:
    """Load the vendor catalog from a JSON file."""
    return VendorCatalog.from_dict(_read_json(path))


def load_deplatforming_examples(path: Path = DEPLATFORMING_PATH) -> tuple[str, ...]:
    """Load the list of real-world deplatforming incidents."""
    data = _read_json(path)
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise CatalogError(f"Deplatforming examples in {path} must be a list of strings")
    return tuple(data)


@lru_cache(maxsize=1)
def load_reference_data() -> ReferenceData:
    """Load the bundled reference data once per process."""
    return ReferenceData(
        catalog=load_vendor_catalog(),
        deplatforming_examples=load_deplatforming_examples(),
    )
