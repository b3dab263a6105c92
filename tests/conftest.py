"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest

from tmrw_audit.catalog import ReferenceData, VendorCatalog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def small_catalog() -> VendorCatalog:
    return VendorCatalog.from_dict({
        "aws": [
            {"name": "aws_lambda_function", "lockInScore": 0.8, "category": "compute", "deplatformRisk": 0.7},
            {"name": "aws_s3_bucket", "lockInScore": 0.6, "category": "storage", "deplatformRisk": 0.2},
        ],
        "portable": [
            {"name": "docker", "lockInScore": 0.0, "category": "container", "deplatformRisk": 0.0},
        ],
    })


@pytest.fixture
def small_reference(small_catalog) -> ReferenceData:
    return ReferenceData(catalog=small_catalog, deplatforming_examples=("example incident",))


@pytest.fixture
def write_files(tmp_path):
    """Write ``{relative_path: content}`` under tmp_path and return tmp_path."""
    def _write(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path
    return _write
