"""Tests for extractor dispatch by file name."""

import pytest

from tmrw_audit.extractors.cloudformation import extract_cloudformation
from tmrw_audit.extractors.package_manifest import extract_package_manifest
from tmrw_audit.extractors.registry import select_extractor
from tmrw_audit.extractors.terraform import extract_terraform
from tmrw_audit.extractors.yaml_manifest import extract_yaml


@pytest.mark.parametrize("filename,extractor", [
    ("infra/main.tf", extract_terraform),
    ("serverless.yml", extract_yaml),
    ("charts/app/Chart.yaml", extract_yaml),
    ("package.json", extract_package_manifest),
    ("web/package.json", extract_package_manifest),
    ("template.json", extract_cloudformation),
    ("package-lock.json", extract_cloudformation),
])
def test_dispatch(filename, extractor):
    assert select_extractor(filename) is extractor


@pytest.mark.parametrize("filename", ["Dockerfile", "main.tf.bak", "README.md", "values.yml.tpl"])
def test_unsupported_files_skipped(filename):
    assert select_extractor(filename) is None
