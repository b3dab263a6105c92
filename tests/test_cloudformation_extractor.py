"""Tests for the CloudFormation JSON extractor."""

import json

from tmrw_audit.extractors.cloudformation import (
    extract_cloudformation,
    parse_cloudformation,
    resource_service_name,
)


def _template(resources) -> str:
    return json.dumps({"AWSTemplateFormatVersion": "2010-09-09", "Resources": resources})


class TestResourceServiceName:
    def test_aws_type(self):
        assert resource_service_name("AWS::Lambda::Function") == "aws_lambda_function"
        assert resource_service_name("AWS::ApiGateway::RestApi") == "aws_apigateway_restapi"

    def test_non_aws_type(self):
        assert resource_service_name("Custom::Thing") is None
        assert resource_service_name("Alibaba::ECS::Instance") is None


class TestParseCloudFormation:
    def test_aws_resources(self):
        facts = parse_cloudformation(_template({
            "Fn": {"Type": "AWS::Lambda::Function"},
            "Bucket": {"Type": "AWS::S3::Bucket"},
        }))
        assert facts.providers == ["aws", "aws"]
        assert facts.services == ["aws_lambda_function", "aws_s3_bucket"]
        assert facts.high_risk_increment == 0

    def test_bad_entries_skipped_individually(self):
        facts = parse_cloudformation(_template({
            "Custom": {"Type": "Custom::Thing"},
            "NoType": {"Properties": {}},
            "NumberType": {"Type": 42},
            "NotAnObject": "AWS::S3::Bucket",
            "Queue": {"Type": "AWS::SQS::Queue"},
        }))
        assert facts.services == ["aws_sqs_queue"]
        assert facts.providers == ["aws"]

    def test_non_template_json(self):
        facts = parse_cloudformation(json.dumps({"name": "settings", "debug": True}))
        assert facts.providers == []
        assert facts.services == []

    def test_resources_not_a_mapping(self):
        facts = parse_cloudformation(json.dumps({"Resources": ["AWS::S3::Bucket"]}))
        assert facts.services == []

    def test_top_level_array(self):
        facts = parse_cloudformation("[1, 2, 3]")
        assert facts.services == []

    def test_malformed_json(self):
        facts = parse_cloudformation('{"Resources": {')
        assert facts.providers == []
        assert facts.services == []


class TestExtractCloudFormation:
    def test_fixture_file(self, fixtures_dir):
        facts = extract_cloudformation(fixtures_dir / "cfn-template.json")
        assert facts.services == ["aws_s3_bucket", "aws_sqs_queue"]
        assert set(facts.providers) == {"aws"}

    def test_byte_order_mark(self, fixtures_dir, tmp_path):
        path = tmp_path / "template.json"
        path.write_text((fixtures_dir / "cfn-template.json").read_text(), encoding="utf-8-sig")
        assert path.read_bytes().startswith(b"\xef\xbb\xbf")
        facts = extract_cloudformation(path)
        assert facts.services == ["aws_s3_bucket", "aws_sqs_queue"]
