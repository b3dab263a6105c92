"""Tests for report persistence and rendering."""

import json
from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from tmrw_audit.errors import ReportError
from tmrw_audit.models import AuditReport, DeplatformingRisk, RiskLabel, ScanResult
from tmrw_audit.report import (
    build_report,
    generate_report,
    load_report,
    render_report,
    render_summary,
    report_to_json,
)


def _make_result(**kwargs) -> ScanResult:
    defaults = dict(
        freedom_score=42,
        lock_in_score=55.5,
        deplatforming_risk_score=80.0,
        portability_score=0.25,
        vendor_services=["aws_lambda_function", "aws_lambda_function", "docker"],
        providers=["aws"],
        risk_label=RiskLabel.VULNERABLE,
        deplatforming_risk=DeplatformingRisk.HIGH,
        recommendations=["Use Docker."],
        deplatforming_examples=["Something happened."],
        files_analyzed=3,
    )
    defaults.update(kwargs)
    return ScanResult(**defaults)


def _console() -> Console:
    return Console(file=StringIO(), width=120, force_terminal=False)


class TestBuildReport:
    def test_adds_utc_timestamp(self):
        report = build_report(_make_result())
        assert isinstance(report, AuditReport)
        assert report.timestamp.tzinfo is not None
        assert report.freedom_score == 42

    def test_explicit_timestamp(self):
        ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert build_report(_make_result(), ts).timestamp == ts


class TestReportFiles:
    def test_round_trip(self, tmp_path):
        result = _make_result()
        path = generate_report(result, tmp_path / "report.json")
        loaded = load_report(path)
        assert ScanResult(**loaded.model_dump(exclude={"timestamp"})) == result

    def test_json_fields(self, tmp_path):
        path = generate_report(_make_result(), tmp_path / "out" / "report.json")
        data = json.loads(path.read_text())
        assert data["freedom_score"] == 42
        assert data["risk_label"] == "VULNERABLE"
        assert data["deplatforming_risk"] == "HIGH"
        assert "timestamp" in data

    def test_load_missing(self, tmp_path):
        with pytest.raises(ReportError):
            load_report(tmp_path / "missing.json")

    def test_load_invalid(self, tmp_path):
        path = tmp_path / "report.json"
        path.write_text(json.dumps({"freedom_score": "high"}))
        with pytest.raises(ReportError):
            load_report(path)

    def test_report_to_json(self):
        data = json.loads(report_to_json(_make_result(risk_label=RiskLabel.AT_RISK)))
        assert data["risk_label"] == "AT RISK"


class TestRendering:
    def test_render_report(self):
        console = _console()
        render_report(build_report(_make_result(errors=["Error processing x.json: boom"])), console)
        output = console.file.getvalue()
        assert "Freedom Score: 42/100" in output
        assert "VULNERABLE" in output
        assert "Vendor Lock-In Penalty" in output
        assert "27.8" in output  # 55.5 * 0.5
        assert "aws_lambda_function" in output
        assert "Something happened." in output
        assert "Use Docker." in output
        assert "boom" in output

    def test_markup_in_scanned_values_is_literal(self):
        result = _make_result(
            vendor_services=["[/bold]", "aws_[red]x"],
            providers=["[/]"],
            errors=["Error processing [bold]odd.json: [/bold]"],
        )
        console = _console()
        render_report(build_report(result), console)
        output = console.file.getvalue()
        assert "[/bold]" in output
        assert "aws_[red]x" in output
        assert "Error processing [bold]odd.json" in output

    def test_render_summary(self):
        console = _console()
        render_summary(_make_result(), console)
        output = console.file.getvalue()
        assert "Freedom Score: 42/100" in output
        assert "Vendor Lock-In: 55.5%" in output
        assert "Deplatforming Risk: HIGH" in output
