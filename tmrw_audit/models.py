"""Pydantic models for the tmrw-audit analysis engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# --- Enums ---

class RiskLabel(str, Enum):
    VULNERABLE = "VULNERABLE"
    AT_RISK = "AT RISK"
    CAUTIOUS = "CAUTIOUS"


class DeplatformingRisk(str, Enum):
    HIGH = "HIGH"
    MODERATE = "Moderate"
    LOW = "Low"


# --- Vendor Catalog ---

class VendorService(BaseModel):
    """A vendor-specific or portable service and its risk metadata."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    lock_in_score: float = Field(alias="lockInScore", ge=0.0, le=1.0)
    category: str = ""
    deplatform_risk: float = Field(alias="deplatformRisk", ge=0.0, le=1.0)


# --- Extractor output ---

class ParsedFileFacts(BaseModel):
    """Facts extracted from a single file.

    Duplicates in ``providers`` and ``services`` are meaningful: one entry
    per occurrence.
    """

    providers: list[str] = []
    services: list[str] = []
    high_risk_increment: float = Field(default=0.0, ge=0.0)


# --- Scoring ---

class ScoreMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_services: int = 0
    lock_in_score: float = 0.0
    deplatforming_risk_score: float = 0.0
    portability_score: float = 0.0
    high_risk_total: float = 0.0
    freedom_score: int = 0
    risk_label: RiskLabel = RiskLabel.CAUTIOUS
    deplatforming_risk: DeplatformingRisk = DeplatformingRisk.LOW


class ScanResult(BaseModel):
    """Result of a vendor lock-in audit across files."""

    model_config = ConfigDict(frozen=True)

    freedom_score: int
    lock_in_score: float
    deplatforming_risk_score: float
    portability_score: float
    vendor_services: tuple[str, ...] = ()
    providers: tuple[str, ...] = ()
    risk_label: RiskLabel
    deplatforming_risk: DeplatformingRisk
    recommendations: tuple[str, ...] = ()
    deplatforming_examples: tuple[str, ...] = ()
    files_analyzed: int = 0
    errors: tuple[str, ...] = ()


class AuditReport(ScanResult):
    """A persisted ScanResult stamped with the time it was generated."""

    timestamp: datetime
