"""Aggregation of per-file facts into Freedom Score metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from tmrw_audit.catalog import VendorCatalog
from tmrw_audit.models import DeplatformingRisk, ParsedFileFacts, RiskLabel, ScoreMetrics

# Per-service deplatform risk above this counts as a high-risk occurrence
HIGH_RISK_THRESHOLD = 0.3

SINGLE_PROVIDER_PENALTY = 50.0
REDUNDANCY_PENALTY = 30.0
HIGH_RISK_WEIGHT = 20.0

LOCK_IN_WEIGHT = 0.5
DEPLATFORMING_WEIGHT = 0.3
PROPRIETARY_FORMAT_WEIGHT = 20.0


@dataclass
class ScanAccumulator:
    """Running totals for one scan. Single writer: only :meth:`merge` mutates it."""
    services: list[str] = field(default_factory=list)
    # dict keys keep first-seen order
    _providers: dict[str, None] = field(default_factory=dict)
    high_risk: float = 0.0

    @property
    def providers(self) -> list[str]:
        return list(self._providers)

    def merge(self, facts: ParsedFileFacts) -> None:
        for provider in facts.providers:
            self._providers.setdefault(provider, None)
        self.services.extend(facts.services)
        self.high_risk += facts.high_risk_increment

    @classmethod
    def from_facts(cls, facts: Iterable[ParsedFileFacts]) -> ScanAccumulator:
        acc = cls()
        for item in facts:
            acc.merge(item)
        return acc


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, matching the published scores."""
    return math.floor(value + 0.5)


def classify_risk(freedom_score: int) -> RiskLabel:
    if freedom_score < 50:
        return RiskLabel.VULNERABLE
    if freedom_score <= 75:
        return RiskLabel.AT_RISK
    return RiskLabel.CAUTIOUS


def classify_deplatforming(deplatforming_risk_score: float) -> DeplatformingRisk:
    if deplatforming_risk_score > 70:
        return DeplatformingRisk.HIGH
    if deplatforming_risk_score > 30:
        return DeplatformingRisk.MODERATE
    return DeplatformingRisk.LOW


def deplatforming_risk_score(provider_count: int, high_risk_total: float) -> float:
    """Provider concentration plus high-risk services, capped at 100.

    Both provider penalties trigger on exactly one provider; they are kept
    as separate terms.
    """
    single_provider_penalty = SINGLE_PROVIDER_PENALTY if provider_count == 1 else 0.0
    high_risk_penalty = high_risk_total * HIGH_RISK_WEIGHT
    redundancy_penalty = REDUNDANCY_PENALTY if provider_count == 1 else 0.0
    return min(100.0, single_provider_penalty + high_risk_penalty + redundancy_penalty)


def freedom_score(lock_in: float, deplatforming: float, portability: float) -> int:
    return round_half_up(
        100
        - lock_in * LOCK_IN_WEIGHT
        - deplatforming * DEPLATFORMING_WEIGHT
        - (1 - portability) * PROPRIETARY_FORMAT_WEIGHT
    )


def score(accumulator: ScanAccumulator, catalog: VendorCatalog) -> ScoreMetrics:
    """Compute lock-in, deplatforming, portability and Freedom Score metrics.

    Pure: reads the accumulator and catalog, performs no I/O.
    """
    total_services = len(accumulator.services)
    lock_in_sum = 0.0
    high_risk_occurrences = 0
    open_standards = 0

    for name in accumulator.services:
        service = catalog.lookup(name)
        if service is None:
            continue
        lock_in_sum += service.lock_in_score
        if service.deplatform_risk > HIGH_RISK_THRESHOLD:
            high_risk_occurrences += 1
        if catalog.is_portable(name):
            open_standards += 1

    lock_in = (lock_in_sum / total_services) * 100 if total_services else 0.0
    high_risk_total = accumulator.high_risk + high_risk_occurrences
    deplatforming = deplatforming_risk_score(len(accumulator.providers), high_risk_total)
    portability = open_standards / total_services if total_services else 0.0
    freedom = freedom_score(lock_in, deplatforming, portability)

    return ScoreMetrics(
        total_services=total_services,
        lock_in_score=lock_in,
        deplatforming_risk_score=deplatforming,
        portability_score=portability,
        high_risk_total=high_risk_total,
        freedom_score=freedom,
        risk_label=classify_risk(freedom),
        deplatforming_risk=classify_deplatforming(deplatforming),
    )
