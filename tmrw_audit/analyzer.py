"""Analysis engine: run extractors over files and assemble the ScanResult."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from tmrw_audit.catalog import ReferenceData, load_reference_data
from tmrw_audit.config import settings
from tmrw_audit.extractors.registry import select_extractor
from tmrw_audit.models import ScanResult, ScoreMetrics
from tmrw_audit.scoring import ScanAccumulator, score

logger = logging.getLogger(__name__)


def assemble_result(
    metrics: ScoreMetrics,
    accumulator: ScanAccumulator,
    reference: ReferenceData,
    files_analyzed: int = 0,
    errors: Sequence[str] = (),
) -> ScanResult:
    """Package metrics with the static recommendations and incident examples."""
    return ScanResult(
        freedom_score=metrics.freedom_score,
        lock_in_score=metrics.lock_in_score,
        deplatforming_risk_score=metrics.deplatforming_risk_score,
        portability_score=metrics.portability_score,
        vendor_services=tuple(accumulator.services),
        providers=tuple(accumulator.providers),
        risk_label=metrics.risk_label,
        deplatforming_risk=metrics.deplatforming_risk,
        recommendations=reference.recommendations,
        deplatforming_examples=reference.deplatforming_examples,
        files_analyzed=files_analyzed,
        errors=tuple(errors),
    )


async def analyze_files(
    files: Sequence[str],
    root_dir: str | Path,
    reference: ReferenceData | None = None,
    *,
    file_timeout: float | None = None,
) -> ScanResult:
    """Analyze infrastructure files for vendor lock-in and deplatforming risk.

    Args:
        files: Paths relative to ``root_dir``.
        root_dir: Directory the paths are resolved against.
        reference: Catalog and static texts; the bundled data when omitted.
        file_timeout: Seconds allowed per file (None or 0 = no limit).
            Defaults to ``TMRW_FILE_TIMEOUT_SECONDS``.

    Returns:
        ScanResult with scores, labels and recommendations. Files that fail
        to process are reported in ``errors`` and contribute nothing.
    """
    if reference is None:
        reference = load_reference_data()
    if file_timeout is None:
        file_timeout = settings.file_timeout_seconds

    root = Path(root_dir)
    accumulator = ScanAccumulator()
    errors: list[str] = []
    files_analyzed = 0

    for file in files:
        extractor = select_extractor(file)
        if extractor is None:
            continue

        files_analyzed += 1
        call = asyncio.to_thread(extractor, root / file)
        try:
            if file_timeout:
                facts = await asyncio.wait_for(call, timeout=file_timeout)
            else:
                facts = await call
        except asyncio.TimeoutError:
            logger.warning("Timed out processing %s after %ss", file, file_timeout)
            errors.append(f"Timed out processing {file}")
            continue
        except Exception as e:
            logger.warning("Error processing %s: %s", file, e)
            errors.append(f"Error processing {file}: {e}")
            continue

        accumulator.merge(facts)

    metrics = score(accumulator, reference.catalog)
    logger.debug(
        "Analyzed %d files: %d services, %d providers, freedom score %d",
        files_analyzed, metrics.total_services, len(accumulator.providers), metrics.freedom_score,
    )
    return assemble_result(metrics, accumulator, reference, files_analyzed, errors)
