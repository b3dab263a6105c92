"""File discovery: find infrastructure files and hand them to the analyzer."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Sequence

from tmrw_audit.analyzer import analyze_files
from tmrw_audit.config import settings
from tmrw_audit.errors import ScanError
from tmrw_audit.models import ScanResult

logger = logging.getLogger(__name__)


def split_patterns(patterns: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split glob patterns into (include, exclude); excludes start with ``!``."""
    include: list[str] = []
    exclude: list[str] = []
    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        if pattern.startswith("!"):
            exclude.append(pattern[1:])
        else:
            include.append(pattern)
    return include, exclude


def is_excluded(rel_path: str, exclude: Sequence[str]) -> bool:
    """Match an exclusion at the root or at any nested directory level."""
    for pattern in exclude:
        if fnmatch.fnmatch(rel_path, pattern) or fnmatch.fnmatch(rel_path, f"*/{pattern}"):
            return True
    return False


def discover_files(root_dir: str | Path, patterns: Sequence[str]) -> list[str]:
    """Return sorted, unique relative POSIX paths of files matching ``patterns``."""
    root = Path(root_dir)
    include, exclude = split_patterns(patterns)

    found: set[str] = set()
    for pattern in include:
        try:
            matches = list(root.glob(pattern))
        except (ValueError, NotImplementedError) as e:
            raise ScanError(f"Invalid file pattern '{pattern}': {e}") from e
        for path in matches:
            if not path.is_file():
                continue
            rel = path.relative_to(root).as_posix()
            if not is_excluded(rel, exclude):
                found.add(rel)

    return sorted(found)


async def scan_codebase(
    directory: str | Path | None = None,
    patterns: Sequence[str] | None = None,
) -> ScanResult:
    """Discover infrastructure files under ``directory`` and analyze them.

    Raises:
        ScanError: if the directory is missing or no file matches.
    """
    root = Path(directory) if directory else Path.cwd()
    patterns = list(patterns) if patterns else list(settings.file_patterns)

    if not root.is_dir():
        raise ScanError(f"Directory not found: {root}")

    logger.info("Scanning directory: %s", root)
    logger.info("Using patterns: %s", ", ".join(patterns))

    files = discover_files(root, patterns)
    if not files:
        raise ScanError(
            f"No infrastructure files found in {root}. Ensure files match patterns "
            f"({', '.join(patterns)}) or set TMRW_FILE_PATTERNS."
        )

    logger.info("Found %d files: %s", len(files), ", ".join(files))
    return await analyze_files(files, root)
