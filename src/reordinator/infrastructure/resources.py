"""
UI resource bundle lookup.

The bundle is the HTML page that defines the editor's layout.  It is
looked up in the current working directory first (so a checkout runs
as-is), then in the installed system location.  A missing or unreadable
bundle is fatal at startup.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from reordinator.core.errors import ResourceBundleError

logger = logging.getLogger(__name__)

BUNDLE_NAME = "reordinator.html"
SYSTEM_BUNDLE_DIR = Path("/usr/share/reordinator")


def bundle_candidates(cwd: Optional[Path] = None) -> list[Path]:
    """Paths tried, in order."""
    base = Path.cwd() if cwd is None else Path(cwd)
    return [base / BUNDLE_NAME, SYSTEM_BUNDLE_DIR / BUNDLE_NAME]


def locate_bundle(candidates: Optional[Sequence[Path]] = None) -> Path:
    """Return the first existing bundle path.  Raises ResourceBundleError."""
    paths = list(candidates) if candidates is not None else bundle_candidates()
    for path in paths:
        if path.is_file():
            logger.debug("Using resource bundle %s", path)
            return path
    raise ResourceBundleError(
        f"Resource bundle {BUNDLE_NAME} not found",
        searched=[str(p) for p in paths],
    )


def load_bundle(candidates: Optional[Sequence[Path]] = None) -> str:
    """Locate and read the bundle.  Raises ResourceBundleError."""
    path = locate_bundle(candidates)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceBundleError(f"Cannot read resource bundle {path}: {exc}") from exc
    if not content.strip():
        raise ResourceBundleError(f"Resource bundle {path} is empty")
    return content
