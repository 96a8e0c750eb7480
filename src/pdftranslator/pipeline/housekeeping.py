"""Removal of per-run artifacts and of stale files left by crashed runs."""

from __future__ import annotations

import logging
from typing import Sequence

from pdftranslator.config import DEFAULT_EXPIRATION_SECONDS
from pdftranslator.storage import WORK_FOLDERS, Storage

logger = logging.getLogger(__name__)


def cleanup_run(storage: Storage, folders: Sequence[str], run_id: str) -> int:
    """Delete every work file whose name starts with *run_id*; return the count."""

    if not run_id:
        raise ValueError("run_id is required for cleanup")

    removed = 0
    for folder in folders:
        for path in storage.list_matching(folder, f"{run_id}*"):
            if storage.delete(path):
                removed += 1

    logger.info("Removed %d work file(s) for run %s", removed, run_id)
    return removed


def sweep_expired(
    storage: Storage,
    folders: Sequence[str] = WORK_FOLDERS,
    expiration_seconds: float = DEFAULT_EXPIRATION_SECONDS,
) -> int:
    if expiration_seconds < 0:
        raise ValueError("expiration_seconds cannot be negative")

    removed = 0
    for folder in folders:
        for path in storage.list_older_than(folder, expiration_seconds):
            if storage.delete(path):
                logger.debug("Expired work file removed: %s", path)
                removed += 1

    if removed:
        logger.info("Swept %d expired work file(s)", removed)
    return removed
