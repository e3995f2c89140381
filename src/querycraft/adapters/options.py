"""Adapter configuration and cancellation checks."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..exceptions import QueryCancelledError, ValidationError

logger = logging.getLogger("querycraft.adapters")

BEFORE_EXECUTION = "before-execution"
DURING_SCAN = "during-scan"


@dataclass(frozen=True)
class AdapterOptions:
    """
    Immutable adapter configuration.

    Attributes:
        batch_size: Number of elements scanned between two cancellation
            checks (memory scans and document cursors).
        max_page_size: Upper bound for ``PaginationSpec.page_size``;
            ``None`` disables the check.
    """

    batch_size: int = 256
    max_page_size: int | None = None

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if self.max_page_size is not None and self.max_page_size < 1:
            raise ValueError("max_page_size must be >= 1")

    def check_page_size(self, page_size: int | None) -> None:
        if (
            self.max_page_size is not None
            and page_size is not None
            and page_size > self.max_page_size
        ):
            raise ValidationError(
                f"page_size {page_size} exceeds the maximum of {self.max_page_size}",
                path="pagination.page_size",
            )


def raise_if_cancelled(cancel: asyncio.Event | None, stage: str) -> None:
    """Raise :class:`QueryCancelledError` if *cancel* has been set."""
    if cancel is not None and cancel.is_set():
        logger.debug("Cancellation observed (%s)", stage)
        raise QueryCancelledError(stage)
