"""
Batch driver.

Runs a per-item function over the input items in order, pairing every
output record with the index of the item that produced it. A function may
return one record, a list of records, or None to drop the item.

Error policy:
- continue_on_fail=False: the first exception aborts the batch and propagates
- continue_on_fail=True:  the item yields ``{"error": message}`` and the
  batch carries on
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union

from beyond_presence.monitoring.logging import with_context

logger = logging.getLogger(__name__)

T = TypeVar("T")
ItemOutput = Optional[Union[Dict[str, Any], List[Dict[str, Any]]]]


class BatchStatus(str, Enum):
    """Status of a batch execution."""

    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    FAILED = "failed"


@dataclass
class ItemResult:
    """One output record, paired with the input item it came from."""

    item_index: int
    json: Dict[str, Any]
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass
class BatchResult:
    """Result of running a batch."""

    execution_id: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    items: List[ItemResult] = field(default_factory=list)
    total_items: int = 0
    successful_items: int = 0
    skipped_items: int = 0
    failed_items: int = 0

    @property
    def status(self) -> BatchStatus:
        if self.failed_items == 0:
            return BatchStatus.SUCCESS
        if self.failed_items < self.total_items:
            return BatchStatus.PARTIAL_SUCCESS
        return BatchStatus.FAILED

    @property
    def duration_seconds(self) -> float:
        """Calculate execution duration."""
        if self.ended_at is None:
            return 0.0
        return (self.ended_at - self.started_at).total_seconds()

    @property
    def errors(self) -> List[ItemResult]:
        return [item for item in self.items if item.is_error]

    def to_output(self) -> List[Dict[str, Any]]:
        """Output records in input order."""
        return [item.json for item in self.items]


def run_batch(
    items: Sequence[T],
    process: Callable[[T, int], ItemOutput],
    continue_on_fail: bool = False,
    batch_logger: Optional[logging.Logger] = None,
) -> BatchResult:
    """
    Run ``process(item, index)`` for every item.

    Args:
        items: Input items, processed sequentially in order
        process: Per-item function returning a record, a list of records,
            or None when the item is filtered out
        continue_on_fail: Turn item errors into error records instead of
            aborting the batch
        batch_logger: Logger to report progress on (defaults to module logger)

    Returns:
        BatchResult with output records and counters

    Raises:
        Exception: Whatever ``process`` raised, when continue_on_fail is False
    """
    log = batch_logger or logger
    result = BatchResult(
        execution_id=str(uuid.uuid4()),
        started_at=datetime.now(timezone.utc),
        total_items=len(items),
    )

    for index, item in enumerate(items):
        try:
            output = process(item, index)
        except Exception as e:
            item_log = with_context(
                log, execution_id=result.execution_id, item_index=index, stage="process"
            )
            if not continue_on_fail:
                item_log.error(f"Item failed, aborting batch: {e}")
                raise
            item_log.warning(f"Item failed: {e}")
            result.items.append(ItemResult(item_index=index, json={"error": str(e)}, error=str(e)))
            result.failed_items += 1
            continue

        if output is None:
            result.skipped_items += 1
            continue

        records = output if isinstance(output, list) else [output]
        result.items.extend(ItemResult(item_index=index, json=record) for record in records)
        result.successful_items += 1

    result.ended_at = datetime.now(timezone.utc)
    log.info(
        f"Batch {result.execution_id} finished: {result.successful_items} ok, "
        f"{result.skipped_items} skipped, {result.failed_items} failed "
        f"in {result.duration_seconds:.3f}s"
    )
    return result
