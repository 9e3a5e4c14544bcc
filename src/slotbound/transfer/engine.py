from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..capacity import acceptable_amount, takeback_amount
from ..containers.base import Container

logger = logging.getLogger(__name__)


class TransferOutcome(str, Enum):
    """How a gesture ended; only TRANSFERRED and SWAPPED change anything."""

    SELF_DROP = "self_drop"
    EMPTY_SOURCE = "empty_source"
    REJECTED = "rejected"
    TRANSFERRED = "transferred"
    SWAPPED = "swapped"
    SWAP_ABORTED = "swap_aborted"


@dataclass(frozen=True)
class TransferResult:
    """
    What a single gesture did.

    ``moved`` is how much of the source's item ended up in the destination;
    ``received`` is how much of the destination's item ended up in the source.
    """

    outcome: TransferOutcome
    moved: int = 0
    received: int = 0

    @property
    def changed(self) -> bool:
        return self.outcome in (TransferOutcome.TRANSFERRED, TransferOutcome.SWAPPED)


@dataclass(frozen=True)
class TransferRequest:
    """A completed drag: move from ``source`` onto ``destination``."""

    source: Container
    destination: Container


class TransferEngine:
    """
    Moves item stacks between two containers for one completed drag gesture.

    The engine holds no state between calls. It either moves what fits into
    the destination, or swaps the two occupants, and a swap that cannot be
    completed is rolled back so the pair ends exactly as it started.
    """

    def execute(self, request: TransferRequest) -> TransferResult:
        return self.transfer(request.source, request.destination)

    def transfer(self, source: Container, destination: Container) -> TransferResult:
        if source == destination:
            logger.debug("Dropped %r onto itself; nothing to do", source)
            return TransferResult(TransferOutcome.SELF_DROP)

        src = source.get_content()
        if src is None:
            logger.debug("Source %r is empty; nothing to do", source)
            return TransferResult(TransferOutcome.EMPTY_SOURCE)

        dst = destination.get_content()
        if dst is None or dst.item == src.item:
            return self._simple_transfer(source, destination)
        return self._swap(source, destination)

    def _simple_transfer(self, source: Container, destination: Container) -> TransferResult:
        item, number = source.get_content()
        accepted = acceptable_amount(destination, item, number)
        if accepted <= 0:
            logger.debug("%r accepts none of %s", destination, item.id)
            return TransferResult(TransferOutcome.REJECTED)

        source.remove_items(accepted)
        destination.add_items(item, accepted)
        logger.debug("Moved %d/%d x %s from %r to %r", accepted, number, item.id, source, destination)
        return TransferResult(TransferOutcome.TRANSFERRED, moved=accepted)

    def _swap(self, source: Container, destination: Container) -> TransferResult:
        # Order is fixed: snapshot, clear both, compute takebacks, apply them,
        # check feasibility, then either restore or commit.
        s_item, s_number = source.get_content()
        d_item, d_number = destination.get_content()

        source.remove_items(s_number)
        destination.remove_items(d_number)

        s_takeback = takeback_amount(s_item, s_number, source, destination)
        d_takeback = takeback_amount(d_item, d_number, destination, source)

        if s_takeback > 0:
            source.add_items(s_item, s_takeback)
            s_number -= s_takeback
        if d_takeback > 0:
            destination.add_items(d_item, d_takeback)
            d_number -= d_takeback

        if source.max_acceptable(d_item) < d_number or destination.max_acceptable(s_item) < s_number:
            if d_number > 0:
                destination.add_items(d_item, d_number)
            if s_number > 0:
                source.add_items(s_item, s_number)
            logger.info(
                "Swap of %s (%r) and %s (%r) is infeasible; restored both",
                s_item.id, source, d_item.id, destination,
            )
            return TransferResult(TransferOutcome.SWAP_ABORTED)

        if d_number > 0:
            source.add_items(d_item, d_number)
        if s_number > 0:
            destination.add_items(s_item, s_number)

        if s_number == 0 and d_number == 0:
            return TransferResult(TransferOutcome.REJECTED)
        logger.debug(
            "Swapped %d x %s into %r and %d x %s into %r",
            s_number, s_item.id, destination, d_number, d_item.id, source,
        )
        return TransferResult(TransferOutcome.SWAPPED, moved=s_number, received=d_number)
