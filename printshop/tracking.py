from __future__ import annotations

import logging
import random
from datetime import timedelta
from typing import Any, Callable, Optional

from sqlmodel import Session

from .models import Order, OrderStatus, isoformat_utc, utcnow
from .orders import get_order

logger = logging.getLogger(__name__)

STATUS_CHAIN = [
    OrderStatus.PENDING.value,
    OrderStatus.PROCESSING.value,
    OrderStatus.PRINTING.value,
    OrderStatus.READY.value,
    OrderStatus.COMPLETED.value,
]
ADVANCE_THRESHOLD = 0.8
ESTIMATED_COMPLETION = timedelta(minutes=30)


def next_status(current: str) -> Optional[str]:
    if current not in STATUS_CHAIN:
        return None
    idx = STATUS_CHAIN.index(current)
    if idx + 1 >= len(STATUS_CHAIN):
        return None
    return STATUS_CHAIN[idx + 1]


class LookupTracker:

    def poll(self, session: Session, order_id: str) -> dict[str, Any]:
        order = get_order(session, order_id)
        return {"orderId": order.order_id, "status": order.status}


class SimulatedTracker:

    def __init__(self, rng: Callable[[], float] = random.random, threshold: float = ADVANCE_THRESHOLD):
        self.rng = rng
        self.threshold = threshold

    def _maybe_advance(self, session: Session, order: Order) -> None:
        upcoming = next_status(order.status)
        if upcoming is None:
            return
        if self.rng() <= self.threshold:
            return
        order.status = upcoming
        session.add(order)
        session.commit()
        session.refresh(order)
        logger.info("Simulated progress: %s is now %s", order.order_id, upcoming)

    def poll(self, session: Session, order_id: str) -> dict[str, Any]:
        order = get_order(session, order_id)
        self._maybe_advance(session, order)

        eta = utcnow() + ESTIMATED_COMPLETION
        return {
            "orderId": order.order_id,
            "status": order.status,
            "estimatedCompletion": isoformat_utc(eta.replace(microsecond=0)),
            "message": f"Your order is {order.status}.",
        }


def build_tracker(mode: str):
    if mode == "simulated":
        return SimulatedTracker()
    if mode == "lookup":
        return LookupTracker()
    raise ValueError(f"Unknown status progression mode: {mode!r}")
