from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from .errors import InvalidOrder, InvalidStatus, OrderNotFound
from .models import Order, OrderCreate, OrderStatus, PaymentStatus, isoformat_utc, utcnow
from .pricing import quote

logger = logging.getLogger(__name__)

ORDER_ID_PREFIX = "ORDER_"


def format_order_id(pk: int) -> str:
    return f"{ORDER_ID_PREFIX}{pk}"


def order_record(order: Order) -> dict[str, Any]:
    record = order.model_dump()
    record["created_at"] = isoformat_utc(order.created_at)
    return record


def create_order(session: Session, data: OrderCreate) -> Order:
    required = (data.file, data.name, data.copies, data.paperSize, data.printSide, data.color)
    if not all(required):
        raise InvalidOrder()

    price = quote(data.copies, data.paperSize, data.printSide, data.color)
    order = Order(
        name=data.name,
        copies=data.copies,
        paper_size=data.paperSize,
        print_side=data.printSide,
        color=data.color,
        total=Decimal(price.total),
        file_info=data.file,
    )
    session.add(order)
    # The primary key comes from the database sequence, so concurrent
    # submissions can never be handed the same public id.
    session.flush()
    order.order_id = format_order_id(order.id)
    session.commit()
    session.refresh(order)

    logger.info("Created %s for %s (total %s)", order.order_id, order.name, order.total)
    return order


def find_order(session: Session, order_id: str) -> Optional[Order]:
    return session.exec(select(Order).where(Order.order_id == order_id)).first()


def get_order(session: Session, order_id: str) -> Order:
    order = find_order(session, order_id)
    if not order:
        raise OrderNotFound()
    return order


def list_orders(session: Session) -> list[Order]:
    stmt = select(Order).order_by(Order.created_at.desc(), Order.id.desc())
    return list(session.exec(stmt))


def update_status(session: Session, order_id: str, new_status: Optional[str]) -> Order:
    # The admin path may jump to any status, no transition checks here
    if not new_status or new_status not in OrderStatus.values():
        raise InvalidStatus()

    order = get_order(session, order_id)
    order.status = new_status
    session.add(order)
    session.commit()
    session.refresh(order)

    logger.info("Status for %s updated to %s", order_id, new_status)
    return order


def _completed_total_since(session: Session, since: datetime) -> Decimal:
    stmt = select(func.coalesce(func.sum(Order.total), 0)).where(
        Order.status == OrderStatus.COMPLETED.value,
        Order.created_at >= since,
    )
    return Decimal(str(session.exec(stmt).one()))


def earnings(session: Session, now: Optional[datetime] = None) -> dict[str, str]:
    now = now or utcnow()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

    today = _completed_total_since(session, start_of_day)
    weekly = _completed_total_since(session, start_of_day - timedelta(days=7))
    return {
        "today": f"{today:.2f}",
        "weekly": f"{weekly:.2f}",
    }


def record_payment(session: Session, order_id: str, payment_method: str) -> dict[str, Any]:
    order = get_order(session, order_id)

    is_online = payment_method == "online"
    payment_status = PaymentStatus.SUCCESS if is_online else PaymentStatus.PENDING
    order.payment_method = payment_method
    order.payment_status = payment_status.value
    session.add(order)
    session.commit()

    result: dict[str, Any] = {
        "success": True,
        "paymentId": f"PAY_{secrets.token_hex(8).upper()}",
        "status": payment_status.value,
    }
    if is_online:
        result["transactionId"] = f"TXN_{secrets.token_hex(8).upper()}"

    logger.info("Recorded %s payment for %s (%s)", payment_method, order_id, payment_status.value)
    return result
