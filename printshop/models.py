from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Integer, Numeric, String
from sqlmodel import Column, Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value: datetime) -> str:
    # Stored timestamps are naive UTC
    return value.replace(tzinfo=timezone.utc).isoformat()


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PRINTING = "printing"
    READY = "ready"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class PaymentStatus(str, Enum):
    SUCCESS = "success"
    PENDING = "pending"


class Order(SQLModel, table=True):
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Filled from the primary key inside the insert transaction, see orders.create_order
    order_id: Optional[str] = Field(default=None, sa_column=Column(String(255), unique=True, nullable=True, index=True))

    name: str = Field(sa_column=Column(String(255), nullable=False))
    copies: int = Field(sa_column=Column(Integer, nullable=False))
    paper_size: str = Field(sa_column=Column(String(50), nullable=False))
    print_side: str = Field(sa_column=Column(String(50), nullable=False))
    color: str = Field(sa_column=Column(String(50), nullable=False))
    total: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    status: str = Field(default=OrderStatus.PENDING.value, sa_column=Column(String(50), nullable=False))

    payment_method: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))
    payment_status: Optional[str] = Field(default=None, sa_column=Column(String(50), nullable=True))

    # Opaque reference handed back by /api/upload; not checked against the disk
    file_info: Any = Field(default=None, sa_column=Column(JSON, nullable=True))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))


# Request bodies. Field names follow the JSON contract of the client apps.

class OrderCreate(SQLModel):
    file: Any = None
    name: Optional[str] = None
    copies: Optional[int] = None
    paperSize: Optional[str] = None
    printSide: Optional[str] = None
    color: Optional[str] = None


class StatusUpdate(SQLModel):
    status: Optional[str] = None


class PaymentCreate(SQLModel):
    orderId: Optional[str] = None
    paymentMethod: Optional[str] = None
    amount: Any = None


class AdminLogin(SQLModel):
    username: str = ""
    password: str = ""
