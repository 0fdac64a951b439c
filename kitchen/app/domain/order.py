"""Order records, their lifecycle states and identifier generation."""

from __future__ import annotations

import os
import threading
import time
import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    """Enumerate the lifecycle states for an order."""

    PROCESSING = "PROCESSING"
    READY = "READY"
    CANCELLED = "CANCELLED"


class Order(BaseModel):
    """One unit of a menu item ordered by a table."""

    model_config = ConfigDict(frozen=True)

    id: str
    table_id: int = Field(gt=0)
    menu_id: int
    created_at: int
    processing_time: int = Field(gt=0)
    status: OrderStatus = OrderStatus.PROCESSING


class Menu(BaseModel):
    """Catalog entry a table can order."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


_id_lock = threading.Lock()
_last_ms = 0
_seq = 0


def new_order_id() -> str:
    """Return a fresh UUIDv7 string.

    The leading 48 bits carry the millisecond timestamp and the next 12 bits a
    per-process sequence, so ids created later sort after earlier ones as
    plain strings, even within the same millisecond.
    """

    global _last_ms, _seq
    with _id_lock:
        ms = time.time_ns() // 1_000_000
        if ms > _last_ms:
            _last_ms, _seq = ms, 0
        else:
            _seq += 1
            if _seq > 0xFFF:
                _last_ms, _seq = _last_ms + 1, 0
        ms, seq = _last_ms, _seq
    value = (ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76
    value |= seq << 64
    value |= 0b10 << 62
    value |= int.from_bytes(os.urandom(8), "big") & ((1 << 62) - 1)
    return str(uuid.UUID(int=value))
