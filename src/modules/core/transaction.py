"""Scoped transaction helper.

``transaction_scope`` wraps ``django.db.transaction.atomic``: the block
commits when it exits normally and rolls back on *any* exception,
including early exits from domain errors and interruptions such as
``KeyboardInterrupt``.  Database failures are re-raised as
``StorageError`` once the rollback has happened; domain errors pass
through unchanged.

``storage_guard`` applies the same mapping to reads that need no
transaction.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import structlog
from django.db import DatabaseError, transaction

from modules.core.exceptions import StorageError

logger = structlog.get_logger(__name__)


@contextmanager
def transaction_scope(name: str, using: str | None = None) -> Iterator[None]:
    """Run the enclosed block as one all-or-nothing unit of work."""
    try:
        with transaction.atomic(using=using):
            yield
    except DatabaseError as exc:
        logger.error("transaction.storage_error", scope=name, error=str(exc))
        raise StorageError(f"Storage failure during {name}.") from exc


@contextmanager
def storage_guard(name: str) -> Iterator[None]:
    """Re-raise database failures inside the block as ``StorageError``."""
    try:
        yield
    except DatabaseError as exc:
        logger.error("storage.read_error", scope=name, error=str(exc))
        raise StorageError(f"Storage failure during {name}.") from exc


def in_transaction(using: str | None = None) -> bool:
    """Return ``True`` when called inside an atomic block."""
    return transaction.get_connection(using).in_atomic_block
