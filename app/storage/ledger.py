"""Append-only in-memory transaction ledger.

Transactions are frozen models, so once appended an entry can never
change. A different disposition for the same transfer is recorded as a
new, separate transaction. All data lives in memory and is lost on
restart.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, List

from app.models import Transaction, TransactionStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionLedger:
    """Chronological record of finalized transactions."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._transactions: List[Transaction] = []
        self._lock = threading.Lock()

    def _append(
        self,
        amount: float,
        recipient_id: str,
        status: TransactionStatus,
    ) -> Transaction:
        tx = Transaction(
            id=str(uuid.uuid4()),
            amount=amount,
            recipient_id=recipient_id,
            created_at=self._clock(),
            status=status,
        )
        with self._lock:
            self._transactions.append(tx)
        return tx

    def record_success(self, amount: float, recipient_id: str) -> Transaction:
        return self._append(amount, recipient_id, TransactionStatus.SUCCESS)

    def record_flagged(self, amount: float, recipient_id: str) -> Transaction:
        """Record a transaction that proceeded but stays tagged for audit."""
        return self._append(amount, recipient_id, TransactionStatus.FLAGGED)

    def record_blocked(self, amount: float, recipient_id: str) -> Transaction:
        return self._append(amount, recipient_id, TransactionStatus.BLOCKED)

    def list(self) -> List[Transaction]:
        """Return all transactions, most recent first."""
        with self._lock:
            return list(reversed(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)
