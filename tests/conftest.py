"""Shared fixtures for the test suite."""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from app.main import app
from app.models import RecipientRiskEntry, RiskConfig
from app.screening.engine import RiskEngine
from app.storage.ledger import TransactionLedger
from app.storage.registry import InMemoryRegistry


SUSPICIOUS_RECIPIENTS = [
    RecipientRiskEntry(recipient_id="scammer@upi", report_count=15, max_safe_amount=1000),
    RecipientRiskEntry(recipient_id="unknown@suspicious", report_count=8, max_safe_amount=2000),
    RecipientRiskEntry(recipient_id="fake@payment", report_count=25, max_safe_amount=500),
]


class FakeClock:
    """Deterministic clock that advances one minute per call."""

    def __init__(self, start=datetime(2026, 2, 22, 10, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def config():
    return RiskConfig()


@pytest.fixture
def registry():
    return InMemoryRegistry(entries=SUSPICIOUS_RECIPIENTS[:])


@pytest.fixture
def ledger():
    return TransactionLedger(clock=FakeClock())


@pytest.fixture
def engine(registry, ledger, config):
    return RiskEngine(registry=registry, ledger=ledger, config=config)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def make_entry(recipient_id="scammer@upi", report_count=1, max_safe_amount=1000):
    return RecipientRiskEntry(
        recipient_id=recipient_id,
        report_count=report_count,
        max_safe_amount=max_safe_amount,
    )
