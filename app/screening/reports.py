"""Report intake for recipient identifiers.

Every report increments the identifier's tally, so reporting the same
identifier twice counts twice. ``ReportFlow`` models the confirmation
dialog a caller shows before a report is filed:

    IDLE -> PENDING_CONFIRMATION -> REPORTED | CANCELLED

Only ``confirm()`` reaches the registry, and it does so exactly once.
"""

import logging
from enum import Enum
from typing import Optional

from app.errors import InvalidReportTransition
from app.models import RecipientRiskEntry
from app.screening.evaluator import validate_recipient
from app.storage.registry import SuspiciousRegistry

logger = logging.getLogger(__name__)


class ReportIntake:
    """Files user reports against the suspicious registry."""

    def __init__(self, registry: SuspiciousRegistry) -> None:
        self.registry = registry

    def report(self, recipient_id: str) -> RecipientRiskEntry:
        recipient_id = validate_recipient(recipient_id)
        entry = self.registry.report_and_upsert(recipient_id)
        logger.warning(
            "Recipient %r reported (total reports: %d, max safe amount: %.2f)",
            entry.recipient_id, entry.report_count, entry.max_safe_amount,
        )
        return entry


class ReportState(str, Enum):
    IDLE = "IDLE"
    PENDING_CONFIRMATION = "PENDING_CONFIRMATION"
    REPORTED = "REPORTED"
    CANCELLED = "CANCELLED"


class ReportFlow:
    """One report confirmation dialog, owned by the caller."""

    def __init__(self, intake: ReportIntake) -> None:
        self.intake = intake
        self.state = ReportState.IDLE
        self.recipient_id: Optional[str] = None
        self.result: Optional[RecipientRiskEntry] = None

    def _require(self, expected: ReportState, action: str) -> None:
        if self.state != expected:
            raise InvalidReportTransition(
                f"Cannot {action} a report in state {self.state.value}"
            )

    def start(self, recipient_id: str) -> None:
        self._require(ReportState.IDLE, "start")
        self.recipient_id = validate_recipient(recipient_id)
        self.state = ReportState.PENDING_CONFIRMATION

    def confirm(self) -> RecipientRiskEntry:
        self._require(ReportState.PENDING_CONFIRMATION, "confirm")
        self.result = self.intake.report(self.recipient_id)
        self.state = ReportState.REPORTED
        return self.result

    def cancel(self) -> None:
        self._require(ReportState.PENDING_CONFIRMATION, "cancel")
        self.state = ReportState.CANCELLED

    def reset(self) -> None:
        """Return a finished flow to IDLE so it can be reused."""
        if self.state not in (ReportState.REPORTED, ReportState.CANCELLED):
            raise InvalidReportTransition(
                f"Cannot reset a report in state {self.state.value}"
            )
        self.state = ReportState.IDLE
        self.recipient_id = None
        self.result = None
