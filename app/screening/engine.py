"""Core risk engine.

Ties the registry, evaluator, ledger and report intake together behind the
interface the presentation layer calls:
  - evaluate: decide on a proposed transfer (no side effects)
  - finalize: apply the disposition policy and append to the ledger
  - report: file a user report against a recipient
  - list_transactions: ledger contents, most recent first

Disposition policy:
  ALLOW                         -> SUCCESS
  FLAG_HIGH_AMOUNT              -> SUCCESS only if the user confirmed
  FLAG_SUSPICIOUS_WITHIN_LIMIT  -> SUCCESS only if the user confirmed
  FLAG_SUSPICIOUS_OVER_LIMIT    -> BLOCKED, confirmation is ignored
Confirmed overrides are recorded as FLAGGED instead of SUCCESS when
``record_overrides_as_flagged`` is set.
"""

import logging

from app.errors import UnconfirmedOverride
from app.models import (
    Decision,
    DecisionKind,
    RecipientRiskEntry,
    RiskConfig,
    Transaction,
)
from app.screening.evaluator import (
    Amount,
    evaluate,
    validate_amount,
    validate_recipient,
)
from app.screening.reports import ReportIntake
from app.storage.ledger import TransactionLedger
from app.storage.registry import SuspiciousRegistry

logger = logging.getLogger(__name__)


class RiskEngine:
    """Per-session owner of the registry and ledger."""

    def __init__(
        self,
        registry: SuspiciousRegistry,
        ledger: TransactionLedger,
        config: RiskConfig,
    ) -> None:
        self.registry = registry
        self.ledger = ledger
        self.config = config
        self.intake = ReportIntake(registry)

    def update_config(self, config: RiskConfig) -> None:
        """Swap thresholds and policies; later evaluations use them immediately."""
        self.config = config
        self.registry.configure(
            config.recipient_matching,
            config.fuzzy_match_threshold,
            config.default_max_safe_amount,
        )

    def evaluate(self, amount: Amount, recipient_id: str) -> Decision:
        decision = evaluate(amount, recipient_id, self.registry, self.config)
        logger.info(
            "Evaluated %s to %r: %s", amount, recipient_id, decision.kind.value
        )
        return decision

    def finalize(
        self,
        decision: Decision,
        amount: Amount,
        recipient_id: str,
        user_confirmed: bool = False,
    ) -> Transaction:
        """Record the final disposition of an evaluated transfer.

        Raises:
            UnconfirmedOverride: the decision needs confirmation and the
                user has not given it. Nothing is recorded.
        """
        value = validate_amount(amount)
        recipient_id = validate_recipient(recipient_id)

        if decision.kind == DecisionKind.FLAG_SUSPICIOUS_OVER_LIMIT:
            tx = self.ledger.record_blocked(value, recipient_id)
            logger.warning(
                "Blocked %.2f to %r (max safe amount %.2f)",
                value, recipient_id, decision.entry.max_safe_amount,
            )
            return tx

        if decision.kind == DecisionKind.ALLOW:
            return self.ledger.record_success(value, recipient_id)

        if not user_confirmed:
            raise UnconfirmedOverride(
                f"{decision.kind.value} requires user confirmation to proceed"
            )

        logger.info(
            "User confirmed %s for %.2f to %r",
            decision.kind.value, value, recipient_id,
        )
        if self.config.record_overrides_as_flagged:
            return self.ledger.record_flagged(value, recipient_id)
        return self.ledger.record_success(value, recipient_id)

    def screen(
        self,
        amount: Amount,
        recipient_id: str,
        user_confirmed: bool = False,
    ) -> Transaction:
        """Evaluate and finalize in one step against current registry state."""
        decision = self.evaluate(amount, recipient_id)
        return self.finalize(decision, amount, recipient_id, user_confirmed)

    def report(self, recipient_id: str) -> RecipientRiskEntry:
        return self.intake.report(recipient_id)

    def list_transactions(self) -> list[Transaction]:
        return self.ledger.list()
