"""Pydantic models for the payment risk engine."""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RecipientRiskEntry(BaseModel):
    """A recipient identifier known to be suspicious.

    Being listed in the registry is the suspicious flag itself.
    """
    model_config = ConfigDict(frozen=True)

    recipient_id: str
    report_count: int = Field(default=0, ge=0)
    max_safe_amount: float = Field(ge=0)


class TransactionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FLAGGED = "FLAGGED"
    BLOCKED = "BLOCKED"


class Transaction(BaseModel):
    """A finalized transaction as written to the ledger."""
    model_config = ConfigDict(frozen=True)

    id: str
    amount: float = Field(gt=0)
    recipient_id: str
    created_at: datetime
    status: TransactionStatus


class DecisionKind(str, Enum):
    ALLOW = "ALLOW"
    FLAG_HIGH_AMOUNT = "FLAG_HIGH_AMOUNT"
    FLAG_SUSPICIOUS_WITHIN_LIMIT = "FLAG_SUSPICIOUS_WITHIN_LIMIT"
    FLAG_SUSPICIOUS_OVER_LIMIT = "FLAG_SUSPICIOUS_OVER_LIMIT"


SUSPICIOUS_KINDS = frozenset({
    DecisionKind.FLAG_SUSPICIOUS_WITHIN_LIMIT,
    DecisionKind.FLAG_SUSPICIOUS_OVER_LIMIT,
})

# Decisions that may still proceed once the user explicitly confirms
CONFIRMABLE_KINDS = frozenset({
    DecisionKind.FLAG_HIGH_AMOUNT,
    DecisionKind.FLAG_SUSPICIOUS_WITHIN_LIMIT,
})


class Decision(BaseModel):
    """Outcome of evaluating one proposed transaction.

    Transient: recomputed on every evaluation and never stored.
    """
    model_config = ConfigDict(frozen=True)

    kind: DecisionKind
    entry: Optional[RecipientRiskEntry] = None
    reasons: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_entry(self) -> "Decision":
        if self.kind in SUSPICIOUS_KINDS and self.entry is None:
            raise ValueError(f"{self.kind.value} requires a registry entry")
        if self.kind not in SUSPICIOUS_KINDS and self.entry is not None:
            raise ValueError(f"{self.kind.value} must not carry a registry entry")
        return self

    @property
    def requires_confirmation(self) -> bool:
        return self.kind in CONFIRMABLE_KINDS

    @property
    def can_proceed(self) -> bool:
        return self.kind != DecisionKind.FLAG_SUSPICIOUS_OVER_LIMIT


class RiskConfig(BaseModel):
    """Tunable thresholds and policies for the engine."""
    high_amount_threshold: float = Field(default=10000, gt=0)
    # Limit given to identifiers reported for the first time; 0 blocks them
    default_max_safe_amount: float = Field(default=0, ge=0)
    recipient_matching: Literal["exact", "normalized", "fuzzy"] = "exact"
    fuzzy_match_threshold: int = Field(default=90, ge=0, le=100)
    record_overrides_as_flagged: bool = False


# --- HTTP payloads ---


class EvaluationRequest(BaseModel):
    """A proposed transfer submitted for evaluation."""
    amount: float
    recipient_id: str


class EvaluationResponse(BaseModel):
    decision: DecisionKind
    requires_confirmation: bool
    can_proceed: bool
    reasons: list[str]
    entry: Optional[RecipientRiskEntry] = None


class TransactionRequest(BaseModel):
    """A transfer the caller wants finalized."""
    amount: float
    recipient_id: str
    user_confirmed: bool = False


class ReportRequest(BaseModel):
    recipient_id: str
