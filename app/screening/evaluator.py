"""Risk evaluation.

The decision is DETERMINISTIC and side-effect free: the same amount,
recipient and registry state always produce the same decision.
Rules run in order of precedence and the first one that fires wins:
  1. Suspicious recipient (dominates the amount check)
  2. High amount
  3. Otherwise ALLOW
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Union

from app.errors import InvalidAmount, InvalidRecipient
from app.models import Decision, DecisionKind, RiskConfig
from app.screening.rules.amount import check_amount
from app.screening.rules.suspicious_recipient import check_recipient
from app.storage.registry import SuspiciousRegistry

Amount = Union[int, float, Decimal, str]


def validate_amount(raw: Amount) -> float:
    """Coerce an amount to float, rejecting anything that is not finite and > 0.

    Numeric strings (as typed into a form) are accepted; booleans are not.
    """
    if isinstance(raw, bool):
        raise InvalidAmount(f"Amount must be a number, got {raw!r}")
    if isinstance(raw, str):
        try:
            amount = float(raw.strip())
        except ValueError:
            raise InvalidAmount(f"Amount must be a number, got {raw!r}") from None
    elif isinstance(raw, (int, float, Decimal)):
        # Huge ints overflow and signaling NaNs refuse conversion
        try:
            amount = float(raw)
        except (OverflowError, ValueError, InvalidOperation):
            raise InvalidAmount(
                f"Amount must be a finite number, got {raw!r}"
            ) from None
    else:
        raise InvalidAmount(f"Amount must be a number, got {type(raw).__name__}")

    if not math.isfinite(amount):
        raise InvalidAmount(f"Amount must be finite, got {raw!r}")
    if amount <= 0:
        raise InvalidAmount(f"Amount must be positive, got {raw!r}")
    return amount


def validate_recipient(recipient_id: str) -> str:
    """Reject missing or blank identifiers. The identifier is returned as-is."""
    if not isinstance(recipient_id, str) or not recipient_id.strip():
        raise InvalidRecipient("Recipient identifier must not be empty")
    return recipient_id


def evaluate(
    amount: Amount,
    recipient_id: str,
    registry: SuspiciousRegistry,
    config: RiskConfig,
) -> Decision:
    """Evaluate a proposed transfer and return exactly one decision.

    Raises:
        InvalidAmount: amount is non-numeric, non-finite or not positive.
        InvalidRecipient: recipient identifier is empty.
    """
    value = validate_amount(amount)
    recipient_id = validate_recipient(recipient_id)

    suspicious = check_recipient(value, recipient_id, registry)
    if suspicious is not None:
        return suspicious

    high_amount = check_amount(value, threshold=config.high_amount_threshold)
    if high_amount is not None:
        return high_amount

    return Decision(kind=DecisionKind.ALLOW)
