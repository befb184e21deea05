"""Suspicious recipient rule.

Checks the recipient identifier against the suspicious registry. A listed
recipient always produces a suspicious decision, whatever the amount:
  - amount <= the entry's max safe amount -> proceed only after the user
    verifies the recipient
  - amount above it -> blocked, no override
"""

from typing import Optional

from app.models import Decision, DecisionKind
from app.storage.registry import SuspiciousRegistry


def check_recipient(
    amount: float,
    recipient_id: str,
    registry: SuspiciousRegistry,
) -> Optional[Decision]:
    """Return a FLAG_SUSPICIOUS_* decision if the recipient is listed."""
    entry = registry.lookup(recipient_id)
    if entry is None:
        return None

    reasons = [
        f"Recipient '{entry.recipient_id}' has been reported "
        f"{entry.report_count} times",
        f"Maximum safe transaction limit: {entry.max_safe_amount:,.2f}",
    ]

    if amount <= entry.max_safe_amount:
        reasons.append(
            "Amount is within limit, but verify the recipient carefully "
            "before proceeding"
        )
        kind = DecisionKind.FLAG_SUSPICIOUS_WITHIN_LIMIT
    else:
        reasons.append(
            "Amount exceeds safe limit for this recipient; "
            "transaction cannot proceed"
        )
        kind = DecisionKind.FLAG_SUSPICIOUS_OVER_LIMIT

    return Decision(kind=kind, entry=entry, reasons=reasons)
