"""High amount rule.

Flags transfers above a fixed threshold (10,000 currency units by
default) so the user has to confirm an unusually large payment before it
goes through. Only consulted when the recipient is not in the registry.
"""

from typing import Optional

from app.models import Decision, DecisionKind


def check_amount(
    amount: float,
    threshold: float = 10000,
) -> Optional[Decision]:
    """Return a FLAG_HIGH_AMOUNT decision if the amount exceeds the threshold.

    The threshold itself is not flagged: only amounts strictly above it are.
    """
    if amount > threshold:
        return Decision(
            kind=DecisionKind.FLAG_HIGH_AMOUNT,
            reasons=[
                f"Transaction amount {amount:,.2f} exceeds "
                f"threshold of {threshold:,.2f}"
            ],
        )

    return None
