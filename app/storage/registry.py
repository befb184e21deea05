"""Suspicious recipient registry.

The evaluator and report intake only talk to the ``SuspiciousRegistry``
protocol, so the backing store can be swapped (an in-memory dict for tests
and demos, an external service in production).

Recipient matching is configurable:
  - exact: identifiers must match character for character
  - normalized: case-folded and whitespace-stripped before comparison
  - fuzzy: normalized match first, then the closest listed identifier
    whose thefuzz similarity reaches the threshold (catches lookalikes
    such as "scamer@upi" for "scammer@upi")

Reports never fuzzy-match: reporting a lookalike creates its own entry
instead of inflating the tally of a different identifier.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from thefuzz import fuzz

from app.models import RecipientRiskEntry

logger = logging.getLogger(__name__)


class SuspiciousRegistry(Protocol):
    """Port for looking up and reporting risky recipient identifiers."""

    def lookup(self, recipient_id: str) -> Optional[RecipientRiskEntry]:
        ...

    def report_and_upsert(self, recipient_id: str) -> RecipientRiskEntry:
        ...

    def entries(self) -> List[RecipientRiskEntry]:
        ...

    def configure(
        self,
        matching: str,
        fuzzy_threshold: int,
        default_max_safe_amount: float,
    ) -> None:
        ...


def _normalize_key(recipient_id: str) -> str:
    """Normalize an identifier to a consistent dict key (lowercase, stripped)."""
    return recipient_id.strip().lower()


class InMemoryRegistry:
    """Registry backed by a dict; reads and reports share one lock."""

    def __init__(
        self,
        entries: Optional[List[RecipientRiskEntry]] = None,
        default_max_safe_amount: float = 0,
        matching: str = "exact",
        fuzzy_threshold: int = 90,
    ) -> None:
        self._entries: Dict[str, RecipientRiskEntry] = {}
        self._lock = threading.Lock()
        self.configure(matching, fuzzy_threshold, default_max_safe_amount)
        for entry in entries or []:
            self._entries[entry.recipient_id] = entry

    def configure(
        self,
        matching: str,
        fuzzy_threshold: int,
        default_max_safe_amount: float,
    ) -> None:
        if matching not in ("exact", "normalized", "fuzzy"):
            raise ValueError(f"Unknown recipient matching mode: {matching!r}")
        self.matching = matching
        self.fuzzy_threshold = fuzzy_threshold
        self.default_max_safe_amount = default_max_safe_amount

    def _find_key(self, recipient_id: str, allow_fuzzy: bool) -> Optional[str]:
        """Return the stored key that ``recipient_id`` resolves to, if any."""
        if recipient_id in self._entries:
            return recipient_id
        if self.matching == "exact":
            return None

        wanted = _normalize_key(recipient_id)
        for key in self._entries:
            if _normalize_key(key) == wanted:
                return key

        if self.matching != "fuzzy" or not allow_fuzzy:
            return None

        best_key = None
        best_score = -1
        for key in self._entries:
            score = fuzz.ratio(wanted, _normalize_key(key))
            if score > best_score:
                best_key, best_score = key, score
        if best_key is not None and best_score >= self.fuzzy_threshold:
            logger.debug(
                "Fuzzy matched %r to listed %r (similarity: %d%%)",
                recipient_id, best_key, best_score,
            )
            return best_key
        return None

    def lookup(self, recipient_id: str) -> Optional[RecipientRiskEntry]:
        with self._lock:
            key = self._find_key(recipient_id, allow_fuzzy=True)
            return self._entries[key] if key is not None else None

    def report_and_upsert(self, recipient_id: str) -> RecipientRiskEntry:
        """Increment the report tally for an identifier, listing it if new."""
        with self._lock:
            key = self._find_key(recipient_id, allow_fuzzy=False)
            if key is None:
                entry = RecipientRiskEntry(
                    recipient_id=recipient_id,
                    report_count=1,
                    max_safe_amount=self.default_max_safe_amount,
                )
                self._entries[recipient_id] = entry
                return entry

            current = self._entries[key]
            entry = current.model_copy(
                update={"report_count": current.report_count + 1}
            )
            self._entries[key] = entry
            return entry

    def entries(self) -> List[RecipientRiskEntry]:
        with self._lock:
            return list(self._entries.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def load_registry(
    path: Union[str, Path],
    default_max_safe_amount: float = 0,
    matching: str = "exact",
    fuzzy_threshold: int = 90,
) -> InMemoryRegistry:
    """Seed an in-memory registry from a JSON list of entries."""
    with open(path, "r") as f:
        raw = json.load(f)
    entries = [RecipientRiskEntry(**item) for item in raw]
    logger.info("Loaded %d suspicious recipients from %s", len(entries), path)
    return InMemoryRegistry(
        entries=entries,
        default_max_safe_amount=default_max_safe_amount,
        matching=matching,
        fuzzy_threshold=fuzzy_threshold,
    )
