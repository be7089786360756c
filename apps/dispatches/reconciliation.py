"""Reconciliation of reservations against independently recorded dispatches.

Dispatches are typed in by operations staff and often carry no link to the
reservation they fulfil. ``match_fulfillment`` decides whether a
reservation has been fulfilled using, in order:

1. an explicit reservation link on the dispatch (``exact``)
2. the same activity on the same date (``activity_date``)
3. the same normalised customer name on the same date (``name_date``)

Steps 2 and 3 are heuristics. Two customers with the same name on the same
day produce false positives; spelling drift produces false negatives.
``RECONCILIATION_STRICTNESS`` limits which steps are tried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

from django.conf import settings  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Dispatch

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.reservations.models import Reservation
    from apps.tenants.models import Tenant

logger = logging.getLogger(__name__)

STRICT = "strict"
STANDARD = "standard"
LENIENT = "lenient"

# Match steps tried at each strictness level
_STEPS = {
    STRICT: ("exact",),
    STANDARD: ("exact", "activity_date"),
    LENIENT: ("exact", "activity_date", "name_date"),
}


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    confidence: str = "none"
    dispatch_id: Optional[int] = None
    ambiguous: bool = False

    def to_dict(self) -> dict:
        return {
            "matched": self.matched,
            "confidence": self.confidence,
            "dispatchId": self.dispatch_id,
            "ambiguous": self.ambiguous,
        }


NO_MATCH = MatchResult(matched=False)


def normalize_name(name: Optional[str]) -> str:
    return " ".join((name or "").split()).casefold()


def _pick(candidates: list, confidence: str) -> Optional[MatchResult]:
    if not candidates:
        return None
    return MatchResult(
        matched=True,
        confidence=confidence,
        dispatch_id=candidates[0].pk,
        ambiguous=len(candidates) > 1,
    )


def match_fulfillment(
    reservation: "Reservation",
    dispatches: Iterable[Dispatch],
    strictness: Optional[str] = None,
) -> MatchResult:
    """
    Does ``reservation`` have a matching dispatch among ``dispatches``?

    Never raises. An unknown strictness falls back to ``lenient``.
    """

    strictness = strictness or settings.RECONCILIATION_STRICTNESS
    steps = _STEPS.get(strictness)
    if steps is None:
        logger.warning(f"Unknown reconciliation strictness {strictness!r}; using {LENIENT}")
        steps = _STEPS[LENIENT]

    dispatches = list(dispatches)

    linked = [d for d in dispatches if d.reservation_id is not None and d.reservation_id == reservation.pk]
    result = _pick(linked, "exact")
    if result is not None:
        return result

    if "activity_date" in steps:
        same_activity = [
            d
            for d in dispatches
            if d.activity_id is not None
            and d.activity_id == reservation.activity_id
            and d.dispatch_date == reservation.date
        ]
        result = _pick(same_activity, "activity_date")
        if result is not None:
            return result

    if "name_date" in steps:
        name = normalize_name(reservation.customer_name)
        if name:
            same_name = [
                d
                for d in dispatches
                if d.dispatch_date == reservation.date
                and normalize_name(d.customer_name) == name
            ]
            result = _pick(same_name, "name_date")
            if result is not None:
                return result

    return NO_MATCH


def reconcile_reservations(
    tenant: "Tenant",
    start: date,
    end: date,
    strictness: Optional[str] = None,
) -> list[tuple["Reservation", MatchResult]]:
    """Run ``match_fulfillment`` for every active reservation of ``tenant`` in range."""

    from apps.reservations.models import Reservation

    reservations = (
        Reservation.objects.filter(
            tenant=tenant,
            date__gte=start,
            date__lte=end,
            status__in=Reservation.ACTIVE_STATUSES,
        )
        .select_related("activity")
        .order_by("date", "time")
    )
    # Explicitly linked dispatches count even when logged outside the window
    dispatches = list(
        Dispatch.objects.filter(tenant=tenant).filter(
            Q(dispatch_date__gte=start, dispatch_date__lte=end) | Q(reservation__in=reservations)
        )
    )

    by_date: dict[date, list[Dispatch]] = {}
    for dispatch in dispatches:
        by_date.setdefault(dispatch.dispatch_date, []).append(dispatch)

    results = []
    for reservation in reservations:
        candidates = by_date.get(reservation.date, []) + [
            d for d in dispatches if d.reservation_id == reservation.pk and d.dispatch_date != reservation.date
        ]
        results.append((reservation, match_fulfillment(reservation, candidates, strictness)))

    matched = sum(1 for _, result in results if result.matched)
    logger.info(f"Reconciled {len(results)} reservations for tenant {tenant.pk} {start}..{end}: {matched} matched")
    return results
