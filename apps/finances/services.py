"""Settlement ledger services and the two-party deletion protocol.

Deletion states::

    null/rejected --request--> pending --approve--> approved (retired)
                                       --reject---> rejected

Only the counterparty of whoever requested the deletion can resolve it.
Every write is guarded by the row ``version`` so a stale decision fails
with DeletionConflict instead of overwriting the other party's.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.utils import timezone  # type: ignore

from shared.exceptions import DeletionConflict, InvalidInput, InvalidStateTransition, UnauthorizedParty

from .models import PartnerTransaction

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.exchange.models import ReservationRequest
    from apps.reservations.models import Reservation
    from apps.tenants.models import Tenant

logger = logging.getLogger(__name__)


def create_for_conversion(request: "ReservationRequest", reservation: "Reservation") -> tuple[PartnerTransaction, bool]:
    """Settlement entry for a converted request. At most one per request."""

    existing = PartnerTransaction.objects.filter(reservation_request=request).first()
    if existing is not None:
        return existing, False

    try:
        with transaction.atomic():
            txn = PartnerTransaction.objects.create(
                sender_tenant_id=request.origin_tenant_id,
                receiver_tenant_id=request.owner_tenant_id,
                reservation_request=request,
                reservation=reservation,
                activity_id=request.activity_id,
                guest_count=request.guests,
                unit_price=request.unit_price,
                currency=request.currency,
                total_price=request.unit_price * request.guests,
                payment_collection_type=request.payment_collection_type,
                amount_collected_by_sender=request.amount_collected_by_sender,
            )
    except IntegrityError:
        return PartnerTransaction.objects.get(reservation_request=request), False

    logger.info(
        f"PartnerTransaction {txn.pk} created for request {request.pk}: "
        f"{txn.sender_tenant_id} -> {txn.receiver_tenant_id} {txn.total_price} {txn.currency}"
    )
    return txn, True


def _load_for_party(transaction_id: int, by_tenant: "Tenant") -> PartnerTransaction:
    txn = PartnerTransaction.objects.filter(pk=transaction_id).first()
    if txn is None or not txn.is_party(by_tenant):
        raise UnauthorizedParty("Bu işlemin tarafı değilsiniz.", transaction_id=transaction_id)
    return txn


def _check_version(txn: PartnerTransaction, expected_version: Optional[int]) -> None:
    if expected_version is not None and expected_version != txn.version:
        raise DeletionConflict(
            "Kayıt siz görüntüledikten sonra değişti. Sayfayı yenileyip tekrar deneyin.",
            transaction_id=txn.pk,
            version=txn.version,
        )


def _apply(txn: PartnerTransaction, **changes) -> PartnerTransaction:  # type: ignore
    """Write ``changes`` only if nobody else touched the row since it was read."""

    updated = PartnerTransaction.objects.filter(pk=txn.pk, version=txn.version).update(
        version=F("version") + 1,
        updated_at=timezone.now(),
        **changes,
    )
    if not updated:
        txn.refresh_from_db()
        raise DeletionConflict(
            "Kayıt aynı anda başka bir işlemle güncellendi.",
            transaction_id=txn.pk,
            deletion_status=txn.deletion_status,
            version=txn.version,
        )
    txn.refresh_from_db()
    return txn


def _require_counterparty(txn: PartnerTransaction, by_tenant: "Tenant") -> None:
    if txn.deletion_status != PartnerTransaction.DeletionStatus.PENDING:
        raise InvalidStateTransition(
            "Bekleyen bir silme talebi yok.",
            transaction_id=txn.pk,
            deletion_status=txn.deletion_status,
        )
    if txn.deletion_requested_by_tenant_id == by_tenant.pk:
        raise UnauthorizedParty(
            "Kendi silme talebinizi onaylayamaz veya reddedemezsiniz.",
            transaction_id=txn.pk,
        )


def request_deletion(transaction_id: int, by_tenant: "Tenant", expected_version: Optional[int] = None) -> PartnerTransaction:
    txn = _load_for_party(transaction_id, by_tenant)
    _check_version(txn, expected_version)

    if txn.deletion_status == PartnerTransaction.DeletionStatus.PENDING:
        raise DeletionConflict(
            transaction_id=txn.pk,
            requested_by_tenant_id=txn.deletion_requested_by_tenant_id,
        )
    if txn.deletion_status == PartnerTransaction.DeletionStatus.APPROVED:
        raise InvalidStateTransition(
            "Bu işlem zaten silinmiş.",
            transaction_id=txn.pk,
            deletion_status=txn.deletion_status,
        )

    txn = _apply(
        txn,
        deletion_status=PartnerTransaction.DeletionStatus.PENDING,
        deletion_requested_by_tenant_id=by_tenant.pk,
        deletion_requested_at=timezone.now(),
        deletion_resolved_at=None,
    )
    logger.info(f"Deletion of PartnerTransaction {txn.pk} requested by tenant {by_tenant.pk}")
    return txn


def approve_deletion(transaction_id: int, by_tenant: "Tenant", expected_version: Optional[int] = None) -> PartnerTransaction:
    txn = _load_for_party(transaction_id, by_tenant)
    _check_version(txn, expected_version)
    _require_counterparty(txn, by_tenant)

    txn = _apply(
        txn,
        deletion_status=PartnerTransaction.DeletionStatus.APPROVED,
        status=PartnerTransaction.Status.RETIRED,
        deletion_resolved_at=timezone.now(),
    )
    logger.info(f"Deletion of PartnerTransaction {txn.pk} approved by tenant {by_tenant.pk}; retired")
    return txn


def reject_deletion(
    transaction_id: int,
    by_tenant: "Tenant",
    reason: Optional[str],
    expected_version: Optional[int] = None,
) -> PartnerTransaction:
    reason = (reason or "").strip()
    if not reason:
        raise InvalidInput("Red gerekçesi zorunludur.", transaction_id=transaction_id)

    txn = _load_for_party(transaction_id, by_tenant)
    _check_version(txn, expected_version)
    _require_counterparty(txn, by_tenant)

    txn = _apply(
        txn,
        deletion_status=PartnerTransaction.DeletionStatus.REJECTED,
        deletion_rejection_reason=reason,
        deletion_resolved_at=timezone.now(),
    )
    logger.info(f"Deletion of PartnerTransaction {txn.pk} rejected by tenant {by_tenant.pk}")
    return txn


def outstanding_amount(txn: PartnerTransaction) -> Decimal:
    return txn.outstanding_amount


@dataclass
class CounterpartySummary:
    tenant_id: int
    tenant_name: str
    currency: str
    receivable: Decimal = Decimal("0.00")
    payable: Decimal = Decimal("0.00")
    transaction_ids: list[int] = field(default_factory=list)

    @property
    def net(self) -> Decimal:
        return self.receivable - self.payable

    def to_dict(self) -> dict:
        return {
            "partnerTenantId": self.tenant_id,
            "partnerTenantName": self.tenant_name,
            "currency": self.currency,
            "receivable": str(self.receivable),
            "payable": str(self.payable),
            "net": str(self.net),
            "transactionCount": len(self.transaction_ids),
        }


def settlement_summary(tenant: "Tenant") -> list[CounterpartySummary]:
    """
    Per counterparty and currency: what partners owe ``tenant`` (as
    receiver) and what ``tenant`` owes them (as sender). Retired
    transactions are left out.
    """

    rows = (
        PartnerTransaction.objects.involving(tenant)
        .active()
        .select_related("sender_tenant", "receiver_tenant")
        .order_by("created_at")
    )
    summaries: dict[tuple[int, str], CounterpartySummary] = {}
    for txn in rows:
        if txn.receiver_tenant_id == tenant.pk:
            other = txn.sender_tenant
        else:
            other = txn.receiver_tenant
        key = (other.pk, txn.currency)
        summary = summaries.get(key)
        if summary is None:
            summary = summaries[key] = CounterpartySummary(other.pk, other.name, txn.currency)
        if txn.receiver_tenant_id == tenant.pk:
            summary.receivable += txn.outstanding_amount
        else:
            summary.payable += txn.outstanding_amount
        summary.transaction_ids.append(txn.pk)

    return sorted(summaries.values(), key=lambda s: (s.tenant_name, s.currency))


def group_by_deletion_status(queryset) -> dict[str, int]:  # type: ignore
    counts: dict[str, int] = defaultdict(int)
    for status in queryset.values_list("deletion_status", flat=True):
        counts[status or "none"] += 1
    return dict(counts)
