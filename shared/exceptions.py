"""
Exchange Error Taxonomy

Domain services raise these exceptions; the API layer renders them
(see shared.api.exception_handler). Every error carries a machine-readable
code and a context dict with whatever the caller needs to render a precise
message (current status, available slots, ...).

Nothing here is retried automatically. Retrying is the caller's decision.
"""

from typing import Any, Dict, Optional


class ExchangeError(Exception):
    """Base class for all partner exchange errors"""

    code = "exchange_error"
    http_status = 400
    default_message = "İşlem gerçekleştirilemedi."

    def __init__(self, message: Optional[str] = None, **context: Any):
        self.message = message or self.default_message
        self.context: Dict[str, Any] = context
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "code": self.code,
            "context": self.context,
        }


class CapacityExceeded(ExchangeError):
    """Requested guests exceed the slot's available capacity at decision time."""

    code = "capacity_exceeded"
    http_status = 409
    default_message = "Seçilen seansta yeterli kontenjan yok."


class InvalidStateTransition(ExchangeError):
    """The current status does not permit the requested transition."""

    code = "invalid_state_transition"
    http_status = 409
    default_message = "Bu işlem mevcut durumda yapılamaz."


class UnauthorizedParty(ExchangeError):
    """The acting tenant is not allowed to perform this operation."""

    code = "unauthorized_party"
    http_status = 403
    default_message = "Bu işlem için yetkiniz yok."


class DeletionConflict(ExchangeError):
    """A deletion request is already pending or the row changed underneath us."""

    code = "deletion_conflict"
    http_status = 409
    default_message = "Bu işlem için zaten bekleyen bir silme talebi var."


class InvalidInput(ExchangeError):
    """Malformed input that passed serializer validation but violates a domain rule."""

    code = "invalid_input"
    http_status = 400
    default_message = "Geçersiz giriş."
