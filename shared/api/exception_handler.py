"""DRF exception handler that renders exchange domain errors."""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.exceptions import ExchangeError

logger = logging.getLogger(__name__)


def exchange_exception_handler(exc, context):  # type: ignore
    """Map ExchangeError subclasses to JSON responses, defer the rest to DRF."""

    if isinstance(exc, ExchangeError):
        view = context.get("view")
        logger.warning(
            f"{exc.code} in {view.__class__.__name__ if view else 'unknown view'}: "
            f"{exc.message} {exc.context}"
        )
        return Response(exc.to_dict(), status=exc.http_status)

    return exception_handler(exc, context)
