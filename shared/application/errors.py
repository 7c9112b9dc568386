"""Translation of exceptions into the payload handed to the routing layer."""

from __future__ import annotations

import logging
from typing import Any, Dict

from django.conf import settings

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)

SERVER_ERROR_KIND = "server_error"
SERVER_ERROR_MESSAGE = "Server Error"


def error_payload(exc: Exception, *, debug: bool | None = None) -> Dict[str, Any]:
    """
    Render an exception as ``{"kind": ..., "message": ...}``.

    Typed domain errors keep their kind and message. Anything else is an
    unclassified server error whose message is only exposed in debug mode.
    """
    if isinstance(exc, DomainError):
        return exc.to_dict()

    if debug is None:
        debug = settings.DEBUG

    logger.error("Unhandled error: %s", exc, exc_info=exc)
    message = (str(exc) or SERVER_ERROR_MESSAGE) if debug else SERVER_ERROR_MESSAGE
    return {"kind": SERVER_ERROR_KIND, "message": message}
