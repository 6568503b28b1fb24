import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse

from .custom import MissingCallerPhoneError

logger = logging.getLogger(__name__)


async def missing_phone_error_handler(
    request: Request, exc: MissingCallerPhoneError
) -> PlainTextResponse:
    log = getattr(request.app.state, "log", logger)
    log.warning("Validation error: %s", exc.message)
    return PlainTextResponse(exc.message, status_code=400)
