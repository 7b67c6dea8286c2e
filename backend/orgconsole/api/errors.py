"""Render console errors as the ``{success: false, message}`` envelope."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from orgconsole.exceptions import ConsoleError

logger = logging.getLogger(__name__)


def failure_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


async def console_error_handler(request: Request, exc: ConsoleError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return failure_response(exc.status_code, exc.message)
