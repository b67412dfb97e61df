"""Exception handlers: malformed requests and unexpected failures in the API's error shape."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MALFORMED_BODY_MESSAGE = "The request body contains invalid JSON."
NOT_FOUND_MESSAGE = "The requested resource was not found."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Framework-level validation only covers path parameters and the raw JSON body
    (field rules run inside handlers), so a failure here is either a malformed
    id in the path (404) or a body that is not a JSON object (400).
    """
    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": NOT_FOUND_MESSAGE},
        )
    logger.info("Malformed request body on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": MALFORMED_BODY_MESSAGE},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
