"""
HTTP mapping for the service-layer error kinds.

- RequestValidationError (body, path or query) -> 400
- NotFoundError for the addressed resource    -> 404
- ReferenceNotFoundError (bad id in a body)   -> 400
- ConflictError                               -> 409
- anything else                               -> 500 with a fixed message

Bodies use FastAPI's ``{"detail": ...}`` shape so clients handle these
the same way as HTTPException responses.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blog_api.exceptions import ConflictError, NotFoundError, ReferenceNotFoundError

logger = logging.getLogger(__name__)

GENERIC_ERROR_DETAIL = "Something went wrong"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: invalid request", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


async def reference_not_found_handler(request: Request, exc: ReferenceNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR_DETAIL})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    # Starlette picks the handler registered for the most specific class
    # in the exception's MRO, so the reference handler wins over NotFound.
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ReferenceNotFoundError, reference_not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
