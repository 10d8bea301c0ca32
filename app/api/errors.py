"""Translate domain and application exceptions into HTTP responses.

Validation problems map to 400, missing entities to 404, storage-level
duplicates to 409. Anything else is left to FastAPI's opaque 500.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.v1.schemas.common_schemas import ApiResponse
from app.application.exceptions import EntityNotFoundError, NullInputError, ValidationError
from app.domain.exceptions import DuplicatePositionError, InvalidCoordinateError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ApiResponse(success=False, message=message, errors=list(errors or [message]))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), exc.errors)


async def invalid_coordinate_handler(request: Request, exc: InvalidCoordinateError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def null_input_handler(request: Request, exc: NullInputError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def duplicate_position_handler(request: Request, exc: DuplicatePositionError) -> JSONResponse:
    logger.info(f"Duplicate submission for vehicle {exc.vehicle_id}: {exc}")
    return _error_response(status.HTTP_409_CONFLICT, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(InvalidCoordinateError, invalid_coordinate_handler)
    app.add_exception_handler(NullInputError, null_input_handler)
    app.add_exception_handler(EntityNotFoundError, entity_not_found_handler)
    app.add_exception_handler(DuplicatePositionError, duplicate_position_handler)
