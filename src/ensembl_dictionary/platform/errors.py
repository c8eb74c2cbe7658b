"""Typed error model with problem+json responses."""

from enum import StrEnum

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

from ensembl_dictionary.platform.types import JSONArray


class ErrorCode(StrEnum):
    """Application error codes."""

    # General
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # EBI Search
    EBI_SEARCH_ERROR = "EBI_SEARCH_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str | None = None
    instance: str | None = None
    code: ErrorCode
    errors: JSONArray | None = None


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: ErrorCode,
        title: str,
        status: int = 400,
        detail: str | None = None,
        errors: JSONArray | None = None,
    ) -> None:
        self.code = code
        self.title = title
        self.status = status
        self.detail = detail
        self.errors = errors
        super().__init__(title)


class TransportError(AppError):
    """EBI Search could not be reached or answered with a non-success status."""

    def __init__(
        self, detail: str, status: int = 502, upstream_status: int | None = None
    ) -> None:
        super().__init__(
            code=ErrorCode.EBI_SEARCH_ERROR,
            title="EBI Search service error",
            status=status,
            detail=detail,
        )
        self.upstream_status = upstream_status


class ResponseParseError(AppError):
    """EBI Search answered, but the body is not the JSON we expect."""

    def __init__(self, detail: str, errors: JSONArray | None = None) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RESPONSE,
            title="Malformed EBI Search response",
            status=502,
            detail=detail,
            errors=errors,
        )


class EmptyTermsError(ResponseParseError):
    """A record carries no gene name, name or synonym to use as its main term."""


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle AppError exceptions."""
    problem = ProblemDetail(
        type=f"https://www.ensembl.org/dictionary/errors/{exc.code.value}",
        title=exc.title,
        status=exc.status,
        detail=exc.detail,
        instance=str(request.url),
        code=exc.code,
        errors=exc.errors,
    )
    return JSONResponse(
        status_code=exc.status,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTPException, including router-level 404s."""
    code = ErrorCode.INTERNAL_ERROR
    if exc.status_code == 404:
        code = ErrorCode.NOT_FOUND
    elif exc.status_code == 400:
        code = ErrorCode.VALIDATION_ERROR

    problem = ProblemDetail(
        type=f"https://www.ensembl.org/dictionary/errors/{code.value}",
        title=str(exc.detail),
        status=exc.status_code,
        instance=str(request.url),
        code=code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request parameters FastAPI could not validate."""
    code = ErrorCode.VALIDATION_ERROR
    problem = ProblemDetail(
        type=f"https://www.ensembl.org/dictionary/errors/{code.value}",
        title="Invalid request parameters",
        status=422,
        instance=str(request.url),
        code=code,
        errors=jsonable_encoder(exc.errors()),
    )
    return JSONResponse(
        status_code=422,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )
