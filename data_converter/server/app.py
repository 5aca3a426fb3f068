"""FastAPI application exposing conversion and formatting over HTTP.

WHY: Front ends and other services need the conversion engine without
embedding Python. FastAPI provides request validation and automatic
OpenAPI documentation; the engine itself stays a pure function.

HOW: Four endpoints grouped by tags:
  POST /conversions  — convert text between formats
  POST /formatting   — prettify or minify JSON/XML
  GET  /formats      — list supported formats
  GET  /health       — liveness check
Endpoints are plain ``def`` functions, so FastAPI runs each conversion
in its threadpool and a large input never blocks the event loop.
ConversionError is mapped to 422 by a single exception handler.

RULES:
- Conversion failures → 422 with ConversionErrorResponse
- Request text longer than config.MAX_INPUT_CHARS → 413
- Any other exception → 500 ErrorResponse, logged with logger.exception
- No state is kept between requests
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from data_converter import __version__, config
from data_converter.core.converter import convert, get_codec
from data_converter.core.errors import ConversionError
from data_converter.core.pretty import minify_json, minify_xml, prettify_json, prettify_xml
from data_converter.formats import CODECS
from data_converter.server.models import (
    ConversionErrorResponse,
    ConversionRequest,
    ConversionResponse,
    ErrorResponse,
    FormatInfo,
    FormattableFormat,
    FormattingMode,
    FormattingRequest,
    FormattingResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Data Converter API",
    description=(
        "Convert structured data between JSON, XML, CSV and YAML through a "
        "single canonical value model, and prettify or minify JSON and XML."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_size(text: str) -> None:
    """Raise HTTPException(413) if the text exceeds the configured limit."""
    limit = config.MAX_INPUT_CHARS
    if limit and len(text) > limit:
        logger.info("Rejected request: %d chars exceeds limit of %d", len(text), limit)
        raise HTTPException(
            status_code=413,
            detail="Input too large ({} chars, max {}).".format(len(text), limit),
        )


@app.exception_handler(ConversionError)
async def conversion_error_handler(request: Request, exc: ConversionError) -> JSONResponse:
    logger.info("Conversion failed on %s: %s", request.url.path, exc)
    body = ConversionErrorResponse(
        detail=str(exc),
        kind=exc.kind.value,
        format=exc.format,
    )
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s", request.url.path)
    body = ErrorResponse(detail="Internal server error.")
    return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------------------------------------------------------
# Endpoints: Conversions
# ---------------------------------------------------------------------------


@app.post(
    "/conversions",
    response_model=ConversionResponse,
    tags=["conversions"],
    summary="Convert a document between formats",
    description=(
        "Parse the input text in from_format and serialize it as to_format. "
        "The whole conversion fails on the first error; no partial output "
        "is returned."
    ),
    responses={
        413: {"model": ErrorResponse, "description": "Input text too large"},
        422: {"model": ConversionErrorResponse, "description": "Input could not be converted"},
    },
)
def create_conversion(request: ConversionRequest) -> ConversionResponse:
    _check_size(request.text)
    options = request.options.to_codec_options() if request.options else None
    output = convert(request.text, request.from_format, request.to_format, options)
    return ConversionResponse(
        output=output,
        from_format=request.from_format,
        to_format=request.to_format,
        media_type=get_codec(request.to_format).media_type,
    )


# ---------------------------------------------------------------------------
# Endpoints: Formatting
# ---------------------------------------------------------------------------


@app.post(
    "/formatting",
    response_model=FormattingResponse,
    tags=["formatting"],
    summary="Prettify or minify a JSON or XML document",
    responses={
        413: {"model": ErrorResponse, "description": "Input text too large"},
        422: {"model": ConversionErrorResponse, "description": "Document is not valid"},
    },
)
def create_formatting(request: FormattingRequest) -> FormattingResponse:
    _check_size(request.text)
    pretty = request.mode is FormattingMode.pretty
    if request.format is FormattableFormat.json:
        output = prettify_json(request.text, request.indent) if pretty else minify_json(request.text)
    else:
        output = prettify_xml(request.text, request.indent) if pretty else minify_xml(request.text)
    return FormattingResponse(output=output)


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List supported formats",
)
def list_formats() -> List[FormatInfo]:
    result = []
    for key, codec_cls in sorted(CODECS.items(), key=lambda item: item[0].value):
        codec = codec_cls()
        result.append(FormatInfo(
            key=key.value,
            name=codec.name,
            media_type=codec.media_type,
            extensions=list(codec.extensions),
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api() -> None:
    """Entry point for the data-converter-api console script."""
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
