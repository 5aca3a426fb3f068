"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate the JSON Schema shown
in the /docs UI.

HOW: Each endpoint has its own request and response model. Format
fields reuse the engine's DataFormat enum so only registered formats
are accepted.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Format values match DataFormat exactly ("json", "xml", "csv", "yaml")
- Conversion failures use ConversionErrorResponse (detail + kind + format)
- Every other error uses ErrorResponse (detail only)
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from data_converter import config
from data_converter.formats.base import CodecOptions, DataFormat


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class FormattingMode(str, Enum):
    """Whether /formatting should indent or compact the document."""

    pretty = "pretty"
    minify = "minify"


class FormattableFormat(str, Enum):
    """Formats that /formatting accepts."""

    json = "json"
    xml = "xml"


class CSVQuoting(str, Enum):
    always = "always"
    minimal = "minimal"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ConversionOptionsModel(BaseModel):
    """Output-style options for a conversion.

    RULES:
    - Omitted fields fall back to the server's configured defaults
    - json_indent 0 → compact JSON; xml_indent null/0 → compact XML
    """

    json_indent: Optional[int] = Field(
        default=None, ge=0, le=16,
        description="JSON indent in spaces; 0 for compact output.",
    )
    yaml_indent: Optional[int] = Field(
        default=None, ge=2, le=9,
        description="YAML indent in spaces.",
    )
    csv_quoting: Optional[CSVQuoting] = Field(
        default=None,
        description="'always' quotes every CSV field, 'minimal' only those that need it.",
    )
    xml_indent: Optional[int] = Field(
        default=None, ge=0, le=16,
        description="Pretty-print XML output with this many spaces per level.",
    )

    def to_codec_options(self) -> CodecOptions:
        return CodecOptions(
            json_indent=self.json_indent if self.json_indent is not None else config.DEFAULT_JSON_INDENT,
            yaml_indent=self.yaml_indent if self.yaml_indent is not None else config.DEFAULT_YAML_INDENT,
            csv_quoting=self.csv_quoting.value if self.csv_quoting else config.DEFAULT_CSV_QUOTING,
            xml_indent=self.xml_indent if self.xml_indent is not None else config.DEFAULT_XML_INDENT,
        )


class ConversionRequest(BaseModel):
    """Body of POST /conversions."""

    text: str = Field(description="The input document.")
    from_format: DataFormat = Field(description="Format of the input document.")
    to_format: DataFormat = Field(description="Format to convert to.")
    options: Optional[ConversionOptionsModel] = Field(
        default=None,
        description="Output-style options. Defaults to the server configuration.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "text": "name,age\nAda,36\nAlan,41",
                "from_format": "csv",
                "to_format": "json",
            }
        ]
    }}


class FormattingRequest(BaseModel):
    """Body of POST /formatting."""

    text: str = Field(description="The JSON or XML document to reformat.")
    format: FormattableFormat = Field(description="Format of the document.")
    mode: FormattingMode = Field(
        default=FormattingMode.pretty,
        description="'pretty' to indent, 'minify' to remove insignificant whitespace.",
    )
    indent: int = Field(
        default=2, ge=0, le=16,
        description="Indent in spaces when mode is 'pretty'.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ConversionResponse(BaseModel):
    """Result of a successful conversion."""

    output: str = Field(description="The converted document.")
    from_format: DataFormat = Field(description="Format of the input document.")
    to_format: DataFormat = Field(description="Format of the output document.")
    media_type: str = Field(description="MIME type of the output document.")


class FormattingResponse(BaseModel):
    output: str = Field(description="The reformatted document.")


class FormatInfo(BaseModel):
    """Description of a supported format.

    WHY: Clients can query /formats to discover which formats are
    supported and how to label files produced from them.
    """

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    media_type: str = Field(description="MIME type of serialized output.")
    extensions: List[str] = Field(description="File extensions for this format.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class ConversionErrorResponse(BaseModel):
    """Error body returned when parsing or serializing fails."""

    detail: str = Field(description="Human-readable error description.")
    kind: str = Field(description="Error category, e.g. 'syntax' or 'malformed_xml'.")
    format: Optional[str] = Field(
        default=None,
        description="Format whose codec reported the error, if known.",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
