"""Format codec registry — pluggable format hub.

WHY: The orchestrator, CLI and HTTP API need a single lookup to find the
codec for a format. A central dict makes adding a format a one-line
change here.

HOW: CODECS maps DataFormat members to codec *classes* (not instances).
Callers instantiate with their options:
``codec = CODECS[DataFormat.CSV](options)``.

RULES:
- Keys are DataFormat members; look plain names up with
  core.converter.resolve_format first
- Values are BaseCodec subclasses (not instances)
- Every codec listed here must be importable without side effects
"""

from __future__ import annotations

from typing import Dict, Type

from data_converter.formats.base import BaseCodec, CodecOptions, DataFormat
from data_converter.formats.csv_codec import CSVCodec
from data_converter.formats.json_codec import JSONCodec
from data_converter.formats.xml_codec import XMLCodec
from data_converter.formats.yaml_codec import YAMLCodec


CODECS: Dict[DataFormat, Type[BaseCodec]] = {
    DataFormat.JSON: JSONCodec,
    DataFormat.XML: XMLCodec,
    DataFormat.CSV: CSVCodec,
    DataFormat.YAML: YAMLCodec,
}

__all__ = ["CODECS", "CodecOptions", "DataFormat"]
