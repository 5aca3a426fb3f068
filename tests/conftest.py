"""Shared test fixtures for the data_converter test suite.

WHY: Several test modules convert the same small documents between
formats. Centralizing them here keeps the expected values in one place
so a change to a mapping rule only needs one fixture update.

HOW: Plain module-level constants for the raw documents, plus pytest
fixtures returning the IR values those documents parse to.

RULES:
- Documents are minimal but cover each mapping rule once
- IR fixtures are built by hand, never by calling a codec
"""

from decimal import Decimal

import pytest

from data_converter.core.ir import Array, Bool, Null, Number, Object, String


# ---------------------------------------------------------------------------
# Raw documents
# ---------------------------------------------------------------------------

PEOPLE_CSV = "name,age\nAda,36\nAlan,41"

PEOPLE_JSON = """[
  {"name": "Ada", "age": 36},
  {"name": "Alan", "age": 41}
]"""

CATALOG_XML = (
    '<catalog version="2">'
    "<book id=\"b1\"><title>Dune</title><price>9.99</price></book>"
    "<book id=\"b2\"><title>Emma</title><price>4.50</price></book>"
    "</catalog>"
)

CONFIG_YAML = """\
service: api
replicas: 3
debug: false
owner: null
ports:
- 80
- 443
"""


# ---------------------------------------------------------------------------
# IR fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def people_csv_ir():
    """IR of PEOPLE_CSV: every cell is a string."""
    return Array([
        Object({"name": String("Ada"), "age": String("36")}),
        Object({"name": String("Alan"), "age": String("41")}),
    ])


@pytest.fixture
def people_json_ir():
    """IR of PEOPLE_JSON: ages are numbers."""
    return Array([
        Object({"name": String("Ada"), "age": Number(36)}),
        Object({"name": String("Alan"), "age": Number(41)}),
    ])


@pytest.fixture
def catalog_ir():
    """IR of CATALOG_XML: repeated <book> promoted to an array."""
    return Object({
        "catalog": Object({
            "@version": String("2"),
            "book": Array([
                Object({
                    "@id": String("b1"),
                    "title": String("Dune"),
                    "price": String("9.99"),
                }),
                Object({
                    "@id": String("b2"),
                    "title": String("Emma"),
                    "price": String("4.50"),
                }),
            ]),
        }),
    })


@pytest.fixture
def config_yaml_ir():
    return Object({
        "service": String("api"),
        "replicas": Number(3),
        "debug": Bool(False),
        "owner": Null(),
        "ports": Array([Number(80), Number(443)]),
    })


@pytest.fixture
def mixed_ir():
    """A value using every IR variant, without XML-ambiguous shapes."""
    return Object({
        "id": Number(Decimal("12345678901234567890")),
        "ratio": Number(Decimal("0.25")),
        "name": String("café \"quoted\""),
        "active": Bool(True),
        "missing": Null(),
        "tags": Array([String("a"), String("b")]),
        "nested": Object({"depth": Number(2), "items": Array([])}),
    })
