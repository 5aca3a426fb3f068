"""Core value model, error types and conversion orchestration.

WHY: The core package holds the parts every codec depends on — the IR
value types and the typed errors — plus the orchestrator that chains a
parser to a serializer.

HOW: ir.py defines the IR union and the native-Python bridges,
errors.py the error hierarchy, converter.py the parse/serialize/convert
entry points, pretty.py the JSON/XML prettify and minify helpers.

RULES:
- IR dataclasses are the contract between codecs — change with care
- Nothing in core performs I/O
"""
