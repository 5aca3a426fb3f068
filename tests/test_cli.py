"""Tests for the data-converter command-line interface.

WHY: The CLI is what most users touch. Exit codes, stderr messages and
the no-overwrite rule for output files are part of its contract with
shell scripts.

HOW: main() is called with an explicit argv. Files live in tmp_path,
stdin is replaced with monkeypatch, and output is read with capsys.

RULES:
- All file I/O tests use tmp_path fixtures for isolation
- Error paths assert both the exit code and the stderr message
"""

import io
import json

import pytest
import yaml

from data_converter.cli import build_parser, main

from conftest import CATALOG_XML, PEOPLE_CSV


@pytest.fixture
def people_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text(PEOPLE_CSV, encoding="utf-8")
    return path


class TestConvert:
    def test_file_to_stdout(self, people_csv, capsys):
        main(["convert", str(people_csv), "--to", "json", "--json-indent", "0"])
        out = capsys.readouterr().out
        assert out == '[{"name":"Ada","age":"36"},{"name":"Alan","age":"41"}]\n'

    def test_format_names_are_case_insensitive(self, people_csv, capsys):
        main(["convert", str(people_csv), "--to", "YAML"])
        assert yaml.safe_load(capsys.readouterr().out)[0] == {"name": "Ada", "age": "36"}

    def test_output_format_from_extension(self, people_csv, tmp_path, capsys):
        target = tmp_path / "people.yaml"
        main(["convert", str(people_csv), "-o", str(target)])
        assert yaml.safe_load(target.read_text(encoding="utf-8")) == [
            {"name": "Ada", "age": "36"},
            {"name": "Alan", "age": "41"},
        ]
        assert "Saved: {}".format(target) in capsys.readouterr().err

    def test_existing_output_not_overwritten(self, people_csv, tmp_path):
        existing = tmp_path / "people.json"
        existing.write_text("keep me", encoding="utf-8")
        main(["convert", str(people_csv), "-o", str(existing)])
        assert existing.read_text(encoding="utf-8") == "keep me"
        written = tmp_path / "people-2.json"
        assert json.loads(written.read_text(encoding="utf-8"))[1]["name"] == "Alan"

    def test_stdin_with_explicit_formats(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"r": {"@id": "5", "#text": "hi"}}'))
        main(["convert", "--from", "json", "--to", "xml"])
        assert capsys.readouterr().out == '<r id="5">hi</r>\n'

    def test_xml_indent_option(self, tmp_path, capsys):
        source = tmp_path / "catalog.xml"
        source.write_text(CATALOG_XML, encoding="utf-8")
        main(["convert", str(source), "--to", "xml", "--xml-indent", "2"])
        out = capsys.readouterr().out
        assert out.startswith('<catalog version="2">\n  <book id="b1">\n')

    def test_yaml_indent_option(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": {"b": 1}}'))
        main(["convert", "--from", "json", "--to", "yaml", "--yaml-indent", "4"])
        assert capsys.readouterr().out == "a:\n    b: 1\n"

    def test_bare_indent_flag_rejected(self, people_csv):
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", str(people_csv), "--to", "json", "--indent", "2"])
        assert exc_info.value.code == 2

    def test_byte_order_mark_dropped(self, tmp_path, capsys):
        source = tmp_path / "bom.csv"
        source.write_bytes(b"\xef\xbb\xbfa\n1")
        main(["convert", str(source), "--to", "json", "--json-indent", "0"])
        assert capsys.readouterr().out == '[{"a":"1"}]\n'

    def test_blank_input_prints_nothing(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("  \n"))
        main(["convert", "--from", "json", "--to", "csv"])
        assert capsys.readouterr().out == ""

    def test_invalid_input_exits_1(self, tmp_path, capsys):
        source = tmp_path / "bad.json"
        source.write_text('{"a": ', encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", str(source), "--to", "yaml"])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error: Invalid JSON")

    def test_unrepresentable_shape_exits_1(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("[1, 2]"))
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", "--from", "json", "--to", "csv"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_input_format_exits_1(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("a,b\n1,2"))
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", "--to", "json"])
        assert exc_info.value.code == 1
        assert "Cannot determine the input format" in capsys.readouterr().err

    def test_unknown_output_format_exits_1(self, people_csv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", str(people_csv)])
        assert exc_info.value.code == 1
        assert "Cannot determine the output format" in capsys.readouterr().err

    def test_missing_file_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", str(tmp_path / "nope.json"), "--to", "csv"])
        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_format_choice_exits_2(self, people_csv):
        with pytest.raises(SystemExit) as exc_info:
            main(["convert", str(people_csv), "--to", "toml"])
        assert exc_info.value.code == 2


class TestFormat:
    def test_minify_json(self, tmp_path, capsys):
        source = tmp_path / "doc.json"
        source.write_text('{\n  "a": [1, 2]\n}\n', encoding="utf-8")
        main(["format", str(source), "--minify"])
        assert capsys.readouterr().out == '{"a":[1,2]}\n'

    def test_prettify_xml_from_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<r><a>1</a></r>"))
        main(["format", "--format", "xml", "--indent", "4"])
        assert capsys.readouterr().out == "<r>\n    <a>1</a>\n</r>\n"

    def test_csv_is_not_formattable(self, people_csv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["format", str(people_csv)])
        assert exc_info.value.code == 1
        assert "Only JSON and XML" in capsys.readouterr().err


def test_formats_lists_every_codec(capsys):
    main(["formats"])
    lines = capsys.readouterr().out.splitlines()
    assert [line.split()[0] for line in lines] == ["json", "xml", "csv", "yaml"]
    assert "application/json" in lines[0]
    assert ".yml" in lines[3]


def test_subcommand_required():
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args([])
    assert exc_info.value.code == 2
