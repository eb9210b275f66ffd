#!/usr/bin/env python3
"""
Tests for the jdisc command line.
"""

import io
import json
from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from jdisc import __version__, main


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps({"x": [1, 2], "y": {"z": None}, "name": "jdisc"}))
    return path


class TestDiscoverCommand:
    """Successful runs of jdisc discover."""

    def test_writes_schema_file(self, input_file, tmp_path):
        output = tmp_path / "schema.json"
        assert main(["discover", "--input", str(input_file), "--output", str(output)]) == 0

        assert json.loads(output.read_text()) == {
            "kind": "object",
            "properties": {
                "name": [{"kind": "string"}],
                "x": [{"kind": "array", "items": [{"kind": "number"}]}],
                "y": [{"kind": "object", "properties": {"z": [{"kind": "null"}]}}],
            },
        }

    def test_output_is_pretty_printed(self, input_file, tmp_path):
        output = tmp_path / "schema.json"
        main(["discover", "-i", str(input_file), "-o", str(output)])

        text = output.read_text()
        assert text.startswith('{\n  "kind": "object"')
        assert text.endswith("}\n")

    def test_custom_indent(self, input_file, tmp_path):
        output = tmp_path / "schema.json"
        main(["discover", "-i", str(input_file), "-o", str(output), "--indent", "4"])
        assert output.read_text().startswith('{\n    "kind"')

    def test_stdin_to_stdout(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO('[1, "a", 2, "b"]'))
        assert main(["discover", "-i", "-", "-o", "-"]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out == {"kind": "array", "items": [{"kind": "number"}, {"kind": "string"}]}

    def test_keep_duplicate_keys(self, tmp_path):
        source = tmp_path / "dupes.json"
        source.write_text('{"a": 1, "a": "x"}')
        output = tmp_path / "schema.json"

        main(["discover", "-i", str(source), "-o", str(output), "--keep-duplicate-keys"])
        schema = json.loads(output.read_text())
        assert schema["properties"]["a"] == [{"kind": "number"}, {"kind": "string"}]

    def test_verbose_reports_progress(self, input_file, tmp_path, capsys):
        output = tmp_path / "schema.json"
        main(["discover", "-i", str(input_file), "-o", str(output), "-v"])

        err = capsys.readouterr().err
        assert f"Reading {input_file}" in err
        assert "Schema written" in err

    def test_quiet_by_default(self, input_file, tmp_path, capsys):
        main(["discover", "-i", str(input_file), "-o", str(tmp_path / "schema.json")])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestErrors:
    """Failures exit non-zero with a message and no output."""

    def test_missing_input(self, tmp_path, capsys):
        output = tmp_path / "schema.json"
        status = main(["discover", "-i", str(tmp_path / "missing.json"), "-o", str(output)])

        assert status == 1
        assert "Error:" in capsys.readouterr().err
        assert not output.exists()

    def test_malformed_json(self, tmp_path, capsys):
        source = tmp_path / "bad.json"
        source.write_text('{"a": [1, 2')
        output = tmp_path / "schema.json"

        assert main(["discover", "-i", str(source), "-o", str(output)]) == 1
        assert "is not valid JSON" in capsys.readouterr().err
        assert not output.exists()

    def test_existing_output_untouched_on_failure(self, tmp_path):
        source = tmp_path / "bad.json"
        source.write_text("not json")
        output = tmp_path / "schema.json"
        output.write_text("previous")

        assert main(["discover", "-i", str(source), "-o", str(output)]) == 1
        assert output.read_text() == "previous"

    def test_non_utf8_input(self, tmp_path, capsys):
        source = tmp_path / "latin1.json"
        source.write_bytes('"café"'.encode("latin-1"))

        assert main(["discover", "-i", str(source), "-o", str(tmp_path / "out.json")]) == 1
        assert "not UTF-8" in capsys.readouterr().err

    def test_unwritable_output(self, input_file, tmp_path, capsys):
        output = tmp_path / "no-such-dir" / "schema.json"
        assert main(["discover", "-i", str(input_file), "-o", str(output)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_too_deeply_nested(self, tmp_path, capsys):
        depth = sys.getrecursionlimit()
        source = tmp_path / "deep.json"
        source.write_text("[" * depth + "]" * depth)
        output = tmp_path / "schema.json"

        assert main(["discover", "-i", str(source), "-o", str(output)]) == 1
        assert "nested too deeply" in capsys.readouterr().err
        assert not output.exists()

    def test_missing_arguments(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["discover", "--input", "x.json"])
        assert excinfo.value.code == 2

    def test_missing_command(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
