import json
import logging

import pytest

from pdfprintln.data_handler import (
    load_layout_config,
    load_table_csv,
    load_text_lines,
    parse_weights,
)


class TestLoadTextLines:
    def test_keeps_blank_lines_and_strips_bom(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("\ufefffirst\n\nthird\n", encoding="utf-8")
        assert load_text_lines(path) == ["first", "", "third"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="1001"):
            load_text_lines(tmp_path / "none.txt")


class TestLoadTableCsv:
    def test_header_and_rows(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("\ufeffName,Note\nFoo,Bar\n\nBaz,\"a, b\"\n", encoding="utf-8")
        header, rows = load_table_csv(path)
        assert header == ["Name", "Note"]
        assert rows == [["Foo", "Bar"], ["Baz", "a, b"]]

    def test_without_header(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("1,2\n3,4\n", encoding="utf-8")
        header, rows = load_table_csv(path, has_header=False)
        assert header is None
        assert rows == [["1", "2"], ["3", "4"]]


class TestParseWeights:
    def test_default_is_equal_width(self):
        assert parse_weights(None, 3) == [1.0, 1.0, 1.0]
        assert parse_weights("  ", 2) == [1.0, 1.0]

    def test_parses_comma_separated(self):
        assert parse_weights("30, 70", 2) == [30.0, 70.0]

    @pytest.mark.parametrize("raw, count", [("30,70", 3), ("a,b", 2), ("-1,2", 2), ("0,0", 2), ("1", 0)])
    def test_invalid(self, raw, count):
        with pytest.raises(ValueError, match="4002"):
            parse_weights(raw, count)


class TestLoadLayoutConfig:
    def test_reads_known_keys_and_warns_on_unknown(self, tmp_path, caplog):
        path = tmp_path / "layout.json"
        path.write_text(
            json.dumps({"page_size": "A4", "font_size": 10, "color": "red", "line_spacing": None}),
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING):
            config = load_layout_config(path)
        assert config == {"page_size": "A4", "font_size": 10}
        assert "color" in caplog.text

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="4001"):
            load_layout_config(tmp_path / "missing.json")

    def test_missing_default_file_is_empty(self, tmp_path, monkeypatch):
        import pdfprintln.data_handler as dh

        monkeypatch.setattr(dh, "PATH_LAYOUT_JSON", tmp_path / "layout.json")
        assert load_layout_config() == {}

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
    def test_malformed_config(self, tmp_path, content):
        path = tmp_path / "layout.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(RuntimeError, match="4001"):
            load_layout_config(path)
