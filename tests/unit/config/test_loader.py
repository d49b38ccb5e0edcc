"""Tests for configuration source readers."""

import io
import json

import pytest

from stdsched.config.loader import (
    ConfigurationFormatError,
    ConfigurationLoader,
    detect_format,
    flatten,
    parse_content,
    parse_properties,
)


class TestPropertiesParsing:
    """Test .properties content parsing."""

    def test_separators(self):
        text = "a=1\nb: 2\nc 3\nd   =   4\ne:=5\n"
        assert parse_properties(text) == {"a": "1", "b": "2", "c": "3", "d": "4", "e": "=5"}

    def test_comments_and_blank_lines_are_ignored(self):
        text = "# comment\n! also a comment\n\n   \nkey=value\n"
        assert parse_properties(text) == {"key": "value"}

    def test_line_continuation(self):
        text = "list=one, \\\n    two, \\\n    three\nnext=x\n"
        assert parse_properties(text) == {"list": "one, two, three", "next": "x"}

    def test_escaped_backslash_does_not_continue(self):
        text = "path=C:\\\\dir\\\\\nother=1\n"
        assert parse_properties(text) == {"path": "C:\\dir\\", "other": "1"}

    def test_escape_sequences(self):
        text = "tab=a\\tb\nunicode=\\u00e9t\\u00e9\nkey\\=with\\:seps=v\n"
        result = parse_properties(text)
        assert result["tab"] == "a\tb"
        assert result["unicode"] == "\u00e9t\u00e9"
        assert result["key=with:seps"] == "v"

    def test_key_without_value(self):
        assert parse_properties("lonely\n") == {"lonely": ""}

    def test_later_duplicate_wins(self):
        assert parse_properties("a=1\na=2\n") == {"a": "2"}

    def test_malformed_unicode_escape(self):
        with pytest.raises(ConfigurationFormatError):
            parse_properties("bad=\\u12\n")


class TestStructuredFormats:
    """Test JSON and YAML flattening."""

    def test_detect_format(self):
        assert detect_format("conf/stdsched.properties") == "properties"
        assert detect_format("stdsched.JSON") == "json"
        assert detect_format("stdsched.yml") == "yaml"
        assert detect_format("stdsched.yaml") == "yaml"
        assert detect_format("stdsched.conf") == "properties"
        assert detect_format(None) == "properties"

    def test_flatten_nested_values(self):
        data = {
            "stdsched": {
                "scheduler": {"instanceName": "Nested", "daemon": True},
                "threadPool": {"threadCount": 4},
                "plugins": ["a", "b"],
                "empty": None,
            }
        }
        assert flatten(data) == {
            "stdsched.scheduler.instanceName": "Nested",
            "stdsched.scheduler.daemon": "true",
            "stdsched.threadPool.threadCount": "4",
            "stdsched.plugins": "a,b",
            "stdsched.empty": "",
        }

    def test_parse_json(self):
        text = json.dumps({"stdsched": {"scheduler": {"instanceName": "FromJson"}}})
        assert parse_content(text, "json") == {"stdsched.scheduler.instanceName": "FromJson"}

    def test_parse_yaml(self):
        text = "stdsched:\n  scheduler:\n    instanceName: FromYaml\n    interruptJobsOnShutdown: false\n"
        assert parse_content(text, "yaml") == {
            "stdsched.scheduler.instanceName": "FromYaml",
            "stdsched.scheduler.interruptJobsOnShutdown": "false",
        }

    def test_empty_yaml_is_empty_mapping(self):
        assert parse_content("", "yaml") == {}

    def test_invalid_json(self):
        with pytest.raises(ConfigurationFormatError):
            parse_content("{not json", "json")

    def test_non_mapping_top_level(self):
        with pytest.raises(ConfigurationFormatError, match="must be a mapping"):
            parse_content("- a\n- b\n", "yaml")


class TestConfigurationLoader:
    """Test file and stream loading."""

    def test_load_file_by_extension(self, tmp_path):
        path = tmp_path / "sched.yaml"
        path.write_text("stdsched:\n  scheduler:\n    instanceName: FileYaml\n", encoding="utf-8")

        assert ConfigurationLoader.load_file(path) == {"stdsched.scheduler.instanceName": "FileYaml"}

    def test_load_binary_stream(self):
        stream = io.BytesIO("name=\u00fcber\n".encode("utf-8"))
        assert ConfigurationLoader.load_stream(stream) == {"name": "\u00fcber"}
        assert not stream.closed

    def test_load_text_stream_with_explicit_format(self):
        stream = io.StringIO('{"a": {"b": 1}}')
        assert ConfigurationLoader.load_stream(stream, "json") == {"a.b": "1"}

    def test_undecodable_stream(self):
        with pytest.raises(UnicodeDecodeError):
            ConfigurationLoader.load_stream(io.BytesIO(b"\xff\xfe\xfa=1"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            ConfigurationLoader.load_file(tmp_path / "absent.properties")
