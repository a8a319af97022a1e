from __future__ import annotations

import json
from collections import UserDict
from datetime import date

import pytest

from lib_log_sumo.domain.serialization import SERIALIZATION_ERROR_LINE, rewrite_level, to_json_line


def test_compact_encoding_keeps_key_order() -> None:
    assert to_json_line({"level": 30, "msg": "log message"}) == '{"level":30,"msg":"log message"}'


def test_non_ascii_text_is_kept_verbatim() -> None:
    assert to_json_line({"msg": "grüße"}) == '{"msg":"grüße"}'


def test_lone_surrogates_are_escaped_to_valid_utf8() -> None:
    line = to_json_line({"msg": "file \udcff name", "note": "grüße"})

    assert line == '{"msg":"file \\udcff name","note":"gr\\u00fc\\u00dfe"}'
    assert json.loads(line.encode("utf-8")) == {"msg": "file \udcff name", "note": "grüße"}


def test_unserializable_values_fall_back_to_string_form() -> None:
    assert to_json_line(date(2025, 1, 2)) == '"2025-01-02"'


def test_raising_string_conversion_yields_error_line() -> None:
    class Hostile:
        def __str__(self) -> str:
            raise ValueError("nope")

    assert to_json_line(Hostile()) == SERIALIZATION_ERROR_LINE == '"error serializing log line"'


@pytest.mark.parametrize(
    "code, name",
    [(10, "TRACE"), (20, "DEBUG"), (30, "INFO"), (40, "WARN"), (50, "ERROR"), (60, "FATAL"), (30.0, "INFO")],
)
def test_rewrite_level_replaces_known_codes(code, name: str) -> None:
    record = {"level": code}

    rewrite_level(record)

    assert record["level"] == name


@pytest.mark.parametrize("record", [{"level": 35}, {"level": True}, {"level": "INFO"}, {"level": 30.5}, {"msg": "no level"}])
def test_rewrite_level_leaves_other_records_alone(record: dict) -> None:
    before = dict(record)

    rewrite_level(record)

    assert record == before


@pytest.mark.parametrize("record", ["text", 42, None, [30]])
def test_rewrite_level_ignores_non_mappings(record) -> None:
    rewrite_level(record)


def test_rewrite_level_survives_hostile_mappings() -> None:
    class Hostile(UserDict):
        def __setitem__(self, key, value) -> None:
            if key == "level" and "level" in self.data:
                raise RuntimeError("read only")
            super().__setitem__(key, value)

    record = Hostile(level=30)

    rewrite_level(record)

    assert record["level"] == 30
