import io

import pytest

from layerconf.codec import text
from layerconf.errors import ParseError
from layerconf.section import Section


def _write(tier: dict[str, Section]) -> str:
    out = io.StringIO()
    text.write(tier, out)
    return out.getvalue()


def test_empty_section_header_is_dropped() -> None:
    source = "[guildA]\nfoo = bar\n\n[guildB]\nfoo = \n\n"
    tier = text.parse(io.StringIO(source))
    assert sorted(tier) == ["guildA", "guildB"]
    assert _write(tier) == "[guildA]\nfoo = bar\n\n\n"


def test_parse_splits_at_first_equals_and_trims() -> None:
    tier = text.parse(io.StringIO("[web]\n   url   =  http://host/?a=b&c=d  \n"))
    assert tier["web"]["url"] == "http://host/?a=b&c=d"


def test_parse_skips_lines_without_equals() -> None:
    tier = text.parse(io.StringIO("[web]\njust some words\nport = 80\n"))
    assert dict(tier["web"].items()) == {"port": "80"}


def test_parse_does_not_store_empty_values() -> None:
    tier = text.parse(io.StringIO("[web]\nport =\nhost =    \n"))
    assert len(tier["web"]) == 0


def test_repeated_header_selects_existing_section() -> None:
    tier = text.parse(io.StringIO("[a]\nx = 1\n[b]\ny = 2\n[a]\nz = 3\n"))
    assert dict(tier["a"].items()) == {"x": "1", "z": "3"}
    assert dict(tier["b"].items()) == {"y": "2"}


def test_keys_before_first_header_go_to_no_section() -> None:
    bucket = Section("")
    tier = text.parse(io.StringIO("top = level\n[a]\nx = 1\n"), no_section=bucket)
    assert bucket["top"] == "level"
    assert "top" not in tier["a"]
    assert list(tier) == ["a"]


def test_control_characters_and_crlf_are_trimmed() -> None:
    tier = text.parse(io.StringIO("\ufeff[a]\r\nkey = value\r\n"))
    assert tier["a"]["key"] == "value"


def test_empty_brackets_name_an_empty_section() -> None:
    tier = text.parse(io.StringIO("[]\nk = v\n"))
    assert tier[""]["k"] == "v"


def test_strict_parse_reports_line_number() -> None:
    with pytest.raises(ParseError) as info:
        text.parse(io.StringIO("[a]\nk = v\noops\n"), strict=True)
    assert info.value.line_number == 3
    assert info.value.line == "oops"


def test_write_orders_sections_and_keys() -> None:
    tier = {"zeta": Section("zeta"), "alpha": Section("alpha")}
    tier["zeta"]["b"] = "2"
    tier["zeta"]["a"] = "1"
    tier["alpha"]["k"] = "v"
    assert _write(tier) == "[alpha]\nk = v\n\n[zeta]\na = 1\nb = 2\n\n"


def test_write_skips_empty_values() -> None:
    section = Section("s")
    section["empty"] = ""
    section["full"] = "yes"
    assert _write({"s": section}) == "[s]\nfull = yes\n\n"


def test_write_nothing_for_empty_tier() -> None:
    assert _write({}) == ""


def test_written_text_parses_back() -> None:
    source = "[b]\nk = v\n\n[a]\nx = 1\ny = 2\n"
    tier = text.parse(io.StringIO(source))
    again = text.parse(io.StringIO(_write(tier)))
    assert {n: dict(s.items()) for n, s in again.items()} == {
        "a": {"x": "1", "y": "2"},
        "b": {"k": "v"},
    }


def test_unstorable_tokens_are_skipped() -> None:
    tier = text.parse(io.StringIO("[a]\n[b = 1\nc = 2\n"))
    assert dict(tier["a"].items()) == {"c": "2"}
    with pytest.raises(ParseError) as info:
        text.parse(io.StringIO("[a]\n[b = 1\n"), strict=True)
    assert info.value.line_number == 2
