import io

import pytest

from layerconf import Configuration, Destination, InvalidDestinationError
from layerconf.errors import FrozenSectionError, ParseError
from layerconf.types import INT32


def _serialize(config: Configuration) -> tuple[str, str]:
    local, shared = io.StringIO(), io.StringIO()
    config.serialize(local, shared)
    return local.getvalue(), shared.getvalue()


def _tokens(text: str) -> dict[str, dict[str, str]]:
    config = Configuration(io.StringIO(text))
    return {name: dict(config[name].items()) for name in config.names() if len(config[name])}


class TestPrecedence:
    def test_local_value_wins(self, layered: Configuration) -> None:
        assert layered["guild"].get("prefix") == "?"
        assert layered.get("guild", "prefix") == "?"

    def test_global_only_section(self, layered: Configuration) -> None:
        assert layered["global-only"].get("name") == "there"
        assert layered.get("global-only", "name") == "there"

    def test_missing_everywhere_returns_default(self, layered: Configuration) -> None:
        assert layered.get("nowhere", "name", "fallback") == "fallback"
        assert layered.get("guild", "missing", 3) == 3

    def test_local_section_shadows_global_section(self, layered: Configuration) -> None:
        assert layered.get("guild", "welcome_channel", 0) == 0
        assert layered.get("guild", "welcome_channel", 0) == layered["guild"].get(
            "welcome_channel", 0
        )
        assert not layered.has("guild", "welcome_channel")
        assert layered.has("guild", "goodbye_channel")
        assert layered.has("global-only", "name")

    def test_section_lookup_does_not_merge(self, layered: Configuration) -> None:
        # The local section is returned whole
        assert "welcome_channel" not in layered["guild"]

    def test_get_list_follows_precedence(self) -> None:
        config = Configuration(io.StringIO("[a]\nl = 1,2\n"), io.StringIO("[a]\nl = 3\nm = x,y\n"))
        assert config.get_list("a", "l", INT32) == [1, 2]
        assert config.get_list("a", "m") == []
        assert config.get_list("b", "m") == []


class TestSectionAccess:
    def test_getitem_creates_local_section(self) -> None:
        config = Configuration()
        section = config["new"]
        section.set("k", "v")
        assert config.names() == ["new"]
        local, shared = _serialize(config)
        assert local == "[new]\nk = v\n\n"
        assert shared == ""

    def test_at_does_not_create(self) -> None:
        config = Configuration()
        section = config.at("ghost")
        assert section is Configuration.NO_CONF
        assert len(section) == 0
        assert config.empty()
        with pytest.raises(FrozenSectionError):
            section["k"] = "v"

    def test_find(self, layered: Configuration) -> None:
        assert layered.find("local-only") is not None
        assert layered.find("nowhere") is None

    def test_emplace_in_global_tier(self) -> None:
        config = Configuration()
        config.emplace("shared", Destination.GLOBAL).set("k", 1)
        local, shared = _serialize(config)
        assert local == ""
        assert shared == "[shared]\nk = 1\n\n"

    def test_emplace_returns_existing_section(self) -> None:
        config = Configuration()
        first = config.emplace("s")
        assert config.emplace("s", "local") is first

    @pytest.mark.parametrize("destination", ["remote", 3, None])
    def test_invalid_destination(self, destination) -> None:
        config = Configuration()
        with pytest.raises(InvalidDestinationError):
            config.emplace("s", destination)
        with pytest.raises(InvalidDestinationError):
            config.set("s", "k", "v", destination=destination)

    def test_names_are_union(self, layered: Configuration) -> None:
        assert layered.names() == ["global-only", "guild", "local-only"]
        assert layered.size() == 3
        assert len(layered) == 3
        assert list(layered) == layered.names()
        assert "guild" in layered
        assert "nowhere" not in layered


class TestWrites:
    def test_set_defaults_to_local(self, layered: Configuration) -> None:
        layered.set("global-only", "name", "mine")
        assert layered.get("global-only", "name") == "mine"
        local, shared = _serialize(layered)
        assert "[global-only]\nname = mine\n" in local
        assert "[global-only]\nname = there\n" in shared

    def test_set_global_does_not_shadow_local(self, layered: Configuration) -> None:
        layered.set("guild", "prefix", "#", destination=Destination.GLOBAL)
        assert layered.get("guild", "prefix") == "?"

    def test_set_list_to_tier(self) -> None:
        config = Configuration()
        config.set_list("a", "hosts", ["x", "y,z"], destination="global")
        assert config.get_list("a", "hosts") == ["x", "y,z"]

    def test_remove(self, layered: Configuration) -> None:
        assert layered.remove("guild", "prefix") is True
        assert layered.get("guild", "prefix", "none") == "none"
        assert layered.remove("guild", "prefix") is False
        assert layered.remove("nowhere", "prefix") is False
        assert layered.remove("guild", "prefix", Destination.GLOBAL) is True


class TestSerialization:
    def test_serialize_local_only(self, layered: Configuration) -> None:
        out = io.StringIO()
        layered.serialize(out)
        assert out.getvalue() == (
            "[guild]\ngoodbye_channel = 42\nprefix = ?\n\n[local-only]\nname = here\n\n"
        )

    def test_serialize_both(self, layered: Configuration) -> None:
        _, shared = _serialize(layered)
        assert shared == (
            "[global-only]\nname = there\n\n[guild]\nprefix = !\nwelcome_channel = 7\n\n"
        )

    def test_round_trip_keeps_non_empty_tokens(self) -> None:
        config = Configuration()
        config.set("b", "num", 12)
        config.set("b", "flag", False)
        config.set("a", "text", "hello = world")
        config.set("a", "blank", "")
        config.set_list("c", "items", ["1", "two,three"])
        config["empty"]

        local, _ = _serialize(config)
        assert _tokens(local) == {
            "a": {"text": "hello = world"},
            "b": {"flag": "false", "num": "12"},
            "c": {"items": "1,two\\,three"},
        }

    def test_dump_shows_merged_view(self, layered: Configuration) -> None:
        layered["guild"]["empty"] = ""
        assert str(layered) == (
            "[global-only]\nname = there\n\n"
            "[guild]\nempty = \ngoodbye_channel = 42\nprefix = ?\n\n"
            "[local-only]\nname = here\n\n"
        )


def test_no_section_bucket_shared_by_both_streams() -> None:
    config = Configuration(io.StringIO("a = local\n"), io.StringIO("a = global\nb = 2\n"))
    assert config.no_section["a"] == "local"
    assert config.no_section["b"] == "2"
    assert config.names() == []


def test_strict_construction_raises() -> None:
    with pytest.raises(ParseError):
        Configuration(io.StringIO("[a]\nbroken line\n"), strict=True)


def test_multi_line_value_cannot_inject_sections() -> None:
    config = Configuration()
    config.set("a", "k", "x")
    with pytest.raises(ValueError):
        config.set("a", "k", "x\n[evil]\ninjected = 1")

    local, _ = _serialize(config)
    reloaded = Configuration(io.StringIO(local))
    assert reloaded.get("a", "k") == "x"
    assert reloaded.names() == ["a"]
