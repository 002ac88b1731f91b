import io
from pathlib import Path

import pytest

from layerconf import Configuration, Stringable

LOCAL_INI = """\
[guild]
prefix = ?
goodbye_channel = 42

[local-only]
name = here
"""

GLOBAL_INI = """\
[guild]
prefix = !
welcome_channel = 7

[global-only]
name = there
"""


class Color(Stringable):
    """Small Stringable used to exercise custom conversions."""

    def __init__(self, red: int, green: int, blue: int) -> None:
        self.rgb = (red, green, blue)

    def to_string(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.rgb)

    @classmethod
    def from_string(cls, text: str) -> "Color":
        if len(text) != 7 or not text.startswith("#"):
            raise ValueError(f"not a color: {text!r}")
        return cls(int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Color) and other.rgb == self.rgb


@pytest.fixture
def layered() -> Configuration:
    return Configuration(io.StringIO(LOCAL_INI), io.StringIO(GLOBAL_INI))


@pytest.fixture
def ini_files(tmp_path: Path) -> tuple[Path, Path]:
    local = tmp_path / "local.ini"
    shared = tmp_path / "global.ini"
    local.write_text(LOCAL_INI)
    shared.write_text(GLOBAL_INI)
    return local, shared


@pytest.fixture
def color_cls() -> type[Color]:
    return Color
