from enum import Enum


class Palette(str, Enum):
    """Built-in character ramps, ordered darkest to lightest."""

    STANDARD = " .:-=+*#%@"
    DETAILED = " .,:;i1tfLCG08@"
    BLOCKS = " ░▒▓█"
    MINIMAL = " .:█"
    CUSTOM = " .-~:;=!*#$@"

    @classmethod
    def names(cls) -> list[str]:
        return [member.name.lower() for member in cls]

    @classmethod
    def from_name(cls, name: str) -> "Palette":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown palette: {name!r} (expected one of {', '.join(cls.names())})") from None


def resolve_palette(palette: "Palette | str") -> str:
    """Return the literal character ramp for a built-in palette or a caller-supplied string."""
    if isinstance(palette, Palette):
        return palette.value
    if not palette:
        raise ValueError("Palette must contain at least one character")
    return palette
