from dataclasses import dataclass

from asciistudio.charsets import Palette
from asciistudio.engine import ConversionConfig


@dataclass(frozen=True)
class Preset:
    name: str
    resolution: float
    palette: Palette
    inverted: bool
    grayscale: bool

    def apply(self, config: ConversionConfig | None = None) -> ConversionConfig:
        """Return config with all four preset values replaced at once."""
        if config is None:
            config = ConversionConfig()
        return config.replace(
            resolution=self.resolution,
            palette=self.palette.value,
            inverted=self.inverted,
            grayscale=self.grayscale,
        )


PRESETS = {
    preset.name.lower(): preset
    for preset in (
        Preset("Quick", 0.08, Palette.MINIMAL, inverted=False, grayscale=True),
        Preset("Detailed", 0.15, Palette.DETAILED, inverted=False, grayscale=True),
        Preset("Colorful", 0.12, Palette.STANDARD, inverted=False, grayscale=False),
        Preset("Retro", 0.10, Palette.BLOCKS, inverted=True, grayscale=True),
    )
}


def get_preset(name: str) -> Preset:
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset: {name!r} (expected one of {', '.join(PRESETS)})") from None
