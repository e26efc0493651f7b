from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Theme:
    name: str
    colors: Dict[str, str]


LIGHT = Theme(
    name="light",
    colors={
        "background": "#F6F6EF",
        "card_background": "#FFFFFF",
        "text": "#393D3F",
        "text_secondary": "#6B6B6B",
        "border": "#E8E8E0",
        "primary": "#FECAC5",
        "danger": "#FF9B9B",
        "navy": "#393D3F",
        "pink": "#FECAC5",
        "pink_light": "#FEE5E1",
    },
)

DARK = Theme(
    name="dark",
    colors={
        "background": "#2d2d2d",
        "card_background": "#393D3F",
        "text": "#F6F6EF",
        "text_secondary": "#B5B5B5",
        "border": "#4d4d4d",
        "primary": "#FECAC5",
        "danger": "#FF9B9B",
        "navy": "#393D3F",
        "pink": "#FECAC5",
        "pink_light": "#FEE5E1",
    },
)

THEMES = {theme.name: theme for theme in (LIGHT, DARK)}


def theme_by_name(name, default=LIGHT) -> Theme:
    return THEMES.get((name or "").lower(), default)
