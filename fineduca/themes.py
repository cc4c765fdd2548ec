"""
Color themes selectable from the profile screen.

Colors are CSS custom properties mapped to space-separated RGB triples,
ready for rgb(var(--color-primary)) style usage.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    colors: dict[str, str]

    def rgb(self, variable: str) -> str:
        """CSS rgb() value for one of the theme variables."""
        return f"rgb({self.colors[variable]})"


THEMES: list[Theme] = [
    Theme(
        id="emerald",
        name="Esmeralda",
        colors={
            "--color-primary": "16 185 129",
            "--color-primary-light": "52 211 153",
            "--color-primary-dark": "5 150 105",
            "--color-primary-super-light": "209 250 229",
            "--color-accent": "6 182 212",
            "--color-accent-light": "34 211 238",
        },
    ),
    Theme(
        id="sky",
        name="Céu",
        colors={
            "--color-primary": "14 165 233",
            "--color-primary-light": "56 189 248",
            "--color-primary-dark": "2 132 199",
            "--color-primary-super-light": "224 242 254",
            "--color-accent": "244 63 94",
            "--color-accent-light": "251 113 133",
        },
    ),
    Theme(
        id="indigo",
        name="Índigo",
        colors={
            "--color-primary": "99 102 241",
            "--color-primary-light": "129 140 248",
            "--color-primary-dark": "79 70 229",
            "--color-primary-super-light": "224 231 255",
            "--color-accent": "245 158 11",
            "--color-accent-light": "251 191 36",
        },
    ),
    Theme(
        id="rose",
        name="Rosa",
        colors={
            "--color-primary": "244 63 94",
            "--color-primary-light": "251 113 133",
            "--color-primary-dark": "225 29 72",
            "--color-primary-super-light": "255 228 230",
            "--color-accent": "20 184 166",
            "--color-accent-light": "45 212 191",
        },
    ),
]

DEFAULT_THEME = THEMES[0]


def find_theme(theme_id: Optional[str]) -> Optional[Theme]:
    for theme in THEMES:
        if theme.id == theme_id:
            return theme
    return None
