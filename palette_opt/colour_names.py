# palette_opt/colour_names.py
from __future__ import annotations

"""
Named colour table and text parsing.

Exports:
  CSS_COLOURS: list[tuple[str, str]]  # [(hex, name), ...]
  build_name_lookup(hex_name_pairs=CSS_COLOURS) -> dict[name, RGBTuple]
  parse_rgb(text) -> RGBTuple
  parse_colour(text) -> Colour
  name_of_hex(hex_str) -> str | None
"""

import re
from typing import Dict, List, Optional, Tuple

from .core_types import Colour, HexStr, RGBTuple, hex_to_rgb
from .colour_convert import make_colour


CSS_COLOURS: List[Tuple[str, str]] = [
    ("#f0f8ff", "aliceblue"),
    ("#faebd7", "antiquewhite"),
    ("#00ffff", "aqua"),
    ("#7fffd4", "aquamarine"),
    ("#f0ffff", "azure"),
    ("#f5f5dc", "beige"),
    ("#ffe4c4", "bisque"),
    ("#000000", "black"),
    ("#ffebcd", "blanchedalmond"),
    ("#0000ff", "blue"),
    ("#8a2be2", "blueviolet"),
    ("#a52a2a", "brown"),
    ("#deb887", "burlywood"),
    ("#5f9ea0", "cadetblue"),
    ("#7fff00", "chartreuse"),
    ("#d2691e", "chocolate"),
    ("#ff7f50", "coral"),
    ("#6495ed", "cornflowerblue"),
    ("#fff8dc", "cornsilk"),
    ("#dc143c", "crimson"),
    ("#00ffff", "cyan"),
    ("#00008b", "darkblue"),
    ("#008b8b", "darkcyan"),
    ("#b8860b", "darkgoldenrod"),
    ("#a9a9a9", "darkgray"),
    ("#006400", "darkgreen"),
    ("#a9a9a9", "darkgrey"),
    ("#bdb76b", "darkkhaki"),
    ("#8b008b", "darkmagenta"),
    ("#556b2f", "darkolivegreen"),
    ("#ff8c00", "darkorange"),
    ("#9932cc", "darkorchid"),
    ("#8b0000", "darkred"),
    ("#e9967a", "darksalmon"),
    ("#8fbc8f", "darkseagreen"),
    ("#483d8b", "darkslateblue"),
    ("#2f4f4f", "darkslategray"),
    ("#2f4f4f", "darkslategrey"),
    ("#00ced1", "darkturquoise"),
    ("#9400d3", "darkviolet"),
    ("#ff1493", "deeppink"),
    ("#00bfff", "deepskyblue"),
    ("#696969", "dimgray"),
    ("#696969", "dimgrey"),
    ("#1e90ff", "dodgerblue"),
    ("#b22222", "firebrick"),
    ("#fffaf0", "floralwhite"),
    ("#228b22", "forestgreen"),
    ("#ff00ff", "fuchsia"),
    ("#dcdcdc", "gainsboro"),
    ("#f8f8ff", "ghostwhite"),
    ("#ffd700", "gold"),
    ("#daa520", "goldenrod"),
    ("#808080", "gray"),
    ("#008000", "green"),
    ("#adff2f", "greenyellow"),
    ("#808080", "grey"),
    ("#f0fff0", "honeydew"),
    ("#ff69b4", "hotpink"),
    ("#cd5c5c", "indianred"),
    ("#4b0082", "indigo"),
    ("#fffff0", "ivory"),
    ("#f0e68c", "khaki"),
    ("#e6e6fa", "lavender"),
    ("#fff0f5", "lavenderblush"),
    ("#7cfc00", "lawngreen"),
    ("#fffacd", "lemonchiffon"),
    ("#add8e6", "lightblue"),
    ("#f08080", "lightcoral"),
    ("#e0ffff", "lightcyan"),
    ("#fafad2", "lightgoldenrodyellow"),
    ("#d3d3d3", "lightgray"),
    ("#90ee90", "lightgreen"),
    ("#d3d3d3", "lightgrey"),
    ("#ffb6c1", "lightpink"),
    ("#ffa07a", "lightsalmon"),
    ("#20b2aa", "lightseagreen"),
    ("#87cefa", "lightskyblue"),
    ("#778899", "lightslategray"),
    ("#778899", "lightslategrey"),
    ("#b0c4de", "lightsteelblue"),
    ("#ffffe0", "lightyellow"),
    ("#00ff00", "lime"),
    ("#32cd32", "limegreen"),
    ("#faf0e6", "linen"),
    ("#ff00ff", "magenta"),
    ("#800000", "maroon"),
    ("#66cdaa", "mediumaquamarine"),
    ("#0000cd", "mediumblue"),
    ("#ba55d3", "mediumorchid"),
    ("#9370db", "mediumpurple"),
    ("#3cb371", "mediumseagreen"),
    ("#7b68ee", "mediumslateblue"),
    ("#00fa9a", "mediumspringgreen"),
    ("#48d1cc", "mediumturquoise"),
    ("#c71585", "mediumvioletred"),
    ("#191970", "midnightblue"),
    ("#f5fffa", "mintcream"),
    ("#ffe4e1", "mistyrose"),
    ("#ffe4b5", "moccasin"),
    ("#ffdead", "navajowhite"),
    ("#000080", "navy"),
    ("#fdf5e6", "oldlace"),
    ("#808000", "olive"),
    ("#6b8e23", "olivedrab"),
    ("#ffa500", "orange"),
    ("#ff4500", "orangered"),
    ("#da70d6", "orchid"),
    ("#eee8aa", "palegoldenrod"),
    ("#98fb98", "palegreen"),
    ("#afeeee", "paleturquoise"),
    ("#db7093", "palevioletred"),
    ("#ffefd5", "papayawhip"),
    ("#ffdab9", "peachpuff"),
    ("#cd853f", "peru"),
    ("#ffc0cb", "pink"),
    ("#dda0dd", "plum"),
    ("#b0e0e6", "powderblue"),
    ("#800080", "purple"),
    ("#663399", "rebeccapurple"),
    ("#ff0000", "red"),
    ("#bc8f8f", "rosybrown"),
    ("#4169e1", "royalblue"),
    ("#8b4513", "saddlebrown"),
    ("#fa8072", "salmon"),
    ("#f4a460", "sandybrown"),
    ("#2e8b57", "seagreen"),
    ("#fff5ee", "seashell"),
    ("#a0522d", "sienna"),
    ("#c0c0c0", "silver"),
    ("#87ceeb", "skyblue"),
    ("#6a5acd", "slateblue"),
    ("#708090", "slategray"),
    ("#708090", "slategrey"),
    ("#fffafa", "snow"),
    ("#00ff7f", "springgreen"),
    ("#4682b4", "steelblue"),
    ("#d2b48c", "tan"),
    ("#008080", "teal"),
    ("#d8bfd8", "thistle"),
    ("#ff6347", "tomato"),
    ("#40e0d0", "turquoise"),
    ("#ee82ee", "violet"),
    ("#f5deb3", "wheat"),
    ("#ffffff", "white"),
    ("#f5f5f5", "whitesmoke"),
    ("#ffff00", "yellow"),
    ("#9acd32", "yellowgreen"),
]

_RGB_FUNC = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9.]+)\s*)?\)$"
)


def build_name_lookup(
    hex_name_pairs: List[Tuple[str, str]] = CSS_COLOURS,
) -> Dict[str, RGBTuple]:
    """Lowercase name -> RGB tuple."""
    return {name.lower(): hex_to_rgb(hx) for hx, name in hex_name_pairs}


_NAME_TO_RGB: Dict[str, RGBTuple] = build_name_lookup()
_HEX_TO_NAME: Dict[str, str] = {}
for _hx, _name in CSS_COLOURS:
    _HEX_TO_NAME.setdefault(_hx, _name)


def parse_rgb(text: str) -> RGBTuple:
    """
    Parse a colour string into an RGB tuple.

    Accepts '#rgb', '#rrggbb', 'rgb(r, g, b)' / 'rgba(r, g, b, a)' and CSS
    colour names (case-insensitive). Raises ValueError otherwise.
    """
    s = text.strip().lower()
    if not s:
        raise ValueError("empty colour string")
    if s.startswith("#"):
        return hex_to_rgb(s)
    m = _RGB_FUNC.match(s)
    if m:
        channels = tuple(int(m.group(i)) for i in (1, 2, 3))
        if any(c > 255 for c in channels):
            raise ValueError(f"rgb() channel out of range in {text!r}")
        return channels  # type: ignore[return-value]
    rgb = _NAME_TO_RGB.get(s)
    if rgb is None:
        raise ValueError(f"unrecognised colour {text!r}")
    return rgb


def parse_colour(text: str) -> Colour:
    """Parse a colour string (see parse_rgb) into a Colour. rgba() alpha is kept."""
    s = text.strip().lower()
    m = _RGB_FUNC.match(s)
    alpha = float(m.group(4)) if m and m.group(4) is not None else 1.0
    return make_colour(parse_rgb(text), alpha=alpha)


def name_of_hex(hex_str: HexStr) -> Optional[str]:
    """First CSS name for an exact '#rrggbb' match, else None."""
    return _HEX_TO_NAME.get(hex_str.strip().lower())


__all__ = [
    "CSS_COLOURS",
    "build_name_lookup",
    "parse_rgb",
    "parse_colour",
    "name_of_hex",
]
