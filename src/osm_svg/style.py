"""Tag based style lookup for ways.

A :class:`StyleTable` maps an OSM tag key to the styles of its known values
plus a fallback for everything else.  Each style carries a paint priority:
low priorities are painted first, so land use ends up underneath buildings
and roads.  Tables are immutable and are handed to the pipeline explicitly;
the built-in one comes from :meth:`StyleTable.default`, an alternative can
be loaded from JSON with :func:`load_style_table`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, NamedTuple, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from .errors import StyleLoadError
from .utils.logging import get_logger

LOGGER = get_logger(__name__)


class StyleRule(NamedTuple):
    """Paint priority and the CSS declarations for an SVG ``style`` attribute."""

    priority: int
    style: str


@dataclass(frozen=True)
class KeyStyle:
    """Styles for the values of one tag key plus a fallback."""

    values: Mapping[str, StyleRule]
    fallback: StyleRule

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))


@dataclass(frozen=True)
class StyleTable:
    """Immutable mapping of tag key to :class:`KeyStyle`."""

    keys: Mapping[str, KeyStyle] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", MappingProxyType(dict(self.keys)))

    def get(self, key: str) -> Optional[KeyStyle]:
        return self.keys.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "StyleTable":
        """Build a table from the JSON layout described by :data:`STYLE_SCHEMA`."""

        keys: Dict[str, KeyStyle] = {}
        for key, entry in payload.items():
            values = {value: _rule(rule) for value, rule in entry.get("values", {}).items()}
            keys[key] = KeyStyle(values=values, fallback=_rule(entry["default"]))
        return cls(keys)

    @classmethod
    def default(cls) -> "StyleTable":
        """Return the built-in table."""

        return cls.from_dict(DEFAULT_STYLES)


def _rule(raw: Mapping[str, Any]) -> StyleRule:
    return StyleRule(int(raw["priority"]), str(raw["style"]))


class StyleResolver:
    """Resolve a tag pair to a :class:`StyleRule`."""

    def __init__(self, table: StyleTable) -> None:
        self._table = table

    def resolve(self, key: str, value: str) -> Optional[StyleRule]:
        """Return the style for ``key=value``.

        Keys missing from the table are not style relevant and yield
        ``None``.  Unlisted values of a known key use the key's fallback.
        """

        key_style = self._table.get(key)
        if key_style is None:
            return None
        rule = key_style.values.get(value)
        if rule is None:
            LOGGER.debug("use default for %s:%s", key, value)
            return key_style.fallback
        return rule


# ---------------------------------------------------------------------------
# JSON style files
# ---------------------------------------------------------------------------

_RULE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["priority", "style"],
    "properties": {
        "priority": {"type": "integer", "minimum": 0},
        "style": {"type": "string"},
    },
    "additionalProperties": False,
}

STYLE_SCHEMA: dict[str, Any] = {
    "$id": "osm_svg/style.schema.json",
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "required": ["default"],
        "properties": {
            "default": _RULE_SCHEMA,
            "values": {"type": "object", "additionalProperties": _RULE_SCHEMA},
        },
        "additionalProperties": False,
    },
}

_VALIDATOR = Draft202012Validator(STYLE_SCHEMA)


def load_style_table(path: Path | str) -> StyleTable:
    """Read and validate a JSON style file."""

    style_path = Path(path)
    try:
        raw_data = style_path.read_text(encoding="utf8")
    except OSError as exc:
        raise StyleLoadError(f"Unable to read style file '{style_path}'") from exc

    try:
        payload = json.loads(raw_data)
    except json.JSONDecodeError as exc:
        raise StyleLoadError(f"Style file '{style_path}' is not valid JSON") from exc

    error = best_match(_VALIDATOR.iter_errors(payload))
    if error is not None:
        location = "/".join(str(part) for part in error.path) or "<root>"
        raise StyleLoadError(f"Style file '{style_path}' is invalid at {location}: {error.message}")

    table = StyleTable.from_dict(payload)
    LOGGER.debug("Loaded %d style keys from %s", len(table), style_path)
    return table


# ---------------------------------------------------------------------------
# Built-in styles
# ---------------------------------------------------------------------------


def _styles(priority: int, entries: Mapping[str, str]) -> dict[str, dict[str, Any]]:
    return {value: {"priority": priority, "style": style} for value, style in entries.items()}


_MINOR_WAY = "stroke:#002a5a;fill:none"
_PLAIN_BUILDING = "stroke:blue; fill:#ffd62e"
_SPECIAL_BUILDING = "stroke:blue; fill:#fb6bff"
_RAIL_DASH = "stroke-miterlimit:4;stroke-dasharray:{dash};stroke-dashoffset:0"

DEFAULT_STYLES: dict[str, Any] = {
    "highway": {
        "values": _styles(
            100,
            {
                "path": _MINOR_WAY,
                "residential": "stroke-width:3;stroke:black;fill:none",
                "primary": "stroke-width:6;stroke:black;fill:none",
                "secondary": "stroke-width:4.5;stroke:black;fill:none",
                "tertiary": "stroke-width:3;stroke:black;fill:none",
                "motorway": "stroke-width:9;stroke:red;fill:none",
                "motorway_link": "stroke-width:4.5;stroke:red;fill:none",
                "footway": _MINOR_WAY,
                "track": _MINOR_WAY,
                "service": _MINOR_WAY,
                "cycleway": _MINOR_WAY,
                "unclassified": _MINOR_WAY,
            },
        ),
        "default": {"priority": 11, "style": "stroke:#030038;fill:none"},
    },
    "building": {
        "values": _styles(
            20,
            {
                "house": "stroke:blue; fill:purple",
                "yes": _PLAIN_BUILDING,
                "shed": _PLAIN_BUILDING,
                "apartments": _PLAIN_BUILDING,
                "church": _SPECIAL_BUILDING,
                "school": _SPECIAL_BUILDING,
                "commercial": "stroke:blue; fill:purple",
                "retail": "stroke:blue; fill:purple",
                "construction": "stroke:blue; fill:none",
            },
        ),
        "default": {"priority": 21, "style": "stroke:blue; fill:#ffd020"},
    },
    "landuse": {
        "values": _styles(
            5,
            {
                "forest": "stroke:#009e07; fill:#169400",
                "grass": "stroke:#009e07; fill:#6bff88",
                "residential": "stroke:#009e07; fill:#e2ff16",
                "education": "stroke:#009e07; fill:#007f5f",
                "farmland": "stroke:#009e07; fill:#CD853F",
            },
        ),
        "default": {"priority": 2, "style": "stroke:#009e07; fill:#007f5f"},
    },
    "natural": {
        "values": _styles(
            50,
            {
                "shrubbery": "stroke:none; fill:green",
                "tree_row": "stroke:green; fill:none",
                "water": "stroke:Aqua; fill:RoyalBlue",
            },
        ),
        "default": {"priority": 50, "style": "stroke:#009e07; fill:#007f5f"},
    },
    "barrier": {
        "values": _styles(
            50,
            {
                "fence": "stroke:red; fill:none",
                "wall": "stroke:darkkhaki; fill:none",
                "hedge": "stroke:green; fill:none",
            },
        ),
        "default": {"priority": 20, "style": "stroke:red; fill:none"},
    },
    "leisure": {
        "values": _styles(
            50,
            {
                "playground": "stroke:palegoldenrod; fill:palegoldenrod",
                "dog_park": "stroke:brown; fill:yellowgreen",
                "garden": "stroke:greenyellow; fill:greenyellow",
                "pitch": "stroke:chocolate; fill:chocolate",
                "swimming_pool": "stroke:blue; fill:dodgerblue",
            },
        ),
        "default": {"priority": 20, "style": "stroke:brown; fill:none"},
    },
    "railway": {
        "values": _styles(
            50,
            {
                "narrow_gauge": "stroke:black;fill:none;stroke-width:2;"
                + _RAIL_DASH.format(dash="20, 20"),
                "rail": "stroke:black;fill:none;stroke-width:4;" + _RAIL_DASH.format(dash="10, 10"),
                "platform": "stroke:Gray; fill:DarkGray",
            },
        ),
        "default": {"priority": 20, "style": "stroke:brown; fill:none"},
    },
    "amenity": {
        "values": _styles(9, {"parking": "stroke:LightSkyBlue; fill:url(#parking)"}),
        "default": {"priority": 9, "style": "stroke:LightSkyBlue; fill:LightSkyBlue"},
    },
}

# Fill patterns referenced by the built-in styles via ``url(#...)``.
PATTERN_DEFS = """<defs>
  <pattern id="parking" patternUnits="userSpaceOnUse" width="10" height="6">
    <rect width="10" height="6" fill="white"/>
    <rect x="0" y="0" width="9" height="5" fill="LightSkyBlue"/>
  </pattern>
</defs>"""


__all__ = [
    "DEFAULT_STYLES",
    "KeyStyle",
    "PATTERN_DEFS",
    "STYLE_SCHEMA",
    "StyleResolver",
    "StyleRule",
    "StyleTable",
    "load_style_table",
]
