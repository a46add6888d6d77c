"""WGS84 to Rijksdriehoek projection backed by :mod:`pyproj`."""

from __future__ import annotations

import math
import threading

from pyproj import Transformer

from .config import SOURCE_CRS, TARGET_CRS


class RijksdriehoekProjector:
    """Callable converting ``(lat, lon)`` into planar integer metres.

    ``pyproj`` transformers must not be shared between threads, so every
    worker thread lazily builds its own instance.  Fractions are truncated
    and negative results clamp to ``0`` because the index stores unsigned
    coordinates.
    """

    def __init__(self, source_crs: str = SOURCE_CRS, target_crs: str = TARGET_CRS) -> None:
        self._source_crs = source_crs
        self._target_crs = target_crs
        self._local = threading.local()

    def _transformer(self) -> Transformer:
        transformer = getattr(self._local, "transformer", None)
        if transformer is None:
            transformer = Transformer.from_crs(self._source_crs, self._target_crs, always_xy=True)
            self._local.transformer = transformer
        return transformer

    def __call__(self, lat: float, lon: float) -> tuple[int, int]:
        x, y = self._transformer().transform(lon, lat)
        return _to_unsigned(x), _to_unsigned(y)


def _to_unsigned(value: float) -> int:
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)


__all__ = ["RijksdriehoekProjector"]
