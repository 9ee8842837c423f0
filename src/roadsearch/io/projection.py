import math

from roadsearch.domain.entities.geography import Point


def earth_radius(circumference: float) -> float:
    return circumference / (2.0 * math.pi)


class MercatorProjector:
    """Web-Mercator projection onto a ``width`` x ``height`` canvas.

    Each instance owns its memo table; nothing is shared between projectors.
    """

    def __init__(self, width: int, height: int):
        self.width, self.height = width, height
        self._cache: dict[tuple[float, float], Point] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def project(self, longitude: float, latitude: float) -> Point:
        key = (longitude, latitude)
        hit = self._cache.get(key)
        if hit is not None:
            return hit
        p = self._translate(longitude, latitude)
        self._cache[key] = p
        return p

    def clear(self) -> None:
        self._cache.clear()

    def _translate(self, longitude: float, latitude: float) -> Point:
        lon = math.radians(longitude + 180.0)
        lat = math.radians(latitude)
        r = earth_radius(float(self.width))
        x = lon * r
        y = self.height / 2.0 - r * math.log(math.tan(math.pi / 4.0 + lat / 2.0))
        return Point(x, y)
