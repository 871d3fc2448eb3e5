"""
Reprojection of decoded ULDK geometry from PUWG 1992 (EPSG:2180) to WGS-84
longitude/latitude (EPSG:4326).
"""
from typing import Dict, List

from pyproj import CRS, Transformer

PUWG_1992 = CRS.from_proj4(
    "+proj=tmerc +lat_0=0 +lon_0=19 +k=0.9993 +x_0=500000 +y_0=-5300000 "
    "+datum=WGS84 +units=m +no_defs"
)
WGS84 = CRS.from_epsg(4326)

# always_xy: (easting, northing) in, (longitude, latitude) out
_to_4326 = Transformer.from_crs(PUWG_1992, WGS84, always_xy=True)


def transform_position(x: float, y: float) -> List[float]:
    lon, lat = _to_4326.transform(x, y)
    return [lon, lat]


def _transform_ring(ring) -> List[List[float]]:
    if not ring:
        return []
    xs = [position[0] for position in ring]
    ys = [position[1] for position in ring]
    lons, lats = _to_4326.transform(xs, ys)
    return [[lon, lat] for lon, lat in zip(lons, lats)]


def _transform_polygon(rings) -> List[List[List[float]]]:
    return [_transform_ring(ring) for ring in rings]


def reproject(geometry: Dict) -> Dict:
    """
    Return a copy of a GeoJSON geometry with coordinates in EPSG:4326.

    Point, Polygon and MultiPolygon are transformed; rings keep their order,
    length and winding. Any other geometry type is returned untouched.
    """
    geometry_type = geometry.get("type")

    if geometry_type == "Point":
        x, y = geometry["coordinates"][:2]
        return {"type": "Point", "coordinates": transform_position(x, y)}
    if geometry_type == "Polygon":
        return {
            "type": "Polygon",
            "coordinates": _transform_polygon(geometry["coordinates"]),
        }
    if geometry_type == "MultiPolygon":
        return {
            "type": "MultiPolygon",
            "coordinates": [_transform_polygon(polygon) for polygon in geometry["coordinates"]],
        }
    return geometry
