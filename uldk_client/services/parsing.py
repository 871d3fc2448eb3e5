"""
Parsers for the two ULDK text formats.

List responses (service.php) look like::

    0
    dolnośląskie|02
    kujawsko-pomorskie|04

Geometry responses (GetRegionById / GetParcelById) carry a status line
followed by one hex-encoded WKB blob per line, in EPSG:2180::

    0
    0103000020840800000100000005000000...
"""
import logging
from typing import Dict, List

from shapely import wkb
from shapely.errors import ShapelyError
from shapely.geometry import mapping

from uldk_client.errors import DecodeError, NotFoundError
from uldk_client.models import Option
from uldk_client.services.projection import reproject

log = logging.getLogger(__name__)

NOT_FOUND_STATUS = "-1"


def parse_list(raw: str) -> List[Option]:
    lines = raw.split("\n")[1:]
    options = []
    for line in lines:
        line = line.rstrip("\r")
        if "|" not in line:
            continue
        label, value = line.split("|")[:2]
        options.append(Option(label=label, value=value))
    return options


def _as_lists(coordinates):
    if isinstance(coordinates, (list, tuple)):
        return [_as_lists(c) for c in coordinates]
    return coordinates


def decode_wkb_hex(line: str) -> Dict:
    """Decode one hex WKB (or EWKB) blob into a GeoJSON geometry dict."""
    try:
        geometry = wkb.loads(bytes.fromhex(line.strip()))
    except (ValueError, ShapelyError) as e:
        raise DecodeError(f"Invalid WKB geometry: {e}") from e
    if geometry.is_empty:
        raise DecodeError(f"Empty {geometry.geom_type} geometry")

    geojson = dict(mapping(geometry))
    if "coordinates" in geojson:
        geojson["coordinates"] = _as_lists(geojson["coordinates"])
    return geojson


def parse_geometry_response(raw: str) -> List[Dict]:
    """
    Decode every WKB line of a geometry response and reproject it to
    EPSG:4326.

    Raises NotFoundError when the status line carries -1 and DecodeError when
    any line fails to decode. Nothing is returned partially.
    """
    status, *lines = raw.split("\n")
    if NOT_FOUND_STATUS in status:
        raise NotFoundError(f"Resource not found: {status.strip()}")

    geometries = []
    for line in lines:
        if not line.strip():
            continue
        geometries.append(reproject(decode_wkb_hex(line)))

    log.debug("Decoded %d geometries", len(geometries))
    return geometries
