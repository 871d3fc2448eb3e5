"""
Canned ULDK responses for Demo Mode.
Covers the Mińsk Mazowiecki branch of the cascade (mazowieckie -> miński ->
Mińsk Mazowiecki) so the service can be demoed without network access.
"""
import httpx
from shapely import wkb
from shapely.geometry import Polygon

MOCK_VOIVODESHIPS = [
    ("dolnośląskie", "02"),
    ("kujawsko-pomorskie", "04"),
    ("lubelskie", "06"),
    ("lubuskie", "08"),
    ("łódzkie", "10"),
    ("małopolskie", "12"),
    ("mazowieckie", "14"),
    ("opolskie", "16"),
    ("podkarpackie", "18"),
    ("podlaskie", "20"),
    ("pomorskie", "22"),
    ("śląskie", "24"),
    ("świętokrzyskie", "26"),
    ("warmińsko-mazurskie", "28"),
    ("wielkopolskie", "30"),
    ("zachodniopomorskie", "32"),
]

MOCK_DISTRICTS = {
    "14": [
        ("białobrzeski", "1401"),
        ("ciechanowski", "1402"),
        ("garwoliński", "1403"),
        ("miński", "1412"),
        ("Warszawa", "1465"),
    ],
}

MOCK_TENANTS = {
    "1412": [
        ("Mińsk Mazowiecki", "141201_1"),
        ("Cegłów", "141202_2"),
        ("Dębe Wielkie", "141203_2"),
    ],
}

MOCK_PRECINCTS = {
    "141201_1": [
        ("Mińsk Mazowiecki 0001", "141201_1.0001"),
        ("Mińsk Mazowiecki 0002", "141201_1.0002"),
    ],
}

# EPSG:2180 metres, as ULDK serves them
MOCK_REGIONS = {
    "141201_1.0001": Polygon([
        (671800.0, 483800.0),
        (672400.0, 483800.0),
        (672400.0, 484300.0),
        (671800.0, 484300.0),
        (671800.0, 483800.0),
    ]),
}

MOCK_PARCELS = {
    "141201_1.0001.1867/2": Polygon([
        (672000.0, 484000.0),
        (672030.0, 484000.0),
        (672030.0, 484025.0),
        (672000.0, 484025.0),
        (672000.0, 484000.0),
    ]),
}

NOT_FOUND_RESPONSE = "-1 brak wyników\n"

_LIST_SOURCES = {
    "wojewodztwo": lambda teryt: MOCK_VOIVODESHIPS,
    "powiat": lambda teryt: MOCK_DISTRICTS.get(teryt, []),
    "gmina": lambda teryt: MOCK_TENANTS.get(teryt, []),
    "obreb": lambda teryt: MOCK_PRECINCTS.get(teryt, []),
}

_GEOMETRY_SOURCES = {
    "GetRegionById": MOCK_REGIONS,
    "GetParcelById": MOCK_PARCELS,
}


def list_response(rows) -> str:
    return "0\n" + "".join(f"{label}|{value}\n" for label, value in rows)


def geometry_response(geometries) -> str:
    return "0\n" + "".join(f"{wkb.dumps(g, hex=True)}\n" for g in geometries)


def _handle(request: httpx.Request) -> httpx.Response:
    params = request.url.params

    if request.url.path.endswith("service.php"):
        source = _LIST_SOURCES.get(params.get("obiekt", ""))
        if source is None:
            return httpx.Response(400, text="unknown obiekt")
        return httpx.Response(200, text=list_response(source(params.get("teryt"))))

    geometries = _GEOMETRY_SOURCES.get(params.get("request", ""))
    if geometries is None:
        return httpx.Response(400, text="unknown request")
    geometry = geometries.get(params.get("id", ""))
    if geometry is None:
        return httpx.Response(200, text=NOT_FOUND_RESPONSE)
    return httpx.Response(200, text=geometry_response([geometry]))


def demo_transport() -> httpx.MockTransport:
    """Transport answering ULDK requests from the canned data above."""
    return httpx.MockTransport(_handle)
