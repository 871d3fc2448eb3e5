import httpx
import pytest
from shapely import wkb

from uldk_client.services.lookup import UldkLookup
from uldk_client.services.uldk import UldkClient

BASE_URL = "https://uldk.test/"

# WKB for POINT(500000 -5300000), the false origin of EPSG:2180
FALSE_ORIGIN_POINT_HEX = "0101000000" "0000000080841E41" "00000000C83754C1"


def to_hex(geometry, **kwargs) -> str:
    return wkb.dumps(geometry, hex=True, **kwargs)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def params(self, key):
        return [r.url.params.get(key) for r in self.requests]


def list_handler(responses):
    """Serve list responses keyed by (obiekt, teryt)."""

    def handler(request):
        key = (request.url.params.get("obiekt"), request.url.params.get("teryt"))
        return httpx.Response(200, text=responses.get(key, "0\n"))

    return handler


@pytest.fixture
def make_client():
    def factory(handler):
        transport = RecordingTransport(handler)
        return UldkClient(base_url=BASE_URL, transport=transport), transport

    return factory


@pytest.fixture
def make_lookup(make_client):
    def factory(handler, initial=None):
        client, transport = make_client(handler)
        return UldkLookup(client, initial=initial), transport

    return factory


RESPONSES = {
    ("wojewodztwo", None): "0\ndolnośląskie|02\nmazowieckie|14\n",
    ("powiat", "02"): "0\nbolesławiecki|0201\ndzierżoniowski|0202\n",
    ("powiat", "14"): "0\nminski|1412\n",
    ("gmina", "1412"): "0\nMińsk Mazowiecki|141201_1\n",
    ("obreb", "141201_1"): "0\nMińsk Mazowiecki 0001|141201_1.0001\n",
}
