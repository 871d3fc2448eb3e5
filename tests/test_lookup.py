import asyncio

import httpx
import pytest
from shapely.geometry import Polygon

from uldk_client.errors import DecodeError, NotFoundError
from uldk_client.models import InitialSelection, Option

from conftest import RESPONSES, list_handler, to_hex


@pytest.mark.asyncio
async def test_start_loads_voivodeships_only(make_lookup):
    lookup, transport = make_lookup(list_handler(RESPONSES))
    async with lookup:
        pass

    assert [o.value for o in lookup.voivodeships] == ["02", "14"]
    assert transport.params("obiekt") == ["wojewodztwo"]
    assert lookup.districts == []
    assert lookup.error is None


@pytest.mark.asyncio
async def test_seeded_voivodeship_fetches_districts_once(make_lookup):
    lookup, transport = make_lookup(list_handler(RESPONSES), initial=InitialSelection(voivodeship="02"))
    await lookup.start()

    district_requests = [r for r in transport.requests if r.url.params["obiekt"] == "powiat"]
    assert len(district_requests) == 1
    assert district_requests[0].url.params["teryt"] == "02"
    assert lookup.districts == [
        Option(label="bolesławiecki", value="0201"),
        Option(label="dzierżoniowski", value="0202"),
    ]
    assert lookup.tenants == []
    assert lookup.precincts == []
    await lookup.aclose()


@pytest.mark.asyncio
async def test_full_seed_runs_whole_cascade(make_lookup):
    initial = InitialSelection(voivodeship="14", district="1412", tenant="141201_1")
    lookup, transport = make_lookup(list_handler(RESPONSES), initial=initial)
    await lookup.start()

    assert sorted(transport.params("obiekt")) == ["gmina", "obreb", "powiat", "wojewodztwo"]
    assert lookup.districts[0].value == "1412"
    assert lookup.tenants[0].value == "141201_1"
    assert lookup.precincts[0].value == "141201_1.0001"
    await lookup.aclose()


@pytest.mark.asyncio
async def test_fetch_overwrites_level_and_leaves_downstream(make_lookup):
    lookup, _ = make_lookup(list_handler(RESPONSES))
    await lookup.fetch_districts("14")
    await lookup.fetch_tenants("1412")

    districts = await lookup.fetch_districts("02")

    assert districts == lookup.districts
    assert [o.value for o in lookup.districts] == ["0201", "0202"]
    # upstream change does not clear downstream levels
    assert [o.value for o in lookup.tenants] == ["141201_1"]
    await lookup.aclose()


@pytest.mark.asyncio
async def test_failed_fetch_records_error_and_keeps_previous_options(make_lookup):
    def handler(request):
        if request.url.params.get("teryt") == "99":
            return httpx.Response(500, text="boom")
        return list_handler(RESPONSES)(request)

    lookup, _ = make_lookup(handler)
    await lookup.fetch_districts("14")

    assert await lookup.fetch_districts("99") is None
    assert lookup.error.startswith("Failed to fetch districts")
    assert [o.value for o in lookup.districts] == ["1412"]

    await lookup.fetch_precincts("99")
    assert lookup.error.startswith("Failed to fetch precincts")
    await lookup.aclose()


@pytest.mark.asyncio
async def test_stale_response_is_returned_but_not_stored(make_lookup):
    release_slow = asyncio.Event()

    async def handler(request):
        if request.url.params.get("teryt") == "02":
            await release_slow.wait()
        return list_handler(RESPONSES)(request)

    lookup, _ = make_lookup(handler)
    slow = asyncio.create_task(lookup.fetch_districts("02"))
    await asyncio.sleep(0)
    await lookup.fetch_districts("14")
    release_slow.set()

    assert [o.value for o in await slow] == ["0201", "0202"]
    assert [o.value for o in lookup.districts] == ["1412"]
    await lookup.aclose()


@pytest.mark.asyncio
async def test_geometry_lookup_returns_reprojected_list(make_lookup):
    parcel = Polygon([(672000, 484000), (672030, 484000), (672030, 484025), (672000, 484000)])
    lookup, transport = make_lookup(lambda request: httpx.Response(200, text=f"0\n{to_hex(parcel)}\n"))

    geometries = await lookup.get_parcel_geometry_by_id("141201_1.0001.1867/2")

    assert len(geometries) == 1
    lon, lat = geometries[0]["coordinates"][0][0]
    assert 21.0 < lon < 22.0
    assert 51.5 < lat < 52.7
    assert transport.params("request") == ["GetParcelById"]
    await lookup.aclose()


@pytest.mark.asyncio
async def test_geometry_lookup_failure_returns_none_without_touching_error(make_lookup):
    lookup, _ = make_lookup(lambda request: httpx.Response(200, text="-1 brak wyników\n"))

    assert await lookup.get_region_geometry_by_id("missing") is None
    assert await lookup.get_parcel_geometry_by_id("missing") is None
    assert lookup.error is None

    with pytest.raises(NotFoundError):
        await lookup.fetch_region_geometry("missing")
    await lookup.aclose()


@pytest.mark.asyncio
async def test_empty_point_returns_none(make_lookup):
    empty_point = "0101000000000000000000F87F000000000000F87F"
    lookup, _ = make_lookup(lambda request: httpx.Response(200, text=f"0\n{empty_point}\n"))

    assert await lookup.get_parcel_geometry_by_id("141201_1.0001.1867/2") is None
    with pytest.raises(DecodeError):
        await lookup.fetch_parcel_geometry("141201_1.0001.1867/2")
    await lookup.aclose()
