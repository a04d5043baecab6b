"""Tests for the partner API client, fetchers and labels."""

import asyncio

import httpx
import pytest

from searchselect.config import ApiConfig
from searchselect.errors import ApiError
from searchselect.options import Option
from searchselect.sources import (
    PartnerApiClient,
    address_fetcher,
    address_label,
    build_fetcher,
    country_fetcher,
    partner_fetcher,
    partner_label,
    partner_name,
)

PARTNERS = [
    {"id": "p1", "partnerNumber": "P00000001", "active": True,
     "firstName": "Ada", "lastName": "Lovelace", "title": "Dr."},
    {"id": "p2", "partnerNumber": "P00000002", "active": True,
     "legalName": "Acme Holding AG", "tradingName": "Acme"},
]

ADDRESSES = [
    {"id": "a1", "streetLine1": "Hauptstrasse 1", "city": "Berlin", "countryCode": "DE"},
    {"id": "a2", "city": "Lyon", "countryCode": "FR"},
]

COUNTRY_LIST = [
    {"code": "DE", "name": "Germany"},
    {"code": "FR", "name": "France"},
    {"code": "CH", "name": "Switzerland"},
]


class FakeApi:
    """MockTransport handler serving the partner API read endpoints."""

    def __init__(self, status_code=200):
        self.requests = []
        self.status_code = status_code

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "boom"})
        routes = {
            "/api/partner": PARTNERS,
            "/api/address": ADDRESSES,
            "/api/address/countries": COUNTRY_LIST,
        }
        return httpx.Response(200, json=routes[request.url.path])


def _client(api, token=None):
    config = ApiConfig(base_url="http://partners.local", token=token)
    return PartnerApiClient(config, transport=httpx.MockTransport(api))


def _run(coro_fn, api, token=None):
    async def scenario():
        async with _client(api, token) as client:
            return await coro_fn(client)

    return asyncio.run(scenario())


class TestLabels:
    def test_natural_person_name(self):
        assert partner_name(PARTNERS[0]) == "Dr. Ada Lovelace"

    def test_unnamed_person(self):
        assert partner_name({"firstName": ""}) == "Unnamed Person"

    def test_legal_entity_prefers_trading_name(self):
        assert partner_name(PARTNERS[1]) == "Acme"
        assert partner_name({"legalName": "Acme Holding AG"}) == "Acme Holding AG"
        assert partner_name({"registrationNumber": "HRB 1"}) == "Unnamed Entity"

    def test_unknown_partner_type(self):
        assert partner_name({"id": "x"}) == "Unknown type of partner"
        assert partner_name(None) == ""

    def test_partner_label(self):
        assert partner_label(PARTNERS[0]) == "P00000001 - Dr. Ada Lovelace"

    def test_address_label_skips_blanks_and_names_country(self):
        names = {"DE": "Germany"}
        assert address_label(ADDRESSES[0], names) == "Hauptstrasse 1, Berlin, Germany"
        assert address_label(ADDRESSES[1], names) == "Lyon, FR"


class TestPartnerApiClient:
    def test_search_sends_term_as_query_param(self):
        api = FakeApi()
        _run(lambda c: c.search_partners("Acme"), api)
        assert api.requests[0].url.path == "/api/partner"
        assert api.requests[0].url.params["search"] == "Acme"

    def test_blank_term_omits_query_param(self):
        api = FakeApi()
        _run(lambda c: c.search_addresses("  "), api)
        assert "search" not in api.requests[0].url.params

    def test_token_sent_as_bearer(self):
        api = FakeApi()
        _run(lambda c: c.list_countries(), api, token="secret")
        assert api.requests[0].headers["Authorization"] == "Bearer secret"

    def test_http_error_becomes_api_error(self):
        api = FakeApi(status_code=503)
        with pytest.raises(ApiError) as excinfo:
            _run(lambda c: c.search_partners("x"), api)
        assert excinfo.value.status_code == 503

    def test_transport_error_becomes_api_error(self):
        def unreachable(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ApiError) as excinfo:
            _run(lambda c: c.list_countries(), unreachable)
        assert excinfo.value.status_code is None


class TestFetchers:
    def test_partner_fetcher(self):
        options = _run(lambda c: partner_fetcher(c)("Acm"), FakeApi())
        assert options == [
            Option("p1", "P00000001 - Dr. Ada Lovelace"),
            Option("p2", "P00000002 - Acme"),
        ]

    def test_partner_fetcher_excludes_current_partner(self):
        options = _run(lambda c: partner_fetcher(c, exclude_id="p1")(""), FakeApi())
        assert [o.value for o in options] == ["p2"]

    def test_address_fetcher_uses_country_names(self):
        api = FakeApi()

        async def twice(client):
            fetch = address_fetcher(client)
            await fetch("Ber")
            return await fetch("Lyo")

        options = _run(twice, api)
        assert options[0] == Option("a1", "Hauptstrasse 1, Berlin, Germany")
        assert options[1] == Option("a2", "Lyon, France")
        paths = [r.url.path for r in api.requests]
        assert paths.count("/api/address/countries") == 1

    def test_country_fetcher_filters_locally(self):
        api = FakeApi()

        async def searches(client):
            fetch = country_fetcher(client)
            return await fetch(""), await fetch("man"), await fetch("ch")

        everything, by_name, by_code = _run(searches, api)
        assert len(everything) == 3
        assert by_name == [Option("DE", "Germany")]
        assert by_code == [Option("CH", "Switzerland")]
        assert len(api.requests) == 1

    def test_build_fetcher_passes_options_to_factory(self):
        options = _run(lambda c: build_fetcher("partners", c, exclude_id="p1")(""), FakeApi())
        assert [o.value for o in options] == ["p2"]

    def test_build_fetcher_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown source"):
            build_fetcher("tags", None)
