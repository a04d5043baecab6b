"""``fetch_options`` factories backed by the partner API.

Each factory returns an async ``(search_term) -> list[Option]`` function
suitable for a SearchSelectControl. Errors from the API propagate; the
control logs them and shows "no results".
"""

from typing import Dict, List, Optional

from ..control import FetchOptions
from ..options import Option
from .client import PartnerApiClient
from .labels import address_label, partner_label


def partner_fetcher(client: PartnerApiClient, exclude_id: Optional[str] = None) -> FetchOptions:
    """Search partners; ``exclude_id`` drops one partner (e.g. the one being edited)."""

    async def fetch(term: str) -> List[Option]:
        partners = await client.search_partners(term)
        return [
            Option(value=p.get("id") or "", label=partner_label(p))
            for p in partners
            if exclude_id is None or p.get("id") != exclude_id
        ]

    return fetch


def country_fetcher(client: PartnerApiClient) -> FetchOptions:
    """Filter the country list by code or name.

    The list is fetched once and filtered locally; it does not change while
    the application runs.
    """
    cache: Dict[str, List[Option]] = {}

    async def fetch(term: str) -> List[Option]:
        if "all" not in cache:
            countries = await client.list_countries()
            cache["all"] = [Option(value=c["code"], label=c["name"]) for c in countries]

        needle = term.strip().lower()
        if not needle:
            return list(cache["all"])
        return [
            o for o in cache["all"]
            if needle in o.label.lower() or o.value.lower() == needle
        ]

    return fetch


def address_fetcher(client: PartnerApiClient) -> FetchOptions:
    """Search addresses, labelled with the country name where it is known."""
    country_names: Dict[str, str] = {}

    async def fetch(term: str) -> List[Option]:
        if not country_names:
            for country in await client.list_countries():
                country_names[country["code"]] = country["name"]
        addresses = await client.search_addresses(term)
        return [
            Option(value=a.get("id") or "", label=address_label(a, country_names))
            for a in addresses
        ]

    return fetch


FETCHERS = {
    "partners": partner_fetcher,
    "addresses": address_fetcher,
    "countries": country_fetcher,
}


def build_fetcher(kind: str, client: PartnerApiClient, **options) -> FetchOptions:
    """Build the ``kind`` fetcher; ``options`` go to its factory (e.g. ``exclude_id``)."""
    try:
        factory = FETCHERS[kind]
    except KeyError:
        raise ValueError(f"Unknown source '{kind}'. Available: {sorted(FETCHERS)}") from None
    return factory(client, **options)
