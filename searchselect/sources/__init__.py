"""Partner API collaborators that supply options to search-select controls."""

from .client import PartnerApiClient
from .fetchers import FETCHERS, address_fetcher, build_fetcher, country_fetcher, partner_fetcher
from .labels import address_label, partner_label, partner_name

__all__ = [
    "PartnerApiClient",
    "FETCHERS",
    "address_fetcher",
    "build_fetcher",
    "country_fetcher",
    "partner_fetcher",
    "address_label",
    "partner_label",
    "partner_name",
]
