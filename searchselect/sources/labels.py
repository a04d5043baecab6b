"""Display labels for partner API records."""

from typing import Any, Dict, Mapping, Optional

_NATURAL_PERSON_FIELDS = ("firstName", "lastName", "middleName", "title", "dateOfBirth")
_LEGAL_ENTITY_FIELDS = ("legalName", "tradingName", "registrationNumber", "jurisdiction", "legalForm")


def partner_name(partner: Optional[Mapping[str, Any]]) -> str:
    """Human-readable name of a natural person or legal entity."""
    if partner is None:
        return ""
    if any(f in partner for f in _NATURAL_PERSON_FIELDS):
        parts = [partner.get(f) for f in ("title", "firstName", "middleName", "lastName")]
        return " ".join(p for p in parts if p) or "Unnamed Person"
    if any(f in partner for f in _LEGAL_ENTITY_FIELDS):
        return partner.get("tradingName") or partner.get("legalName") or "Unnamed Entity"
    return "Unknown type of partner"


def partner_label(partner: Mapping[str, Any]) -> str:
    return f"{partner.get('partnerNumber', '')} - {partner_name(partner)}"


def address_label(address: Mapping[str, Any], country_names: Optional[Dict[str, str]] = None) -> str:
    """``street, city, country`` with blank parts skipped.

    The country code is replaced by its name when ``country_names`` knows it.
    """
    code = address.get("countryCode") or ""
    country = (country_names or {}).get(code, code)
    parts = [address.get("streetLine1"), address.get("city"), country]
    return ", ".join(p for p in parts if p)
