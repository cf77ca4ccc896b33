"""Phone normalization utilities."""

from .normalize import COUNTRY_CALLING_CODES, normalize_phone, tel_urn_for_country, urn_path

__all__ = [
    "COUNTRY_CALLING_CODES",
    "normalize_phone",
    "tel_urn_for_country",
    "urn_path",
]
