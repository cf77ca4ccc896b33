"""Phone normalization scoped to a channel's country.

Inbound numbers from the vendor may be international (``+33644961111``),
international without the plus (``0033644961111`` or ``33644961111``) or
national (``0644961111``). Everything that can be placed in a country is
rewritten to E.164 and wrapped in a ``tel:`` URN; short codes and
alphanumeric senders are kept as they came.
"""

from __future__ import annotations

import re

TEL_SCHEME = "tel:"

# ISO 3166 alpha-2 -> international calling code
COUNTRY_CALLING_CODES: dict[str, str] = {
    "AE": "971", "AR": "54", "AT": "43", "AU": "61", "BE": "32", "BF": "226",
    "BJ": "229", "BR": "55", "CA": "1", "CD": "243", "CH": "41", "CI": "225",
    "CL": "56", "CM": "237", "CN": "86", "CO": "57", "CZ": "420", "DE": "49",
    "DK": "45", "DZ": "213", "EC": "593", "EG": "20", "ES": "34", "ET": "251",
    "FI": "358", "FR": "33", "GA": "241", "GB": "44", "GF": "594", "GH": "233",
    "GN": "224", "GP": "590", "GR": "30", "HT": "509", "IE": "353", "IN": "91",
    "IT": "39", "JP": "81", "KE": "254", "LU": "352", "MA": "212", "MC": "377",
    "MG": "261", "ML": "223", "MQ": "596", "MU": "230", "MX": "52", "NC": "687",
    "NE": "227", "NG": "234", "NL": "31", "NO": "47", "PE": "51", "PF": "689",
    "PH": "63", "PL": "48", "PT": "351", "RE": "262", "RO": "40", "RW": "250",
    "SE": "46", "SM": "378", "SN": "221", "TD": "235", "TG": "228", "TN": "216",
    "TR": "90", "UG": "256", "US": "1", "VA": "39", "YT": "262", "ZA": "27",
}

# Countries whose national numbers keep the leading 0 after the calling code.
KEEP_TRUNK_PREFIX = {"IT", "SM", "VA"}

# National significant numbers longer than the usual 10 digits.
_MAX_NATIONAL_DIGITS: dict[str, int] = {"BR": 11, "CN": 11, "DE": 11, "AT": 12}

# Anything shorter is a short code and is never given a country prefix.
MIN_NUMBER_DIGITS = 7


def normalize_phone(phone: str | None, country: str) -> str | None:
    """Normalize a phone number to E.164 using ``country`` for national numbers.

    Args:
        phone: Raw phone number, optionally carrying a ``tel:`` prefix.
        country: ISO 3166 alpha-2 code of the channel's country.

    Returns:
        ``+<digits>`` for numbers that could be placed, the bare digits for
        short codes or unknown countries, or None if there are no digits.

    Examples:
        >>> normalize_phone("0644961111", "FR")
        '+33644961111'
        >>> normalize_phone("+33644961111", "US")
        '+33644961111'
        >>> normalize_phone("36105", "FR")
        '36105'
    """
    if not phone:
        return None

    candidate = phone.strip()
    if candidate.lower().startswith(TEL_SCHEME):
        candidate = candidate[len(TEL_SCHEME) :].strip()

    digits = re.sub(r"\D", "", candidate)
    if not digits:
        return None

    if candidate.startswith("+"):
        return f"+{digits}"

    if digits.startswith("00") and len(digits) - 2 >= MIN_NUMBER_DIGITS:
        return f"+{digits[2:]}"

    if len(digits) < MIN_NUMBER_DIGITS:
        return digits

    country = country.upper()
    calling_code = COUNTRY_CALLING_CODES.get(country)
    if calling_code is None:
        return digits

    # Calling code already present, only the plus is missing
    max_national = _MAX_NATIONAL_DIGITS.get(country, 10)
    if digits.startswith(calling_code) and len(digits) > max_national:
        return f"+{digits}"

    if digits.startswith("0") and country not in KEEP_TRUNK_PREFIX:
        digits = digits[1:]

    return f"+{calling_code}{digits}"


def tel_urn_for_country(phone: str, country: str) -> str:
    """Build a ``tel:`` URN for a sender, normalized for ``country``.

    Senders without any digit (alphanumeric sender ids) keep their raw value.
    """
    stripped = phone.strip()
    if not stripped:
        raise ValueError("phone number is required to build a tel URN")

    normalized = normalize_phone(stripped, country)
    return f"{TEL_SCHEME}{normalized or stripped}"


def urn_path(urn: str) -> str:
    """Return the address part of a ``tel:`` URN (or the value unchanged)."""
    if urn.lower().startswith(TEL_SCHEME):
        return urn[len(TEL_SCHEME) :]
    return urn
