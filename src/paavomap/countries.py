"""Country name to ISO3 code resolution."""

from __future__ import annotations

import logging

import pycountry


_LOGGER = logging.getLogger("paavomap.countries")


def normalize_country(country: str) -> str | None:
    """Return an ISO3 code for `country`.

    Identifiers of three characters or fewer are taken to be codes already and
    are returned unchanged. Longer strings are treated as country names and
    looked up with pycountry, first by exact name/alias and then fuzzily.
    Returns None when nothing matches.
    """
    if len(country) <= 3:
        return country

    _LOGGER.info("attempting to find matching country iso3c code for '%s'", country)
    name = country.strip()
    try:
        return pycountry.countries.lookup(name).alpha_3
    except LookupError:
        pass
    try:
        hits = pycountry.countries.search_fuzzy(name)
    except LookupError:
        hits = []
    if hits and getattr(hits[0], "alpha_3", None):
        return hits[0].alpha_3
    _LOGGER.warning("No ISO3 code found for country '%s'", country)
    return None
