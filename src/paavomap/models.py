"""Domain models shared across pipeline modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import SourcesConfig


class CountryLookupError(LookupError):
    """Raised when a country identifier could not be resolved to an ISO3 code."""


class LookupMethod(Enum):
    """Where the administrative boundaries come from."""

    GADM2 = "GADM2"
    GADM3 = "GADM3"
    SUPPLIED = "SUPPLIED"

    @property
    def is_remote(self) -> bool:
        return self is not LookupMethod.SUPPLIED

    @classmethod
    def parse(cls, value: LookupMethod | str) -> LookupMethod:
        """Map a lookup token to a method.

        `GADM2` and `GADM3` select a remote dataset. Any other GADM token is
        rejected; every remaining token means the caller supplies the geometry.
        """
        if isinstance(value, LookupMethod):
            return value
        token = str(value).strip().upper()
        if token == cls.GADM2.value:
            return cls.GADM2
        if token == cls.GADM3.value:
            return cls.GADM3
        if "GADM" in token:
            raise ValueError(f"Unknown GADM lookup method '{value}'. Use GADM2 or GADM3.")
        return cls.SUPPLIED


@dataclass(frozen=True, slots=True)
class BoundarySource:
    """One remote boundary layer: an archive URL plus the layer file inside it.

    GADM ships every level of a country in one archive, so `url` carries only
    the ISO3 code. `uri` is the locator that carries both code and level.
    """

    method: LookupMethod
    iso3: str
    level: int
    url: str
    member: str

    @property
    def uri(self) -> str:
        return f"{self.url}!{self.member}"

    @classmethod
    def for_method(
        cls,
        method: LookupMethod,
        iso3: str,
        level: int,
        sources: SourcesConfig,
    ) -> BoundarySource:
        if method is LookupMethod.GADM2:
            url_template, member_template = sources.gadm2_url, sources.gadm2_member
        elif method is LookupMethod.GADM3:
            url_template, member_template = sources.gadm3_url, sources.gadm3_member
        else:
            raise ValueError(f"Lookup method {method.value} has no remote source")
        return cls(
            method=method,
            iso3=iso3,
            level=level,
            url=url_template.format(iso3=iso3, level=level),
            member=member_template.format(iso3=iso3, level=level),
        )


@dataclass(frozen=True, slots=True)
class ResolvedShape:
    """Boundary geometry plus the display name used in the title."""

    shape: Any
    name: str | None
    source: BoundarySource | None = None
