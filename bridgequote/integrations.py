"""Area classification of subject properties by zip code.

The classification is informational only and never feeds pricing.  The
lookup is an injected collaborator with its own cache so the pricing engine
stays stateless.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Tuple

import httpx
from pydantic import BaseModel

from bridgequote.config import Settings, get_settings

logger = logging.getLogger(__name__)

POPULATION_VARIABLE = "B01003_001E"
INVALID_ZIP_MESSAGE = "Please enter a valid 5-digit zip code"
NOT_FOUND_MESSAGE = "Zip code not found in our database"
UNAVAILABLE_MESSAGE = (
    "Unable to verify zip code at this time. Please try again in a few minutes "
    "or contact support if the issue persists."
)


class AreaType(str, Enum):
    URBAN = "urban"
    RURAL = "rural"


class AreaClassification(BaseModel):
    zip_code: str
    area_type: AreaType
    population: int
    confidence: str = "high"
    source: str = "census_api"


class AreaLookupResult(BaseModel):
    found: bool
    classification: Optional[AreaClassification] = None
    error: Optional[str] = None


def clean_zip(zip_code: str) -> str:
    """Strip non-digits and keep the first five."""
    return re.sub(r"\D", "", zip_code or "")[:5]


def is_valid_zip(zip_code: str) -> bool:
    return len(re.sub(r"\D", "", zip_code or "")) == 5


class AreaCache(Protocol):
    def get(self, zip_code: str) -> Optional[AreaClassification]: ...

    def set(self, zip_code: str, classification: AreaClassification) -> None: ...

    def clear(self) -> None: ...

    def values(self) -> List[AreaClassification]: ...


class InMemoryAreaCache:
    """Process-local cache with a fixed time-to-live."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[AreaClassification, float]] = {}

    def get(self, zip_code: str) -> Optional[AreaClassification]:
        entry = self._entries.get(zip_code)
        if entry is None:
            return None
        classification, stored_at = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[zip_code]
            return None
        return classification

    def set(self, zip_code: str, classification: AreaClassification) -> None:
        self._entries[zip_code] = (classification, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def values(self) -> List[AreaClassification]:
        return [c for c, _ in self._entries.values()]


class CensusAreaLookup:
    """Classify zip codes as urban or rural from Census ZCTA population."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[AreaCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else InMemoryAreaCache(self.settings.area_cache_ttl_seconds)
        self._transport = transport

    def _classify_population(self, population: int) -> AreaType:
        if population >= self.settings.urban_population_threshold:
            return AreaType.URBAN
        return AreaType.RURAL

    async def _population(self, zip_code: str) -> Optional[int]:
        """Return the ZCTA population, or ``None`` when Census has no such zip.

        Transport failures and unexpected statuses raise ``httpx.HTTPError``.
        """

        params = {"get": POPULATION_VARIABLE, "for": f"zip code tabulation area:{zip_code}"}
        if self.settings.census_api_key:
            params["key"] = self.settings.census_api_key

        async with httpx.AsyncClient(
            timeout=self.settings.area_lookup_timeout_seconds, transport=self._transport
        ) as client:
            r = await client.get(self.settings.census_api_base_url, params=params)
            if r.status_code in (204, 404):
                return None
            r.raise_for_status()
            if not r.content:
                return None
            data = r.json()

        # Census replies with a header row followed by [population, zcta].
        if not isinstance(data, list) or len(data) < 2 or not data[1]:
            return None
        try:
            population = int(data[1][0])
        except (TypeError, ValueError):
            return None
        return population if population > 0 else None

    async def classify(self, zip_code: str) -> AreaLookupResult:
        clean = clean_zip(zip_code)
        if len(clean) != 5:
            return AreaLookupResult(found=False, error=INVALID_ZIP_MESSAGE)

        cached = self.cache.get(clean)
        if cached is not None:
            return AreaLookupResult(found=True, classification=cached)

        try:
            population = await self._population(clean)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Census lookup failed for %s: %s", clean, exc)
            return AreaLookupResult(found=False, error=UNAVAILABLE_MESSAGE)

        if population is None:
            return AreaLookupResult(found=False, error=NOT_FOUND_MESSAGE)

        classification = AreaClassification(
            zip_code=clean,
            area_type=self._classify_population(population),
            population=population,
        )
        self.cache.set(clean, classification)
        return AreaLookupResult(found=True, classification=classification)

    async def batch_classify(self, zip_codes: List[str], delay: float = 0.1) -> List[AreaLookupResult]:
        """Classify zips one at a time, pausing between requests."""
        results: List[AreaLookupResult] = []
        for zip_code in zip_codes:
            results.append(await self.classify(zip_code))
            if delay > 0:
                await asyncio.sleep(delay)
        return results

    async def is_rural(self, zip_code: str) -> Optional[bool]:
        result = await self.classify(zip_code)
        if not result.found:
            return None
        return result.classification.area_type == AreaType.RURAL

    async def is_urban(self, zip_code: str) -> Optional[bool]:
        result = await self.classify(zip_code)
        if not result.found:
            return None
        return result.classification.area_type == AreaType.URBAN

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> Dict[str, int]:
        items = self.cache.values()
        return {
            "size": len(items),
            "rural": sum(1 for c in items if c.area_type == AreaType.RURAL),
            "urban": sum(1 for c in items if c.area_type == AreaType.URBAN),
        }
