"""
Application Use Case - Time-series source with tiered fallback

Fetches one raw document per site through an ordered ladder of provider
tiers. The first tier that succeeds for the whole batch wins. The last
rung, ``SourceTier.MOCK``, substitutes an embedded canned document so that
downstream stages always have something to parse; batches produced that
way are flagged and logged so callers can tell they are not real data.
"""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

import structlog

from hydrowatch.domain.entities.errors import ProviderFetchError
from hydrowatch.domain.entities.time_series import (
    Granularity,
    RawDocument,
    SourceTier,
    TimeSeriesBatch,
)
from hydrowatch.domain.gateways.time_series_gateway import ITimeSeriesGateway

logger = structlog.get_logger(__name__)

PREPROCESSING_TIERS = (SourceTier.DAILY_30D, SourceTier.INSTANTANEOUS, SourceTier.MOCK)
DETECTION_TIERS = (SourceTier.INSTANTANEOUS, SourceTier.MOCK)

MOCK_DOCUMENT: RawDocument = json.dumps(
    {
        "value": {
            "timeSeries": [
                {
                    "sourceInfo": {
                        "siteName": "VERMILION RIVER NEAR DANVILLE, IL",
                        "siteCode": [{"value": "03339000", "agencyCode": "USGS"}],
                        "geoLocation": {
                            "geogLocation": {
                                "srs": "EPSG:4326",
                                "latitude": 40.1010833,
                                "longitude": -87.5976111,
                            }
                        },
                    },
                    "variable": {
                        "variableCode": [{"value": "00060"}],
                        "variableName": "Streamflow, ft&#179;/s",
                        "unit": {"unitCode": "ft3/s"},
                        "noDataValue": -999999.0,
                    },
                    "values": [
                        {
                            "value": [
                                {
                                    "value": "72.3",
                                    "qualifiers": ["P"],
                                    "dateTime": "2025-08-24T10:15:00.000-06:00",
                                }
                            ]
                        }
                    ],
                    "name": "USGS:03339000:00060:00000",
                }
            ]
        }
    }
).encode("utf-8")


class TimeSeriesSource:
    """Ordered fallback ladder over a time-series gateway."""

    def __init__(
        self,
        gateway: ITimeSeriesGateway,
        tiers: Sequence[SourceTier] = PREPROCESSING_TIERS,
        mock_document: RawDocument = MOCK_DOCUMENT,
    ):
        if not tiers:
            raise ValueError("At least one source tier is required")
        self.gateway = gateway
        self.tiers = tuple(tiers)
        self.mock_document = mock_document

    async def fetch(
        self, site_ids: Sequence[str], parameter_code: str
    ) -> TimeSeriesBatch:
        """
        Fetch raw documents for ``site_ids``, aligned by index.

        Raises:
            ProviderFetchError: When every tier fails and the ladder has no
                mock rung
        """
        ids = [str(site_id or "") for site_id in site_ids]
        last_error: Optional[ProviderFetchError] = None

        for tier in self.tiers:
            if tier is SourceTier.MOCK:
                logger.warning(
                    "time_series.mock_fallback",
                    site_ids=ids,
                    parameter_code=parameter_code,
                )
                return TimeSeriesBatch(
                    site_ids=ids, documents=self._mock_documents(ids), tier=tier
                )

            try:
                documents = await self.gateway.fetch(
                    ids, parameter_code, Granularity(tier.value)
                )
            except ProviderFetchError as exc:
                last_error = exc
                logger.warning(
                    "time_series.tier_failed",
                    tier=tier.value,
                    site_id=exc.site_id,
                    error=str(exc),
                )
                continue

            logger.info("time_series.fetched", tier=tier.value, sites=len(ids))
            return TimeSeriesBatch(site_ids=ids, documents=list(documents), tier=tier)

        raise last_error or ProviderFetchError("No provider tier succeeded")

    def _mock_documents(self, site_ids: List[str]) -> List[Optional[RawDocument]]:
        documents: List[Optional[RawDocument]] = [None] * len(site_ids)
        for index, site_id in enumerate(site_ids):
            if site_id.strip():
                documents[index] = self.mock_document
                break
        return documents
