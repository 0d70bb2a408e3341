"""
Domain Gateway - Time Series Provider

This module defines the gateway interface for fetching raw time-series
documents for a batch of monitoring sites.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from hydrowatch.domain.entities.time_series import Granularity, RawDocument


class ITimeSeriesGateway(ABC):
    """Interface for the time-series data provider."""

    @abstractmethod
    async def fetch(
        self,
        site_ids: Sequence[str],
        parameter_code: str,
        granularity: Granularity,
    ) -> List[Optional[RawDocument]]:
        """
        Fetch one raw document per site, in the same order as ``site_ids``.

        Args:
            site_ids: Site identifiers; blank entries yield ``None`` at their
                index without issuing a request
            parameter_code: Measured quantity (e.g. "00060" for discharge)
            granularity: Daily 30-day aggregate or instantaneous latest value

        Returns:
            Raw documents aligned by index with ``site_ids``

        Raises:
            ProviderFetchError: When the request for any site fails
        """
        pass
