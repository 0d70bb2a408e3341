"""
Infrastructure Gateway - USGS Water Services

Fetches WaterML-as-JSON documents from the USGS NWIS web services:
instantaneous values (``/iv``) for the latest reading and daily values
(``/dv``) for a rolling window of daily means.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Sequence

import httpx
import structlog

from hydrowatch.domain.entities.errors import ProviderFetchError
from hydrowatch.domain.entities.time_series import Granularity, RawDocument
from hydrowatch.domain.gateways.time_series_gateway import ITimeSeriesGateway
from hydrowatch.shared.consts import DAILY_MEAN_STATISTIC_CODE

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UsgsWaterServicesGateway(ITimeSeriesGateway):
    """Implementation of the time-series gateway over the NWIS HTTP API."""

    def __init__(
        self,
        base_url: str = "https://waterservices.usgs.gov/nwis",
        timeout: float = 10.0,
        daily_window_days: int = 30,
        daily_statistic_code: str = DAILY_MEAN_STATISTIC_CODE,
        max_concurrency: int = 4,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the water services gateway.

        Args:
            base_url: NWIS base URL (without the ``/iv`` or ``/dv`` suffix)
            timeout: Timeout applied to each site request, in seconds
            daily_window_days: Length of the daily-values window
            daily_statistic_code: Aggregation statistic for daily values
            max_concurrency: Maximum number of site requests in flight
            clock: Source of "now" for the daily window
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.daily_window_days = daily_window_days
        self.daily_statistic_code = daily_statistic_code
        self.max_concurrency = max(1, max_concurrency)
        self._clock = clock

    async def fetch(
        self,
        site_ids: Sequence[str],
        parameter_code: str,
        granularity: Granularity,
    ) -> List[Optional[RawDocument]]:
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async with httpx.AsyncClient(timeout=self.timeout) as client:

            async def fetch_one(site_id: str) -> Optional[RawDocument]:
                site_id = (site_id or "").strip()
                if not site_id:
                    return None
                async with semaphore:
                    return await self._fetch_site(
                        client, site_id, parameter_code, granularity
                    )

            # the first failing site cancels the requests still in flight
            try:
                async with asyncio.TaskGroup() as group:
                    tasks = [group.create_task(fetch_one(s)) for s in site_ids]
            except ExceptionGroup as failures:
                raise failures.exceptions[0] from None

            return [task.result() for task in tasks]

    def build_request(
        self, site_id: str, parameter_code: str, granularity: Granularity
    ):
        """URL and query parameters for one site."""
        params = {
            "format": "json",
            "sites": site_id,
            "parameterCd": parameter_code,
        }
        if granularity is Granularity.INSTANTANEOUS:
            return f"{self.base_url}/iv/", params

        end = self._clock().astimezone(timezone.utc)
        start = end - timedelta(days=self.daily_window_days)
        params.update(
            {
                "statCd": self.daily_statistic_code,
                "startDT": start.strftime("%Y-%m-%d"),
                "endDT": end.strftime("%Y-%m-%d"),
            }
        )
        return f"{self.base_url}/dv/", params

    async def _fetch_site(
        self,
        client: httpx.AsyncClient,
        site_id: str,
        parameter_code: str,
        granularity: Granularity,
    ) -> RawDocument:
        url, params = self.build_request(site_id, parameter_code, granularity)
        logger.debug(
            "water_services.request",
            url=url,
            site_id=site_id,
            granularity=granularity.value,
        )

        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.content

        except httpx.HTTPStatusError as e:
            logger.warning(
                "water_services.http_error",
                status_code=e.response.status_code,
                site_id=site_id,
                granularity=granularity.value,
            )
            raise ProviderFetchError(
                f"Water services returned status {e.response.status_code}",
                site_id=site_id,
                details={"granularity": granularity.value},
            ) from e

        except httpx.RequestError as e:
            logger.warning(
                "water_services.request_error",
                error=str(e),
                site_id=site_id,
                granularity=granularity.value,
            )
            raise ProviderFetchError(
                f"Water services request failed: {e}",
                site_id=site_id,
                details={"granularity": granularity.value},
            ) from e
