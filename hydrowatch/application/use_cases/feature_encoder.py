"""
Application Use Case - Feature encoding

Turns raw time-series documents into the feature-row text stored in
datasets and sent to the inference endpoint: one CSV row per observation,
no header, no quoting, ``value,timestamp_unix,latitude,longitude,wx_temp``.
Rows follow document order of series and points.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import structlog

from hydrowatch.domain.entities.errors import WeatherLookupError
from hydrowatch.domain.entities.features import FeatureRow
from hydrowatch.domain.entities.time_series import Observation, RawDocument
from hydrowatch.domain.gateways.weather_gateway import IWeatherGateway
from hydrowatch.domain.services.document_parser import parse_document

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EncodedDocument:
    """Rows of one document plus its latest observation."""

    rows: List[FeatureRow] = field(default_factory=list)
    content: bytes = b""
    latest: Optional[Observation] = None
    skipped_points: int = 0


def render_rows(rows: Sequence[FeatureRow]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_NONE)
    for row in rows:
        writer.writerow(row.to_fields())
    return buffer.getvalue().encode("utf-8")


def join_blocks(blocks: Sequence[bytes]) -> bytes:
    """Concatenate row blocks with exactly one newline between them."""
    buffer = bytearray()
    for block in blocks:
        if not block:
            continue
        if buffer and not buffer.endswith(b"\n"):
            buffer.extend(b"\n")
        buffer.extend(block)
    return bytes(buffer)


class FeatureEncoder:
    """Encodes documents, enriching each series with one weather reading."""

    def __init__(self, weather_gateway: IWeatherGateway):
        self.weather_gateway = weather_gateway

    async def encode_document(self, raw: RawDocument) -> EncodedDocument:
        """
        Encode one raw document.

        Raises:
            DocumentParseError: When the document is not a JSON object
        """
        parsed = parse_document(raw)

        rows: List[FeatureRow] = []
        for series in parsed.series:
            temperature = await self._temperature(
                series.latitude, series.longitude, series.name
            )
            rows.extend(
                FeatureRow.from_observation(observation, temperature)
                for observation in series.observations
            )

        logger.debug(
            "feature_encoder.encoded",
            series=len(parsed.series),
            rows=len(rows),
            skipped_points=parsed.skipped_points,
        )
        return EncodedDocument(
            rows=rows,
            content=render_rows(rows),
            latest=parsed.latest_observation(),
            skipped_points=parsed.skipped_points,
        )

    async def encode_batch(self, documents: Sequence[Optional[RawDocument]]) -> bytes:
        """Encode every present document and join the row blocks."""
        blocks = []
        for raw in documents:
            if not raw:
                continue
            encoded = await self.encode_document(raw)
            blocks.append(encoded.content)
        return join_blocks(blocks)

    async def _temperature(self, latitude: float, longitude: float, series: str) -> int:
        try:
            reading = await self.weather_gateway.fetch_weather(latitude, longitude)
        except WeatherLookupError as exc:
            logger.warning(
                "feature_encoder.weather_unavailable",
                series=series,
                latitude=latitude,
                longitude=longitude,
                error=str(exc),
            )
            return 0
        return reading.temperature
