"""
Domain service - Time-series document parsing.

Walks a WaterML-as-JSON document once and yields every observation, grouped
by series. Parsing is lenient at point level:

* a point whose ``dateTime`` is not an RFC 3339 instant (offset or ``Z``
  required) is dropped;
* a point whose ``value`` is not a number is kept with a best-effort value:
  the longest leading numeric prefix, or 0.0 when there is none. This can
  silently corrupt a dataset, so every coercion is logged as a warning.

Qualifier flags on points are ignored.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import structlog

from hydrowatch.domain.entities.errors import DocumentParseError
from hydrowatch.domain.entities.time_series import (
    Observation,
    ParsedDocument,
    RawDocument,
    SeriesObservations,
)

logger = structlog.get_logger(__name__)

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; None when it is not an absolute instant."""
    if not isinstance(value, str) or not _RFC3339.match(value):
        return None
    normalized = value.upper()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def scan_float(value: Any) -> Tuple[float, bool]:
    """
    Read a number the permissive way.

    Returns the parsed value and whether it was read cleanly.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value), True
    if not isinstance(value, str):
        return 0.0, False
    try:
        return float(value), True
    except ValueError:
        pass
    match = _LEADING_FLOAT.match(value)
    if not match:
        return 0.0, False
    return float(match.group(0)), False


def _load_document(raw: RawDocument) -> Dict[str, Any]:
    try:
        payload = json.loads(raw)
    except (ValueError, TypeError) as exc:
        raise DocumentParseError(f"Failed to parse time-series JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DocumentParseError("Time-series document must be a JSON object")
    return payload


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _site_id(source_info: Dict[str, Any]) -> str:
    codes = _as_list(source_info.get("siteCode"))
    if codes and isinstance(codes[0], dict):
        return str(codes[0].get("value") or "")
    return ""


def _coordinate(location: Dict[str, Any], name: str) -> float:
    value, _ = scan_float(location.get(name, 0.0))
    return value


def parse_document(raw: RawDocument) -> ParsedDocument:
    """
    Parse a raw document into observations grouped by series.

    Raises:
        DocumentParseError: When the document is not a JSON object
    """
    payload = _load_document(raw)
    time_series = _as_list(_as_dict(payload.get("value")).get("timeSeries"))

    series: List[SeriesObservations] = []
    skipped = 0

    for entry in time_series:
        entry = _as_dict(entry)
        source_info = _as_dict(entry.get("sourceInfo"))
        location = _as_dict(_as_dict(source_info.get("geoLocation")).get("geogLocation"))
        variable = _as_dict(entry.get("variable"))

        site_id = _site_id(source_info)
        unit = str(_as_dict(variable.get("unit")).get("unitCode") or "")
        latitude = _coordinate(location, "latitude")
        longitude = _coordinate(location, "longitude")
        name = str(entry.get("name") or site_id)

        observations: List[Observation] = []
        for block in _as_list(entry.get("values")):
            for point in _as_list(_as_dict(block).get("value")):
                point = _as_dict(point)
                timestamp = parse_instant(point.get("dateTime"))
                if timestamp is None:
                    skipped += 1
                    logger.warning(
                        "feature_encoder.timestamp_unparsable",
                        series=name,
                        date_time=point.get("dateTime"),
                    )
                    continue

                value, clean = scan_float(point.get("value"))
                if not clean:
                    logger.warning(
                        "feature_encoder.value_unparsable",
                        series=name,
                        raw_value=point.get("value"),
                        coerced_value=value,
                    )

                observations.append(
                    Observation(
                        site_id=site_id,
                        timestamp=timestamp,
                        value=value,
                        unit=unit,
                        latitude=latitude,
                        longitude=longitude,
                    )
                )

        series.append(
            SeriesObservations(
                name=name,
                site_id=site_id,
                unit=unit,
                latitude=latitude,
                longitude=longitude,
                observations=observations,
            )
        )

    return ParsedDocument(series=series, skipped_points=skipped)
