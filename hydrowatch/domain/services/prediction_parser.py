"""
Domain service - Inference payload shaping and response parsing.

Endpoints answer in several shapes: a bracketed list, one value per line,
comma separated or whitespace separated. All separators are normalized to
commas and the last numeric token wins, since models may emit per-row
auxiliary values before the terminal consensus prediction.
"""

from __future__ import annotations

import re
from typing import List, Optional, Union

import structlog

from hydrowatch.domain.entities.errors import NoPredictionParsed

logger = structlog.get_logger(__name__)

_SEPARATORS = re.compile(r"[\n\r,\t ]")


def _as_text(output: Union[bytes, str]) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def parse_predictions(output: Union[bytes, str]) -> float:
    """
    Return the last numeric token of an endpoint response.

    Raises:
        NoPredictionParsed: When the output is blank or holds no number
    """
    text = _as_text(output).strip()
    if not text:
        raise NoPredictionParsed(text)

    if text.startswith("["):
        text = text[1:]
    if text.endswith("]"):
        text = text[:-1]

    last: Optional[float] = None
    for token in _SEPARATORS.sub(",", text).split(","):
        token = token.strip()
        if not token:
            continue
        try:
            last = float(token)
        except ValueError:
            logger.warning("prediction_parser.token_skipped", token=token[:64])

    if last is None:
        raise NoPredictionParsed(text)
    return last


def strip_label_column(encoded: Union[bytes, str]) -> bytes:
    """Drop the first field of every non-empty row.

    Rows with a single field are kept as they are. Every output row ends
    with a newline.
    """
    rows: List[str] = []
    for line in _as_text(encoded).strip().split("\n"):
        line = line.strip()
        if not line:
            continue
        fields = line.split(",")
        if len(fields) > 1:
            fields = fields[1:]
        rows.append(",".join(fields) + "\n")
    return "".join(rows).encode("utf-8")
