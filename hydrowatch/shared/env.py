"""Environment utilities for resolving secret files.

Deployments mount the alert webhook URL, the inference endpoint URL and the
Mongo URI as Docker secrets; ``ALERTS_WEBHOOK_URL_FILE=/run/secrets/hook``
becomes ``ALERTS_WEBHOOK_URL`` before the settings are read.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SECRET_SUFFIX = "_FILE"


def _read_secret(key: str, file_path: str) -> Optional[str]:
    try:
        return Path(file_path).read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        event = "env.secret_file.missing"
        error = exc
    except UnicodeDecodeError as exc:
        event = "env.secret_file.decode_failed"
        error = exc
    except OSError as exc:
        event = "env.secret_file.load_failed"
        error = exc
    logger.warning(event, extra={"key": key, "path": file_path, "error": str(error)})
    return None


def load_secret_file_variables() -> None:
    """
    Expose the content of every ``KEY_FILE`` secret as ``KEY``.

    Variables that are already set win over their secret file. Errors are
    logged and never raised.
    """
    for key, file_path in list(os.environ.items()):
        if not key.endswith(SECRET_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_SUFFIX)]
        if os.environ.get(target_key):
            continue
        value = _read_secret(key, file_path)
        if value is not None:
            os.environ[target_key] = value


load_secret_file_variables()
