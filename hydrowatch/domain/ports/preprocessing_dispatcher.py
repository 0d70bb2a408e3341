"""Domain port for dispatching dataset preprocessing to background workers."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence


class IPreprocessingDispatcher(Protocol):
    """Defines how preprocessing runs are queued for asynchronous execution."""

    async def dispatch(
        self,
        *,
        site_ids: Sequence[str],
        dataset_key: str,
        parameter_code: Optional[str] = None,
    ) -> str:
        """Queue a preprocessing run.

        Returns:
            Identifier of the dispatched task (if available).
        """
        ...
