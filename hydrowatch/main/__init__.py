"""
Composition root.

Builds settings from the environment, wires the dependency container and
exposes the FastAPI app and the preprocessing worker.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
]
