"""HTTP surface: anomaly checks, dataset preprocessing and system probes."""

from hydrowatch.presentation import controllers

__all__ = ["controllers"]
