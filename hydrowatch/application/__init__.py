"""
Application layer: the anomaly-check and dataset-preprocessing use cases,
plus the DTOs they hand to the presentation layer.
"""

from hydrowatch.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
