"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application: the fetch, encode, infer and detect pipeline, batch
anomaly checks with alerting, dataset preprocessing and health reporting.
"""

from .anomaly_detection_use_case import AnomalyDetectionUseCase
from .dataset_accumulator import DatasetAccumulator
from .detect_anomalies_use_case import DetectAnomaliesUseCase
from .feature_encoder import FeatureEncoder
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .inference_client import InferenceClient
from .preprocess_dataset_use_case import PreprocessDatasetUseCase
from .time_series_source import TimeSeriesSource

__all__ = [
    "AnomalyDetectionUseCase",
    "DatasetAccumulator",
    "DetectAnomaliesUseCase",
    "FeatureEncoder",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "InferenceClient",
    "PreprocessDatasetUseCase",
    "TimeSeriesSource",
]
