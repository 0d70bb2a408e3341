"""Domain service for classifying observed-vs-predicted deviations."""

from typing import Optional

from hydrowatch.domain.entities.prediction import AnomalyDecision

EPSILON = 1e-9
DEFAULT_THRESHOLD_PERCENT = 20.0
DEFAULT_MINIMUM_FLOOR = 15.0


def percent_change(observed: float, predicted: float) -> float:
    """Relative deviation of ``predicted`` from ``observed``, in percent.

    The denominator is the observed magnitude, so the function is not
    symmetric in its arguments.
    """
    return abs(predicted - observed) / max(EPSILON, abs(observed)) * 100.0


class AnomalyDecider:
    """Threshold/floor policy over a single observed and predicted pair."""

    def __init__(
        self,
        threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
        minimum_floor: float = DEFAULT_MINIMUM_FLOOR,
    ):
        self.threshold_percent = threshold_percent
        self.minimum_floor = minimum_floor

    def decide(
        self, observed: float, predicted: float, threshold_percent: Optional[float] = None
    ) -> AnomalyDecision:
        """
        Classify a deviation.

        ``anomalous`` requires the deviation to exceed the threshold and the
        prediction to exceed the floor. Percent change is computed on the
        raw values; only the returned observed/predicted are rounded.

        Args:
            observed: Latest observed value
            predicted: Value returned by the inference endpoint
            threshold_percent: Per-call override; values <= 0 use the
                configured threshold
        """
        threshold = self.threshold_percent
        if threshold_percent is not None and threshold_percent > 0:
            threshold = threshold_percent

        change = percent_change(observed, predicted)
        anomalous = change > threshold and predicted > self.minimum_floor

        return AnomalyDecision(
            observed_value=round(observed, 2),
            predicted_value=round(predicted, 2),
            percent_change=change,
            anomalous=anomalous,
        )
