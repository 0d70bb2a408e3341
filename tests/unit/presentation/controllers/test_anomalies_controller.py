from __future__ import annotations

import pytest
from fastapi import HTTPException

from hydrowatch.application.dtos.anomaly_dto import AnomalyCheckRequestDTO
from hydrowatch.domain.entities.errors import (
    ConfigurationError,
    EndpointConfigurationError,
    ProviderFetchError,
)
from hydrowatch.domain.entities.prediction import (
    AnomalyBatchResult,
    PredictionResult,
    SiteFailure,
)
from hydrowatch.presentation.controllers.anomalies_controller import (
    check_anomalies,
    check_site,
)


def _result(site_id: str = "03339000") -> PredictionResult:
    return PredictionResult(
        site_id=site_id,
        dataset_key=f"processed/{site_id}/1756052100.csv",
        observed_value=72.3,
        predicted_value=66.2,
        percent_change=8.437,
        anomalous=False,
    )


class _DetectUseCase:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def execute(self, *args):
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_check_anomalies_returns_items_and_failures():
    use_case = _DetectUseCase(
        AnomalyBatchResult(
            items=[_result()],
            failures=[SiteFailure("05558300", "provider down", "ProviderFetchError")],
        )
    )
    payload = AnomalyCheckRequestDTO(
        sites=["03339000", "05558300"], threshold_percent=30
    )

    response = await check_anomalies(payload=payload, detect_use_case=use_case)

    assert use_case.calls == [(["03339000", "05558300"], None, 30.0)]
    assert response.items[0].site == "03339000"
    assert response.failures[0].error_type == "ProviderFetchError"


@pytest.mark.asyncio
async def test_check_anomalies_rejects_bad_request():
    use_case = _DetectUseCase(error=ConfigurationError("At least one site id is required"))

    with pytest.raises(HTTPException) as exc_info:
        await check_anomalies(
            payload=AnomalyCheckRequestDTO(sites=[]), detect_use_case=use_case
        )

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_check_site_returns_prediction():
    use_case = _DetectUseCase(_result())

    response = await check_site(
        site_id="03339000", parameter="00060", detection_use_case=use_case
    )

    assert use_case.calls == [("03339000", "00060")]
    assert response.predicted_value == 66.2
    assert response.mock_data is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected_status"),
    [
        (EndpointConfigurationError("Inference endpoint is not configured"), 503),
        (ProviderFetchError("provider down", site_id="03339000"), 502),
    ],
)
async def test_check_site_maps_domain_errors(error, expected_status):
    with pytest.raises(HTTPException) as exc_info:
        await check_site(
            site_id="03339000",
            parameter=None,
            detection_use_case=_DetectUseCase(error=error),
        )

    assert exc_info.value.status_code == expected_status
    assert exc_info.value.detail == error.message
