from __future__ import annotations

from hydrowatch.domain.entities.errors import (
    ConfigurationError,
    DatasetNotFoundError,
    EndpointConfigurationError,
    EndpointError,
    NoPredictionParsed,
    ParseError,
)


def test_endpoint_configuration_error_is_both_kinds() -> None:
    error = EndpointConfigurationError("missing", details={"missing": ["endpoint"]})

    assert isinstance(error, ConfigurationError)
    assert isinstance(error, EndpointError)
    assert error.status_code is None
    assert error.details == {"missing": ["endpoint"]}


def test_no_prediction_parsed_messages() -> None:
    assert isinstance(NoPredictionParsed(""), ParseError)
    assert NoPredictionParsed("").message == "Empty prediction output"
    assert "No numeric predictions" in NoPredictionParsed("abc").message


def test_dataset_not_found_message() -> None:
    assert str(DatasetNotFoundError("processed/1.csv")) == "Dataset processed/1.csv not found"
