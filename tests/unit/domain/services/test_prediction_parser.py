import pytest

from hydrowatch.domain.entities.errors import NoPredictionParsed
from hydrowatch.domain.services import prediction_parser
from hydrowatch.domain.services.prediction_parser import (
    parse_predictions,
    strip_label_column,
)
from tests.conftest import RecordingLogger


@pytest.mark.parametrize(
    "output",
    [
        b"66.5",
        b"[66.5]",
        b"10\n20\n66.5",
        b"10,20,66.5",
        b"10 20\t66.5",
        b"[10, 20, 66.5]\n",
        "10\r\n66.5\r\n",
    ],
)
def test_last_numeric_token_wins(output):
    assert parse_predictions(output) == pytest.approx(66.5)


@pytest.mark.parametrize("output", [b"", b"   \n", b"[]"])
def test_blank_output_raises(output):
    with pytest.raises(NoPredictionParsed):
        parse_predictions(output)


def test_output_without_numbers_raises():
    with pytest.raises(NoPredictionParsed) as exc_info:
        parse_predictions(b"abc")
    assert exc_info.value.output == "abc"


def test_non_numeric_tokens_are_skipped_and_logged(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(prediction_parser, "logger", recorder)

    assert parse_predictions(b"12.5,nope,66.5,oops") == pytest.approx(66.5)
    assert recorder.names("warning") == [
        "prediction_parser.token_skipped",
        "prediction_parser.token_skipped",
    ]


def test_strip_label_column_drops_first_field():
    encoded = b"72.300000,1756052100,40.101083,-87.597611,71\n\n70.1,1,2,3,4"

    payload = strip_label_column(encoded)

    rows = payload.decode().splitlines()
    assert rows == ["1756052100,40.101083,-87.597611,71", "1,2,3,4"]
    assert all(len(row.split(",")) == 4 for row in rows)
    assert payload.endswith(b"\n")


def test_strip_label_column_keeps_single_field_rows():
    assert strip_label_column("42\n") == b"42\n"
