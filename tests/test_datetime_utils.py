from datetime import datetime

import pytest

from app.utils.datetime_utils import (
    DATA_VAZIA,
    format_data_hora,
    intervalo_do_dia,
    is_data_vazia,
    parse_data_hora,
)


def test_parse_naive_datetime():
    assert parse_data_hora('2024-03-05T10:15:00') == datetime(2024, 3, 5, 10, 15)


def test_parse_date_only():
    assert parse_data_hora('2024-03-05') == datetime(2024, 3, 5)


def test_parse_offset_converts_to_sao_paulo():
    # 13:00 UTC == 10:00 em Sao Paulo (UTC-3, sem horario de verao desde 2019)
    assert parse_data_hora('2024-03-05T13:00:00Z') == datetime(2024, 3, 5, 10, 0)


def test_parse_missing_and_zero_values_are_empty():
    assert parse_data_hora(None) is DATA_VAZIA
    assert parse_data_hora('0001-01-01T00:00:00') == DATA_VAZIA
    assert parse_data_hora('0001-01-01T00:00:00+00:00') == DATA_VAZIA


@pytest.mark.parametrize('raw', [
    'ontem',
    '2024-13-01',
    123,
    '0001-01-01T01:00:00+05:00',
    '9999-12-31T23:00:00-03:00',
])
def test_parse_invalid_raises(raw):
    with pytest.raises(ValueError):
        parse_data_hora(raw)


def test_is_data_vazia():
    assert is_data_vazia(None)
    assert is_data_vazia(datetime.min)
    assert not is_data_vazia(datetime(2024, 3, 5))


def test_intervalo_do_dia():
    assert intervalo_do_dia(datetime(2024, 3, 5, 23, 59, 59)) == (
        datetime(2024, 3, 5),
        datetime(2024, 3, 6),
    )
    assert intervalo_do_dia(datetime.max) == (datetime(9999, 12, 31), None)


def test_format_data_hora():
    assert format_data_hora(datetime(2024, 3, 5, 10, 0, 0, 500)) == '2024-03-05T10:00:00'
    assert format_data_hora(None) is None
