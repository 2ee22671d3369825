import pytest

from finance_engine.formatting import currency_symbol, format_currency


@pytest.mark.parametrize("amount, currency, expected", [
    (1500000, 'IDR', 'Rp 1.500.000'),
    (999.6, 'IDR', 'Rp 1.000'),
    (1234.56, 'USD', '$1,234.56'),
    (0, 'EUR', '€0.00'),
    (12.5, 'XYZ', 'XYZ12.50'),
])
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_format_currency_without_symbol():
    assert format_currency(1234.56, include_sign=False) == '1,234.56'
    assert format_currency(2500000, 'idr', include_sign=False) == '2.500.000'


def test_currency_symbol_lookup():
    assert currency_symbol('sgd') == 'S$'
    assert currency_symbol('ABC') == 'ABC'
