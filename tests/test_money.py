from datetime import date, datetime

import pytest

from utils.money import format_amount, format_date, format_eur, format_hrk, format_url


def test_format_eur_groups_thousands():
    assert format_eur(1234.5) == "€1\u202f234.50"
    assert format_eur(0) == "€0.00"


def test_format_hrk_uses_croatian_separators():
    assert format_hrk(1234.5) == "1.234,50 kn"


@pytest.mark.parametrize(
    "created, expected",
    [
        (datetime(2022, 12, 31, 23, 59), "1.000,00 kn"),
        ("2022-06-01T10:00:00Z", "1.000,00 kn"),
        (datetime(2023, 1, 1), "€1\u202f000.00"),
        (date(2024, 3, 1), "€1\u202f000.00"),
        (None, "€1\u202f000.00"),
        ("null", "€1\u202f000.00"),
    ],
)
def test_format_amount_picks_currency_by_project_date(created, expected):
    assert format_amount(1000, created) == expected


@pytest.mark.parametrize("amount", [None, 0, ""])
def test_format_amount_placeholder_for_empty(amount):
    assert format_amount(amount, datetime(2024, 1, 1)) == "—"


def test_format_date():
    assert format_date(datetime(2024, 3, 7, 15, 30)) == "7.3.2024."
    assert format_date("2023-11-20") == "20.11.2023."
    assert format_date(None) == "—"
    assert format_date("garbage") == "—"


def test_format_url():
    assert format_url("www.acme.hr") == {"label": "acme.hr", "link": "https://www.acme.hr"}
    assert format_url("http://acme.hr/about") == {
        "label": "acme.hr/about",
        "link": "http://acme.hr/about",
    }
    assert format_url("") is None
    assert format_url(None) is None
