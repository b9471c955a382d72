import pytest

from mixer_admin import utils


@pytest.mark.parametrize(
    "value,expected",
    [
        (150000, "₹1,50,000"),
        (1234.5, "₹1,234.50"),
        (12345678, "₹1,23,45,678"),
        (999, "₹999"),
        (-2500, "-₹2,500"),
        (None, "₹0"),
        ("abc", "₹0"),
    ],
)
def test_format_currency(value, expected):
    assert utils.format_currency(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [(1500, "1.5K"), (250000, "2.5L"), (12000000, "1.2Cr"), (100000, "1L"), (950, "950")],
)
def test_format_compact(value, expected):
    assert utils.format_compact(value) == expected


def test_dates():
    assert utils.format_date("2024-01-05") == "05 Jan 2024"
    assert utils.format_date("2024-03-10T10:00:00.000Z") == "10 Mar 2024"
    assert utils.format_date(None) == "-"
    assert utils.format_date("not a date") == "-"


def test_phone_gst_and_initials():
    assert utils.format_phone("9876543210") == "98765 43210"
    assert utils.format_phone("+91 20 1234 5678") == "+91 20 1234 5678"
    assert utils.format_gst(" 27aapfs1234k1z5 ") == "27AAPFS1234K1Z5"
    assert utils.initials("Shree Ganesh Builders") == "SG"
    assert utils.initials("") == "?"


def test_growth_percentage():
    assert utils.growth_percentage(120, 100) == 20.0
    assert utils.growth_percentage(5, 0) == 100.0
    assert utils.growth_percentage(0, 0) == 0.0


def test_quotation_totals():
    items = [{"quantity": 5, "unit_price": 3500}, {"quantity": 1, "unit_price": 2000}]

    assert utils.line_total(5, 3500, 18) == {"subtotal": 17500, "gst_amount": 3150, "total": 20650}
    assert utils.quotation_totals(items) == {
        "subtotal": 19500,
        "gst_amount": 3510,
        "grand_total": 23010,
    }


def test_matches_query():
    record = {"company_name": "Skyline Constructions", "city": "Pune"}

    assert utils.matches_query(record, "sky", ["company_name"])
    assert utils.matches_query(record, "  ", ["company_name"])
    assert not utils.matches_query(record, "pune", ["company_name"])
