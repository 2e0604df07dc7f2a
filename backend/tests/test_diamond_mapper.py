"""Tests for supplier item normalization and price conversion."""
import pytest

from src.mappers.diamond import cents_to_price, diamond_from_raw, price_to_cents
from tests.factories import make_raw_item


class TestPriceToCents:
    @pytest.mark.parametrize("price", [0, 1, 99.99, 1234.5, 1999.99, 52310.07, 1.005, 1.015, 2.675, 0.125])
    def test_numeric_price_matches_round(self, price):
        assert price_to_cents(price) == round(price * 100)

    def test_numeric_string(self):
        assert price_to_cents("1234.56") == 123456

    def test_numeric_string_rounds_like_number(self):
        assert price_to_cents("1.005") == round(1.005 * 100) == 100

    def test_infinite_is_absent(self):
        assert price_to_cents(float("inf")) is None
        assert price_to_cents("-Infinity") is None

    def test_none_is_absent(self):
        assert price_to_cents(None) is None

    def test_non_numeric_string_is_absent(self):
        assert price_to_cents("call for price") is None

    def test_empty_string_is_absent(self):
        assert price_to_cents("") is None

    def test_bool_is_absent(self):
        assert price_to_cents(True) is None

    def test_nan_is_absent(self):
        assert price_to_cents(float("nan")) is None
        assert price_to_cents("NaN") is None

    def test_dict_is_absent(self):
        assert price_to_cents({"amount": 10}) is None


class TestCentsToPrice:
    def test_two_decimals(self):
        assert cents_to_price(150050) == "1500.50"

    def test_whole_amount(self):
        assert cents_to_price(100) == "1.00"

    def test_fractional_cents_round(self):
        assert cents_to_price(123.5) == "1.24"


class TestDiamondFromRaw:
    def test_full_item(self):
        record = diamond_from_raw(make_raw_item())
        assert record.id == "DIAMOND/1001"
        assert record.price_cents == 123450
        assert record.image == "https://img.nivoda.test/1001.jpg"
        assert record.certificate.carats == 0.5
        assert record.certificate.shape == "ROUND"
        assert record.certificate.color == "E"
        assert record.certificate.clarity == "VS1"
        assert record.certificate.cut == "EX"
        assert record.certificate.cert_number == "2141438167"

    def test_missing_price_is_none_not_zero(self):
        raw = make_raw_item()
        del raw["price"]
        record = diamond_from_raw(raw)
        assert record.price_cents is None

    def test_missing_diamond_block(self):
        record = diamond_from_raw({"id": "X1", "price": 10})
        assert record.image is None
        assert record.certificate.carats is None
        assert record.certificate.shape is None
        assert record.certificate.cert_number is None

    def test_null_certificate_fields_stay_null(self):
        raw = make_raw_item(image=None, cut=None, color="")
        record = diamond_from_raw(raw)
        assert record.image is None
        assert record.certificate.cut is None
        assert record.certificate.color is None

    def test_float_price_rounds_like_round(self):
        record = diamond_from_raw({"id": "X", "price": 1.005})
        assert record.price_cents == 100

    def test_numeric_id_becomes_string(self):
        record = diamond_from_raw({"id": 42})
        assert record.id == "42"

    def test_serializes_with_camel_case(self):
        data = diamond_from_raw(make_raw_item()).model_dump(by_alias=True)
        assert set(data) == {"id", "priceCents", "image", "certificate"}
        assert data["certificate"]["certNumber"] == "2141438167"

    def test_record_is_immutable(self):
        record = diamond_from_raw(make_raw_item())
        with pytest.raises(Exception):
            record.price_cents = 1
