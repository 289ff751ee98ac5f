# tests/test_identity.py
from decimal import Decimal

from shoepos.core.identity import (
    batch_timestamp,
    format_size,
    sku_fingerprint,
    strip_unit_suffix,
    traceable_code,
)


class TestFingerprint:

    def test_fingerprint_uses_brand_article_and_size(self):
        assert sku_fingerprint("Nike", "AX1", 9) == "Nike-AX1-9"

    def test_missing_article_number_becomes_na(self):
        assert sku_fingerprint("Nike", None, 10) == "Nike-NA-10"
        assert sku_fingerprint("Nike", "", 10) == "Nike-NA-10"

    def test_integral_sizes_have_no_decimal_part(self):
        assert format_size(9.0) == "9"
        assert format_size("10") == "10"
        assert format_size(Decimal("42.00")) == "42"

    def test_half_sizes_keep_decimal_part(self):
        assert format_size(9.5) == "9.5"
        assert sku_fingerprint("Adidas", "SS80", 8.5) == "Adidas-SS80-8.5"


class TestTraceableCode:

    def test_code_is_fingerprint_plus_batch_and_sequence(self):
        code = traceable_code("Nike", "AX1", 9, 1700000000000, 3)
        assert code == "Nike-AX1-9-1700000000000-3"

    def test_codes_in_same_batch_differ_by_sequence(self):
        ts = batch_timestamp()
        codes = {traceable_code("Nike", "AX1", 9, ts, i) for i in range(50)}
        assert len(codes) == 50

    def test_batch_timestamp_is_milliseconds(self):
        assert batch_timestamp() > 10 ** 12


class TestStripUnitSuffix:

    def test_strips_batch_and_sequence(self):
        assert strip_unit_suffix("Nike-AX1-9-1700000000000-0") == "Nike-AX1-9"

    def test_plain_fingerprint_is_not_a_unit_code(self):
        assert strip_unit_suffix("Nike-AX1-9") is None

    def test_brand_with_dashes(self):
        assert strip_unit_suffix("New-Balance-574-9.5-1700000000000-12") == "New-Balance-574-9.5"

    def test_non_numeric_suffix_is_rejected(self):
        assert strip_unit_suffix("Nike-AX1-9-abc-0") is None
        assert strip_unit_suffix("") is None
