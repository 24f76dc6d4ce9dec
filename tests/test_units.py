"""
Tests for ADA / lovelace conversion
"""

from decimal import Decimal

import pytest

from worker_wallets.units import ada_to_lovelace, lovelace_to_ada


@pytest.mark.unit
class TestAdaToLovelace:
    @pytest.mark.parametrize(
        "ada,expected",
        [
            (1, 1_000_000),
            ("2.5", 2_500_000),
            (Decimal("0.01"), 10_000),
            (0.01, 10_000),
            (0.1 + 0.2, 300_000),
            (Decimal("0.000001"), 1),
        ],
    )
    def test_conversion(self, ada, expected):
        assert ada_to_lovelace(ada) == expected

    def test_rounds_half_to_even(self):
        assert ada_to_lovelace(Decimal("0.0000015")) == 2
        assert ada_to_lovelace(Decimal("0.0000025")) == 2
        assert ada_to_lovelace(Decimal("0.0000035")) == 4
        assert ada_to_lovelace(Decimal("1.0000004")) == 1_000_000

    @pytest.mark.parametrize("ada", [0, -1, "-0.5", Decimal("0.0000004"), Decimal("0.0000005")])
    def test_non_positive_amounts_fail(self, ada):
        with pytest.raises(ValueError):
            ada_to_lovelace(ada)

    @pytest.mark.parametrize("ada", ["abc", "NaN", "Infinity", float("inf"), "1e30", Decimal("1E+100"), 1e300])
    def test_invalid_amounts_fail(self, ada):
        with pytest.raises(ValueError):
            ada_to_lovelace(ada)


@pytest.mark.unit
class TestLovelaceToAda:
    def test_exact_decimal(self):
        assert lovelace_to_ada(10_000) == Decimal("0.01")
        assert lovelace_to_ada(1) == Decimal("0.000001")
        assert lovelace_to_ada(0) == Decimal(0)
