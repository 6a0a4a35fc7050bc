"""Unit tests for booking tariffs."""

import pytest

from bikelock.core.entities.tariff import IMMEDIATE_TARIFF, SCHEDULED_TARIFF, Tariff


class TestImmediateTariff:
    @pytest.mark.parametrize(
        "minutes, expected",
        [(1, 10), (29, 10), (30, 10), (31, 20), (45, 20), (60, 20), (61, 30)],
    )
    def test_ten_per_started_block(self, minutes, expected):
        assert IMMEDIATE_TARIFF.price(minutes) == expected


class TestScheduledTariff:
    @pytest.mark.parametrize("minutes, expected", [(1, 100), (30, 100), (31, 200), (90, 300), (91, 400)])
    def test_hundred_per_started_block(self, minutes, expected):
        assert SCHEDULED_TARIFF.price(minutes) == expected

    def test_tariffs_are_not_blended(self):
        assert SCHEDULED_TARIFF.price(45) == 10 * IMMEDIATE_TARIFF.price(45)


class TestTariffRejections:
    @pytest.mark.parametrize("minutes", [0, -5])
    def test_non_positive_duration_is_never_priced(self, minutes):
        with pytest.raises(ValueError):
            IMMEDIATE_TARIFF.price(minutes)

    def test_custom_block_size(self):
        assert Tariff(rate_per_block=5, block_minutes=15).price(16) == 10
