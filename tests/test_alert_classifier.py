import math

import pytest
from core.models.alert_level import AlertLevel
from core.processing.alert_classifier import classify


class TestClassify:
    """Temperature / smoke thresholds to alert level."""

    @pytest.mark.parametrize("temperature, smoke, expected", [
        (85, 0, AlertLevel.HIGH),
        (0, 85, AlertLevel.HIGH),
        (65, 0, AlertLevel.MEDIUM),
        (45, 0, AlertLevel.LOW),
        (35, 25, AlertLevel.NONE),
        (20, 35, AlertLevel.LOW),
    ])
    def test_reference_values(self, temperature, smoke, expected):
        assert classify(temperature, smoke) == expected

    @pytest.mark.parametrize("temperature, smoke, expected", [
        (80, 0, AlertLevel.MEDIUM),
        (0, 80, AlertLevel.MEDIUM),
        (60, 0, AlertLevel.LOW),
        (0, 60, AlertLevel.LOW),
        (40, 0, AlertLevel.NONE),
        (0, 30, AlertLevel.NONE),
    ])
    def test_thresholds_are_strict(self, temperature, smoke, expected):
        """A value equal to a threshold does not trip that tier."""
        assert classify(temperature, smoke) == expected

    def test_smoke_trips_low_below_temperature_bar(self):
        """Smoke 31 is LOW, temperature 31 is not."""
        assert classify(0, 31) == AlertLevel.LOW
        assert classify(31, 0) == AlertLevel.NONE

    def test_highest_tier_wins(self):
        assert classify(45, 90) == AlertLevel.HIGH
        assert classify(90, 35) == AlertLevel.HIGH
        assert classify(61, 31) == AlertLevel.MEDIUM

    def test_negative_values(self):
        assert classify(-40, -5) == AlertLevel.NONE

    def test_nan_never_trips(self):
        assert classify(math.nan, math.nan) == AlertLevel.NONE


class TestAlertLevelOrder:

    def test_total_order(self):
        assert AlertLevel.NONE < AlertLevel.LOW < AlertLevel.MEDIUM < AlertLevel.HIGH
        assert max(AlertLevel) == AlertLevel.HIGH
        assert sorted([AlertLevel.HIGH, AlertLevel.NONE, AlertLevel.MEDIUM, AlertLevel.LOW]) == [
            AlertLevel.NONE, AlertLevel.LOW, AlertLevel.MEDIUM, AlertLevel.HIGH,
        ]

    def test_weights(self):
        assert AlertLevel.HIGH.weight == 3
        assert AlertLevel.MEDIUM.weight == 2
        assert AlertLevel.LOW.weight == 1

    def test_only_medium_and_high_are_elevated(self):
        assert [level for level in AlertLevel if level.is_elevated()] == [AlertLevel.MEDIUM, AlertLevel.HIGH]
