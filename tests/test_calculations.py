import unittest

import numpy as np

from stocksignal.schemas.analysis import VolumeStrength
from stocksignal.services.analysis.calculations import (
    sma,
    ema,
    rsi,
    latest_rsi,
    macd,
    bollinger_bands,
    volatility,
    volume_profile,
    price_position,
    get_last_valid,
)
from stocksignal.services.base import InsufficientDataError


class TestMovingAverages(unittest.TestCase):
    def test_ema_period_one_is_identity(self):
        data = np.array([5.0, 3.0, 9.0, 1.0, 7.0])
        np.testing.assert_array_equal(ema(data, 1), data)

    def test_ema_seeds_with_first_value(self):
        data = np.array([10.0, 20.0, 30.0])
        result = ema(data, 3)
        # multiplier = 2 / (3 + 1) = 0.5
        self.assertEqual(result[0], 10.0)
        self.assertAlmostEqual(result[1], 15.0)
        self.assertAlmostEqual(result[2], 22.5)
        self.assertEqual(len(result), len(data))

    def test_ema_rejects_non_positive_period(self):
        with self.assertRaises(ValueError):
            ema(np.array([1.0, 2.0]), 0)

    def test_sma_uses_last_window(self):
        data = np.arange(1.0, 11.0)
        self.assertAlmostEqual(sma(data, 4), 8.5)

    def test_sma_requires_full_window(self):
        with self.assertRaises(InsufficientDataError) as ctx:
            sma(np.array([1.0, 2.0, 3.0]), 5)
        self.assertEqual(ctx.exception.required, 5)
        self.assertEqual(ctx.exception.available, 3)


class TestRSI(unittest.TestCase):
    def test_wilder_smoothing_by_hand(self):
        closes = np.array([10.0, 11.0, 10.0, 12.0])
        result = rsi(closes, period=2)
        self.assertTrue(np.isnan(result[0]))
        self.assertTrue(np.isnan(result[1]))
        # seed: gain 0.5, loss 0.5
        self.assertAlmostEqual(result[2], 50.0)
        # gain (0.5 + 2) / 2 = 1.25, loss (0.5 + 0) / 2 = 0.25, RS = 5
        self.assertAlmostEqual(result[3], 100 - 100 / 6)

    def test_minimum_length_is_period_plus_one(self):
        closes = np.linspace(100, 110, 15)
        self.assertIsNotNone(latest_rsi(closes, 14))
        with self.assertRaises(InsufficientDataError):
            latest_rsi(closes[:14], 14)

    def test_flat_series_uses_epsilon(self):
        value = latest_rsi(np.full(30, 100.0), 14)
        self.assertTrue(np.isfinite(value))
        # no gains over an epsilon loss: RS = 0
        self.assertEqual(value, 0.0)

    def test_only_gains_approaches_100(self):
        value = latest_rsi(np.arange(100.0, 130.0), 14)
        self.assertGreater(value, 99.9)
        self.assertLessEqual(value, 100.0)

    def test_bounded_and_deterministic(self):
        rng = np.random.default_rng(7)
        closes = 100 * np.cumprod(1 + rng.normal(0, 0.03, 80))
        first = latest_rsi(closes)
        second = latest_rsi(closes.copy())
        self.assertEqual(first, second)
        self.assertGreaterEqual(first, 0.0)
        self.assertLessEqual(first, 100.0)


class TestMACD(unittest.TestCase):
    def test_histogram_is_line_minus_signal(self):
        closes = np.linspace(50, 80, 40)
        line, signal, hist = macd(closes)
        np.testing.assert_allclose(hist, line - signal)
        self.assertEqual(len(line), 40)

    def test_rising_series_is_bullish(self):
        line, signal, _ = macd(np.arange(100.0, 130.0))
        self.assertGreater(line[-1], signal[-1])

    def test_flat_series_is_zero(self):
        line, signal, hist = macd(np.full(30, 42.0))
        self.assertEqual(line[-1], 0.0)
        self.assertEqual(signal[-1], 0.0)
        self.assertEqual(hist[-1], 0.0)

    def test_requires_slow_period(self):
        with self.assertRaises(InsufficientDataError):
            macd(np.arange(1.0, 26.0))


class TestBollingerBands(unittest.TestCase):
    def test_population_std(self):
        upper, middle, lower = bollinger_bands(np.arange(100.0, 130.0), 20, 2.0)
        std = np.sqrt(33.25)  # population std of 20 consecutive integers
        self.assertAlmostEqual(middle, 119.5)
        self.assertAlmostEqual(upper, 119.5 + 2 * std)
        self.assertAlmostEqual(lower, 119.5 - 2 * std)

    def test_band_ordering(self):
        rng = np.random.default_rng(11)
        for period in (1, 5, 20):
            closes = 100 + rng.normal(0, 5, 40)
            upper, middle, lower = bollinger_bands(closes, period)
            self.assertGreaterEqual(upper, middle)
            self.assertGreaterEqual(middle, lower)

    def test_requires_period(self):
        with self.assertRaises(InsufficientDataError):
            bollinger_bands(np.arange(1.0, 10.0), 20)


class TestVolatility(unittest.TestCase):
    def test_flat_series_has_zero_volatility(self):
        self.assertEqual(volatility(np.full(30, 100.0)), 0.0)

    def test_annualizes_population_std_of_returns(self):
        # returns +10%, -10%
        value = volatility(np.array([100.0, 110.0, 99.0]))
        self.assertAlmostEqual(value, 0.1 * np.sqrt(252))

    def test_needs_two_prices(self):
        with self.assertRaises(InsufficientDataError):
            volatility(np.array([100.0]))


class TestVolumeProfile(unittest.TestCase):
    def test_high_volume(self):
        volumes = np.array([100.0] * 9 + [1000.0])
        change, strength = volume_profile(volumes)
        # avg 190, (1000 - 190) / 190
        self.assertAlmostEqual(change, 810 / 190 * 100)
        self.assertEqual(strength, VolumeStrength.HIGH)

    def test_low_volume(self):
        volumes = np.array([1000.0] * 9 + [10.0])
        _, strength = volume_profile(volumes)
        self.assertEqual(strength, VolumeStrength.LOW)

    def test_normal_volume(self):
        change, strength = volume_profile(np.full(12, 500.0))
        self.assertEqual(change, 0.0)
        self.assertEqual(strength, VolumeStrength.NORMAL)

    def test_zero_average_volume(self):
        change, strength = volume_profile(np.zeros(10))
        self.assertEqual(change, 0.0)
        self.assertEqual(strength, VolumeStrength.NORMAL)

    def test_requires_lookback(self):
        with self.assertRaises(InsufficientDataError):
            volume_profile(np.full(9, 100.0))


class TestHelpers(unittest.TestCase):
    def test_price_position(self):
        position = price_position(105.0, upper=104.0, lower=96.0, short_ma=104.0)
        self.assertTrue(position["above_upper_band"])
        self.assertFalse(position["below_lower_band"])
        self.assertTrue(position["near_short_term_ma"])

    def test_get_last_valid(self):
        self.assertEqual(get_last_valid(np.array([1.0, 2.0, np.nan])), 2.0)
        self.assertIsNone(get_last_valid(np.array([np.nan, np.nan])))


if __name__ == "__main__":
    unittest.main()
