import unittest
from datetime import date, datetime
from kitchen.logic.reporting.metrics import (
    dashboard_stats, efficiency, efficiency_and_waste, monthly_comparison,
    product_efficiency, recent_waste, usage_efficiency, waste_percentage
)
from kitchen.utilities.numbers import round2


def _broken_records():
    yield {'currentStock': 10}
    raise RuntimeError("feed interrupted")


class TestEfficiency(unittest.TestCase):

    def test_empty_inputs_use_placeholders(self):
        self.assertEqual(efficiency([], []), 85)
        self.assertEqual(efficiency([{'currentStock': 10}], []), 85)
        self.assertEqual(waste_percentage([], []), 8)
        self.assertEqual(waste_percentage([], [{'quantity': 1}]), 8)

    def test_zero_stock_with_waste(self):
        self.assertEqual(efficiency([{'currentStock': 0}], [{'quantity': 5}]), 100)
        self.assertEqual(waste_percentage([{'currentStock': 0}], [{'quantity': 5}]), 0)

    def test_regular_ratio(self):
        stock = [{'currentStock': 150}, {'currentStock': 50}]
        waste = [{'quantity': 10}, {'quantity': 15}]
        self.assertEqual(waste_percentage(stock, waste), 12.5)
        self.assertEqual(efficiency(stock, waste), 87.5)

    def test_clamped_when_waste_exceeds_stock(self):
        stock = [{'currentStock': 10}]
        waste = [{'quantity': 50}]
        self.assertEqual(efficiency(stock, waste), 0)
        self.assertEqual(waste_percentage(stock, waste), 100)

    def test_rounded_to_two_decimals(self):
        stock = [{'currentStock': 3}]
        waste = [{'quantity': 1}]
        self.assertEqual(waste_percentage(stock, waste), 33.33)
        self.assertEqual(efficiency(stock, waste), 66.67)

    def test_always_within_bounds_and_complementary(self):
        cases = [
            ([5], [0]), ([5], [5]), ([1, 2, 3], [0.5, 0.25]), ([100], [250]), ([40], [10, 10]),
        ]
        for stock_values, waste_values in cases:
            stock = [{'currentStock': v} for v in stock_values]
            waste = [{'quantity': v} for v in waste_values]
            eff = efficiency(stock, waste)
            pct = waste_percentage(stock, waste)
            self.assertGreaterEqual(eff, 0)
            self.assertLessEqual(eff, 100)
            self.assertGreaterEqual(pct, 0)
            self.assertLessEqual(pct, 100)
            self.assertAlmostEqual(eff + pct, 100, places=6)

    def test_complementary_when_rounding_halves(self):
        for stock_value, waste_value in [(8.0, 2.046), (400.0, 90.9), (3.0, 1.0), (7.0, 0.333)]:
            stock = [{'currentStock': stock_value}]
            waste = [{'quantity': waste_value}]
            eff = efficiency(stock, waste)
            pct = waste_percentage(stock, waste)
            self.assertAlmostEqual(eff + pct, 100, places=9)
            self.assertEqual(eff, round2(100 - pct))

    def test_malformed_numbers_count_as_zero(self):
        stock = [{'currentStock': 'abc'}, {'currentStock': '20'}, {}]
        waste = [{'quantity': None}, {'quantity': -3}, {'quantity': '2'}]
        self.assertEqual(waste_percentage(stock, waste), 10)

    def test_internal_error_falls_back(self):
        with self.assertLogs('kitchen.logic.reporting.metrics', level='ERROR'):
            self.assertEqual(efficiency(_broken_records(), [{'quantity': 1}]), 85)
        with self.assertLogs('kitchen.logic.reporting.metrics', level='ERROR'):
            self.assertEqual(waste_percentage(_broken_records(), [{'quantity': 1}]), 8)

    def test_efficiency_and_waste_pair(self):
        result = efficiency_and_waste([{'currentStock': 200}], [{'quantity': 50}])
        self.assertEqual(result, {'efficiency': 75, 'waste_percentage': 25})


class TestWasteWindow(unittest.TestCase):

    def setUp(self):
        self.now = datetime(2024, 6, 30, 12, 0)
        self.waste = [
            {'quantity': 4, 'timestamp': '2024-06-20T08:00:00'},
            {'quantity': 6, 'timestamp': '2024-04-01'},
            {'quantity': 9},
        ]

    def test_recent_waste(self):
        recent = recent_waste(self.waste, 30, now=self.now)
        self.assertEqual([e.quantity for e in recent], [4])

    def test_waste_percentage_with_window(self):
        stock = [{'currentStock': 40}]
        self.assertEqual(waste_percentage(stock, self.waste, window_days=30, now=self.now), 10)
        self.assertEqual(waste_percentage(stock, self.waste), 47.5)

    def test_timezone_aware_timestamps(self):
        waste = [{'quantity': 1, 'timestamp': '2024-06-29T10:00:00Z'}]
        self.assertEqual(len(recent_waste(waste, 30, now=self.now)), 1)


class TestUsageEfficiency(unittest.TestCase):

    def test_usage_share(self):
        card = usage_efficiency([{'currentStock': 90}], [{'quantity': 10}])
        self.assertEqual(card['efficiency'], 90)
        self.assertEqual(card['level'], 'success')
        self.assertTrue(card['trend']['is_positive'])

    def test_levels(self):
        self.assertEqual(usage_efficiency([{'currentStock': 30}], [{'quantity': 10}])['level'], 'warning')
        self.assertEqual(usage_efficiency([{'currentStock': 10}], [{'quantity': 10}])['level'], 'danger')

    def test_no_usage(self):
        card = usage_efficiency([], [])
        self.assertEqual(card['efficiency'], 100)


class TestMonthlyComparison(unittest.TestCase):

    def setUp(self):
        self.events = [
            {'quantity': 2, 'reason': 'caducidad', 'timestamp': '2024-01-05'},
            {'quantity': 3, 'reason': 'quemado', 'timestamp': '2024-01-10'},
            {'quantity': 10, 'reason': 'caducidad', 'timestamp': '2023-12-15'},
            {'quantity': 5, 'reason': 'merma', 'timestamp': '2023-11-15'},
        ]

    def test_january_compares_with_december(self):
        result = monthly_comparison(self.events, today=date(2024, 1, 20))
        self.assertEqual(result['count'], 2)
        self.assertEqual(result['quantity'], 5)
        self.assertEqual(result['previous_quantity'], 10)
        self.assertEqual(result['trend'], {'is_positive': True, 'change': 50, 'text': '50% vs mes pasado'})

    def test_category_filter(self):
        expired = monthly_comparison(self.events, category='Expiration', today=date(2024, 1, 20))
        self.assertEqual(expired['count'], 1)
        self.assertEqual(expired['quantity'], 2)
        self.assertEqual(expired['trend']['change'], 80)
        errors = monthly_comparison(self.events, category='PreparationErrors', today=date(2024, 1, 20))
        self.assertEqual(errors['quantity'], 3)
        self.assertIsNone(errors['trend'])

    def test_more_waste_is_not_positive(self):
        result = monthly_comparison(self.events, today=date(2023, 12, 31))
        self.assertFalse(result['trend']['is_positive'])
        self.assertEqual(result['trend']['change'], 100)


class TestProductEfficiency(unittest.TestCase):

    def test_rows_per_ingredient(self):
        events = [
            {'ingredientId': 1, 'ingredientName': 'Pasta', 'quantity': 10, 'reason': 'merma'},
            {'ingredientId': 1, 'ingredientName': 'Pasta', 'quantity': 2.5, 'reason': 'quemado'},
            {'ingredientId': 1, 'ingredientName': 'Pasta', 'quantity': 5, 'reason': 'quemado'},
            {'ingredientId': 2, 'ingredientName': 'Pan', 'quantity': 150, 'reason': 'caducidad'},
        ]
        rows = product_efficiency(events)
        self.assertEqual(len(rows), 2)
        pasta, pan = rows
        self.assertEqual(pasta['waste_percentage'], 18)
        self.assertEqual(pasta['efficiency'], 83)
        self.assertEqual(pasta['main_cause'], 'Error - Quemado')
        self.assertEqual(pasta['loss'], 87.5)
        self.assertEqual(pan['waste_percentage'], 100)
        self.assertEqual(pan['efficiency'], 0)
        self.assertEqual(pan['main_cause'], 'Caducidad')

    def test_tie_keeps_first_reason(self):
        events = [
            {'ingredientId': 1, 'quantity': 1, 'reason': 'rotura'},
            {'ingredientId': 1, 'quantity': 1, 'reason': 'merma'},
        ]
        self.assertEqual(product_efficiency(events)[0]['main_cause'], 'Rotura/Caída')

    def test_empty(self):
        self.assertEqual(product_efficiency([]), [])


class TestDashboardStats(unittest.TestCase):

    def test_payload_keys(self):
        stats = dashboard_stats([{'currentStock': 100}], [{'quantity': 5, 'reason': 'caducidad', 'timestamp': '2024-02-02'}],
                                today=date(2024, 2, 10))
        self.assertEqual(stats['efficiency'], 95)
        self.assertEqual(stats['waste_percentage'], 5)
        self.assertEqual(stats['expired']['count'], 1)
        self.assertEqual(stats['preparation_errors']['count'], 0)
        self.assertIn('usage', stats)


if __name__ == '__main__':
    unittest.main()
