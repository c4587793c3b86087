import unittest
from mealplan.logic.units.formatting import format_quantity, round_quantity


class TestRoundQuantity(unittest.TestCase):

    def test_non_positive_is_zero(self):
        self.assertEqual(round_quantity(0, "gram"), 0)
        self.assertEqual(round_quantity(-2, "cup"), 0)

    def test_whole_units_round_up(self):
        self.assertEqual(round_quantity(2.1, "piece"), 3)
        self.assertEqual(round_quantity(1, "clove"), 1)
        self.assertEqual(round_quantity(0.2, "can"), 1)

    def test_spoon_units_use_quarters(self):
        self.assertEqual(round_quantity(1.1, "cup"), 1)
        self.assertEqual(round_quantity(1.13, "cup"), 1.25)
        self.assertEqual(round_quantity(0.05, "teaspoon"), 0.25)

    def test_grams_use_fifty(self):
        self.assertEqual(round_quantity(120, "gram"), 100)
        self.assertEqual(round_quantity(130, "gram"), 150)
        self.assertEqual(round_quantity(10, "gram"), 50)

    def test_large_units_use_twentieths(self):
        self.assertAlmostEqual(round_quantity(1.23, "kilogram"), 1.25)
        self.assertAlmostEqual(round_quantity(0.51, "liter"), 0.5)

    def test_other_units_use_tenths(self):
        self.assertAlmostEqual(round_quantity(1.26, "bunch"), 1.3)


class TestFormatQuantity(unittest.TestCase):

    def test_zero_and_whole(self):
        self.assertEqual(format_quantity(0), "0")
        self.assertEqual(format_quantity(3), "3")
        self.assertEqual(format_quantity(3.0), "3")

    def test_common_fractions(self):
        self.assertEqual(format_quantity(0.5), "1/2")
        self.assertEqual(format_quantity(1.5), "1 1/2")
        self.assertEqual(format_quantity(2.25), "2 1/4")
        self.assertEqual(format_quantity(1 / 3), "1/3")
        self.assertEqual(format_quantity(0.75), "3/4")

    def test_decimals(self):
        self.assertEqual(format_quantity(1.2), "1.2")
        self.assertEqual(format_quantity(12.4), "12.4")
        self.assertEqual(format_quantity(150.4), "150")


if __name__ == "__main__":
    unittest.main()
