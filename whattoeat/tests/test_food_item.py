import unittest

from whattoeat.domain.FoodItem import FoodItem, normalize_tags
from whattoeat.domain.MealPeriod import MealPeriod, is_filter_value
from whattoeat.utilities.exceptions import InvalidTagError, StorageCorruptedError, ValidationError


class TestFoodItem(unittest.TestCase):

    def test_name_is_trimmed(self):
        food = FoodItem(1, "  凉皮  ", ["lunch"])
        self.assertEqual(food.name, "凉皮")
        self.assertEqual(food.tags, ["lunch"])

    def test_empty_name_rejected(self):
        with self.assertRaises(ValidationError):
            FoodItem(1, "   ", ["lunch"])

    def test_tags_default_to_every_period(self):
        self.assertEqual(FoodItem(1, "粥").tags, ["breakfast", "lunch", "dinner"])
        self.assertEqual(FoodItem(2, "粥", []).tags, ["breakfast", "lunch", "dinner"])

    def test_tags_deduplicated_in_caller_order(self):
        self.assertEqual(normalize_tags(["dinner", "Lunch", "dinner"]), ["dinner", "lunch"])
        self.assertEqual(normalize_tags([MealPeriod.BREAKFAST]), ["breakfast"])

    def test_unknown_tag_rejected(self):
        with self.assertRaises(InvalidTagError):
            normalize_tags(["brunch"])

    def test_tags_cannot_be_mutated_through_property(self):
        food = FoodItem(1, "火锅", ["dinner"])
        food.tags.append("lunch")
        self.assertEqual(food.tags, ["dinner"])
        with self.assertRaises(AttributeError):
            food.name = "烧烤"

    def test_dict_round_trip_and_equality(self):
        food = FoodItem(7, "红烧肉", ["lunch", "dinner"])
        data = food.to_dict()
        self.assertEqual(data, {"id": 7, "name": "红烧肉", "tags": ["lunch", "dinner"]})
        self.assertEqual(FoodItem.from_dict(data), food)

    def test_from_dict_rejects_bad_entries(self):
        for bad in ({"name": "x", "tags": []}, {"id": 1, "name": "", "tags": []},
                    {"id": 1, "name": "x", "tags": ["teatime"]}, ["not", "a", "dict"]):
            with self.subTest(bad=bad):
                with self.assertRaises(StorageCorruptedError):
                    FoodItem.from_dict(bad)

    def test_from_dict_rejects_non_integer_ids(self):
        for bad_id in ("5", 1.7, 2.0, True, None):
            with self.subTest(bad_id=bad_id):
                with self.assertRaises(StorageCorruptedError):
                    FoodItem.from_dict({"id": bad_id, "name": "x", "tags": ["lunch"]})

    def test_constructor_rejects_non_integer_id_and_name(self):
        with self.assertRaises(ValidationError):
            FoodItem("5", "x")
        with self.assertRaises(ValidationError):
            FoodItem(5, 123)
        with self.assertRaises(StorageCorruptedError):
            FoodItem.from_dict({"id": 5, "name": 123})


class TestMealPeriod(unittest.TestCase):

    def test_boundaries(self):
        self.assertIs(MealPeriod.for_hour(6), MealPeriod.BREAKFAST)
        self.assertIs(MealPeriod.for_hour(9), MealPeriod.BREAKFAST)
        self.assertIs(MealPeriod.for_hour(10), MealPeriod.LUNCH)
        self.assertIs(MealPeriod.for_hour(15), MealPeriod.LUNCH)
        self.assertIs(MealPeriod.for_hour(16), MealPeriod.DINNER)
        self.assertIs(MealPeriod.for_hour(23), MealPeriod.DINNER)
        self.assertIs(MealPeriod.for_hour(0), MealPeriod.DINNER)
        self.assertIs(MealPeriod.for_hour(5), MealPeriod.DINNER)

    def test_labels(self):
        self.assertEqual(MealPeriod.BREAKFAST.label, "早餐时段")
        self.assertEqual(MealPeriod.DINNER.label, "晚餐时段")

    def test_filter_values(self):
        for value in ("all", "breakfast", "lunch", "dinner"):
            self.assertTrue(is_filter_value(value))
        self.assertFalse(is_filter_value("supper"))


if __name__ == '__main__':
    unittest.main()
