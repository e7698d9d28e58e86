import unittest

from cgpacalc.core.errors import ErrorKind, ValidationCategory, ValidationError
from cgpacalc.core.grades import DEFAULT_SCALE, GradeScale, grade_points_for, is_valid_grade


class GradeScaleTests(unittest.TestCase):
    def test_default_points(self):
        expected = {"A": 5.0, "B": 4.0, "C": 3.0, "D": 2.0, "E": 1.0, "F": 0.0}
        for letter, points in expected.items():
            self.assertEqual(grade_points_for(letter), points)
        self.assertEqual(DEFAULT_SCALE.letters, ("A", "B", "C", "D", "E", "F"))

    def test_case_and_whitespace_are_ignored(self):
        self.assertEqual(grade_points_for("b"), 4.0)
        self.assertEqual(grade_points_for(" f "), 0.0)

    def test_unknown_grade(self):
        with self.assertRaises(ValidationError) as ctx:
            grade_points_for("Z")
        self.assertEqual(ctx.exception.kind, ErrorKind.INVALID_GRADE)
        self.assertEqual(ctx.exception.category, ValidationCategory.COURSE)
        self.assertEqual(ctx.exception.field, "grade")
        self.assertEqual(ctx.exception.value, "Z")

    def test_non_string_grade(self):
        self.assertFalse(is_valid_grade(None))
        self.assertFalse(is_valid_grade(""))
        self.assertTrue(is_valid_grade("c"))

    def test_custom_scale(self):
        scale = GradeScale.from_pairs([("a", 9), ("s", 10), ("F", 4)])
        self.assertEqual(scale.letters, ("S", "A", "F"))
        self.assertEqual(grade_points_for("s", scale), 10.0)
        with self.assertRaises(ValidationError):
            grade_points_for("B", scale)

    def test_empty_scale(self):
        with self.assertRaises(ValueError):
            GradeScale(())


if __name__ == "__main__":
    unittest.main()
