import unittest

from cgpacalc.core.errors import CalculationError, CalculationErrorKind, ErrorKind, ValidationCategory, ValidationError
from cgpacalc.core.gpa import (
    calculation_breakdown,
    compute_semester_gpa,
    compute_updated_cgpa,
    round_half_up,
    semester_totals,
    validate_unit_band,
)
from cgpacalc.core.models import Course


class GPATests(unittest.TestCase):
    def setUp(self):
        self.courses = [Course("CS101", 3, "A"), Course("MA101", 4, "B")]

    def test_semester_gpa_is_unit_weighted(self):
        self.assertAlmostEqual(compute_semester_gpa(self.courses), (5.0 * 3 + 4.0 * 4) / 7)
        self.assertAlmostEqual(compute_semester_gpa(self.courses), 3.857, places=3)

    def test_semester_gpa_is_not_rounded(self):
        self.assertEqual(compute_semester_gpa(self.courses), 31 / 7)

    def test_semester_totals(self):
        self.assertEqual(semester_totals(self.courses), (31.0, 7))

    def test_empty_course_list(self):
        with self.assertRaises(CalculationError) as ctx:
            compute_semester_gpa([])
        self.assertEqual(ctx.exception.kind, CalculationErrorKind.EMPTY_COURSE_LIST)

    def test_single_failing_course(self):
        self.assertEqual(compute_semester_gpa([Course("PH101", 2, "F")]), 0.0)


class CGPATests(unittest.TestCase):
    def test_new_student_gets_semester_gpa(self):
        cgpa, total_units = compute_updated_cgpa(31.0, 7)
        self.assertEqual(cgpa, 31.0 / 7)
        self.assertEqual(total_units, 7)

    def test_returning_student(self):
        cgpa, total_units = compute_updated_cgpa(31.0, 7, prior_cgpa=3.0, prior_units=30)
        self.assertEqual(total_units, 37)
        self.assertAlmostEqual(cgpa, 121 / 37)
        self.assertAlmostEqual(cgpa, 3.270, places=3)

    def test_weighted_total_is_preserved(self):
        for prior_cgpa, prior_units, grade_points, units in [
            (3.0, 30, 31.0, 7),
            (4.72, 96, 88.0, 20),
            (0.0, 12, 40.0, 18),
            (2.5, 0, 60.0, 24),
        ]:
            cgpa, total = compute_updated_cgpa(grade_points, units, prior_cgpa, prior_units)
            self.assertAlmostEqual(cgpa * total, prior_cgpa * prior_units + grade_points)

    def test_only_cgpa_given(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_updated_cgpa(31.0, 7, prior_cgpa=3.0)
        self.assertEqual(ctx.exception.kind, ErrorKind.INCONSISTENT_PRIOR_DATA)
        self.assertEqual(ctx.exception.category, ValidationCategory.STUDENT)

    def test_only_units_given(self):
        with self.assertRaises(ValidationError) as ctx:
            compute_updated_cgpa(31.0, 7, prior_units=30)
        self.assertEqual(ctx.exception.kind, ErrorKind.INCONSISTENT_PRIOR_DATA)

    def test_zero_prior_units_counts_as_present(self):
        cgpa, total = compute_updated_cgpa(31.0, 7, prior_cgpa=0.0, prior_units=0)
        self.assertEqual(total, 7)
        self.assertAlmostEqual(cgpa, 31 / 7)

    def test_zero_total_units(self):
        with self.assertRaises(CalculationError) as ctx:
            compute_updated_cgpa(0.0, 0)
        self.assertEqual(ctx.exception.kind, CalculationErrorKind.ZERO_UNITS)


class UnitBandTests(unittest.TestCase):
    def test_inside_band(self):
        for total in (18, 21, 24):
            validate_unit_band(total, 18, 24)

    def test_below_minimum(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_unit_band(17, 18, 24)
        err = ctx.exception
        self.assertEqual(err.kind, ErrorKind.UNIT_BAND_VIOLATION)
        self.assertEqual(err.category, ValidationCategory.ACADEMIC_CONSTRAINT)
        self.assertEqual(err.value, 17)
        self.assertEqual(err.limit, 18)
        self.assertTrue(err.is_minimum_violation)
        self.assertFalse(err.is_maximum_violation)

    def test_above_maximum(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_unit_band(25, 18, 24)
        self.assertEqual(ctx.exception.limit, 24)
        self.assertTrue(ctx.exception.is_maximum_violation)
        self.assertIn("Maximum: 24", str(ctx.exception))


class DisplayTests(unittest.TestCase):
    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.345), 2.35)
        self.assertEqual(round_half_up(2.5, 0), 3.0)
        self.assertEqual(round_half_up(31 / 7), 3.86)
        self.assertEqual(round_half_up(121 / 37, 3), 3.270)

    def test_negative_places(self):
        with self.assertRaises(ValueError):
            round_half_up(1.0, -1)

    def test_breakdown(self):
        text = calculation_breakdown([Course("CS101", 3, "A"), Course("MA101", 4, "B")])
        self.assertIn("CS101", text)
        self.assertIn("3 units x 5.0 points = 15.00 credit points", text)
        self.assertIn("Total Credit Points: 31.00", text)
        self.assertIn("Total Units: 7", text)
        self.assertIn("GPA: 31.00 / 7 = 3.86", text)

    def test_breakdown_empty(self):
        self.assertEqual(calculation_breakdown([]), "No courses available for calculation breakdown")


if __name__ == "__main__":
    unittest.main()
