import unittest

from cgpacalc.core.classification import DEFAULT_BANDS
from cgpacalc.core.models import CalculationResult
from cgpacalc.ui.views.calculator_view import result_lines, standing_lines, unit_band_status


class CalculatorViewHelperTests(unittest.TestCase):
    def test_unit_band_status(self):
        self.assertEqual(unit_band_status(15, 18, 24), "Total units: 15 (add 3 more, minimum 18)")
        self.assertEqual(unit_band_status(18, 18, 24), "Total units: 18 (within 18-24)")
        self.assertEqual(unit_band_status(26, 18, 24), "Total units: 26 (remove 2, maximum 24)")

    def test_result_lines_round_half_up(self):
        result = CalculationResult(
            semester_gpa=27 / 7,
            updated_cgpa=121 / 37,
            classification="Second Class Lower",
            total_units=37,
            semester_units=7,
            semester_grade_points=27.0,
            warnings=("Cumulative units below 24 may affect CGPA accuracy",),
        )
        self.assertEqual(
            result_lines(result, 2),
            [
                "Semester GPA: 3.86",
                "Updated CGPA: 3.27",
                "Classification: Second Class Lower",
                "Total cumulative units: 37",
                "Warning: Cumulative units below 24 may affect CGPA accuracy",
            ],
        )

    def test_standing_lines(self):
        self.assertEqual(
            standing_lines(3.25, DEFAULT_BANDS, 2),
            ["Status: Passing", "0.25 points to Second Class Upper"],
        )
        self.assertEqual(
            standing_lines(1.0, DEFAULT_BANDS, 2),
            ["Status: Below pass mark", "0.50 points to Third Class"],
        )
        self.assertEqual(
            standing_lines(4.8, DEFAULT_BANDS, 2),
            ["Status: Passing", "Top classification reached"],
        )


if __name__ == "__main__":
    unittest.main()
