import logging
from typing import List, Sequence

import flet as ft

from cgpacalc.config.settings import settings
from cgpacalc.core.classification import (
    ClassificationBand,
    band_for,
    classification_ranges,
    is_passing,
    performance_summary,
    points_to_next_band,
)
from cgpacalc.core.errors import CalculationError, RecordStoreError, ValidationError
from cgpacalc.core.gpa import calculation_breakdown, round_half_up
from cgpacalc.core.models import CalculationResult, Course
from cgpacalc.services.calculator_service import CalculatorService
from cgpacalc.state.app_state import AppState

logger = logging.getLogger(__name__)


def unit_band_status(total_units: int, minimum: int, maximum: int) -> str:
    if total_units < minimum:
        return f"Total units: {total_units} (add {minimum - total_units} more, minimum {minimum})"
    if total_units > maximum:
        return f"Total units: {total_units} (remove {total_units - maximum}, maximum {maximum})"
    return f"Total units: {total_units} (within {minimum}-{maximum})"


def result_lines(result: CalculationResult, places: int) -> List[str]:
    lines = [
        f"Semester GPA: {round_half_up(result.semester_gpa, places):.{places}f}",
        f"Updated CGPA: {round_half_up(result.updated_cgpa, places):.{places}f}",
        f"Classification: {result.classification}",
        f"Total cumulative units: {result.total_units}",
    ]
    lines.extend(f"Warning: {warning}" for warning in result.warnings)
    return lines


def standing_lines(cgpa: float, bands: Sequence[ClassificationBand], places: int) -> List[str]:
    lines = ["Status: Passing" if is_passing(cgpa, bands) else "Status: Below pass mark"]
    gap = points_to_next_band(cgpa, bands)
    higher = [band for band in bands if cgpa < band.minimum]
    if higher:
        lines.append(f"{round_half_up(gap, places):.{places}f} points to {higher[-1].label}")
    else:
        lines.append("Top classification reached")
    return lines


def build_calculator_view(page: ft.Page, app_state: AppState, service: CalculatorService) -> ft.View:
    session = app_state.session
    scale = service.scale

    name = ft.TextField(label="Course Name", width=280)
    units = ft.Dropdown(
        width=120,
        label="Units",
        value=str(settings.min_course_units),
        options=[
            ft.dropdown.Option(str(u))
            for u in range(settings.min_course_units, settings.max_course_units + 1)
        ],
    )
    grade = ft.Dropdown(
        width=120,
        label="Grade",
        value=scale.letters[0],
        options=[ft.dropdown.Option(letter, f"{letter} ({points:.1f})") for letter, points in scale.points],
    )
    prior_cgpa = ft.TextField(label="Current CGPA (optional)", width=220, value=session.prior_cgpa_text)
    prior_units = ft.TextField(label="Cumulative Units (optional)", width=220, value=session.prior_units_text)

    status = ft.Text(color=ft.Colors.RED_400)
    units_text = ft.Text()
    unsaved = ft.Text("Unsaved changes", color=ft.Colors.AMBER_700, visible=False)
    course_list = ft.Column(spacing=6)
    results = ft.Column(spacing=4)
    calculate_button = ft.ElevatedButton("Calculate", disabled=True)

    def set_status(message: str, is_error: bool = True) -> None:
        status.value = message
        status.color = ft.Colors.RED_400 if is_error else ft.Colors.GREEN_400

    def sync_prior() -> None:
        session.set_prior((prior_cgpa.value or "").strip(), (prior_units.value or "").strip())
        unsaved.visible = session.dirty

    def refresh() -> None:
        sync_prior()
        course_list.controls.clear()
        if not session.courses:
            course_list.controls.append(ft.Text("No courses added yet."))

        for index, course in enumerate(session.courses):

            def make_delete_handler(course_index: int):
                def handler(_):
                    removed = session.remove_course(course_index)
                    set_status(f"Removed {removed.name}.", is_error=False)
                    refresh()

                return handler

            course_list.controls.append(
                ft.Row(
                    controls=[
                        ft.Text(f"{course.name} - {course.units} units - {course.grade}"),
                        ft.IconButton(icon=ft.Icons.DELETE, on_click=make_delete_handler(index)),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                )
            )

        units_text.value = unit_band_status(
            session.total_units, settings.min_semester_units, settings.max_semester_units
        )
        calculate_button.disabled = not service.can_calculate(
            session.courses, session.prior_cgpa_text, session.prior_units_text
        )
        page.update()

    def on_add(_):
        try:
            course = Course.from_text(name.value or "", units.value or "", grade.value or "")
            session.add_course(course)
        except ValidationError as exc:
            set_status(exc.message)
            page.update()
            return
        name.value = ""
        set_status(f"Added {course.name}.", is_error=False)
        refresh()

    def on_calculate(_):
        sync_prior()
        app_state.last_result = None
        results.controls.clear()
        try:
            result = service.calculate(session.courses, session.prior_cgpa_text, session.prior_units_text)
        except (ValidationError, CalculationError) as exc:
            set_status(str(exc))
            page.update()
            return

        app_state.last_result = result
        band = band_for(result.updated_cgpa, service.bands)
        for line in result_lines(result, settings.decimal_places):
            results.controls.append(ft.Text(line))
        results.controls[2].color = band.color
        results.controls[2].weight = ft.FontWeight.BOLD
        for line in standing_lines(result.updated_cgpa, service.bands, settings.decimal_places):
            results.controls.append(ft.Text(line))
        results.controls.append(ft.Text(performance_summary(result.updated_cgpa, bands=service.bands), italic=True))
        results.controls.append(
            ft.Text(calculation_breakdown(session.courses, service.scale), font_family="monospace", size=12)
        )
        set_status("Calculation complete.", is_error=False)
        page.update()

    def on_save(_):
        sync_prior()
        try:
            path = service.save_record(session.courses, session.prior_cgpa_text, session.prior_units_text)
        except RecordStoreError as exc:
            logger.error("save_failed err=%s", exc)
            set_status(f"Failed to save: {exc}")
            page.update()
            return
        session.mark_saved()
        unsaved.visible = False
        backups = service.store.list_backups()
        set_status(f"Saved to {path} ({len(backups)} backup(s) kept).", is_error=False)
        page.update()

    def load_into_session(announce: bool) -> None:
        try:
            loaded = service.load_record()
        except RecordStoreError as exc:
            logger.error("load_failed err=%s", exc)
            set_status(f"Failed to load: {exc}")
            return
        if loaded is None:
            if announce:
                set_status("No saved data found.")
            return
        session.replace(loaded.courses, loaded.prior_cgpa_text, loaded.prior_units_text)
        prior_cgpa.value = loaded.prior_cgpa_text
        prior_units.value = loaded.prior_units_text
        results.controls.clear()
        unsaved.visible = False
        app_state.last_result = None
        set_status(f"Loaded {len(loaded.courses)} course(s).", is_error=False)

    def on_load(_):
        load_into_session(announce=True)
        refresh()

    def on_clear(_):
        app_state.reset()
        prior_cgpa.value = ""
        prior_units.value = ""
        results.controls.clear()
        set_status("Cleared all courses.", is_error=False)
        refresh()

    def on_prior_change(_):
        refresh()

    calculate_button.on_click = on_calculate
    prior_cgpa.on_change = on_prior_change
    prior_units.on_change = on_prior_change

    load_into_session(announce=False)
    refresh()

    return ft.View(
        route="/",
        controls=[
            ft.AppBar(title=ft.Text("CGPA Calculator")),
            ft.Container(
                padding=20,
                content=ft.Column(
                    scroll=ft.ScrollMode.AUTO,
                    controls=[
                        ft.Text("Previous Record", size=20, weight=ft.FontWeight.BOLD),
                        ft.Row(controls=[prior_cgpa, prior_units]),
                        ft.Divider(),
                        ft.Text("Add Course", size=20, weight=ft.FontWeight.BOLD),
                        ft.Row(controls=[name, units, grade, ft.Button("Add Course", on_click=on_add)]),
                        course_list,
                        units_text,
                        unsaved,
                        ft.Row(
                            controls=[
                                calculate_button,
                                ft.OutlinedButton("Save", on_click=on_save),
                                ft.OutlinedButton("Load", on_click=on_load),
                                ft.OutlinedButton("Clear", on_click=on_clear),
                            ]
                        ),
                        status,
                        ft.Divider(),
                        ft.Text("Results", size=20, weight=ft.FontWeight.BOLD),
                        results,
                        ft.Divider(),
                        ft.Text("Classification Reference", size=20, weight=ft.FontWeight.BOLD),
                        ft.Text(classification_ranges(service.bands), font_family="monospace", size=12),
                    ],
                ),
            ),
        ],
    )
