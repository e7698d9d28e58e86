import flet as ft

from cgpacalc.services.calculator_service import CalculatorService
from cgpacalc.state.app_state import app_state
from cgpacalc.ui.views.calculator_view import build_calculator_view


def main(page: ft.Page) -> None:
    page.title = "CGPA Calculator"
    page.scroll = ft.ScrollMode.AUTO
    service = CalculatorService.from_settings()

    page.views.clear()
    page.views.append(build_calculator_view(page, app_state, service))
    page.update()
