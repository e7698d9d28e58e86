from dataclasses import dataclass, field
from typing import Optional

from cgpacalc.core.models import CalculationResult
from cgpacalc.state.session_state import SessionState


@dataclass
class AppState:
    session: SessionState = field(default_factory=SessionState)
    last_result: Optional[CalculationResult] = None

    def reset(self) -> None:
        self.session.clear()
        self.last_result = None


app_state = AppState()
