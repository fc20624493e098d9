"""Client side of the calendar: month grid, view state, dialog form and API client."""

from .client import CalendarApiError, CalendarClient
from .controller import CalendarController
from .form import EventForm
from .grid import DayCell, iter_day_cells, month_layout, shift_month, today_reference
from .state import DialogMode, InvalidTransition, Phase, ViewState, ViewStateMachine

__all__ = [
    "CalendarApiError",
    "CalendarClient",
    "CalendarController",
    "DayCell",
    "DialogMode",
    "EventForm",
    "InvalidTransition",
    "Phase",
    "ViewState",
    "ViewStateMachine",
    "iter_day_cells",
    "month_layout",
    "shift_month",
    "today_reference",
]
