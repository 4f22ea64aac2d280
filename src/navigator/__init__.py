# Calendar navigator module

from .browser import PickerSession, open_picker
from .calendar_navigator import CalendarNavigator, select_date
from .config import NavigatorConfig, WidgetSelectors, load_config
from .direction import Direction, NavigationPolicy, decide_direction
from .exceptions import (
    CalendarInteractionError,
    DayNotFoundError,
    NavigationExhaustedError,
)
from .models import CalendarState, CalendarTarget, DateSelectionResult, NavigationState
from .months import MONTH_NAMES, month_index
from .widget import CalendarWidget, DayCell, PlaywrightCalendarWidget

__all__ = [
    "PickerSession",
    "open_picker",
    "CalendarNavigator",
    "select_date",
    "NavigatorConfig",
    "WidgetSelectors",
    "load_config",
    "Direction",
    "NavigationPolicy",
    "decide_direction",
    "CalendarInteractionError",
    "DayNotFoundError",
    "NavigationExhaustedError",
    "CalendarState",
    "CalendarTarget",
    "DateSelectionResult",
    "NavigationState",
    "MONTH_NAMES",
    "month_index",
    "CalendarWidget",
    "DayCell",
    "PlaywrightCalendarWidget",
]
