from .profile import Profile
from .pt_client import PTClient
from .exercise_catalog import ExerciseCatalogEntry
from .routine import Routine, RoutineExercise, RoutineExerciseSet
from .session_log import SessionLog, SessionLogSet
from .health_log import ClientHealthLog
from .calendar_event import CalendarEvent
from .notifications import Notification

__all__ = [
    "Profile", "PTClient",
    "ExerciseCatalogEntry",
    "Routine", "RoutineExercise", "RoutineExerciseSet",
    "SessionLog", "SessionLogSet",
    "ClientHealthLog", "CalendarEvent", "Notification",
]
