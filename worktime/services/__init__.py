"""Services layer - Business logic"""

from .clock_service import ClockService
from .dirty_tracking_service import DirtyTrackingService
from .notification_service import NotificationService, NotificationState
from .persistence_service import DataPersistenceService
from .report_service import ReportService
from .timer_coordination_service import TimerCoordinationService

__all__ = [
    "ClockService", "DirtyTrackingService", "NotificationService", "NotificationState",
    "DataPersistenceService", "ReportService", "TimerCoordinationService",
]
