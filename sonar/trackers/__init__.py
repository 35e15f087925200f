from sonar.trackers.base import BugTracker, Result
from sonar.trackers.openradar import OpenRadar

__all__ = ["BugTracker", "OpenRadar", "Result"]
