"""Recent task bookkeeping and the recents-visibility oracle."""

from src.recents.oracle import RecentsOracle
from src.recents.recent_tasks import RecentTasks


__all__ = ["RecentTasks", "RecentsOracle"]
