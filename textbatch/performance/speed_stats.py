"""
Translation Speed Statistics Module

Measures character throughput of provider calls and turns it into a
persisted average speed, ETA and progress percentages.
"""

import math
import time
from collections import deque
from dataclasses import dataclass, field, asdict
from typing import Callable, Deque, Dict, List, Optional

from config.constants import (
    STATS_DEFAULT_SPEED,
    STATS_MAX_TASK_RECORDS,
    STATS_STORAGE_KEY,
)
from config.logging_config import get_logger
from ..cache.base import KeyValueStore
from ..errors import PersistenceError

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class TranslationSpeedStats:
    """
    Cumulative speed statistics

    Attributes:
        total_characters: Characters translated by tasks with a valid duration
        total_time_ms: Sum of those tasks' durations
        average_speed: round(total_characters / total_time_ms * 1000), chars/sec
        task_count: Number of tasks that contributed to the totals
        last_updated: Epoch milliseconds of the last change
    """
    total_characters: int = 0
    total_time_ms: int = 0
    average_speed: int = STATS_DEFAULT_SPEED
    task_count: int = 0
    last_updated: int = field(default_factory=_now_ms)


@dataclass
class TranslationTaskInfo:
    """
    One timed unit of provider work

    Attributes:
        task_id: Task identifier (shared with the queue)
        character_count: Characters sent to the provider
        start_time: Epoch milliseconds when the task was admitted
        end_time: Epoch milliseconds when it finished, None while running
        translation_time: end_time - start_time
    """
    task_id: str
    character_count: int
    start_time: int
    end_time: Optional[int] = None
    translation_time: Optional[int] = None

    @property
    def is_finished(self) -> bool:
        return self.end_time is not None


@dataclass
class SpeedHistory:
    """Persisted blob: aggregate stats plus a bounded window of task records"""
    stats: TranslationSpeedStats
    recent_tasks: List[TranslationTaskInfo] = field(default_factory=list)
    max_task_records: int = STATS_MAX_TASK_RECORDS

    def to_dict(self) -> Dict:
        return {
            "stats": asdict(self.stats),
            "recent_tasks": [asdict(task) for task in self.recent_tasks],
            "max_task_records": self.max_task_records,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "SpeedHistory":
        stats_data = data["stats"]
        stats = TranslationSpeedStats(
            total_characters=int(stats_data.get("total_characters", 0)),
            total_time_ms=int(stats_data.get("total_time_ms", 0)),
            average_speed=int(stats_data.get("average_speed", STATS_DEFAULT_SPEED)),
            task_count=int(stats_data.get("task_count", 0)),
            last_updated=int(stats_data.get("last_updated", _now_ms())),
        )
        recent = [
            TranslationTaskInfo(**task)
            for task in data.get("recent_tasks") or []
        ]
        return cls(
            stats=stats,
            recent_tasks=recent,
            max_task_records=int(data.get("max_task_records", STATS_MAX_TASK_RECORDS)),
        )


class TranslationStatsManager:
    """
    Speed tracker for provider calls

    Per task: start() records the admission time, complete() derives the
    duration, folds it into the cumulative totals and persists the result.
    A task whose duration is zero or negative is dropped from the live set
    without touching the totals.

    Example:
        stats = TranslationStatsManager(JsonFileStore("speed.json"))
        stats.initialize()

        stats.start("task-1", 1200)
        ...  # provider call
        stats.complete("task-1")

        eta_sec = stats.remaining_time(remaining_chars)
    """

    STORAGE_KEY = STATS_STORAGE_KEY
    DEFAULT_SPEED = STATS_DEFAULT_SPEED
    MAX_TASK_RECORDS = STATS_MAX_TASK_RECORDS

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Callable[[], int]] = None,
        restore_unfinished_tasks: bool = True,
    ):
        """
        Args:
            store: Persistent key-value store for the speed history blob
            clock: Returns the current time in epoch milliseconds
            restore_unfinished_tasks: Reinstate persisted tasks that never
                recorded an end time into the live set on initialize()
        """
        self.store = store
        self.clock = clock or _now_ms
        self.restore_unfinished_tasks = restore_unfinished_tasks

        self._stats = self._default_stats()
        self._current_tasks: Dict[str, TranslationTaskInfo] = {}
        self._recent_tasks: Deque[TranslationTaskInfo] = deque(maxlen=self.MAX_TASK_RECORDS)

    def _default_stats(self) -> TranslationSpeedStats:
        return TranslationSpeedStats(
            average_speed=self.DEFAULT_SPEED,
            last_updated=self.clock(),
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load persisted speed history, falling back to defaults"""
        try:
            raw = self.store.get(self.STORAGE_KEY)
            if not raw:
                logger.debug("No speed history found, using defaults")
                return
            if not isinstance(raw, dict) or not isinstance(raw.get("stats"), dict):
                raise PersistenceError("speed history is not a {stats, recent_tasks} object")

            history = SpeedHistory.from_dict(raw)
        except (PersistenceError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load translation speed history: {e}")
            self._stats = self._default_stats()
            return

        self._stats = history.stats
        for task in history.recent_tasks:
            if task.is_finished:
                self._recent_tasks.append(task)
            elif self.restore_unfinished_tasks:
                self._current_tasks[task.task_id] = task

        logger.info(
            f"Loaded speed history: {self._stats.task_count} tasks, "
            f"avg {self._stats.average_speed} chars/s, "
            f"{len(self._current_tasks)} unfinished"
        )

    def reset(self) -> None:
        """Zero all cumulative fields, drop live tasks and persist"""
        self._stats = self._default_stats()
        self._current_tasks.clear()
        self._recent_tasks.clear()
        self._save()

    # ------------------------------------------------------------------
    # Task tracking
    # ------------------------------------------------------------------

    def start(self, task_id: str, char_count: int) -> None:
        if task_id in self._current_tasks:
            return
        self._current_tasks[task_id] = TranslationTaskInfo(
            task_id=task_id,
            character_count=char_count,
            start_time=self.clock(),
        )

    def complete(self, task_id: str) -> None:
        task = self._current_tasks.pop(task_id, None)
        if task is None:
            return

        task.end_time = self.clock()
        task.translation_time = task.end_time - task.start_time
        self._recent_tasks.append(task)

        if task.translation_time <= 0:
            logger.debug(f"Ignoring task {task_id} with non-positive duration")
            return

        self._stats.total_characters += task.character_count
        self._stats.total_time_ms += task.translation_time
        self._stats.task_count += 1
        self._stats.last_updated = task.end_time
        self._stats.average_speed = round(
            self._stats.total_characters / self._stats.total_time_ms * 1000
        )

        self._save()

    def is_tracking(self, task_id: str) -> bool:
        return task_id in self._current_tasks

    @property
    def active_task_count(self) -> int:
        return len(self._current_tasks)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def average_speed(self) -> int:
        """Current average speed in characters per second"""
        return self._stats.average_speed

    def remaining_time(self, remaining_chars: int) -> int:
        """Estimated seconds left for remaining_chars at the average speed"""
        speed = self.average_speed()
        if speed <= 0:
            return 0
        return math.ceil(remaining_chars / speed)

    @staticmethod
    def overall_progress(completed: float, total: float) -> float:
        """Completion percentage clamped to [0, 100]"""
        if total <= 0:
            return 0.0
        progress = completed / total * 100
        return min(max(progress, 0.0), 100.0)

    def get_stats(self) -> TranslationSpeedStats:
        """Copy of the cumulative statistics"""
        return TranslationSpeedStats(**asdict(self._stats))

    def get_history(self) -> SpeedHistory:
        records = list(self._recent_tasks) + list(self._current_tasks.values())
        return SpeedHistory(
            stats=self.get_stats(),
            recent_tasks=records[-self.MAX_TASK_RECORDS:],
            max_task_records=self.MAX_TASK_RECORDS,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _save(self) -> None:
        try:
            self.store.set(self.STORAGE_KEY, self.get_history().to_dict())
        except PersistenceError as e:
            logger.warning(f"Failed to save translation speed history: {e}")
