# met_predictor/tracker.py
"""
Keeps the user's current activity over a stream of predictions.

Why this exists:
  Predictions arrive every few seconds. Switching the reported activity on
  every small confidence wiggle would fragment the day into tiny sessions,
  so the current activity only changes when:
    - the predicted class differs from the current one, or
    - the same class comes back with confidence above current + switch_margin
      (this only refreshes the stored confidence).

  Time between updates is credited to whichever activity was current during
  that interval. Sessions shorter than min_session_seconds are not kept.
"""

import datetime
import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional

from met_predictor.config import PredictorConfig
from met_predictor.interpreter import FALLBACK, PredictionResult
from met_predictor.met_class import MetClass

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivitySession:
    start: float          # epoch seconds
    end: float
    met_class: MetClass
    confidence: float

    @property
    def date(self) -> datetime.date:
        return datetime.date.fromtimestamp(self.start)

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class DailySummary:
    date: datetime.date
    sedentary_minutes: int = 0
    light_minutes: int = 0
    moderate_minutes: int = 0
    vigorous_minutes: int = 0

    @property
    def total_minutes(self) -> int:
        return (self.sedentary_minutes + self.light_minutes
                + self.moderate_minutes + self.vigorous_minutes)

    def minutes_for(self, met_class: MetClass) -> int:
        return getattr(self, f"{met_class.name.lower()}_minutes")


class ActivityTracker:

    def __init__(self, switch_margin=0.1, min_session_seconds=30.0, history_len=10):
        if switch_margin < 0:
            raise ValueError("switch_margin must be >= 0")
        if min_session_seconds < 0:
            raise ValueError("min_session_seconds must be >= 0")

        self.switch_margin = switch_margin
        self.min_session_seconds = min_session_seconds

        # last N raw results for diagnostics
        self._history = deque(maxlen=history_len)
        self.reset()

    @classmethod
    def from_config(cls, config: PredictorConfig, history_len=10) -> "ActivityTracker":
        return cls(switch_margin=config.switch_margin,
                   min_session_seconds=config.min_session_seconds,
                   history_len=history_len)

    # ── main call ─────────────────────────────────────────────────────────────

    def update(self, result: PredictionResult, now: float) -> MetClass:
        """
        Feed in one prediction and get back the activity now considered current.
        now : epoch seconds of this prediction, non-decreasing between calls
        """
        self._history.append(result)
        self._credit(now)
        if self._session_start is None:
            self._session_start = now

        if result.met_class != self.current:
            self._close_session(now)
            log.info("Activity change: %s -> %s (confidence %.2f)",
                     self.current, result.met_class, result.confidence)
            self.current = result.met_class
            self.confidence = result.confidence
            self._session_start = now
        elif result.confidence > self.confidence + self.switch_margin:
            self.confidence = result.confidence

        return self.current

    def record_error(self, now: float) -> MetClass:
        """A failed prediction counts as Sedentary with no confidence."""
        return self.update(FALLBACK, now)

    def close(self, now: float):
        """Credit the running interval and flush the current session, e.g. on stop."""
        self._credit(now)
        self._close_session(now)
        self._session_start = now

    # ── accounting ────────────────────────────────────────────────────────────

    def _credit(self, now: float):
        if self._last_update is not None and now > self._last_update:
            day = datetime.date.fromtimestamp(now)
            per_class = self._seconds.setdefault(day, {})
            per_class[self.current] = per_class.get(self.current, 0.0) + (now - self._last_update)
        self._last_update = now

    def _close_session(self, now: float):
        if self._session_start is None:
            return
        if now - self._session_start > self.min_session_seconds:
            self.sessions.append(
                ActivitySession(self._session_start, now, self.current, self.confidence)
            )

    def daily_summary(self, day: datetime.date) -> DailySummary:
        per_class = self._seconds.get(day, {})

        def minutes(met_class):
            return int(per_class.get(met_class, 0.0) // 60)

        return DailySummary(
            date=day,
            sedentary_minutes=minutes(MetClass.SEDENTARY),
            light_minutes=minutes(MetClass.LIGHT),
            moderate_minutes=minutes(MetClass.MODERATE),
            vigorous_minutes=minutes(MetClass.VIGOROUS),
        )

    def prune(self, before: datetime.date):
        """Forget totals and sessions dated before `before`."""
        for day in [d for d in self._seconds if d < before]:
            del self._seconds[day]
        self.sessions = [s for s in self.sessions if s.date >= before]

    # ── helpers ───────────────────────────────────────────────────────────────

    def reset(self):
        """Start over as Sedentary with no history, totals or sessions."""
        self.current = MetClass.SEDENTARY
        self.confidence = 0.0
        self.sessions: List[ActivitySession] = []
        self._seconds: Dict[datetime.date, Dict[MetClass, float]] = {}
        self._session_start: Optional[float] = None
        self._last_update: Optional[float] = None
        self._history.clear()

    @property
    def history(self) -> List[PredictionResult]:
        return list(self._history)

    def summary(self, day: Optional[datetime.date] = None) -> str:
        day = day or datetime.date.today()
        daily = self.daily_summary(day)
        lines = [f"[ActivityTracker]  {day}  current={self.current} ({self.confidence:.2f})"
                 f"  total={daily.total_minutes} min"]
        for met_class in MetClass:
            mins = daily.minutes_for(met_class)
            bar  = "█" * min(mins // 5, 40)
            mark = " ←" if met_class == self.current else ""
            lines.append(f"  {met_class.label:<10} {mins:>4} min  {bar}{mark}")
        return "\n".join(lines)
