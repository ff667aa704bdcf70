# -*- coding: utf-8 -*-
# talent_core/clock.py
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FrozenClock:
    """Clock pinned to one instant; `advance` moves it forward."""
    at: datetime

    def __call__(self) -> datetime:
        return self.at

    def advance(self, **delta) -> None:
        self.at = self.at + timedelta(**delta)


def new_action_id() -> str:
    return f"action-{uuid.uuid4().hex}"
