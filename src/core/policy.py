"""TTL and revalidation policy for a cache node.

The policy owns a single expiration instant shared by every entry in the
node. A read that finds it in the past is stale, and the configured
RevalidationAction decides what the node does about it:

- REVALIDATE: keep serving the stored value and slide the expiration
  forward by the revalidation duration. Nothing is recomputed.
- EXPIRE: drop every entry, slide the expiration forward, and treat the
  read as a miss.

Times come from an injectable clock (seconds as float), time.monotonic
by default.
"""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from config import DEFAULT_TTL_SECONDS
from core.errors import Expired

Clock = Callable[[], float]


class RevalidationAction(enum.Enum):
    EXPIRE = "expire"
    REVALIDATE = "revalidate"


class TtlSetting(enum.Enum):
    BLOCKING = "blocking"
    EXPIRE = "expire"
    # Not implemented: reads behave as BLOCKING
    SWR = "swr"


class StaleOutcome(enum.Enum):
    SERVE_STALE = "serve_stale"
    MISS = "miss"


def default_clock() -> float:
    return time.monotonic()


@dataclass
class TtlPolicy:
    action: RevalidationAction = RevalidationAction.EXPIRE
    duration: int = DEFAULT_TTL_SECONDS
    setting: TtlSetting = TtlSetting.BLOCKING
    expiration: Optional[float] = None
    clock: Clock = field(default=default_clock, repr=False)

    def now(self) -> float:
        return float(self.clock())

    def expires(self, seconds: int) -> "TtlPolicy":
        seconds = int(seconds)
        if seconds < 0:
            raise ValueError("expiration seconds must be >= 0")
        return replace(self, expiration=self.now() + seconds, duration=seconds)

    def revalidate(self, status: bool) -> "TtlPolicy":
        action = RevalidationAction.REVALIDATE if status else RevalidationAction.EXPIRE
        return replace(self, action=action)

    def with_setting(self, setting: TtlSetting) -> "TtlPolicy":
        return replace(self, setting=TtlSetting(setting))

    def copy(self) -> "TtlPolicy":
        return replace(self)

    def validate_expiration(self) -> None:
        if self.expiration is None:
            return
        if self.now() > self.expiration:
            raise Expired(f"expired at {self.expiration}")

    def is_fresh(self) -> bool:
        try:
            self.validate_expiration()
        except Expired:
            return False
        return True

    def renew(self) -> float:
        self.expiration = self.now() + self.duration
        return self.expiration

    def on_stale(self) -> StaleOutcome:
        """Renew the clock and say how the stale read should be served.

        The caller is responsible for clearing the store on MISS.
        """
        self.renew()
        if self.action is RevalidationAction.REVALIDATE:
            return StaleOutcome.SERVE_STALE
        return StaleOutcome.MISS
