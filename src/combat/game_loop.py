"""Frame driver for the duel simulator.

Owns the current snapshot and feeds the engine elapsed time, one call per
frame, capping each frame so a stalled clock cannot skip simulation.
"""

from typing import Callable, Optional, Union
import time

from src.core.constants import MAX_FRAME_MS

from .actor import ActorId
from .combat_engine import ActivationResult, CombatEngine
from .match_state import MatchState, MatchStatus

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class MatchLoop:
    """
    Drives one match.

    Usage:
        loop = MatchLoop(CombatEngine())
        loop.start()
        while not loop.is_finished:
            loop.frame()
            loop.use_skill("p_attack")
    """

    def __init__(
        self,
        engine: CombatEngine,
        clock: Optional[Clock] = None,
        max_frame_ms: float = MAX_FRAME_MS,
    ):
        """
        Initialize the driver.

        Args:
            engine: Combat engine owning the transition rules.
            clock: Millisecond clock (monotonic wall clock by default).
            max_frame_ms: Cap on the elapsed time passed per frame.
        """
        self.engine = engine
        self.clock = clock or monotonic_ms
        self.max_frame_ms = max_frame_ms
        self.state: MatchState = engine.new_match()
        self._last_time: Optional[float] = None

    @property
    def is_finished(self) -> bool:
        return self.state.status == MatchStatus.ENDED

    def start(self) -> MatchState:
        self.state = self.engine.start(self.state)
        self._last_time = self.clock()
        return self.state

    def pause(self) -> MatchState:
        self.state = self.engine.pause(self.state)
        return self.state

    def resume(self) -> MatchState:
        self.state = self.engine.resume(self.state)
        # Time spent paused is not simulated
        self._last_time = self.clock()
        return self.state

    def restart(self) -> MatchState:
        self.state = self.engine.restart(self.state)
        self._last_time = self.clock()
        return self.state

    def frame(self) -> MatchState:
        """Advance by the clock time since the previous frame, capped."""
        now = self.clock()
        if self._last_time is None:
            self._last_time = now
        elapsed = min(max(0.0, now - self._last_time), self.max_frame_ms)
        self._last_time = now
        self.state = self.engine.advance(self.state, elapsed)
        return self.state

    def advance_by(self, total_ms: float) -> MatchState:
        """
        Simulate a fixed interval as a series of capped frames.

        Stops early once the match is no longer playing.
        """
        if total_ms < 0:
            raise ValueError(f"total_ms must be non-negative, got {total_ms}")
        remaining = total_ms
        while remaining > 0 and self.state.status == MatchStatus.PLAYING:
            step = min(remaining, self.max_frame_ms)
            self.state = self.engine.advance(self.state, step)
            remaining -= step
        return self.state

    def use_skill(
        self,
        skill_id: str,
        actor_id: Union[ActorId, str] = ActorId.PLAYER,
    ) -> ActivationResult:
        result = self.engine.activate_skill(self.state, actor_id, skill_id)
        self.state = result.state
        return result
