"""Duel Simulator Rule Constants."""

from typing import Final

# =============================================================================
# MATCH DEFAULTS
# =============================================================================
# Used when a match configuration omits a value.
DEFAULT_MATCH_DURATION_MS: Final[int] = 120_000  # 2 minutes
DEFAULT_GCD_MS: Final[int] = 1_500  # Shared cooldown after most skills

# =============================================================================
# INTERRUPT & BUFFS
# =============================================================================
INTERRUPT_SILENCE_MS: Final[int] = 5_000  # Silence applied on a successful interrupt
DEFAULT_BUFF_DURATION_MS: Final[int] = 2_000  # Defensive buff lifetime

# =============================================================================
# AI POLICY
# =============================================================================
# Each off-cooldown skill is admitted independently with this probability,
# then one admitted skill is picked uniformly.
AI_ACTION_CHANCE: Final[float] = 0.3

# Chance that a yellow channeled skill is a bait ("fake cast")
FAKE_CAST_CHANCE: Final[float] = 0.3

# Fraction of the cast time after which a fake cast cancels itself
FAKE_CAST_CANCEL_POINT: Final[float] = 0.3

# Player red casts above this damage trigger the reactive defense branch
REACTIVE_DEFENSE_DAMAGE_THRESHOLD: Final[int] = 500

# =============================================================================
# PRESENTATION BOUNDS
# =============================================================================
FEEDBACK_TTL_MS: Final[int] = 500  # Floating combat text lifetime
FEEDBACK_JITTER: Final[float] = 10.0  # +/- horizontal placement jitter (percent)
FEEDBACK_BASE_X: Final[float] = 50.0
COMBAT_LOG_LIMIT: Final[int] = 50

# =============================================================================
# FRAME DRIVER
# =============================================================================
MAX_FRAME_MS: Final[int] = 100  # Cap on a single advance after a stalled clock
SIMULATION_FRAME_MS: Final[int] = 16  # ~60 FPS for headless simulations
