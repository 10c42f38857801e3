# Core rule constants
from .constants import (
    DEFAULT_MATCH_DURATION_MS,
    DEFAULT_GCD_MS,
    INTERRUPT_SILENCE_MS,
    DEFAULT_BUFF_DURATION_MS,
    AI_ACTION_CHANCE,
    FAKE_CAST_CHANCE,
    FAKE_CAST_CANCEL_POINT,
    REACTIVE_DEFENSE_DAMAGE_THRESHOLD,
    FEEDBACK_TTL_MS,
    COMBAT_LOG_LIMIT,
    MAX_FRAME_MS,
    SIMULATION_FRAME_MS,
)

__all__ = [
    "DEFAULT_MATCH_DURATION_MS",
    "DEFAULT_GCD_MS",
    "INTERRUPT_SILENCE_MS",
    "DEFAULT_BUFF_DURATION_MS",
    "AI_ACTION_CHANCE",
    "FAKE_CAST_CHANCE",
    "FAKE_CAST_CANCEL_POINT",
    "REACTIVE_DEFENSE_DAMAGE_THRESHOLD",
    "FEEDBACK_TTL_MS",
    "COMBAT_LOG_LIMIT",
    "MAX_FRAME_MS",
    "SIMULATION_FRAME_MS",
]
