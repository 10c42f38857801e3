"""Combat simulation module for the duel simulator.

This module provides the real-time duel rules:
- Actors, buffs and the match snapshot
- Casting, damage and interrupt resolution
- The scripted AI opponent
- The combat engine and its frame driver
- Monte Carlo win rate simulation
"""

# Actors & State
from .actor import Actor, ActorId
from .match_state import MatchState, MatchStatus, MatchResult, Winner

# Buffs
from .buffs import (
    Buff,
    BuffKind,
    BuffSystem,
    create_damage_reduction,
)

# Events & Feedback
from .events import (
    CombatEvent,
    EventType,
    FeedbackText,
    FeedbackCategory,
    FeedbackEmitter,
    purge_feedback,
    trim_log,
)

# Diagnostics
from .diagnostics import DiagnosticChannel, DiagnosticSink

# Damage
from .damage import DamageSystem, DamageResult, calculate_mitigated_damage

# Casting
from .casting import CastingSystem, CastUpdate

# Interrupts
from .interrupt import InterruptSystem, InterruptOutcome

# AI
from .ai_policy import AIPolicy, AIDecision

# Skill bar
from .skill_slots import SkillSlot, build_skill_slot, build_skill_slots

# Combat Engine
from .combat_engine import (
    CombatEngine,
    ActivationResult,
    RejectionReason,
    determine_winner,
)

# Frame driver
from .game_loop import MatchLoop, monotonic_ms

# Simulation
from .simulation import (
    MatchSimulator,
    ScriptedPlayer,
    SimulationResult,
    wilson_interval,
)

__all__ = [
    # Actors & State
    "Actor",
    "ActorId",
    "MatchState",
    "MatchStatus",
    "MatchResult",
    "Winner",
    # Buffs
    "Buff",
    "BuffKind",
    "BuffSystem",
    "create_damage_reduction",
    # Events & Feedback
    "CombatEvent",
    "EventType",
    "FeedbackText",
    "FeedbackCategory",
    "FeedbackEmitter",
    "purge_feedback",
    "trim_log",
    # Diagnostics
    "DiagnosticChannel",
    "DiagnosticSink",
    # Damage
    "DamageSystem",
    "DamageResult",
    "calculate_mitigated_damage",
    # Casting
    "CastingSystem",
    "CastUpdate",
    # Interrupts
    "InterruptSystem",
    "InterruptOutcome",
    # AI
    "AIPolicy",
    "AIDecision",
    # Skill bar
    "SkillSlot",
    "build_skill_slot",
    "build_skill_slots",
    # Combat Engine
    "CombatEngine",
    "ActivationResult",
    "RejectionReason",
    "determine_winner",
    # Frame driver
    "MatchLoop",
    "monotonic_ms",
    # Simulation
    "MatchSimulator",
    "ScriptedPlayer",
    "SimulationResult",
    "wilson_interval",
]
