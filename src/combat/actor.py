"""Combat Actor for the duel simulator.

Tracks one side's real-time state during a match: health, casting,
timers, cooldowns and buffs.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, List, Dict, TYPE_CHECKING
from enum import StrEnum

from src.combat.buffs import Buff

if TYPE_CHECKING:
    from src.data.models.match_config import ActorConfig
    from src.data.models.skill import Skill


class ActorId(StrEnum):
    """Stable actor identities."""

    PLAYER = "player"
    AI = "ai"

    @property
    def opponent(self) -> "ActorId":
        return ActorId.AI if self == ActorId.PLAYER else ActorId.PLAYER


@dataclass
class Actor:
    """
    A duelist participating in a match.

    All timestamps are absolute match times in milliseconds.
    """

    # Identification
    id: ActorId
    name: str

    # Vitals
    max_hp: int
    hp: int

    # Buffs in application order
    buffs: List[Buff] = field(default_factory=list)

    # Casting
    is_casting: bool = False
    active_skill: Optional["Skill"] = None
    cast_progress: float = 0.0  # 0 to 100

    # Timers
    global_cooldown_ends_at: float = 0.0
    silenced_until: float = 0.0
    cooldowns: Dict[str, float] = field(default_factory=dict)  # skill id -> end time

    # AI bait: self-cancel the current cast at this time
    fake_cast_cancel_at: Optional[float] = None

    # Match statistics
    total_damage_dealt: int = 0
    total_damage_taken: int = 0
    interrupts_landed: int = 0

    @classmethod
    def from_config(cls, actor_id: ActorId, config: "ActorConfig") -> "Actor":
        """Create a fresh actor at full health with no buffs or cooldowns."""
        return cls(
            id=actor_id,
            name=config.name,
            max_hp=config.max_hp,
            hp=config.max_hp,
        )

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def is_silenced(self, now: float) -> bool:
        return self.silenced_until > now

    def gcd_active(self, now: float) -> bool:
        return self.global_cooldown_ends_at > now

    def cooldown_ends_at(self, skill_id: str) -> float:
        return self.cooldowns.get(skill_id, 0.0)

    def is_on_cooldown(self, skill_id: str, now: float) -> bool:
        return self.cooldown_ends_at(skill_id) > now

    def start_cast(self, skill: "Skill") -> None:
        """Begin channeling a skill; progress restarts at 0."""
        self.is_casting = True
        self.active_skill = skill
        self.cast_progress = 0.0
        self.fake_cast_cancel_at = None

    def clone(self) -> "Actor":
        """Copy with its own buff list and cooldown table; skills are shared."""
        return replace(self, buffs=list(self.buffs), cooldowns=dict(self.cooldowns))

    def clear_cast(self) -> None:
        """Drop the current cast (completion, interrupt or self-cancel)."""
        self.is_casting = False
        self.active_skill = None
        self.cast_progress = 0.0
        self.fake_cast_cancel_at = None

    def take_damage(self, amount: int) -> int:
        """
        Reduce health, clamped at 0.

        Args:
            amount: Already-mitigated damage.

        Returns:
            Health actually removed.
        """
        amount = max(0, amount)
        removed = min(self.hp, amount)
        self.hp = max(0, self.hp - amount)
        self.total_damage_taken += removed
        return removed

    def __repr__(self) -> str:
        hp_pct = int(self.hp / self.max_hp * 100) if self.max_hp > 0 else 0
        casting = f" casting {self.active_skill.id}" if self.is_casting and self.active_skill else ""
        return f"{self.name} ({hp_pct}% HP{casting})"
