# Data Models
from .skill import Skill, SkillKind, SkillColor
from .match_config import ActorConfig, MatchConfig

__all__ = [
    "Skill",
    "SkillKind",
    "SkillColor",
    "ActorConfig",
    "MatchConfig",
]
