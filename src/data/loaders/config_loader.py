"""Match configuration loader for the duel simulator."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from ..models.match_config import ActorConfig, MatchConfig
from ..models.skill import Skill


# Get the data directory path
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
DEFAULT_CONFIG_FILE = DATA_DIR / "config" / "default_match.json"


def _parse_skill(skill_data: dict, default_gcd_ms: int) -> Skill:
    """Parse a skill from JSON data.

    Skills that do not declare their own shared cooldown inherit the
    match-level default.
    """
    data = dict(skill_data)
    data.setdefault("gcd_ms", default_gcd_ms)
    return Skill.model_validate(data)


def _parse_actor(actor_data: dict, default_gcd_ms: int) -> ActorConfig:
    """Parse one side of the duel from JSON data."""
    return ActorConfig(
        name=actor_data["name"],
        max_hp=actor_data["max_hp"],
        skills=[_parse_skill(s, default_gcd_ms) for s in actor_data.get("skills", [])],
    )


def parse_match_config(data: dict) -> MatchConfig:
    """Build a validated MatchConfig from a raw dictionary.

    Args:
        data: Dictionary in the ``default_match.json`` layout.

    Returns:
        MatchConfig object.

    Raises:
        pydantic.ValidationError: If any table entry is invalid.
        KeyError: If a required section is missing.
    """
    extra = {}
    if "match_duration_ms" in data:
        extra["match_duration_ms"] = data["match_duration_ms"]
    gcd_ms = data.get("gcd_ms", MatchConfig.model_fields["gcd_ms"].default)

    return MatchConfig(
        gcd_ms=gcd_ms,
        player=_parse_actor(data["player"], gcd_ms),
        ai=_parse_actor(data["ai"], gcd_ms),
        **extra,
    )


def load_match_config_file(path: Union[str, Path]) -> MatchConfig:
    """Load a match configuration from an arbitrary JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_match_config(data)


@lru_cache(maxsize=1)
def load_match_config() -> MatchConfig:
    """Load the bundled default match configuration.

    Returns:
        MatchConfig object.
    """
    return load_match_config_file(DEFAULT_CONFIG_FILE)


def load_player_skills() -> list[Skill]:
    """Get the default player skill table."""
    return list(load_match_config().player.skills)


def load_ai_skills() -> list[Skill]:
    """Get the default AI skill table."""
    return list(load_match_config().ai.skills)


def get_skill_by_id(skill_id: str) -> Optional[Skill]:
    """Find a skill in either default table.

    Args:
        skill_id: The unique skill identifier.

    Returns:
        Skill object if found, None otherwise.
    """
    config = load_match_config()
    return config.player.get_skill(skill_id) or config.ai.get_skill(skill_id)
