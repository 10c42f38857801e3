# Data Loaders
from .config_loader import (
    load_match_config,
    load_match_config_file,
    parse_match_config,
    load_player_skills,
    load_ai_skills,
    get_skill_by_id,
)

__all__ = [
    "load_match_config",
    "load_match_config_file",
    "parse_match_config",
    "load_player_skills",
    "load_ai_skills",
    "get_skill_by_id",
]
