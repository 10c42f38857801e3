#!/usr/bin/env python
"""
Monte Carlo Duel Simulation Script.

Plays many headless matches of the AI against the scripted player and
prints win rates, average match length and remaining health.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging

from src.combat import MatchSimulator
from src.data.loaders import load_match_config, load_match_config_file


def main():
    parser = argparse.ArgumentParser(description="Duel Monte Carlo Simulation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=100,
        help="Number of matches to play (default: 100)",
    )
    parser.add_argument(
        "--reaction-ms",
        type=float,
        default=250.0,
        help="Scripted player's interrupt reaction delay (default: 250)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base seed for reproducible runs",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a match configuration JSON file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every finished match",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_match_config_file(args.config) if args.config else load_match_config()
    simulator = MatchSimulator(config, base_seed=args.seed)
    result = simulator.simulate(iterations=args.iterations, reaction_ms=args.reaction_ms)

    low, high = result.win_rate_confidence
    print("\n" + "=" * 60)
    print(f"{config.player.name} vs {config.ai.name}: {result.iterations} matches")
    print("=" * 60)
    print(f"Player win rate: {result.player_win_rate:.1%} (95% CI {low:.1%} - {high:.1%})")
    print(f"AI win rate:     {result.ai_win_rate:.1%}")
    print(f"Tie rate:        {result.tie_rate:.1%}")
    print(f"Avg duration:    {result.avg_duration_ms / 1000:.1f}s")
    print(f"Avg player HP:   {result.avg_player_hp:.0f} / {config.player.max_hp}")
    print(f"Avg AI HP:       {result.avg_ai_hp:.0f} / {config.ai.max_hp}")

    return result


if __name__ == "__main__":
    main()
