#!/usr/bin/env python3
"""Stress test script for the Ashakk engine.

Plays many seeded stub matches under the collecting validator and reports
winners, stalls and invariant violations.
"""

import argparse
import logging
import sys
from datetime import datetime

from ashakk.ai import run_stub_match
from ashakk.engine import CollectingValidator


def run_single_game(game_id: int, seed: int, player_count: int) -> dict:
    """Run a single match and return statistics."""
    validator = CollectingValidator()
    _, report = run_stub_match(player_count, seed=seed, validator=validator)

    outcome = validator.result()
    return {
        "game_id": game_id,
        "seed": seed,
        "winner": report.winner,
        "actions": report.actions,
        "doubts": report.doubts,
        "stalled": report.stalled,
        "timed_out": report.timed_out,
        "valid": outcome.is_valid,
        "violations": [f"[{v.severity.value}] [{v.rule_id}] {v.message}" for v in outcome.violations],
    }


def run_stress_test(games: int = 100, player_count: int = 4) -> dict:
    """Run multiple matches to stress test the engine."""
    print(f"Starting stress test with {games} games of {player_count} players...")
    print(f"Timestamp: {datetime.now().isoformat()}")
    print("-" * 50)

    failures = []
    finished = stalled = timed_out = 0
    total_actions = 0

    for i in range(games):
        # Use a different seed for each game for variety
        seed = i * 12345 + 42
        result = run_single_game(i + 1, seed, player_count)
        total_actions += result["actions"]

        if not result["valid"]:
            failures.append(result)
        if result["stalled"]:
            stalled += 1
        elif result["timed_out"]:
            timed_out += 1
        else:
            finished += 1

        if (i + 1) % 10 == 0:
            print(f"Completed {i + 1}/{games} games...")

    print("-" * 50)
    print("Stress test complete!")
    print(f"Total games: {games}")
    print(f"Finished: {finished}")
    print(f"Stalled (double-six undealt): {stalled}")
    print(f"Timed out: {timed_out}")
    print(f"Average actions: {total_actions / max(games, 1):.1f}")
    print(f"Games with violations: {len(failures)}")

    if failures:
        print("\nViolations encountered:")
        for f in failures[:5]:
            print(f"  Game {f['game_id']} (seed {f['seed']}): {f['violations'][0]}")

    return {
        "total": games,
        "finished": finished,
        "stalled": stalled,
        "timed_out": timed_out,
        "errors": len(failures),
        "error_details": failures,
    }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Stress test the Ashakk engine")
    parser.add_argument(
        "--games", "-g",
        type=int,
        default=100,
        help="Number of games to run (default: 100)",
    )
    parser.add_argument(
        "--players", "-p",
        type=int,
        default=4,
        choices=[2, 3, 4],
        help="Players per game (default: 4)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable engine debug logging")

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    results = run_stress_test(args.games, args.players)

    if results["errors"] > 0:
        print(f"\nStress test completed with {results['errors']} games violating invariants!")
        sys.exit(1)
    else:
        print("\nAll games kept every invariant!")
        sys.exit(0)


if __name__ == "__main__":
    main()
