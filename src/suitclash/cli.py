from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from suitclash.engine.ai import AISpec, ai_arrange, run_computer_turns
from suitclash.engine.match import Match
from suitclash.paths import get_paths
from suitclash.services.content import ContentService
from suitclash.services.telemetry import TelemetryRecorder, TelemetryService


def play_headless(match: Match, spec: AISpec, max_rounds: int) -> None:
    """Drive a computer-vs-computer match, applying battle events one at a time."""
    match.start()
    while match.phase != "game_over" and match.round_number <= max_rounds:
        run_computer_turns(match, spec)
        for i in range(len(match.players)):
            ai_arrange(match, i, spec)
        match.start_battle()

        print(f"== Round {match.round_number} ==")
        while match.apply_next_event():
            print(match.battle_log[match.battle_cursor - 1].description)
        match.finish_battle()
        print("   " + "  |  ".join(f"{p.name}: {p.health} hp" for p in match.players))

        if match.phase == "post_battle":
            match.prepare_next_round()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="suitclash")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--difficulty", type=int, default=1, choices=(0, 1, 2))
    parser.add_argument("--max-rounds", type=int, default=30)
    parser.add_argument("--synergies", action="store_true", help="Enable suit synergy effects")
    parser.add_argument("--telemetry", type=Path, default=None, help="Append JSONL telemetry here")
    args = parser.parse_args(argv)

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    game_rules = content.load_rules()
    config = game_rules.match
    if args.synergies:
        config = replace(config, suit_synergies=True)

    match = Match(
        ("North", "South"),
        human_players=(),
        seed=args.seed,
        config=config,
        rules=game_rules.rules,
    )
    if args.telemetry is not None:
        match.set_change_listener(TelemetryRecorder(TelemetryService(args.telemetry)))

    play_headless(match, AISpec(difficulty=args.difficulty), args.max_rounds)

    winner = match.get_winner()
    if match.phase != "game_over":
        print(f"No winner after {args.max_rounds} rounds.")
    elif winner is None:
        print("Draw: both players fell.")
    else:
        print(f"{winner.name} wins in round {match.round_number}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
