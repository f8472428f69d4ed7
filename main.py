#!/usr/bin/env python3
"""
Minefield - terminal entry point.

Usage:
    python main.py play [--rows R] [--columns C] [--mines M] [--seed S]
    python main.py demo [--games N] [--delay SECONDS]
"""
import argparse
import logging
import random
import time

import numpy as np

from minefield import (
    GameClock,
    GameConfig,
    MinefieldEngine,
    MinefieldEnv,
    MinefieldError,
    WinRule,
    render_board,
)
from minefield.render import end_message, format_elapsed

HELP_TEXT = (
    "Commands: r ROW COL (reveal), f ROW COL (flag/unflag), "
    "n (new game), q (quit)"
)


def build_config(args: argparse.Namespace) -> GameConfig:
    """Clamp command line settings into a valid configuration."""
    config = GameConfig.clamped(
        args.rows, args.columns, args.mines, WinRule[args.win_rule]
    )
    if (config.rows, config.columns, config.mine_count) != (
        args.rows, args.columns, args.mines
    ):
        print(
            f"Settings adjusted to {config.rows}x{config.columns} "
            f"with {config.mine_count} mines"
        )
    return config


def print_board(engine: MinefieldEngine, clock: GameClock) -> None:
    print()
    print(render_board(engine, with_headers=True))
    print(
        f"Mines left: {engine.remaining_mines} | "
        f"Time: {format_elapsed(clock.elapsed)}"
    )


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = build_config(args)
    engine = MinefieldEngine(rng=random.Random(args.seed))
    clock = GameClock()

    engine.start(config)
    clock.start()
    print(HELP_TEXT)

    while True:
        print_board(engine, clock)
        try:
            command = input("> ").split()
        except EOFError:
            break

        if not command:
            continue
        action = command[0].lower()

        if action == "q":
            break
        if action == "n":
            engine.restart()
            clock.start()
            continue
        if action not in ("r", "f") or len(command) != 3:
            print(HELP_TEXT)
            continue

        try:
            row, col = int(command[1]), int(command[2])
        except ValueError:
            print("ROW and COL must be whole numbers")
            continue

        try:
            if action == "r":
                engine.reveal(row, col)
            else:
                engine.toggle_flag(row, col)
        except MinefieldError as error:
            print(error)
            continue

        was_running = clock.running
        clock.sync(engine.status)
        message = end_message(engine, clock)
        if message and was_running:
            print(f"\n{message}")
            print("Type n for a new game or q to quit.")


def demo(args: argparse.Namespace) -> None:
    """Watch a random player reveal cells through the environment."""
    config = build_config(args)
    env = MinefieldEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    wins = 0
    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        env.reset(seed=seed)
        done = False
        step = 0

        while not done:
            valid_actions = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_actions))
            row, col = env.action_to_position(action)

            _, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"\n=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Last move: ({row}, {col}) | Reward: {reward:+.1f}\n")
            print(env.render())
            time.sleep(args.delay)

        if info["game_state"] == "WON":
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit mine) ***")

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield puzzle game")
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_game_options(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--rows", type=int, default=9, help="Rows (2-70)")
        sub.add_argument("--columns", type=int, default=9, help="Columns (2-70)")
        sub.add_argument("--mines", type=int, default=10, help="Number of mines")
        sub.add_argument("--seed", type=int, default=None, help="Random seed")
        sub.add_argument(
            "--win-rule",
            choices=[rule.name for rule in WinRule],
            default=WinRule.SAFE_CELLS_REVEALED.name,
            help="Win condition",
        )

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_game_options(play_parser)

    demo_parser = subparsers.add_parser("demo", help="Watch a random player")
    add_game_options(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
