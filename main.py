#!/usr/bin/env python3
"""
Tetris Versus: human and CPU Tetris
Main entry point and command-line interface.
"""

import argparse
import sys
import time

from tetris_versus.ai.evaluation import create_evaluator
from tetris_versus.ai.placement import PlacementSearch
from tetris_versus.core.board import Board
from tetris_versus.core.config import CPU, MatchConfig
from tetris_versus.core.exceptions import TetrisException
from tetris_versus.core.pieces import Piece, PieceType
from tetris_versus.match import MatchController


def build_config(args, players) -> MatchConfig:
    """Match config from a JSON file, overridden by command line options."""
    data = {}
    if args.config:
        data = MatchConfig.from_json(args.config).__dict__.copy()
    data['players'] = players
    if args.mode:
        data['mode'] = args.mode
    if args.difficulty:
        data['difficulty'] = args.difficulty
    if args.seed is not None:
        data['seed'] = args.seed
    return MatchConfig.from_dict(data)


def build_evaluator(args, config: MatchConfig):
    """Evaluator named on the command line, with the config's weight overrides."""
    if args.evaluator == 'legacy':
        return create_evaluator('legacy')
    return create_evaluator(args.evaluator, config.weights)


def demo_game(args):
    """Run a Cpu match and print the boards as it goes."""
    print("🧠 Tetris Versus Demo")
    print("=" * 50)

    players = (CPU, CPU) if args.versus else (CPU,)
    config = build_config(args, players)
    match = MatchController(config, evaluator=build_evaluator(args, config))

    match.on_lines_cleared = lambda index, count: print(
        f"  {match.players[index].name} cleared {count} line(s)")
    match.on_game_over = lambda index: print(f"  {match.players[index].name} crashed")

    print(f"Mode: {config.mode.name}")
    print(f"Difficulty: {config.difficulty.name}")
    print(f"Evaluator: {args.evaluator}")
    print()

    delta = 1.0 / args.fps
    start_time = time.time()

    while not match.is_over and match.frame_count < args.frames:
        match.update(delta)

        if match.frame_count % args.every == 0:
            print(f"\nFrame: {match.frame_count}  Time: {match.time_elapsed:.1f}s")
            print(match)
            print("-" * 30)

    duration = time.time() - start_time

    print("\n" + "=" * 50)
    print("🎮 GAME OVER" if match.is_over else "⏱ FRAME LIMIT REACHED")
    print("=" * 50)
    for stats in match.get_stats():
        print(f"{stats['name']}: {stats['outcome']}  Lines: {stats['lines']}  "
              f"Level: {stats['level']}  Health: {stats['health']}  Pieces: {stats['pieces_locked']}")
    print(f"Frames: {match.frame_count}")
    print(f"Game Time: {match.time_elapsed:.1f} seconds")
    print(f"Wall Time: {duration:.2f} seconds")


def simulate(args):
    """Play several headless single Cpu games and report averages."""
    print("🧠 Tetris Versus Simulation")
    print("=" * 50)

    total_lines = 0
    total_pieces = 0
    delta = 1.0 / args.fps

    for game in range(args.games):
        config = MatchConfig(players=(CPU,), difficulty=args.difficulty or 'very_hard',
                             seed=args.seed + game)
        match = MatchController(config, evaluator=build_evaluator(args, config))

        while not match.is_over and match.frame_count < args.frames:
            match.update(delta)

        player = match.players[0]
        total_lines += player.lines
        total_pieces += player.pieces_locked
        print(f"Game {game + 1}/{args.games}: Lines={player.lines}, Pieces={player.pieces_locked}, "
              f"Outcome={match.outcomes[0].name}")

    print(f"\nSimulation Results:")
    print(f"Average Lines: {total_lines / args.games:.1f}")
    print(f"Average Pieces: {total_pieces / args.games:.1f}")
    print(f"Total Games: {args.games}")


def benchmark(args):
    """Run performance benchmarks."""
    print("🧠 Tetris Versus Performance Benchmark")
    print("=" * 50)

    board = Board()
    evaluator = create_evaluator(args.evaluator)
    search = PlacementSearch(evaluator)

    print("\nBenchmarking board evaluation...")
    start_time = time.time()
    for _ in range(1000):
        evaluator.evaluate_board(board)
    eval_time = time.time() - start_time
    print(f"Board evaluation: 1000 evaluations in {eval_time:.3f}s ({1000 / eval_time:.0f} eval/s)")

    print("\nBenchmarking placement search...")
    start_time = time.time()
    for index in range(100):
        piece = Piece(PieceType(index % len(PieceType)), 5, 0)
        search.find_destination(board, piece)
    search_time = time.time() - start_time
    print(f"Placement search: 100 searches in {search_time:.3f}s ({100 / search_time:.1f} searches/s)")

    print("\n✓ Benchmark completed")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Tetris Versus: human and CPU Tetris")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--evaluator', choices=['heuristic', 'legacy'], default='heuristic',
                        help='Cpu placement scoring model')
    common.add_argument('--fps', type=int, default=60, help='Updates per simulated second')
    common.add_argument('--frames', type=int, default=20000, help='Frame limit per game')

    # Demo command
    demo_parser = subparsers.add_parser('demo', parents=[common], help='Watch a Cpu match')
    demo_parser.add_argument('--mode', help='normal, infinite, timed or tug_of_war')
    demo_parser.add_argument('--difficulty', help='very_easy, easy, medium, hard or very_hard')
    demo_parser.add_argument('--seed', type=int, default=None, help='Random seed')
    demo_parser.add_argument('--config', help='JSON match config file')
    demo_parser.add_argument('--versus', action='store_true', help='Two Cpu players')
    demo_parser.add_argument('--every', type=int, default=300, help='Print the boards every N frames')

    # Simulate command
    sim_parser = subparsers.add_parser('simulate', parents=[common], help='Run headless Cpu games')
    sim_parser.add_argument('--games', type=int, default=10, help='Number of games')
    sim_parser.add_argument('--difficulty', default=None, help='Cpu difficulty')
    sim_parser.add_argument('--seed', type=int, default=0, help='Seed of the first game')

    # Benchmark command
    subparsers.add_parser('benchmark', parents=[common], help='Run performance benchmarks')

    args = parser.parse_args()

    try:
        if args.command == 'demo':
            demo_game(args)
        elif args.command == 'simulate':
            simulate(args)
        elif args.command == 'benchmark':
            benchmark(args)
        else:
            parser.print_help()
            print("\nFor a quick demo, run: python main.py demo")
    except TetrisException as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
