import argparse
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from ai_agent import AIAgent
from config import load_weights
from controllers import AIController
from game_session import GameSession


@dataclass
class GameResult:
    score: int
    lines: int
    pieces: int
    level: int
    game_over: bool


def run_single_game(weights: Optional[Dict[str, float]] = None, max_pieces: int = 1000,
                    seed: Optional[int] = None) -> GameResult:
    """Run one AI game without display, one placement per tick."""
    session = GameSession(AIController(AIAgent(weights), cooldown=0.0), seed=seed)

    while not session.game_over and session.pieces_placed < max_pieces:
        session.tick(0.0)

    return GameResult(session.score, session.lines, session.pieces_placed,
                      session.level, session.game_over)


def run_benchmark(weights: Optional[Dict[str, float]] = None, games: int = 5, max_pieces: int = 1000,
                  seed: Optional[int] = None) -> List[GameResult]:
    print(f"\nRunning {games} games (max {max_pieces} pieces each)...")
    print("-" * 60)

    results = []
    for game_num in range(games):
        start_time = time.time()
        game_seed = None if seed is None else seed + game_num
        result = run_single_game(weights, max_pieces, game_seed)
        results.append(result)
        elapsed = time.time() - start_time
        end = "topped out" if result.game_over else "piece cap"
        print(f"[Game] {game_num + 1}/{games}: {result.score} points, {result.lines} lines, "
              f"{result.pieces} pieces, level {result.level} ({end}, {elapsed:.1f}s)")

    if results:
        n = len(results)
        print(f"\n{'='*60}")
        print(f"[Result] Avg Score:  {sum(r.score for r in results) / n:.1f}")
        print(f"[Result] Avg Lines:  {sum(r.lines for r in results) / n:.1f}")
        print(f"[Result] Avg Pieces: {sum(r.pieces for r in results) / n:.1f}")
        print(f"[Result] Avg Level:  {sum(r.level for r in results) / n:.1f}")
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="Headless benchmark of the heuristic Tetris AI")
    parser.add_argument("--games", type=int, default=5)
    parser.add_argument("--max-pieces", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--weights", type=str, default=None, help="JSON weights file")
    args = parser.parse_args(argv)

    print("Tetris AI Benchmark")
    print("=" * 40)

    weights = load_weights(args.weights) if args.weights else None
    agent = AIAgent(weights)
    for key, value in agent.weights.items():
        print(f"  {key:20s}: {value:9.6f}")

    return run_benchmark(weights, args.games, args.max_pieces, args.seed)


if __name__ == "__main__":
    main()
