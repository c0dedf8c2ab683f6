#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import platform
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Ensure repo root (which contains `chessprog/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from chessprog.engine.game import GameState
from chessprog.eval import MaterialScoring
from chessprog.search.service import SearchService, SearchResult


@dataclass
class BenchItem:
    id: str
    name: str
    position: str
    depth: Optional[int] = None


DEFAULT_POSITIONS: List[BenchItem] = [
    BenchItem("start", "Initial layout", "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w", 2),
    BenchItem("kq-k", "Queen and king vs king", "7k/8/5K2/8/8/8/8/6Q1 w", 3),
    BenchItem("rook-ending", "Rook ending", "8/5k2/8/8/3R4/8/2K5/8 w", 3),
    BenchItem("minor-pieces", "Minor pieces", "4k3/3n4/8/2B5/8/5N2/8/4K3 b", 2),
]


def load_positions(path: str) -> List[BenchItem]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    items: List[BenchItem] = []
    for obj in data.get("positions", []):
        items.append(
            BenchItem(
                id=str(obj.get("id", obj.get("name", "pos"))),
                name=str(obj.get("name", "Unnamed")),
                position=str(obj["position"]),
                depth=(int(obj["depth"]) if obj.get("depth") is not None else None),
            )
        )
    return items


def bench_position(
    svc: SearchService, item: BenchItem, *, depth: Optional[int], iterations: int
) -> Dict[str, Any]:
    # Per-item depth overrides the global one
    eff_depth = item.depth if item.depth is not None else (depth or 2)
    try:
        game = GameState.from_position(item.position)
    except ValueError as e:
        raise ValueError(f"Invalid position for {item.id}: {e}")

    total_time = 0
    total_nodes = 0
    last: Optional[SearchResult] = None
    for _ in range(max(1, iterations)):
        res = svc.search(game, depth=eff_depth)
        total_time += max(0, res.time_ms)
        total_nodes += max(0, res.nodes)
        last = res

    assert last is not None
    avg_time = int(total_time / max(1, iterations))
    avg_nodes = int(total_nodes / max(1, iterations))
    nps = int(avg_nodes * 1000 / max(1, avg_time)) if avg_time > 0 else 0
    return {
        "id": item.id,
        "name": item.name,
        "position": item.position,
        "depth": last.depth,
        "best_move": last.best_move.to_str() if last.best_move else None,
        "score": last.score,
        "time_ms": avg_time,
        "nodes": avg_nodes,
        "nps": nps,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Time the minimax search over a positions suite")
    parser.add_argument(
        "--positions", default=None, help="Path to positions.json (default: built-in suite)"
    )
    parser.add_argument("--depth", type=int, default=None, help="Global depth per position")
    parser.add_argument(
        "--scoring",
        choices=[s.value for s in MaterialScoring],
        default=MaterialScoring.SIDE_TO_MOVE.value,
        help="Leaf material scoring strategy",
    )
    parser.add_argument(
        "--iterations", type=int, default=1, help="Repeat runs per position and average"
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument(
        "--progress", action="store_true", help="Print per-position progress to stderr"
    )
    args = parser.parse_args()

    items = load_positions(args.positions) if args.positions else DEFAULT_POSITIONS
    if not items:
        raise SystemExit("No positions found in positions file")

    svc = SearchService(scoring=MaterialScoring(args.scoring))
    results: List[Dict[str, Any]] = []
    t0 = time.perf_counter()
    for idx, it in enumerate(items, start=1):
        if args.progress:
            sys.stderr.write(f"[{idx}/{len(items)}] {it.id}: running...\n")
            sys.stderr.flush()
        res = bench_position(svc, it, depth=args.depth, iterations=max(1, args.iterations))
        results.append(res)
        if args.progress:
            sys.stderr.write(
                f"    depth={res['depth']} time={res['time_ms']}ms nodes={res['nodes']} best={res['best_move']}\n"
            )
            sys.stderr.flush()

    dt_ms = int((time.perf_counter() - t0) * 1000)
    total_nodes = sum(r["nodes"] for r in results)
    payload = {
        "meta": {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "config": {
                "iterations": max(1, args.iterations),
                "global_depth": args.depth,
                "scoring": args.scoring,
            },
        },
        "results": results,
        "summary": {
            "positions": len(results),
            "total_time_ms": dt_ms,
            "total_nodes": total_nodes,
            "overall_nps": int(total_nodes * 1000 / max(1, dt_ms)) if dt_ms > 0 else 0,
        },
    }
    print(json.dumps(payload, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
