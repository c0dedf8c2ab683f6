#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `chessprog/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from chessprog.engine.board import STARTPOS_PLACEMENT
from chessprog.engine.game import GameState
from chessprog.engine.perft import perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Count legal-move tree leaves for a position")
    parser.add_argument(
        "--position",
        type=str,
        default=f"{STARTPOS_PLACEMENT} w",
        help="Piece placement plus side to move (default: initial layout, white)",
    )
    parser.add_argument("--depth", type=int, default=2, help="Perft depth (default: 2)")
    args = parser.parse_args()

    game = GameState.from_position(args.position)
    start = time.perf_counter()
    nodes = perft(game, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
