"""Command-line launcher for headless runs and the local server."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from snake_swarm.config import SimulationConfig

logger = logging.getLogger(__name__)


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    parser.add_argument("--board-width", type=int, default=None)
    parser.add_argument("--board-height", type=int, default=None)
    parser.add_argument("--cell-size", type=int, default=None)
    parser.add_argument("--tick-rate-ms", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-swarm",
        description="Greedy multi-snake simulation.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- run ---
    run_p = sub.add_parser("run", help="Run a headless simulation to the end.")
    _add_config_flags(run_p)
    run_p.add_argument("--snakes", type=int, default=4)
    run_p.add_argument(
        "--max-ticks", type=int, default=10_000,
        help="Stop after this many ticks even if snakes can still move.",
    )

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Serve the HTTP/WebSocket API.")
    _add_config_flags(serve_p)
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    return parser


def _load_config(args: argparse.Namespace) -> SimulationConfig:
    config = (
        SimulationConfig.load(args.config)
        if args.config else SimulationConfig()
    )

    flag_map = {
        "board_width": "board_width",
        "board_height": "board_height",
        "cell_size": "cell_size",
        "tick_rate_ms": "tick_rate_ms",
        "seed": "seed",
    }
    overrides: dict = {}
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def _run_headless(args: argparse.Namespace) -> int:
    from snake_swarm.engine import SimulationEngine

    engine = SimulationEngine(_load_config(args))
    state = engine.start(args.snakes)
    while not state["game_over"] and state["tick"] < args.max_ticks:
        state = engine.tick()

    longest = max(s["length"] for s in state["snakes"])
    print(  # noqa: T201
        f"{len(state['snakes'])} snakes, {state['tick']} ticks, "
        f"longest {longest}, "
        f"ended: {state['end_reason'] or 'tick limit'}"
    )
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_swarm.server.app import create_app

    uvicorn.run(create_app(_load_config(args)), host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-swarm`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "run": _run_headless,
        "serve": _run_serve,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
