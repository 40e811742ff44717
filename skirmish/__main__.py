"""Entry point: ``python -m skirmish``.

Supports two modes:
  - ``python -m skirmish serve``  → FastAPI server; clients drive the encounter
  - ``python -m skirmish cli``    → Headless scripted demo encounter
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turn-based grid combat encounter engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--config", type=str, default=None, help="XML config file")
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    srv.add_argument("--log-dir", type=str, default=None)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a scripted demo encounter")
    cli.add_argument("--config", type=str, default=None, help="XML config file")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--rounds", type=int, default=50)
    cli.add_argument("--initiative", action="store_true", help="Sort turn order by initiative first")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    cli.add_argument("--log-dir", type=str, default=None)

    return parser


def _make_config(args: argparse.Namespace):
    from skirmish.config import EncounterConfig, load_config

    config = EncounterConfig(seed=args.seed, log_level=args.log_level, log_dir=args.log_dir)
    if args.config:
        config = load_config(args.config, base=config)
    return config


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from skirmish.api.app import create_app
    from skirmish.utils.logging import setup_logging

    setup_logging(args.log_level, args.log_dir)
    config = _make_config(args)
    app = create_app(config, configure_logging=False)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _step_toward(origin, target):
    from skirmish.core.models import Vector2

    dx = (target.x > origin.x) - (target.x < origin.x)
    dy = (target.y > origin.y) - (target.y < origin.y)
    return Vector2(origin.x + dx, origin.y + dy)


def _run_cli(args: argparse.Namespace) -> None:
    from skirmish.engine.exceptions import InvalidActionError
    from skirmish.systems.generator import build_encounter
    from skirmish.utils.logging import setup_logging

    setup_logging(args.log_level, args.log_dir)
    config = _make_config(args)
    encounter = build_encounter(config)
    if args.initiative:
        encounter.turns.sort_by_initiative()

    logger.info("Starting encounter: %dx%d, %s", config.max_x, config.max_y, config.difficulty.name)

    # Scripted driver: grab loot underfoot, attack the first opponent in
    # turn order when in reach, otherwise walk toward it.
    while not encounter.is_over and encounter.round_number <= args.rounds:
        actor = encounter.current_creature
        encounter.pick_up()
        opponents = [c for c in encounter.turns.get_turn_order() if c.team != actor.team]
        if opponents:
            target = opponents[0]
            try:
                encounter.attack(target.id)
            except InvalidActionError:
                try:
                    encounter.move(*_step_toward(actor.pos, target.pos).as_tuple())
                except InvalidActionError as exc:
                    logger.info("%s holds position: %s", actor.name, exc)
        if encounter.is_over:
            break
        encounter.end_turn()

    survivors = ", ".join(f"{c.name} ({c.life_points}/{c.max_health})" for c in encounter.world.living_creatures())
    if encounter.is_over:
        logger.info("Encounter over after %d rounds. Winner: %s", encounter.round_number, encounter.winner)
    else:
        logger.info("Stopped after %d rounds without a winner.", args.rounds)
    logger.info("Survivors: %s", survivors or "none")
    logger.info("Events recorded: %d", len(encounter.event_log))


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "cli":
        _run_cli(args)
    else:
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)


if __name__ == "__main__":
    main()
