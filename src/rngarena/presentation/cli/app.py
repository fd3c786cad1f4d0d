"""Console spectator for arena fights."""
from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Sequence

from rngarena.core.rng import RNG
from rngarena.data.errors import DataError
from rngarena.data.repositories import ArenaSettingsRepository, HpTiersRepository, MonstersRepository
from rngarena.presentation.cli.announcer import format_beat_log, format_event
from rngarena.presentation.cli.config import load_config, save_config
from rngarena.presentation.cli.render import debug_enabled, echo, format_status, render_heading, render_lines
from rngarena.services import (
    BeatResolvedEvent,
    CombatEvent,
    CombatSession,
    FightController,
    create_pve_session,
    create_pvp_session,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rng-arena", description="Spectate dice-driven arena fights.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    pvp = subparsers.add_parser("pvp", help="Replay a tournament match between two named fighters.")
    pvp.add_argument("left", help="Left fighter name (attacks first)")
    pvp.add_argument("right", help="Right fighter name")
    pvp.add_argument("--round", type=int, default=1, help="Tournament round (selects the HP tier)")
    pvp.add_argument("--instant", action="store_true", help="Skip pacing delays")

    pve = subparsers.add_parser("pve", help="Send the hero against a monster.")
    pve.add_argument("monster", nargs="?", help="Monster id (omit to list monsters)")
    pve.add_argument("--seed", type=int, default=None, help="Seed for reproducible rolls")
    pve.add_argument("--instant", action="store_true", help="Skip pacing delays")

    options = subparsers.add_parser("options", help="Show or change saved options.")
    options.add_argument("--pacing", choices=("paced", "instant"), default=None)

    subparsers.add_parser("tiers", help="List starting health per tournament round.")
    return parser


def main(argv: Sequence[str] | None = None, *, sleep: Callable[[float], None] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled() else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        if args.command == "options":
            return _run_options(args.pacing)
        if args.command == "tiers":
            return _run_tiers()
        if args.command == "pvp":
            return _run_pvp(args, sleep)
        return _run_pve(args, sleep)
    except DataError as exc:
        echo(f"Error: {exc}")
        return EXIT_USAGE


def _run_options(pacing: str | None) -> int:
    config = load_config()
    if pacing is not None:
        config["pacing"] = pacing
        save_config(config)
    echo(f"pacing: {config['pacing']}")
    return EXIT_OK


def _run_tiers() -> int:
    repo = HpTiersRepository()
    render_heading("HP Tiers")
    for tier in repo.all():
        echo(f"Round {tier.round}: {tier.hp} HP")
    echo(f"Other rounds: {repo.default_hp} HP")
    return EXIT_OK


def _run_pvp(args: argparse.Namespace, sleep: Callable[[float], None] | None) -> int:
    if args.round <= 0:
        echo("Error: --round must be >= 1")
        return EXIT_USAGE
    settings = ArenaSettingsRepository()
    max_health = HpTiersRepository().hp_for_round(args.round)
    session = create_pvp_session(args.left, args.right, max_health, rules=settings.rules())
    render_heading(f"Round {args.round}")
    _spectate(session, settings, instant=args.instant, sleep=sleep)
    return EXIT_OK


def _run_pve(args: argparse.Namespace, sleep: Callable[[float], None] | None) -> int:
    monsters = MonstersRepository()
    if args.monster is None:
        render_heading("Monsters")
        for monster in monsters.monsters():
            echo(f"{monster.id}: {monster.name} ({monster.health} HP)")
        return EXIT_OK
    try:
        monster = monsters.get(args.monster)
    except KeyError:
        echo(f"Error: unknown monster '{args.monster}'")
        return EXIT_USAGE
    if monster.role != "monster":
        echo(f"Error: '{args.monster}' is not a monster")
        return EXIT_USAGE
    hero = monsters.hero()
    settings = ArenaSettingsRepository()
    session = create_pve_session(
        hero.name,
        hero.health,
        monster.name,
        monster.health,
        rng=RNG(args.seed),
        rules=settings.pve_rules(),
        monster_can_defend=monster.can_defend,
    )
    render_heading(f"{hero.name} vs {monster.name}")
    _spectate(session, settings, instant=args.instant, sleep=sleep)
    return EXIT_OK


def _spectate(
    session: CombatSession,
    settings: ArenaSettingsRepository,
    *,
    instant: bool,
    sleep: Callable[[float], None] | None,
) -> None:
    timing = settings.timing()
    controller_kwargs = {"turn_delay": timing.turn_delay, "start_delay": timing.battle_start_delay}
    if sleep is not None:
        controller_kwargs["sleep"] = sleep
    controller = FightController(**controller_kwargs)
    controller.fast_forward = instant or load_config()["pacing"] == "instant"
    show_rolls = debug_enabled()

    def _announce(event: CombatEvent) -> None:
        lines: List[str] = format_event(event, show_rolls=show_rolls)
        render_lines(lines)
        if isinstance(event, BeatResolvedEvent) and show_rolls:
            echo(format_status(session))

    winner = controller.play(session, on_event=_announce)
    logger.debug("fight finished after %d beats, winner=%s", len(session.log), winner)
    if show_rolls:
        render_heading("Combat Log")
        for outcome in session.log:
            attacker_name = session.get_name(outcome.attacker_side)
            defender_name = session.get_name(outcome.defender_side)
            echo(format_beat_log(outcome, attacker_name, defender_name))
