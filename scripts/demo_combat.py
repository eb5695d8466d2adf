"""Scripted combat walkthrough: play a short seeded run and print each turn.

The policy is deliberately simple: play every affordable card left to right
against the first living enemy, then end the turn.  Card rewards take the
first offer; relic rewards are always taken.

Usage:
    uv run python scripts/demo_combat.py [--seed N] [--combats N] [--verbose]
"""

from __future__ import annotations

import argparse
import logging

from spire_combat.sim.content.registry import ContentRegistry
from spire_combat.sim.core.commands import EndTurn, PlayCard
from spire_combat.sim.core.game_state import CombatSession, GamePhase, RunState
from spire_combat.sim.core.rng import GameRNG
from spire_combat.sim.dungeon.run_manager import RunManager
from spire_combat.sim.mechanics.status_effects import get_status_stacks
from spire_combat.ir.status_effects import StatusType

_MAX_TURNS = 50


def separator(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def describe(session: CombatSession) -> None:
    p = session.player
    strength = get_status_stacks(p, StatusType.STRENGTH)
    print(
        f"  Turn {session.turn}: HP {p.health}/{p.max_health}  block {p.block}  "
        f"energy {p.energy}/{p.max_energy}  str {strength}  "
        f"powers {[pc.id for pc in p.power_cards]}"
    )
    for e in session.enemies:
        statuses = ", ".join(f"{s.type.value} {s.stacks}" for s in e.status_effects) or "-"
        print(
            f"    {e.id:<18} HP {e.health:>3}/{e.max_health:<3} block {e.block:>2}  "
            f"intent {e.intent.type.value}({e.intent.value})  [{statuses}]"
        )
    print(f"  Hand: {[c.name for c in session.hand]}")


def play_turn(manager: RunManager, run: RunState) -> None:
    session = run.combat
    while session is not None and not session.is_over:
        target = session.enemies[0].id if session.enemies else None
        playable = [
            c for c in session.hand
            if c.is_x_cost and session.player.energy > 0
            or not c.is_x_cost and c.cost <= session.player.energy
        ]
        if not playable:
            break
        card = playable[0]
        print(f"    play {card.name} -> {target}")
        manager.dispatch(run, PlayCard(card_id=card.id, target_id=target))
        session = run.combat
    if run.phase == GamePhase.COMBAT:
        manager.dispatch(run, EndTurn())


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a short scripted run")
    parser.add_argument("--seed", type=int, default=42, help="Run seed")
    parser.add_argument("--combats", type=int, default=3, help="Number of combats")
    parser.add_argument("--verbose", action="store_true", help="Show engine debug logs")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = ContentRegistry()
    registry.load_all()
    print(registry)

    manager = RunManager(registry, GameRNG(args.seed))
    run = manager.new_run()

    for n in range(args.combats):
        elite = n == args.combats - 1
        separator(f"COMBAT {n + 1}{' (elite)' if elite else ''}")
        manager.start_combat(run, elite=elite)
        while run.phase == GamePhase.COMBAT:
            if run.combat.turn > _MAX_TURNS:
                print(f"\n  Stopped after {_MAX_TURNS} turns.")
                return
            describe(run.combat)
            play_turn(manager, run)

        if run.phase == GamePhase.GAME_OVER:
            print(f"\n  Defeated on floor {run.floor}.")
            return

        reward = run.reward
        print(f"\n  Victory! Gold now {run.player.gold}")
        if run.phase == GamePhase.CARD_REWARD:
            print(f"  Card offers: {[c.name for c in reward.card_rewards]}")
            manager.select_card_reward(run, reward.card_rewards[0].id)
        if run.phase == GamePhase.RELIC_REWARD:
            print(f"  Relic offer: {reward.relic_reward.name}")
            manager.take_relic_reward(run)
        print(f"  Deck size: {len(run.deck)}  HP {run.player.health}/{run.player.max_health}")

    separator("RUN SUMMARY")
    print(f"  Floor {run.floor}, gold {run.player.gold}")
    print(f"  Relics: {[r.name for r in run.player.relics]}")
    print(f"  Deck: {sorted(c.name for c in run.deck)}")


if __name__ == "__main__":
    main()
