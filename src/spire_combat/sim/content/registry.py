"""Content registry -- loads and serves card, relic, power card and enemy
templates for the combat engine.

Content is loaded from the JSON files shipped in ``spire_combat/data/``.
Every ``load_*`` method also accepts an explicit path so that tests or
mods can swap in their own data.  The registry never hands out its
templates for mutation: :meth:`ContentRegistry.create_card` and the
encounter builder clone them into instances with fresh ids.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from spire_combat.ir.cards import Card, CardRarity, CardType
from spire_combat.ir.enemies import EnemyDefinition, MonsterCard
from spire_combat.ir.powers import PowerCardDefinition
from spire_combat.ir.relics import RelicDefinition, RelicRarity
from spire_combat.sim.core.ids import IdAllocator

logger = logging.getLogger(__name__)

# Default paths inside the installed package.
_DATA_DIR = Path(__file__).resolve().parents[2] / "data"  # src/spire_combat/sim/content -> src/spire_combat
_DEFAULT_CARDS_PATH = _DATA_DIR / "cards.json"
_DEFAULT_RELICS_PATH = _DATA_DIR / "relics.json"
_DEFAULT_POWER_CARDS_PATH = _DATA_DIR / "power_cards.json"
_DEFAULT_ENEMIES_PATH = _DATA_DIR / "enemies.json"


def _read_json(path: str | Path) -> Any:
    with open(Path(path)) as f:
        return json.load(f)


def _parse_card(raw: dict[str, Any]) -> Card:
    """Parse a raw JSON dict into a card template (``id == base_id``)."""
    raw = dict(raw)
    raw.setdefault("base_id", raw["id"])
    return Card.model_validate(raw)


class ContentRegistry:
    """Loads and serves static combat content.

    Usage::

        registry = ContentRegistry()
        registry.load_all()

        strike = registry.get_card("strike")
        deck = registry.get_enemy_deck("jaw_worm")
        relic = registry.get_relic("akabeko")
    """

    def __init__(self) -> None:
        self.cards: dict[str, Card] = {}
        self.relics: dict[str, RelicDefinition] = {}
        self.power_cards: dict[str, PowerCardDefinition] = {}
        self.enemies: dict[str, EnemyDefinition] = {}
        self.encounters: dict[str, list[Any]] = {}
        self.starter_deck: list[str] = []
        self.default_moves_id: str | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> None:
        """Load every bundled content file."""
        self.load_cards()
        self.load_relics()
        self.load_power_cards()
        self.load_enemies()

    def load_cards(self, path: str | Path | None = None) -> None:
        """Load card templates and the starter deck list.

        Parameters
        ----------
        path:
            Path to the JSON file.  Defaults to the bundled ``cards.json``.
        """
        data = _read_json(path or _DEFAULT_CARDS_PATH)
        for raw in data["cards"]:
            card = _parse_card(raw)
            self.cards[card.id] = card
        self.starter_deck = list(data.get("starter_deck", []))

    def load_relics(self, path: str | Path | None = None) -> None:
        """Load relic definitions, keeping file order."""
        for raw in _read_json(path or _DEFAULT_RELICS_PATH):
            relic = RelicDefinition.model_validate(raw)
            self.relics[relic.id] = relic

    def load_power_cards(self, path: str | Path | None = None) -> None:
        """Load the passive halves of Power cards, keyed by card id."""
        for raw in _read_json(path or _DEFAULT_POWER_CARDS_PATH):
            power = PowerCardDefinition.model_validate(raw)
            self.power_cards[power.id] = power

    def load_enemies(self, path: str | Path | None = None) -> None:
        """Load enemy templates, move decks and encounter pools."""
        data = _read_json(path or _DEFAULT_ENEMIES_PATH)
        for raw in data["enemies"]:
            enemy = EnemyDefinition.model_validate(raw)
            self.enemies[enemy.id] = enemy
        self.encounters = data.get("encounters", {})
        self.default_moves_id = data.get("default_moves")

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def get_card(self, card_id: str) -> Card | None:
        """Return the card template for *card_id*, or ``None``."""
        return self.cards.get(card_id)

    def all_cards(self) -> list[Card]:
        """Every card template, in load order."""
        return list(self.cards.values())

    def list_card_ids(self) -> list[str]:
        return sorted(self.cards.keys())

    def get_cards_by_type(self, card_type: CardType) -> list[Card]:
        return [c for c in self.cards.values() if c.type == card_type]

    def get_reward_pool(
        self,
        rarity: CardRarity | None = None,
        exclude_ids: set[str] | None = None,
    ) -> list[Card]:
        """Return card templates eligible for card rewards.

        Basic cards are never offered.

        Parameters
        ----------
        rarity:
            If provided, only return cards of this rarity.
        exclude_ids:
            Card ids to leave out (e.g. already offered).
        """
        exclude = exclude_ids or set()
        return [
            card
            for card in self.cards.values()
            if card.rarity != CardRarity.BASIC
            and card.id not in exclude
            and (rarity is None or card.rarity == rarity)
        ]

    def create_card(self, base_id: str, ids: IdAllocator) -> Card:
        """Clone the template *base_id* into a deck instance with a fresh id.

        Raises
        ------
        KeyError
            If no card template has that id.
        """
        template = self.cards.get(base_id)
        if template is None:
            raise KeyError(f"Unknown card id: {base_id!r}")
        return template.model_copy(deep=True, update={"id": ids.next_id(base_id)})

    def create_starter_deck(self, ids: IdAllocator) -> list[Card]:
        return [self.create_card(card_id, ids) for card_id in self.starter_deck]

    # ------------------------------------------------------------------
    # Relics and powers
    # ------------------------------------------------------------------

    def get_relic(self, relic_id: str) -> RelicDefinition | None:
        return self.relics.get(relic_id)

    def get_relics_by_rarity(self, *rarities: RelicRarity) -> list[RelicDefinition]:
        return [r for r in self.relics.values() if r.rarity in rarities]

    def get_power_card(self, card_id: str) -> PowerCardDefinition | None:
        """Return the power definition for a Power card's ``base_id``."""
        return self.power_cards.get(card_id)

    # ------------------------------------------------------------------
    # Enemies
    # ------------------------------------------------------------------

    def get_enemy(self, enemy_id: str) -> EnemyDefinition | None:
        return self.enemies.get(enemy_id)

    def list_enemy_ids(self) -> list[str]:
        return sorted(self.enemies.keys())

    def get_bosses(self, act: int) -> list[EnemyDefinition]:
        return [e for e in self.enemies.values() if e.boss and e.act == act]

    def default_moves(self) -> list[MonsterCard]:
        """The move set used when an enemy has no deck of its own."""
        if self.default_moves_id is None or self.default_moves_id not in self.enemies:
            return []
        return [m.model_copy(deep=True) for m in self.enemies[self.default_moves_id].moves]

    def get_enemy_deck(self, enemy_id: str) -> list[MonsterCard]:
        """Return a copy of *enemy_id*'s move deck.

        Unknown enemies and enemies without moves get the default move set.
        """
        enemy = self.enemies.get(enemy_id)
        if enemy is None or not enemy.moves:
            logger.debug("No move deck for %r; using default moves", enemy_id)
            return self.default_moves()
        return [m.model_copy(deep=True) for m in enemy.moves]

    def get_encounter_pool(self, pool: str) -> list[Any]:
        return self.encounters.get(pool, [])

    def __repr__(self) -> str:
        return (
            f"ContentRegistry(cards={len(self.cards)}, relics={len(self.relics)}, "
            f"power_cards={len(self.power_cards)}, enemies={len(self.enemies)})"
        )
