"""
Card rules - the data model behind scoring.

A Card is a rule record loaded from the catalog:
- requirements: resources the tableau must provide before the card scores
- effect: what the card adds to the tableau once placed (color, resources,
  clues, nights)
- points: how the card converts the tableau into points

CardState is the running tableau. It only ever grows by addition, so the
order in which effects are added never changes the resulting counters.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Resource(Enum):
    """Resources printed on cards."""
    ANIMAL = "animal"
    MINERAL = "mineral"
    FOOD = "food"


class CardColor(Enum):
    """Card colors. Gray does not count towards the color group bonus."""
    GRAY = "gray"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"


class CardKind(Enum):
    """The two card classes of a tableau."""
    REGION = "region"
    SANCTUARY = "sanctuary"

    @property
    def prefix(self) -> str:
        return "R" if self is CardKind.REGION else "S"


# Colors whose minimum drives the color group bonus
GROUP_COLORS = (CardColor.RED, CardColor.GREEN, CardColor.BLUE, CardColor.YELLOW)

# Resources whose minimum drives the resource group bonus
GROUP_RESOURCES = (Resource.MINERAL, Resource.ANIMAL, Resource.FOOD)


def _frozen(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass
class CardState:
    """
    Accumulated tableau counters.

    Missing counters read as zero; Counter equality ignores zero entries,
    so a state built in any order compares equal to one built in another.
    """
    colors: Counter = field(default_factory=Counter)
    resources: Counter = field(default_factory=Counter)
    clues: int = 0
    nights: int = 0

    def __post_init__(self):
        self.colors = Counter(self.colors)
        self.resources = Counter(self.resources)

    def add(self, card: Card) -> CardState:
        """Merge a card's effect into this state. Returns self for chaining."""
        effect = card.effect
        self.colors.update(effect.colors)
        self.resources.update(effect.resources)
        self.clues += effect.clues
        self.nights += effect.nights
        return self

    def copy(self) -> CardState:
        return CardState(
            colors=Counter(self.colors),
            resources=Counter(self.resources),
            clues=self.clues,
            nights=self.nights,
        )

    def color_count(self, color: CardColor) -> int:
        return self.colors[color]

    def resource_count(self, resource: Resource) -> int:
        return self.resources[resource]


@dataclass(frozen=True)
class CardEffect:
    """Immutable counters a card contributes to the tableau."""
    colors: Mapping[CardColor, int] = field(default_factory=dict)
    resources: Mapping[Resource, int] = field(default_factory=dict)
    clues: int = 0
    nights: int = 0

    def __post_init__(self):
        object.__setattr__(self, "colors", _frozen(self.colors))
        object.__setattr__(self, "resources", _frozen(self.resources))


@dataclass(frozen=True)
class CardPoints:
    """
    Scoring rule of a card.

    score = flat
          + per_night * nights + per_clue * clues
          + sum(per_color[c] * colors[c]) + color_group * min(red, green, blue, yellow)
          + sum(per_resource[r] * resources[r]) + resource_group * min(mineral, animal, food)
    """
    per_color: Mapping[CardColor, int] = field(default_factory=dict)
    color_group: int = 0
    per_resource: Mapping[Resource, int] = field(default_factory=dict)
    resource_group: int = 0
    per_clue: int = 0
    per_night: int = 0
    flat: int = 0

    def __post_init__(self):
        object.__setattr__(self, "per_color", _frozen(self.per_color))
        object.__setattr__(self, "per_resource", _frozen(self.per_resource))

    def score(self, state: CardState) -> int:
        total = self.flat
        total += self.per_night * state.nights
        total += self.per_clue * state.clues

        for color in CardColor:
            total += self.per_color.get(color, 0) * state.color_count(color)
        total += self.color_group * min(state.color_count(c) for c in GROUP_COLORS)

        for resource in Resource:
            total += self.per_resource.get(resource, 0) * state.resource_count(resource)
        total += self.resource_group * min(state.resource_count(r) for r in GROUP_RESOURCES)

        return total


@dataclass(frozen=True)
class Card:
    """
    A region or sanctuary card definition.

    Scoring is all-or-nothing: if any requirement is unmet the card is
    worth 0, otherwise its CardPoints rule applies in full.
    """
    card_id: int
    kind: CardKind
    requirements: Mapping[Resource, int] = field(default_factory=dict)
    effect: CardEffect = field(default_factory=CardEffect)
    points: CardPoints = field(default_factory=CardPoints)

    def __post_init__(self):
        object.__setattr__(self, "requirements", _frozen(self.requirements))

    @property
    def label(self) -> str:
        """Detector-style label, e.g. "R12" or "S3"."""
        return f"{self.kind.prefix}{self.card_id}"

    def requirements_met(self, state: CardState) -> bool:
        return all(
            state.resource_count(resource) >= count
            for resource, count in self.requirements.items()
        )

    def score(self, state: CardState) -> int:
        if not self.requirements_met(state):
            return 0
        return self.points.score(state)
