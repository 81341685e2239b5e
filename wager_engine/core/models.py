"""
Value types flowing through a single resolution.
Everything here is frozen: a request or result is never mutated after it is built.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Union


class GameType(str, Enum):
    DICE = "dice"
    ROULETTE = "roulette"
    SLOT = "slot"


class Prediction(str, Enum):
    HIGHER = "higher"
    LOWER = "lower"
    EXACT = "exact"


class RouletteBetType(str, Enum):
    STRAIGHT = "straight"
    SPLIT = "split"
    STREET = "street"
    CORNER = "corner"
    LINE = "line"
    COLUMN = "column"
    DOZEN = "dozen"
    RED = "red"
    BLACK = "black"
    EVEN = "even"
    ODD = "odd"
    LOW = "low"
    HIGH = "high"


INSIDE_BETS = frozenset(
    {
        RouletteBetType.STRAIGHT,
        RouletteBetType.SPLIT,
        RouletteBetType.STREET,
        RouletteBetType.CORNER,
        RouletteBetType.LINE,
    }
)

GROUPED_BETS = frozenset({RouletteBetType.COLUMN, RouletteBetType.DOZEN})

EVEN_MONEY_BETS = frozenset(
    {
        RouletteBetType.RED,
        RouletteBetType.BLACK,
        RouletteBetType.EVEN,
        RouletteBetType.ODD,
        RouletteBetType.LOW,
        RouletteBetType.HIGH,
    }
)


@dataclass(frozen=True)
class DiceParams:
    prediction: Prediction
    target: int


@dataclass(frozen=True)
class RouletteParams:
    bet_type: RouletteBetType
    numbers: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class SlotParams:
    lines: int


BetParams = Union[DiceParams, RouletteParams, SlotParams]

PARAMS_BY_GAME = {
    GameType.DICE: DiceParams,
    GameType.ROULETTE: RouletteParams,
    GameType.SLOT: SlotParams,
}


@dataclass(frozen=True)
class BetRequest:
    game_type: GameType
    stake: int
    params: BetParams


@dataclass(frozen=True)
class Result:
    win: bool
    amount: int
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"win": self.win, "amount": self.amount, "details": self.details}
