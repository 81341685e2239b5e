"""
Payout tables for every game.
Loaded once from payout_tables.json at startup and frozen for the process lifetime.
"""

import json
import math
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, NamedTuple, Optional, Tuple, Union

from wager_engine.config import PROJECT_ROOT
from wager_engine.core.logger import get_logger
from wager_engine.core.models import Prediction, RouletteBetType
from wager_engine.core.weighted import WeightedTable

logger = get_logger("payouts")

PAYOUT_FILE = PROJECT_ROOT / "payout_tables.json"

# ==================== Fixed Game Geometry ====================

DICE_FACES = (1, 6)

WHEEL_POCKETS = (0, 36)

# Red numbers on a European wheel; the other 18 non-zero pockets are black
RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})
BLACK_NUMBERS = frozenset(range(1, 37)) - RED_NUMBERS


def _layout_groups() -> Dict[RouletteBetType, FrozenSet[FrozenSet[int]]]:
    """Every legal set of pockets for the bets placed on the table layout."""
    straight = {frozenset({n}) for n in range(0, 37)}

    split = {frozenset({0, n}) for n in (1, 2, 3)}
    split |= {frozenset({n, n + 1}) for n in range(1, 36) if n % 3 != 0}
    split |= {frozenset({n, n + 3}) for n in range(1, 34)}

    street = {frozenset({0, 1, 2}), frozenset({0, 2, 3})}
    street |= {frozenset(range(n, n + 3)) for n in range(1, 37, 3)}

    corner = {frozenset({0, 1, 2, 3})}
    corner |= {frozenset({n, n + 1, n + 3, n + 4}) for n in range(1, 33) if n % 3 != 0}

    line = {frozenset(range(n, n + 6)) for n in range(1, 32, 3)}
    column = {frozenset(range(c, 37, 3)) for c in (1, 2, 3)}
    dozen = {frozenset(range(n, n + 12)) for n in (1, 13, 25)}

    return {
        RouletteBetType.STRAIGHT: frozenset(straight),
        RouletteBetType.SPLIT: frozenset(split),
        RouletteBetType.STREET: frozenset(street),
        RouletteBetType.CORNER: frozenset(corner),
        RouletteBetType.LINE: frozenset(line),
        RouletteBetType.COLUMN: frozenset(column),
        RouletteBetType.DOZEN: frozenset(dozen),
    }


LAYOUT_GROUPS = MappingProxyType(_layout_groups())

# Pockets covered by each even-money bet; 0 is in none of them
EVEN_MONEY_COVERAGE = MappingProxyType(
    {
        RouletteBetType.RED: RED_NUMBERS,
        RouletteBetType.BLACK: BLACK_NUMBERS,
        RouletteBetType.EVEN: frozenset(range(2, 37, 2)),
        RouletteBetType.ODD: frozenset(range(1, 37, 2)),
        RouletteBetType.LOW: frozenset(range(1, 19)),
        RouletteBetType.HIGH: frozenset(range(19, 37)),
    }
)

# Flat indices into the row-major 3x3 grid
PAYLINES = (
    (0, 1, 2),  # top row
    (3, 4, 5),  # middle row
    (6, 7, 8),  # bottom row
    (0, 4, 8),  # diagonal, top-left to bottom-right
    (6, 4, 2),  # diagonal, bottom-left to top-right
)

SLOT_GRID_CELLS = 9


def get_color(number: int) -> str:
    """Get the color of a roulette pocket."""
    if number == 0:
        return "green"
    elif number in RED_NUMBERS:
        return "red"
    elif number in BLACK_NUMBERS:
        return "black"
    raise ValueError(f"{number} is not a pocket on the wheel")


def floor_amount(value: Union[int, Fraction]) -> int:
    """Round a payout down to whole currency units."""
    return math.floor(value)


def to_fraction(value: Any) -> Fraction:
    """Exact multiplier from a JSON number or numeric string (1.8 -> 9/5)."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Multiplier must be a number, got {value!r}")
    multiplier = Fraction(str(value))
    if multiplier < 0:
        raise ValueError(f"Multiplier must not be negative, got {value!r}")
    return multiplier


# ==================== Payout Policy ====================


class SlotSymbol(NamedTuple):
    name: str
    value: int
    weight: int


@dataclass(frozen=True)
class PayoutPolicy:
    """Read-only payout tables shared by every resolver."""

    dice_multipliers: Mapping[Prediction, Fraction]
    roulette_multipliers: Mapping[RouletteBetType, int]
    symbols: Tuple[SlotSymbol, ...]
    symbol_table: WeightedTable = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "dice_multipliers", MappingProxyType(dict(self.dice_multipliers)))
        object.__setattr__(self, "roulette_multipliers", MappingProxyType(dict(self.roulette_multipliers)))
        object.__setattr__(self, "symbols", tuple(self.symbols))
        object.__setattr__(
            self, "symbol_table", WeightedTable((symbol, symbol.weight) for symbol in self.symbols)
        )

    def dice_multiplier(self, prediction: Prediction) -> Fraction:
        return self.dice_multipliers[prediction]

    def roulette_multiplier(self, bet_type: RouletteBetType) -> int:
        return self.roulette_multipliers[bet_type]

    def symbol(self, name: str) -> SlotSymbol:
        for symbol in self.symbols:
            if symbol.name == name:
                return symbol
        raise KeyError(name)

    def describe(self) -> Dict[str, Any]:
        """Plain-data view of the tables for catalog responses."""
        return {
            "dice": {p.value: float(m) for p, m in self.dice_multipliers.items()},
            "roulette": {b.value: m for b, m in self.roulette_multipliers.items()},
            "slot": [symbol._asdict() for symbol in self.symbols],
        }


def get_default_tables() -> Dict[str, Any]:
    """Return default tables if the file is missing or invalid."""
    return {
        "dice": {"higher": 1.8, "lower": 1.8, "exact": 5},
        "roulette": {
            "straight": 35,
            "split": 17,
            "street": 11,
            "corner": 8,
            "line": 5,
            "column": 2,
            "dozen": 2,
            "red": 1,
            "black": 1,
            "even": 1,
            "odd": 1,
            "low": 1,
            "high": 1,
        },
        "slot": {
            "symbols": [
                {"name": "cherry", "value": 2, "weight": 28},
                {"name": "lemon", "value": 3, "weight": 24},
                {"name": "orange", "value": 5, "weight": 18},
                {"name": "plum", "value": 10, "weight": 14},
                {"name": "bell", "value": 15, "weight": 9},
                {"name": "seven", "value": 25, "weight": 5},
                {"name": "diamond", "value": 50, "weight": 2},
            ]
        },
    }


def build_policy(tables: Mapping[str, Any]) -> PayoutPolicy:
    """
    Build a PayoutPolicy from plain tables, filling gaps from the defaults.

    Raises:
        ValueError: if a table names an unknown prediction or bet type, or
            carries a negative multiplier or a non-positive symbol weight, or
            if a section or symbol entry is not shaped as an object.
    """
    defaults = get_default_tables()

    if not isinstance(tables, MappingABC):
        raise ValueError("Payout tables must be an object keyed by game")
    for section in ("dice", "roulette", "slot"):
        if not isinstance(tables.get(section, {}), MappingABC):
            raise ValueError(f"Payout table for {section} must be an object")

    dice_raw = {**defaults["dice"], **tables.get("dice", {})}
    roulette_raw = {**defaults["roulette"], **tables.get("roulette", {})}
    symbols_raw = tables.get("slot", {}).get("symbols", defaults["slot"]["symbols"])
    if not isinstance(symbols_raw, (list, tuple)):
        raise ValueError("Slot symbols must be a list of objects")

    try:
        dice = {Prediction(key): to_fraction(value) for key, value in dice_raw.items()}
        roulette = {RouletteBetType(key): value for key, value in roulette_raw.items()}
    except ValueError as e:
        raise ValueError(f"Invalid payout table: {e}") from e

    for bet_type, multiplier in roulette.items():
        if not isinstance(multiplier, int) or isinstance(multiplier, bool) or multiplier < 0:
            raise ValueError(f"Roulette multiplier for {bet_type.value} must be a non-negative integer")

    symbols = []
    seen = set()
    for entry in symbols_raw:
        if not isinstance(entry, MappingABC):
            raise ValueError(f"Slot symbol must be an object, got {entry!r}")
        name = entry.get("name")
        if not name or name in seen:
            raise ValueError(f"Slot symbol needs a unique name, got {name!r}")
        value = entry.get("value")
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValueError(f"Slot symbol {name} needs a non-negative integer value")
        seen.add(name)
        symbols.append(SlotSymbol(name, value, entry.get("weight")))

    # WeightedTable rejects empty tables and non-positive weights
    return PayoutPolicy(dice_multipliers=dice, roulette_multipliers=roulette, symbols=symbols)


def load_payout_policy(path: Optional[Path] = None) -> PayoutPolicy:
    """
    Load payout tables from disk once and freeze them.

    Args:
        path: Table file (defaults to payout_tables.json in the project root)

    Returns:
        PayoutPolicy shared by every resolver
    """
    path = path or PAYOUT_FILE

    try:
        with open(path, "r", encoding="utf-8") as f:
            tables = json.load(f)
            logger.info(f"Loaded payout tables from {path.name}")
    except FileNotFoundError:
        logger.warning(f"{path.name} not found, using default payout tables")
        tables = get_default_tables()
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path.name}: {e}")
        tables = get_default_tables()

    return build_policy(tables)


default_policy = build_policy(get_default_tables())
