"""
Bet validation. Turns a wire payload into a typed BetRequest and checks every
range and consistency rule before any randomness is drawn.
"""

import dataclasses
from collections.abc import Mapping as MappingABC
from typing import Any, Mapping, Optional, Type, TypeVar

from wager_engine.config import GameConfig
from wager_engine.core.exceptions import (
    GameDisabled,
    InvalidBet,
    InvalidEnum,
    MissingField,
    OutOfRange,
)
from wager_engine.core.models import (
    EVEN_MONEY_BETS,
    PARAMS_BY_GAME,
    BetRequest,
    DiceParams,
    GameType,
    Prediction,
    RouletteBetType,
    RouletteParams,
    SlotParams,
)
from wager_engine.core.payouts import DICE_FACES, EVEN_MONEY_COVERAGE, LAYOUT_GROUPS, WHEEL_POCKETS

E = TypeVar("E")

MAX_LINES = 5

# How many pockets each layout bet covers, for error messages
BET_SIZES = {
    RouletteBetType.STRAIGHT: 1,
    RouletteBetType.SPLIT: 2,
    RouletteBetType.STREET: 3,
    RouletteBetType.CORNER: 4,
    RouletteBetType.LINE: 6,
    RouletteBetType.COLUMN: 12,
    RouletteBetType.DOZEN: 12,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require(params: Mapping, key: str, prefix: str = "params") -> Any:
    value = params.get(key)
    if value is None:
        raise MissingField(f"Missing {key} in bet details", field=f"{prefix}.{key}")
    return value


def _parse_enum(enum_cls: Type[E], raw: Any, field: str) -> E:
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        try:
            return enum_cls(raw.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_cls)
    raise InvalidEnum(f"Invalid {field}: {raw!r}. Must be one of: {allowed}", field=field)


def _require_int(value: Any, field: str) -> int:
    if not _is_int(value):
        raise OutOfRange(f"{field} must be an integer, got {value!r}", field=field)
    return value


class BetValidator:
    """
    Validates bet requests for every game type.

    Args:
        limits: Optional per-game stake limits and availability, keyed by
            game type value ("dice", "roulette", "slot").
    """

    def __init__(self, limits: Optional[Mapping[str, GameConfig]] = None):
        self.limits = dict(limits or {})

    def validate(self, payload: Any) -> BetRequest:
        """Parse and check a wire payload in one step."""
        if isinstance(payload, BetRequest):
            return self.check_request(payload)
        return self.check_request(self.parse_request(payload))

    # ==================== Parsing ====================

    def parse_request(self, payload: Any) -> BetRequest:
        """
        Build a typed BetRequest from `{game_type, stake, params}`.

        Raises:
            MissingField: a required key is absent
            InvalidEnum: unknown game type, prediction or bet type
            InvalidBet: the payload or its params are not objects
        """
        if not isinstance(payload, MappingABC):
            raise InvalidBet("Bet request must be an object")

        game_type = _parse_enum(GameType, _require(payload, "game_type", "request"), "game_type")
        stake = _require(payload, "stake", "request")

        params = payload.get("params")
        if params is None:
            params = {}
        if not isinstance(params, MappingABC):
            raise InvalidBet("Bet details must be an object", field="params")

        if game_type is GameType.DICE:
            parsed = DiceParams(
                prediction=_parse_enum(Prediction, _require(params, "prediction"), "prediction"),
                target=_require(params, "target"),
            )
        elif game_type is GameType.ROULETTE:
            bet_type = _parse_enum(RouletteBetType, _require(params, "bet_type"), "bet_type")
            if bet_type in EVEN_MONEY_BETS:
                raw_numbers = params.get("numbers") or []
            else:
                raw_numbers = _require(params, "numbers")
            parsed = RouletteParams(bet_type=bet_type, numbers=self._parse_numbers(raw_numbers))
        elif game_type is GameType.SLOT:
            parsed = SlotParams(lines=_require(params, "lines"))
        else:
            raise AssertionError(f"Unhandled game type {game_type}")

        return BetRequest(game_type=game_type, stake=stake, params=parsed)

    def _parse_numbers(self, raw: Any) -> frozenset:
        if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple, set, frozenset)):
            raise InvalidBet("numbers must be a list of integers", field="params.numbers")
        if not all(_is_int(n) for n in raw):
            raise InvalidBet("numbers must be a list of integers", field="params.numbers")
        numbers = frozenset(raw)
        if len(numbers) != len(raw):
            raise InvalidBet("numbers must not repeat", field="params.numbers")
        return numbers

    # ==================== Checking ====================

    def check_request(self, request: BetRequest) -> BetRequest:
        """
        Range and consistency checks on a typed request.
        Returns the validated bet, which may carry a filled-in numbers set.

        Raises:
            GameDisabled: the game is switched off in configuration
            OutOfRange: stake, dice target or slot lines outside their domain
            InvalidBet: params that do not fit the game or bet type
        """
        game_type = _parse_enum(GameType, request.game_type, "game_type")
        if not isinstance(request.params, PARAMS_BY_GAME[game_type]):
            raise InvalidBet(f"Bet details do not match game type {game_type.value}", field="params")

        self._check_stake(game_type, request.stake)

        if game_type is GameType.DICE:
            params = self._check_dice(request.params)
        elif game_type is GameType.ROULETTE:
            params = self._check_roulette(request.params)
        elif game_type is GameType.SLOT:
            params = self._check_slot(request.params)
        else:
            raise AssertionError(f"Unhandled game type {game_type}")

        return dataclasses.replace(request, game_type=game_type, params=params)

    def _check_stake(self, game_type: GameType, stake: Any):
        config = self.limits.get(game_type.value)
        if config is not None and not config.enabled:
            raise GameDisabled(f"{game_type.value} is currently unavailable", field="game_type")

        _require_int(stake, "stake")
        if stake <= 0:
            raise OutOfRange(f"Stake must be positive, got {stake}", field="stake")

        if config is not None and not config.min_bet <= stake <= config.max_bet:
            raise OutOfRange(
                f"Bet amount must be between {config.min_bet} and {config.max_bet}", field="stake"
            )

    def _check_dice(self, params: DiceParams) -> DiceParams:
        prediction = _parse_enum(Prediction, params.prediction, "prediction")
        target = _require_int(params.target, "params.target")
        low, high = DICE_FACES
        if not low <= target <= high:
            raise OutOfRange(
                f"Target number must be between {low} and {high}", field="params.target"
            )
        return DiceParams(prediction=prediction, target=target)

    def _check_roulette(self, params: RouletteParams) -> RouletteParams:
        bet_type = _parse_enum(RouletteBetType, params.bet_type, "bet_type")
        numbers = self._parse_numbers(params.numbers)

        low, high = WHEEL_POCKETS
        outside = sorted(n for n in numbers if not low <= n <= high)
        if outside:
            raise InvalidBet(
                f"numbers must be between {low} and {high}, got {outside}", field="params.numbers"
            )

        if bet_type in EVEN_MONEY_BETS:
            covered = EVEN_MONEY_COVERAGE[bet_type]
            if numbers and numbers != covered:
                raise InvalidBet(
                    f"numbers do not match the pockets covered by a {bet_type.value} bet",
                    field="params.numbers",
                )
            return RouletteParams(bet_type=bet_type, numbers=covered)

        if not numbers:
            raise InvalidBet(f"A {bet_type.value} bet needs numbers", field="params.numbers")

        size = BET_SIZES[bet_type]
        if len(numbers) != size:
            raise InvalidBet(
                f"A {bet_type.value} bet covers exactly {size} number(s), got {len(numbers)}",
                field="params.numbers",
            )
        if numbers not in LAYOUT_GROUPS[bet_type]:
            raise InvalidBet(
                f"{sorted(numbers)} is not a valid {bet_type.value} on the table layout",
                field="params.numbers",
            )
        return RouletteParams(bet_type=bet_type, numbers=numbers)

    def _check_slot(self, params: SlotParams) -> SlotParams:
        lines = _require_int(params.lines, "params.lines")
        if not 1 <= lines <= MAX_LINES:
            raise OutOfRange(f"Lines must be between 1 and {MAX_LINES}", field="params.lines")
        return params


# Singleton instance, without stake limits
bet_validator = BetValidator()
