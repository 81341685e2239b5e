import unittest

from wager_engine.config import GameConfig
from wager_engine.core.exceptions import (
    GameDisabled,
    InvalidBet,
    InvalidEnum,
    MissingField,
    OutOfRange,
    WagerValidationError,
)
from wager_engine.core.models import (
    BetRequest,
    DiceParams,
    GameType,
    Prediction,
    RouletteBetType,
    RouletteParams,
    SlotParams,
)
from wager_engine.core.payouts import RED_NUMBERS
from wager_engine.core.validator import BetValidator, bet_validator


def dice(target=4, prediction="exact", stake=100):
    return {"game_type": "dice", "stake": stake, "params": {"prediction": prediction, "target": target}}


def roulette(bet_type, numbers=None, stake=10):
    params = {"bet_type": bet_type}
    if numbers is not None:
        params["numbers"] = numbers
    return {"game_type": "roulette", "stake": stake, "params": params}


def slot(lines=3, stake=50):
    return {"game_type": "slot", "stake": stake, "params": {"lines": lines}}


class TestParsing(unittest.TestCase):

    def test_valid_dice_bet(self):
        bet = bet_validator.validate(dice())
        self.assertEqual(bet.game_type, GameType.DICE)
        self.assertEqual(bet.stake, 100)
        self.assertEqual(bet.params, DiceParams(Prediction.EXACT, 4))

    def test_enum_values_are_normalized(self):
        bet = bet_validator.validate(dice(prediction=" Higher "))
        self.assertIs(bet.params.prediction, Prediction.HIGHER)
        bet = bet_validator.validate({**slot(), "game_type": "SLOT"})
        self.assertIs(bet.game_type, GameType.SLOT)

    def test_missing_fields(self):
        with self.assertRaises(MissingField) as ctx:
            bet_validator.validate({"stake": 10, "params": {}})
        self.assertEqual(ctx.exception.field, "request.game_type")

        with self.assertRaises(MissingField):
            bet_validator.validate({"game_type": "dice", "params": {"prediction": "exact", "target": 3}})

        with self.assertRaises(MissingField) as ctx:
            bet_validator.validate({"game_type": "dice", "stake": 10, "params": {"target": 3}})
        self.assertEqual(ctx.exception.field, "params.prediction")

        with self.assertRaises(MissingField):
            bet_validator.validate({"game_type": "dice", "stake": 10})

        with self.assertRaises(MissingField):
            bet_validator.validate(roulette("split"))

        with self.assertRaises(MissingField):
            bet_validator.validate({"game_type": "slot", "stake": 10, "params": {}})

    def test_unknown_enums(self):
        with self.assertRaises(InvalidEnum):
            bet_validator.validate({**dice(), "game_type": "blackjack"})
        with self.assertRaises(InvalidEnum):
            bet_validator.validate(dice(prediction="sideways"))
        with self.assertRaises(InvalidEnum):
            bet_validator.validate(roulette("neighbours", [1]))
        with self.assertRaises(InvalidEnum):
            bet_validator.validate({**dice(), "game_type": 3})

    def test_malformed_payloads(self):
        with self.assertRaises(InvalidBet):
            bet_validator.validate("dice")
        with self.assertRaises(InvalidBet):
            bet_validator.validate({"game_type": "slot", "stake": 10, "params": [3]})
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("straight", "17"))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("straight", [True]))

    def test_all_errors_share_a_base(self):
        for payload in (dice(target=9), roulette("straight", [1, 2]), {"stake": 1}):
            with self.assertRaises(WagerValidationError):
                bet_validator.validate(payload)


class TestStake(unittest.TestCase):

    def test_stake_must_be_positive_integer(self):
        for stake in (0, -5, 1.5, "100", True):
            with self.assertRaises(OutOfRange, msg=f"stake={stake!r}"):
                bet_validator.validate(dice(stake=stake))

    def test_limits(self):
        validator = BetValidator({"dice": GameConfig(min_bet=10, max_bet=500)})
        validator.validate(dice(stake=10))
        validator.validate(dice(stake=500))
        with self.assertRaises(OutOfRange):
            validator.validate(dice(stake=9))
        with self.assertRaises(OutOfRange):
            validator.validate(dice(stake=501))
        # Other games are unrestricted
        validator.validate(slot(stake=1))

    def test_disabled_game(self):
        validator = BetValidator({"roulette": GameConfig(enabled=False)})
        with self.assertRaises(GameDisabled):
            validator.validate(roulette("red"))


class TestDiceRules(unittest.TestCase):

    def test_target_range(self):
        for target in range(1, 7):
            bet_validator.validate(dice(target=target))
        for target in (0, 7, -1, 12):
            with self.assertRaises(OutOfRange):
                bet_validator.validate(dice(target=target))

    def test_target_must_be_integer(self):
        with self.assertRaises(OutOfRange):
            bet_validator.validate(dice(target="4"))
        with self.assertRaises(OutOfRange):
            bet_validator.validate(dice(target=3.5))


class TestRouletteRules(unittest.TestCase):

    def test_straight_cardinality(self):
        bet_validator.validate(roulette("straight", [0]))
        bet_validator.validate(roulette("straight", [36]))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("straight", [1, 2]))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("straight", []))

    def test_numbers_out_of_range(self):
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("straight", [37]))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("straight", [-1]))

    def test_duplicates_are_not_collapsed(self):
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("split", [5, 5]))

    def test_layout_geometry(self):
        bet_validator.validate(roulette("split", [2, 5]))
        bet_validator.validate(roulette("split", [0, 3]))
        bet_validator.validate(roulette("street", [13, 14, 15]))
        bet_validator.validate(roulette("corner", [0, 1, 2, 3]))
        bet_validator.validate(roulette("line", [4, 5, 6, 7, 8, 9]))
        bet_validator.validate(roulette("column", list(range(2, 37, 3))))
        bet_validator.validate(roulette("dozen", list(range(13, 25))))

        for bet_type, numbers in (
            ("split", [1, 5]),
            ("split", [3, 4]),
            ("street", [2, 3, 4]),
            ("corner", [1, 2, 3, 4]),
            ("line", [1, 2, 3, 7, 8, 9]),
            ("column", list(range(1, 13))),
            ("dozen", list(range(2, 14))),
        ):
            with self.assertRaises(InvalidBet, msg=f"{bet_type} {numbers}"):
                bet_validator.validate(roulette(bet_type, numbers))

    def test_even_money_fills_covered_numbers(self):
        bet = bet_validator.validate(roulette("red"))
        self.assertEqual(bet.params.bet_type, RouletteBetType.RED)
        self.assertEqual(bet.params.numbers, RED_NUMBERS)

        bet = bet_validator.validate(roulette("low", []))
        self.assertEqual(bet.params.numbers, frozenset(range(1, 19)))

    def test_even_money_numbers_must_match(self):
        bet_validator.validate(roulette("high", list(range(19, 37))))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(roulette("red", [1, 2, 3]))

    def test_typed_request_is_checked(self):
        request = BetRequest(
            GameType.ROULETTE, 10, RouletteParams(RouletteBetType.STRAIGHT, frozenset({4, 5}))
        )
        with self.assertRaises(InvalidBet):
            bet_validator.validate(request)

    def test_typed_request_keeps_repeated_numbers(self):
        request = BetRequest(GameType.ROULETTE, 10, RouletteParams(RouletteBetType.STRAIGHT, [5, 5]))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(request)

    def test_typed_request_numbers_must_be_a_collection(self):
        for numbers in (5, "5", None):
            request = BetRequest(GameType.ROULETTE, 10, RouletteParams(RouletteBetType.STRAIGHT, numbers))
            with self.assertRaises(InvalidBet) as ctx:
                bet_validator.validate(request)
            self.assertEqual(ctx.exception.field, "params.numbers")

    def test_params_must_match_game(self):
        request = BetRequest(GameType.ROULETTE, 10, SlotParams(lines=3))
        with self.assertRaises(InvalidBet):
            bet_validator.validate(request)


class TestSlotRules(unittest.TestCase):

    def test_lines_range(self):
        for lines in range(1, 6):
            bet_validator.validate(slot(lines=lines))
        for lines in (0, 6, -1):
            with self.assertRaises(OutOfRange):
                bet_validator.validate(slot(lines=lines))

    def test_lines_must_be_integer(self):
        with self.assertRaises(OutOfRange):
            bet_validator.validate(slot(lines="3"))


if __name__ == "__main__":
    unittest.main()
