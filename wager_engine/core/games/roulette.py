from typing import Optional

from wager_engine.core.models import (
    GROUPED_BETS,
    INSIDE_BETS,
    BetRequest,
    Result,
    RouletteBetType,
    RouletteParams,
)
from wager_engine.core.payouts import WHEEL_POCKETS, PayoutPolicy, default_policy, get_color
from wager_engine.core.rng import RandomSource, rng


class RouletteGame:
    """
    European Roulette (37 pockets: 0-36).
    Multipliers exclude the returned stake: a straight win on 10 pays 350.
    """

    def __init__(self, policy: Optional[PayoutPolicy] = None, source: Optional[RandomSource] = None):
        self.policy = policy or default_policy
        self.source = source or rng

    def _spin_wheel(self) -> int:
        low, high = WHEEL_POCKETS
        return self.source.random_int(low, high)

    @staticmethod
    def _check_win(number: int, color: str, params: RouletteParams) -> bool:
        """Check if a bet wins based on the spin result."""
        bet_type = params.bet_type
        assert params.numbers, f"{bet_type.value} bet reached evaluation without numbers"

        if bet_type in INSIDE_BETS:
            return number in params.numbers

        # Zero loses every grouped and even-money bet
        if number == 0:
            return False

        if bet_type in GROUPED_BETS:
            return number in params.numbers

        elif bet_type is RouletteBetType.RED:
            return color == "red"

        elif bet_type is RouletteBetType.BLACK:
            return color == "black"

        elif bet_type is RouletteBetType.EVEN:
            return number % 2 == 0

        elif bet_type is RouletteBetType.ODD:
            return number % 2 == 1

        elif bet_type is RouletteBetType.LOW:
            return 1 <= number <= 18

        elif bet_type is RouletteBetType.HIGH:
            return 19 <= number <= 36

        raise AssertionError(f"Unhandled bet type {bet_type}")

    def resolve(self, bet: BetRequest) -> Result:
        params: RouletteParams = bet.params

        number = self._spin_wheel()
        color = get_color(number)
        win = self._check_win(number, color, params)

        multiplier = self.policy.roulette_multiplier(params.bet_type) if win else 0

        return Result(
            win=win,
            amount=bet.stake * multiplier,
            details={
                "number": number,
                "color": color,
                "bet_type": params.bet_type.value,
                "numbers": sorted(params.numbers),
                "multiplier": multiplier,
            },
        )


# Singleton instance
roulette_game = RouletteGame()
