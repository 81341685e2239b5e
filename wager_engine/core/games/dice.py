"""
Dice game - predict a single six-sided die against a target.
Higher/lower pay 1.8x, exact pays 5x, flat regardless of the target.
"""

from typing import Optional

from wager_engine.core.models import BetRequest, DiceParams, Prediction, Result
from wager_engine.core.payouts import DICE_FACES, PayoutPolicy, default_policy, floor_amount
from wager_engine.core.rng import RandomSource, rng


class DiceGame:
    """Resolves validated dice bets."""

    def __init__(self, policy: Optional[PayoutPolicy] = None, source: Optional[RandomSource] = None):
        self.policy = policy or default_policy
        self.source = source or rng

    def _roll_die(self) -> int:
        low, high = DICE_FACES
        return self.source.random_int(low, high)

    @staticmethod
    def _check_win(roll: int, prediction: Prediction, target: int) -> bool:
        if prediction is Prediction.HIGHER:
            return roll > target
        elif prediction is Prediction.LOWER:
            return roll < target
        elif prediction is Prediction.EXACT:
            return roll == target
        raise AssertionError(f"Unhandled prediction {prediction}")

    def resolve(self, bet: BetRequest) -> Result:
        params: DiceParams = bet.params
        multiplier = self.policy.dice_multiplier(params.prediction)

        roll = self._roll_die()
        win = self._check_win(roll, params.prediction, params.target)

        # Floor, never round up: the fraction is the house's
        amount = floor_amount(bet.stake * multiplier) if win else 0

        return Result(
            win=win,
            amount=amount,
            details={
                "roll": roll,
                "prediction": params.prediction.value,
                "target": params.target,
                "multiplier": float(multiplier) if win else 0,
            },
        )


# Singleton instance
dice_game = DiceGame()
