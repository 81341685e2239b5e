from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple

from wager_engine.core.models import BetRequest, Result, SlotParams
from wager_engine.core.payouts import (
    PAYLINES,
    SLOT_GRID_CELLS,
    PayoutPolicy,
    SlotSymbol,
    default_policy,
    floor_amount,
)
from wager_engine.core.rng import RandomSource, rng


class SlotsGame:
    """
    3x3 slot machine with up to five paylines.
    Each cell is drawn independently from the weighted symbol table; a payline
    pays stake * value / lines when all three of its symbols match.
    """

    def __init__(self, policy: Optional[PayoutPolicy] = None, source: Optional[RandomSource] = None):
        self.policy = policy or default_policy
        self.source = source or rng

    def _draw_grid(self) -> List[SlotSymbol]:
        """Draw nine cells, row-major."""
        table = self.policy.symbol_table
        return [table.draw(self.source) for _ in range(SLOT_GRID_CELLS)]

    def _evaluate(
        self, grid: Sequence[SlotSymbol], stake: int, lines: int
    ) -> Tuple[Fraction, List[Dict]]:
        """
        Check the first `lines` paylines.
        Returns: (unrounded total, per-line trace)
        """
        total = Fraction(0)
        trace = []

        for index, payline in enumerate(PAYLINES[:lines]):
            symbols = [grid[cell] for cell in payline]
            win = symbols[0] == symbols[1] == symbols[2]
            line_win = Fraction(stake * symbols[0].value, lines) if win else Fraction(0)
            total += line_win

            trace.append(
                {
                    "line": index,
                    "symbols": [symbol.name for symbol in symbols],
                    "win": win,
                    "payout": round(float(line_win), 2),
                }
            )

        return total, trace

    def resolve(self, bet: BetRequest) -> Result:
        params: SlotParams = bet.params

        grid = self._draw_grid()
        total, trace = self._evaluate(grid, bet.stake, params.lines)

        # Floored once over the sum, not per line
        amount = floor_amount(total)

        return Result(
            win=amount > 0,
            amount=amount,
            details={
                "grid": [[symbol.name for symbol in grid[row:row + 3]] for row in (0, 3, 6)],
                "lines": params.lines,
                "paylines": trace,
                "multiplier": round(amount / bet.stake, 4),
            },
        )


# Singleton instance
slots_game = SlotsGame()
