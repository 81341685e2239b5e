"""
WagerEngine - the single entry point for resolving a bet.
Validates, dispatches to the game resolver and returns its Result unchanged.
"""

from typing import Any, Dict, Mapping, Optional, Union

from wager_engine.config import AppConfig, GameConfig, settings
from wager_engine.core.exceptions import WagerValidationError
from wager_engine.core.games import DiceGame, RouletteGame, SlotsGame
from wager_engine.core.logger import get_logger
from wager_engine.core.models import BetRequest, GameType, Result
from wager_engine.core.payouts import PayoutPolicy, default_policy, load_payout_policy
from wager_engine.core.rng import RandomSource, SeededRandomSource, rng
from wager_engine.core.validator import BetValidator

logger = get_logger("engine")


class WagerEngine:
    def __init__(
        self,
        policy: Optional[PayoutPolicy] = None,
        source: Optional[RandomSource] = None,
        limits: Optional[Mapping[str, GameConfig]] = None,
    ):
        self.policy = policy or default_policy
        self.source = source or rng
        self.validator = BetValidator(limits)
        self.resolvers = {
            GameType.DICE: DiceGame(self.policy, self.source),
            GameType.ROULETTE: RouletteGame(self.policy, self.source),
            GameType.SLOT: SlotsGame(self.policy, self.source),
        }

    def resolve(self, request: Union[BetRequest, Mapping[str, Any]]) -> Result:
        """
        Resolve one bet.

        Args:
            request: A BetRequest or its wire form {game_type, stake, params}

        Returns:
            Result with win flag, integer payout and the game trace

        Raises:
            WagerValidationError: the bet was rejected; nothing was drawn
        """
        try:
            bet = self.validator.validate(request)
        except WagerValidationError as e:
            logger.info(
                f"Rejected bet: {e.message}",
                extra={"error_code": e.code, "error_field": e.field},
            )
            raise

        result = self.resolvers[bet.game_type].resolve(bet)

        logger.info(
            f"Resolved {bet.game_type.value} bet",
            extra={
                "game": bet.game_type.value,
                "stake": bet.stake,
                "win": result.win,
                "amount": result.amount,
            },
        )
        return result

    def catalog(self) -> Dict[str, Any]:
        """Games on offer with their stake limits and payout tables."""
        tables = self.policy.describe()
        games = {}
        for game_type in GameType:
            config = self.validator.limits.get(game_type.value)
            games[game_type.value] = {
                "enabled": config.enabled if config else True,
                "min_bet": config.min_bet if config else 1,
                "max_bet": config.max_bet if config else None,
                "payouts": tables[game_type.value],
            }
        return games


def create_engine(config: Optional[AppConfig] = None) -> WagerEngine:
    """Build an engine from application settings; tables are read once here."""
    config = config or settings

    policy = load_payout_policy(config.paths.get_payout_path())

    if config.rng.seed is not None:
        logger.warning(f"Using seeded random source (seed={config.rng.seed}); not for real money")
        source = SeededRandomSource(config.rng.seed)
    else:
        source = rng

    return WagerEngine(policy=policy, source=source, limits=config.games.limits())
