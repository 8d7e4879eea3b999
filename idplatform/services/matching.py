"""
Match strategies for demographic attributes.

A strategy type (exact, partial, phonetic) selects how a requested value is
compared with the stored identity value. Match functions are pure and return
a score between 0 and 100; a comparison succeeds when the score reaches the
requested match threshold.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from idplatform.core import constants
from idplatform.core.error_handling import UnsupportedMatchStrategyError

logger = logging.getLogger(__name__)

MatchFunction = Callable[[Any, Any], int]

EXACT_MATCH_VALUE = 100
NO_MATCH_VALUE = 0


class MatchingStrategyType(str, Enum):
    """Strategy codes accepted in msPri/msSec."""

    EXACT = "E"
    PARTIAL = "P"
    PHONETICS = "PH"

    @classmethod
    def from_code(cls, code: str) -> "MatchingStrategyType":
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"Unknown match strategy: {code!r}") from None


def exact_match(req_info: Any, entity_info: Any) -> int:
    """Score 100 when both values are strings and equal, 0 otherwise."""
    if isinstance(req_info, str) and isinstance(entity_info, str):
        return EXACT_MATCH_VALUE if req_info == entity_info else NO_MATCH_VALUE
    return NO_MATCH_VALUE


class GenderMatchingStrategy(Enum):
    """Strategies available for the gender attribute (exact only)."""

    EXACT = (MatchingStrategyType.EXACT, exact_match)

    def __init__(self, strategy_type: MatchingStrategyType, match_function: MatchFunction):
        self.strategy_type = strategy_type
        self.match_function = match_function


# attribute -> strategy type -> match function
_MATCH_FUNCTIONS: Dict[str, Dict[MatchingStrategyType, MatchFunction]] = {
    "gender": {strategy.strategy_type: strategy.match_function for strategy in GenderMatchingStrategy},
}


def get_match_function(attribute: str, strategy_type: MatchingStrategyType) -> MatchFunction:
    """Look up the match function for an attribute and strategy type."""
    try:
        return _MATCH_FUNCTIONS[attribute][strategy_type]
    except KeyError:
        raise UnsupportedMatchStrategyError(
            f"Match strategy {strategy_type.value} is not supported for {attribute}"
        ) from None


def match(
    attribute: str,
    strategy_type: MatchingStrategyType,
    req_info: Any,
    entity_info: Any,
    threshold: Optional[int] = None
) -> bool:
    """Compare two values and report whether the score reaches the threshold.

    A missing threshold means an exact score (100) is required.
    """
    match_function = get_match_function(attribute, strategy_type)
    score = match_function(req_info, entity_info)
    required = threshold if threshold is not None else constants.MAX_MATCH_THRESHOLD
    logger.debug(f"{attribute} match with {strategy_type.name}: score={score}, threshold={required}")
    return score >= required
