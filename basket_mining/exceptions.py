"""
Errors raised by the basket mining package.
"""
import numbers


class BasketMiningError(ValueError):
    """Base class for all basket mining errors."""


class InvalidInputError(BasketMiningError):
    """Malformed or empty transaction data at load time."""


class EmptyRuleSetError(BasketMiningError):
    """A rule filter was asked to work on an empty rule collection."""


class InvalidParameterError(BasketMiningError):
    """A threshold or option is outside its valid range."""


def check_ratio(name: str, value: float):
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not 0.0 <= value <= 1.0:
        raise InvalidParameterError(f"{name} must be in [0, 1], got {value!r}")
