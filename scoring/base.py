"""Base scorer abstract class."""
from abc import ABC, abstractmethod
from typing import Optional

from common.logger import get_logger
from common.models import IndicatorPoint

# |total score| must exceed this for a BUY/SELL verdict (and any position)
VERDICT_THRESHOLD = 0.2


def is_above(price: float, level: Optional[float]) -> bool:
    """price > level, where an absent level makes the comparison false (bearish default)."""
    if level is None:
        return False
    return price > level


class BaseScorer(ABC):
    name = "base"

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def score(self, current: IndicatorPoint, **kwargs) -> int:
        """Return a factor score in {-1, 0, +1}."""
        pass

    @abstractmethod
    def describe(self, score: int, **kwargs) -> str:
        """One-line human explanation of a factor score."""
        pass
