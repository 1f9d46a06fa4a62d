from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of the current instant (naive UTC)"""

    @abstractmethod
    def now(self) -> datetime:
        pass
