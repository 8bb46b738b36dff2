from abc import ABC, abstractmethod
from typing import List

from hndigest.storage.models import NewsItem


class BaseFeed(ABC):
    @abstractmethod
    def fetch(self) -> List[NewsItem]:
        pass
