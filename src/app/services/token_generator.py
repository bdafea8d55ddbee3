from abc import ABC, abstractmethod


class TokenGenerator(ABC):
    """Produces unguessable session tokens"""

    @abstractmethod
    def generate(self) -> str:
        pass
