from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing capability"""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def verify(self, plaintext: str, hashed: str) -> bool:
        pass
