import bcrypt

from src.app.services.password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """Bcrypt password hashing (cost factor 12 by default)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(self.rounds)).decode()

    def verify(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode(), hashed.encode())
        except ValueError:
            # Malformed stored hash
            return False
