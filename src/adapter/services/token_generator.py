import secrets

from src.app.services.token_generator import TokenGenerator

TOKEN_BYTES = 32


class SecureTokenGenerator(TokenGenerator):
    """
    Session tokens from the OS CSPRNG.

    32 random bytes, hex encoded to 64 characters. Liveness is not checked
    here; the unique index on sessions.session_token is the backstop.
    """

    def __init__(self, num_bytes: int = TOKEN_BYTES):
        self.num_bytes = num_bytes

    def generate(self) -> str:
        return secrets.token_hex(self.num_bytes)
