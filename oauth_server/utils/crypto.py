"""Cryptography utilities"""

import hashlib
import secrets

from passlib.context import CryptContext

from oauth_server.core.config import logger


def create_secret_context(rounds: int = 12) -> CryptContext:
    """
    Build the client secret hashing context with bcrypt

    Args:
        rounds: bcrypt cost factor

    Returns:
        CryptContext
    """
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=rounds,
    )


def hash_secret(secret: str, context: CryptContext) -> str:
    """
    Hash a client secret using bcrypt

    Args:
        secret: Plain text client secret
        context: Hashing context

    Returns:
        Hashed secret
    """
    return context.hash(secret)


def verify_secret(plain_secret: str, hashed_secret: str, context: CryptContext) -> bool:
    """
    Verify a client secret against a hash (constant-time comparison)

    Secrets bcrypt cannot process (e.g. containing NUL bytes) never match.

    Args:
        plain_secret: Plain text secret to verify
        hashed_secret: Hashed secret to compare against
        context: Hashing context

    Returns:
        True if secret matches, False otherwise
    """
    try:
        return context.verify(plain_secret, hashed_secret)
    except ValueError as e:
        logger.warning(f"Secret verification refused: {e}")
        return False


def hash_token(value: str) -> str:
    """
    Hash an authorization code or access token using SHA-256

    Args:
        value: Code or token as handed to the client

    Returns:
        Hexadecimal hash string (64 characters)
    """
    return hashlib.sha256(value.encode()).hexdigest()


def constant_time_compare(a: str, b: str) -> bool:
    """
    Compare two strings in constant time to prevent timing attacks

    Args:
        a: First string
        b: Second string

    Returns:
        True if strings are equal, False otherwise
    """
    return secrets.compare_digest(a.encode(), b.encode())


class RandomTokenGenerator:
    """Source of opaque identifiers for codes and tokens"""

    def generate(self, byte_length: int) -> str:
        """
        Generate a cryptographically secure random identifier

        Args:
            byte_length: Number of random bytes

        Returns:
            Hexadecimal string (2 * byte_length characters)
        """
        if byte_length <= 0:
            raise ValueError("byte_length must be positive")
        return secrets.token_hex(byte_length)
