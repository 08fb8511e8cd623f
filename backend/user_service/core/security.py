"""
Password hashing utilities.
"""
from passlib.context import CryptContext

# Unsalted digest: the same plain password always yields the same hash,
# so stored hashes can be compared directly.
pwd_context = CryptContext(schemes=["hex_sha256"])


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password with a one-way digest.
    
    Args:
        plain_password: The plain text password to hash
        
    Returns:
        Hex encoded hash string
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored hash.
    
    Args:
        plain_password: The plain text password to verify
        hashed_password: The hash to compare against
        
    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)
