# expohub/core/security.py
"""
Security module for authentication.
Handles password hashing and JWT token creation/validation.
"""
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext

from expohub.config import settings

# Password hashing context (argon2 only)
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

# JWT configuration
JWT_SECRET = settings.jwt_secret
ACCESS_TOKEN_EXPIRE_DAYS = settings.access_token_expire_days
JWT_ALG = "HS256"  # HMAC SHA-256

def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a stored hash.
    Unknown or malformed hashes verify as False.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False

def create_access_token(user_id: str, email: str) -> str:
    """
    Create a signed access token for a user.

    Token payload includes:
        - user_id: Subject user identifier
        - email: Normalized email the user logged in with
        - iat: Issued at timestamp
        - exp: Expiration timestamp (iat + ACCESS_TOKEN_EXPIRE_DAYS)
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "iat": now,
        "exp": now + dt.timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate an access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, malformed or signed with another secret
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
