from passlib.context import CryptContext
from app.config import BCRYPT_ROUNDS

# bcrypt rejects (or silently truncates) anything past 72 bytes of input
BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt embedded in the result.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash.

    A malformed or unrecognised stored hash, or an over-long candidate, is
    reported as a mismatch rather than raised: a bad hash in the database is
    an internal inconsistency, not something the caller can act on.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def dummy_verify() -> None:
    """Spend roughly one verification's worth of time without a real hash.

    Used when a login names an unknown user, so that path costs the same as
    a wrong password.
    """
    pwd_context.dummy_verify()
