"""Credential store: password hashing and verification via argon2."""
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, InvalidHashError, VerificationError

_ph = PasswordHasher()


def hash_password(plain_password: str) -> str:
    return _ph.hash(plain_password)


def verify_password(candidate_password: str, stored_hash: str) -> bool:
    try:
        return _ph.verify(stored_hash, candidate_password)
    except (VerifyMismatchError, InvalidHashError, VerificationError):
        return False
