"""Password Policy — bcrypt hashing, verification, and the common-password blocklist.

Invariants:
    - hash_password output is salted and one-way; plaintext is never stored
    - password_matches returns False on mismatch and raises PasswordHashError on a malformed hash
    - COMMON_PASSWORDS is checked at validation time (a field error, not a hashing error)
    - Length rules are measured in UTF-8 bytes: bcrypt only reads the first 72

Design Decisions:
    - bcrypt work factor configurable so tests can use the minimum (4)
"""

import bcrypt

from userapi.core.errors import PasswordHashError

BCRYPT_ROUNDS = 12
MIN_PASSWORD_BYTES = 8
MAX_PASSWORD_BYTES = 72


def password_length(plaintext: str) -> int:
    return len(plaintext.encode("utf-8"))


def hash_password(plaintext: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("ascii")


def password_matches(plaintext: str, hashed: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("ascii"))
    except (ValueError, UnicodeEncodeError) as e:
        raise PasswordHashError(str(e)) from e


COMMON_PASSWORDS = (
    "0987654321", "1111111111", "11111111", "1234567890", "12345678",
    "123456789", "1q2w3e4r", "1qaz2wsx", "22222222", "55555555",
    "66666666", "77777777", "88888888", "99999999", "aa123456",
    "abc12345", "abcd1234", "access14", "adminadmin", "administrator",
    "alexander", "baseball", "basketball", "batman123", "butterfly",
    "changeme", "charlie1", "chocolate", "computer", "corvette",
    "dragon123", "elephant", "football", "football1", "freedom1",
    "iloveyou", "iloveyou1", "jennifer", "jordan23",
    "letmein1", "liverpool", "logitech", "master123", "maverick",
    "mercedes", "michelle", "midnight", "monkey123", "mustang1",
    "nicholas", "passw0rd", "password", "password1", "password12",
    "password123", "pa55word", "phoenix1", "princess", "princess1",
    "q1w2e3r4", "q1w2e3r4t5", "qazwsxedc", "qwer1234", "qwerty12",
    "qwerty123", "qwertyui", "qwertyuiop", "rush2112", "samantha",
    "sebastian", "shadow12", "starwars", "sunshine", "superman",
    "superman1", "thomas12", "trustno1", "welcome1", "whatever",
    "zaq12wsx", "zxcvbnm1", "zxcvbnm123", "asdfghjkl", "asdf1234",
)
