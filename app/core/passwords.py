import secrets
import string

LOWER = string.ascii_lowercase
UPPER = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+[]{}|;:,.<>?"
MIN_GENERATED_LENGTH = 10


def generate_password(length: int = 12) -> str:
    """Random password with at least one lower, upper, digit and symbol character."""
    length = max(length, MIN_GENERATED_LENGTH)
    alphabet = LOWER + UPPER + DIGITS + SYMBOLS
    chars = [
        secrets.choice(LOWER),
        secrets.choice(UPPER),
        secrets.choice(DIGITS),
        secrets.choice(SYMBOLS),
    ]
    chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
