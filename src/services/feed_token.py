"""Feed token generation: hashids of the Telegram id with a secret salt."""
from hashids import Hashids

from services.exceptions import EncodingError

# Hex-only alphabet keeps tokens URL-safe and short.
FEED_ID_ALPHABET = "0123456789abcdef"


def _get_hashids(salt: str) -> Hashids:
    if not salt:
        raise EncodingError("Feed token salt is not configured")
    try:
        return Hashids(salt=salt, alphabet=FEED_ID_ALPHABET)
    except ValueError as e:
        raise EncodingError(f"Invalid feed token alphabet: {e}") from e


def generate_feed_token(account_id: int, salt: str) -> str:
    """
    Encode a Telegram id into an opaque feed token.

    Deterministic for a given (account_id, salt) pair. This is an anti-enumeration
    measure, not authentication: anyone holding the salt can decode the token.

    Args:
        account_id: Non-negative Telegram user id.
        salt: Secret salt; must be non-empty.

    Returns:
        The feed token, using only characters from FEED_ID_ALPHABET.

    Raises:
        EncodingError: If account_id is negative or not an int, or salt is empty.
    """
    if isinstance(account_id, bool) or not isinstance(account_id, int) or account_id < 0:
        raise EncodingError(f"Cannot encode account id {account_id!r}")
    token = _get_hashids(salt).encode(account_id)
    if not token:
        raise EncodingError(f"Encoding account id {account_id} produced an empty token")
    return token


def is_well_formed_token(token: str, salt: str) -> bool:
    """
    Check whether a token could have been produced by generate_feed_token.

    True iff the token uses the feed alphabet and decodes (with this salt) to exactly
    one id. Says nothing about whether the token is assigned to a user.
    """
    if not token or any(char not in FEED_ID_ALPHABET for char in token):
        return False
    return len(_get_hashids(salt).decode(token)) == 1
