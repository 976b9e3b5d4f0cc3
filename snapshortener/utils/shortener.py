"""Identifier and shortcode generation utilities

This module provides helpers for generating random short codes and opaque
record identifiers. Both draw from the `secrets` module so generated values
are not predictable from earlier ones.

Functions:
    generate_shortcode(length=6, alphabet=ALPHABET) -> str:
        Draw a random short code suitable for use as a URL slug.

    generate_id(prefix) -> str:
        Build a unique identifier from the current time and a random suffix.

Example:
    >>> from snapshortener.utils import generate_shortcode, generate_id
    >>> len(generate_shortcode())
    6
    >>> generate_id('url')
    'url_1760871234567_9f3k2m0q1z'
"""

import secrets
import string
import time


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SUFFIX_LENGTH = 10


def generate_shortcode(length: int = 6, alphabet: str = ALPHABET) -> str:
    """Generate a random short code.

    Each character is drawn uniformly and independently (with replacement)
    from `alphabet`. Uniqueness is NOT checked here; the registry rejects
    codes that are already mapped.

    Args:
        length (int, optional):
            Number of characters in the short code. Defaults to 6.

        alphabet (str, optional):
            Characters to draw from. Defaults to Base62 ([a-zA-Z0-9]).

    Returns:
        str: A random short code of exactly `length` characters.

    Raises:
        TypeError: If `length` is not an integer.
        ValueError: If `length` is not positive or `alphabet` is empty.

    Example:
        >>> generate_shortcode(length=8)
        'q7GhT0aZ'
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))


def generate_id(prefix: str) -> str:
    """Generate an opaque identifier: <prefix>_<epoch milliseconds>_<random suffix>

    NOTE: the random suffix carries ~51 bits of entropy, which makes a
          collision within the same millisecond negligible.
    """
    millis = int(time.time() * 1000)
    suffix = ''.join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f'{prefix}_{millis}_{suffix}'
