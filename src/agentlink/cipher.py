"""Decryption hook for agents that hide their embedded link.

Pandabuy sometimes replaces the embedded marketplace URL with an opaque token.
The cipher itself is not part of this package: callers pass any
``decrypt(token) -> plaintext`` callable to the transcoder.
"""

from __future__ import annotations

from typing import Callable

from agentlink.errors import DecodeFailed

Decryptor = Callable[[str], str]

# Tokens starting with this prefix are ciphered, everything else is a URL.
PANDABUY_CIPHER_PREFIX = "PJ"


def is_ciphered(token: str) -> bool:
    return token.startswith(PANDABUY_CIPHER_PREFIX)


def decrypt_unavailable(token: str) -> str:
    """Default decryptor: no cipher is bundled, so the token is undecodable."""
    raise DecodeFailed(
        f"Encrypted token {token[:12]}... needs a decryptor; none was configured"
    )
