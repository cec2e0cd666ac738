"""
Pastebin Backend - Paste Identifier Generator
==============================================

What:  Produces the short random token used as a paste's primary key and URL.
How:   secrets.token_hex over `num_bytes` cryptographically random bytes;
       the default 4 bytes give 8 lowercase hex characters.

The generator does not check uniqueness. A clash is reported by the store
as ConstraintViolationError and PasteService retries with a new token.
"""

import secrets
from typing import Optional

from pastebin.config import settings


def generate_paste_id(num_bytes: Optional[int] = None) -> str:
    """Return 2 * num_bytes lowercase hex characters (8 by default)."""
    return secrets.token_hex(num_bytes or settings.id_bytes)
