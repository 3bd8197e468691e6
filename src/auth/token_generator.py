#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Random session token generation.
#
"""
Random session token generation.
"""

import random
import secrets
import string


SESSION_TOKEN_LENGTH = 48
MIN_TOKEN_LENGTH = 32
TOKEN_ALPHABET = string.ascii_letters + string.digits


class TokenGenerator:
    """
    Generates opaque alphanumeric session tokens.

    The random source belongs to the generator instance. Production code
    uses the OS CSPRNG; tests may pass a seeded random.Random.
    """

    def __init__(self, rng: random.Random | None = None):
        """
        Args:
            rng: Random source (default: secrets.SystemRandom)
        """
        self.rng = rng if rng is not None else secrets.SystemRandom()

    def random_token(self, length: int = SESSION_TOKEN_LENGTH) -> str:
        """
        Returns a token of `length` characters from [A-Za-z0-9].

        Args:
            length: Number of characters (<= 0 yields an empty string)
        """
        return "".join(self.rng.choice(TOKEN_ALPHABET) for _ in range(length))


_default_generator = TokenGenerator()


def random_token(length: int = SESSION_TOKEN_LENGTH) -> str:
    """Token from the module's default CSPRNG-backed generator."""
    return _default_generator.random_token(length)
