"""Short code generation.

Two strategies are available: pseudo-random codes drawn from an alphabet
using an injectable random source, and deterministic codes derived from a
SHA-256 digest of the target URL salted with the attempt number.
"""

import hashlib
import random
import string
from abc import ABC, abstractmethod
from typing import Collection, Optional

from shortlink.core.config import CodeStrategy, Settings
from shortlink.services.exceptions import CodeGenerationExhaustedError

BASE62_ALPHABET = string.ascii_letters + string.digits


class CodeGenerator(ABC):
    """
    Base class for short code generators.

    Subclasses provide ``_candidate``; ``generate`` walks candidates until one
    falls outside ``used_codes`` or the attempt budget runs out. Generators
    flagged ``deterministic`` yield the same candidates for the same URL.
    """

    deterministic = False

    def __init__(self, length: int, alphabet: str, max_attempts: int = 10):
        if length < 1:
            raise ValueError("code length must be positive")
        if len(set(alphabet)) < 2:
            raise ValueError("code alphabet needs at least two distinct characters")
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")
        self.length = length
        # Deduplicate while keeping order so every symbol is equally likely
        self.alphabet = "".join(dict.fromkeys(alphabet))
        self.max_attempts = max_attempts

    def generate(self, target_url: str, used_codes: Collection[str] = ()) -> str:
        """
        Produce a code not contained in ``used_codes``.

        Args:
            target_url: The URL the code is being issued for
            used_codes: Codes known to be taken

        Returns:
            str: A candidate short code

        Raises:
            CodeGenerationExhaustedError: If every attempt hit a used code
        """
        for attempt in range(self.max_attempts):
            candidate = self._candidate(target_url, attempt)
            if candidate not in used_codes:
                return candidate
        raise CodeGenerationExhaustedError(
            f"Failed to generate an unused short code after {self.max_attempts} attempts"
        )

    @abstractmethod
    def _candidate(self, target_url: str, attempt: int) -> str:
        """Return candidate number ``attempt`` for ``target_url``."""


class RandomCodeGenerator(CodeGenerator):
    """Pseudo-random codes drawn uniformly from the alphabet."""

    def __init__(
        self,
        length: int = 6,
        alphabet: str = BASE62_ALPHABET,
        max_attempts: int = 10,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(length, alphabet, max_attempts)
        self.rng = rng if rng is not None else random.SystemRandom()

    def _candidate(self, target_url: str, attempt: int) -> str:
        return "".join(self.rng.choice(self.alphabet) for _ in range(self.length))


class HashCodeGenerator(CodeGenerator):
    """
    Deterministic codes derived from the URL.

    Candidate ``n`` encodes ``sha256(f"{url}:{n}")`` in the alphabet's base
    and keeps the first ``length`` symbols, so resubmitting a URL walks the
    same candidate sequence.
    """

    deterministic = True

    def _candidate(self, target_url: str, attempt: int) -> str:
        digest = hashlib.sha256(f"{target_url}:{attempt}".encode("utf-8")).digest()
        number = int.from_bytes(digest, "big")
        base = len(self.alphabet)

        symbols = []
        while number and len(symbols) < self.length:
            number, remainder = divmod(number, base)
            symbols.append(self.alphabet[remainder])
        while len(symbols) < self.length:
            symbols.append(self.alphabet[0])
        return "".join(symbols)


def build_code_generator(settings: Settings, rng: Optional[random.Random] = None) -> CodeGenerator:
    """Create the generator selected by ``CODE_STRATEGY``."""
    if settings.CODE_STRATEGY == CodeStrategy.HASH:
        return HashCodeGenerator(
            length=settings.CODE_LENGTH,
            alphabet=settings.CODE_ALPHABET,
            max_attempts=settings.CODE_MAX_ATTEMPTS,
        )
    return RandomCodeGenerator(
        length=settings.CODE_LENGTH,
        alphabet=settings.CODE_ALPHABET,
        max_attempts=settings.CODE_MAX_ATTEMPTS,
        rng=rng,
    )
