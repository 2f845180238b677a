"""
services.encoders - Text → bit pattern encoders, one per symbology.

Unsupported characters are never an error here.  Code 128 substitutes
the pattern for '0'; Code 39 drops the character.  Callers rely on
both behaviours, so they are kept separate.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Type

from services.symbology import (
    SymbologyKind, CODE128_START, CODE128_STOP, CODE39_SENTINEL, lookup,
)

logger = logging.getLogger(__name__)

DEFAULT_KIND = SymbologyKind.CODE128


class Encoder:
    """Base class: turns text into a string of '1'/'0' modules."""

    kind: SymbologyKind

    def encode(self, text: str) -> str:
        """Return the full bit pattern for *text*.  Subclasses must override."""
        raise NotImplementedError


class Code128Encoder(Encoder):
    """
    Code 128 (set B) without the modulo-103 check character.

    Output length is 11 (start) + 11 per character + 13 (stop).
    """

    kind = SymbologyKind.CODE128
    FALLBACK_CHAR = "0"

    def encode(self, text: str) -> str:
        parts: List[str] = [CODE128_START]
        fallback = lookup(self.kind, self.FALLBACK_CHAR)
        for char in text:
            pattern = lookup(self.kind, char)
            if pattern is None:
                logger.debug(f"{self.kind.value}: {char!r} unsupported, "
                             f"substituting {self.FALLBACK_CHAR!r}")
                pattern = fallback
            parts.append(pattern)
        parts.append(CODE128_STOP)
        return "".join(parts)


class Code39Encoder(Encoder):
    """
    Code 39, uppercase only.  Each encoded character is preceded by a
    single narrow gap; unsupported characters are skipped.
    """

    kind = SymbologyKind.CODE39
    GAP = "0"

    def encode(self, text: str) -> str:
        parts: List[str] = [CODE39_SENTINEL]
        for char in text.upper():
            pattern = lookup(self.kind, char)
            if pattern is None:
                logger.debug(f"{self.kind.value}: dropping unsupported {char!r}")
                continue
            parts.append(self.GAP + pattern)
        parts.append(CODE39_SENTINEL)
        return "".join(parts)


class Ean13Encoder(Code128Encoder):
    """
    Placeholder for EAN-13.  Encodes exactly like Code 128; guard bars,
    L/G/R code sets and the mod-10 check digit are not implemented.
    """

    kind = SymbologyKind.EAN13


_ENCODERS: Dict[SymbologyKind, Type[Encoder]] = {
    SymbologyKind.CODE128: Code128Encoder,
    SymbologyKind.CODE39: Code39Encoder,
    SymbologyKind.EAN13: Ean13Encoder,
}


def supported_formats() -> List[str]:
    return [kind.value for kind in _ENCODERS]


def resolve_kind(format_name: str) -> SymbologyKind:
    """Case-sensitive name → kind; anything unknown resolves to CODE128."""
    try:
        return SymbologyKind(format_name)
    except ValueError:
        logger.debug(f"Unknown format {format_name!r}, using {DEFAULT_KIND.value}")
        return DEFAULT_KIND


def select_encoder(format_name: str) -> Encoder:
    return _ENCODERS[resolve_kind(format_name)]()
