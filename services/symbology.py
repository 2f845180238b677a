"""
services.symbology - Character-to-module lookup tables.

One read-only table per symbology.  A pattern is a string of '1' (bar)
and '0' (space) modules; every pattern in a table has the same length.
"""

from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class SymbologyKind(Enum):
    CODE128 = "CODE128"
    CODE39 = "CODE39"
    EAN13 = "EAN13"      # alias of CODE128 until real EAN-13 lands


# ── Code 128 ───────────────────────────────────────────────────────────
# Code Set B: ASCII 32-126 maps to values 0-94
_CODE128_VALUES = [
    "11011001100", "11001101100", "11001100110", "10010011000", "10010001100",  # 0-4
    "10001001100", "10011001000", "10011000100", "10001100100", "11001001000",  # 5-9
    "11001000100", "11000100100", "10110011100", "10011011100", "10011001110",  # 10-14
    "10111001100", "10011101100", "10011100110", "11001110010", "11001011100",  # 15-19
    "11001001110", "11011100100", "11001110100", "11101101110", "11101001100",  # 20-24
    "11100101100", "11100100110", "11101100100", "11100110100", "11100110010",  # 25-29
    "11011011000", "11011000110", "11000110110", "10100011000", "10001011000",  # 30-34
    "10001000110", "10110001000", "10001101000", "10001100010", "11010001000",  # 35-39
    "11000101000", "11000100010", "10110111000", "10110001110", "10001101110",  # 40-44
    "10111011000", "10111000110", "10001110110", "11101110110", "11010001110",  # 45-49
    "11000101110", "11011101000", "11011100010", "11011101110", "11101011000",  # 50-54
    "11101000110", "11100010110", "11101101000", "11101100010", "11100011010",  # 55-59
    "11101111010", "11001000010", "11110001010", "10100110000", "10100001100",  # 60-64
    "10010110000", "10010000110", "10000101100", "10000100110", "10110010000",  # 65-69
    "10110000100", "10011010000", "10011000010", "10000110100", "10000110010",  # 70-74
    "11000010010", "11001010000", "11110111010", "11000010100", "10001111010",  # 75-79
    "10100111100", "10010111100", "10010011110", "10111100100", "10011110100",  # 80-84
    "10011110010", "11110100100", "11110010100", "11110010010", "11011011110",  # 85-89
    "11011110110", "11110110110", "10101111000", "10100011110", "10001011110",  # 90-94
]

CODE128_START = "11010010000"        # Start B (value 104)
CODE128_STOP = "1100011101011"       # value 106, 13 modules
CODE128_PATTERN_LENGTH = 11

CODE128_TABLE: Mapping[str, str] = MappingProxyType(
    {chr(32 + value): pattern for value, pattern in enumerate(_CODE128_VALUES)}
)


# ── Code 39 ────────────────────────────────────────────────────────────
# Narrow element = 1 module, wide element = 2 modules
CODE39_SENTINEL = "100101101101"     # '*'
CODE39_PATTERN_LENGTH = 12

CODE39_TABLE: Mapping[str, str] = MappingProxyType({
    "0": "101001101101", "1": "110100101011", "2": "101100101011",
    "3": "110110010101", "4": "101001101011", "5": "110100110101",
    "6": "101100110101", "7": "101001011011", "8": "110100101101",
    "9": "101100101101",
    "A": "110101001011", "B": "101101001011", "C": "110110100101",
    "D": "101011001011", "E": "110101100101", "F": "101101100101",
    "G": "101010011011", "H": "110101001101", "I": "101101001101",
    "J": "101011001101", "K": "110101010011", "L": "101101010011",
    "M": "110110101001", "N": "101011010011", "O": "110101101001",
    "P": "101101101001", "Q": "101010110011", "R": "110101011001",
    "S": "101101011001", "T": "101011011001", "U": "110010101011",
    "V": "100110101011", "W": "110011010101", "X": "100101101011",
    "Y": "110010110101", "Z": "100110110101",
    "-": "100101011011", ".": "110010101101", " ": "100110101101",
    "$": "100100100101", "/": "100100101001", "+": "100101001001",
    "%": "101001001001",
})


_TABLES: Mapping[SymbologyKind, Mapping[str, str]] = MappingProxyType({
    SymbologyKind.CODE128: CODE128_TABLE,
    SymbologyKind.CODE39: CODE39_TABLE,
    SymbologyKind.EAN13: CODE128_TABLE,
})


def lookup(kind: SymbologyKind, character: str) -> Optional[str]:
    """Return the module pattern for *character*, or None if unsupported."""
    table = _TABLES.get(kind)
    if table is None:
        return None
    return table.get(character)
