"""Scale degrees, modes, and key-signature resolution.

A key-signature meta event stores the number of sharps (positive) or
flats (negative) and a major/minor flag.  Walking the circle of fifths
turns that into the tonic of the key.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

from .errors import InvalidKeySignature


class KeySignatureMode(IntEnum):
    MAJOR = 0
    MINOR = 1


class ScaleDegree(IntEnum):
    """Semitones above C.  Enharmonic spellings are aliases."""

    C = 0
    C_SHARP = 1
    D_FLAT = 1
    D = 2
    D_SHARP = 3
    E_FLAT = 3
    E = 4
    F = 5
    F_SHARP = 6
    G_FLAT = 6
    G = 7
    G_SHARP = 8
    A_FLAT = 8
    A = 9
    A_SHARP = 10
    B_FLAT = 10
    B = 11
    C_FLAT = 11


_MAJOR_KEYS: Dict[int, ScaleDegree] = {
    -7: ScaleDegree.C_FLAT,
    -6: ScaleDegree.G_FLAT,
    -5: ScaleDegree.D_FLAT,
    -4: ScaleDegree.A_FLAT,
    -3: ScaleDegree.E_FLAT,
    -2: ScaleDegree.B_FLAT,
    -1: ScaleDegree.F,
    0: ScaleDegree.C,
    1: ScaleDegree.G,
    2: ScaleDegree.D,
    3: ScaleDegree.A,
    4: ScaleDegree.E,
    5: ScaleDegree.B,
    6: ScaleDegree.F_SHARP,
    7: ScaleDegree.C_SHARP,
}

_MINOR_KEYS: Dict[int, ScaleDegree] = {
    -7: ScaleDegree.A_FLAT,
    -6: ScaleDegree.E_FLAT,
    -5: ScaleDegree.B_FLAT,
    -4: ScaleDegree.F,
    -3: ScaleDegree.C,
    -2: ScaleDegree.G,
    -1: ScaleDegree.D,
    0: ScaleDegree.A,
    1: ScaleDegree.E,
    2: ScaleDegree.B,
    3: ScaleDegree.F_SHARP,
    4: ScaleDegree.C_SHARP,
    5: ScaleDegree.G_SHARP,
    6: ScaleDegree.D_SHARP,
    7: ScaleDegree.A_SHARP,
}


def key_signature_from_sharps_or_flats(
    sharps_or_flats: int, mode: int
) -> Tuple[ScaleDegree, KeySignatureMode]:
    """Resolve a key-signature event to its tonic and mode."""

    try:
        key_mode = KeySignatureMode(mode)
    except ValueError:
        raise InvalidKeySignature(f"key signature mode must be 0 or 1, got {mode}") from None
    table = _MAJOR_KEYS if key_mode is KeySignatureMode.MAJOR else _MINOR_KEYS
    degree = table.get(sharps_or_flats)
    if degree is None:
        raise InvalidKeySignature(
            f"key signature must have between 7 flats and 7 sharps, got {sharps_or_flats}"
        )
    return degree, key_mode


__all__ = ["KeySignatureMode", "ScaleDegree", "key_signature_from_sharps_or_flats"]
