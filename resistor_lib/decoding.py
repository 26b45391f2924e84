"""
Decoding Module - Resistance Value Decoding from Band Colors
===========================================================

Functions for decoding an ordered band color sequence into ohms and a
tolerance, trying both reading directions.
"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Significant-digit bands
DIGITS = MappingProxyType({
    "black": 0,
    "brown": 1,
    "red": 2,
    "orange": 3,
    "yellow": 4,
    "green": 5,
    "blue": 6,
    "violet": 7,
    "grey": 8,
    "white": 9,
})

MULTIPLIERS = MappingProxyType({
    "black": 1,
    "brown": 10,
    "red": 100,
    "orange": 1_000,
    "yellow": 10_000,
    "green": 100_000,
    "blue": 1_000_000,
    "violet": 10_000_000,
    "grey": 100_000_000,
    "white": 1_000_000_000,
    "gold": 0.1,
    "silver": 0.01,
})

# Tolerance in percent
TOLERANCES = MappingProxyType({
    "brown": 1,
    "red": 2,
    "green": 0.5,
    "blue": 0.25,
    "violet": 0.1,
    "grey": 0.05,
    "gold": 5,
    "silver": 10,
})

# Band layout per band count: (number of digit bands, multiplier index).
# The tolerance is always the final band.
LAYOUTS = MappingProxyType({
    4: (2, 2),
    5: (3, 3),
    6: (3, 3),
})

INSUFFICIENT_BANDS = "INSUFFICIENT_BANDS"
UNMAPPABLE_DIGIT = "UNMAPPABLE_DIGIT"
UNMAPPABLE_MULTIPLIER = "UNMAPPABLE_MULTIPLIER"
UNRESOLVABLE_TOLERANCE = "UNRESOLVABLE_TOLERANCE"

REASON_MESSAGES = MappingProxyType({
    INSUFFICIENT_BANDS: "Band count is not 4, 5 or 6.",
    UNMAPPABLE_DIGIT: "A digit band has no digit value.",
    UNMAPPABLE_MULTIPLIER: "The multiplier band has no multiplier value.",
    UNRESOLVABLE_TOLERANCE: "The tolerance band has no tolerance value.",
})

E12_BASE = (1.0, 1.2, 1.5, 1.8, 2.2, 2.7, 3.3, 3.9, 4.7, 5.6, 6.8, 8.2)

E24_BASE = (
    1.0, 1.1, 1.2, 1.3, 1.5, 1.6, 1.8, 2.0, 2.2, 2.4, 2.7, 3.0,
    3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1,
)

E_SERIES = MappingProxyType({"E12": E12_BASE, "E24": E24_BASE})


@dataclass(frozen=True)
class DecodeCandidate:
    """Decode result of one reading direction."""
    ohms: Optional[float]
    tolerance: Optional[float]
    valid: bool
    reason: Optional[str] = None


def normalize_color_name(color):
    """Lower-case, trim, and map the American 'gray' to 'grey'."""
    name = (color or "").strip().lower()
    if name == "gray":
        return "grey"
    return name


def apply_multiplier(base, multiplier):
    """
    Scale the significant digits by a multiplier.

    Fractional multipliers divide instead of multiply so that
    47 x gold gives exactly 4.7.
    """
    if multiplier >= 1:
        return base * multiplier
    return base / round(1 / multiplier)


def decode_sequence(bands) -> DecodeCandidate:
    """
    Decode a band sequence read in the given direction only.

    Layouts:
        4 bands    -> [digit, digit, multiplier, tolerance]
        5 bands    -> [digit, digit, digit, multiplier, tolerance]
        6 bands    -> [digit, digit, digit, multiplier, ..., tolerance]

    The tolerance is read from the final band.

    Parameters
    ----------
    bands : list of str
        Band colors in reading order.

    Returns
    -------
    DecodeCandidate
        ``valid`` is False if any digit or the multiplier does not map.
        A valid candidate without tolerance has reason UNRESOLVABLE_TOLERANCE.
    """
    b = [normalize_color_name(c) for c in bands]
    layout = LAYOUTS.get(len(b))
    if layout is None:
        return DecodeCandidate(None, None, False, INSUFFICIENT_BANDS)

    n_digits, mult_idx = layout

    digits = [DIGITS.get(c) for c in b[:n_digits]]
    if any(d is None for d in digits):
        return DecodeCandidate(None, None, False, UNMAPPABLE_DIGIT)

    multiplier = MULTIPLIERS.get(b[mult_idx])
    if multiplier is None:
        return DecodeCandidate(None, None, False, UNMAPPABLE_MULTIPLIER)

    base = 0
    for d in digits:
        base = base * 10 + d
    ohms = apply_multiplier(base, multiplier)

    tolerance = TOLERANCES.get(b[-1])
    reason = None if tolerance is not None else UNRESOLVABLE_TOLERANCE
    return DecodeCandidate(ohms, tolerance, True, reason)


def decode_candidates(bands) -> Tuple[DecodeCandidate, DecodeCandidate]:
    """Decode the sequence as given and reversed, in that order."""
    seq = list(bands)
    return decode_sequence(seq), decode_sequence(seq[::-1])


def decode_bands(bands):
    """
    Decode a band sequence into ohms and tolerance.

    Both reading directions are tried. Among valid candidates one with a
    tolerance is preferred; otherwise the first valid one in the order
    [as given, reversed] is used.

    Parameters
    ----------
    bands : list of str or None
        Band colors, ideally in reading order.

    Returns
    -------
    ohms : int, float, or None
        Resistance in ohms, None if no direction decodes.
    tolerance : float or None
        Tolerance in percent, None if unresolved.
    """
    if not bands or len(bands) not in LAYOUTS:
        return None, None

    candidates = [c for c in decode_candidates(bands) if c.valid and c.ohms is not None]
    if not candidates:
        logger.debug("No valid decode for %s", list(bands))
        return None, None

    with_tolerance = [c for c in candidates if c.tolerance is not None]
    best = with_tolerance[0] if with_tolerance else candidates[0]
    return best.ohms, best.tolerance


def failure_reason(bands):
    """
    Reason code for a band sequence that decodes in neither direction.

    Returns
    -------
    str or None
        INSUFFICIENT_BANDS, UNMAPPABLE_DIGIT or UNMAPPABLE_MULTIPLIER (from
        the as-given direction), or None if some direction decodes.
    """
    if not bands or len(bands) not in LAYOUTS:
        return INSUFFICIENT_BANDS
    candidates = decode_candidates(bands)
    if any(c.valid for c in candidates):
        return None
    return candidates[0].reason


def _format_number(value):
    """Shortest text for a number, without a trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def format_ohms(ohms):
    """
    Format a resistance for display.

    The value is scaled, never rounded.

    Parameters
    ----------
    ohms : int or float
        Resistance in ohms.

    Returns
    -------
    text : str
        e.g. "4.7kΩ", "2.7MΩ", "10Ω".
    part_value : str
        Catalog form, e.g. "4.7K", "2.7M", "10R".
    """
    if ohms >= 1_000_000:
        v = _format_number(ohms / 1_000_000)
        return f"{v}MΩ", f"{v}M"
    if ohms >= 1_000:
        v = _format_number(ohms / 1_000)
        return f"{v}kΩ", f"{v}K"
    v = _format_number(ohms)
    return f"{v}Ω", f"{v}R"


def nearest_standard_value(ohms, series="E24"):
    """
    Nearest value of a standard resistor series, by log-ratio distance.

    Parameters
    ----------
    ohms : float
        Resistance in ohms, must be positive.
    series : str
        "E12" or "E24".

    Returns
    -------
    float
        Closest series value (0.1 ohm to 9.1 gigaohm range).

    Raises
    ------
    ValueError
        If ohms is not positive or the series is unknown.
    """
    if series not in E_SERIES:
        raise ValueError(f"series must be one of: {', '.join(E_SERIES)}.")
    if ohms <= 0:
        raise ValueError("ohms must be positive.")

    best_value = None
    best_dist = math.inf
    for exp in range(-1, 10):
        for base in E_SERIES[series]:
            candidate = round(base * 10 ** exp, 10)
            dist = abs(math.log(ohms / candidate))
            if dist < best_dist:
                best_dist = dist
                best_value = candidate
    return best_value


def is_standard_value(ohms, series="E24", rel_tol=1e-6):
    """True if ``ohms`` is a member of the given series."""
    if ohms is None or ohms <= 0:
        return False
    return math.isclose(nearest_standard_value(ohms, series), ohms, rel_tol=rel_tol)
