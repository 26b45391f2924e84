"""
Color Module - HSV Conversion and Band Color Classification
===========================================================

Functions for converting pixels to HSV and classifying them against the
12 canonical resistor band colors.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
METALLIC_COLORS = frozenset({"gold", "silver"})
COLUMN_MODES = ("vote", "center", "mean")


class HSV(NamedTuple):
    """Hue in degrees [0, 360), saturation and value in [0, 1]."""
    h: float
    s: float
    v: float


@dataclass(frozen=True)
class CanonicalColor:
    """Reference color of one band."""
    name: str
    hsv: HSV


@dataclass(frozen=True)
class ClassifiedColumn:
    """Color label of one sampled column."""
    x: int
    color: str


# Declaration order is the tie-break order of classify_hsv
CANONICAL_COLORS: Tuple[CanonicalColor, ...] = (
    CanonicalColor("black", HSV(0, 0.0, 0.05)),
    CanonicalColor("brown", HSV(25, 0.7, 0.25)),
    CanonicalColor("red", HSV(0, 0.9, 0.7)),
    CanonicalColor("orange", HSV(30, 0.9, 0.9)),
    CanonicalColor("yellow", HSV(55, 0.9, 0.9)),
    CanonicalColor("green", HSV(120, 0.9, 0.7)),
    CanonicalColor("blue", HSV(210, 0.9, 0.7)),
    CanonicalColor("violet", HSV(275, 0.7, 0.6)),
    CanonicalColor("grey", HSV(0, 0.0, 0.6)),
    CanonicalColor("white", HSV(0, 0.0, 0.95)),
    # metallics approximated in HSV
    CanonicalColor("gold", HSV(45, 0.7, 0.8)),
    CanonicalColor("silver", HSV(0, 0.0, 0.8)),
)

CANONICAL_NAMES: Tuple[str, ...] = tuple(c.name for c in CANONICAL_COLORS)


def rgb_to_hsv(r, g, b):
    """
    Convert an 8-bit RGB triple to HSV.

    Parameters
    ----------
    r, g, b : int
        Channel values in [0, 255].

    Returns
    -------
    HSV
        Hue in degrees [0, 360), saturation and value in [0, 1].
    """
    r = float(r) / 255.0
    g = float(g) / 255.0
    b = float(b) / 255.0

    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min

    if delta == 0:
        h = 0.0
    elif c_max == r:
        h = ((g - b) / delta) % 6
    elif c_max == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4
    h *= 60.0
    if h < 0:
        h += 360.0

    s = 0.0 if c_max == 0 else delta / c_max
    return HSV(h, s, c_max)


def hue_distance(a, b):
    """Circular hue distance normalized to [0, 1]."""
    diff = abs(a - b) % 360
    return min(diff, 360 - diff) / 180.0


def hsv_distance(c1, c2):
    """Weighted HSV distance; hue counts twice as much as saturation/value."""
    dh = hue_distance(c1.h, c2.h)
    ds = c1.s - c2.s
    dv = c1.v - c2.v
    return math.sqrt(2 * dh * dh + ds * ds + dv * dv)


def classify_hsv(hsv, palette=CANONICAL_COLORS, max_distance=None):
    """
    Classify an HSV color as the nearest canonical band color.

    Parameters
    ----------
    hsv : HSV
        Color to classify.
    palette : sequence of CanonicalColor
        Reference colors; on equal distance the earlier entry wins.
    max_distance : float or None
        If set, colors farther than this from every reference are "unknown".

    Returns
    -------
    str
        Canonical color name, or "unknown".
    """
    best_name = UNKNOWN
    best_dist = math.inf

    for ref in palette:
        d = hsv_distance(hsv, ref.hsv)
        if d < best_dist:
            best_dist = d
            best_name = ref.name

    if max_distance is not None and best_dist > max_distance:
        return UNKNOWN
    return best_name


def classify_bgr(pixel, palette=CANONICAL_COLORS, max_distance=None):
    """Classify a single OpenCV (B, G, R) pixel."""
    b, g, r = (int(c) for c in pixel[:3])
    return classify_hsv(rgb_to_hsv(r, g, b), palette, max_distance)


def majority_label(labels):
    """
    Most frequent label, ignoring "unknown".

    Ties go to the label seen first. Returns "unknown" when nothing votes.
    """
    counts = Counter(label for label in labels if label and label != UNKNOWN)
    if not counts:
        return UNKNOWN
    return counts.most_common(1)[0][0]


def scan_rows(height, scan_lines=9, band=(0.3, 0.7)):
    """
    Row indices of the horizontal scan lines used for column sampling.

    Parameters
    ----------
    height : int
        Image height.
    scan_lines : int
        Number of rows to sample.
    band : tuple of float
        Vertical fraction (start, end) of the image to sample.

    Returns
    -------
    list of int
        Row indices, top to bottom, clamped to the image.
    """
    if scan_lines < 1:
        raise ValueError("scan_lines must be at least 1.")

    start, end = band
    if scan_lines == 1:
        fractions = [(start + end) / 2.0]
    else:
        fractions = [start + (end - start) * i / (scan_lines - 1) for i in range(scan_lines)]

    rows = []
    for f in fractions:
        y = int(math.floor(height * f + 0.5))
        rows.append(min(max(y, 0), height - 1))
    return rows


def classify_columns(
    img_bgr,
    scan_lines=9,
    band=(0.3, 0.7),
    mode="vote",
    palette=CANONICAL_COLORS,
    max_distance=None,
) -> List[ClassifiedColumn]:
    """
    Assign one canonical color label to every column of an image.

    Parameters
    ----------
    img_bgr : np.ndarray
        Preprocessed BGR image with the resistor body running left to right.
    scan_lines : int
        Number of horizontal rows to sample.
    band : tuple of float
        Vertical fraction (start, end) of the image holding the body.
    mode : str
        "vote": majority vote of per-row labels (robust to specular spots).
        "center": single pixel on the middle scan row.
        "mean": classify the mean color of the scan rows.
    palette : sequence of CanonicalColor
        Reference colors.
    max_distance : float or None
        Passed to classify_hsv.

    Returns
    -------
    list of ClassifiedColumn
        One entry per column, left to right.

    Raises
    ------
    ValueError
        If image is None or mode is invalid.
    """
    if img_bgr is None:
        raise ValueError("Input image is None.")
    if mode not in COLUMN_MODES:
        raise ValueError(f"mode must be one of: {', '.join(COLUMN_MODES)}.")

    height, width = img_bgr.shape[:2]

    if mode == "center":
        rows = scan_rows(height, 1, band)
    else:
        rows = scan_rows(height, scan_lines, band)

    samples = img_bgr[rows, :, :3].astype(np.int32)  # (rows, width, 3)

    columns = []
    for x in range(width):
        if mode == "vote":
            labels = [classify_bgr(samples[i, x], palette, max_distance) for i in range(len(rows))]
            color = majority_label(labels)
        elif mode == "mean":
            mean_px = np.rint(samples[:, x].mean(axis=0)).astype(np.int32)
            color = classify_bgr(mean_px, palette, max_distance)
        else:
            color = classify_bgr(samples[0, x], palette, max_distance)
        columns.append(ClassifiedColumn(x, color))

    logger.debug("Classified %d columns from rows %s (mode=%s)", width, rows, mode)
    return columns


def column_labels(columns: Sequence[ClassifiedColumn]) -> List[str]:
    """Plain label list of classified columns, in x order."""
    return [c.color for c in sorted(columns, key=lambda c: c.x)]


def is_metallic(color: Optional[str]) -> bool:
    return color in METALLIC_COLORS
