"""
Segmentation Module - Band Segmentation from Column Labels
==========================================================

Functions for collapsing a row of per-column color labels into runs, finding
the resistor body color, and keeping only the runs that are real bands.
"""

import logging
import math
from dataclasses import dataclass
from typing import List

from .color import METALLIC_COLORS, UNKNOWN

logger = logging.getLogger(__name__)

# Color used for merged body/unknown runs
BACKGROUND = "body"


@dataclass(frozen=True)
class Segment:
    """Contiguous run of like-classified columns; bounds are inclusive."""
    color: str
    start: int
    end: int

    @property
    def width(self):
        return self.end - self.start + 1


def find_body_color(labels):
    """
    Find the resistor body color.

    The body is the most frequent non-metallic label; resistor bodies are
    never gold or silver. Ties go to the label seen first.

    Parameters
    ----------
    labels : list of str
        Per-column color labels.

    Returns
    -------
    str
        Body color name, or "unknown" if no candidate exists.
    """
    freq = {}
    for c in labels:
        if not c or c == UNKNOWN or c in METALLIC_COLORS:
            continue
        freq[c] = freq.get(c, 0) + 1

    if not freq:
        return UNKNOWN

    body = max(freq, key=freq.get)
    logger.debug("Body color %s (%d of %d columns)", body, freq[body], len(labels))
    return body


def min_band_width(width, fraction=0.04, floor=3):
    """
    Minimum width in columns for a run to count as a band.

    Parameters
    ----------
    width : int
        Sampled image width.
    fraction : float
        Fraction of the width.
    floor : int
        Absolute minimum.

    Returns
    -------
    int
        max(floor, round(width * fraction)), rounding halves up.
    """
    return max(int(floor), int(math.floor(width * fraction + 0.5)))


def _is_body_like(color, body_color):
    return not color or color == UNKNOWN or color == body_color


def segment_columns(labels, body_color) -> List[Segment]:
    """
    Split a label sequence into segments, left to right.

    Consecutive body-like columns (body color or unknown) form one
    background segment whatever their exact label. Consecutive identical
    non-body columns form one band candidate.

    Parameters
    ----------
    labels : list of str
        Per-column color labels.
    body_color : str
        Body color from find_body_color.

    Returns
    -------
    list of Segment
        Segments covering every column; background segments use the color
        "body".
    """
    if not labels:
        return []

    def seg_color(c):
        return BACKGROUND if _is_body_like(c, body_color) else c

    segments = []
    current = seg_color(labels[0])
    start_x = 0

    for x in range(1, len(labels)):
        c = seg_color(labels[x])
        if c == current:
            continue
        segments.append(Segment(current, start_x, x - 1))
        current = c
        start_x = x
    segments.append(Segment(current, start_x, len(labels) - 1))

    return segments


def filter_band_segments(segments, min_width) -> List[Segment]:
    """
    Keep the segments that are real bands.

    Background segments are dropped, as are band candidates narrower than
    ``min_width``. A dropped noise run does not separate its neighbors: two
    same-colored runs with only noise between them merge into one band.
    Background runs always separate bands, however narrow.

    Parameters
    ----------
    segments : list of Segment
        Output of segment_columns.
    min_width : int
        Minimum band width in columns.

    Returns
    -------
    list of Segment
        Band segments, left to right.
    """
    kept = []
    for seg in segments:
        if seg.color != BACKGROUND and seg.width < min_width:
            logger.debug("Dropping noise segment %s [%d-%d]", seg.color, seg.start, seg.end)
            continue
        if kept and kept[-1].color == seg.color:
            kept[-1] = Segment(seg.color, kept[-1].start, seg.end)
        else:
            kept.append(seg)

    return [seg for seg in kept if seg.color != BACKGROUND]


def extract_bands(labels, min_width=None, fraction=0.04, floor=3):
    """
    Ordered band colors of a per-column label sequence.

    Parameters
    ----------
    labels : list of str
        Per-column color labels, left to right.
    min_width : int or None
        Minimum band width; derived from the label count when None.
    fraction, floor
        Passed to min_band_width when ``min_width`` is None.

    Returns
    -------
    bands : list of str
        Band colors, left to right. Empty or one entry when nothing usable
        was found.
    body_color : str
        Detected body color.
    band_segments : list of Segment
        The surviving band segments.
    """
    body_color = find_body_color(labels)
    if min_width is None:
        min_width = min_band_width(len(labels), fraction, floor)

    segments = segment_columns(labels, body_color)
    band_segments = filter_band_segments(segments, min_width)
    bands = [s.color for s in band_segments]

    if len(bands) < 2:
        logger.debug("Band sequence too short: %s", bands)
    return bands, body_color, band_segments
