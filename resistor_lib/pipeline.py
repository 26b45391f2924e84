"""
Pipeline Module - High-Level Orchestration
==========================================

High-level functions that combine all processing steps into a complete
resistor reading, and merge that reading into an upstream identification.
"""

import copy
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .color import ClassifiedColumn, classify_columns, column_labels
from .config import get_section
from .decoding import LAYOUTS, decode_bands, format_ohms
from .io import load_image
from .segmentation import (
    Segment,
    filter_band_segments,
    find_body_color,
    min_band_width,
    segment_columns,
)
from .transforms import preprocess_image, resolve_orientation

logger = logging.getLogger(__name__)


@dataclass
class ResistorReading:
    """Decoded bands of one resistor photograph."""
    bands: List[str] = field(default_factory=list)
    band_count: Optional[int] = None
    value_ohms: Optional[float] = None
    tolerance_percent: Optional[float] = None

    @property
    def decoded(self):
        return self.value_ohms is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def describe(self):
        """One-line summary, e.g. 'brown-black-red-gold = 1kΩ ±5%'."""
        names = "-".join(self.bands) if self.bands else "no bands"
        if not self.decoded:
            return f"{names} = undecoded"
        text, _ = format_ohms(self.value_ohms)
        if self.tolerance_percent is not None:
            text = f"{text} ±{self.tolerance_percent}%"
        return f"{names} = {text}"


@dataclass
class BandDetection:
    """Container for the intermediate results of one band detection."""
    # Preprocessed image the columns were sampled from
    image: np.ndarray

    columns: List[ClassifiedColumn]
    segments: List[Segment]
    body_color: str
    min_width: int
    band_segments: List[Segment]

    # Reading order
    bands: List[str]
    orientation_reversed: bool


def reading_from_bands(bands) -> ResistorReading:
    """
    Decode an ordered band sequence into a ResistorReading.

    Sequences of other than 4, 5 or 6 bands keep their bands but get no
    band count and no value.
    """
    bands = list(bands)
    if len(bands) not in LAYOUTS:
        return ResistorReading(bands=bands)

    ohms, tolerance = decode_bands(bands)
    return ResistorReading(
        bands=bands,
        band_count=len(bands),
        value_ohms=ohms,
        tolerance_percent=tolerance,
    )


def detect_bands(image, config=None, debug=False) -> BandDetection:
    """
    Detect the color bands of an axial resistor photograph.

    This function performs:
    1. Decoding and EXIF orientation
    2. Portrait rotation, resize to the canonical width, contrast stretch
    3. Per-column color classification
    4. Body color detection and segmentation
    5. Noise filtering
    6. Reading direction fix

    Parameters
    ----------
    image : bytes, str, or np.ndarray
        Image source accepted by io.load_image.
    config : dict or None
        Configuration (see config.DEFAULT_CONFIG); defaults when None.
    debug : bool
        If True, display intermediate images.

    Returns
    -------
    BandDetection
        Container with all intermediate results.

    Raises
    ------
    ImageError
        If the image cannot be decoded.
    """
    pre_cfg = get_section(config, "preprocess")
    smp_cfg = get_section(config, "sampling")
    cls_cfg = get_section(config, "classifier")
    seg_cfg = get_section(config, "segmentation")

    # 1) Decode
    img = load_image(image)

    # 2) Canonical geometry
    pre = preprocess_image(
        img,
        width=pre_cfg["width"],
        normalize=pre_cfg["normalize"],
        rotate_portrait=pre_cfg["rotate_portrait"],
    )

    # 3) Classify columns
    columns = classify_columns(
        pre,
        scan_lines=smp_cfg["scan_lines"],
        band=(smp_cfg["band_start"], smp_cfg["band_end"]),
        mode=smp_cfg["mode"],
        max_distance=cls_cfg["max_distance"],
    )
    labels = column_labels(columns)

    # 4) Segment
    body_color = find_body_color(labels)
    segments = segment_columns(labels, body_color)

    # 5) Filter noise
    min_width = min_band_width(len(labels), seg_cfg["min_band_fraction"], seg_cfg["min_band_floor"])
    band_segments = filter_band_segments(segments, min_width)
    detected = [s.color for s in band_segments]

    # 6) Reading direction
    bands = resolve_orientation(detected)
    reversed_ = bands != detected

    logger.debug("Body %s, bands %s (reversed=%s)", body_color, bands, reversed_)

    detection = BandDetection(
        image=pre,
        columns=columns,
        segments=segments,
        body_color=body_color,
        min_width=min_width,
        band_segments=band_segments,
        bands=bands,
        orientation_reversed=reversed_,
    )

    if debug:
        from .display import draw_band_segments, show_image
        show_image(img, "Original")
        show_image(draw_band_segments(pre, detection), "Band segments")

    return detection


def read_resistor(image, config=None, debug=False) -> ResistorReading:
    """
    Read the value of an axial resistor from a photograph.

    Parameters
    ----------
    image : bytes, str, or np.ndarray
        Image source accepted by io.load_image.
    config : dict or None
        Configuration; defaults when None.
    debug : bool
        If True, display intermediate images.

    Returns
    -------
    ResistorReading
        Bands in reading order; value and tolerance are None when the bands
        do not decode.

    Raises
    ------
    ImageError
        If the image cannot be decoded.
    """
    detection = detect_bands(image, config=config, debug=debug)
    reading = reading_from_bands(detection.bands)

    if debug:
        from .display import annotate_reading, show_image
        show_image(annotate_reading(detection.image, reading), "Reading")

    logger.info("Resistor reading: %s", reading.describe())
    return reading


def read_resistor_from_columns(labels, min_width=None) -> ResistorReading:
    """
    Run segmentation, orientation and decoding over in-memory column labels.

    Parameters
    ----------
    labels : list of str or list of ClassifiedColumn
        One color label per sampled column, left to right.
    min_width : int or None
        Minimum band width; derived from the column count when None.

    Returns
    -------
    ResistorReading
    """
    labels = list(labels)
    if labels and isinstance(labels[0], ClassifiedColumn):
        labels = column_labels(labels)

    body_color = find_body_color(labels)
    if min_width is None:
        min_width = min_band_width(len(labels))
    band_segments = filter_band_segments(segment_columns(labels, body_color), min_width)

    bands = resolve_orientation([s.color for s in band_segments])
    return reading_from_bands(bands)


def merge_reading(component, reading):
    """
    Merge a reading into an upstream vision identification record.

    The reading takes precedence when it decoded a value. Otherwise the
    upstream estimate is kept and flagged as unverified.

    Parameters
    ----------
    component : dict
        Identification with a "resistor" section (``is_resistor``,
        ``is_color_band_resistor``, ``bands``, ``band_count``,
        ``value_ohms``, ``tolerance_percent``) and an optional
        "electrical" section (``nominal_value``, ``tolerance_percent``).
    reading : ResistorReading
        Deterministic reading of the same image.

    Returns
    -------
    dict
        Updated copy of ``component``; the input is not modified.
    """
    merged = copy.deepcopy(component)
    resistor = merged.get("resistor") or {}
    if not (resistor.get("is_resistor") and resistor.get("is_color_band_resistor")):
        return merged

    if reading is None or not reading.decoded:
        resistor["value_verified"] = False
        merged["resistor"] = resistor
        return merged

    electrical = merged.setdefault("electrical", {})

    resistor["bands"] = list(reading.bands)
    resistor["band_count"] = reading.band_count
    resistor["value_ohms"] = reading.value_ohms
    electrical["nominal_value"] = reading.value_ohms
    if reading.tolerance_percent is not None:
        resistor["tolerance_percent"] = reading.tolerance_percent
        electrical["tolerance_percent"] = reading.tolerance_percent
    resistor["value_verified"] = True

    merged["resistor"] = resistor
    return merged
