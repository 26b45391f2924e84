"""
Resistor Band Recognition Library
=================================

A library for reading the color bands of axial resistors from photographs
and decoding them into a resistance and tolerance.

Modules:
    - io: Image decoding from bytes, base64, files and arrays
    - transforms: Canonical resizing and band reading direction
    - color: RGB to HSV conversion and canonical color classification
    - segmentation: Band segmentation from per-column color labels
    - decoding: Band colors to ohms and tolerance
    - pipeline: High-level orchestration and result merging
    - display: Visualization and annotation functions
    - config: JSON configuration management
    - cli: Command-line entry point
"""

# IO functions
from .io import (
    load_image,
    decode_image_bytes,
    data_url_to_bytes,
    ImageError,
    InvalidEncoding,
    EmptyBuffer,
)

# Transform functions
from .transforms import (
    preprocess_image,
    resize_to_width,
    rotate_if_portrait,
    normalize_contrast,
    resolve_orientation,
    CANONICAL_WIDTH,
)

# Color processing functions
from .color import (
    rgb_to_hsv,
    hue_distance,
    hsv_distance,
    classify_hsv,
    classify_columns,
    HSV,
    CanonicalColor,
    ClassifiedColumn,
    CANONICAL_COLORS,
)

# Segmentation functions
from .segmentation import (
    find_body_color,
    min_band_width,
    segment_columns,
    filter_band_segments,
    extract_bands,
    Segment,
)

# Decoding functions
from .decoding import (
    decode_sequence,
    decode_candidates,
    decode_bands,
    failure_reason,
    format_ohms,
    nearest_standard_value,
    is_standard_value,
    DecodeCandidate,
    DIGITS,
    MULTIPLIERS,
    TOLERANCES,
    REASON_MESSAGES,
)

# Pipeline functions
from .pipeline import (
    detect_bands,
    read_resistor,
    read_resistor_from_columns,
    reading_from_bands,
    merge_reading,
    ResistorReading,
    BandDetection,
)

# Config functions
from .config import load_config, save_config, merge_config, DEFAULT_CONFIG

__version__ = "1.0.0"
__all__ = [
    # IO
    "load_image",
    "decode_image_bytes",
    "data_url_to_bytes",
    "ImageError",
    "InvalidEncoding",
    "EmptyBuffer",
    # Transforms
    "preprocess_image",
    "resize_to_width",
    "rotate_if_portrait",
    "normalize_contrast",
    "resolve_orientation",
    "CANONICAL_WIDTH",
    # Color
    "rgb_to_hsv",
    "hue_distance",
    "hsv_distance",
    "classify_hsv",
    "classify_columns",
    "HSV",
    "CanonicalColor",
    "ClassifiedColumn",
    "CANONICAL_COLORS",
    # Segmentation
    "find_body_color",
    "min_band_width",
    "segment_columns",
    "filter_band_segments",
    "extract_bands",
    "Segment",
    # Decoding
    "decode_sequence",
    "decode_candidates",
    "decode_bands",
    "failure_reason",
    "format_ohms",
    "nearest_standard_value",
    "is_standard_value",
    "DecodeCandidate",
    "DIGITS",
    "MULTIPLIERS",
    "TOLERANCES",
    "REASON_MESSAGES",
    # Pipeline
    "detect_bands",
    "read_resistor",
    "read_resistor_from_columns",
    "reading_from_bands",
    "merge_reading",
    "ResistorReading",
    "BandDetection",
    # Config
    "load_config",
    "save_config",
    "merge_config",
    "DEFAULT_CONFIG",
]
