"""
Transforms Module - Image Normalization and Band Orientation
============================================================

Functions for bringing a resistor photograph to the canonical sampling
geometry, and for fixing the reading direction of a detected band sequence.
"""

import logging

import cv2
import numpy as np

from .color import is_metallic

logger = logging.getLogger(__name__)

CANONICAL_WIDTH = 320


def rotate_if_portrait(img_bgr):
    """
    Rotate image 90 degrees clockwise if it is taller than it is wide.

    Band sampling walks along columns, so the resistor body has to run
    left to right.

    Parameters
    ----------
    img_bgr : np.ndarray
        Input image.

    Returns
    -------
    rotated_img : np.ndarray
        Rotated image if condition met, otherwise original.
    rotated : bool
        True if image was rotated, False otherwise.

    Raises
    ------
    ValueError
        If input image is None.
    """
    if img_bgr is None:
        raise ValueError("img_bgr is None.")

    h, w = img_bgr.shape[:2]
    if h > w:
        return cv2.rotate(img_bgr, cv2.ROTATE_90_CLOCKWISE), True
    return img_bgr, False


def resize_to_width(img_bgr, width=CANONICAL_WIDTH):
    """
    Resize an image to a fixed width, keeping its aspect ratio.

    Parameters
    ----------
    img_bgr : np.ndarray
        Input image.
    width : int
        Target width in pixels.

    Returns
    -------
    np.ndarray
        Resized image (or original if already that width).
    """
    h, w = img_bgr.shape[:2]
    if w == width:
        return img_bgr
    new_h = max(1, int(round(h * width / float(w))))
    interpolation = cv2.INTER_AREA if width < w else cv2.INTER_LINEAR
    return cv2.resize(img_bgr, (width, new_h), interpolation=interpolation)


def normalize_contrast(img_bgr):
    """
    Stretch intensities so the darkest value maps to 0 and the brightest to 255.

    Flat images are returned unchanged.
    """
    lo = int(img_bgr.min())
    hi = int(img_bgr.max())
    if hi <= lo or (lo == 0 and hi == 255):
        return img_bgr
    return cv2.normalize(img_bgr, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)


def preprocess_image(img_bgr, width=CANONICAL_WIDTH, normalize=True, rotate_portrait=True):
    """
    Bring a decoded photograph to the canonical sampling geometry.

    Steps:
    1. Rotate portrait frames so the long edge is horizontal
    2. Resize the long edge to ``width``
    3. Optionally stretch contrast

    Parameters
    ----------
    img_bgr : np.ndarray
        Upright BGR image.
    width : int
        Canonical sampling width.
    normalize : bool
        Apply min-max contrast normalization.
    rotate_portrait : bool
        Rotate images taller than wide.

    Returns
    -------
    np.ndarray
        Preprocessed BGR image, ``width`` pixels wide.
    """
    if img_bgr is None:
        raise ValueError("img_bgr is None.")

    out = img_bgr
    if rotate_portrait:
        out, rotated = rotate_if_portrait(out)
        if rotated:
            logger.debug("Rotated portrait image %s", img_bgr.shape[:2])

    out = resize_to_width(out, width)
    if normalize:
        out = normalize_contrast(out)
    return out


def resolve_orientation(bands):
    """
    Put a band sequence in reading order (digits first, tolerance last).

    The tolerance band is conventionally gold or silver. If a sequence of at
    least 4 bands starts with a metallic band and does not end with one, it
    was photographed backwards and is reversed.

    Parameters
    ----------
    bands : list of str
        Band colors, left to right as detected.

    Returns
    -------
    list of str
        Band colors in reading order (a new list).
    """
    bands = list(bands)
    if len(bands) >= 4 and is_metallic(bands[0]) and not is_metallic(bands[-1]):
        logger.debug("Reversing band order %s", bands)
        return bands[::-1]
    return bands
