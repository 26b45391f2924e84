"""
IO Module - Image Source Decoding
=================================

Functions for turning an uploaded or on-disk resistor photograph into an
upright BGR pixel buffer.
"""

import base64
import binascii
import io
import logging
import os

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp"]


class ImageError(ValueError):
    """The input could not be decoded into pixels."""


class InvalidEncoding(ImageError):
    """The bytes are not a readable image."""


class EmptyBuffer(ImageError):
    """The input holds no data at all."""


def data_url_to_bytes(data):
    """
    Decode a base64 payload, with or without a ``data:image/...;base64,`` prefix.

    Parameters
    ----------
    data : str
        Base64 text or data URL.

    Returns
    -------
    bytes
        Decoded payload.

    Raises
    ------
    EmptyBuffer
        If the payload is empty.
    InvalidEncoding
        If the payload is not valid base64.
    """
    comma = data.find(",")
    payload = data[comma + 1:] if comma >= 0 else data
    payload = "".join(payload.split())
    if not payload:
        raise EmptyBuffer("Base64 image payload is empty.")

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"Image payload is not valid base64: {e}") from e


def decode_image_bytes(buffer):
    """
    Decode encoded image bytes into an upright BGR array.

    EXIF orientation is applied so the pixel grid matches what the camera
    user saw.

    Parameters
    ----------
    buffer : bytes
        Encoded image (JPEG, PNG, ...).

    Returns
    -------
    np.ndarray
        BGR image, dtype uint8.

    Raises
    ------
    EmptyBuffer
        If ``buffer`` is empty.
    InvalidEncoding
        If the bytes cannot be decoded.
    """
    if not buffer:
        raise EmptyBuffer("Image buffer is empty.")

    try:
        with Image.open(io.BytesIO(buffer)) as pil_img:
            upright = ImageOps.exif_transpose(pil_img)
            rgb = np.asarray(upright.convert("RGB"))
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise InvalidEncoding(f"Could not decode image: {e}") from e

    if rgb.size == 0:
        raise EmptyBuffer("Decoded image has no pixels.")

    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def load_image(source):
    """
    Load a resistor photograph from any supported source.

    Parameters
    ----------
    source : bytes, str, or np.ndarray
        - bytes: encoded image
        - str: path to an image file, or base64 text / data URL
        - np.ndarray: already decoded BGR (or grayscale) image

    Returns
    -------
    np.ndarray
        BGR image, dtype uint8.

    Raises
    ------
    ImageError
        If the source holds no decodable pixels.
    FileNotFoundError
        If a path-looking string does not exist.
    TypeError
        If ``source`` has an unsupported type.
    """
    if isinstance(source, np.ndarray):
        if source.size == 0:
            raise EmptyBuffer("Image array is empty.")
        img = source
        if img.ndim == 2:
            img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)
        elif img.ndim == 3 and img.shape[2] == 4:
            img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
        elif img.ndim != 3 or img.shape[2] != 3:
            raise InvalidEncoding(f"Unsupported image array shape: {source.shape}")
        if img.dtype != np.uint8:
            img = np.clip(img, 0, 255).astype(np.uint8)
        return img

    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_image_bytes(bytes(source))

    if isinstance(source, str):
        if not source.strip():
            raise EmptyBuffer("Image source string is empty.")

        if source.startswith("data:"):
            return decode_image_bytes(data_url_to_bytes(source))

        if os.path.isfile(source):
            logger.debug("Reading image file %s", source)
            with open(source, "rb") as f:
                return decode_image_bytes(f.read())

        # '.' never appears in base64, so an extension means a missing file
        extension = os.path.splitext(source)[1].lower()
        if extension in IMAGE_EXTENSIONS:
            raise FileNotFoundError(f"File does not exist: {source}")

        return decode_image_bytes(data_url_to_bytes(source))

    raise TypeError("Parameter 'source' must be bytes, str, or np.ndarray.")
