"""
Display Module - Visualization and Annotation
=============================================

Functions for displaying images and drawing detected bands and readings.
"""

import cv2
import matplotlib.pyplot as plt

from .decoding import format_ohms
from .segmentation import BACKGROUND

# Swatch per band color (BGR)
BAND_SWATCHES = {
    "black":  (0, 0, 0),
    "brown":  (19, 69, 139),
    "red":    (20, 20, 220),
    "orange": (0, 140, 255),
    "yellow": (0, 220, 255),
    "green":  (0, 160, 0),
    "blue":   (200, 80, 0),
    "violet": (211, 0, 148),
    "grey":   (160, 160, 160),
    "white":  (255, 255, 255),
    "gold":   (55, 175, 212),
    "silver": (192, 192, 192),
}
BACKGROUND_COLOR = (90, 90, 90)
NOISE_COLOR = (255, 0, 255)   # magenta
TEXT_COLOR = (255, 255, 255)


def show_image(img, title="Image", cmap_type=None):
    """
    Display an image correctly in Jupyter notebooks.
    Automatically handles BGR to RGB conversion for color images.

    Parameters
    ----------
    img : np.ndarray
        Image to display (BGR or grayscale).
    title : str
        Title for the plot.
    cmap_type : str or None
        Colormap type for matplotlib (only used for grayscale).
    """
    plt.figure(figsize=(6, 6))

    if len(img.shape) == 3:
        plt.imshow(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))
    else:
        plt.imshow(img, cmap=cmap_type or "gray")

    plt.title(title)
    plt.axis("off")
    plt.show()


def draw_band_segments(image, detection, strip_height=24):
    """
    Draw the segmentation result as a strip under the sampled image.

    Background runs are grey, kept bands use their swatch color with the
    band index, and dropped noise runs are magenta.

    Parameters
    ----------
    image : np.ndarray
        Preprocessed BGR image the columns were sampled from.
    detection : BandDetection
        Output of pipeline.detect_bands.
    strip_height : int
        Height of the strip in pixels.

    Returns
    -------
    np.ndarray
        Image with the strip appended at the bottom, same width.
    """
    h = image.shape[0]
    vis = cv2.copyMakeBorder(
        image, 0, strip_height, 0, 0,
        borderType=cv2.BORDER_CONSTANT,
        value=BACKGROUND_COLOR,
    )
    font = cv2.FONT_HERSHEY_SIMPLEX

    kept = [(s.start, s.end) for s in detection.band_segments]

    for seg in detection.segments:
        if seg.color == BACKGROUND:
            continue
        inside_band = any(start <= seg.start and seg.end <= end for start, end in kept)
        color = BAND_SWATCHES.get(seg.color, TEXT_COLOR) if inside_band else NOISE_COLOR
        cv2.rectangle(vis, (seg.start, h), (seg.end, h + strip_height - 1), color, thickness=-1)

    # Left-to-right index of each band
    for i, seg in enumerate(detection.band_segments):
        cv2.putText(
            vis,
            str(i),
            (seg.start + 1, h + strip_height - 6),
            font,
            0.4,
            NOISE_COLOR,
            1,
            cv2.LINE_AA,
        )

    return vis


def annotate_reading(img_bgr, reading, font_scale=0.5):
    """
    Annotate an image with a resistor reading in a top info box.

    Parameters
    ----------
    img_bgr : np.ndarray
        Input BGR image.
    reading : ResistorReading
        Reading to display.
    font_scale : float
        OpenCV font scale.

    Returns
    -------
    np.ndarray
        Annotated copy of the image.
    """
    out = img_bgr.copy()
    font = cv2.FONT_HERSHEY_SIMPLEX

    if reading.decoded:
        text, _ = format_ohms(reading.value_ohms)
        if reading.tolerance_percent is not None:
            text = f"{text} +/-{reading.tolerance_percent}%"
    else:
        text = "UNDECODED"
    # Hershey fonts have no omega glyph
    text = text.replace("Ω", " ohm")

    lines = [text, "-".join(reading.bands) or "no bands"]

    (tw, th), baseline = cv2.getTextSize(max(lines, key=len), font, font_scale, 1)
    box_h = (th + baseline + 4) * len(lines) + 4
    cv2.rectangle(out, (0, 0), (min(out.shape[1] - 1, tw + 8), box_h), (0, 0, 0), thickness=-1)

    y = th + 4
    for line in lines:
        cv2.putText(out, line, (4, y), font, font_scale, TEXT_COLOR, 1, cv2.LINE_AA)
        y += th + baseline + 4

    return out
