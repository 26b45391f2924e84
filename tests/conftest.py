import cv2
import numpy as np
import pytest

# Pixel values (BGR) that sit on top of their canonical HSV references
BGR = {
    "body": (179, 98, 18),    # blue, h=210 s=0.9 v=0.7
    "brown": (19, 38, 64),
    "black": (0, 0, 0),
    "red": (18, 18, 179),
    "gold": (61, 168, 204),
    "white": (255, 255, 255),
}

# 40 body, brown 40, black 40, red 40, gold 20, body to the end
BAND_LAYOUT = [("body", 40), ("brown", 40), ("black", 40), ("red", 40), ("gold", 20)]


def draw_resistor(layout=BAND_LAYOUT, width=320, height=100, scale=1):
    """
    Synthetic resistor photograph: white margins above and below a body
    stripe painted column by column from ``layout``; the remaining columns
    are body colored.
    """
    w, h = width * scale, height * scale
    img = np.full((h, w, 3), 255, dtype=np.uint8)
    top, bottom = int(h * 0.2), int(h * 0.8)

    img[top:bottom, :] = BGR["body"]
    x = 0
    for name, cols in layout:
        img[top:bottom, x:x + cols * scale] = BGR[name]
        x += cols * scale
    return img


@pytest.fixture
def make_resistor():
    return draw_resistor


@pytest.fixture
def resistor_image():
    """320x100 brown-black-red-gold resistor on a blue body."""
    return draw_resistor(BAND_LAYOUT)


@pytest.fixture
def resistor_png(resistor_image):
    ok, buf = cv2.imencode(".png", resistor_image)
    assert ok
    return buf.tobytes()


@pytest.fixture
def blank_body_image():
    return draw_resistor([])


@pytest.fixture
def scenario_labels():
    """Per-column labels of the 320-column brown-black-red-gold scenario."""
    labels = ["blue"] * 40 + ["brown"] * 40 + ["black"] * 40 + ["red"] * 40 + ["gold"] * 20
    return labels + ["blue"] * (320 - len(labels))
