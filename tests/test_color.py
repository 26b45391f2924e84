"""
Color Conversion and Classification Tests
"""

import numpy as np
import pytest

from resistor_lib.color import (
    CANONICAL_COLORS,
    CANONICAL_NAMES,
    HSV,
    CanonicalColor,
    classify_columns,
    classify_hsv,
    column_labels,
    hsv_distance,
    hue_distance,
    majority_label,
    rgb_to_hsv,
    scan_rows,
)


class TestRgbToHsv:
    """RGB -> HSV reference values"""

    @pytest.mark.parametrize(
        "rgb, expected",
        [
            ((255, 0, 0), (0.0, 1.0, 1.0)),
            ((0, 255, 0), (120.0, 1.0, 1.0)),
            ((0, 0, 255), (240.0, 1.0, 1.0)),
            ((255, 255, 0), (60.0, 1.0, 1.0)),
            ((255, 0, 255), (300.0, 1.0, 1.0)),
            ((255, 255, 255), (0.0, 0.0, 1.0)),
        ],
    )
    def test_primary_colors(self, rgb, expected):
        np.testing.assert_allclose(tuple(rgb_to_hsv(*rgb)), expected, atol=1e-9)

    def test_black_has_zero_saturation(self):
        """max == 0 must not divide by zero"""
        assert rgb_to_hsv(0, 0, 0) == HSV(0.0, 0.0, 0.0)

    def test_grey(self):
        h, s, v = rgb_to_hsv(128, 128, 128)
        assert h == 0.0
        assert s == 0.0
        assert abs(v - 128 / 255) < 1e-9

    def test_hue_stays_in_range(self):
        # red max with blue > green gives a negative sector before wrapping
        h, _, _ = rgb_to_hsv(255, 0, 10)
        assert 0 <= h < 360
        assert h > 350

    def test_accepts_numpy_uint8(self):
        px = np.array([204, 168, 61], dtype=np.uint8)
        h, s, v = rgb_to_hsv(*px)
        assert abs(h - 45) < 0.5
        assert abs(s - 0.7) < 0.01
        assert abs(v - 0.8) < 0.01


class TestDistances:
    def test_hue_distance_wraps(self):
        assert hue_distance(350, 10) == pytest.approx(20 / 180)
        assert hue_distance(10, 350) == pytest.approx(20 / 180)

    def test_hue_distance_opposite(self):
        assert hue_distance(0, 180) == pytest.approx(1.0)

    def test_hue_weighted_twice(self):
        base = HSV(0, 0.5, 0.5)
        hue_only = hsv_distance(base, HSV(18, 0.5, 0.5))   # dh = 0.1
        sat_only = hsv_distance(base, HSV(0, 0.6, 0.5))    # ds = 0.1
        assert hue_only == pytest.approx(np.sqrt(2) * sat_only)

    def test_zero_distance_to_self(self):
        for ref in CANONICAL_COLORS:
            assert hsv_distance(ref.hsv, ref.hsv) == 0


class TestClassifyHsv:
    def test_palette_has_twelve_colors(self):
        assert CANONICAL_NAMES == (
            "black", "brown", "red", "orange", "yellow", "green",
            "blue", "violet", "grey", "white", "gold", "silver",
        )

    def test_reference_colors_classify_as_themselves(self):
        for ref in CANONICAL_COLORS:
            assert classify_hsv(ref.hsv) == ref.name

    def test_deterministic(self):
        hsv = HSV(33.3, 0.81, 0.77)
        first = classify_hsv(hsv)
        assert all(classify_hsv(hsv) == first for _ in range(100))

    def test_tie_goes_to_first_declared(self):
        palette = (
            CanonicalColor("first", HSV(10, 0.5, 0.5)),
            CanonicalColor("second", HSV(10, 0.5, 0.5)),
        )
        assert classify_hsv(HSV(10, 0.5, 0.5), palette) == "first"

    def test_max_distance_yields_unknown(self):
        assert classify_hsv(HSV(300, 1.0, 1.0), max_distance=0.1) == "unknown"
        assert classify_hsv(HSV(300, 1.0, 1.0)) != "unknown"

    def test_dark_pixel_is_black(self):
        assert classify_hsv(rgb_to_hsv(5, 5, 5)) == "black"


class TestMajorityLabel:
    def test_most_frequent(self):
        assert majority_label(["red", "brown", "red"]) == "red"

    def test_tie_goes_to_first_seen(self):
        assert majority_label(["brown", "red", "red", "brown"]) == "brown"

    def test_unknown_does_not_vote(self):
        assert majority_label(["unknown", "unknown", "gold"]) == "gold"
        assert majority_label(["unknown"]) == "unknown"


class TestClassifyColumns:
    def test_scan_rows(self):
        assert scan_rows(100, 9) == [30, 35, 40, 45, 50, 55, 60, 65, 70]
        assert scan_rows(100, 1) == [50]

    def test_scan_rows_rejects_zero(self):
        with pytest.raises(ValueError):
            scan_rows(100, 0)

    @pytest.mark.parametrize("mode", ["vote", "center", "mean"])
    def test_one_label_per_column(self, resistor_image, mode):
        columns = classify_columns(resistor_image, mode=mode)
        assert len(columns) == 320
        assert [c.x for c in columns] == list(range(320))

        labels = column_labels(columns)
        assert labels[10] == "blue"
        assert labels[60] == "brown"
        assert labels[100] == "black"
        assert labels[140] == "red"
        assert labels[170] == "gold"
        assert labels[300] == "blue"

    def test_vote_ignores_specular_spots(self, resistor_image):
        img = resistor_image.copy()
        img[30, 60] = (255, 255, 255)
        img[35, 60] = (255, 255, 255)
        columns = classify_columns(img, mode="vote")
        assert columns[60].color == "brown"

    def test_invalid_mode(self, resistor_image):
        with pytest.raises(ValueError):
            classify_columns(resistor_image, mode="median")

    def test_none_image(self):
        with pytest.raises(ValueError):
            classify_columns(None)
