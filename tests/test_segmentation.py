"""
Band Segmentation Tests
"""

from resistor_lib.segmentation import (
    BACKGROUND,
    Segment,
    extract_bands,
    filter_band_segments,
    find_body_color,
    min_band_width,
    segment_columns,
)


class TestBodyColor:
    def test_most_frequent_color(self):
        assert find_body_color(["blue"] * 5 + ["red"] * 3) == "blue"

    def test_metallics_never_body(self):
        labels = ["gold"] * 10 + ["silver"] * 8 + ["brown"] * 2
        assert find_body_color(labels) == "brown"

    def test_unknown_ignored(self):
        assert find_body_color(["unknown"] * 10 + ["grey"]) == "grey"

    def test_no_candidate(self):
        assert find_body_color(["gold", "unknown"]) == "unknown"
        assert find_body_color([]) == "unknown"

    def test_tie_goes_to_first_seen(self):
        assert find_body_color(["red", "red", "blue", "blue"]) == "red"


class TestMinBandWidth:
    def test_four_percent(self):
        assert min_band_width(320) == 13   # 12.8
        assert min_band_width(250) == 10

    def test_rounds_half_up(self):
        assert min_band_width(90, fraction=0.05) == 5   # 4.5

    def test_floor(self):
        assert min_band_width(20) == 3
        assert min_band_width(0) == 3


class TestSegmentColumns:
    def test_runs(self):
        labels = ["blue", "blue", "red", "red", "red", "blue"]
        assert segment_columns(labels, "blue") == [
            Segment(BACKGROUND, 0, 1),
            Segment("red", 2, 4),
            Segment(BACKGROUND, 5, 5),
        ]

    def test_body_and_unknown_merge(self):
        labels = ["blue", "unknown", "blue", "gold", "gold"]
        segs = segment_columns(labels, "blue")
        assert segs == [Segment(BACKGROUND, 0, 2), Segment("gold", 3, 4)]

    def test_adjacent_bands_split_on_color_change(self):
        segs = segment_columns(["red", "red", "black", "black"], "blue")
        assert [s.color for s in segs] == ["red", "black"]
        assert segs[0].width == 2

    def test_covers_every_column(self, scenario_labels):
        segs = segment_columns(scenario_labels, "blue")
        assert segs[0].start == 0
        assert segs[-1].end == len(scenario_labels) - 1
        assert sum(s.width for s in segs) == len(scenario_labels)

    def test_empty(self):
        assert segment_columns([], "blue") == []


class TestFilterBandSegments:
    def test_drops_background_and_noise(self):
        segs = [
            Segment(BACKGROUND, 0, 9),
            Segment("red", 10, 11),
            Segment(BACKGROUND, 12, 20),
            Segment("brown", 21, 40),
        ]
        assert filter_band_segments(segs, 5) == [Segment("brown", 21, 40)]

    def test_noise_inside_band_is_merged(self):
        segs = [
            Segment("brown", 0, 18),
            Segment("red", 19, 20),
            Segment("brown", 21, 39),
        ]
        assert filter_band_segments(segs, 10) == [Segment("brown", 0, 39)]

    def test_background_keeps_equal_bands_apart(self):
        segs = [
            Segment("black", 0, 19),
            Segment(BACKGROUND, 20, 21),
            Segment("black", 22, 41),
        ]
        assert [s.color for s in filter_band_segments(segs, 10)] == ["black", "black"]


class TestExtractBands:
    def test_end_to_end_scenario(self, scenario_labels):
        bands, body, segs = extract_bands(scenario_labels)
        assert body == "blue"
        assert bands == ["brown", "black", "red", "gold"]
        assert [s.width for s in segs] == [40, 40, 40, 20]

    def test_body_color_never_in_bands(self, scenario_labels):
        bands, body, _ = extract_bands(scenario_labels)
        assert body not in bands

    def test_two_column_deviation_in_band(self):
        labels = ["blue"] * 100 + ["brown"] * 19 + ["red"] * 2 + ["brown"] * 19 + ["blue"] * 100
        bands, _, segs = extract_bands(labels)
        assert bands == ["brown"]
        assert segs[0].width == 40

    def test_two_column_deviation_in_body(self):
        labels = ["blue"] * 100 + ["red"] * 2 + ["blue"] * 100
        bands, _, _ = extract_bands(labels)
        assert bands == []

    def test_explicit_min_width(self):
        labels = ["blue"] * 20 + ["red"] * 4 + ["blue"] * 20
        assert extract_bands(labels, min_width=5)[0] == []
        assert extract_bands(labels, min_width=4)[0] == ["red"]

    def test_separated_equal_bands(self):
        labels = (["grey"] * 30 + ["brown"] * 15 + ["grey"] * 5 + ["black"] * 15
                  + ["grey"] * 5 + ["black"] * 15 + ["grey"] * 5 + ["gold"] * 15 + ["grey"] * 30)
        bands, body, _ = extract_bands(labels, min_width=10)
        assert body == "grey"
        assert bands == ["brown", "black", "black", "gold"]
