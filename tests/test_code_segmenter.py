"""Tests for splitting concatenated scans."""

from code_segmenter import segment_codes


class TestSegmentCodes:
    def test_concatenated_labels_are_split_in_order(self):
        assert segment_codes("FZ-AAA-FZ-BBB") == ["FZ-AAA", "FZ-BBB"]

    def test_single_code_with_marker(self):
        assert segment_codes("FZ-AAA") == ["FZ-AAA"]

    def test_code_without_marker(self):
        assert segment_codes("XYZ123") == ["XYZ123"]

    def test_input_is_trimmed(self):
        assert segment_codes("  XYZ123 \n") == ["XYZ123"]

    def test_empty_input(self):
        assert segment_codes("") == []
        assert segment_codes("   ") == []

    def test_duplicates_removed_preserving_order(self):
        assert segment_codes("FZ-AAAFZ-BBBFZ-AAA") == ["FZ-AAA", "FZ-BBB"]

    def test_leading_remainder_too_short_is_dropped(self):
        assert segment_codes("xxFZ-AAAFZ-BBB") == ["FZ-AAA", "FZ-BBB"]

    def test_three_labels(self):
        assert segment_codes("FZ-1FZ-2FZ-3") == ["FZ-1", "FZ-2", "FZ-3"]

    def test_identical_repeat_falls_back_to_whole_string(self):
        # One distinct piece is not a split: the whole input goes through
        assert segment_codes("FZ-A FZ-A") == ["FZ-A FZ-A"]

    def test_custom_marker(self):
        assert segment_codes("AB-1AB-2", marker="AB-") == ["AB-1", "AB-2"]
