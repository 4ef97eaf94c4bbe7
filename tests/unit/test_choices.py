"""
TEST DOC: Choice Codec

WHAT: Tests for spreadsheet-style choice labels
WHY: Classification replies are decoded through these labels
HOW: Check known label sequences and the label <-> index round trip

CASES:
- A..Z then AA for 27 choices
- Round trip for every index of 1..100 choices
- Display text is one "LABEL. choice" line per choice

EDGE CASES:
- Labels never produced by the encoder decode to None
- Duplicate choices keep distinct labels
"""

import string

import pytest

from llm_primitives.choices import encode, index_to_label, label_to_index


class TestLabels:
    """Tests for index_to_label / label_to_index."""

    def test_first_and_last_single_letter(self):
        """Index 0 is A and index 25 is Z."""
        assert index_to_label(0) == "A"
        assert index_to_label(25) == "Z"

    def test_twenty_seven_choices(self):
        """27 labels are A..Z followed by AA."""
        labels = [index_to_label(i) for i in range(27)]
        assert labels == list(string.ascii_uppercase) + ["AA"]

    def test_two_letter_boundaries(self):
        """Labels roll over like spreadsheet columns."""
        assert index_to_label(27) == "AB"
        assert index_to_label(51) == "AZ"
        assert index_to_label(52) == "BA"
        assert index_to_label(701) == "ZZ"
        assert index_to_label(702) == "AAA"

    def test_inverse(self):
        """label_to_index inverts index_to_label."""
        for i in range(2000):
            assert label_to_index(index_to_label(i)) == i

    @pytest.mark.parametrize("label", ["", "a", "A1", "?", " A"])
    def test_unknown_labels(self, label):
        """Strings the encoder cannot produce have no index."""
        assert label_to_index(label) is None

    def test_negative_index_rejected(self):
        """Negative indices are a programming error."""
        with pytest.raises(ValueError):
            index_to_label(-1)


class TestEncode:
    """Tests for encode()."""

    def test_display_lines(self):
        """Each choice becomes a LABEL. choice line, in input order."""
        encoded = encode(["Positive", "Negative", "Neutral"])
        assert encoded.display == "A. Positive\nB. Negative\nC. Neutral"

    def test_round_trip_up_to_one_hundred(self):
        """decode(label_for(i)) == i for every valid index."""
        for count in range(1, 101):
            encoded = encode([f"choice {i}" for i in range(count)])
            for i in range(count):
                assert encoded.decode(encoded.label_for(i)) == i

    def test_unoffered_label(self):
        """A valid-looking label past the end is not in this call's table."""
        encoded = encode(["true", "false"])
        assert encoded.decode("C") is None
        assert encoded.decode("a") is None

    def test_duplicates_keep_positions(self):
        """Duplicate choices are not merged."""
        encoded = encode(["same", "same"])
        assert encoded.display == "A. same\nB. same"
        assert encoded.decode("B") == 1

    def test_label_for_out_of_range(self):
        """label_for only accepts indices of offered choices."""
        encoded = encode(["only"])
        with pytest.raises(IndexError):
            encoded.label_for(1)

    def test_empty(self):
        """No choices, no display, no labels."""
        encoded = encode([])
        assert encoded.display == ""
        assert encoded.decode("A") is None
