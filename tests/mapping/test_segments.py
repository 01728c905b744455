"""Tagged segment parsing."""

import pytest

from nna_taxonomy.mapping import SegmentKind, classify, join_address, split_address

pytestmark = pytest.mark.unit


class TestClassify:

    @pytest.mark.parametrize("value", ["001", "7", "0042"])
    def test_digits_are_numeric(self, value):
        assert classify(value).kind is SegmentKind.NUMERIC

    @pytest.mark.parametrize("value", ["POP", "A1", "1A", "", "-1", "1.0", "٣"])
    def test_everything_else_is_alphabetic(self, value):
        assert classify(value).kind is SegmentKind.ALPHABETIC

    def test_value_is_stripped(self):
        assert classify(" 002 ").value == "002"


class TestSplitAddress:

    def test_four_segments(self):
        parts = split_address("S.POP.HPM.001")
        assert parts.layer.value == "S"
        assert parts.subcategory.value == "HPM"
        assert parts.sequential == "001"
        assert parts.extension == ()
        assert parts.all_alphabetic

    def test_extension_kept_verbatim(self):
        parts = split_address("1.001.001.001.final.MP3")
        assert parts.extension == ("final", "MP3")
        assert parts.all_numeric

    def test_mixed_form(self):
        parts = split_address("W.002.FES.001")
        assert not parts.all_numeric
        assert not parts.all_alphabetic
        assert parts.category.is_numeric

    def test_too_few_segments(self):
        assert split_address("S.POP.HPM") is None
        assert split_address("S.POP.HPM", min_segments=3).sequential is None
        assert split_address("S.POP", min_segments=3) is None

    def test_blank_taxonomy_segment(self):
        assert split_address("S..HPM.001") is None

    def test_join_is_inverse(self):
        for address in ["S.POP.HPM.001", "S.POP.HPM", "2.001.007.001.mp3"]:
            parts = split_address(address, min_segments=3)
            assert join_address(parts.layer.value, parts.category.value, parts.subcategory.value,
                                parts.sequential, parts.extension) == address
