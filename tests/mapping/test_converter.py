"""Address converter behaviour against the packaged taxonomy.

Covers the fixed conversion scenarios, failure policies per operation, and
the pass-through of sequential and extension segments.
"""

import re

import pytest

from nna_taxonomy.mapping import AddressFormat

pytestmark = pytest.mark.unit

MFA_SHAPE = re.compile(r"^\d+\.\d{3}\.\d{3}\.\d+$")


class TestFormatAddress:
    """format_address: live-preview formatting with graceful defaults."""

    def test_mfa_uses_override(self, mapper):
        """S.POP.HPM resolves through the override registry."""
        assert mapper.format_address('S', 'POP', 'HPM', '001', 'mfa') == '2.001.007.001'

    def test_hfn_joins_alphabetic_input(self, mapper):
        assert mapper.format_address('S', 'POP', 'HPM', '001', 'hfn') == 'S.POP.HPM.001'

    def test_mfa_from_table(self, mapper):
        assert mapper.format_address('W', 'STG', 'FES', '001', 'mfa') == '5.002.003.001'

    def test_unknown_layer_uses_sentinel(self, mapper):
        """Unknown layer gives 0; category and subcategory fall back to 001."""
        assert mapper.format_address('X', 'POP', 'BAS', '001', 'mfa') == '0.001.001.001'

    def test_unknown_category_defaults(self, mapper):
        """Does not raise, returns a well-formed MFA with the default code."""
        result = mapper.format_address('S', 'INVALID', 'BAS', '001', 'mfa')
        assert MFA_SHAPE.match(result)
        assert result == '2.001.001.001'

    def test_unknown_subcategory_defaults(self, mapper):
        assert mapper.format_address('W', 'STG', 'NOPE', '007', 'mfa') == '5.002.001.007'

    def test_numeric_components_to_hfn(self, mapper):
        """Numeric category/subcategory are reverse-resolved for hfn output."""
        assert mapper.format_address('W', '002', '003', '001', 'hfn') == 'W.STG.FES.001'
        assert mapper.format_address('5', '002', '003', '001', 'hfn') == 'W.STG.FES.001'

    def test_numeric_components_to_mfa_are_padded(self, mapper):
        assert mapper.format_address('5', '2', '3', '001', 'mfa') == '5.002.003.001'

    def test_mixed_components_to_mfa(self, mapper):
        """Numeric category with alphabetic subcategory."""
        assert mapper.format_address('W', '002', 'FES', '001', 'mfa') == '5.002.003.001'

    def test_sequential_is_not_padded(self, mapper):
        assert mapper.format_address('S', 'POP', 'HPM', '42', 'mfa') == '2.001.007.42'

    def test_lowercase_lookup(self, mapper):
        assert mapper.format_address('s', 'pop', 'hpm', '001', 'mfa') == '2.001.007.001'

    @pytest.mark.parametrize("args", [
        ('', 'POP', 'HPM', '001'),
        ('S', '', 'HPM', '001'),
        ('S', 'POP', '', '001'),
        ('S', 'POP', 'HPM', ''),
        ('S', 'POP', 'HPM', '   '),
    ])
    def test_incomplete_input_returns_empty(self, mapper, args):
        assert mapper.format_address(*args, 'mfa') == ''
        assert mapper.format_address(*args, 'hfn') == ''

    def test_target_accepts_enum_and_any_case(self, mapper):
        assert mapper.format_address('S', 'POP', 'HPM', '001', AddressFormat.MFA) == '2.001.007.001'
        assert mapper.format_address('S', 'POP', 'HPM', '001', 'MFA') == '2.001.007.001'

    def test_unknown_target_raises(self, mapper):
        with pytest.raises(ValueError, match="Unknown address format"):
            mapper.format_address('S', 'POP', 'HPM', '001', 'xml')

    def test_none_component_raises(self, mapper):
        with pytest.raises(TypeError):
            mapper.format_address('S', None, 'HPM', '001', 'mfa')

    def test_unknown_code_logs_warning(self, mapper, caplog):
        with caplog.at_level("WARNING", logger="nna_taxonomy"):
            mapper.format_address('S', 'INVALID', 'BAS', '001', 'mfa')
        assert "INVALID" in caplog.text


class TestConvertHfnToMfa:
    """convert_hfn_to_mfa: strict conversion, input returned on failure."""

    def test_known_address(self, mapper):
        assert mapper.convert_hfn_to_mfa('S.POP.HPM.001') == '2.001.007.001'
        assert mapper.convert_hfn_to_mfa('W.STG.FES.001') == '5.002.003.001'

    def test_extension_passthrough(self, mapper):
        assert mapper.convert_hfn_to_mfa('G.POP.BAS.001.mp3') == '1.001.001.001.mp3'

    def test_multi_segment_extension_passthrough(self, mapper):
        assert mapper.convert_hfn_to_mfa('G.POP.BAS.001.final.mp3') == '1.001.001.001.final.mp3'

    def test_too_few_segments_unchanged(self, mapper):
        assert mapper.convert_hfn_to_mfa('invalid-format') == 'invalid-format'
        assert mapper.convert_hfn_to_mfa('S.POP.HPM') == 'S.POP.HPM'

    def test_three_segments_when_lenient(self, mapper):
        assert mapper.convert_hfn_to_mfa('S.POP.HPM', require_sequential=False) == '2.001.007'

    @pytest.mark.parametrize("hfn", [
        'Q.POP.BAS.001',      # unknown layer
        'S.NOPE.BAS.001',     # unknown category
        'S.POP.ZZZ.001',      # unknown subcategory
        'S..HPM.001',         # blank segment
    ])
    def test_unresolvable_unchanged(self, mapper, hfn):
        """Strict path never falls back to the default code."""
        assert mapper.convert_hfn_to_mfa(hfn) == hfn

    def test_unresolvable_logs_warning(self, mapper, caplog):
        with caplog.at_level("WARNING", logger="nna_taxonomy"):
            mapper.convert_hfn_to_mfa('S.MISSING.BAS.002')
        assert "Cannot convert" in caplog.text

    def test_empty_input(self, mapper):
        assert mapper.convert_hfn_to_mfa('') == ''

    def test_none_raises(self, mapper):
        with pytest.raises(TypeError):
            mapper.convert_hfn_to_mfa(None)

    def test_case_insensitive(self, mapper):
        assert mapper.convert_hfn_to_mfa('s.pop.hpm.001') == '2.001.007.001'


class TestConvertMfaToHfn:
    """convert_mfa_to_hfn: strict inverse."""

    def test_known_address(self, mapper):
        assert mapper.convert_mfa_to_hfn('2.001.007.001') == 'S.POP.HPM.001'
        assert mapper.convert_mfa_to_hfn('5.002.003.001') == 'W.STG.FES.001'

    def test_unpadded_codes_resolve(self, mapper):
        assert mapper.convert_mfa_to_hfn('5.2.3.001') == 'W.STG.FES.001'

    def test_extension_passthrough(self, mapper):
        assert mapper.convert_mfa_to_hfn('1.001.001.001.mp3') == 'G.POP.BAS.001.mp3'

    @pytest.mark.parametrize("mfa", [
        '0.001.001.001',      # sentinel is not a layer
        '11.001.001.001',     # no such layer
        '2.999.001.001',      # unknown category
        '2.001.999.001',      # unknown subcategory
        'S.POP.HPM.001',      # already an HFN
        '2.001.007',          # no sequential
        'garbage',
    ])
    def test_unresolvable_unchanged(self, mapper, mfa):
        assert mapper.convert_mfa_to_hfn(mfa) == mfa

    def test_empty_input(self, mapper):
        assert mapper.convert_mfa_to_hfn('') == ''


class TestNormalizeForDisplay:
    """normalize_for_display: per-segment normalization."""

    def test_numeric_category_resolved(self, mapper):
        assert mapper.normalize_for_display('W.002.FES.001', 'hfn') == 'W.STG.FES.001'

    def test_full_mfa_converted(self, mapper):
        assert mapper.normalize_for_display('2.001.007.001', 'hfn') == 'S.POP.HPM.001'

    def test_hfn_already_normalized(self, mapper):
        assert mapper.normalize_for_display('S.POP.HPM.001', 'hfn') == 'S.POP.HPM.001'

    def test_to_mfa(self, mapper):
        assert mapper.normalize_for_display('W.002.FES.001', 'mfa') == '5.002.003.001'
        assert mapper.normalize_for_display('S.POP.HPM.001.mp3', 'mfa') == '2.001.007.001.mp3'

    def test_three_segments(self, mapper):
        assert mapper.normalize_for_display('S.001.007', 'hfn') == 'S.POP.HPM'

    def test_unresolvable_segments_left_alone(self, mapper):
        assert mapper.normalize_for_display('2.999.007.001', 'hfn') == 'S.999.007.001'
        assert mapper.normalize_for_display('X.POP.BAS.001', 'mfa') == 'X.POP.BAS.001'

    def test_lowercase_hfn_takes_table_case(self, mapper):
        assert mapper.normalize_for_display('s.pop.hpm.001', 'hfn') == 'S.POP.HPM.001'
        assert mapper.normalize_for_display('w.002.fes.001', 'hfn') == 'W.STG.FES.001'

    def test_unknown_segments_keep_their_case(self, mapper):
        assert mapper.normalize_for_display('x.pop.bas.001', 'hfn') == 'x.pop.bas.001'
        assert mapper.normalize_for_display('s.pop.zzz.001', 'hfn') == 'S.POP.zzz.001'

    @pytest.mark.parametrize("address", ['', 'invalid', 'S.POP'])
    def test_unparseable_passthrough(self, mapper, address):
        assert mapper.normalize_for_display(address, 'hfn') == address

    @pytest.mark.parametrize("address", [
        'W.002.FES.001',
        '2.001.007.001',
        'S.POP.HPM.001.mp3',
        '2.999.007.001',
        'X.POP.BAS.001',
        's.pop.hpm.001',
        'x.pop.bas.001',
        '5.002.FES.009',
        'invalid',
        '',
    ])
    @pytest.mark.parametrize("target", ['hfn', 'mfa'])
    def test_idempotent(self, mapper, address, target):
        once = mapper.normalize_for_display(address, target)
        assert mapper.normalize_for_display(once, target) == once
