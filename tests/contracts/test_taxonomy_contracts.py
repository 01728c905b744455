"""Tests for taxonomy contracts.

Contracts are tested directly on (scope, code, numeric_code) entries,
without building a table.
"""

import pytest

pytestmark = pytest.mark.unit

from nna_taxonomy.contracts import (
    ContractViolation,
    FailurePolicy,
    assert_unique_codes,
    find_code_collisions,
    require,
)
from nna_taxonomy.contracts.invariants import FAILURE_POLICIES


class TestRequire:

    def test_passes_when_true(self):
        require(True, "never raised")

    def test_raises_contract_violation(self):
        with pytest.raises(ContractViolation, match="broken"):
            require(False, "broken")

    def test_contract_violation_is_runtime_error(self):
        assert issubclass(ContractViolation, RuntimeError)


class TestCodeCollisions:

    def test_clean_entries(self):
        entries = [("S", "POP", "001"), ("S", "RCK", "002"), ("S.POP", "BAS", "001")]
        assert find_code_collisions(entries) == []
        assert_unique_codes(entries)

    def test_numeric_collision(self):
        entries = [("S.POP", "DIV", "002"), ("S.POP", "HPM", "002")]
        assert find_code_collisions(entries) == ["Numeric code collision in S.POP: 002 used by DIV, HPM"]

    def test_duplicate_code(self):
        entries = [("W", "STG", "001"), ("W", "STG", "002")]
        assert find_code_collisions(entries) == ["Duplicate code in W: STG listed 2 times"]

    def test_same_codes_in_other_scopes(self):
        entries = [("S.POP", "BAS", "001"), ("S.RCK", "BAS", "001")]
        assert find_code_collisions(entries) == []

    def test_assert_raises_with_all_collisions(self):
        entries = [("S", "POP", "001"), ("S", "RCK", "001"), ("W", "STG", "001"), ("W", "STG", "002")]
        with pytest.raises(ContractViolation) as exc:
            assert_unique_codes(entries)
        message = str(exc.value)
        assert message.startswith("Taxonomy contract violated: ")
        assert "used by POP, RCK" in message
        assert "STG listed 2 times" in message


class TestFailurePolicy:

    def test_values(self):
        assert FailurePolicy("fail_fast") is FailurePolicy.FAIL_FAST
        assert FailurePolicy.WARN_ONLY == "warn_only"

    def test_documented_policies_cover_public_conversions(self):
        assert set(FAILURE_POLICIES) == {
            "format_address", "convert_hfn_to_mfa", "convert_mfa_to_hfn", "normalize_for_display",
        }
