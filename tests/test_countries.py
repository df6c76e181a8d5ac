"""
Unit tests for logspec/countries.py
Run: pytest tests/test_countries.py -v
"""
from logspec.countries import OUTSIDE_EU, load_denylist, parse_countries
from logspec.regions import EU_COUNTRIES


class TestLiteralCodes:
    """Code lists in the delimiter styles found in the matrix"""

    def test_pipe_list(self):
        assert parse_countries("GB|CH|NO") == {"GB", "CH", "NO"}

    def test_pipe_list_with_outer_pipes(self):
        assert parse_countries("|GB|CH|NO|") == {"GB", "CH", "NO"}

    def test_slash_list(self):
        assert parse_countries("BA/MK/RS") == {"BA", "MK", "RS"}

    def test_free_text(self):
        """Codes are picked out of surrounding text; mixed-case words are not"""
        assert parse_countries("Only US and CA, see notes") == {"US", "CA"}

    def test_three_letter_codes(self):
        assert parse_countries("USA|CAN") == {"USA", "CAN"}

    def test_longer_runs_ignored(self):
        """A run of 4+ uppercase letters is not a code"""
        assert parse_countries("EXPORT GB") == {"GB"}

    def test_lowercase_ignored(self):
        assert parse_countries("gb|fr") == frozenset()


class TestRegionPhrases:
    """'Within EU' and 'Outside of EU'"""

    def test_within_expands(self):
        """Within EU materializes every bloc code"""
        assert parse_countries("Within EU") == EU_COUNTRIES

    def test_outside_is_sentinel(self):
        """Outside of EU is a sentinel, not a code list; 'EU' is not a code"""
        assert parse_countries("Outside of EU") == {OUTSIDE_EU}

    def test_mixed_entry(self):
        """Literal codes and a region phrase combine"""
        result = parse_countries("GB, plus Outside of EU shipments")
        assert result == {"GB", OUTSIDE_EU}

    def test_literal_plus_within_unions(self):
        """GB is kept alongside the bloc expansion"""
        result = parse_countries("GB, Within EU")
        assert "GB" in result
        assert EU_COUNTRIES <= result


class TestDenyList:
    """Tokens shaped like codes that are not codes"""

    def test_nc_dropped(self):
        assert "NC" not in parse_countries("NC Import Only")
        assert parse_countries("NC Import Only") == frozenset()

    def test_builtin_tokens(self):
        assert parse_countries("EA|XY|FR") == {"FR"}

    def test_custom_denylist(self):
        """Caller-supplied deny-list replaces the default"""
        assert parse_countries("FR|DE", denylist={"DE"}) == {"FR"}

    def test_csv_extends_builtin(self, tmp_path):
        """CSV tokens are added to the built-in set"""
        path = tmp_path / "deny.csv"
        path.write_text("token,notes\nzz,test token\n", encoding="utf-8")
        tokens = load_denylist(path)
        assert "ZZ" in tokens
        assert {"EA", "XY", "NC"} <= tokens

    def test_missing_csv(self, tmp_path):
        assert load_denylist(tmp_path / "missing.csv") == {"EA", "XY", "NC"}


class TestEmpty:
    """Empty cells are legal and give no codes"""

    def test_empty(self):
        assert parse_countries("") == frozenset()

    def test_whitespace(self):
        assert parse_countries("   \t ") == frozenset()

    def test_none(self):
        assert parse_countries(None) == frozenset()
