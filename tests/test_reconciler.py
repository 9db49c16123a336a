"""Unit tests for resolving report rows to roster members."""

from palms.reconciler import (
    MATCHED,
    SKIPPED,
    UNMATCHED,
    extract_member_name,
    find_member,
    resolve_row,
)


class TestExtractMemberName:
    """Tests for pulling the member name out of a row."""

    def test_first_and_last_columns(self):
        """Test first/last columns are trimmed and joined with one space."""
        row = {'First': '  Sajid ', 'Last': ' Hasan  ', 'P': '1'}
        assert extract_member_name(row) == 'Sajid Hasan'

    def test_first_name_only(self):
        """Test a missing last name leaves just the first name."""
        assert extract_member_name({'First Name': 'Sajid', 'Last Name': ''}) == 'Sajid'

    def test_name_column(self):
        """Test a single name column is used when there is no first/last pair."""
        assert extract_member_name({'Member Name': 'Vijay Gupta'}) == 'Vijay Gupta'
        assert extract_member_name({'Participant Name': 'Vijay Gupta'}) == 'Vijay Gupta'
        assert extract_member_name({'Name': 'Vijay Gupta'}) == 'Vijay Gupta'

    def test_header_case_is_ignored(self):
        """Test name headers are matched case-insensitively."""
        assert extract_member_name({'MEMBER NAME ': 'Vijay Gupta'}) == 'Vijay Gupta'
        assert extract_member_name({'FIRST': 'Vijay', 'LAST': 'Gupta'}) == 'Vijay Gupta'

    def test_first_last_beats_name_column(self):
        """Test the first/last pair takes priority over a name column."""
        row = {'Name': 'Someone Else', 'First': 'Sajid', 'Last': 'Hasan'}
        assert extract_member_name(row) == 'Sajid Hasan'

    def test_name_column_priority(self):
        """Test 'member name' wins over 'name' when both are filled."""
        row = {'Name': 'Chapter Delhi', 'Member Name': 'Vijay Gupta'}
        assert extract_member_name(row) == 'Vijay Gupta'

    def test_empty_name_column_falls_through(self):
        """Test an empty higher-priority column falls through to the next."""
        row = {'Member Name': '   ', 'Name': 'Vijay Gupta'}
        assert extract_member_name(row) == 'Vijay Gupta'

    def test_blank_row(self):
        """Test a row with no name yields an empty candidate."""
        assert extract_member_name({'First': '', 'Last': None, 'P': '3'}) == ''
        assert extract_member_name({}) == ''

    def test_custom_name_columns(self):
        """Test configured name column aliases."""
        row = {'Participant': 'Vijay Gupta'}
        assert extract_member_name(row) == ''
        assert extract_member_name(row, name_columns=['participant']) == 'Vijay Gupta'


class TestFindMember:
    """Tests for roster lookup."""

    def test_case_insensitive(self, roster):
        """Test member lookup ignores case and surrounding whitespace."""
        assert find_member(roster, '  sajid HASAN ') == ('teamA', 'Sajid Hasan')

    def test_searches_every_team(self, roster):
        """Test members on later teams are found."""
        assert find_member(roster, 'Abhinav Gupta') == ('teamC', 'Abhinav Gupta')

    def test_not_found(self, roster):
        """Test unknown and empty names return None."""
        assert find_member(roster, 'Nobody Here') is None
        assert find_member(roster, '') is None


class TestResolveRow:
    """Tests for full row resolution."""

    def test_matched(self, roster):
        """Test a row naming a roster member resolves to that member."""
        resolution = resolve_row({'First': 'vijay', 'Last': 'gupta', 'P': '2'}, roster)
        assert resolution.status == MATCHED
        assert resolution.team_key == 'teamB'
        assert resolution.member_name == 'Vijay Gupta'

    def test_skipped(self, roster):
        """Test a blank-name row is skipped."""
        resolution = resolve_row({'Name': '', 'P': '2'}, roster)
        assert resolution.status == SKIPPED
        assert resolution.team_key is None

    def test_unmatched(self, roster):
        """Test an unknown name is reported with its candidate."""
        resolution = resolve_row({'Name': 'Guest Speaker'}, roster)
        assert resolution.status == UNMATCHED
        assert resolution.candidate == 'Guest Speaker'
        assert resolution.member_name is None
