"""Unit tests for member scoring."""

import pytest

from palms.models import Member, MemberStats
from palms.scoring import score_member, tyfcb_units
from palms.validators import validate_member_score


class TestMemberScoring:
    """Tests for the per-member point table."""

    def test_worked_example(self):
        """Test the reference stat line scores 120 points."""
        stats = MemberStats(present=4, rgi=3, rgo=2, visitors=1, one_to_ones=2, tyfcb=1)
        score = score_member(stats)
        assert score.attendance == 40
        assert score.referrals == 35  # 5*3 + 10*2
        assert score.visitors == 15
        assert score.one_to_ones == 20
        assert score.tyfcb == 10
        assert score.ceu == 0
        assert score.total == 120

    def test_zero_stats(self):
        """Test a member with no activity scores zero with an empty breakdown."""
        score = score_member(MemberStats())
        assert score.total == 0
        assert score.breakdown == {}

    def test_attendance_penalties(self):
        """Test absences and generic lates cost 5 points each."""
        score = score_member(MemberStats(absent=2, late=1))
        assert score.attendance == -15
        assert score.breakdown == {'absent': -10, 'late': -5}

    def test_substitute_and_medical(self):
        """Test substitutes earn 5 and medical absences are neutral."""
        score = score_member(MemberStats(substitute=1, medical=3))
        assert score.attendance == 5
        assert 'medical' not in score.breakdown

    def test_late_arrival_bands(self):
        """Test on-time, mildly late and significantly late bands."""
        score = score_member(MemberStats(on_time=2, late_mild=1, late_significant=1))
        assert score.attendance == 20  # 20 + 5 - 5
        assert score.category('late') == 0  # +5 mild, -5 significant

    def test_received_referrals_not_scored(self):
        """Test referrals received earn no points."""
        score = score_member(MemberStats(rri=4, rro=2))
        assert score.referrals == 0
        assert score.total == 0

    def test_ceu(self):
        """Test CEUs earn 5 points each."""
        assert score_member(MemberStats(ceu=2)).ceu == 10

    def test_tyfcb_unit(self):
        """Test TYFCB points count whole units of the configured amount."""
        stats = MemberStats(tyfcb=2500.0)
        assert score_member(stats, tyfcb_unit=1000).tyfcb == 20
        assert tyfcb_units(999.0, 1000) == 0

    def test_tyfcb_units_ignore_float_noise(self):
        """Test amounts a hair under a whole unit still count that unit."""
        assert tyfcb_units(0.7 + 0.2 + 0.1) == 1
        assert tyfcb_units(0.3, 0.1) == 3
        assert tyfcb_units(0.99) == 0

    def test_tyfcb_unit_must_be_positive(self):
        """Test a non-positive TYFCB unit is rejected."""
        with pytest.raises(ValueError):
            tyfcb_units(10.0, 0)

    def test_accepts_member(self):
        """Test score_member works on a Member as well as bare stats."""
        member = Member(name='Vijay Gupta', stats=MemberStats(visitors=2))
        assert score_member(member).total == 30

    def test_pure_and_repeatable(self):
        """Test scoring twice gives identical results and leaves stats alone."""
        stats = MemberStats(present=3, absent=1, rgo=1, tyfcb=2.0)
        before = stats.as_dict()
        assert score_member(stats) == score_member(stats)
        assert stats.as_dict() == before

    def test_doubling_counters_doubles_total(self):
        """Test the weight table is linear in the counters."""
        single = MemberStats(present=4, absent=1, late=1, rgi=3, rgo=2, visitors=1, one_to_ones=2, tyfcb=1, ceu=1)
        double = MemberStats(**{k: v * 2 for k, v in single.as_dict().items()})
        assert score_member(double).total == 2 * score_member(single).total

    def test_categories(self):
        """Test category lookup, including total, and unknown names."""
        score = score_member(MemberStats(present=1, visitors=1))
        assert score.category('attendance') == 10
        assert score.category('visitors') == 15
        assert score.category('total') == 25
        with pytest.raises(ValueError):
            score.category('bogus')

    def test_breakdown_sums_to_total(self):
        """Test the breakdown is consistent with the total."""
        score = score_member(MemberStats(present=4, absent=1, rgi=2, one_to_ones=3, ceu=1))
        assert validate_member_score('Sajid Hasan', score) == []
