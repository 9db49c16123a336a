"""Point scoring for a member's accumulated counters."""

import math

from .constants import CURRENCY_DECIMALS, POINT_WEIGHTS, SCORE_CATEGORIES, TYFCB
from .models import Member, MemberScore, MemberStats


def tyfcb_units(amount: float, unit: float = 1.0) -> int:
    """
    Whole TYFCB scoring units in a recorded amount.

    The amount is taken to the cent and the quotient is rounded before
    flooring, so 0.3 of a 0.1 unit counts as 3 units, not 2.
    """
    if unit <= 0:
        raise ValueError(f'TYFCB unit must be positive, got {unit}')
    quotient = round(amount, CURRENCY_DECIMALS) / unit
    return int(math.floor(round(quotient, 9)))


def score_member(member: Member | MemberStats, tyfcb_unit: float = 1.0) -> MemberScore:
    """
    Score a member from their accumulated counters.

    Scoring:
        Attendance:
            - Present: 10 points each
            - Substitute: 5 points each
            - Absent: -5 points each
            - Late: -5 points each
            - Medical: 0 points
            - On time arrival: 10 points each
            - Mildly late arrival: 5 points each
            - Significantly late arrival: -5 points each
        Referrals:
            - Given inside: 5 points each
            - Given outside: 10 points each
        - Visitors: 15 points each
        - One-to-ones: 10 points each
        - TYFCB: 10 points per unit (``tyfcb_unit`` of recorded amount)
        - CEU: 5 points each

    Pure function: the member is not modified.

    Args:
        member: Member (or bare MemberStats) to score
        tyfcb_unit: Amount of TYFCB that counts as one unit

    Returns:
        MemberScore with category subtotals and a per-metric breakdown
    """
    stats = member.stats if isinstance(member, Member) else member
    result = MemberScore()

    for category, keys in SCORE_CATEGORIES.items():
        subtotal = 0
        for key in keys:
            count = stats.get(key)
            if key == TYFCB:
                count = tyfcb_units(count, tyfcb_unit)
            pts = POINT_WEIGHTS[key] * count
            if pts:
                result.breakdown[key] = pts
            subtotal += pts
        setattr(result, category, subtotal)

    return result
