"""Metric keys, header aliases and point weights for PALMS scoring."""

# Metric keys (identical to the MemberStats field names)
PRESENT = 'present'
ABSENT = 'absent'
LATE = 'late'
MEDICAL = 'medical'
SUBSTITUTE = 'substitute'
ON_TIME = 'on_time'
LATE_MILD = 'late_mild'
LATE_SIGNIFICANT = 'late_significant'
RGI = 'rgi'
RGO = 'rgo'
RRI = 'rri'
RRO = 'rro'
VISITORS = 'visitors'
ONE_TO_ONES = 'one_to_ones'
TYFCB = 'tyfcb'
CEU = 'ceu'
INDUCTIONS = 'inductions'

METRIC_KEYS = [
    PRESENT, ABSENT, LATE, MEDICAL, SUBSTITUTE,
    ON_TIME, LATE_MILD, LATE_SIGNIFICANT,
    RGI, RGO, RRI, RRO,
    VISITORS, ONE_TO_ONES, TYFCB, CEU, INDUCTIONS,
]

# Metrics stored as currency rather than whole counts
CURRENCY_METRICS = {TYFCB}

# Currency amounts are kept to whole cents
CURRENCY_DECIMALS = 2

# Ordered header alias table: first matching rule wins.
# Single-character aliases only match on exact equality.
# Late-arrival bands must come before the generic late rule.
HEADER_ALIASES = [
    (ON_TIME, ('on time', 'on-time', 'ontime')),
    (LATE_MILD, ('late (mild)', 'mildly late', 'slightly late')),
    (LATE_SIGNIFICANT, ('late (significant)', 'significantly late', 'very late')),
    (PRESENT, ('present', 'p')),
    (ABSENT, ('absent', 'a')),
    (MEDICAL, ('medical', 'm')),
    (SUBSTITUTE, ('substitute', 'substitution', 's')),
    (LATE, ('late', 'l')),
    (RGI, ('rgi', 'referrals given inside', 'referral given inside', 'ref given in')),
    (RGO, ('rgo', 'referrals given outside', 'referral given outside', 'ref given out')),
    (RRI, ('rri', 'referrals received inside', 'referral received inside', 'ref received in')),
    (RRO, ('rro', 'referrals received outside', 'referral received outside', 'ref received out')),
    (VISITORS, ('visitor', 'v')),
    (ONE_TO_ONES, ('1-2-1', '121', '1-to-1', 'one to one', 'one-to-one', 'one2one')),
    (TYFCB, ('tyfcb', 'thank you', 'closed business')),
    (CEU, ('ceu', 'education')),
    (INDUCTIONS, ('induction', 'i')),
]

# Canonical display label per metric (each label normalizes back to its key)
HEADER_DISPLAY = {
    PRESENT: 'Present',
    ABSENT: 'Absent',
    LATE: 'Late',
    MEDICAL: 'Medical',
    SUBSTITUTE: 'Substitute',
    ON_TIME: 'On Time',
    LATE_MILD: 'Late (Mild)',
    LATE_SIGNIFICANT: 'Late (Significant)',
    RGI: 'RGI',
    RGO: 'RGO',
    RRI: 'RRI',
    RRO: 'RRO',
    VISITORS: 'Visitors',
    ONE_TO_ONES: '1-2-1',
    TYFCB: 'TYFCB',
    CEU: 'CEU',
    INDUCTIONS: 'Inductions',
}

# Points per occurrence (TYFCB: per recorded unit)
POINT_WEIGHTS = {
    PRESENT: 10,
    SUBSTITUTE: 5,
    ABSENT: -5,
    LATE: -5,
    MEDICAL: 0,
    ON_TIME: 10,
    LATE_MILD: 5,
    LATE_SIGNIFICANT: -5,
    RGI: 5,
    RGO: 10,
    VISITORS: 15,
    ONE_TO_ONES: 10,
    TYFCB: 10,
    CEU: 5,
}

# Score categories and the metrics feeding each one
SCORE_CATEGORIES = {
    'attendance': (PRESENT, SUBSTITUTE, ABSENT, LATE, MEDICAL, ON_TIME, LATE_MILD, LATE_SIGNIFICANT),
    'referrals': (RGI, RGO),
    'visitors': (VISITORS,),
    'one_to_ones': (ONE_TO_ONES,),
    'tyfcb': (TYFCB,),
    'ceu': (CEU,),
}

# Raw counter(s) reported next to each leaderboard category
CATEGORY_COUNTS = {
    'total': (),
    'attendance': (PRESENT,),
    'late': (LATE, LATE_MILD, LATE_SIGNIFICANT),
    'referrals': (RGI, RGO),
    'visitors': (VISITORS,),
    'one_to_ones': (ONE_TO_ONES,),
    'tyfcb': (TYFCB,),
    'ceu': (CEU,),
}

LEADERBOARD_CATEGORIES = list(CATEGORY_COUNTS)

# Name column aliases (compared lower-cased and trimmed)
FIRST_NAME_COLUMNS = ('first', 'first name', 'firstname')
LAST_NAME_COLUMNS = ('last', 'last name', 'lastname', 'surname')
NAME_COLUMNS = ('member name', 'participant name', 'name', 'member')

# Strings stripped before numeric coercion
CURRENCY_MARKERS = ('₹', '$', '€', '£', 'rs.', 'rs', 'inr')

DEFAULT_TEAMS = [
    ('teamA', 'Team A'),
    ('teamB', 'Team B'),
    ('teamC', 'Team C'),
]
