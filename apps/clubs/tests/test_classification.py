import pytest
from apps.clubs.services import (
    ClubCategory,
    classify_club_type,
    format_iron_name,
    get_iron_number,
    iron_club_type,
    is_hybrid,
    is_iron,
    is_wedge,
    is_wood,
    normalize_club_type,
)


CLUB_TYPE_SAMPLES = [
    None,
    '',
    '   ',
    'driver',
    'Driver',
    'putter',
    '7-iron',
    '7iron',
    ' 7 Iron ',
    '1-iron',
    '10-iron',
    'pw',
    'Pitching Wedge',
    'sand-wedge',
    'LW',
    '3-wood',
    '5 wood',
    '2-wood',
    '4-hybrid',
    '3hybrid',
    'chipper',
    'üñíçødé',
]


# =============================================================================
# Classifier Tests
# =============================================================================

class TestClassifyClubType:
    """Tests for classify_club_type."""

    @pytest.mark.parametrize('club_type', CLUB_TYPE_SAMPLES)
    def test_every_input_gets_exactly_one_category(self, club_type):
        classification = classify_club_type(club_type)

        assert classification.category in ClubCategory.values

    @pytest.mark.parametrize('club_type', CLUB_TYPE_SAMPLES)
    def test_classification_is_stable_under_normalization(self, club_type):
        assert classify_club_type(normalize_club_type(club_type)) == classify_club_type(club_type)

    @pytest.mark.parametrize('club_type,expected', [
        ('driver', ClubCategory.DRIVER),
        ('Putter', ClubCategory.PUTTER),
        ('7-iron', ClubCategory.IRON),
        ('4iron', ClubCategory.IRON),
        ('pw', ClubCategory.WEDGE),
        ('Gap Wedge', ClubCategory.WEDGE),
        ('aw', ClubCategory.WEDGE),
        ('3-wood', ClubCategory.WOOD),
        ('7wood', ClubCategory.WOOD),
        ('4-hybrid', ClubCategory.HYBRID),
        ('1-iron', ClubCategory.UNKNOWN),
        ('2-wood', ClubCategory.UNKNOWN),
        ('chipper', ClubCategory.UNKNOWN),
        ('', ClubCategory.UNKNOWN),
        (None, ClubCategory.UNKNOWN),
    ])
    def test_category(self, club_type, expected):
        assert classify_club_type(club_type).category == expected

    def test_pitching_wedge_has_iron_rank(self):
        classification = classify_club_type('Pitching Wedge')

        assert classification.category == ClubCategory.WEDGE
        assert classification.normalized == 'pitching-wedge'
        assert classification.rank == 10


class TestTypePredicates:
    """Tests for is_iron / is_wedge / is_wood / is_hybrid."""

    def test_predicates(self):
        assert is_iron('9-Iron')
        assert not is_iron('pw')
        assert is_wedge('Sand Wedge')
        assert not is_wedge('7-iron')
        assert is_wood('5 wood')
        assert not is_wood('driver')
        assert is_hybrid('3-hybrid')
        assert not is_hybrid('3-wood')

    def test_predicates_handle_empty_values(self):
        for predicate in (is_iron, is_wedge, is_wood, is_hybrid):
            assert predicate(None) is False
            assert predicate('') is False


class TestIronNumbers:
    """Tests for iron rank helpers."""

    @pytest.mark.parametrize('club_type,expected', [
        ('5-iron', 5),
        ('9iron', 9),
        ('PW', 10),
        ('pitching-wedge', 10),
        ('sw', None),
        ('driver', None),
        (None, None),
    ])
    def test_get_iron_number(self, club_type, expected):
        assert get_iron_number(club_type) == expected

    def test_format_iron_name(self):
        assert format_iron_name(5) == '5'
        assert format_iron_name(10) == 'PW'

    def test_iron_club_type(self):
        assert iron_club_type(4) == '4-iron'
        assert iron_club_type(10) == 'pw'

    def test_normalize_club_type(self):
        assert normalize_club_type('  Sand   Wedge ') == 'sand-wedge'
        assert normalize_club_type(None) == ''
