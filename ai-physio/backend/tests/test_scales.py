import pytest

from services.scales import PAIN_KEYWORD, RPE_KEYWORD, coerce_overall, extract_scale


@pytest.mark.parametrize(
    "raw, expected",
    [
        (4, 4),
        (6.5, 6.5),
        ({"overall": 3}, 3),
        ('{"overall": 7}', 7),
        ("2", 2),
        (None, None),
        ("", None),
        ({"overall": None}, None),
        ({"left": 3}, None),
        ("not json", None),
        (True, None),
        (11, None),
        (-1, None),
    ],
)
def test_coerce_overall(raw, expected):
    assert coerce_overall(raw) == expected


def test_coerce_overall_keeps_whole_numbers_as_int():
    assert type(coerce_overall('{"overall": 2}')) is int
    assert type(coerce_overall(4.0)) is int
    assert type(coerce_overall(6.5)) is float


def test_extract_rpe_by_keyword_and_pain_by_rating():
    text = "RPE 6, pain 2/10"
    assert extract_scale(text, RPE_KEYWORD) == 6
    assert extract_scale(text, PAIN_KEYWORD) == 2


def test_extract_returns_none_without_numbers():
    assert extract_scale("no numbers here", PAIN_KEYWORD) is None
    assert extract_scale("no numbers here", RPE_KEYWORD) is None


def test_extract_requires_the_keyword():
    assert extract_scale("felt like a 4/10 today", PAIN_KEYWORD) is None


def test_extract_accepts_spaced_rating_and_rating_before_keyword():
    assert extract_scale("pain was 3 /10", PAIN_KEYWORD) == 3
    assert extract_scale("a solid 7/10 rpe, pain 1/10", RPE_KEYWORD) == 7


def test_extract_rejects_out_of_range_values():
    assert extract_scale("pain 15", PAIN_KEYWORD) is None
    assert extract_scale("ache 12/10", PAIN_KEYWORD) is None


def test_extract_ache_counts_as_pain():
    assert extract_scale("dull ache 3", PAIN_KEYWORD) == 3
