from slingo.systems.prize_table import PRIZE_TIERS, achieved_prizes


def test_no_prize_without_lines():
    assert achieved_prizes(0) == []


def test_prizes_accumulate_by_line_count():
    assert achieved_prizes(3) == ["1 Slingo", "2 Slingos", "3 Slingos"]


def test_eleven_lines_does_not_reach_top_tier():
    assert 11 not in PRIZE_TIERS
    assert achieved_prizes(11)[-1] == "10 Slingos"
    assert achieved_prizes(12)[-1] == "12 Slingos"


def test_full_house_lights_top_tier():
    assert achieved_prizes(12, full_house=True).count("12 Slingos") == 1
    assert achieved_prizes(2, full_house=True)[-1] == "12 Slingos"
