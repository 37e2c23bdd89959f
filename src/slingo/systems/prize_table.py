from typing import Dict, List

# Completed-line counts that carry a prize; 11 has no tier.
PRIZE_TIERS: Dict[int, str] = {
    1: "1 Slingo",
    2: "2 Slingos",
    3: "3 Slingos",
    4: "4 Slingos",
    5: "5 Slingos",
    6: "6 Slingos",
    7: "7 Slingos",
    8: "8 Slingos",
    9: "9 Slingos",
    10: "10 Slingos",
    12: "12 Slingos",
}


def achieved_prizes(slingo_count: int, full_house: bool = False) -> List[str]:
    """Prize tiers reached so far; a full house always lights the top tier."""
    achieved = [name for count, name in PRIZE_TIERS.items() if count <= slingo_count]
    top = PRIZE_TIERS[max(PRIZE_TIERS)]
    if full_house and top not in achieved:
        achieved.append(top)
    return achieved
