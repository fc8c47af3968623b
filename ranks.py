from typing import List, Optional, Tuple

UNRATED = "unrated"
UNRATED_COLOR = "#000000"

# (exclusive upper bound, rank name, display color); the last tier is open-ended
RATING_TIERS: List[Tuple[Optional[int], str, str]] = [
    (1200, "newbie", "#808080"),
    (1400, "pupil", "#008000"),
    (1600, "specialist", "#03A89E"),
    (1900, "expert", "#0000FF"),
    (2100, "candidate master", "#AA00AA"),
    (2300, "master", "#FF8C00"),
    (2400, "international master", "#FF8C00"),
    (2600, "grandmaster", "#FF0000"),
    (3000, "international grandmaster", "#FF0000"),
    (None, "legendary grandmaster", "#AA0000"),
]


def _tier(rating: Optional[int]) -> Tuple[str, str]:
    if not rating:
        return UNRATED, UNRATED_COLOR
    for upper, name, color in RATING_TIERS[:-1]:
        if rating < upper:
            return name, color
    return RATING_TIERS[-1][1], RATING_TIERS[-1][2]

def get_rank_from_rating(rating: Optional[int]) -> str:
    return _tier(rating)[0]

def get_rating_color(rating: Optional[int]) -> str:
    return _tier(rating)[1]
