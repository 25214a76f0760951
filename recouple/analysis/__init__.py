from recouple.analysis.draft import (
    derive_seed,
    generate_all_rounds,
    generate_daily_rounds,
    roll_rarity,
    seeded_rng,
    seeded_shuffle,
)
from recouple.analysis.optimal import calculate_optimal
from recouple.analysis.scoring import (
    calculate_score,
    cell_bonuses,
    get_neighbors,
    is_valid_placement,
    score_cell,
)

__all__ = [
    "calculate_optimal",
    "calculate_score",
    "cell_bonuses",
    "derive_seed",
    "generate_all_rounds",
    "generate_daily_rounds",
    "get_neighbors",
    "is_valid_placement",
    "roll_rarity",
    "score_cell",
    "seeded_rng",
    "seeded_shuffle",
]
