"""
Board scoring.

Computes the full point breakdown for a board under an explicit
BoardConfig. Every call is a pure function of its arguments: the board is
never modified and the breakdown is rebuilt from scratch each time.

Per cell:
- slot points: requirement met on a non-wildcard slot
- rarity points: by tier (optionally only on a valid placement)
- connection points: one relation per occupied neighbour

Connections are attributed to both endpoints, so an edge worth N points
adds 2N to the board total.
"""

from dataclasses import dataclass

from recouple.models.board import Board, BoardConfig, RuleSet
from recouple.models.contestant import DraftCard
from recouple.models.failure import FailureKind, KnownError
from recouple.models.score import CellScore, Connection, ConnectionKind, ScoreBreakdown


class BoardShapeError(KnownError):
    """Raised when a board does not have one entry per configured slot."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            kind=FailureKind.BOARD_SHAPE,
            message=f"Board must have exactly {expected} slots.",
            detail=f"Got {actual}",
        )


def get_neighbors(config: BoardConfig, index: int) -> list[int]:
    """Slot indices adjacent to `index`."""
    return list(config.neighbors(index))


def is_valid_placement(config: BoardConfig, card: DraftCard | None, index: int) -> bool:
    """
    Check whether a card satisfies the requirement of slot `index`.

    Wildcard slots accept any card. An empty slot is never a valid placement.
    """
    if card is None:
        return False
    return config.requirement(index).accepts(card)


def evaluate_pair(
    rules: RuleSet, card: DraftCard, other: DraftCard
) -> tuple[int, frozenset[ConnectionKind]]:
    """
    Points one card earns from an adjacent card.

    Same show and same season earns country + season + combo bonus; otherwise
    same show earns country points, same season earns season points. A
    canonical couple earns couple points on top.

    Returns:
        (points, kinds) where kinds lists the rules that fired with a
        non-zero value under `rules`
    """
    fired: list[tuple[ConnectionKind, int]] = []

    same_show = card.show == other.show
    same_season = card.season == other.season

    if same_show and same_season:
        fired.append((ConnectionKind.COUNTRY, rules.country_points))
        fired.append((ConnectionKind.SEASON, rules.season_points))
        fired.append((ConnectionKind.COMBO, rules.combo_bonus))
    elif same_show:
        fired.append((ConnectionKind.COUNTRY, rules.country_points))
    elif same_season:
        fired.append((ConnectionKind.SEASON, rules.season_points))

    if card.is_couple_with(other):
        fired.append((ConnectionKind.COUPLE, rules.couple_points))

    points = sum(value for _, value in fired)
    return points, frozenset(kind for kind, value in fired if value)


def _check_shape(config: BoardConfig, board: Board) -> None:
    if len(board) != config.size:
        raise BoardShapeError(config.size, len(board))


def score_cell(config: BoardConfig, board: Board, index: int) -> CellScore:
    """Point decomposition for a single slot."""
    card = board[index]
    if card is None:
        return CellScore(
            index=index,
            card=None,
            slot_points=0,
            rarity_points=0,
            connections=(),
            is_valid=None,
        )

    rules = config.rules
    requirement = config.requirement(index)
    valid = requirement.accepts(card)

    slot_points = rules.slot_match_points if valid and not requirement.is_wildcard else 0

    if rules.rarity_requires_match and not valid:
        rarity_points = 0
    else:
        rarity_points = rules.rarity_points(card.rarity)

    connections: list[Connection] = []
    for neighbor in config.neighbors(index):
        other = board[neighbor]
        if other is None:
            continue
        points, kinds = evaluate_pair(rules, card, other)
        if points == 0:
            continue
        connections.append(
            Connection(
                neighbor=neighbor,
                neighbor_name=other.name,
                points=points,
                kinds=kinds,
            )
        )

    return CellScore(
        index=index,
        card=card,
        slot_points=slot_points,
        rarity_points=rarity_points,
        connections=tuple(connections),
        is_valid=valid,
    )


def calculate_score(config: BoardConfig, board: Board) -> ScoreBreakdown:
    """
    Full score breakdown for the board.

    Raises:
        BoardShapeError: If the board length does not match the configuration
    """
    _check_shape(config, board)

    cells = tuple(score_cell(config, board, i) for i in range(config.size))

    # Couple edges are reported once per unordered pair
    couple_edges: set[tuple[int, int]] = set()
    for cell in cells:
        for connection in cell.connections:
            if ConnectionKind.COUPLE in connection.kinds:
                couple_edges.add(
                    (min(cell.index, connection.neighbor), max(cell.index, connection.neighbor))
                )

    completed_groups = tuple(
        g for g, group in enumerate(config.groups) if all(board[i] is not None for i in group)
    )

    filled = [cell for cell in cells if cell.card is not None]
    all_filled = len(filled) == config.size
    all_valid = bool(filled) and all(cell.is_valid for cell in filled)

    return ScoreBreakdown(
        cells=cells,
        total_slot=sum(c.slot_points for c in cells),
        total_rarity=sum(c.rarity_points for c in cells),
        total_connections=sum(c.connection_points for c in cells),
        couple_edges=tuple(sorted(couple_edges)),
        completed_groups=completed_groups,
        group_bonus=len(completed_groups) * config.rules.group_bonus,
        perfect_bonus=config.rules.perfect_board_bonus if all_filled else 0,
        all_filled=all_filled,
        all_valid=all_valid,
    )


@dataclass(frozen=True, slots=True)
class CellBonus:
    """Couple and season bonus summary for one slot."""

    couple_points: int = 0
    couple_partner: str | None = None
    season_points: int = 0
    season_edges: int = 0


def cell_bonuses(config: BoardConfig, board: Board) -> dict[int, CellBonus]:
    """
    Per-slot couple and season bonus summary, keyed by slot index.

    Season points include every relation where the season matched (plain
    season or combo), so the summary follows the same rule as score_cell.
    """
    _check_shape(config, board)
    rules = config.rules
    bonuses: dict[int, CellBonus] = {}

    for index in range(config.size):
        cell = score_cell(config, board, index)
        couple_points = 0
        couple_partner = None
        season_edges = 0
        for connection in cell.connections:
            if ConnectionKind.COUPLE in connection.kinds:
                couple_points += rules.couple_points
                couple_partner = connection.neighbor_name
            if ConnectionKind.SEASON in connection.kinds:
                season_edges += 1
        bonuses[index] = CellBonus(
            couple_points=couple_points,
            couple_partner=couple_partner,
            season_points=season_edges * rules.season_points,
            season_edges=season_edges,
        )

    return bonuses
