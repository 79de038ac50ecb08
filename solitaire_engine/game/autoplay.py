"""Turn engine snapshots into discrete card motions."""

from solitaire_engine.models.state import CardMove, CardView, EngineState, PileId, PileView


def _key(card: CardView) -> tuple[int, int]:
    return (int(card.suit), card.rank)


def _split(before: PileView | None, after: PileView) -> tuple[list[CardView], list[CardView]]:
    """Split a pile's change into removed and added cards.

    Cards are compared by suit and rank only, so a card turned face up in
    place does not count as moved.
    """
    old = list(before.cards) if before is not None else []
    new = list(after.cards)
    common = 0
    while common < len(old) and common < len(new) and _key(old[common]) == _key(new[common]):
        common += 1
    return old[common:], new[common:]


def diff_snapshots(before: EngineState, after: EngineState) -> list[CardMove]:
    """Compute the card moves that turn one snapshot into the next.

    Each card that left one pile and arrived on another yields one move.
    Cards held in the selection of ``before`` are treated as coming from
    its ``last_source``. Cards still held in the selection of ``after`` are
    in flight and produce no move yet.

    Args:
        before: Snapshot taken before the transition(s)
        after: Snapshot taken after the transition(s)

    Returns:
        Moves ordered by target pile, bottom card first.
    """
    removed: list[tuple[CardView, PileId]] = []
    added: list[tuple[CardView, PileId]] = []

    for pile in after.piles():
        gone, arrived = _split(before.pile(pile.pile_id), pile)
        removed.extend((card, pile.pile_id) for card in gone)
        added.extend((card, pile.pile_id) for card in arrived)

    if before.last_source is not None:
        removed.extend((card, before.last_source) for card in before.selection)

    moves: list[CardMove] = []
    for card, target in added:
        for i, (candidate, source) in enumerate(removed):
            if _key(candidate) == _key(card) and source != target:
                moves.append(CardMove(card=card, source=source, target=target))
                del removed[i]
                break
    return moves
