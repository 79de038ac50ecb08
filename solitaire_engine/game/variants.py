"""Variant policies.

Every rule difference between the supported games lives in one
``VariantPolicy`` record, chosen when the engine is built.
"""

from dataclasses import dataclass
from enum import Enum

from .rules import RunRule


class Variant(str, Enum):
    """Supported solitaire variants."""

    KLONDIKE = "klondike"
    FREECELL = "freecell"
    SPIDER_EASY = "spider_easy"
    SPIDER_HARD = "spider_hard"
    YUKON = "yukon"


class StockMode(str, Enum):
    """What the stock does when used."""

    NONE = "none"
    DRAW = "draw"  # One card to the waste, recycle the waste when exhausted
    DEAL = "deal"  # One card onto every tableau


class EmptyTableauRule(str, Enum):
    """Which runs an empty tableau takes."""

    KING_ONLY = "king_only"
    ANY = "any"


class FoundationMode(str, Enum):
    """How cards reach a foundation."""

    SINGLE = "single"  # One card at a time
    COMPLETE_RUN = "complete_run"  # A whole King-to-Ace run onto an empty foundation


class HiddenDeal(str, Enum):
    """Which dealt tableau cards start face up."""

    TOP_ONLY = "top_only"
    ALL_VISIBLE = "all_visible"
    TOP_FIVE = "top_five"


@dataclass(frozen=True)
class AcceptRule:
    """Tableau acceptance: bottom of the run against the top of the target."""

    alternating: bool = True
    empty: EmptyTableauRule = EmptyTableauRule.ANY


@dataclass(frozen=True)
class WinRule:
    """Terminal condition of a variant.

    Each enabled check must hold for the game to count as won.
    """

    foundations_filled: bool = True
    max_open_tableaux: int | None = None
    tableau_rule: RunRule | None = None
    empty_stock: bool = False
    empty_cells: bool = False


@dataclass(frozen=True)
class VariantPolicy:
    """Layout and move policy of one variant."""

    variant: Variant
    title: str
    tableau_sizes: tuple[int, ...]
    decks: int = 1
    foundations: int = 4
    cells: int = 0
    hidden_deal: HiddenDeal = HiddenDeal.TOP_ONLY
    stock_mode: StockMode = StockMode.NONE
    removable: RunRule = RunRule()
    capacity_limited: bool = False
    accept: AcceptRule = AcceptRule()
    foundation_mode: FoundationMode = FoundationMode.SINGLE
    win: WinRule = WinRule()

    @property
    def has_waste(self) -> bool:
        return self.stock_mode == StockMode.DRAW

    @property
    def has_stock(self) -> bool:
        return self.stock_mode != StockMode.NONE

    @property
    def deck_size(self) -> int:
        return 52 * self.decks

    def describe(self) -> list[str]:
        """Summarize the rules as display lines."""
        lines = [
            f"{self.title}: {len(self.tableau_sizes)} tableaux "
            f"({', '.join(str(n) for n in self.tableau_sizes)} cards), "
            f"{self.foundations} foundations, {self.decks} deck(s)",
            f"Pick up runs that are: {self.removable.describe()}",
        ]
        if self.capacity_limited:
            lines.append("Run length is limited to (free cells + 1) * 2^(empty tableaux)")
        color = "alternating color, " if self.accept.alternating else ""
        lines.append(f"Build down on tableaux by one rank ({color}bottom card against top card)")
        if self.accept.empty == EmptyTableauRule.KING_ONLY:
            lines.append("Only a King may start an empty tableau")
        else:
            lines.append("Any run may start an empty tableau")
        if self.foundation_mode == FoundationMode.COMPLETE_RUN:
            lines.append("Move complete King-to-Ace runs to an empty foundation")
        else:
            lines.append("Build foundations up by suit from Ace, one card at a time")
        if self.cells:
            lines.append(f"{self.cells} holding cells take one card each")
        if self.stock_mode == StockMode.DRAW:
            lines.append("Draw one card from the stock to the waste; the waste recycles")
        elif self.stock_mode == StockMode.DEAL:
            lines.append("Deal one card from the stock onto every tableau")
        return lines


KLONDIKE = VariantPolicy(
    variant=Variant.KLONDIKE,
    title="Klondike",
    tableau_sizes=(1, 2, 3, 4, 5, 6, 7),
    stock_mode=StockMode.DRAW,
    removable=RunRule(visible=True, sequential=True, alternating=True),
    accept=AcceptRule(alternating=True, empty=EmptyTableauRule.KING_ONLY),
    win=WinRule(
        foundations_filled=True,
        max_open_tableaux=4,
        tableau_rule=RunRule(visible=True, sequential=True, alternating=True),
        empty_stock=True,
    ),
)

FREECELL = VariantPolicy(
    variant=Variant.FREECELL,
    title="FreeCell",
    tableau_sizes=(7, 7, 7, 7, 6, 6, 6, 6),
    cells=4,
    hidden_deal=HiddenDeal.ALL_VISIBLE,
    removable=RunRule(visible=True, sequential=True, alternating=True),
    capacity_limited=True,
    accept=AcceptRule(alternating=True, empty=EmptyTableauRule.ANY),
    win=WinRule(
        foundations_filled=False,
        max_open_tableaux=4,
        tableau_rule=RunRule(visible=False, sequential=True, alternating=True),
        empty_cells=True,
    ),
)

SPIDER_HARD = VariantPolicy(
    variant=Variant.SPIDER_HARD,
    title="Spider (hard)",
    tableau_sizes=(6, 6, 6, 6, 5, 5, 5, 5, 5, 5),
    decks=2,
    foundations=8,
    stock_mode=StockMode.DEAL,
    removable=RunRule(visible=True, sequential=True, alternating=True),
    accept=AcceptRule(alternating=True, empty=EmptyTableauRule.ANY),
    foundation_mode=FoundationMode.COMPLETE_RUN,
    win=WinRule(foundations_filled=True),
)

SPIDER_EASY = VariantPolicy(
    variant=Variant.SPIDER_EASY,
    title="Spider (easy)",
    tableau_sizes=(6, 6, 6, 6, 5, 5, 5, 5, 5, 5),
    decks=2,
    foundations=8,
    stock_mode=StockMode.DEAL,
    removable=RunRule(visible=True, sequential=True, alternating=False),
    accept=AcceptRule(alternating=False, empty=EmptyTableauRule.ANY),
    foundation_mode=FoundationMode.COMPLETE_RUN,
    win=WinRule(foundations_filled=True),
)

YUKON = VariantPolicy(
    variant=Variant.YUKON,
    title="Yukon",
    tableau_sizes=(1, 6, 7, 8, 9, 10, 11),
    hidden_deal=HiddenDeal.TOP_FIVE,
    removable=RunRule(visible=True, sequential=False, alternating=False),
    accept=AcceptRule(alternating=True, empty=EmptyTableauRule.ANY),
    win=WinRule(
        foundations_filled=True,
        max_open_tableaux=4,
        tableau_rule=RunRule(visible=True, sequential=True, alternating=False),
    ),
)

POLICIES: dict[Variant, VariantPolicy] = {
    policy.variant: policy
    for policy in (KLONDIKE, FREECELL, SPIDER_EASY, SPIDER_HARD, YUKON)
}


def get_policy(variant: Variant | str) -> VariantPolicy:
    """Get the policy record of a variant.

    Raises:
        ValueError: Unknown variant name.
    """
    return POLICIES[Variant(variant)]
