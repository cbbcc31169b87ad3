"""Transfer negotiation and transfer record models.

Negotiations are plain data advanced by the negotiation engine; rounds and
rival bids only ever grow. Records follow a signed player through the
seasons after the move so the recommending scout can be held to account.
"""

from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Optional

from scout_manager.core.models.scout import ConvictionLevel


class NegotiationPhase(PyEnum):
    """Phases of a transfer negotiation."""
    INITIAL = "initial"
    COUNTER_OFFER = "counter_offer"
    FINAL_OFFER = "final_offer"
    COMPLETED = "completed"
    COLLAPSED = "collapsed"


TERMINAL_PHASES = frozenset({NegotiationPhase.COMPLETED, NegotiationPhase.COLLAPSED})


class NegotiationPersonality(PyEnum):
    """How the selling club behaves at the table."""
    HARDBALL = "hardball"
    REASONABLE = "reasonable"
    DESPERATE = "desperate"
    PRESTIGE = "prestige"


class OfferResponse(PyEnum):
    ACCEPTED = "accepted"
    COUNTERED = "countered"
    REJECTED = "rejected"


class AddOnType(PyEnum):
    """Conditional clauses that can sweeten a bid."""
    APPEARANCE_BONUS = "appearance_bonus"
    PERFORMANCE_BONUS = "performance_bonus"
    SELL_ON_CLAUSE = "sell_on_clause"
    RELEGATION_CLAUSE = "relegation_clause"


class TransferOutcome(PyEnum):
    """How a completed transfer turned out."""
    HIT = "hit"
    DECENT = "decent"
    FLOP = "flop"
    TOO_EARLY = "too_early"


FINAL_OUTCOMES = frozenset({TransferOutcome.HIT, TransferOutcome.DECENT, TransferOutcome.FLOP})


@dataclass(frozen=True)
class TransferAddOn:
    type: AddOnType
    value: int


@dataclass(frozen=True)
class NegotiationRound:
    """One offer and the selling club's answer to it."""
    round_number: int
    offer_amount: int
    asking_amount: int
    response: OfferResponse
    week: int
    add_ons: tuple[TransferAddOn, ...] = ()


@dataclass(frozen=True)
class RivalBid:
    """A competing bid from another club."""
    club_id: str
    amount: int
    week: int
    scout_name: str


@dataclass(frozen=True)
class AgentDemands:
    """Extra cost of doing business through the player's agent."""
    wage_premium: float  # fraction on top of the base wage
    signing_bonus: int


@dataclass(frozen=True)
class TransferNegotiation:
    """An in-flight negotiation between a buying and a selling club."""
    id: str
    player_id: str
    from_club_id: str  # selling club
    to_club_id: str  # buying club
    phase: NegotiationPhase
    max_rounds: int
    deadline: int
    personality: NegotiationPersonality
    initial_asking_price: int
    season: int
    start_week: int
    rounds: tuple[NegotiationRound, ...] = ()
    rival_bids: tuple[RivalBid, ...] = ()
    agent_involved: bool = False
    agent_demands: Optional[AgentDemands] = None
    scout_id: Optional[str] = None
    report_id: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    @property
    def highest_rival_bid(self) -> int:
        return max((bid.amount for bid in self.rival_bids), default=0)

    @property
    def current_asking_price(self) -> int:
        """Price the seller currently wants, never below a live rival bid."""
        asking = self.rounds[-1].asking_amount if self.rounds else self.initial_asking_price
        return max(asking, self.highest_rival_bid)

    @property
    def agreed_fee(self) -> int:
        """Cash fee of the last offer, or the opening price if none was made."""
        if self.rounds:
            return self.rounds[-1].offer_amount
        return self.initial_asking_price


@dataclass(frozen=True)
class SeasonPerformance:
    season: int
    rating: int  # 0-100
    appearances: int
    goals: int
    assists: int


@dataclass(frozen=True)
class TransferRecord:
    """Post-transfer tracking of a player the scout recommended."""
    id: str
    player_id: str
    scout_id: str
    from_club_id: str
    to_club_id: str
    fee: int
    ability_at_transfer: int
    transfer_season: int
    scout_conviction: ConvictionLevel
    report_id: Optional[str] = None
    season_performance: tuple[SeasonPerformance, ...] = ()
    outcome: Optional[TransferOutcome] = None
    outcome_season: Optional[int] = None
    accountability_applied: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.outcome in FINAL_OUTCOMES

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "player_id": self.player_id,
            "scout_id": self.scout_id,
            "fee": self.fee,
            "transfer_season": self.transfer_season,
            "conviction": self.scout_conviction.value,
            "seasons_tracked": len(self.season_performance),
            "outcome": self.outcome.value if self.outcome else None,
            "accountability_applied": self.accountability_applied,
        }
