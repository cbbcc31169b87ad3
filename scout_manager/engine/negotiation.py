"""Transfer negotiation engine.

Negotiations move initial -> counter_offer -> final_offer and end either
completed or collapsed. Each call returns a new negotiation value; nothing
is mutated. Behaviour at the table depends on the selling club's
personality:

- hardball: high asking price, few rounds, small concessions
- reasonable: market price, moderate concessions
- desperate: discounted price, many rounds, big concessions
- prestige: premium price, moderate concessions
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from scout_manager.core.context import GameContext
from scout_manager.core.models import (
    AddOnType,
    AgentDemands,
    Club,
    InboxMessage,
    MessageType,
    NegotiationPersonality,
    NegotiationPhase,
    NegotiationRound,
    OfferResponse,
    PersonalityArchetype,
    Player,
    RivalBid,
    TransferAddOn,
    TransferNegotiation,
)
from scout_manager.engine.random_utils import chance, clamp, generate_id, weighted_choice

logger = logging.getLogger(__name__)

P = NegotiationPersonality


def format_currency(amount: float) -> str:
    """Format an amount as £12.5M, £750K or £900."""
    if amount >= 1_000_000:
        return f"£{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"£{amount / 1_000:.0f}K"
    return f"£{amount:.0f}"


class WillingnessTier(Enum):
    """How a player feels about personal terms."""
    ENTHUSIASTIC = "enthusiastic"
    RELUCTANT_ACCEPT = "reluctant_accept"
    RELUCTANT_REJECT = "reluctant_reject"
    HARD_REJECT = "hard_reject"


@dataclass(frozen=True)
class PersonalTermsResult:
    accepted: bool
    tier: WillingnessTier
    willingness: float


@dataclass(frozen=True)
class TransferCompletion:
    """Updated entities after a completed deal."""
    player: Player
    from_club: Club
    to_club: Club
    fee: int
    message: InboxMessage


@dataclass(frozen=True)
class WalkAwayResult:
    negotiation: TransferNegotiation
    message: InboxMessage
    reputation_delta: int


def evaluate_transfer_willingness(player: Player, from_club: Club | None, to_club: Club) -> float:
    """Player's appetite for a move, 0-1.

    Uses the externally supplied score when the player has one.
    """
    if player.transfer_willingness is not None:
        return clamp(player.transfer_willingness, 0, 1)

    willingness = 0.5
    if from_club is not None:
        rep_diff = to_club.reputation - from_club.reputation
        # Moving up is more attractive than moving down is off-putting
        willingness += rep_diff / 200 if rep_diff > 0 else rep_diff / 300

    if player.age <= 23 and player.archetype == PersonalityArchetype.AMBITIOUS:
        willingness += 0.15
    if player.age >= 30:
        willingness -= 0.1
    return clamp(willingness, 0, 1)


class NegotiationEngine:
    """Runs multi-round transfer negotiations."""

    MIN_ROUNDS = 2
    MAX_ROUNDS = 4
    DEADLINE_WEEKS = 4
    AGENT_INVOLVEMENT_CHANCE = 0.6

    PRICE_MULTIPLIERS = {P.HARDBALL: 1.2, P.REASONABLE: 1.0, P.DESPERATE: 0.85, P.PRESTIGE: 1.1}
    BASE_PATIENCE = {P.HARDBALL: 2, P.REASONABLE: 3, P.DESPERATE: 4, P.PRESTIGE: 3}
    CONCESSION_RATES = {P.HARDBALL: 0.10, P.REASONABLE: 0.25, P.DESPERATE: 0.40, P.PRESTIGE: 0.20}
    ADD_ON_ACCEPTANCE = {P.HARDBALL: 0.2, P.REASONABLE: 0.6, P.DESPERATE: 0.9, P.PRESTIGE: 0.5}
    RECOMMENDED_DISCOUNTS = {P.HARDBALL: 0.70, P.REASONABLE: 0.80, P.DESPERATE: 0.75, P.PRESTIGE: 0.85}
    FALLBACK_PERSONALITY_WEIGHTS = ((P.HARDBALL, 20), (P.REASONABLE, 45), (P.DESPERATE, 15), (P.PRESTIGE, 20))

    # How much of an add-on's face value the seller believes in
    ADD_ON_DISCOUNTS = {
        AddOnType.APPEARANCE_BONUS: 0.6,
        AddOnType.PERFORMANCE_BONUS: 0.4,
        AddOnType.SELL_ON_CLAUSE: 0.3,
        AddOnType.RELEGATION_CLAUSE: 0.2,
    }

    ACCEPT_RATIO = 0.95
    LAST_CHANCE_RATIO = 0.85
    LAST_CHANCE_ACCEPT = 0.4
    REJECT_RATIO = 0.50

    RIVAL_CHANCE_MIN = 0.05
    RIVAL_DESIRABILITY_BONUS = 0.05
    RIVAL_CHANCE_JITTER = 0.05
    RIVAL_BUDGET_RATIO = 0.7
    RIVAL_REPUTATION_WINDOW = 30

    AGENT_WILLINGNESS_BONUS = 0.15

    PERSONALITY_DESCRIPTIONS = {
        P.HARDBALL: "This club drives a hard bargain. Expect high demands and limited patience.",
        P.REASONABLE: "This club is open to fair negotiation. A reasonable offer should lead to productive talks.",
        P.DESPERATE: "This club appears eager to sell. You may be able to negotiate a favourable deal.",
        P.PRESTIGE: "This is a prestigious club. They expect top offers but may be swayed by your club's reputation.",
    }

    # ------------------------------------------------------------------
    # Opening
    # ------------------------------------------------------------------

    def initiate(
        self,
        rng: random.Random,
        context: GameContext,
        player_id: str,
        to_club_id: str,
        report_id: str | None = None,
    ) -> Optional[TransferNegotiation]:
        """Open a negotiation, or None when one cannot be started."""
        player = context.players.get(player_id)
        if player is None or player.club_id is None:
            return None
        from_club = context.clubs.get(player.club_id)
        to_club = context.clubs.get(to_club_id)
        if from_club is None or to_club is None:
            return None
        if player.club_id == to_club_id:
            return None
        if any(n.player_id == player_id and not n.is_terminal for n in context.negotiations):
            logger.debug("Player %s already has an open negotiation", player_id)
            return None

        personality = self.determine_personality(rng, from_club, player)
        max_rounds = int(clamp(
            self.BASE_PATIENCE[personality] + rng.randint(-1, 1),
            self.MIN_ROUNDS,
            self.MAX_ROUNDS,
        ))
        agent_involved = chance(rng, self.AGENT_INVOLVEMENT_CHANCE)
        agent_demands = self.agent_demands(rng, player) if agent_involved else None

        negotiation = TransferNegotiation(
            id=generate_id("neg", rng),
            player_id=player_id,
            from_club_id=from_club.id,
            to_club_id=to_club_id,
            phase=NegotiationPhase.INITIAL,
            max_rounds=max_rounds,
            deadline=context.current_week + self.DEADLINE_WEEKS,
            personality=personality,
            initial_asking_price=round(player.market_value * self.PRICE_MULTIPLIERS[personality]),
            season=context.current_season,
            start_week=context.current_week,
            agent_involved=agent_involved,
            agent_demands=agent_demands,
            scout_id=context.scout.id,
            report_id=report_id,
        )
        logger.debug(
            "Opened negotiation %s for %s with %s (%s, %d rounds)",
            negotiation.id, player.full_name, from_club.name, personality.value, max_rounds,
        )
        return negotiation

    def determine_personality(
        self,
        rng: random.Random,
        club: Club,
        player: Player,
    ) -> NegotiationPersonality:
        if club.reputation >= 75:
            return P.PRESTIGE if chance(rng, 0.6) else P.HARDBALL
        if club.budget > 0:
            value_ratio = player.market_value / club.budget
            if value_ratio < 0.3 and club.budget < 5_000_000:
                return P.DESPERATE if chance(rng, 0.5) else P.REASONABLE
        if player.current_ability > 140:
            return P.HARDBALL if chance(rng, 0.4) else P.REASONABLE
        return weighted_choice(rng, self.FALLBACK_PERSONALITY_WEIGHTS) or P.REASONABLE

    def agent_demands(self, rng: random.Random, player: Player) -> AgentDemands:
        ability_factor = min(player.current_ability / 200, 1)
        wage_premium = round((0.10 + ability_factor * 0.40 + rng.uniform(-0.05, 0.05)) * 100) / 100
        bonus_rate = max(0.0, 0.05 + ability_factor * 0.15 + rng.uniform(-0.02, 0.02))
        return AgentDemands(
            wage_premium=max(0.05, wage_premium),
            signing_bonus=round(player.market_value * bonus_rate),
        )

    # ------------------------------------------------------------------
    # Offers
    # ------------------------------------------------------------------

    def add_on_value(self, add_ons: tuple[TransferAddOn, ...], personality: NegotiationPersonality) -> int:
        """What the seller counts the add-ons as worth in cash."""
        acceptance = self.ADD_ON_ACCEPTANCE[personality]
        return round(sum(
            add_on.value * self.ADD_ON_DISCOUNTS[add_on.type] * acceptance for add_on in add_ons
        ))

    def counter_offer(
        self,
        rng: random.Random,
        negotiation: TransferNegotiation,
        offer_amount: int,
    ) -> int:
        """New asking price after an offer below it."""
        asking = negotiation.current_asking_price
        gap = asking - offer_amount
        if gap <= 0:
            return asking

        round_factor = 1 + len(negotiation.rounds) * 0.1
        concession = round(gap * self.CONCESSION_RATES[negotiation.personality] * round_factor)
        spread = round(gap * 0.05)
        jitter = rng.randint(-spread, spread)

        new_asking = max(offer_amount, asking - concession + jitter)
        if negotiation.rival_bids:
            new_asking = max(new_asking, negotiation.highest_rival_bid)
        return new_asking

    def submit_offer(
        self,
        rng: random.Random,
        negotiation: TransferNegotiation,
        offer_amount: int,
        week: int,
        add_ons: tuple[TransferAddOn, ...] = (),
    ) -> TransferNegotiation:
        """Put an offer to the selling club and record its answer."""
        if offer_amount < 0:
            raise ValueError(f"Offer amount must not be negative, got {offer_amount}")
        if negotiation.is_terminal:
            return negotiation

        asking = negotiation.current_asking_price
        effective = offer_amount + self.add_on_value(add_ons, negotiation.personality)
        rounds_so_far = len(negotiation.rounds)
        new_asking = asking

        if effective >= asking * self.ACCEPT_RATIO:
            response = OfferResponse.ACCEPTED
        elif rounds_so_far >= negotiation.max_rounds - 1:
            # Last permitted round: take it or leave it
            if effective >= asking * self.LAST_CHANCE_RATIO and chance(rng, self.LAST_CHANCE_ACCEPT):
                response = OfferResponse.ACCEPTED
            else:
                response = OfferResponse.REJECTED
        elif effective < asking * self.REJECT_RATIO:
            response = OfferResponse.REJECTED
        else:
            response = OfferResponse.COUNTERED
            new_asking = self.counter_offer(rng, negotiation, offer_amount)

        if response == OfferResponse.ACCEPTED:
            phase = NegotiationPhase.COMPLETED
        elif response == OfferResponse.REJECTED:
            phase = NegotiationPhase.COLLAPSED
        elif rounds_so_far >= negotiation.max_rounds - 2:
            phase = NegotiationPhase.FINAL_OFFER
        else:
            phase = NegotiationPhase.COUNTER_OFFER

        new_round = NegotiationRound(
            round_number=rounds_so_far + 1,
            offer_amount=offer_amount,
            asking_amount=new_asking,
            response=response,
            week=week,
            add_ons=tuple(add_ons),
        )
        if phase in (NegotiationPhase.COMPLETED, NegotiationPhase.COLLAPSED):
            logger.info("Negotiation %s %s after round %d", negotiation.id, phase.value, new_round.round_number)
        return replace(negotiation, phase=phase, rounds=negotiation.rounds + (new_round,))

    def recommended_offer(self, negotiation: TransferNegotiation) -> int:
        """Sensible opening bid for the seller's personality."""
        return round(negotiation.initial_asking_price * self.RECOMMENDED_DISCOUNTS[negotiation.personality])

    def describe_personality(self, personality: NegotiationPersonality) -> str:
        return self.PERSONALITY_DESCRIPTIONS[personality]

    # ------------------------------------------------------------------
    # Weekly processing
    # ------------------------------------------------------------------

    def check_rival_bids(
        self,
        rng: random.Random,
        context: GameContext,
        negotiation: TransferNegotiation,
    ) -> tuple[TransferNegotiation, Optional[InboxMessage]]:
        """Possibly attach a rival club's bid to an open negotiation."""
        if negotiation.is_terminal:
            return negotiation, None
        player = context.players.get(negotiation.player_id)
        if player is None:
            logger.warning("Negotiation %s references missing player %s", negotiation.id, negotiation.player_id)
            return negotiation, None

        desirability = min(player.current_ability / 200, 1) * self.RIVAL_DESIRABILITY_BONUS
        rival_chance = self.RIVAL_CHANCE_MIN + desirability + rng.uniform(0, self.RIVAL_CHANCE_JITTER)
        if not chance(rng, rival_chance):
            return negotiation, None

        target_reputation = player.current_ability / 2
        candidates = []
        for club in context.clubs.values():
            if club.id in (negotiation.to_club_id, negotiation.from_club_id):
                continue
            if club.budget < player.market_value * self.RIVAL_BUDGET_RATIO:
                continue
            rep_diff = abs(club.reputation - target_reputation)
            if rep_diff < self.RIVAL_REPUTATION_WINDOW:
                candidates.append((club, self.RIVAL_REPUTATION_WINDOW - rep_diff))

        rival = weighted_choice(rng, candidates)
        if rival is None:
            return negotiation, None

        amount = round(player.market_value * rng.uniform(0.90, 1.10))
        bid = RivalBid(
            club_id=rival.id,
            amount=amount,
            week=context.current_week,
            scout_name=f"{rival.short_name} Scout",
        )
        message = InboxMessage(
            id=generate_id("msg_rival", rng),
            week=context.current_week,
            season=context.current_season,
            type=MessageType.NEGOTIATION,
            title=f"Rival Bid: {rival.name} interested in {player.full_name}",
            body=(
                f"{rival.name} have submitted a rival bid of {format_currency(amount)} for "
                f"{player.full_name}. This may affect your negotiation; consider adjusting your offer."
            ),
            action_required=True,
            related_id=negotiation.id,
            related_entity_type="negotiation",
        )
        logger.info("Rival bid of %s from %s on negotiation %s", amount, rival.name, negotiation.id)
        return replace(negotiation, rival_bids=negotiation.rival_bids + (bid,)), message

    def process_weekly(
        self,
        rng: random.Random,
        context: GameContext,
    ) -> tuple[tuple[TransferNegotiation, ...], list[InboxMessage]]:
        """Advance every negotiation by one week: expiry, then rival interest."""
        updated = []
        messages = []
        for negotiation in context.negotiations:
            if negotiation.is_terminal:
                updated.append(negotiation)
                continue

            if context.current_week >= negotiation.deadline:
                player = context.players.get(negotiation.player_id)
                player_name = player.full_name if player else "the player"
                updated.append(replace(negotiation, phase=NegotiationPhase.COLLAPSED))
                messages.append(InboxMessage(
                    id=generate_id("msg_expired", rng),
                    week=context.current_week,
                    season=context.current_season,
                    type=MessageType.NEGOTIATION,
                    title=f"Negotiation Expired: {player_name}",
                    body=(
                        f"The transfer negotiation for {player_name} has expired. "
                        "The selling club has withdrawn from discussions."
                    ),
                    related_id=negotiation.id,
                    related_entity_type="negotiation",
                ))
                logger.info("Negotiation %s expired", negotiation.id)
                continue

            negotiation, message = self.check_rival_bids(rng, context, negotiation)
            updated.append(negotiation)
            if message is not None:
                messages.append(message)

        return tuple(updated), messages

    # ------------------------------------------------------------------
    # Closing
    # ------------------------------------------------------------------

    def evaluate_personal_terms(
        self,
        negotiation: TransferNegotiation,
        context: GameContext,
    ) -> Optional[PersonalTermsResult]:
        """Whether the player agrees terms with the buying club."""
        player = context.players.get(negotiation.player_id)
        to_club = context.clubs.get(negotiation.to_club_id)
        if player is None or to_club is None:
            return None

        willingness = evaluate_transfer_willingness(
            player, context.clubs.get(negotiation.from_club_id), to_club
        )
        if negotiation.agent_involved:
            willingness = min(1.0, willingness + self.AGENT_WILLINGNESS_BONUS)

        if willingness >= 0.6:
            tier = WillingnessTier.ENTHUSIASTIC
        elif willingness >= 0.4:
            tier = WillingnessTier.RELUCTANT_ACCEPT
        elif willingness >= 0.25:
            tier = WillingnessTier.RELUCTANT_REJECT
        else:
            tier = WillingnessTier.HARD_REJECT

        accepted = tier in (WillingnessTier.ENTHUSIASTIC, WillingnessTier.RELUCTANT_ACCEPT)
        return PersonalTermsResult(accepted=accepted, tier=tier, willingness=willingness)

    def complete_transfer(
        self,
        negotiation: TransferNegotiation,
        context: GameContext,
    ) -> Optional[TransferCompletion]:
        """Move the player and the money once a deal is agreed."""
        if negotiation.phase != NegotiationPhase.COMPLETED:
            return None
        player = context.players.get(negotiation.player_id)
        from_club = context.clubs.get(negotiation.from_club_id)
        to_club = context.clubs.get(negotiation.to_club_id)
        if player is None or from_club is None or to_club is None:
            logger.warning("Cannot complete negotiation %s: missing player or club", negotiation.id)
            return None

        fee = negotiation.agreed_fee
        body = (
            f"{player.full_name} has completed a transfer from {from_club.name} to "
            f"{to_club.name} for {format_currency(fee)}."
        )
        if negotiation.agent_involved and negotiation.agent_demands:
            demands = negotiation.agent_demands
            body += (
                f" Agent demands: {round(demands.wage_premium * 100)}% wage premium, "
                f"{format_currency(demands.signing_bonus)} signing bonus."
            )

        logger.info("Transfer of %s completed for %s", player.full_name, fee)
        return TransferCompletion(
            player=replace(player, club_id=to_club.id),
            from_club=replace(
                from_club,
                player_ids=tuple(pid for pid in from_club.player_ids if pid != player.id),
                budget=from_club.budget + fee,
            ),
            to_club=replace(
                to_club,
                player_ids=to_club.player_ids + (player.id,),
                budget=to_club.budget - fee,
            ),
            fee=fee,
            message=InboxMessage(
                id=f"transfer_{negotiation.id}",
                week=context.current_week,
                season=context.current_season,
                type=MessageType.TRANSFER,
                title=f"Transfer Complete: {player.full_name}",
                body=body,
                related_id=player.id,
                related_entity_type="player",
            ),
        )

    def walk_away(
        self,
        rng: random.Random,
        negotiation: TransferNegotiation,
        context: GameContext,
    ) -> Optional[WalkAwayResult]:
        """Pull out of talks. Leaving late costs more reputation."""
        if negotiation.is_terminal:
            return None

        player = context.players.get(negotiation.player_id)
        player_name = player.full_name if player else "the player"
        extended = len(negotiation.rounds) >= 2
        note = (
            "Walking away after extended negotiations has damaged your reputation."
            if extended else "The selling club has been notified."
        )
        return WalkAwayResult(
            negotiation=replace(negotiation, phase=NegotiationPhase.COLLAPSED),
            message=InboxMessage(
                id=generate_id("msg_walkaway", rng),
                week=context.current_week,
                season=context.current_season,
                type=MessageType.NEGOTIATION,
                title=f"Negotiation Ended: {player_name}",
                body=f"Your club has walked away from negotiations for {player_name}. {note}",
                related_id=negotiation.id,
                related_entity_type="negotiation",
            ),
            reputation_delta=-3 if extended else -1,
        )
