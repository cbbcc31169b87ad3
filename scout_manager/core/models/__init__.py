"""Core models for Scout Manager."""

from scout_manager.core.models.player import (
    Player,
    Position,
    PlayerTrait,
    PersonalityArchetype,
    ALL_POSITIONS,
    ALL_ATTRIBUTES,
    HIDDEN_ATTRIBUTES,
)
from scout_manager.core.models.club import (
    Club,
    ManagerProfile,
    ManagerPreference,
    ScoutingPhilosophy,
    TacticalIdentity,
    TacticalStyle,
)
from scout_manager.core.models.scout import Scout, ScoutReport, Observation, ConvictionLevel
from scout_manager.core.models.directive import (
    Directive,
    DirectiveMatch,
    DirectivePriority,
    PRIORITY_ORDER,
    PlayerRole,
    RoleDuty,
    ClubResponse,
    ClubResponseType,
    NEGATIVE_RESPONSES,
    SystemFitResult,
)
from scout_manager.core.models.transfer import (
    TransferNegotiation,
    NegotiationPhase,
    NegotiationPersonality,
    NegotiationRound,
    OfferResponse,
    AddOnType,
    TransferAddOn,
    RivalBid,
    AgentDemands,
    TransferRecord,
    TransferOutcome,
    SeasonPerformance,
    TERMINAL_PHASES,
)
from scout_manager.core.models.board import (
    BoardProfile,
    BoardPersonality,
    BoardReaction,
    BoardReactionType,
    DifficultyScaling,
)
from scout_manager.core.models.inbox import InboxMessage, MessageType

__all__ = [
    # Player
    "Player",
    "Position",
    "PlayerTrait",
    "PersonalityArchetype",
    "ALL_POSITIONS",
    "ALL_ATTRIBUTES",
    "HIDDEN_ATTRIBUTES",
    # Club
    "Club",
    "ManagerProfile",
    "ManagerPreference",
    "ScoutingPhilosophy",
    "TacticalIdentity",
    "TacticalStyle",
    # Scout
    "Scout",
    "ScoutReport",
    "Observation",
    "ConvictionLevel",
    # Directive
    "Directive",
    "DirectiveMatch",
    "DirectivePriority",
    "PRIORITY_ORDER",
    "PlayerRole",
    "RoleDuty",
    "ClubResponse",
    "ClubResponseType",
    "NEGATIVE_RESPONSES",
    "SystemFitResult",
    # Transfer
    "TransferNegotiation",
    "NegotiationPhase",
    "NegotiationPersonality",
    "NegotiationRound",
    "OfferResponse",
    "AddOnType",
    "TransferAddOn",
    "RivalBid",
    "AgentDemands",
    "TransferRecord",
    "TransferOutcome",
    "SeasonPerformance",
    "TERMINAL_PHASES",
    # Board
    "BoardProfile",
    "BoardPersonality",
    "BoardReaction",
    "BoardReactionType",
    "DifficultyScaling",
    # Inbox
    "InboxMessage",
    "MessageType",
]
