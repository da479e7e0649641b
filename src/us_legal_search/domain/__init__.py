"""Domain layer - canonical records shared by every source."""

from .entities import (
    Committee,
    CourtOpinion,
    DocumentSection,
    LatestAction,
    LegislativeBill,
    LegislativeVote,
    PublicComment,
    RegulatoryDocument,
    SearchAllResult,
    Sponsor,
    StatutoryProvision,
    Subcommittee,
    VoteMember,
)

__all__ = [
    "Committee",
    "CourtOpinion",
    "DocumentSection",
    "LatestAction",
    "LegislativeBill",
    "LegislativeVote",
    "PublicComment",
    "RegulatoryDocument",
    "SearchAllResult",
    "Sponsor",
    "StatutoryProvision",
    "Subcommittee",
    "VoteMember",
]
