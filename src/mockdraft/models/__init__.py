"""Value types shared by the ranking, scoring and simulation layers."""

from .pick import OfficialResult, Participant, Pick
from .prospect import ConsensusEntry, ProspectRecord

__all__ = [
    "ConsensusEntry",
    "OfficialResult",
    "Participant",
    "Pick",
    "ProspectRecord",
]
