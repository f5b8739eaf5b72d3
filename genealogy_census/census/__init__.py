"""Census forms: column layouts, definitions and household transcription."""

from genealogy_census.census.columns import CensusColumn, ColumnKind, ColumnSpec
from genealogy_census.census.definitions import CENSUSES, CensusDefinition
from genealogy_census.census.household import HouseholdTranscript, transcribe
from genealogy_census.census.record import CensusRecord, MaritalCondition
from genealogy_census.census.registry import CensusNotFoundError, CensusRegistry, registry

__all__ = [
    "CENSUSES",
    "CensusColumn",
    "CensusDefinition",
    "CensusNotFoundError",
    "CensusRecord",
    "CensusRegistry",
    "ColumnKind",
    "ColumnSpec",
    "HouseholdTranscript",
    "MaritalCondition",
    "registry",
    "transcribe",
]
