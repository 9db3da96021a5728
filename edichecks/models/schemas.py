import json
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from edichecks.constants import (
    STATUS_INVALID_JSON,
    STATUS_MISSING_DATA,
    STATUS_VALID,
)

# Reference matching
class MatchRequest(BaseModel):
    target_key: Optional[str] = None
    owner_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        return bool(self.target_key) and bool(self.owner_id)

class Candidate(BaseModel):
    id: str
    primary_key: Optional[str] = None
    secondary_key: Optional[str] = None

    model_config = ConfigDict(frozen=True)

class MatchType(str, Enum):
    PRIMARY_KEY = "primary_key"
    SECONDARY_KEY = "secondary_key"
    NOT_FOUND = "not_found"
    SKIPPED = "skipped"

class MatchResult(BaseModel):
    candidate_id: Optional[str] = None
    match_type: MatchType = MatchType.NOT_FOUND

    model_config = ConfigDict(frozen=True)

    @property
    def matched(self) -> bool:
        return self.match_type in (MatchType.PRIMARY_KEY, MatchType.SECONDARY_KEY)

    @classmethod
    def not_found(cls) -> "MatchResult":
        return cls(match_type=MatchType.NOT_FOUND)

    @classmethod
    def skipped(cls) -> "MatchResult":
        return cls(match_type=MatchType.SKIPPED)

# Pallet validation
class OutcomeKind(str, Enum):
    MISSING_INPUT = "missing_input"
    MALFORMED_INPUT = "malformed_input"
    VALID = "valid"
    INVALID = "invalid"

class ValidationResult(BaseModel):
    """Wire result handed back to the integration host."""
    status: str
    success: bool
    error_message: str = Field(default="", alias="errorMessage")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

class ValidationOutcome(BaseModel):
    """
    Result of one validation call.

    `errors` is only populated for INVALID; `diagnostic` carries the
    human-readable message for every kind except VALID.
    """
    kind: OutcomeKind
    errors: tuple[str, ...] = ()
    diagnostic: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def is_valid(self) -> bool:
        return self.kind == OutcomeKind.VALID

    @property
    def validated(self) -> bool:
        return self.kind in (OutcomeKind.VALID, OutcomeKind.INVALID)

    def to_result(self) -> ValidationResult:
        if self.kind == OutcomeKind.VALID:
            return ValidationResult(status=STATUS_VALID, success=True, error_message="")
        if self.kind == OutcomeKind.MALFORMED_INPUT:
            status = STATUS_INVALID_JSON
        else:
            status = STATUS_MISSING_DATA
        return ValidationResult(status=status, success=False, error_message=self.diagnostic)
