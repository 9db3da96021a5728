from .database import get_supabase_client
from .schemas import (
    MatchRequest, Candidate, MatchType, MatchResult,
    OutcomeKind, ValidationOutcome, ValidationResult
)
