import logging
from typing import Iterable

from edichecks.models.schemas import Candidate, MatchRequest, MatchResult, MatchType

logger = logging.getLogger(__name__)


class ReferenceMatcher:
    """
    Find the candidate record whose reference keys equal the target key.

    Candidates must already be scoped to the owner by the caller's query;
    ownership is not re-checked here. The first candidate in input order
    wins, so ties depend on the order the caller supplies.
    """

    # Field priority inside a single candidate
    KEY_FIELDS = (
        ("primary_key", MatchType.PRIMARY_KEY),
        ("secondary_key", MatchType.SECONDARY_KEY),
    )

    def match(self, request: MatchRequest, candidates: Iterable[Candidate]) -> MatchResult:
        if not request.target_key:
            logger.debug("No target key, skipping match")
            return MatchResult.skipped()
        if not request.owner_id:
            logger.debug("No owner id, skipping match")
            return MatchResult.skipped()

        checked = 0
        for candidate in candidates:
            checked += 1
            logger.debug(
                f"Checking candidate {candidate.id}: "
                f"primary={candidate.primary_key}, secondary={candidate.secondary_key}"
            )
            for field_name, match_type in self.KEY_FIELDS:
                if getattr(candidate, field_name) == request.target_key:
                    logger.debug(
                        f"Match found: candidate {candidate.id} on {match_type.value} "
                        f"for key {request.target_key}"
                    )
                    return MatchResult(candidate_id=candidate.id, match_type=match_type)

        logger.debug(
            f"No match among {checked} candidate(s) for key {request.target_key} "
            f"and owner {request.owner_id}"
        )
        return MatchResult.not_found()


_matcher = ReferenceMatcher()


def match_reference(request: MatchRequest, candidates: Iterable[Candidate]) -> MatchResult:
    return _matcher.match(request, candidates)
