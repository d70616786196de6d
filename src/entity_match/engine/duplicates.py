from __future__ import annotations

import logging
from collections.abc import Sequence

from entity_match.config import DuplicateRules
from entity_match.engine.normalize import normalize_email, normalize_phone, normalize_url
from entity_match.engine.similarity import similarity_ratio
from entity_match.models import ComparableRecord, MatchResult, PartialRecord

logger = logging.getLogger(__name__)

REASON_NAME = "Nombre similar"
REASON_EMAIL = "Email idéntico"
REASON_PHONE = "Teléfono idéntico"
REASON_WEBSITE = "Sitio web idéntico"


class DuplicateScorer:
    """Weighted field-by-field comparison of a new record against existing ones.

    Name similarity contributes proportionally once it clears
    ``name_similarity_threshold``; email, phone and website contribute their
    full weight on an exact match of the normalized values.
    """

    def __init__(self, rules: DuplicateRules | None = None) -> None:
        self._rules = rules or DuplicateRules()

    @property
    def rules(self) -> DuplicateRules:
        return self._rules

    def score(self, candidate: PartialRecord, existing: ComparableRecord) -> MatchResult:
        rules = self._rules
        reasons: list[str] = []
        score = 0.0

        if candidate.name and existing.name:
            similarity = similarity_ratio(candidate.name.lower(), existing.name.lower())
            if similarity > rules.name_similarity_threshold:
                score += similarity * rules.name_weight
                reasons.append(REASON_NAME)

        if candidate.email and existing.email:
            if normalize_email(candidate.email) == normalize_email(existing.email):
                score += rules.email_weight
                reasons.append(REASON_EMAIL)

        if candidate.phone and existing.phone:
            phone = normalize_phone(candidate.phone)
            if phone == normalize_phone(existing.phone):
                score += rules.phone_weight
                reasons.append(REASON_PHONE)

        if candidate.website and existing.website:
            website = normalize_url(candidate.website)
            if website == normalize_url(existing.website):
                score += rules.website_weight
                reasons.append(REASON_WEBSITE)

        return MatchResult(record=existing, score=score, reasons=tuple(reasons))

    def find_duplicates(
        self, candidate: PartialRecord, existing: Sequence[ComparableRecord]
    ) -> list[MatchResult]:
        matches: list[MatchResult] = []
        for record in existing:
            result = self.score(candidate, record)
            if result.score > self._rules.threshold and result.reasons:
                matches.append(result)

        logger.debug("%d of %d records flagged as possible duplicates", len(matches), len(existing))
        # sorted() is stable with reverse=True, so equal scores keep input order.
        return sorted(matches, key=lambda match: match.score, reverse=True)


def find_duplicates(
    candidate: PartialRecord,
    existing: Sequence[ComparableRecord],
    rules: DuplicateRules | None = None,
) -> list[MatchResult]:
    return DuplicateScorer(rules).find_duplicates(candidate, existing)
