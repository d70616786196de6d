from entity_match.engine.duplicates import DuplicateScorer, find_duplicates
from entity_match.engine.normalize import normalize_email, normalize_phone, normalize_url
from entity_match.engine.search import FuzzySearchRanker, rank, rank_structured
from entity_match.engine.similarity import edit_distance, fuzzy_subsequence_score, similarity_ratio
from entity_match.engine.usage import UsageTracker, favorites, recent, record_usage

__all__ = [
    "DuplicateScorer",
    "find_duplicates",
    "normalize_email",
    "normalize_phone",
    "normalize_url",
    "FuzzySearchRanker",
    "rank",
    "rank_structured",
    "edit_distance",
    "fuzzy_subsequence_score",
    "similarity_ratio",
    "UsageTracker",
    "favorites",
    "recent",
    "record_usage",
]
