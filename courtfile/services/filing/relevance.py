"""
Document Type Relevance
=======================

Ranks candidate document types against a free-text description of the
filer's situation ("I need to modify custody").

KeywordRelevanceScorer is an additive keyword heuristic. Anything that
implements RelevanceScorer can replace it.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .models import DocumentTypeDefinition

DEFAULT_TOKEN_WEIGHT = 0.2
DEFAULT_THRESHOLD = 0.3
DEFAULT_MAX_SCORE = 1.0


class RelevanceScorer(ABC):
    """Strategy for scoring document types against a query."""

    threshold: float = DEFAULT_THRESHOLD

    @abstractmethod
    def score(self, query: str, doc_type: DocumentTypeDefinition) -> float:
        """Relevance of doc_type to the query."""
        ...

    def scored(
        self,
        query: str,
        candidates: Sequence[DocumentTypeDefinition],
    ) -> List[Tuple[DocumentTypeDefinition, float]]:
        """
        Candidates scoring strictly above the threshold, best first.
        Equal scores keep their original candidate order.
        """
        results = []
        for doc_type in candidates:
            score = self.score(query, doc_type)
            if score > self.threshold:
                results.append((doc_type, score))
        results.sort(key=lambda pair: pair[1], reverse=True)
        return results

    def rank(
        self,
        query: str,
        candidates: Sequence[DocumentTypeDefinition],
    ) -> List[DocumentTypeDefinition]:
        return [doc_type for doc_type, _ in self.scored(query, candidates)]


class KeywordRelevanceScorer(RelevanceScorer):
    """
    Adds token_weight for every query token found inside the document's
    name, category and subcategory, capped at max_score.
    """

    def __init__(
        self,
        token_weight: float = DEFAULT_TOKEN_WEIGHT,
        threshold: float = DEFAULT_THRESHOLD,
        max_score: float = DEFAULT_MAX_SCORE,
    ):
        self.token_weight = token_weight
        self.threshold = threshold
        self.max_score = max_score

    @staticmethod
    def searchable_text(doc_type: DocumentTypeDefinition) -> str:
        return " ".join([doc_type.name, doc_type.category, doc_type.subcategory]).lower()

    def score(self, query: str, doc_type: DocumentTypeDefinition) -> float:
        text = self.searchable_text(doc_type)
        matches = sum(1 for token in query.lower().split() if token in text)
        return min(self.max_score, round(matches * self.token_weight, 6))


def suggest_document_types(
    free_text: str,
    candidates: Sequence[DocumentTypeDefinition],
    scorer: Optional[RelevanceScorer] = None,
) -> List[DocumentTypeDefinition]:
    """Rank candidates for a description using the default keyword scorer."""
    scorer = scorer or KeywordRelevanceScorer()
    return scorer.rank(free_text, candidates)
