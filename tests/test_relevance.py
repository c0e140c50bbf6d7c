"""
Tests for document type relevance scoring.
"""

from courtfile.services.filing import (
    DocumentTypeDefinition,
    KeywordRelevanceScorer,
    RelevanceScorer,
    suggest_document_types,
)


def doc(id: str, name: str, category: str = "", subcategory: str = "") -> DocumentTypeDefinition:
    return DocumentTypeDefinition(
        id=id,
        name=name,
        category=category,
        subcategory=subcategory,
        required_fields=[],
        optional_fields=[],
    )


class TestKeywordScoring:
    """Additive keyword scores."""

    def test_motion_scores_at_least_divorce(self, motion_type, divorce_type):
        scorer = KeywordRelevanceScorer()
        query = "custody modification motion"
        assert scorer.score(query, motion_type) >= scorer.score(query, divorce_type)
        assert scorer.score(query, motion_type) > 0

    def test_each_token_adds_weight(self, motion_type):
        scorer = KeywordRelevanceScorer()
        assert scorer.score("motion", motion_type) == 0.2
        assert scorer.score("family motion", motion_type) == 0.4
        assert scorer.score("family law motion", motion_type) == 0.6

    def test_score_is_capped(self):
        scorer = KeywordRelevanceScorer()
        candidate = doc("x", "a b c d e f g", "h", "i")
        assert scorer.score("a b c d e f g h i", candidate) == 1.0

    def test_case_insensitive(self, motion_type):
        scorer = KeywordRelevanceScorer()
        assert scorer.score("FAMILY MOTION", motion_type) == scorer.score("family motion", motion_type)

    def test_substring_tokens_match(self, restraining_order_type):
        scorer = KeywordRelevanceScorer()
        assert scorer.score("restrain", restraining_order_type) == 0.2

    def test_adding_matching_token_never_lowers_score(self, motion_type):
        scorer = KeywordRelevanceScorer()
        queries = ["", "custody", "custody motion", "custody motion family", "law"]
        for query in queries:
            before = scorer.score(query, motion_type)
            after = scorer.score(f"{query} Motion", motion_type)
            assert after >= before


class TestRanking:
    """Threshold filtering and ordering."""

    def test_single_token_match_is_below_threshold(self, motion_type):
        assert suggest_document_types("motion", [motion_type]) == []

    def test_threshold_is_strict(self):
        scorer = KeywordRelevanceScorer(token_weight=0.15, threshold=0.3)
        candidate = doc("x", "Family Law Motion")
        assert scorer.score("family law", candidate) == 0.3
        assert scorer.rank("family law", [candidate]) == []

    def test_sorted_best_first(self, motion_type, divorce_type):
        ranked = suggest_document_types("family law divorce", [motion_type, divorce_type])
        assert [d.id for d in ranked] == ["test-divorce-petition", "test-family-motion"]

    def test_ties_keep_candidate_order(self):
        first = doc("first", "Family Law Petition", "Family Law", "Petition")
        second = doc("second", "Family Court Petition", "Family Court", "Petition")
        ranked = suggest_document_types("family petition", [first, second])
        assert [d.id for d in ranked] == ["first", "second"]
        ranked = suggest_document_types("family petition", [second, first])
        assert [d.id for d in ranked] == ["second", "first"]

    def test_scored_returns_scores(self, motion_type):
        pairs = KeywordRelevanceScorer().scored("family law motion", [motion_type])
        assert pairs == [(motion_type, 0.6)]

    def test_custom_scorer(self, motion_type, divorce_type):
        class ByNameLength(RelevanceScorer):
            threshold = 0.0

            def score(self, query, doc_type):
                return len(doc_type.name) / 100

        ranked = suggest_document_types("anything", [divorce_type, motion_type], scorer=ByNameLength())
        assert ranked[0].id == "test-family-motion"
