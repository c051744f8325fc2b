"""Tests for query and "more like this" asset recommendations."""

from uuid import uuid4

from app.core.matching import (
    QUERY_MATCH_CONFIDENCE,
    SIMILAR_MATCH_CONFIDENCE,
    is_similar,
    more_like_this,
    recommend_for_query,
    unlinked_recommendations,
)


def _asset(title="Asset", type=None, industry_tags=None, cloud_tags=None, **extra):
    return {
        "id": str(uuid4()),
        "title": title,
        "type": type,
        "industry_tags": industry_tags or [],
        "cloud_tags": cloud_tags or [],
        **extra,
    }


class TestRecommendForQuery:
    def test_every_asset_gets_fixed_confidence(self):
        assets = [_asset("One"), _asset("Two"), _asset("Three")]

        results = recommend_for_query("claims automation", assets)

        assert len(results) == 3
        assert all(r.confidence_score == QUERY_MATCH_CONFIDENCE == 0.92 for r in results)

    def test_reason_quotes_query(self):
        results = recommend_for_query("fraud detection", [_asset()])
        assert results[0].reason == 'Matches your query: "fraud detection"'

    def test_preserves_source_order(self):
        assets = [_asset("B"), _asset("A"), _asset("C")]
        results = recommend_for_query("anything", assets)
        assert [r.asset_id for r in results] == [a["id"] for a in assets]

    def test_no_assets_returns_empty(self):
        assert recommend_for_query("anything", []) == []


class TestIsSimilar:
    def test_same_type(self):
        assert is_similar(_asset(type="Demo"), _asset(type="Demo"))

    def test_shared_industry_tag(self):
        ref = _asset(type="Demo", industry_tags=["Healthcare", "Insurance"])
        candidate = _asset(type="Deck", industry_tags=["Insurance"])
        assert is_similar(ref, candidate)

    def test_shared_cloud_tag(self):
        ref = _asset(type="Demo", cloud_tags=["AWS"])
        candidate = _asset(type="Deck", cloud_tags=["AWS", "GCP"])
        assert is_similar(ref, candidate)

    def test_nothing_shared(self):
        ref = _asset(type="Demo", industry_tags=["Retail"], cloud_tags=["Azure"])
        candidate = _asset(type="Deck", industry_tags=["Energy"], cloud_tags=["GCP"])
        assert not is_similar(ref, candidate)

    def test_both_untyped_is_not_a_type_match(self):
        assert not is_similar(_asset(type=None), _asset(type=None))


class TestMoreLikeThis:
    def test_never_includes_reference(self):
        ref = _asset("Reference", type="Demo")
        candidates = [ref, _asset(type="Demo"), _asset(type="Demo")]

        results = more_like_this(ref, candidates)

        assert ref["id"] not in [r.asset_id for r in results]
        assert len(results) == 2

    def test_reference_only_pool_returns_empty(self):
        ref = _asset("Reference", type="Demo")
        assert more_like_this(ref, [ref]) == []

    def test_caps_at_five(self):
        ref = _asset(type="Demo")
        candidates = [_asset(type="Demo") for _ in range(9)]

        results = more_like_this(ref, candidates)

        assert len(results) == 5
        assert [r.asset_id for r in results] == [c["id"] for c in candidates[:5]]

    def test_custom_limit(self):
        ref = _asset(type="Demo")
        candidates = [_asset(type="Demo") for _ in range(4)]
        assert len(more_like_this(ref, candidates, limit=2)) == 2

    def test_fixed_confidence_and_reason(self):
        ref = _asset("Claims Demo", type="Demo", industry_tags=["Insurance"])
        same_type = _asset(type="Demo")
        same_tag = _asset(type="Deck", industry_tags=["Insurance"])

        results = more_like_this(ref, [same_type, same_tag])

        assert all(r.confidence_score == SIMILAR_MATCH_CONFIDENCE == 0.85 for r in results)
        assert results[0].reason == "Similar to Claims Demo - matches type"
        assert results[1].reason == "Similar to Claims Demo - matches tags"

    def test_untyped_tag_match_reports_tags(self):
        ref = _asset("Claims Demo", industry_tags=["Insurance"])
        candidate = _asset(industry_tags=["Insurance"])

        results = more_like_this(ref, [candidate])

        assert len(results) == 1
        assert results[0].reason.endswith("matches tags")

    def test_skips_dissimilar(self):
        ref = _asset(type="Demo", industry_tags=["Retail"])
        candidates = [_asset(type="Video"), _asset(type="Deck", industry_tags=["Retail"])]

        results = more_like_this(ref, candidates)

        assert [r.asset_id for r in results] == [candidates[1]["id"]]

    def test_no_candidates_returns_empty(self):
        assert more_like_this(_asset(type="Demo"), []) == []


def test_unlinked_recommendations_skips_already_linked():
    linked_id = str(uuid4())
    fresh_id = str(uuid4())
    recommendations = [{"asset_id": linked_id}, {"asset_id": fresh_id}]
    linked = [{"asset_id": linked_id}]

    result = unlinked_recommendations(recommendations, linked)

    assert [r["asset_id"] for r in result] == [fresh_id]
