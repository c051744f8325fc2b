"""Tests for content library filtering and analytics."""

from app.core.library import TOP_N, compute_content_analytics, count_by_asset, filter_assets


def _assets():
    return [
        {
            "id": "a1",
            "title": "Claims Automation Demo",
            "description": "End-to-end claims intake",
            "category": "concept_demo",
            "status": "published",
            "industry_tags": ["Insurance"],
            "persona_tags": ["CIO"],
            "stage_tags": ["Demo"],
            "cloud_tags": ["AWS"],
            "view_count": 40,
            "created_at": "2026-01-01T00:00:00Z",
            "last_accessed_at": "2026-03-01T00:00:00Z",
            "created_by": "u1",
        },
        {
            "id": "a2",
            "title": "Retail Case Study",
            "description": "Inventory forecasting results",
            "category": "case_study",
            "status": "draft",
            "industry_tags": ["Retail"],
            "persona_tags": ["VP Operations"],
            "stage_tags": ["Proposal"],
            "cloud_tags": ["GCP"],
            "view_count": 120,
            "created_at": "2026-02-01T00:00:00Z",
            "last_accessed_at": None,
            "created_by": "u2",
        },
        {
            "id": "a3",
            "title": "Security One-Pager",
            "description": "",
            "category": "one_pager",
            "status": "published",
            "industry_tags": [],
            "persona_tags": ["CISO"],
            "stage_tags": [],
            "cloud_tags": ["AWS", "Azure"],
            "view_count": None,
            "created_at": "2026-02-15T00:00:00Z",
            "created_by": "u1",
        },
    ]


class TestFilterAssets:
    def test_default_sort_by_views(self):
        assert [a["id"] for a in filter_assets(_assets())] == ["a2", "a1", "a3"]

    def test_recent_sort_falls_back_to_created_at(self):
        result = filter_assets(_assets(), sort_by="recent")
        assert [a["id"] for a in result] == ["a1", "a3", "a2"]

    def test_recent_sort_puts_unparseable_timestamp_last(self):
        assets = _assets()
        assets[0]["last_accessed_at"] = "not-a-date"

        result = filter_assets(assets, sort_by="recent")

        assert [a["id"] for a in result][-1] == "a1"

    def test_category_all_keeps_everything(self):
        assert len(filter_assets(_assets(), category="all")) == 3

    def test_category(self):
        assert [a["id"] for a in filter_assets(_assets(), category="case_study")] == ["a2"]

    def test_query_is_case_insensitive_over_title_description_and_tags(self):
        assert [a["id"] for a in filter_assets(_assets(), query="CLAIMS")] == ["a1"]
        assert [a["id"] for a in filter_assets(_assets(), query="forecasting")] == ["a2"]
        assert [a["id"] for a in filter_assets(_assets(), query="ciso")] == ["a3"]

    def test_tag_filters(self):
        assert [a["id"] for a in filter_assets(_assets(), cloud="AWS")] == ["a1", "a3"]
        assert [a["id"] for a in filter_assets(_assets(), industry="Retail")] == ["a2"]
        assert filter_assets(_assets(), stage="Negotiation") == []

    def test_status(self):
        assert [a["id"] for a in filter_assets(_assets(), status="draft")] == ["a2"]

    def test_does_not_mutate_input(self):
        assets = _assets()
        filter_assets(assets, sort_by="views")
        assert [a["id"] for a in assets] == ["a1", "a2", "a3"]


def test_count_by_asset():
    rows = [{"asset_id": "a1"}, {"asset_id": "a1"}, {"asset_id": "a2"}]
    assert count_by_asset(rows) == {"a1": 2, "a2": 1}


def test_content_analytics():
    analytics = compute_content_analytics(_assets(), {"a1": 3})

    assert analytics.total_content == 3
    assert analytics.published_content == 2
    assert analytics.draft_content == 1
    assert analytics.total_views == 160
    assert analytics.by_category == {"concept_demo": 1, "case_study": 1, "one_pager": 1}
    assert analytics.top_viewed[0]["id"] == "a2"
    assert analytics.most_used[0]["id"] == "a1"
    assert [a["id"] for a in analytics.unused] == ["a2", "a3"]
    assert analytics.top_creators[0].user_id == "u1"
    assert analytics.top_creators[0].count == 2


def test_content_analytics_caps_top_lists():
    assets = [{"id": str(i), "view_count": i, "created_by": f"u{i}"} for i in range(12)]
    analytics = compute_content_analytics(assets, {})

    assert len(analytics.top_viewed) == TOP_N
    assert len(analytics.top_creators) == TOP_N
    assert len(analytics.unused) == 12


def test_content_analytics_empty_library():
    analytics = compute_content_analytics([], {})
    assert analytics.total_content == 0
    assert analytics.top_viewed == []
