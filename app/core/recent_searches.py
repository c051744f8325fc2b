"""Recent search list maintenance (most recent first, deduplicated, capped)."""

MIN_QUERY_LENGTH = 5
DEFAULT_LIMIT = 5


def push_recent_search(existing: list[str], query: str, limit: int = DEFAULT_LIMIT) -> list[str]:
    """
    Return the updated recent-search list after running ``query``.

    Blank or very short queries leave the list unchanged. A repeated query
    moves to the front instead of appearing twice.
    """
    if not query.strip() or len(query) < MIN_QUERY_LENGTH:
        return list(existing)
    return [query, *(s for s in existing if s != query)][:limit]
