"""Services layer.

The recommendation pipeline, leaves first:
    hub_scoring      - derived metadata and scores for live Hub listings
    catalog          - ordered fallback across catalog tiers, with caching
    use_case         - keyword bonus from the user's use-case description
    recommend        - deterministic filter/score/rank engine
    rerank           - optional LLM blend over the ranked candidates
    analytics        - fire-and-forget decision logging
    recommendation   - orchestrates the above for one request
"""
