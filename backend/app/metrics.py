from __future__ import annotations

from prometheus_client import Counter, Histogram

# Vector search pipeline metrics
search_prepare_duration = Histogram(
    "vector_search_prepare_duration_seconds",
    "Duration from request receipt until the completion stream starts",
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10),
)

embedding_duration = Histogram(
    "vector_search_embedding_duration_seconds",
    "Embedding request duration",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

retrieval_duration = Histogram(
    "vector_search_retrieval_duration_seconds",
    "match_page_sections RPC duration",
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

context_sections_included = Histogram(
    "vector_search_context_sections",
    "Number of page sections included in the prompt context",
    buckets=(0, 1, 2, 3, 5, 8, 10),
)

moderation_flagged_total = Counter(
    "vector_search_moderation_flagged_total",
    "Total queries rejected by moderation",
)

search_errors_total = Counter(
    "vector_search_errors_total",
    "Total failed vector search requests",
    ["kind"],
)
