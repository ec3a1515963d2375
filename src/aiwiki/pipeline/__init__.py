from aiwiki.pipeline.aggregator import AggregationError, TopicAggregator
from aiwiki.pipeline.enrichment import NO_SUMMARY, EnrichmentResolver

__all__ = [
    "AggregationError",
    "EnrichmentResolver",
    "NO_SUMMARY",
    "TopicAggregator",
]
