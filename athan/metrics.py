# athan/metrics.py

from prometheus_client import Counter, Histogram

# Define Prometheus metrics

# Cache Metrics
CACHE_HITS = Counter('athan_cache_hits_total', 'Total month cache hits', ['tier'])
CACHE_MISSES = Counter('athan_cache_misses_total', 'Total month cache misses', ['tier'])

# API Metrics
API_REQUESTS_TOTAL = Counter('athan_api_requests_total', 'Total remote API requests', ['adapter_name', 'endpoint', 'status'])
API_REQUEST_DURATION_SECONDS = Histogram('athan_api_request_duration_seconds', 'Remote API request duration in seconds', ['adapter_name', 'endpoint'])

# Degraded paths
FALLBACK_CALCULATIONS_TOTAL = Counter('athan_fallback_calculations_total', 'Remote lookups answered by local calculation')
COALESCED_FETCHES_TOTAL = Counter('athan_coalesced_fetches_total', 'Callers that joined an in-flight month fetch')
STALE_RESPONSES_TOTAL = Counter('athan_stale_responses_total', 'Fetched months withheld from a caller that changed location')
