"""
Ingestion layer for Beyond Presence webhooks and REST calls.

Key Components:
- parsers: decode raw webhook bodies into JSON objects
- filters: event-type and agent-ID allow-list filtering
- normalization: coercion helpers, agent-ID lookup, event normalizer
- batch / webhook_pipeline: per-item iteration with continue-on-fail policy
- adapters: HTTP client for the Beyond Presence REST API
"""
