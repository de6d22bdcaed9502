"""
Pydantic models for Beyond Presence payloads.

This package contains:
- webhook.py: Inbound webhook events as a tagged union
- normalized.py: The three normalized output shapes
- agent.py: Request bodies for the REST operations
- credentials.py: API key credential and its authentication headers
"""
