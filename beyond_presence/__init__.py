"""
Beyond Presence node for workflow automation.

This package exposes the Beyond Presence video-agent API as a workflow node:
creating agents, listing avatars, and normalizing inbound webhook events
(chat messages and call-ended summaries) into stable output shapes.

Key Components:
- BeyondPresenceNode: REST operations (agent create, avatar list)
- BeyondPresenceTrigger: webhook entry point and event normalization
- WebhookPipeline: parse -> filter -> normalize for a batch of items
"""

__version__ = "0.4.0"
