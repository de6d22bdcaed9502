"""
Shared pytest fixtures for the Beyond Presence test suite.

Provides factories for raw webhook payloads.
"""

from typing import Any, Dict, List, Optional

import pytest


@pytest.fixture
def create_message_payload():
    """
    Return a function that builds ``message`` webhook payloads.

    Example:
        payload = create_message_payload(agent_id="a2", text="hello")
    """

    def _create(
        call_id: str = "c1",
        agent_id: Optional[str] = "a1",
        user_name: Optional[str] = "Ann",
        sender: str = "user",
        text: str = "hi",
        sent_at: str = "t0",
        **kwargs: Any,
    ) -> Dict[str, Any]:
        call_data: Dict[str, Any] = {}
        if user_name is not None:
            call_data["userName"] = user_name
        if agent_id is not None:
            call_data["agentId"] = agent_id

        payload = {
            "event_type": "message",
            "call_id": call_id,
            "message": {"sender": sender, "message": text, "sent_at": sent_at},
            "call_data": call_data,
        }
        payload.update(kwargs)
        return payload

    return _create


@pytest.fixture
def create_call_ended_payload():
    """
    Return a function that builds ``call_ended`` webhook payloads.

    Example:
        payload = create_call_ended_payload(evaluation={"duration_minutes": "15"})
    """

    def _create(
        call_id: str = "c2",
        agent_id: Optional[str] = "a1",
        evaluation: Optional[Dict[str, Any]] = None,
        messages: Optional[List[Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        if evaluation is None:
            evaluation = {
                "duration_minutes": "12",
                "messages_count": 2,
                "topic": "demo",
                "user_sentiment": "positive",
            }
        if messages is None:
            messages = [
                {"sender": "a", "message": "hi", "sent_at": "t1"},
                {"sender": "b", "message": "bye", "sent_at": "t2"},
            ]

        payload: Dict[str, Any] = {
            "event_type": "call_ended",
            "call_id": call_id,
            "evaluation": evaluation,
            "messages": messages,
        }
        if agent_id is not None:
            payload["call_data"] = {"agentId": agent_id, "userName": "Bob"}
        payload.update(kwargs)
        return payload

    return _create


@pytest.fixture
def message_payload(create_message_payload):
    """The documented end-to-end ``message`` example."""
    return create_message_payload()


@pytest.fixture
def call_ended_payload(create_call_ended_payload):
    """The documented end-to-end ``call_ended`` example."""
    return create_call_ended_payload()
