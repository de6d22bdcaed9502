#!/usr/bin/env python3
"""Command-line interface for the Beyond Presence node.

Commands:
  - bey normalize     : Normalize webhook payload(s) from a JSON file
  - bey avatars       : List available avatars
  - bey create-agent  : Create a video agent
  - bey verify        : Check the configured API key
  - bey describe      : Print the declarative node description

Typical usage:
  bey normalize --input events.json --event-type call_ended
  BEY_API_KEY=... bey avatars
"""

from __future__ import annotations

import argparse
import json
import math
import sys
from pathlib import Path
from typing import Any

from beyond_presence.configs.config import Config
from beyond_presence.configs.settings import get_settings
from beyond_presence.host import StaticParameters
from beyond_presence.ingestion.adapters import AdapterConfig, BeyondPresenceAPIAdapter
from beyond_presence.ingestion.filters import FilterConfig
from beyond_presence.ingestion.webhook_pipeline import WebhookPipeline
from beyond_presence.monitoring.logging import setup_logging
from beyond_presence.node import BeyondPresenceNode


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="bey", description="Beyond Presence node CLI")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--json-logs", action="store_true", help="Emit JSON logs")
    sub = p.add_subparsers(dest="cmd")

    # normalize
    pn = sub.add_parser("normalize", help="Normalize webhook payload(s)")
    pn.add_argument("--input", "-i", required=True, help="JSON file: one payload or a list")
    pn.add_argument(
        "--event-type",
        default="all",
        choices=["all", "message", "call_ended"],
        help="Only emit events of this kind",
    )
    pn.add_argument(
        "--agent-ids",
        default=None,
        help="Comma-separated agent IDs to accept (enables agent filtering)",
    )
    pn.add_argument(
        "--lookup",
        default=None,
        choices=["canonical", "legacy"],
        help="Agent-ID lookup policy (defaults to BEY_AGENT_ID_LOOKUP)",
    )
    pn.add_argument(
        "--continue-on-fail",
        action="store_true",
        help="Emit error records for bad payloads instead of stopping",
    )

    # avatars
    sub.add_parser("avatars", help="List available avatars")

    # create-agent
    pc = sub.add_parser("create-agent", help="Create a video agent")
    pc.add_argument("--name", required=True)
    pc.add_argument("--avatar-id", required=True)
    pc.add_argument("--system-prompt", required=True)
    pc.add_argument("--language", default="")
    pc.add_argument("--greeting", default="")
    pc.add_argument("--max-session-length", type=int, default=0)

    # verify
    sub.add_parser("verify", help="Check the configured API key")

    # describe
    sub.add_parser("describe", help="Print the node description")

    return p.parse_args(argv)


def _read_json(path: str) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def _finite(data: Any) -> Any:
    # JSON has no NaN or Infinity; emit null instead
    if isinstance(data, float) and not math.isfinite(data):
        return None
    if isinstance(data, dict):
        return {k: _finite(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_finite(v) for v in data]
    return data


def _print(data: Any) -> None:
    print(json.dumps(_finite(data), indent=2, ensure_ascii=False, allow_nan=False))


def _adapter() -> BeyondPresenceAPIAdapter:
    settings = get_settings()
    return BeyondPresenceAPIAdapter(
        AdapterConfig(
            base_url=settings.BASE_URL,
            api_key=settings.api_key_value(),
            request_timeout=settings.REQUEST_TIMEOUT,
            max_retries=settings.MAX_RETRIES,
        )
    )


def main(argv: list[str] | None = None) -> int:
    """Run the CLI with the given arguments."""
    try:
        return _main_impl(argv)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON input: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _main_impl(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.version:
        from beyond_presence import __version__

        print(f"beyond-presence version {__version__}")
        return 0

    if not args.cmd:
        print("Error: Command required. Use --help for usage info.", file=sys.stderr)
        return 1

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, json_logs=args.json_logs or settings.JSON_LOGS)

    if args.cmd == "describe":
        _print(Config.load_node_description())
        return 0

    if args.cmd == "normalize":
        data = _read_json(args.input)
        payloads = data if isinstance(data, list) else [data]
        config = FilterConfig.from_parameters(
            event_type_filter=args.event_type,
            filter_by_agent_ids=args.agent_ids is not None,
            agent_ids=args.agent_ids,
            agent_id_lookup=args.lookup or settings.AGENT_ID_LOOKUP,
        )
        result = WebhookPipeline(config).run(payloads, continue_on_fail=args.continue_on_fail)
        _print(result.to_output())
        return 0

    if args.cmd == "verify":
        with _adapter() as adapter:
            ok = adapter.verify_credentials()
        print("API key is valid" if ok else "API key was rejected")
        return 0 if ok else 1

    parameters = StaticParameters()
    if args.cmd == "avatars":
        parameters.values.update({"resource": "avatar", "operation": "get"})
    else:
        parameters.values.update({
            "resource": "agent",
            "operation": "create",
            "name": args.name,
            "avatarId": args.avatar_id,
            "systemPrompt": args.system_prompt,
            "language": args.language,
            "greeting": args.greeting,
            "maxSessionLengthMinutes": args.max_session_length,
        })

    with _adapter() as adapter:
        result = BeyondPresenceNode(adapter).execute([{}], parameters)
    _print(result.to_output())
    return 0
