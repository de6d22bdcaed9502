# beyond_presence/configs/config.py
import yaml
from pathlib import Path
from functools import lru_cache


class Config:
    """
    Static configuration for the Beyond Presence node.
    """

    CONFIG_DIR = Path(__file__).parent.resolve()
    NODE_DESCRIPTION_PATH = CONFIG_DIR / "node.yaml"

    @classmethod
    @lru_cache
    def load_node_description(cls) -> dict:
        """Loads the declarative node description (resources, operations, trigger fields)."""
        if not cls.NODE_DESCRIPTION_PATH.exists():
            raise FileNotFoundError(f"Missing config at {cls.NODE_DESCRIPTION_PATH}")

        with open(cls.NODE_DESCRIPTION_PATH, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    @classmethod
    def trigger_defaults(cls) -> dict:
        """Default value of every trigger property, keyed by property name."""
        properties = cls.load_node_description()["trigger"]["properties"]
        return {prop["name"]: prop.get("default") for prop in properties}

    @classmethod
    def operation_routing(cls) -> dict:
        """Map (resource, operation) to its request method and path."""
        routing = {}
        for resource in cls.load_node_description()["node"]["resources"]:
            for operation in resource["operations"]:
                routing[(resource["value"], operation["value"])] = operation["routing"]
        return routing
