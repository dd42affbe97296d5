"""Sources of extra path pattern cache rules."""

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from src.models.distribution import CacheRule
from src.resolver.exceptions import ConfigError

logger = logging.getLogger(__name__)

_RULES_ADAPTER = TypeAdapter(list[CacheRule])


class CacheRuleSource(Protocol):
    """Supplies extra cache rules in precedence order."""

    def load_rules(self) -> list[CacheRule]: ...


class StaticCacheRuleSource:
    """Cache rules held in memory."""

    def __init__(self, rules: list[CacheRule] | None = None):
        self.rules = list(rules or [])

    def load_rules(self) -> list[CacheRule]:
        return list(self.rules)


class JsonCacheRuleSource:
    """
    Cache rules read from a JSON file.

    The file holds either a list of ``{"pathPattern": ..., "cache": ...}``
    objects or an object with that list under a ``"caching"`` key. A
    missing file means no extra rules.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_rules(self) -> list[CacheRule]:
        """
        Load rules in file order.

        Raises:
            ConfigError: If the file exists but is not valid
        """
        if not self.path.exists():
            logger.info(f"No cache rules file at {self.path}, using none")
            return []

        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {self.path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read cache rules from {self.path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("caching", [])

        try:
            rules = _RULES_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid cache rules in {self.path}: {e}") from e

        logger.info(f"Loaded {len(rules)} cache rules from {self.path}")
        return rules
