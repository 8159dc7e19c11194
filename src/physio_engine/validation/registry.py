"""Rule registry with auto-discovery of ValidationRule subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from physio_engine.validation.rules.base import ValidationRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Discovers and manages all ValidationRule implementations.

    Auto-discovers rules by scanning the validation/rules/ package tree for
    any concrete subclasses of ValidationRule. New rules are added simply by
    placing a .py file in the tier's subdirectory; no manual registration.
    """

    def __init__(self) -> None:
        self._rules: dict[str, ValidationRule] = {}

    def discover_rules(self) -> None:
        """Scan the rules package tree and register all ValidationRule subclasses."""
        import physio_engine.validation.rules as rules_pkg

        rules_path = Path(rules_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(rules_pkg.__name__, str(rules_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        """Recursively import all modules under a package and register rules."""
        for _importer, module_name, _is_pkg in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            module = importlib.import_module(module_name)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, ValidationRule)
                    and attr is not ValidationRule
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, rule: ValidationRule) -> None:
        """Register a rule instance by its rule_id."""
        logger.debug("Registered rule %s (%s tier)", rule.rule_id, rule.tier.name)
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> ValidationRule | None:
        """Retrieve a rule by its rule_id."""
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[ValidationRule]:
        """Return all registered rules sorted by tier, then rule_id."""
        return sorted(self._rules.values(), key=lambda r: (r.tier, r.rule_id))

    @property
    def rule_ids(self) -> list[str]:
        """List all registered rule IDs."""
        return list(self._rules.keys())
