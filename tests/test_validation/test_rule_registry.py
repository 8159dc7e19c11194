"""Tests for rule auto-discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from physio_engine.config import EngineSettings
from physio_engine.models.enums import ValidationTier
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.registry import RuleRegistry
from physio_engine.validation.rules.base import ValidationRule


class _AlwaysQuiet(ValidationRule):
    rule_id = "always_quiet"
    version = "0.1.0"
    tier = ValidationTier.SCHEDULE
    required_data: list[str] = []

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        return None


class TestRuleRegistry:
    def setup_method(self) -> None:
        self.registry = RuleRegistry()
        self.registry.discover_rules()

    def test_discovers_every_rule(self) -> None:
        assert sorted(self.registry.rule_ids) == [
            "field_test_schedule",
            "injury_state",
            "protocol_compatibility",
            "readiness_state",
            "threshold_currency",
            "training_load",
        ]

    def test_rules_sorted_by_tier(self) -> None:
        tiers = [rule.tier for rule in self.registry.get_all_rules()]
        assert tiers == sorted(tiers)
        assert self.registry.get_all_rules()[0].rule_id == "injury_state"

    def test_get_unknown_returns_none(self) -> None:
        assert self.registry.get("x") is None

    def test_manual_registration(self) -> None:
        self.registry.register(_AlwaysQuiet())
        assert self.registry.get("always_quiet") is not None
        assert self.registry.get_all_rules()[-1].rule_id == "always_quiet"

    def test_broken_rule_module_fails_loudly(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        package = tmp_path / "broken_rule_pkg"
        package.mkdir()
        (package / "__init__.py").write_text("")
        (package / "bad_rule.py").write_text("import physio_engine_missing_dependency\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(ImportError):
            RuleRegistry()._scan_package("broken_rule_pkg", str(package))
