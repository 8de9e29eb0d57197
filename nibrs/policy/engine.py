"""
Policy Engine — Deterministic, ordered rule evaluation.

Classification precedence lives in the ruleset file, not in control flow:
for a given domain the first enabled rule whose patterns match (and whose
exclusions do not) decides the code.
"""

from dataclasses import dataclass
from typing import Optional, Union

from nibrs.core.logging import get_logger, LogChannel
from nibrs.policy.loader import get_ruleset
from nibrs.policy.models import (
    ClassificationRule,
    ClassificationRuleset,
    RuleDomain,
)

log = get_logger(LogChannel.MAPPING)


@dataclass
class RuleHit:
    """Result of a rule matching against text."""
    rule: ClassificationRule
    matched_text: str
    start: int
    end: int

    @property
    def code(self) -> str:
        return self.rule.code

    @property
    def confidence(self) -> float:
        return self.rule.confidence


class PolicyEngine:
    """
    Ordered classification rule engine.

    Rules are loaded lazily from YAML and cached by the loader.
    """

    def __init__(self, ruleset_name: str = "classification") -> None:
        self._ruleset_name = ruleset_name

    @property
    def ruleset(self) -> ClassificationRuleset:
        """The ruleset, lazily loaded through the loader cache."""
        return get_ruleset(self._ruleset_name)

    def classify(self, text: str, domain: Union[RuleDomain, str]) -> Optional[RuleHit]:
        """
        Return the first rule hit for a domain, or None.

        Args:
            text: Free text to classify
            domain: Which rule domain to evaluate
        """
        if not text:
            return None
        domain = RuleDomain(domain)

        for rule in self.ruleset.get_rules_by_domain(domain):
            hit = self._match_rule(rule, text)
            if hit is not None:
                log.debug(
                    "rule_matched",
                    domain=domain.value,
                    rule_id=rule.id,
                    code=rule.code,
                    matched=hit.matched_text,
                )
                return hit
        return None

    def find_matches(self, text: str, domain: Union[RuleDomain, str]) -> list[RuleHit]:
        """All rule hits for a domain, in precedence order."""
        if not text:
            return []
        domain = RuleDomain(domain)
        hits = []
        for rule in self.ruleset.get_rules_by_domain(domain):
            hit = self._match_rule(rule, text)
            if hit is not None:
                hits.append(hit)
        return hits

    def _match_rule(self, rule: ClassificationRule, text: str) -> Optional[RuleHit]:
        """Match a single rule against text."""
        for excluded in rule.match.compiled_exclude:
            if excluded.search(text):
                return None

        for regex in rule.match.compiled:
            m = regex.search(text)
            if m:
                return RuleHit(
                    rule=rule,
                    matched_text=m.group(),
                    start=m.start(),
                    end=m.end(),
                )
        return None


# Global engine instance
_engine: Optional[PolicyEngine] = None


def get_policy_engine() -> PolicyEngine:
    """Get or create the global policy engine instance."""
    global _engine
    if _engine is None:
        _engine = PolicyEngine()
    return _engine
