"""
Policy Models — Data structures for classification rules.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RuleDomain(str, Enum):
    """What a rule classifies text into."""
    OFFENSE = "offense"
    LOCATION = "location"
    WEAPON = "weapon"
    PROPERTY = "property"


class MatchType(str, Enum):
    """Types of pattern matching.

    - KEYWORD: Word boundary matching
    - PHRASE: Exact substring matching
    - REGEX: Regular expression matching
    """
    KEYWORD = "keyword"
    PHRASE = "phrase"
    REGEX = "regex"


@dataclass
class RuleMatch:
    """Pattern matching configuration for a rule."""
    type: MatchType
    patterns: list[str]
    case_sensitive: bool = False
    # Rule is vetoed when any of these regexes matches the text
    exclude: list[str] = field(default_factory=list)

    # Compiled by the loader
    compiled: list[re.Pattern] = field(default_factory=list, repr=False)
    compiled_exclude: list[re.Pattern] = field(default_factory=list, repr=False)


@dataclass
class ClassificationRule:
    """A single (pattern, code, confidence) classification rule."""
    id: str
    domain: RuleDomain
    category: str
    code: str
    confidence: float
    match: RuleMatch
    description: str = ""
    enabled: bool = True
    tags: list[str] = field(default_factory=list)


@dataclass
class RulesetSettings:
    """Global ruleset settings."""
    default_confidence: float = 0.9


@dataclass
class ClassificationRuleset:
    """An ordered classification ruleset.

    Rule order within a domain is precedence: the first matching rule wins.
    """
    version: str
    name: str
    description: str
    settings: RulesetSettings
    rules: list[ClassificationRule]

    def get_rules_by_domain(self, domain: RuleDomain) -> list[ClassificationRule]:
        """Enabled rules for a domain, in precedence order."""
        return [r for r in self.rules if r.domain == domain and r.enabled]

    def get_rule(self, rule_id: str) -> Optional[ClassificationRule]:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def categories(self, domain: RuleDomain) -> list[str]:
        """Distinct categories of a domain, in first-appearance order."""
        seen: list[str] = []
        for rule in self.get_rules_by_domain(domain):
            if rule.category not in seen:
                seen.append(rule.category)
        return seen
