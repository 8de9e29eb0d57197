"""
Policy Loader — Load and parse classification rulesets from YAML files.

Rules are validated on load: the domain must be known, the code must be in
the domain's code space, and every pattern must compile. A bad packaged
ruleset is a programming error and raises RulesetError.
"""

import re
from pathlib import Path

import yaml

from nibrs.codes.tables import (
    LOCATION_CODE_SPACE,
    OFFENSE_CODES,
    PROPERTY_CODE_SPACE,
    WEAPON_CODE_SPACE,
)
from nibrs.core.errors import RulesetError
from nibrs.core.logging import get_logger, LogChannel
from nibrs.policy.models import (
    ClassificationRule,
    ClassificationRuleset,
    MatchType,
    RuleDomain,
    RuleMatch,
    RulesetSettings,
)

log = get_logger(LogChannel.MAPPING)

# Default ruleset directory
RULESETS_DIR = Path(__file__).parent / "rulesets"

_CODE_SPACES = {
    RuleDomain.OFFENSE: OFFENSE_CODES,
    RuleDomain.LOCATION: LOCATION_CODE_SPACE,
    RuleDomain.WEAPON: WEAPON_CODE_SPACE,
    RuleDomain.PROPERTY: PROPERTY_CODE_SPACE,
}


def load_ruleset(name: str = "classification") -> ClassificationRuleset:
    """
    Load a classification ruleset by name.

    Args:
        name: Ruleset name (without .yaml extension)

    Returns:
        Parsed ClassificationRuleset

    Raises:
        RulesetError: If the file is missing or invalid
    """
    path = RULESETS_DIR / f"{name}.yaml"
    if not path.exists():
        raise RulesetError(f"Ruleset not found: {path}")
    return load_ruleset_from_path(path)


def load_ruleset_from_path(path: Path) -> ClassificationRuleset:
    """Load a ruleset from an arbitrary path."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RulesetError(f"Ruleset {path} is not valid YAML: {e}") from e

    ruleset = parse_ruleset(data or {})
    log.verbose(
        "ruleset_loaded",
        name=ruleset.name,
        version=ruleset.version,
        rules=len(ruleset.rules),
    )
    return ruleset


def parse_ruleset(data: dict) -> ClassificationRuleset:
    """Parse a ruleset from a dictionary."""
    settings_data = data.get("settings", {})
    settings = RulesetSettings(
        default_confidence=settings_data.get("default_confidence", 0.9),
    )

    rules = [parse_rule(rule_data, settings) for rule_data in data.get("rules", [])]

    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise RulesetError(f"Duplicate rule id: {rule.id}")
        seen.add(rule.id)

    return ClassificationRuleset(
        version=str(data.get("version", "1.0")),
        name=data.get("name", "unnamed"),
        description=data.get("description", ""),
        settings=settings,
        rules=rules,
    )


def parse_rule(data: dict, settings: RulesetSettings = None) -> ClassificationRule:
    """Parse and validate a single rule from a dictionary."""
    settings = settings or RulesetSettings()
    rule_id = data.get("id", "<missing id>")
    try:
        match_data = data["match"]
        match = RuleMatch(
            type=MatchType(match_data.get("type", "regex")),
            patterns=list(match_data["patterns"]),
            case_sensitive=match_data.get("case_sensitive", False),
            exclude=list(match_data.get("exclude", [])),
        )
        rule = ClassificationRule(
            id=data["id"],
            domain=RuleDomain(data["domain"]),
            category=data.get("category", "uncategorized"),
            code=str(data["code"]),
            confidence=float(data.get("confidence", settings.default_confidence)),
            match=match,
            description=data.get("description", ""),
            enabled=data.get("enabled", True),
            tags=data.get("tags", []),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RulesetError(f"Invalid rule {rule_id}: {e}") from e

    if rule.code not in _CODE_SPACES[rule.domain]:
        raise RulesetError(
            f"Rule {rule.id} maps to '{rule.code}', not a valid {rule.domain.value} code"
        )
    if not 0.0 <= rule.confidence <= 1.0:
        raise RulesetError(f"Rule {rule.id} confidence {rule.confidence} out of range")
    if not rule.match.patterns:
        raise RulesetError(f"Rule {rule.id} has no patterns")

    _compile(rule)
    return rule


def _compile(rule: ClassificationRule) -> None:
    """Compile match and exclude patterns onto the rule."""
    flags = 0 if rule.match.case_sensitive else re.IGNORECASE
    try:
        rule.match.compiled = [
            re.compile(_to_regex(p, rule.match.type), flags) for p in rule.match.patterns
        ]
        rule.match.compiled_exclude = [re.compile(p, flags) for p in rule.match.exclude]
    except re.error as e:
        raise RulesetError(f"Rule {rule.id} has an invalid pattern: {e}") from e


def _to_regex(pattern: str, match_type: MatchType) -> str:
    if match_type == MatchType.KEYWORD:
        return rf"\b{re.escape(pattern)}\b"
    if match_type == MatchType.PHRASE:
        return re.escape(pattern)
    return pattern


def list_rulesets() -> list[str]:
    """List available ruleset names."""
    return sorted(p.stem for p in RULESETS_DIR.glob("*.yaml"))


# Cache for loaded rulesets
_cache: dict[str, ClassificationRuleset] = {}


def get_ruleset(name: str = "classification", use_cache: bool = True) -> ClassificationRuleset:
    """Get a ruleset, using cache by default."""
    if use_cache and name in _cache:
        return _cache[name]

    ruleset = load_ruleset(name)
    _cache[name] = ruleset
    return ruleset


def clear_cache() -> None:
    """Clear the ruleset cache."""
    _cache.clear()
