"""
Pattern Rule Loader

Reads pattern rules from YAML files. A file holds a top-level ``rules`` list;
each rule has an ``id``, an optional ``sub_id``, ``description`` and
``message``, and a ``tokens`` list whose keys mirror PatternToken fields:

    rules:
      - id: RUN_VERB
        message: Check the verb.
        tokens:
          - string: run
            pos_tag: VB.*
            pos_regexp: true
"""

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .types import PatternRule, PatternToken

logger = logging.getLogger(__name__)

_TOKEN_KEYS = {f.name for f in fields(PatternToken)}


class RuleDefinitionError(ValueError):
    """Raised when a rule definition cannot be turned into a PatternRule."""


def load_rules(path: Union[str, Path]) -> List[PatternRule]:
    """Load all pattern rules from a YAML file."""
    path = Path(path)
    logger.info(f"Loading pattern rules from {path}")
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuleDefinitionError(f"Invalid YAML in {path}: {e}") from e
    rules = parse_rules(data or {})
    logger.info(f"Loaded {len(rules)} pattern rules from {path}")
    return rules


def parse_rules(data: Dict[str, Any]) -> List[PatternRule]:
    """Build PatternRule objects from an already parsed YAML document."""
    if not isinstance(data, dict):
        raise RuleDefinitionError("Rule file must contain a mapping with a 'rules' list")
    raw_rules = data.get('rules', [])
    if not isinstance(raw_rules, list):
        raise RuleDefinitionError("'rules' must be a list")
    return [parse_rule(raw) for raw in raw_rules]


def parse_rule(raw: Dict[str, Any]) -> PatternRule:
    if not isinstance(raw, dict) or 'id' not in raw:
        raise RuleDefinitionError(f"Rule definition without id: {raw!r}")
    rule_id = str(raw['id'])
    raw_tokens = raw.get('tokens') or []
    if not isinstance(raw_tokens, list):
        raise RuleDefinitionError(f"Rule {rule_id}: 'tokens' must be a list")
    tokens = tuple(_parse_token(rule_id, t) for t in raw_tokens)
    sub_id = raw.get('sub_id')
    return PatternRule(
        id=rule_id,
        tokens=tokens,
        sub_id=str(sub_id) if sub_id is not None else None,
        description=str(raw.get('description', '')),
        message=str(raw.get('message', '')),
    )


def _parse_token(rule_id: str, raw: Any) -> PatternToken:
    # A bare string is shorthand for a literal token
    if isinstance(raw, str):
        return PatternToken(string=raw)
    if not isinstance(raw, dict):
        raise RuleDefinitionError(f"Rule {rule_id}: invalid token definition {raw!r}")
    unknown = set(raw) - _TOKEN_KEYS
    if unknown:
        raise RuleDefinitionError(
            f"Rule {rule_id}: unknown token keys {sorted(unknown)}"
        )
    values = dict(raw)
    if values.get('string') is None:
        values['string'] = ""
    else:
        values['string'] = str(values['string'])
    return PatternToken(**values)
