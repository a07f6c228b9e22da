from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Pattern, Tuple


@dataclass(frozen=True, slots=True)
class SubstitutionRule:
    term: str
    translation: str
    pattern: Pattern[str]

    def apply(self, text: str) -> str:
        # Callable replacement keeps backslashes in the translation literal.
        return self.pattern.sub(lambda _match: self.translation, text)


def whole_word_pattern(term: str) -> Pattern[str]:
    """Match ``term`` only where it is not adjacent to another word character."""

    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)")


def ordered_terms(mapping: Mapping[str, str]) -> List[str]:
    """Return the dictionary keys, longest first; equal lengths keep source order."""

    return sorted(mapping, key=len, reverse=True)


def compile_rules(mapping: Mapping[str, str]) -> Tuple[SubstitutionRule, ...]:
    return tuple(
        SubstitutionRule(term=term, translation=mapping[term], pattern=whole_word_pattern(term))
        for term in ordered_terms(mapping)
        if term
    )


class SubstitutionEngine:
    """Replace whole-word dictionary terms in text, longest term first.

    Rules run one after another, each on the output of the previous one, so a
    translation inserted by a longer term may itself be rewritten by a later,
    shorter term. Running the engine twice over the same text is therefore not
    guaranteed to be a no-op.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self.mapping = mapping
        self.rules = compile_rules(mapping)

    def substitute(self, text: Any) -> Any:
        if not isinstance(text, str) or not text:
            return text

        processed = text
        for rule in self.rules:
            processed = rule.apply(processed)
        return processed


def substitute(text: Any, mapping: Mapping[str, str]) -> Any:
    """Apply ``mapping`` to ``text`` with a throwaway engine."""

    if not mapping:
        return text
    return SubstitutionEngine(mapping).substitute(text)
