"""Author/title disambiguation for LOA listing labels (no network calls)."""

from __future__ import annotations

from typing import Callable, NamedTuple

SEPARATOR = ":"

# Substrings marking a series or collection title rather than a person.
_COLLECTIVE_WORK_TOKENS: tuple[str, ...] = (
    "The American Short Story",
    "The Best American",
    "American Poetry",
    "Collected Works",
    "Complete Works",
    "Selected Works",
    "Early Works",
    "Later Works",
    "Writings",
    "Letters",
    "Speeches",
    "Documents",
    "Chronicles",
    "Anthology",
    "Collection",
)

# Two-word phrases like "Civil War" or "New England" look like names but are not.
_TWO_WORD_PHRASE_TOKENS: tuple[str, ...] = ("War", "American", "New ", "Old ")


class LabelSplit(NamedTuple):
    author: str
    title: str


class NameRule(NamedTuple):
    """One row of the author decision table.

    ``matches`` decides whether the rule applies; ``verdict`` decides whether
    the candidate is a personal name once it does.
    """

    name: str
    matches: Callable[[str], bool]
    verdict: Callable[[str], bool]


def _never(_: str) -> bool:
    return False


def _mentions_collective_work(candidate: str) -> bool:
    return any(tok in candidate for tok in _COLLECTIVE_WORK_TOKENS)


def _word_count(candidate: str) -> int:
    return len(candidate.split())


def _has_lowercase(candidate: str) -> bool:
    # All-caps single words are acronyms or titles, not surnames.
    return any(ch.islower() for ch in candidate)


def _looks_like_full_name(candidate: str) -> bool:
    words = candidate.split()
    if not (words[0][:1].isupper() and words[-1][:1].isupper()):
        return False
    if len(words) == 2 and any(tok in candidate for tok in _TWO_WORD_PHRASE_TOKENS):
        return False
    return True


# Evaluated in order; the first rule that matches decides.
NAME_RULES: tuple[NameRule, ...] = (
    NameRule("leading_article", lambda c: c.startswith("The "), _never),
    NameRule("collective_work", _mentions_collective_work, _never),
    NameRule("single_word", lambda c: _word_count(c) == 1, _has_lowercase),
    NameRule("multi_word", lambda c: _word_count(c) >= 2, _looks_like_full_name),
)


def matching_rule(candidate: str) -> NameRule | None:
    """Return the first rule in NAME_RULES that applies to candidate, if any."""
    for rule in NAME_RULES:
        if rule.matches(candidate):
            return rule
    return None


def is_likely_author(candidate: str) -> bool:
    """Return True if the text before the separator reads as a personal name.

    Precision over recall: when unsure, say no, so a series title is kept
    whole instead of being split into a spurious author.
    """
    rule = matching_rule(candidate)
    if rule is None:
        return False
    return rule.verdict(candidate)


def split_author_title(raw_label: str) -> LabelSplit:
    """Split "Author: Title" labels; anything else is returned whole as the title.

    Best-effort heuristic. A wrong split is not detected or reported.
    """
    if SEPARATOR not in raw_label:
        return LabelSplit(author="", title=raw_label)

    before, _, after = raw_label.partition(SEPARATOR)
    candidate = before.strip()

    if is_likely_author(candidate):
        return LabelSplit(author=candidate, title=after.strip())
    return LabelSplit(author="", title=raw_label)
