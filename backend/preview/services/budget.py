"""Length budget tracking for text content.

The budget is counted in characters or in words. In character mode a
run of blank characters counts as a single unit; in word mode only the
start of each non-blank run is charged. Once the budget is spent the
text is cut, the cut is adjusted to word boundaries per the cut policy,
and the ellipsis is appended.
"""

import re
from dataclasses import dataclass

from preview.core.options import TruncationOptions

BLANK_CHARS = " \t\n\r\f\v\u00a0\u2028\u2029"

_BLANKS = frozenset(BLANK_CHARS)
_WHITESPACE_RUN = re.compile(r"\s+")
_NON_WORD = re.compile(r"\W")
_LEADING_WORD = re.compile(r"\w+")
_TRAILING_WORD = re.compile(r"\w+$")


def is_blank(char: str) -> bool:
    return char in _BLANKS


def has_content(text: str) -> bool:
    """True when text holds at least one non-blank character."""
    return any(ch not in _BLANKS for ch in text)


@dataclass
class Budget:
    """Budget state for a single truncation call.

    Created fresh per call and threaded through every text node of one
    traversal; never shared between calls.
    """

    options: TruncationOptions
    remaining: int
    # Character mode: whether the last counted character was blank.
    # Carried across text nodes, so a blank run split by markup is one unit.
    prev_blank: bool = False
    # Whether any non-blank text has been kept so far
    kept_content: bool = False
    truncated: bool = False

    @classmethod
    def start(cls, options: TruncationOptions) -> "Budget":
        return cls(options=options, remaining=max(options.length or 0, 0))

    @property
    def spent(self) -> bool:
        return self.remaining <= 0


def collapse_whitespace(text: str, options: TruncationOptions) -> str:
    if options.keep_whitespaces:
        return text
    return _WHITESPACE_RUN.sub(" ", text)


def truncate_text(budget: Budget, text: str) -> str:
    """Collapse whitespace, then charge ``text`` against the budget."""
    text = collapse_whitespace(text, budget.options)
    if budget.options.by_words:
        return truncate_words(budget, text)
    return truncate_chars(budget, text)


def truncate_chars(budget: Budget, text: str) -> str:
    if budget.spent or not text:
        return ""

    size = len(text)
    index = 0
    count = 0
    prev_blank = budget.prev_blank
    while index < size:
        cur_blank = is_blank(text[index])
        if count == budget.remaining:
            # blanks right after the limit ride along for free
            if not cur_blank:
                break
            index += 1
            continue
        index += 1
        if not (cur_blank and prev_blank):
            count += 1
        prev_blank = cur_blank

    budget.remaining -= count
    budget.prev_blank = prev_blank
    return _finish(budget, text, index)


def truncate_words(budget: Budget, text: str) -> str:
    if budget.spent or not text:
        return ""

    size = len(text)
    index = 0
    words = 0
    # a text node always starts a new word
    prev_blank = True
    while index < size:
        cur_blank = is_blank(text[index])
        index += 1
        if cur_blank == prev_blank:
            continue
        prev_blank = cur_blank
        if words == budget.remaining:
            if cur_blank:
                continue
            # current char opens the first word past the limit
            index -= 1
            break
        if not cur_blank:
            words += 1

    budget.remaining -= words
    return _finish(budget, text, index)


def _finish(budget: Budget, text: str, index: int) -> str:
    first_word = not budget.kept_content
    budget.kept_content = budget.kept_content or has_content(text[:index])
    if not budget.spent or index == len(text):
        return text
    return seal(budget, cut_at(text, index, budget.options, first_word))


def cut_at(
    text: str, index: int, options: TruncationOptions, first_word: bool = False
) -> str:
    """Cut ``text`` at ``index``, moving the cut off a split word if asked.

    ``first_word`` is true when no non-blank text was kept before ``text``.
    """
    kept = text[:index]
    policy = options.cut_policy
    if policy.mode == "exact":
        return kept

    # already on a word boundary
    if _NON_WORD.search(text[max(index - 1, 0):index + 1]):
        return kept

    if policy.mode == "trim":
        trimmed = _TRAILING_WORD.sub("", kept)
        # keep a first word that alone overflows the limit
        if first_word and not has_content(trimmed):
            return kept
        return trimmed

    match = _LEADING_WORD.match(text, index)
    rest = match.group() if match else ""
    return kept + rest[:policy.max_chars]


def seal(budget: Budget, kept: str) -> str:
    """Append the ellipsis to the last kept non-blank character."""
    budget.truncated = True
    return kept.rstrip(BLANK_CHARS) + budget.options.ellipsis
