"""Pattern catalogue used by the brain dump extractor.

Each category maps to an ordered list of compiled rules. A rule with a
capture group contributes group 1; a rule without one contributes the
whole match. Order only affects the first-seen ordering of results.
"""

from __future__ import annotations

import re

_WEEKDAYS = r"monday|tuesday|wednesday|thursday|friday|saturday|sunday"
_FLAGS = re.IGNORECASE | re.MULTILINE

ACTION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b(?:need to|have to|should|must|gotta|gonna)\s+(.+?)(?:\.|,|$)", _FLAGS),
    re.compile(r"\b(?:todo|task|action):\s*(.+?)(?:\.|$)", _FLAGS),
    re.compile(r"[-•]\s*\[\s*\]\s*(.+?)$", _FLAGS),
    re.compile(r"\b(?:remind me to|don't forget to)\s+(.+?)(?:\.|$)", _FLAGS),
]

# Names must be capitalised; only the verb of address is case-insensitive.
PEOPLE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"@(\w+)"),
    re.compile(
        r"\b(?i:talk to|email|call|text|message|ping|ask)[ \t]+"
        r"([A-Z][a-z]+(?:[ \t]+[A-Z][a-z]+)?)"
    ),
]

DATE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b(today|tomorrow|tonight)\b", re.IGNORECASE),
    re.compile(rf"\b(next\s+(?:week|month|{_WEEKDAYS}))\b", re.IGNORECASE),
    re.compile(rf"\b(on\s+(?:{_WEEKDAYS}))\b", re.IGNORECASE),
    re.compile(rf"\b(by\s+(?:{_WEEKDAYS}|end of (?:day|week|month)))\b", re.IGNORECASE),
    re.compile(r"\b(\d{1,2}/\d{1,2}(?:/\d{2,4})?)\b"),
]

QUESTION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(
        r"\b(?:should (?:I|we)|do (?:I|we) need to|what if|how (?:do|should) (?:I|we))\s+(.+?\?)",
        _FLAGS,
    ),
    # Trailing-line form: no group, the whole line is kept.
    re.compile(r"^[^\n]*\?[ \t\r]*$", re.MULTILINE),
]

IDEA_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b(?:what if|maybe|could|idea:)\s+(.+?)(?:\.|$)", _FLAGS),
    re.compile(r"\b(?:might be cool to|would be nice to)\s+(.+?)(?:\.|$)", _FLAGS),
]

BLOCKER_PATTERNS: list[re.Pattern[str]] = [
    re.compile(
        r"\b(?:blocked on|waiting for|need .+ before|can(?:'|’)?t .+ until)\s+(.+?)(?:\.|$)",
        _FLAGS,
    ),
    re.compile(r"\b(?:problem:|issue:|blocker:)\s*(.+?)(?:\.|$)", _FLAGS),
]

# "<word> or <word>" on a single line. Quoted spans are blanked out before
# matching (see QUOTED_SPAN_PATTERN).
DECISION_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b([\w-]+[ \t]+or[ \t]+[\w-]+)\b", re.IGNORECASE),
]

QUOTED_SPAN_PATTERN = re.compile(r"\"[^\"\n]*\"|“[^”\n]*”|`[^`\n]*`")

# Sides that turn "X or Y" into an idiom rather than a choice.
DECISION_FILLER_WORDS: frozenset[str] = frozenset(
    {"and", "either", "less", "later", "more", "not", "or", "sooner", "whether"}
)

PATTERNS: dict[str, list[re.Pattern[str]]] = {
    "actions": ACTION_PATTERNS,
    "people": PEOPLE_PATTERNS,
    "dates": DATE_PATTERNS,
    "questions": QUESTION_PATTERNS,
    "ideas": IDEA_PATTERNS,
    "blockers": BLOCKER_PATTERNS,
    "decisions": DECISION_PATTERNS,
}
