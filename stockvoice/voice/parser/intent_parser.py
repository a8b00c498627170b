"""Intent detection for inventory voice commands.

Evaluation order, first match wins:
    1. multi-word phrases ("generate a bill", "remove the product")
    2. whole-word keywords, intent by intent in CommandIntent order
    3. a "<number> <unit>" quantity anywhere in the text → ADD_PRODUCT
    4. UNKNOWN

Phrases are checked before keywords so "generate bill" does not fall
through to the plain "bill" keyword (CREATE_BILL).
"""

from __future__ import annotations

import re

from stockvoice.voice.models import CommandIntent

# (pattern, intent). Checked before any single keyword.
PHRASE_PATTERNS: list[tuple[str, CommandIntent]] = [
    (r"\b(?:generate|make|create|prepare)\s+(?:a\s+|the\s+|new\s+)?bill\b", CommandIntent.GENERATE_BILL),
    (r"\b(?:remove|delete|take\s+out)\s+(?:the\s+|this\s+|a\s+)?product\b", CommandIntent.REMOVE_PRODUCT),
]

INTENT_KEYWORDS: dict[CommandIntent, list[str]] = {
    CommandIntent.ADD_PRODUCT: [
        "add", "insert", "put", "place", "stock", "register", "record",
        "upload", "new product", "create product",
    ],
    CommandIntent.UPDATE_PRODUCT: ["update", "modify", "change", "edit", "revise"],
    CommandIntent.SEARCH_PRODUCT: ["search", "find", "look for", "locate", "where is", "show"],
    CommandIntent.DELETE_PRODUCT: ["delete", "remove", "discard", "trash", "get rid of", "take out"],
    CommandIntent.CREATE_BILL: ["bill", "invoice", "receipt", "checkout", "billing"],
}

QUANTITY_PATTERN = r"\b\d+(?:\.\d+)?\s*(?:kg|g|l|ml|pcs|box(?:es)?|pack(?:et)?s?|dozen|bottles?)\b"

PHRASE_CONFIDENCE = 0.95
KEYWORD_CONFIDENCE = 0.85
QUANTITY_CONFIDENCE = 0.6

# Verbs that introduce the search/update/delete target
_TARGET_VERBS = (
    r"search(?:\s+for)?|find|look\s+for|locate|where\s+is|show(?:\s+me)?"
    r"|update|modify|change|edit|revise"
    r"|delete|remove|discard|trash|get\s+rid\s+of|take\s+out"
)
_TARGET_INTENTS = frozenset({
    CommandIntent.SEARCH_PRODUCT,
    CommandIntent.UPDATE_PRODUCT,
    CommandIntent.DELETE_PRODUCT,
    CommandIntent.REMOVE_PRODUCT,
})

# Compiled pattern cache
_compiled_phrases: list[tuple[re.Pattern, CommandIntent]] | None = None
_compiled_keywords: list[tuple[re.Pattern, CommandIntent]] | None = None
_quantity_re = re.compile(QUANTITY_PATTERN, re.IGNORECASE)
_target_re = re.compile(
    rf"\b(?:{_TARGET_VERBS})\s+(?:the\s+|a\s+|an\s+|my\s+|some\s+)?(?:product\s+)?(.+?)"
    r"(?:\s+(?:in|on|at|from)\s+.*)?$",
    re.IGNORECASE,
)


def _keyword_regex(keyword: str) -> str:
    return r"\b" + r"\s+".join(re.escape(w) for w in keyword.split()) + r"\b"


def _get_patterns() -> tuple[list[tuple[re.Pattern, CommandIntent]], list[tuple[re.Pattern, CommandIntent]]]:
    """Get compiled (phrase, keyword) patterns in evaluation order."""
    global _compiled_phrases, _compiled_keywords
    if _compiled_phrases is None or _compiled_keywords is None:
        _compiled_phrases = [
            (re.compile(p, re.IGNORECASE), intent) for p, intent in PHRASE_PATTERNS
        ]
        # Walk intents in declaration order, not dict order
        _compiled_keywords = [
            (re.compile(_keyword_regex(kw), re.IGNORECASE), intent)
            for intent in CommandIntent
            for kw in INTENT_KEYWORDS.get(intent, [])
        ]
    return _compiled_phrases, _compiled_keywords


def parse_intent(command: str) -> tuple[CommandIntent, float]:
    """Classify a command and report how specific the matching rule was.

    Returns:
        (intent, confidence). Confidence is 0.95 for a phrase match, 0.85 for
        a keyword, 0.6 for the quantity heuristic and 0.0 for UNKNOWN.
    """
    text = (command or "").strip()
    if not text:
        return CommandIntent.UNKNOWN, 0.0

    phrases, keywords = _get_patterns()

    for pattern, intent in phrases:
        if pattern.search(text):
            return intent, PHRASE_CONFIDENCE

    for pattern, intent in keywords:
        if pattern.search(text):
            return intent, KEYWORD_CONFIDENCE

    if _quantity_re.search(text):
        return CommandIntent.ADD_PRODUCT, QUANTITY_CONFIDENCE

    return CommandIntent.UNKNOWN, 0.0


def detect_command_intent(command: str) -> CommandIntent:
    """Classify a command into exactly one CommandIntent. Never raises."""
    intent, _confidence = parse_intent(command)
    return intent


def extract_search_term(command: str, intent: CommandIntent) -> str | None:
    """Pull the product a search/update/delete command is about.

    "where is the basmati rice on shelf 2" → "basmati rice"
    """
    if intent not in _TARGET_INTENTS or not command:
        return None

    match = _target_re.search(command.strip())
    if not match:
        return None

    term = re.sub(r"^for\s+", "", match.group(1).strip(), flags=re.IGNORECASE)
    term = term.rstrip("?.! ").lower()
    return term or None


def suggest_command(command: str) -> str:
    """Suggest what the user might have meant."""
    text_lower = (command or "").lower()

    if any(w in text_lower for w in ("price", "cost", "rate", "total", "pay")):
        return 'Try: "generate bill" or "create invoice"'
    if any(w in text_lower for w in ("where", "shelf", "rack", "aisle")):
        return 'Try: "where is [product]" or "find [product]"'
    if any(w in text_lower for w in ("kg", "packet", "bottle", "litre", "liter")):
        return 'Try: "add 2 kg rice and 1 packet salt"'
    if any(w in text_lower for w in ("expire", "expiry", "old", "bad")):
        return 'Try: "remove [product]" or "update [product] expiry"'

    return 'Try: "add [quantity] [product]", "find [product]" or "generate bill"'


# Example phrasings per intent, for help output
AVAILABLE_COMMANDS: dict[str, list[dict[str, str]]] = {
    "Stock": [
        {"command": "Add [quantity] [product]", "example": "Add 2 kg rice and 3 packets of salt"},
        {"command": "Update [product]", "example": "Update sugar price to 45 rupees"},
        {"command": "Remove [product]", "example": "Remove expired milk"},
    ],
    "Search": [
        {"command": "Where is [product]", "example": "Where is the basmati rice"},
        {"command": "Find [product]", "example": "Find cooking oil"},
    ],
    "Billing": [
        {"command": "Generate bill", "example": "Generate a bill"},
        {"command": "Bill [products]", "example": "Bill 2 kg sugar and 1 bottle oil"},
    ],
}
