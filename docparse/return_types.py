#!/usr/bin/env python3
"""
Return type inference from method descriptions.

Method entries never state their result in a table; it is buried in prose
such as "Returns the uploaded File on success." or "On success, if the
message is not an inline message, the edited Message is returned, otherwise
True is returned." This module scans description paragraphs sentence by
sentence for those few recurring phrasings and normalizes the captured
phrase into a type string the TypeRef resolver understands.
"""

import re
from typing import List, Optional, Sequence

SENTENCE_TERMINATORS = ".!?"

RETURNS_STOP_MARKERS = [
    " on success",
    " upon success",
    " if ",
    " when ",
    " otherwise ",
    ", if",
    ", when",
]
RETURNS_STOP_CHARS = re.compile(r"[.!?;(\[,]")

LEADING_FILLERS = [
    "the sent ",
    "the uploaded ",
    "the created ",
    "the edited ",
    "the revoked ",
    "the new ",
    "the ",
    "an ",
    "a ",
    "stopped ",
]

LINK_PREFIXES = [
    "created invoice link as ",
    "invoice link as ",
    "new invite link as ",
    "edited invite link as ",
    "revoked invite link as ",
    "invite link as ",
]

INFORMATION_WRAPPERS = [" as a ", " as an "]
FORM_WRAPPERS = [
    " in form of a ",
    " in form of an ",
    " in the form of a ",
    " in the form of an ",
]

TRAILING_FILLERS = [
    " of the sent messages",
    " of the sent message",
    " of sent messages",
    " of sent message",
    " that were sent",
    " that was sent",
    " of the message",
    " of messages",
    " objects",
    " object",
    " stories",
    " story",
]

SCALAR_NAMES = {
    "true", "false", "string", "integer", "int",
    "float", "float number", "number", "boolean", "bool",
}
CANONICAL_SCALARS = {
    "string": "String",
    "integer": "Integer",
    "boolean": "Boolean",
    "true": "True",
}


def split_into_sentences(text: str) -> List[str]:
    """Split on . ! ? keeping the terminator; a trailing fragment is kept too."""
    sentences = []
    current = []
    for ch in text.strip():
        current.append(ch)
        if ch in SENTENCE_TERMINATORS:
            sentence = "".join(current).strip()
            if sentence:
                sentences.append(sentence)
            current = []

    tail = "".join(current).strip()
    if tail:
        sentences.append(tail)
    return sentences


def _is_bare_array(text: str) -> bool:
    lowered = text.lower()
    return lowered in ("array", "array of") or lowered.endswith(" array")


def looks_like_return_type(candidate: str) -> bool:
    if not candidate or _is_bare_array(candidate):
        return False
    if candidate.lower() in SCALAR_NAMES:
        return True
    if candidate.startswith("Array of ") or candidate.startswith("array of "):
        return True
    return candidate[0].isupper()


def _strip_leading_fillers(s: str) -> str:
    while s:
        ls = s.lower()
        for prefix in LEADING_FILLERS:
            if ls.startswith(prefix):
                s = s[len(prefix):].strip()
                break
        else:
            break
    return s


def _cut_after(s: str, marker: str, last: bool = False) -> Optional[str]:
    """Text after marker (first or last occurrence, case-insensitive), or None."""
    ls = s.lower()
    idx = ls.rfind(marker) if last else ls.find(marker)
    if idx == -1:
        return None
    return s[idx + len(marker):].strip()


def normalize_return_phrase(phrase: str) -> str:
    """
    Reduce a captured return phrase to a bare type name.

    "the created invoice link as String" -> "String"
    "information about the chat in form of a Chat object" -> "Chat"
    "an array of Message objects that were sent" -> "Array of Message"
    """
    s = _strip_leading_fillers(phrase.strip())
    if not s:
        return s

    stripped = True
    while stripped:
        stripped = False
        ls = s.lower()
        for prefix in LINK_PREFIXES:
            if ls.startswith(prefix):
                s = _strip_leading_fillers(s[len(prefix):].strip())
                stripped = True
                break

    if "information about " in s.lower():
        for wrapper in INFORMATION_WRAPPERS:
            rest = _cut_after(s, wrapper)
            if rest is not None:
                s = _strip_leading_fillers(rest)
                break

    for wrapper in FORM_WRAPPERS:
        rest = _cut_after(s, wrapper)
        if rest is not None:
            s = _strip_leading_fillers(rest)

    # "... chat link as ChatInviteLink"
    ls = s.lower()
    idx = ls.rfind(" as ")
    if idx != -1 and ls[:idx].strip().endswith(" link"):
        s = _strip_leading_fillers(s[idx + len(" as "):].strip())

    if s.lower().startswith("array of "):
        s = _strip_leading_fillers("Array of " + s[len("array of "):].strip())

    stripped = True
    while stripped:
        stripped = False
        ls = s.lower()
        for suffix in TRAILING_FILLERS:
            if ls.endswith(suffix):
                rest = s[:len(s) - len(suffix)].strip()
                # "Array of Messages" must keep its item type
                if _is_bare_array(rest):
                    continue
                s = rest
                stripped = True
                break

    return CANONICAL_SCALARS.get(s.lower(), s)


def parse_returns_clause(remainder: str) -> str:
    """Type named by the text following "Returns ", or '' if it is not a type."""
    trimmed = remainder.strip()
    if not trimmed:
        return ""

    lower = trimmed.lower()
    stop = len(trimmed)
    for marker in RETURNS_STOP_MARKERS:
        idx = lower.find(marker)
        if idx != -1 and idx < stop:
            stop = idx

    match = RETURNS_STOP_CHARS.search(trimmed)
    if match and match.start() < stop:
        stop = match.start()

    candidate = trimmed[:stop].strip().rstrip(".").strip()
    candidate = normalize_return_phrase(candidate)
    return candidate if looks_like_return_type(candidate) else ""


def _parse_alternative(alt: str) -> str:
    if alt.lower().startswith("returns "):
        return parse_returns_clause(alt[len("returns "):])
    return parse_is_returned_clause(alt)


def parse_is_returned_clause(text: str) -> str:
    """
    Types named by "X is returned" / "X are returned" clauses.

    Alternatives introduced by "otherwise" or "or" after the verb are
    resolved too and joined with " or ".
    """
    lower = text.lower()
    keyword = " is returned"
    stop_idx = lower.find(keyword)
    if stop_idx == -1:
        keyword = " are returned"
        stop_idx = lower.find(keyword)
    if stop_idx == -1:
        return ""

    prefix = text[:stop_idx].strip()
    if not prefix:
        return ""
    # Only the clause right before the verb names the type
    if "," in prefix:
        prefix = prefix[prefix.rfind(",") + 1:].strip()

    types = []
    primary = normalize_return_phrase(prefix)
    if looks_like_return_type(primary):
        types.append(primary)

    rest = text[stop_idx + len(keyword):]
    lower_rest = rest.lower()
    for connector in ("otherwise ", " or "):
        idx = lower_rest.find(connector)
        if idx != -1:
            alt = _parse_alternative(rest[idx + len(connector):].strip())
            if alt:
                types.append(alt)

    unique = list(dict.fromkeys(types))
    return " or ".join(unique)


def extract_return_type_from_sentence(sentence: str) -> str:
    text = sentence.strip()
    if not text:
        return ""

    lower = text.lower()
    if "return" not in lower:
        return ""

    idx = lower.find("returns ")
    if idx != -1:
        candidate = parse_returns_clause(text[idx + len("returns "):])
        if candidate:
            return candidate

    idx = lower.find("on success")
    if idx != -1:
        remainder = text[idx + len("on success"):].strip().lstrip(", ")
        if remainder:
            if remainder.lower().startswith("returns "):
                candidate = parse_returns_clause(remainder[len("returns "):])
                if candidate:
                    return candidate
            candidate = parse_is_returned_clause(remainder)
            if candidate:
                return candidate

    return parse_is_returned_clause(text)


def infer_return_type(paragraphs: Sequence[str]) -> Optional[str]:
    """
    Find the result type named in a method's description.

    Args:
        paragraphs: Description paragraphs in document order

    Returns:
        The first recognised type string, or None when no sentence names one
    """
    for paragraph in paragraphs:
        for sentence in split_into_sentences(paragraph or ""):
            candidate = extract_return_type_from_sentence(sentence)
            if candidate:
                return candidate
    return None
