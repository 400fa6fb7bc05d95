"""Canonical identity map for free-text function and role descriptions.

Functional assignments arrive as free text, and the same function is often
spelled several ways: different case, extra spaces, an EC number in
parentheses, or a trailing annotation comment. `FunctionMap` collapses such
variants onto one `CanonicalFunction` with a short mnemonic ID, so reports can
compare functions by ID instead of by raw text.

Example:
    >>> fmap = FunctionMap()
    >>> a = fmap.find_or_insert("Phosphoglycerate kinase (EC 2.7.2.3)")
    >>> b = fmap.find_or_insert("phosphoglycerate  kinase # fragment")
    >>> a.id == b.id == "PhosKina"
    True
    >>> fmap.get_name(a.id)
    'Phosphoglycerate kinase'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator

from seedreport.errors import UnknownFunctionError

_COMMENT_RE = re.compile(r"\s*[#!].*$", re.DOTALL)
_EC_RE = re.compile(r"\s*\(\s*(?:EC|TC)\s+[^)]*\)", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_WORD_RE = re.compile(r"[a-z0-9]+")

#: Number of leading words used to build an ID.
ID_WORDS = 6
#: Number of leading letters kept from each word of an ID.
ID_WORD_LETTERS = 4
#: ID base used when a description has no alphanumeric words at all.
BLANK_ID = "Blank"


def clean_function(raw: str) -> str:
    """Return the display form of a raw description.

    Drops a trailing ``#``/``!`` comment and parenthesized EC/TC numbers, then
    collapses whitespace. Case is preserved.
    """
    text = _COMMENT_RE.sub("", raw)
    text = _EC_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def canonical_text(raw: str) -> str:
    """Return the comparison key for a raw description."""
    return clean_function(raw).lower()


def _id_base(canonical: str) -> str:
    words = _WORD_RE.findall(canonical)[:ID_WORDS]
    base = "".join(w[:ID_WORD_LETTERS].capitalize() for w in words)
    return base or BLANK_ID


@dataclass(frozen=True, slots=True)
class CanonicalFunction:
    """Deduplicated identity shared by all variants of a description.

    Attributes:
        id: Stable mnemonic ID, unique within one `FunctionMap`.
        display_text: Cleaned text of the first variant seen.
    """

    id: str
    display_text: str


class FunctionMap:
    """Find-or-insert map from raw descriptions to canonical functions.

    IDs are assigned in first-seen order, so the same input sequence always
    produces the same IDs. Entries are never removed or changed.
    """

    def __init__(self) -> None:
        self._by_text: Dict[str, CanonicalFunction] = {}
        self._by_id: Dict[str, CanonicalFunction] = {}

    def find_or_insert(self, raw: str) -> CanonicalFunction:
        """Return the canonical function for `raw`, creating it on first sight.

        Args:
            raw: Free-text function or role description.

        Returns:
            The `CanonicalFunction` shared by every variant of `raw`.

        Raises:
            TypeError: If `raw` is not a string.
        """
        if not isinstance(raw, str):
            raise TypeError(f"Function text must be a string, got {type(raw).__name__}")
        key = canonical_text(raw)
        found = self._by_text.get(key)
        if found is None:
            found = CanonicalFunction(self._new_id(key), clean_function(raw))
            self._by_text[key] = found
            self._by_id[found.id] = found
        return found

    def _new_id(self, key: str) -> str:
        base = _id_base(key)
        if base not in self._by_id:
            return base
        suffix = 2
        while f"{base}{suffix}" in self._by_id:
            suffix += 1
        return f"{base}{suffix}"

    def get(self, function_id: str) -> CanonicalFunction:
        """Return the canonical function with the given ID.

        Raises:
            UnknownFunctionError: If the ID was never returned by `find_or_insert`.
        """
        try:
            return self._by_id[function_id]
        except KeyError:
            raise UnknownFunctionError(function_id) from None

    def get_name(self, function_id: str) -> str:
        """Return the display text for a function ID."""
        return self.get(function_id).display_text

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, function_id: object) -> bool:
        return function_id in self._by_id

    def __iter__(self) -> Iterator[CanonicalFunction]:
        return iter(self._by_id.values())
