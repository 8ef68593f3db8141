"""Word tokenizing and mnemonic matching used by the search box."""
import string
from collections.abc import Iterator

WORD_DELIMITERS = "-_/\\."
WORD_CHARS = frozenset(string.ascii_letters + string.digits)


def is_word_boundary(text: str, pos: int) -> bool:
    if pos == 0:
        return True
    if pos >= len(text):
        return False
    prev, current = text[pos - 1], text[pos]
    if prev in WORD_DELIMITERS:
        return True
    # camelCase
    return prev in string.ascii_lowercase and current in string.ascii_uppercase


def iter_words(text: str) -> Iterator[str]:
    """Yield the alphanumeric words of text.

    A word starts at the beginning of the string, after any of ``-_/\\.``,
    and at a lower-to-upper case transition. Characters that are not ASCII
    letters or digits are dropped.
    """
    word: list[str] = []
    for pos, char in enumerate(text):
        if is_word_boundary(text, pos) and word:
            yield "".join(word)
            word = []
        if char in WORD_CHARS:
            word.append(char)
    if word:
        yield "".join(word)


def matches_mnemonic(text: str, query: str) -> bool:
    """Check whether query spells the initials of successive words in text.

    Single greedy pass: every word whose first letter equals the next pending
    query character consumes it, other words are skipped. There is no
    backtracking, and only the first letter of each word is looked at, so
    "al" does not match "alpha".
    """
    if not query:
        return True
    query = query.lower()
    index = 0
    for word in iter_words(text):
        if index >= len(query):
            break
        if word[0].lower() == query[index]:
            index += 1
    return index == len(query)
