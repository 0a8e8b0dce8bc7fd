"""English word manipulations used for naming and matching items.

Matching in the container depends on these producing exactly the same
strings every time, so they are plain string functions with no state.
"""

import re
from collections import Counter

NUMERALS = (
    "one", "two", "three", "four", "five", "six",
    "seven", "eight", "nine", "ten", "eleven", "twelve",
)

_ARTICLE = re.compile(r"^(?:a|an|the) +")

# Splits "shirt made of silk" into ("shirt", " made of silk").
# The plural suffix always goes on the head noun.
_TAIL = re.compile(r"^(.*?)( (?:\(|of\b|made of\b).*)?$")

# First matching rule wins. Not a complete English inflection table,
# only enough for the names that occur in the game.
_PLURAL_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"s$"), r"\g<0>"),  # leggings, overalls
    (re.compile(r"y$"), "ies"),  # berry
    (re.compile(r"(?:o|sh|ss)$"), r"\g<0>es"),  # potato, dish
    (re.compile(r"ff?$"), "ves"),  # staff, wolf
    (re.compile(r"$"), "s"),
]


def remove_article(name: str) -> str:
    return _ARTICLE.sub("", name)


def pluralize(name: str) -> str:
    """Make a name plural, placing the suffix before any "of" clause."""
    match = _TAIL.match(name)
    head, tail = match.group(1), match.group(2) or ""
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(head):
            return pattern.sub(replacement, head, count=1) + tail
    return name


def add_article(name: str, definite: bool = False) -> str:
    """Prefix a name with "a", "an" or "the".

    Plural forms get no indefinite article.
    """
    bare = remove_article(name)
    if definite:
        return f"the {bare}"
    if bare == pluralize(bare):
        return bare
    if re.match(r"[aeiou]", bare):
        return f"an {bare}"
    return f"a {bare}"


def ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def list_with_counts(names: list[str], oneliner: bool = True) -> str:
    """Fold duplicate names into counted plurals and join them.

    ["a shirt", "a shirt", "a cap"] becomes "two shirts, and a cap".
    """
    counts = Counter(names)
    folded: list[str] = []
    done: set[str] = set()
    for name in names:
        n = counts[name]
        if n == 1:
            folded.append(name)
            continue
        if name in done:
            continue
        done.add(name)
        bare = remove_article(name)
        if n <= len(NUMERALS):
            folded.append(pluralize(f"{NUMERALS[n - 1]} {bare}"))
        else:
            folded.append(pluralize(f"{n} {bare}"))

    if not oneliner:
        return "".join(f"{name}\n" for name in folded)

    output = ""
    for i, name in enumerate(folded):
        if i:
            output += ", and " if i + 1 == len(folded) else ", "
        output += name
    return output
