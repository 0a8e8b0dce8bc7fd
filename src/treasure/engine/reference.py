"""Parse free-form item references like "2 gold shirts and all coins".

parse_reference() never fails. Phrases it cannot make sense of are kept
literally and later show up as "not found" when matched.
"""

import re
from dataclasses import dataclass, field

from .words import NUMERALS, remove_article

_EXCEPT = re.compile(r"(.*?)(?: except (.+))?", re.DOTALL)
_PART = re.compile(r" *((?:(?! *,| and | *$).)+)(?:[ ,]|and )*")
_LEADING = re.compile(r"((all|[0-9]+) +)? *(.*)", re.DOTALL)
_TRAILING_INDEX = re.compile(r"(.*?)(?: +([0-9]+))?", re.DOTALL)
_NUMBER_WORDS = [
    (re.compile(rf"^{word}\b"), str(n)) for n, word in enumerate(NUMERALS, start=1)
]


@dataclass
class Reference:
    """One item description out of a request.

    what:   the name to look for; "" matches anything.
    amount: 0 = one item or one pile of coins (unspecified),
            N = exactly N items or N coins.
    index:  0 = every matching item,
            N = only the Nth matching item (default 1). Ignored for money.
    """

    what: str = ""
    amount: int = 0
    index: int = 1


@dataclass
class ParsedRequest:
    refs: list[Reference] = field(default_factory=list)
    except_refs: list[Reference] = field(default_factory=list)
    everything: bool = False
    original: str = ""

    def is_specific(self) -> bool:
        """True if the request clearly addresses only one particular item."""
        return (
            not self.everything
            and len(self.refs) == 1
            and self.refs[0].amount <= 1
            and self.refs[0].index >= 1
        )


def parse_single_reference(part: str) -> Reference:
    """Parse "3 shirts", "all caps", "shirt 2" or plain "shirt"."""
    word = part
    for pattern, digits in _NUMBER_WORDS:
        word = pattern.sub(digits, word)

    match = _LEADING.fullmatch(word)
    ref = Reference(what=match.group(3))
    number = match.group(2)
    if number == "all":
        ref.index = 0
    elif number:
        ref.amount = int(number)
    else:
        tail = _TRAILING_INDEX.fullmatch(ref.what)
        ref.what = tail.group(1)
        if tail.group(2):
            ref.index = int(tail.group(2))
    return ref


def parse_references(text: str) -> list[Reference]:
    """Parse a list separated by commas and/or "and"."""
    return [parse_single_reference(m.group(1)) for m in _PART.finditer(text)]


def parse_reference(text: str) -> ParsedRequest:
    match = _EXCEPT.fullmatch(text)
    request = ParsedRequest(original=match.group(1))

    if remove_article(request.original) in ("all", "everything"):
        request.everything = True
        request.refs.append(Reference(index=0))
    elif request.original:
        request.refs = parse_references(request.original)

    if match.group(2):
        request.except_refs = parse_references(match.group(2))
    return request
