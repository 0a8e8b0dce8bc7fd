"""Collections of items and coins, and moving things between them.

A Container is the floor of a room, the player's pockets, or the inside
of a cart. Items are kept most-recent-first.
"""

import copy
import re
from dataclasses import dataclass, field

from ..logging import get_logger
from .appraisal import appraise
from .items import (
    COND_NONE,
    DENOMINATIONS,
    MAT_PREFIX,
    Item,
    describe,
)
from .reference import ParsedRequest, Reference
from .words import add_article, list_with_counts, pluralize

logger = get_logger(__name__)

# Stands in for "no limit" when a reference gives no coin amount.
_UNLIMITED = 0x7FFFFFFF

_MONEY_PATTERNS = [
    re.compile(rf"|money|coins?|{d.name}( coins?)?") for d in DENOMINATIONS
]


def _coins(n: int, denomination: int) -> str:
    return f"{n} {DENOMINATIONS[denomination].name} {'coin' if n == 1 else 'coins'}"


def _empty_purse() -> list[int]:
    return [0] * len(DENOMINATIONS)


@dataclass
class MoveResult:
    moved: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    immovable: list[str] = field(default_factory=list)


@dataclass
class Container:
    items: list[Item] = field(default_factory=list)
    money: list[int] = field(default_factory=_empty_purse)

    def __post_init__(self):
        if len(self.money) != len(DENOMINATIONS):
            raise ValueError(
                f"money needs {len(DENOMINATIONS)} denominations, got {len(self.money)}"
            )

    def value(self) -> float:
        """Total worth of all items and coins, in gold."""
        coins = sum(n * d.worth for n, d in zip(self.money, DENOMINATIONS))
        return coins + sum(item.value() for item in self.items)

    def weight(self) -> float:
        coins = sum(n * d.weight for n, d in zip(self.money, DENOMINATIONS))
        return coins + sum(item.weight() for item in self.items)

    def burden(self) -> int:
        """Life points spent per step when carrying this."""
        return 1 + int(self.weight())

    def count_items(self) -> int:
        """Number of items plus number of distinct kinds of coins."""
        return len(self.items) + sum(1 for n in self.money if n)

    def describe_item(self, n: int, specific: bool) -> tuple[str, float]:
        item = self.items[n]
        return describe(item, specific), item.value()

    def describe_money(self, denomination: int, specific: bool) -> tuple[str, float]:
        n = self.money[denomination]
        worth = n * DENOMINATIONS[denomination].worth
        text = _coins(n, denomination) + "\n"
        if specific:
            text += f"The coins are worth {worth:.2f} gold total.\n"
        return text, worth

    def render_all(self, include_totals: bool) -> tuple[str, bool]:
        """List everything in here.

        include_totals adds the value, burden and appraisal lines shown
        for the player's own inventory. The flag in the result is False
        when there is nothing to list.
        """
        names = [add_article(item.name(COND_NONE, MAT_PREFIX)) for item in self.items]
        items_value = sum(item.value() for item in self.items)
        result = list_with_counts(names, oneliner=False)

        if include_totals and items_value != 0:
            result += f"The total value of your items is {items_value:.2f} gold.\n"

        money_value = 0.0
        for denomination, n in enumerate(self.money):
            text, worth = self.describe_money(denomination, False)
            if n:
                result += text
            money_value += worth

        if include_totals and money_value != 0:
            result += f"The coins are worth {money_value:.2f} gold total.\n"

        if include_totals:
            result += (
                f"Your possessions wear you down {self.burden()} points "
                "for every step you take.\n"
                "You estimate that these possessions could earn you "
                f"{appraise(self.value())}.\n"
            )

        return result, money_value != 0 or bool(self.items)

    def find_money(self, ref: Reference, first: int = 0) -> int | None:
        """Find a denomination matching ref, at or after first.

        Accepts "", "money", "coin(s)", "<denomination>" and
        "<denomination> coin(s)". Ignores amount and index.
        """
        for denomination in range(first, len(DENOMINATIONS)):
            if self.money[denomination] > 0 and _MONEY_PATTERNS[denomination].fullmatch(
                ref.what
            ):
                return denomination
        return None

    def find_item(self, ref: Reference, first: int = 0) -> int | None:
        """Find an item matching ref, at or after position first.

        Every item is compared under 24 renderings of its name: plain,
        with "a"/"an", with "the" and pluralized, each with and without
        the condition and with no/prefix/suffix material. So "an awesome
        gold sceptre", "gold sceptre", "the sceptre" and "sceptres" all
        find an awesome gold sceptre.

        A positional reference ("shirt 2": index set, no amount) counts
        matches over the whole list and only accepts the index-th one.
        """
        positional = ref.index and not ref.amount
        occurrences = 0
        for position, item in enumerate(self.items):
            for level in range(3 * 2 * 4 - 1, -1, -1):
                name = item.name((level // 3) % 2, level % 3)
                form = level // 6
                if form == 1:
                    name = add_article(name, False)
                elif form == 2:
                    name = add_article(name, True)
                elif form == 3:
                    name = pluralize(name)
                if ref.what and ref.what != name:
                    continue
                if positional:
                    occurrences += 1
                    if occurrences != ref.index:
                        break
                if position < first:
                    break
                return position
        return None

    def _snapshot(self) -> "Container":
        return copy.deepcopy(self)

    def _restore(self, snapshot: "Container") -> None:
        self.items = snapshot.items
        self.money = snapshot.money

    def _move_items(
        self, target: "Container", ref: Reference, result: MoveResult
    ) -> bool:
        """Move the items ref asks for. Returns whether any matched.

        The first round only counts. Asking for e.g. "3 shirts" when only
        two are here takes none of them.
        """
        every = not ref.index
        found = False
        for round_ in (1, 2):
            remaining = ref.amount or 1
            position = 0
            while (position := self.find_item(ref, position)) is not None:
                if round_ == 2:
                    item = self.items[position]
                    name = add_article(item.name(COND_NONE, MAT_PREFIX))
                    if item.immovable:
                        result.immovable.append(name)
                        position += 1
                    else:
                        result.moved.append(name)
                        target.items.insert(0, item)
                        del self.items[position]
                else:
                    position += 1

                found = True
                remaining -= 1
                if not every and remaining <= 0:
                    break

            if round_ == 1 and found and not every and remaining > 0:
                return False
        return found

    def _move_money(
        self, target: "Container", ref: Reference, result: MoveResult
    ) -> bool:
        """Move the coins ref asks for. Returns whether any matched."""
        every = not ref.index
        found = False
        for round_ in (1, 2):
            remaining = ref.amount or _UNLIMITED
            denomination = 0
            while (denomination := self.find_money(ref, denomination)) is not None:
                taken = min(remaining, self.money[denomination])
                if taken <= 0:
                    break

                if round_ == 2:
                    result.moved.append(_coins(taken, denomination))
                    target.money[denomination] += taken
                    self.money[denomination] -= taken
                else:
                    denomination += 1

                found = True
                remaining -= taken
                if not every and (not ref.amount or remaining <= 0):
                    break

            if round_ == 1 and found and ref.amount and not every and remaining > 0:
                return False
        return found

    def _merge_into(self, target: "Container") -> None:
        """Put everything in here in front of target's items, keeping order."""
        target.items[:0] = self.items
        for denomination, n in enumerate(self.money):
            target.money[denomination] += n

    def _content_names(self) -> list[str]:
        """Names of the items (oldest first) and coin piles in here."""
        names = [
            add_article(item.name(COND_NONE, MAT_PREFIX)) for item in reversed(self.items)
        ]
        names += [_coins(n, d) for d, n in enumerate(self.money) if n]
        return names

    def move(self, target: "Container", request: ParsedRequest) -> MoveResult:
        """Move the requested items and coins from here into target.

        Either every part of the request that can be satisfied is moved,
        or, if any part names something that is not here, nothing is.

        Things are gathered in a staging container first. Exceptions are
        handed back from there, so they only ever apply to what this
        call picked up, and target is only touched on commit.
        """
        result = MoveResult()
        own_backup = self._snapshot()
        staging = Container()

        for ref in request.refs:
            found_item = self._move_items(staging, ref, result)
            found_money = self._move_money(staging, ref, result)
            if not found_item and not found_money and not request.everything:
                result.not_found.append(ref.what)

        if request.except_refs:
            takeback = staging.move(self, ParsedRequest(refs=list(request.except_refs)))
            result.not_found.extend(takeback.not_found)
            result.moved = staging._content_names()

        if result.not_found:
            result.moved.clear()
        if not result.moved:
            self._restore(own_backup)
            logger.debug(
                "move_rolled_back",
                not_found=len(result.not_found),
                immovable=len(result.immovable),
            )
        else:
            staging._merge_into(target)
            logger.debug("move_committed", moved=len(result.moved))
        return result
