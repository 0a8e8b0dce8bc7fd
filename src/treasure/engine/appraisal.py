"""Estimate what a pile of treasure would buy in food.

The food names are stored with a letter-swap cipher (a<->b, c<->d, ...)
so that glancing over the table does not spoil the game.
"""

from .words import list_with_counts

# (ciphered name, price in gold), most expensive first.
FOODS: tuple[tuple[str, float], ...] = (
    ("b akbdl epqfts dblf", 50000),
    ("b kbqhf okbsf pe dgjdlfm kfht", 35000),
    ("b dbvkcqpm pe dpplfc opsbspft", 20000),
    ("b dgjdlfm gps cph", 10000),
    ("dgfftf bmc nbdbqpmj", 6000),
    ("b avssfqnjkl ajtdvjs", 3000),
    ("b apjkfc fhh", 2000),
    ("tpnf kjdgfm tsfx", 1000),
    ("b xppc dpqsfw tbmcxjdg", 700),
    ("b dvo pe ujmfhbq", 500),
    ("b dvo pe bookf tffct", 300),
    ("b qpssfm dbqqps", 200),
    ("b nvh pe nvccz xbsfq", 110),
    ("tpnf qbaajs cqpoojmht", 70),
    ("b cfbc dpdlqpbdg", 50),
    ("b npmsg pkc tojcfq xfa", 30),
    ("b gjkk pe cvts", 16),
    ("b gfbo pe cvts", 8),
    ("b ajh ojkf pe cvts", 4),
    ("b ojkf pe cvts", 2),
    ("b tofdlkf pe cvts", 1),
)


def _decipher(text: str) -> str:
    return "".join(c if c == " " else chr(1 + ((ord(c) - 1) ^ 1)) for c in text)


def appraise(value: float, max_items: int = 3) -> str:
    """List up to max_items foods that value could purchase, priciest first."""
    picks: list[str] = []
    while len(picks) < max_items:
        food = next(((name, price) for name, price in FOODS if value >= price), None)
        if food is None:
            break
        name, price = food
        picks.append(_decipher(name))
        value -= price
    if not picks:
        return "nothing at all"
    return list_with_counts(picks)
