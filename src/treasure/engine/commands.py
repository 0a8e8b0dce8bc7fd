"""Command dispatch and handler functions.

handle_command(state, raw_input) -> str is the main entry point.
It rewrites short aliases, matches the command against a table of
patterns and dispatches to a handler. All handlers mutate state in
place and return descriptive text.
"""

import re
from collections.abc import Callable

from ..logging import get_logger
from .appraisal import appraise
from .chest import pry_open
from .container import Container
from .items import COND_ADJECTIVE, COND_NONE, MAT_PREFIX, Cart, Chest
from .reference import ParsedRequest, parse_reference
from .state import GameState
from .words import add_article, list_with_counts, ucfirst

logger = get_logger(__name__)

# Inventory worth needed to survive the game.
SURVIVAL_VALUE = 10000.0

# Rewrites applied until the command stops changing.
ALIASES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^l\b"), "look"),
    (re.compile(r"^lat? "), "look at "),
    (re.compile(r"^lin? "), "look in "),
    (re.compile(r"^look in "), "look at all in "),
    (re.compile(r"^ga\b"), "get all"),
    (re.compile(r"^da\b"), "drop all"),
    (re.compile(r"^d "), "drop "),
    (re.compile(r"^g "), "get "),
    (re.compile(r"^take "), "get "),
    (re.compile(r"^pry "), "open "),
    (re.compile(r"^i\b"), "inv"),
    (re.compile(r"^inventory\b"), "inv"),
    (re.compile(r"^put(.*)\b(in|into|to)\b"), r"drop\1in"),
    (re.compile(r"\busing\b"), "with"),
    (re.compile(r"\bwith my\b"), "with"),
    (re.compile(r"^\s+"), ""),
    (re.compile(r"\s+$"), ""),
]

# (warning threshold, message); the last threshold crossed wins.
HUNGER_WARNINGS = (
    (800, "You are so hungry!"),
    (150, "You are famished!"),
    (70, "You are about to collapse any second!"),
)

HELP_TEXT = (
    "Available commands:\n"
    "  l/look\n"
    "  la/look at <item>\n"
    "  n/s/w/e for moving\n"
    "  get <item>/get all/ga for short\n"
    "  drop <item>/drop all\n"
    "  open <chest> [with <item>]\n"
    "  i/inv/inventory\n"
    "  pull/stop to drag a cart along\n"
    "  quit\n"
    "  help\n\n"
    "You are starving. You are trying to find enough stuff to sell\n"
    "for food before you die. Beware, food is very expensive here."
)


def apply_aliases(command: str) -> str:
    """Expand command shortcuts like "ga" or "la shirt"."""
    while True:
        original = command
        for pattern, replacement in ALIASES:
            command = pattern.sub(replacement, command)
        if command == original:
            return command


def _eat_life(state: GameState, amount: int) -> str:
    """Spend life points and return any hunger warning."""
    message = ""
    for threshold, text in HUNGER_WARNINGS:
        if state.life >= threshold and state.life - amount < threshold:
            message = text
    state.life -= amount
    return f"{message}\n" if message else ""


# --- Views ---------------------------------------------------------------


def get_map(state: GameState) -> list[str]:
    """Generate the player's field of view and return the map lines."""
    state.maze.spawn_rooms(state.x, state.y)
    return state.maze.render_map(state.x, state.y)


def get_room_description(state: GameState) -> str:
    room = state.room
    return f"In a {room.environment} tunnel at {state.x:+3d},{-state.y:+3d}"


def get_exits(state: GameState) -> list[str]:
    maze = state.maze
    exits = []
    for name, dx, dy in (("north", 0, -1), ("south", 0, 1), ("west", -1, 0), ("east", 1, 0)):
        if maze.can_enter(state.x + dx, state.y + dy):
            exits.append(name)
    return exits


def get_visible_objects(state: GameState) -> list[str]:
    text, _ = state.room.items.render_all(False)
    return text.splitlines()


def get_inventory(state: GameState) -> list[str]:
    text, non_empty = state.inventory.render_all(True)
    return text.splitlines() if non_empty else []


# --- Looking -------------------------------------------------------------


def _cmd_look(state: GameState, m: re.Match | None = None) -> str:
    """Show the map next to the room description."""
    map_lines = get_map(state)
    room = state.room
    info = (
        f"{get_room_description(state)}\n"
        f"Exits: {' '.join(get_exits(state))}\n\n"
        + room.items.render_all(False)[0]
    ).splitlines()

    blank = " " * len(map_lines[0])
    lines = []
    for i in range(max(len(map_lines), len(info))):
        left = map_lines[i] if i < len(map_lines) else blank
        right = info[i] if i < len(info) else ""
        lines.append(f"{left} | {right}".rstrip())
    return "\n".join(lines)


def _look_in(
    state: GameState, where: Container, what: ParsedRequest, here: str = "here"
) -> str:
    """Describe the things in where that match what.

    When looking "here", the player's own inventory is searched too if
    the room has nothing matching.
    """
    specific = what.is_specific()
    output = ""
    for ref in what.refs:
        text, worth = "", 0.0

        def add(found: tuple[str, float]) -> None:
            nonlocal text, worth
            text += found[0]
            worth += found[1]

        def scan(source: Container, money: bool) -> None:
            find = source.find_money if money else source.find_item
            describe = source.describe_money if money else source.describe_item
            position = 0
            while (position := find(ref, position)) is not None:
                add(describe(position, specific))
                position += 1
                if specific:
                    break

        scan(where, money=False)
        if what.everything or not text:
            scan(where, money=True)

        if here == "here":
            room_empty = not text
            if not text:
                scan(state.inventory, money=False)
            if not text or (what.everything and room_empty):
                scan(state.inventory, money=True)

        if not specific and text:
            if worth < 1:
                text += "It is of no sales value at all.\n"
            else:
                text += (
                    "You estimate that with them you could probably buy "
                    f"{appraise(worth, 1)}.\n"
                )

        if text:
            output += text
        elif specific:
            verb = "are" if ref.what.endswith("s") else "is"
            output += f"There {verb} no {ref.what} {here} that you can look at.\n"
        else:
            output += f"There is nothing {here}.\n"
    return output


def _cmd_look_at(state: GameState, m: re.Match) -> str:
    what = parse_reference(m.group(1))
    where = parse_reference(m.group(2) or "")
    floor = state.room.items

    if not where.refs:
        return _look_in(state, floor, what)

    output = ""
    sources = 0
    for ref in where.refs:
        n = 0
        position = 0
        while (position := floor.find_item(ref, position)) is not None:
            container = floor.items[position]
            position += 1
            n += 1
            match container:
                case Chest():
                    output += "You cannot see inside a closed chest!\n"
                case Cart():
                    name = add_article(container.name(COND_NONE, MAT_PREFIX), True)
                    output += _look_in(state, container.contents, what, f"in {name}")
                case _:
                    name = add_article(container.name(COND_ADJECTIVE, MAT_PREFIX), True)
                    output += ucfirst(f"{name} does not contain anything!\n")

        if not n and floor.find_money(ref) is not None:
            output += "You cannot look inside money! They do not contain anything.\n"
            n += 1
        if not n and not where.everything:
            output += f"Look where? There is no {ref.what} in this room!\n"
        sources += n

    if not sources and where.everything:
        output += "There is nothing in this room!\n"
    return output


# --- Moving things -------------------------------------------------------


def _get_from(
    state: GameState,
    source: Container,
    what: ParsedRequest,
    from_text: str = "",
    here: str = "here",
) -> str:
    """Move things from source into the inventory."""
    result = source.move(state.inventory, what)
    output = ""

    if result.immovable and not what.everything:
        output += ucfirst(f"{list_with_counts(result.immovable)} could not be moved!\n")
    if result.not_found:
        output += f"There is no {list_with_counts(result.not_found)} {here}!\n"

    if result.moved:
        output += f"You take {list_with_counts(result.moved)}{from_text}.\n"
        # Two life points for every item picked up.
        output += _eat_life(state, len(result.moved) * 2)
    else:
        output += f"Nothing taken{from_text}.\n"
    return output


def get_items(state: GameState, what_text: str, where_text: str = "") -> str:
    """Take things from the floor, or from containers named by where_text."""
    what = parse_reference(what_text)
    where = parse_reference(where_text)
    floor = state.room.items

    if not where.refs:
        return _get_from(state, floor, what)

    output = ""
    sources = 0
    for ref in where.refs:
        n = 0
        position = 0
        while (position := floor.find_item(ref, position)) is not None:
            container = floor.items[position]
            position += 1
            n += 1
            name = add_article(container.name(COND_NONE, MAT_PREFIX), True)
            match container:
                case Chest():
                    output += "You cannot get anything from a closed chest.\n"
                case Cart():
                    output += _get_from(
                        state, container.contents, what, f" from {name}", f"in {name}"
                    )
                case _:
                    output += f"You cannot take things from {name}.\n"
        if not n and not where.everything:
            output += f"Take from where? There is no {ref.what} in this room!\n"
        sources += n

    if not sources and where.everything:
        output += "There is nothing in this room!\n"
    return output


def _cmd_get(state: GameState, m: re.Match) -> str:
    return get_items(state, m.group(1), m.group(2) or "")


def _put_to(
    state: GameState, target: Container, what: ParsedRequest, target_name: str = ""
) -> str:
    """Move things from the inventory into target."""
    result = state.inventory.move(target, what)
    output = ""

    if result.immovable:
        output += ucfirst(f"{list_with_counts(result.immovable)} could not be moved!\n")
    if result.not_found:
        output += f"You don't have {list_with_counts(result.not_found)}!\n"

    if result.moved:
        moved = list_with_counts(result.moved)
        if target_name:
            output += f"You put {moved} in {target_name}.\n"
        else:
            output += f"You drop {moved}.\n"
        # Half a life point for every item dropped.
        output += _eat_life(state, len(result.moved) // 2)
    else:
        output += "Nothing moved.\n"
    return output


def _cmd_drop(state: GameState, m: re.Match) -> str:
    what = parse_reference(m.group(1))
    where = parse_reference(m.group(2) or "")
    floor = state.room.items

    if not where.refs:
        return _put_to(state, floor, what)

    if not where.is_specific():
        return f'Put where exactly? "{where.original}" is rather vague.'

    position = floor.find_item(where.refs[0])
    if position is None:
        return f"Put in where? There is no {where.original} in this room!"

    container = floor.items[position]
    name = add_article(container.name(COND_NONE, MAT_PREFIX), True)
    match container:
        case Chest():
            return "You cannot put things in a closed chest."
        case Cart():
            return _put_to(state, container.contents, what, name)
        case _:
            return f"You cannot put things in {name}."


def _cmd_open(state: GameState, m: re.Match) -> str:
    what = parse_reference(m.group(1))
    with_what = parse_reference(m.group(2) or "")
    room = state.room

    if not what.is_specific():
        return f'Open what exactly? "{what.original}" is rather vague.'
    if with_what.refs and not with_what.is_specific():
        return f'Use what exactly? "{with_what.original}" is rather vague.'

    chest_index = room.items.find_item(what.refs[0])
    if chest_index is None:
        return f"There is no {what.original} to open in this room!"

    chest = room.items.items[chest_index]
    if not isinstance(chest, Chest):
        name = add_article(chest.name(COND_ADJECTIVE, MAT_PREFIX), True)
        return ucfirst(f"{name} is not particularly in need of opening.")

    tool_index = None
    if with_what.refs:
        tool_index = state.inventory.find_item(with_what.refs[0])
        if tool_index is None:
            return f"You don't have any {with_what.original}!"

    chest_name = add_article(chest.name(), True)
    result = pry_open(
        state.rng, room, state.x, state.y, chest_index, state.inventory, tool_index
    )

    using = f"using your {result.tool_name}" if result.tool_name else "with your bare hands"
    output = f"You try to pry {chest_name} open {using}.\n"
    output += _eat_life(state, result.effort)

    if result.tool_destroyed:
        output += f"Your {result.tool_name} gets damaged! It is utterly destroyed.\n"
    elif result.tool_damaged:
        output += (
            f"Your {result.tool_name} gets damaged! "
            f"It is now in {result.tool_condition} condition.\n"
        )
    elif result.sprained:
        output += _eat_life(state, result.sprain_cost)
        output += f"You sprain your {result.sprained}!\n"

    if not result.opened:
        output += ucfirst(f"{add_article(chest.name(), True)} resists your meddling! Try harder.\n")
        if result.suggest_tool:
            output += "Try using a tool: 'open chest using <item>'.\n"
        return output

    output += (
        "The chest bursts into pieces!\n"
        "Everything it contained is scattered on the ground.\n"
    )
    return output


def _cmd_inventory(state: GameState, m: re.Match | None = None) -> str:
    text, non_empty = state.inventory.render_all(True)
    if not non_empty:
        return "You are carrying nothing."
    return text


# --- Walking -------------------------------------------------------------


def _try_move(state: GameState, dx: int, dy: int) -> str:
    """Step by (dx, dy), dragging a cart along when pulling."""
    maze = state.maze
    x, y = state.x, state.y
    # Diagonal steps need an open orthogonal path too.
    if not maze.can_enter(x + dx, y + dy) or (
        not maze.can_enter(x, y + dy) and not maze.can_enter(x + dx, y)
    ):
        return "You cannot go that way."

    burden = state.inventory.burden()

    if state.pulling:
        floor = maze.room_at(x, y).items
        target = maze.room_at(x + dx, y + dy).items
        # The cart is immovable for get/put, so it is carried over by hand.
        # Putting it in front keeps the same cart in tow next time.
        position = floor.find_item(parse_reference("all cart").refs[0])
        if position is not None:
            cart = floor.items.pop(position)
            burden += (cart.contents.burden() + 10) // 5
            target.items.insert(0, cart)

    state.x += dx
    state.y += dy
    return _eat_life(state, burden) + _cmd_look(state)


def _move_handler(dx: int, dy: int) -> Callable:
    def handler(state: GameState, m: re.Match) -> str:
        return _try_move(state, dx, dy)

    return handler


# --- Game over -----------------------------------------------------------


def _game_over(state: GameState) -> str:
    output = ""
    if state.pulling:
        # By mercy, empty the cart into the pockets.
        output += get_items(state, "all", "all cart")

    value = state.inventory.value()
    headline = (
        "You are pulled out from the maze by a supernatural force!"
        if state.life < 0
        else "byebye"
    )
    verdict = (
        "SURVIVED! CONGRATULATION. ;)"
        if value >= SURVIVAL_VALUE
        else "DID NOT SURVIVE. Hint: Learn to judge the value/weight ratio."
    )
    output += (
        f"{headline}\n"
        f"[life:{state.life}] Game over\n"
        f"You managed to collect stuff worth {value:.2f} gold.\n"
        f"With all your possessions, you purchase {appraise(value)}.\n"
        "You consume your reward eagerly.\n"
        f"YOU {verdict}"
    )
    state.is_finished = True
    logger.info("game_over", turns=state.turns, life=state.life, value=round(value, 2))
    return output


def _cmd_quit(state: GameState, m: re.Match) -> str:
    return _game_over(state)


def _cmd_pull(state: GameState, m: re.Match) -> str:
    state.pulling = True
    return "Ok, you will pull any cart with you when you move. Type 'stop' to stop pulling."


def _cmd_stop(state: GameState, m: re.Match) -> str:
    state.pulling = False
    return "Ok, you will leave carts alone."


def _static_response(text: str) -> Callable:
    def handler(state: GameState, m: re.Match) -> str:
        return text

    return handler


def _direction(short: str, long: str) -> re.Pattern:
    return re.compile(rf"(?:(?:go|walk|move) +)?(?:{short}|{long})")


_COMMANDS: list[tuple[re.Pattern, Callable]] = [
    (re.compile(r"help|what|\?"), _static_response(HELP_TEXT)),
    (_direction("n", "north"), _move_handler(0, -1)),
    (_direction("s", "south"), _move_handler(0, 1)),
    (_direction("w", "west"), _move_handler(-1, 0)),
    (_direction("e", "east"), _move_handler(1, 0)),
    (_direction("nw", "northwest"), _move_handler(-1, -1)),
    (_direction("ne", "northeast"), _move_handler(1, -1)),
    (_direction("sw", "southwest"), _move_handler(-1, 1)),
    (_direction("se", "southeast"), _move_handler(1, 1)),
    (re.compile(r"look(?: +around)?"), _cmd_look),
    (re.compile(r"look(?: +at)? +(.*?)(?: +in +(.+))?"), _cmd_look_at),
    (re.compile(r"open +(.+?)(?: +with +(.+))?"), _cmd_open),
    (re.compile(r"open|get|drop"), lambda state, m: f"{m.group(0)} what?"),
    (re.compile(r"inv"), _cmd_inventory),
    (re.compile(r"get +(.+?)(?: +from +(.+))?"), _cmd_get),
    (re.compile(r"drop +(.+?)(?: +(?:to|in) +(.+))?"), _cmd_drop),
    (
        re.compile(r"(?:wear|wield|eq)\b.*"),
        _static_response(
            "You are scavenging for survival and not playing an RPG character."
        ),
    ),
    (
        re.compile(r"eat\b.*"),
        _static_response(
            "You have nothing edible! "
            "You are hoping to collect something you can sell for food."
        ),
    ),
    (re.compile(r"pull\b.*"), _cmd_pull),
    (re.compile(r"stop"), _cmd_stop),
    (re.compile(r"quit"), _cmd_quit),
]


def _dispatch(state: GameState, command: str) -> str | None:
    for pattern, handler in _COMMANDS:
        match = pattern.fullmatch(command)
        if match:
            return handler(state, match)
    return None


def handle_command(state: GameState, raw_input: str) -> str:
    """Process a command and return the response text."""
    if state.is_finished:
        return "The game is over."

    command = apply_aliases(raw_input.strip().lower())
    if not command:
        return "what?"

    state.turns += 1
    result = (_dispatch(state, command) or "what?").rstrip("\n")

    if state.life <= 0 and not state.is_finished:
        result += "\n\n" + _game_over(state)
    return result
