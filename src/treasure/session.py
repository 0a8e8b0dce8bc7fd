"""Session layer bridging the game engine and the Gemini routes.

Games live in memory for as long as the server runs; nothing is saved.
"""

from collections import OrderedDict

from .engine.commands import (
    get_exits,
    get_inventory,
    get_map,
    get_room_description,
    get_visible_objects,
    handle_command,
)
from .engine.state import STARTING_LIFE, GameState, new_game_state
from .logging import bind_player, get_logger

logger = get_logger(__name__)

MAX_SESSIONS = 1000


class TreasureSession:
    """Wraps one player's fingerprint and GameState."""

    def __init__(self, fingerprint: str, game_state: GameState, starting_life: int):
        self.fingerprint = fingerprint
        self.state = game_state
        self.starting_life = starting_life

    def process_command(self, raw_input: str) -> str:
        """Delegate to the engine and return response text."""
        response = handle_command(self.state, raw_input)
        logger.debug("command_processed", turns=self.state.turns, life=self.state.life)
        return response

    def get_map(self) -> list[str]:
        return get_map(self.state)

    def get_room_description(self) -> str:
        return get_room_description(self.state)

    def get_exits(self) -> list[str]:
        return get_exits(self.state)

    def get_visible_objects(self) -> list[str]:
        return get_visible_objects(self.state)

    def get_inventory(self) -> list[str]:
        return get_inventory(self.state)

    def reset(self) -> None:
        """Start over in a freshly generated maze."""
        self.state = new_game_state(self.starting_life)
        logger.info("game_reset")


class SessionStore:
    """In-process registry of sessions keyed by certificate fingerprint.

    Holds at most max_sessions games. When full, the game that was played
    least recently is dropped.
    """

    def __init__(self, starting_life: int = STARTING_LIFE, max_sessions: int = MAX_SESSIONS):
        self.starting_life = starting_life
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, TreasureSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, fingerprint: str) -> bool:
        return fingerprint in self._sessions

    def get_or_create(self, fingerprint: str) -> TreasureSession:
        bind_player(fingerprint)
        session = self._sessions.get(fingerprint)
        if session is not None:
            self._sessions.move_to_end(fingerprint)
            return session

        while self._sessions and len(self._sessions) >= self.max_sessions:
            self._sessions.popitem(last=False)
            logger.info("session_evicted", sessions=len(self._sessions))

        session = TreasureSession(
            fingerprint, new_game_state(self.starting_life), self.starting_life
        )
        self._sessions[fingerprint] = session
        logger.info("session_created", sessions=len(self._sessions))
        return session
