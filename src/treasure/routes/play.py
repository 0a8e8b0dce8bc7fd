"""Gameplay routes."""

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..session import TreasureSession

GAME_OVER = "The game is over."


def _game_session(request: Request) -> TreasureSession:
    """Look up (or start) the game belonging to the client certificate."""
    identity = get_identity(request)
    return request.app.state.sessions.get_or_create(identity.fingerprint)


def _render_play(app: Xitzin, game: TreasureSession, message: str = ""):
    """Render the main play view."""
    return app.template(
        "play.gmi",
        map_lines=game.get_map(),
        description=game.get_room_description(),
        objects=game.get_visible_objects(),
        exits=game.get_exits(),
        message=message,
        life=game.state.life,
        turns=game.state.turns,
        is_finished=game.state.is_finished,
    )


def _play_command(app: Xitzin, request: Request, command: str):
    game = _game_session(request)
    if game.state.is_finished:
        return _render_play(app, game, message=GAME_OVER)
    return _render_play(app, game, message=game.process_command(command))


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        return _render_play(app, _game_session(request))

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable link."""
        return _play_command(app, request, direction)

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        return _play_command(app, request, query)

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        """Look around."""
        return _play_command(app, request, "look")


def _register_info_routes(app: Xitzin) -> None:
    """Register inventory and game management routes."""

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        """Show carried items."""
        game = _game_session(request)
        items = game.get_inventory()
        if not items:
            message = "You are carrying nothing."
        else:
            message = "You are carrying:\n" + "\n".join(items)
        return _render_play(app, game, message=message)

    @app.input(
        "/new",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="new_game",
    )
    @require_certificate
    def new_game(request: Request, query: str):
        """Reset game with confirmation."""
        game = _game_session(request)
        if query.strip().upper() == "YES":
            game.reset()
            return _render_play(app, game, message="A new descent begins!")
        return Redirect("/play")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_info_routes(app)
