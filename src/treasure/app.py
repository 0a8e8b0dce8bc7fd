"""Xitzin application factory for Treasure Dungeon."""

from pathlib import Path

from xitzin import Xitzin

from .config import Config
from .logging import get_logger
from .session import SessionStore

logger = get_logger(__name__)


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="Treasure Dungeon",
        version="0.1.0",
        templates_dir=templates_dir,
    )

    app.state.config = config
    app.state.sessions = SessionStore(config.starting_life, config.max_sessions)

    @app.on_startup
    async def startup():
        logger.info("startup_complete", starting_life=config.starting_life)

    from .routes import home, play

    home.register_routes(app)
    play.register_routes(app)

    return app
