"""
SumTen Game Server Application Package

Real-time multiplayer "make ten" grid puzzle served over Flask-SocketIO.
One authoritative game session is shared by every connected player.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config, validate_countdown_seconds, validate_game_settings
from .models.game import GameSettings


def create_app(config_class=Config, scheduler=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        scheduler: Timer scheduler for the game session; defaults to
            Flask-SocketIO background tasks

    Returns:
        Tuple of the Flask application and its SocketIO server
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    from .utils.game_logger import game_logger
    game_logger.configure(app.config['LOG_DIR'], app.config['LOG_LEVEL'])

    # Initialize extensions
    CORS(app, origins=app.config['CORS_ORIGINS'])
    socketio = SocketIO(app, cors_allowed_origins=app.config['CORS_ORIGINS'], logger=False, engineio_logger=False)

    # Initialize the shared game session
    from .services.broadcast_service import BroadcastCoordinator
    from .services.game_service import initialize_game_service
    from .services.timer_service import SocketIOScheduler

    settings = GameSettings(
        rows=app.config['DEFAULT_ROWS'],
        cols=app.config['DEFAULT_COLS'],
        duration=app.config['DEFAULT_DURATION']
    )
    validate_game_settings(settings.rows, settings.cols, settings.duration)
    validate_countdown_seconds(app.config['COUNTDOWN_SECONDS'])
    initialize_game_service(
        BroadcastCoordinator(socketio),
        scheduler or SocketIOScheduler(socketio),
        settings=settings,
        admin_name=app.config['ADMIN_NAME'],
        countdown_seconds=app.config['COUNTDOWN_SECONDS'],
        tick_seconds=app.config['TICK_SECONDS']
    )

    # Register blueprints
    from .controllers.session_controller import session_bp
    app.register_blueprint(session_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
