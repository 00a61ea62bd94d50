"""
SumTen Game Server - Main Entry Point

This is the main entry point for the SumTen game server.
It builds the Flask-SocketIO application and starts serving.
"""

import os

from sumten import create_app
from sumten.config import config
from sumten.services.game_service import get_game_service
from sumten.utils.game_logger import game_logger


def main():
    """Main function to create the application and start the server."""
    config_class = config[os.getenv('APP_ENV', 'default')]
    try:
        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info(
            f"SumTen Server Starting - admin name '{config_class.ADMIN_NAME}', "
            f"board {config_class.DEFAULT_ROWS}x{config_class.DEFAULT_COLS}, {config_class.DEFAULT_DURATION}s rounds"
        )

        print(f"\nStarting SumTen Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        # Start the server
        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("SumTen Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        session = get_game_service()
        if session:
            session.shutdown()


if __name__ == '__main__':
    main()
