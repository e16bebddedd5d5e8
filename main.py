"""
Hurdle Game Server - Main Entry Point

This is the main entry point for the Hurdle game server.
It initializes the hurdle service and starts the Flask application.
"""

from hurdle import create_app
from hurdle.config import Config
from hurdle.services.hurdle_service import initialize_hurdle_service
from hurdle.services.stats_service import InMemoryStatsRepository, MongoStatsRepository
from hurdle.utils.game_logger import game_logger


def create_stats_repository():
    """MongoDB-backed statistics when configured, in-memory otherwise."""
    if Config.MONGO_URI:
        try:
            repository = MongoStatsRepository(Config.MONGO_URI, Config.MONGO_DATABASE)
            print("✓ MongoDB statistics storage connected")
            return repository
        except Exception as e:
            game_logger.logger.error(f"Failed to connect statistics storage: {e}")
            print(f"✗ Failed to connect to MongoDB ({e}), using in-memory statistics")
    else:
        print("MongoDB URI not configured, using in-memory statistics")

    return InMemoryStatsRepository()


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        stats_repository = create_stats_repository()
        hurdle_service = initialize_hurdle_service(stats_repository=stats_repository)
        print(f"✓ Hurdle service initialized ({hurdle_service.word_provider.size()} words)")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Hurdle Server Starting")

        print(f"\nStarting Hurdle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Statistics storage: {type(stats_repository).__name__}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Hurdle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
