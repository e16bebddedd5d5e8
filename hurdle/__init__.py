"""
Hurdle Game Server Application Package

Chained five-letter word rounds: each solved hurdle scores more than the
last, and its answer becomes the first guess of the next one.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.
    
    Args:
        config_class: Configuration class to use
        
    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    CORS(app)
    
    # Register blueprints
    from .controllers.hurdle_controller import hurdle_bp
    
    app.register_blueprint(hurdle_bp, url_prefix='/api')
    
    return app
