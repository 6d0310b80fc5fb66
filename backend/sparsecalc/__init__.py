from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
import os

# Load environment variables
load_dotenv()

__version__ = '1.0.0'


def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-key')
    app.config['MATRIX_OUTPUT_DIR'] = os.environ.get('MATRIX_OUTPUT_DIR', 'results')
    app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))

    default_level = 'DEBUG' if config_name == 'development' else 'INFO'
    log_level = os.environ.get('LOG_LEVEL', default_level).upper()
    if config_name == 'testing':
        app.config['TESTING'] = True

    # app.logger is the 'sparsecalc' logger, so module loggers propagate to it
    app.logger.setLevel(log_level)

    # Enable CORS
    CORS(app)

    # Register blueprints
    from sparsecalc.routes.main import main_bp
    from sparsecalc.routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api/v1')

    from sparsecalc.cli import compute_command
    app.cli.add_command(compute_command)

    return app
