import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, send_from_directory, request, g
from flask_cors import CORS

from config import Config
from soundshelf.library import LibraryService, LibraryStore, UploadManager
from soundshelf.interfaces.http.routes import music_bp, playlist_bp, health_bp
from soundshelf.observability import configure_structured_logging, metrics_blueprint
from soundshelf.settings import load_app_settings


logger = logging.getLogger(__name__)

_FILE_HANDLER = "soundshelf-file"
_CONSOLE_HANDLER = "soundshelf-console"
_RUN_HANDLERS = (_FILE_HANDLER, _CONSOLE_HANDLER)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging for a server run:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root (no extra console spam)

    Handlers installed by an earlier call are closed and replaced; the JSON
    stdout handler from create_app is left alone. Returns the log file path.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    for handler in [h for h in root.handlers if h.get_name() in _RUN_HANDLERS]:
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.set_name(_FILE_HANDLER)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(overrides=None):
    settings = load_app_settings(overrides)

    app = Flask(__name__, static_folder=None)
    app.config.from_object(Config)
    app.config.update(
        {
            'DATA_FILE': settings.data_file,
            'UPLOAD_DIR': settings.upload_dir,
            'PUBLIC_DIR': settings.public_dir,
            'MAX_UPLOAD_FILES': settings.max_upload_files,
            'MAX_CONTENT_LENGTH': settings.max_content_length,
        }
    )
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    # The player seeks with Range requests, so the range headers must cross origins.
    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_allowed_origins}},
        allow_headers=["Content-Type", "Range", "X-Request-ID"],
        expose_headers=["Content-Range", "Content-Length", "Accept-Ranges", "X-Request-ID"],
    )

    store = LibraryStore(settings.data_file)
    uploads = UploadManager(settings.upload_dir)
    app.extensions['library_service'] = LibraryService(store, uploads)
    app.logger.info(
        "Library ready: data_file=%s, upload_dir=%s", settings.data_file, settings.upload_dir
    )

    # --- Register Blueprints ---
    app.register_blueprint(music_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    public_dir = settings.public_dir

    # --- Serve the prebuilt player when one is present ---
    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def serve_player(path):
        if not public_dir or not os.path.isdir(public_dir):
            return {'ok': False, 'error': 'not found'}, 404
        if path != "" and os.path.exists(os.path.join(public_dir, path)):
            return send_from_directory(public_dir, path)
        return send_from_directory(public_dir, 'index.html')

    return app


if __name__ == '__main__':
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'log')
    # In debug with reloader: only in the child process to avoid duplicate files
    if not debug_mode or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    app = create_app()
    # Route app.logger through root handlers, keep levels consistent
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    logger.info("Starting Flask application on %s:%s", Config.HOST, Config.PORT)
    app.run(debug=Config.DEBUG, host=Config.HOST, port=Config.PORT, threaded=True)
