from flask import Flask
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

bcrypt = Bcrypt()
socketio = SocketIO(async_mode=None)


def _allowed_origins(config):
    raw = config.get('CORS_ORIGINS') or '*'
    if raw.strip() == '*':
        return '*'
    return [o.strip() for o in raw.split(',') if o.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))
    allowed_origins = _allowed_origins(flask_app.config)

    bcrypt.init_app(flask_app)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Room state lives for the lifetime of this app; handlers and routes
    # reach it through flask_app.extensions
    from tictactoe.socketio_events import GameRouter, register_socketio_handlers
    router = GameRouter(
        socketio,
        max_name_length=int(flask_app.config.get('MAX_NAME_LENGTH', 32)),
    )
    flask_app.extensions['tictactoe'] = router
    register_socketio_handlers(socketio, router)

    from tictactoe.main import main
    flask_app.register_blueprint(main)

    from tictactoe.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    from tictactoe.services.rooms.reaper import start_room_reaper
    start_room_reaper(flask_app, socketio, router)

    return flask_app
