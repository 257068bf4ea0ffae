from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config, parse_origins

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = parse_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per app; handlers reach it through app.extensions
    from rating_rooms.broadcast import SocketIOBroadcaster
    from rating_rooms.services.rooms import RoomRegistry
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['room_registry'] = RoomRegistry(
        SocketIOBroadcaster(socketio, namespace=namespace),
        code_length=flask_app.config.get('ROOM_CODE_LENGTH', 6),
        max_attempts=flask_app.config.get('ROOM_CODE_MAX_ATTEMPTS', 10),
        logger=flask_app.logger,
    )

    from rating_rooms.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from rating_rooms.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
