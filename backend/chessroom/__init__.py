from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from chessroom.config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS')
    CORS(flask_app, origins=allowed_origins or [])

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from chessroom.main import main
    flask_app.register_blueprint(main)

    # One game per process; handlers reach it through current_app
    from chessroom.services.session.coordinator import GameSession
    from chessroom.socketio_events import SocketIOTransport, register_socketio_handlers
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['chessroom'] = GameSession(
        transport=SocketIOTransport(namespace),
        starting_fen=flask_app.config.get('STARTING_FEN'),
        send_state_on_join=flask_app.config.get('SEND_STATE_ON_JOIN', True),
        notify_out_of_turn=flask_app.config.get('NOTIFY_OUT_OF_TURN', False),
    )

    # Register Socket.IO event handlers on the server created by init_app
    register_socketio_handlers(namespace=namespace)

    return flask_app
