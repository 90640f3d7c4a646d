from flask import current_app, request
from chessroom import socketio
from chessroom.services.session.coordinator import GameSession
from typing import Any


class SocketIOTransport:
    """Unicast and broadcast over the Socket.IO server.

    Emits are fire-and-forget: a connection that is going away simply
    misses the event.
    """

    def __init__(self, namespace: str = '/'):
        self.namespace = namespace

    def send(self, connection_id: str, event: str, payload: Any = None) -> None:
        try:
            socketio.emit(event, payload, to=connection_id, namespace=self.namespace)
        except Exception as exc:
            current_app.logger.warning(f"[emit-failed] event={event} sid={connection_id} error={exc}")

    def broadcast(self, event: str, payload: Any = None) -> None:
        try:
            socketio.emit(event, payload, namespace=self.namespace)
        except Exception as exc:
            current_app.logger.warning(f"[broadcast-failed] event={event} error={exc}")


def _session() -> GameSession:
    return current_app.extensions['chessroom']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    _session().on_connect(_get_sid())


def handle_disconnect(reason=None):
    _session().on_disconnect(_get_sid())


def handle_move(data=None):
    _session().on_move(_get_sid(), data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Called from create_app after socketio.init_app so the handlers bind
    to the freshly created server.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
