from flask import current_app, request
from arena import socketio
from arena.messages import MOVEMENT
from arena.services.world.session import SessionManager


def _sessions() -> SessionManager:
    return current_app.extensions['arena']


def _get_sid() -> str:
    # request.sid only exists inside a Socket.IO handler
    return request.sid  # type: ignore


def handle_connect(auth=None):
    _sessions().connect(_get_sid())


def handle_disconnect(reason=None):
    _sessions().disconnect(_get_sid())


def handle_movement(data=None):
    _sessions().move(_get_sid(), data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the game namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(MOVEMENT, handle_movement, namespace=namespace)
