from enum import Enum
from typing import Iterable, List, Optional

from arena.messages import Message


class Addressing(Enum):
    UNICAST = 'unicast'              # the originating connection only
    EXCEPT_SENDER = 'except_sender'  # everyone but the originating connection
    ALL = 'all'


def resolve_recipients(addressing: Addressing, sender: Optional[str], connections: Iterable[str]) -> List[str]:
    """Pick the session ids a message goes to.

    ``connections`` is the ordered set of attached sessions. A unicast goes to
    the sender even when it is not (or no longer) attached.
    """
    if addressing is Addressing.UNICAST:
        return [sender] if sender is not None else []
    if addressing is Addressing.EXCEPT_SENDER:
        return [sid for sid in connections if sid != sender]
    if addressing is Addressing.ALL:
        return list(connections)
    raise ValueError(f"unknown addressing {addressing!r}")


class Dispatcher:
    """Fans messages out to attached connections.

    Subclasses implement ``deliver`` for a concrete transport. Connections
    are kept in attach order so fan-out order is stable.
    """

    def __init__(self):
        self._connections = {}

    @property
    def connections(self) -> List[str]:
        return list(self._connections)

    def attach(self, sid: str) -> None:
        self._connections[sid] = True

    def detach(self, sid: str) -> None:
        self._connections.pop(sid, None)

    def dispatch(self, message: Message, addressing: Addressing, sender: Optional[str] = None) -> List[str]:
        recipients = resolve_recipients(addressing, sender, self._connections)
        payload = message.payload()
        for sid in recipients:
            self.deliver(sid, message.event, payload)
        return recipients

    def deliver(self, sid: str, event: str, payload) -> None:
        raise NotImplementedError


class SocketIODispatcher(Dispatcher):
    """Delivers through Flask-SocketIO, one emit per recipient room."""

    def __init__(self, socketio, namespace: str = '/'):
        super().__init__()
        self.socketio = socketio
        self.namespace = namespace

    def deliver(self, sid, event, payload):
        # Every session is in a room named after its own sid
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)
