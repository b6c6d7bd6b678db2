import logging
import socketio

from schemas import EVENT_NAMES

logger = logging.getLogger(__name__)


class RealtimeClient:
    """Subscribes a MoodStore to the user's broadcast group."""

    def __init__(self, url, token, store, sio=None):
        self.url = url
        self.token = token
        self.store = store
        self.sio = sio or socketio.Client(
            reconnection=True,
            reconnection_attempts=5,
            reconnection_delay=2,
        )
        self.sio.on('connect', self._on_connect)
        self.sio.on('disconnect', self._on_disconnect)
        self.sio.on('connect_error', self._on_connect_error)
        for event_name in EVENT_NAMES.values():
            self.sio.on(event_name, self.store.apply_notification)

    def connect(self):
        self.sio.connect(self.url, auth={'token': self.token})

    def disconnect(self):
        if self.sio.connected:
            self.sio.disconnect()

    def _on_connect(self):
        logger.info('Connected to WebSocket server')
        self.store.on_connect()

    def _on_disconnect(self, *args):
        logger.info('Disconnected from WebSocket server')

    def _on_connect_error(self, data=None):
        logger.error(f"WebSocket connection error: {data}")
