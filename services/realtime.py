"""Per-user broadcast of log mutations over Socket.IO."""
import logging
from typing import Dict, Optional

from flask import current_app, request
from flask_socketio import SocketIO, join_room
from socketio.exceptions import ConnectionRefusedError

from extensions import db
from schemas import EVENT_NAMES, build_event
from services.summary import build_summary
from utils.token import decode_access_token

logger = logging.getLogger(__name__)


def user_room(user_id):
    return f"user-{user_id}"


class RealtimeService:
    """Owns the socket server, the handshake check and the broadcast groups.

    Constructed once per application by ``create_app`` and reached from
    request handlers through :func:`get_realtime`.
    """

    def __init__(self, socketio: Optional[SocketIO] = None):
        self.socketio = socketio or SocketIO()
        self._sessions: Dict[str, str] = {}  # sid -> user id
        self._active = False

    def init_app(self, app):
        self.socketio.init_app(
            app,
            cors_allowed_origins=app.config['CORS_ORIGIN'],
            async_mode=app.config['SOCKETIO_ASYNC_MODE'],
        )
        self.socketio.on_event('connect', self._on_connect)
        self.socketio.on_event('disconnect', self._on_disconnect)
        app.extensions['realtime'] = self
        self._active = True
        logger.info('Socket.IO initialized')

    def shutdown(self):
        """Stop broadcasting and drop every connected session."""
        self._active = False
        for sid in list(self._sessions):
            try:
                self.socketio.server.disconnect(sid)
            except Exception as e:
                logger.warning(f"Failed to disconnect session {sid}: {str(e)}")
        self._sessions.clear()
        logger.info('Socket.IO shut down')

    @property
    def active(self):
        return self._active

    def session_count(self, user_id) -> int:
        return sum(1 for owner in list(self._sessions.values()) if owner == user_id)

    # ---------- Handshake ----------

    def _on_connect(self, auth=None):
        if not self._active:
            logger.warning('Rejected socket handshake while shutting down')
            raise ConnectionRefusedError('Server shutting down')

        token = auth.get('token') if isinstance(auth, dict) else None
        if not token:
            logger.warning('Rejected socket handshake without a token')
            raise ConnectionRefusedError('Authentication error: Token required')

        claims = decode_access_token(token)
        if claims is None:
            logger.warning('Rejected socket handshake with an invalid token')
            raise ConnectionRefusedError('Authentication error: Invalid token')

        join_room(user_room(claims['id']))
        self._sessions[request.sid] = claims['id']
        logger.info(f"User connected: {claims.get('email')}")

    def _on_disconnect(self, reason=None):
        user_id = self._sessions.pop(request.sid, None)
        if user_id is not None:
            logger.info(f"User {user_id} disconnected")

    # ---------- Broadcast ----------

    def notify(self, kind, user_id, record):
        """Broadcast a committed mutation to every session of ``user_id``.

        Both aggregate views are recomputed first; if that fails the event
        goes out without ``summaryData`` so clients refetch instead. Emit
        failures are logged and dropped.
        """
        if not self._active:
            logger.warning(f"Realtime service inactive, dropping log:{kind} for user {user_id}")
            return None

        try:
            summary = build_summary(user_id)
        except Exception as e:
            logger.error(f"Failed to recompute summaries for user {user_id}: {str(e)}", exc_info=True)
            db.session.rollback()
            summary = None

        event = build_event(kind, record, summary)
        try:
            self.socketio.emit(
                EVENT_NAMES[kind],
                event.model_dump(by_alias=True),
                to=user_room(user_id),
            )
        except Exception as e:
            logger.error(f"Failed to broadcast log:{kind} to user {user_id}: {str(e)}", exc_info=True)
        return event


def get_realtime() -> RealtimeService:
    return current_app.extensions['realtime']
