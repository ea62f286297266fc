"""Redis Notification Sink: publicação de eventos em canal pub/sub.

Transporte do "new_message" para a UI em tempo real. Entrega é
best-effort; falhas viram RedisConnectionError e o caller decide.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.protocols.notification_sink import NotificationSinkProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "atende:new_message"


class RedisNotificationSink(NotificationSinkProtocol):
    """Sink de notificações usando Redis PUBLISH.

    Args:
        async_redis_client: Cliente Redis assíncrono
        channel: Canal pub/sub de destino
    """

    def __init__(
        self,
        async_redis_client: AsyncRedis[bytes],
        channel: str = DEFAULT_CHANNEL,
    ) -> None:
        self._redis = async_redis_client
        self._channel = channel

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        """Publica o evento serializado em JSON no canal configurado."""
        message = json.dumps(
            {
                "event": event,
                "payload": payload,
                "published_at": datetime.now(UTC).isoformat(),
            },
            ensure_ascii=False,
            default=str,
        )
        try:
            receivers = await self._redis.publish(self._channel, message)
        except Exception as exc:
            raise RedisConnectionError("Falha ao publicar notificação no Redis") from exc

        logger.debug(
            "notification_published",
            extra={"channel": self._channel, "event": event, "receivers": receivers},
        )
