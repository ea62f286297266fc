"""Cliente HTTP especializado para a Evolution API.

Estende HttpClient genérico com comportamentos específicos do gateway:
- Header `apikey` em todas as chamadas
- Envio de texto em POST /message/sendText/{instance}
- Erros classificados em permanente vs transitório (GatewayError)
- Logging estruturado sem PII (API key, números, textos)
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from api.connectors.evolution.gateway_errors import is_permanent_status, parse_evolution_error
from app.infra.http import HttpClient, HttpClientConfig
from app.observability import hash_identifier, record_latency
from app.protocols.gateway_client import SendResult
from utils.errors import GatewayError

if TYPE_CHECKING:
    import httpx

    from config.settings import EvolutionSettings

logger: logging.Logger = logging.getLogger(__name__)


class EvolutionHttpClient(HttpClient):
    """Gateway client para a Evolution API.

    Args:
        settings: EvolutionSettings com URL, API key e defaults de envio.
        config: Configuração HTTP base (default derivado de settings).
        transport: Transport httpx opcional (testes).
    """

    def __init__(
        self,
        settings: EvolutionSettings,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            config
            or HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                max_retries=settings.max_retries,
            ),
            transport=transport,
        )
        self._settings = settings

    def _headers(self) -> dict[str, str]:
        if not self._settings.api_key:
            raise GatewayError("evolution_api_key_missing")
        return {"Content-Type": "application/json", "apikey": self._settings.api_key}

    def _build_send_payload(
        self,
        phone: str,
        text: str,
        options: dict[str, Any] | None,
    ) -> dict[str, Any]:
        merged_options: dict[str, Any] = {
            "delay": self._settings.send_delay_ms,
            "presence": "composing",
            "linkPreview": False,
        }
        merged_options.update(options or {})
        return {"number": phone, "text": text, "options": merged_options}

    async def send_text(
        self,
        instance: str,
        phone: str,
        text: str,
        options: dict[str, Any] | None = None,
    ) -> SendResult:
        """Envia mensagem de texto.

        Args:
            instance: Instância Evolution (vazia usa a padrão).
            phone: Telefone apenas com dígitos.
            text: Corpo da mensagem.
            options: Sobrescreve delay/presence/linkPreview.

        Returns:
            SendResult com `key.id` e `status` devolvidos pelo gateway.

        Raises:
            GatewayError: Falha HTTP, resposta inválida ou configuração ausente.
        """
        if not phone or not text:
            raise GatewayError("phone_and_text_required", status_code=400)

        try:
            endpoint = self._settings.get_send_text_endpoint(instance or None)
        except ValueError as exc:
            raise GatewayError("evolution_api_url_missing") from exc

        start = time.perf_counter()
        response = await self.post(
            endpoint,
            json=self._build_send_payload(phone, text, options),
            headers=self._headers(),
        )
        record_latency("evolution_gateway", "send_text", (time.perf_counter() - start) * 1000)

        data = self._parse_json(response, "send_text")
        key = data.get("key") if isinstance(data.get("key"), dict) else {}
        result = SendResult(
            message_id=key.get("id"),
            status=data.get("status"),
            raw=data,
        )
        logger.info(
            "evolution_send_text_ok",
            extra={
                "instance": instance or self._settings.instance_name,
                "phone_hash": hash_identifier(phone),
                "message_id": result.message_id,
                "status": result.status,
            },
        )
        return result

    def _parse_json(self, response: httpx.Response, operation: str) -> dict[str, Any]:
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            description = parse_evolution_error(body)
            logger.warning(
                "evolution_request_failed",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "error": description,
                },
            )
            raise GatewayError(
                f"evolution_{operation}_failed: {description}",
                status_code=response.status_code,
                is_retryable=not is_permanent_status(response.status_code),
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise GatewayError(
                f"evolution_{operation}_invalid_json",
                status_code=response.status_code,
            ) from exc

        if not isinstance(data, dict):
            raise GatewayError(f"evolution_{operation}_unexpected_response")
        return data
