"""Use case de processamento de um evento inbound da Evolution API.

Máquina de estados por evento:
    Received -> Validated -> Extracted -> CacheUpdated
             -> (AutoReplied | Skipped) -> Completed | Rejected

Nenhuma exceção escapa de `execute`: todas as falhas viram um
InboundProcessingResult com `success`/`reason`, para que a camada HTTP
sempre responda 2xx e o gateway não entre em retry.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from api.normalizers.evolution import InvalidPayloadError, extract_message_info, parse_envelope
from api.normalizers.evolution.envelope import is_message_event
from app.domain.contact_patch import ContactPatch
from app.domain.phone import normalize_jid, to_gateway_number
from app.observability import (
    hash_identifier,
    record_auto_reply,
    record_inbound_event,
    record_latency,
)
from app.services.language_detector import detect_language
from config.logging import log_fallback
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from api.normalizers.evolution import EvolutionEnvelope
    from app.domain.contact_profile import ContactProfile
    from app.domain.message_info import MessageInfo
    from app.domain.phone import PhoneInfo
    from app.protocols import (
        ContactDirectoryProtocol,
        GatewayClientProtocol,
        NotificationSinkProtocol,
        TicketStoreProtocol,
    )
    from app.services.auto_reply import AutoReplyDecision, AutoReplyEngine

logger = logging.getLogger(__name__)

NEW_MESSAGE_EVENT = "new_message"


class ProcessingReason:
    """Motivos reportados no resultado (taxonomia de erros do pipeline)."""

    PROCESSED = "processed"
    MALFORMED_PAYLOAD = "malformed_payload"
    UNRECOGNIZED_CONTENT = "unrecognized_content"
    INVALID_PHONE = "invalid_phone"
    DOWNSTREAM_UNAVAILABLE = "downstream_unavailable"
    IGNORED_EVENT = "ignored_event"
    INTERNAL_ERROR = "internal_error"


class ProcessingState(StrEnum):
    RECEIVED = "received"
    VALIDATED = "validated"
    EXTRACTED = "extracted"
    CACHE_UPDATED = "cache_updated"
    AUTO_REPLIED = "auto_replied"
    SKIPPED = "skipped"
    COMPLETED = "completed"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class InboundProcessingResult:
    """Resultado do processamento de um evento inbound."""

    success: bool
    reason: str
    state: ProcessingState
    trail: tuple[ProcessingState, ...] = ()
    contact: ContactProfile | None = None
    message_info: MessageInfo | None = None
    auto_reply: AutoReplyDecision | None = None
    send_failed: bool = False
    sent_message_id: str | None = None
    warnings: tuple[str, ...] = ()

    @property
    def cache_updated(self) -> bool:
        return ProcessingState.CACHE_UPDATED in self.trail

    def to_dict(self) -> dict[str, Any]:
        """Corpo de resposta do webhook (sem telefone em claro)."""
        contact = self.contact
        return {
            "success": self.success,
            "reason": self.reason,
            "state": self.state.value,
            "cache_updated": self.cache_updated,
            "contact": (
                {
                    "name": contact.name,
                    "language": contact.language,
                    "message_count": contact.message_count,
                    "is_group": contact.is_group,
                }
                if contact is not None
                else None
            ),
            "message": self.message_info.to_dict() if self.message_info else None,
            "auto_reply": self.auto_reply.to_dict() if self.auto_reply else None,
            "send_failed": self.send_failed,
            "warnings": list(self.warnings),
        }


@dataclass
class _Run:
    """Estado mutável de uma execução (acumulado durante o pipeline)."""

    trail: list[ProcessingState] = field(default_factory=lambda: [ProcessingState.RECEIVED])
    warnings: list[str] = field(default_factory=list)

    def reach(self, state: ProcessingState) -> None:
        self.trail.append(state)

    def reject(self, reason: str, *, success: bool = False, **kwargs: Any) -> InboundProcessingResult:
        self.trail.append(ProcessingState.REJECTED)
        return InboundProcessingResult(
            success=success,
            reason=reason,
            state=ProcessingState.REJECTED,
            trail=tuple(self.trail),
            warnings=tuple(self.warnings),
            **kwargs,
        )


@dataclass(frozen=True, slots=True)
class _ReplyOutcome:
    decision: AutoReplyDecision | None
    sent: bool = False
    send_failed: bool = False
    message_id: str | None = None


class ProcessInboundEventUseCase:
    """Orquestra normalização, diretório de contatos e resposta automática.

    Args:
        directory: Diretório de contatos (único estado compartilhado).
        auto_reply: Motor de decisão de resposta automática.
        gateway: Cliente de envio de texto.
        ticket_store: Store de conversas (opcional).
        notification_sink: Sink de eventos em tempo real (opcional).
        default_instance: Instância usada quando o envelope não informa.
        default_language: Idioma inicial de contatos novos.
        send_timeout_seconds: Limite do envio da resposta automática.
        downstream_timeout_seconds: Limite de cada chamada a store/sink.
    """

    def __init__(
        self,
        *,
        directory: ContactDirectoryProtocol,
        auto_reply: AutoReplyEngine,
        gateway: GatewayClientProtocol,
        ticket_store: TicketStoreProtocol | None = None,
        notification_sink: NotificationSinkProtocol | None = None,
        default_instance: str,
        default_language: str = "pt",
        send_timeout_seconds: float = 10.0,
        downstream_timeout_seconds: float = 5.0,
    ) -> None:
        self._directory = directory
        self._auto_reply = auto_reply
        self._gateway = gateway
        self._ticket_store = ticket_store
        self._notification_sink = notification_sink
        self._default_instance = default_instance
        self._default_language = default_language
        self._send_timeout = send_timeout_seconds
        self._downstream_timeout = downstream_timeout_seconds

    async def execute(self, envelope: Any) -> InboundProcessingResult:
        """Processa um evento de webhook. Nunca levanta exceção."""
        start = time.perf_counter()
        try:
            result = await self._process(envelope)
        except Exception:
            logger.exception("inbound_event_internal_error")
            result = InboundProcessingResult(
                success=False,
                reason=ProcessingReason.INTERNAL_ERROR,
                state=ProcessingState.REJECTED,
            )

        latency_ms = (time.perf_counter() - start) * 1000
        record_latency("inbound_processor", "execute", latency_ms)
        record_inbound_event(
            result.reason,
            success=result.success,
            message_type=result.message_info.type if result.message_info else None,
        )
        logger.info(
            "inbound_event_processed",
            extra={
                "success": result.success,
                "reason": result.reason,
                "state": result.state.value,
                "send_failed": result.send_failed,
                "warnings": list(result.warnings),
            },
        )
        return result

    async def _process(self, raw: Any) -> InboundProcessingResult:
        run = _Run()

        if not isinstance(raw, Mapping):
            return run.reject(ProcessingReason.MALFORMED_PAYLOAD)

        event = raw.get("event")
        if event and not is_message_event(event):
            logger.debug("inbound_event_ignored", extra={"event": str(event)[:64]})
            run.reach(ProcessingState.COMPLETED)
            return InboundProcessingResult(
                success=True,
                reason=ProcessingReason.IGNORED_EVENT,
                state=ProcessingState.COMPLETED,
                trail=tuple(run.trail),
            )

        try:
            envelope = parse_envelope(raw, default_instance=self._default_instance)
        except InvalidPayloadError as exc:
            logger.info("inbound_event_malformed", extra={"error": str(exc)})
            return run.reject(ProcessingReason.MALFORMED_PAYLOAD)

        phone = normalize_jid(envelope.remote_jid)
        if not phone.is_valid:
            logger.info(
                "inbound_event_invalid_phone",
                extra={"format": phone.format, "jid_hash": hash_identifier(envelope.remote_jid)},
            )
            # Grupos e identificadores curtos são reconhecidos, não reenviados
            return run.reject(ProcessingReason.INVALID_PHONE, success=True)
        run.reach(ProcessingState.VALIDATED)

        message_info = extract_message_info(envelope.message)
        if message_info is None:
            return run.reject(ProcessingReason.UNRECOGNIZED_CONTENT)
        run.reach(ProcessingState.EXTRACTED)

        profile = await self._update_contact(envelope, phone, message_info)
        run.reach(ProcessingState.CACHE_UPDATED)

        outcome = await self._handle_auto_reply(envelope, phone, profile, message_info, run)
        run.reach(ProcessingState.AUTO_REPLIED if outcome.sent else ProcessingState.SKIPPED)

        await self._publish_downstream(envelope, profile, message_info, outcome.decision, run)
        run.reach(ProcessingState.COMPLETED)

        degraded = outcome.send_failed or bool(run.warnings)
        return InboundProcessingResult(
            success=True,
            reason=(
                ProcessingReason.DOWNSTREAM_UNAVAILABLE if degraded else ProcessingReason.PROCESSED
            ),
            state=ProcessingState.COMPLETED,
            trail=tuple(run.trail),
            contact=profile,
            message_info=message_info,
            auto_reply=outcome.decision,
            send_failed=outcome.send_failed,
            sent_message_id=outcome.message_id,
            warnings=tuple(run.warnings),
        )

    async def _update_contact(
        self,
        envelope: EvolutionEnvelope,
        phone: PhoneInfo,
        message_info: MessageInfo,
    ) -> ContactProfile:
        seed = ContactPatch(
            phone=phone.raw,
            phone_formatted=phone.formatted,
            country=phone.country,
            is_group=False,
            language=self._default_language,
        )

        def build_patch(existing: ContactProfile | None) -> ContactPatch:
            # Em fromMe, pushName e texto são do próprio negócio
            if envelope.from_me:
                return ContactPatch()
            language = None
            if message_info.is_text:
                current = existing.language if existing else self._default_language
                language = detect_language(message_info.content, current)
            return ContactPatch(push_name=envelope.push_name, language=language)

        return await self._directory.upsert(
            envelope.directory_key,
            build_patch,
            seed=seed,
            inbound=not envelope.from_me,
        )

    async def _handle_auto_reply(
        self,
        envelope: EvolutionEnvelope,
        phone: PhoneInfo,
        profile: ContactProfile,
        message_info: MessageInfo,
        run: _Run,
    ) -> _ReplyOutcome:
        """Avalia e envia a resposta automática."""
        if envelope.from_me:
            return _ReplyOutcome(decision=None)

        decision = self._auto_reply.decide(
            profile,
            message_info.content,
            from_me=envelope.from_me,
            now=profile.last_interaction_at,
        )
        if not decision.should_reply or decision.template_key is None:
            return _ReplyOutcome(decision=decision)

        body = self._auto_reply.render(decision, profile)
        try:
            result = await asyncio.wait_for(
                self._gateway.send_text(envelope.instance, to_gateway_number(phone.raw), body),
                timeout=self._send_timeout,
            )
        except TimeoutError:
            self._send_failed(decision, run, "timeout")
            return _ReplyOutcome(decision=decision, send_failed=True)
        except InfrastructureError as exc:
            self._send_failed(decision, run, type(exc).__name__)
            return _ReplyOutcome(decision=decision, send_failed=True)

        record_auto_reply(
            decision.template_key,
            decision.language,
            sent=True,
            after_hours=decision.after_hours,
        )
        logger.info(
            "auto_reply_sent",
            extra={
                "template_key": decision.template_key,
                "language": decision.language,
                "message_id": result.message_id,
            },
        )
        return _ReplyOutcome(decision=decision, sent=True, message_id=result.message_id)

    def _send_failed(self, decision: AutoReplyDecision, run: _Run, cause: str) -> None:
        run.warnings.append(f"auto_reply_send_failed:{cause}")
        record_auto_reply(
            decision.template_key or "",
            decision.language,
            sent=False,
            after_hours=decision.after_hours,
        )
        logger.warning(
            "auto_reply_send_failed",
            extra={"cause": cause, "template_key": decision.template_key},
        )

    async def _publish_downstream(
        self,
        envelope: EvolutionEnvelope,
        profile: ContactProfile,
        message_info: MessageInfo,
        decision: AutoReplyDecision | None,
        run: _Run,
    ) -> None:
        contact_data = profile.to_contact_data()

        if self._ticket_store is not None:
            try:
                await asyncio.wait_for(
                    self._ticket_store.record_conversation(
                        contact_data,
                        message_info,
                        message_id=envelope.message_id,
                    ),
                    timeout=self._downstream_timeout,
                )
            except (TimeoutError, InfrastructureError) as exc:
                run.warnings.append("ticket_store_unavailable")
                log_fallback(logger, "ticket_store", reason=type(exc).__name__)

        if self._notification_sink is not None:
            payload = {
                "instance": envelope.instance,
                "message_id": envelope.message_id,
                "from_me": envelope.from_me,
                "contact": contact_data,
                "message": message_info.to_dict(),
                "auto_reply": decision.to_dict() if decision else None,
            }
            try:
                await asyncio.wait_for(
                    self._notification_sink.publish(NEW_MESSAGE_EVENT, payload),
                    timeout=self._downstream_timeout,
                )
            except (TimeoutError, InfrastructureError) as exc:
                run.warnings.append("notification_sink_unavailable")
                log_fallback(logger, "notification_sink", reason=type(exc).__name__)
