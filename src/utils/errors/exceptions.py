"""Exceções do núcleo de outreach.

Hierarquia única para falhas de configuração, envio, webhook e domínio.
A camada HTTP traduz cada tipo para o status apropriado.
"""

from __future__ import annotations


class OutreachError(Exception):
    """Base para erros do núcleo de mensageria e engajamento."""


class ConfigurationError(OutreachError):
    """Credenciais ou configuração obrigatória ausente (fail-fast na inicialização)."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "configuração inválida")


class NoChannelError(OutreachError):
    """Cidadão sem canal (telefone) utilizável para envio."""

    def __init__(self, citizen_id: str) -> None:
        super().__init__(f"cidadão {citizen_id} sem WhatsApp cadastrado")
        self.citizen_id = citizen_id


class ProviderError(OutreachError):
    """Falha de transporte ou resposta não-sucesso de um provedor.

    Attributes:
        provider: Rótulo do provedor (ex: "meta", "twilio")
        status_code: Status HTTP ou código de erro do provedor, se houver
        transport_error: Nome da falha de transporte (timeout, conexão)
    """

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        status_code: int | None = None,
        transport_error: str | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.transport_error = transport_error


class UnauthorizedWebhookError(OutreachError):
    """Assinatura do webhook inválida; payload não é interpretado."""


class InvalidWebhookPayloadError(OutreachError):
    """Payload de webhook autenticado, porém malformado ou sem status."""


class AlreadyRespondedError(OutreachError):
    """Tentativa de sobrescrever uma resposta de pesquisa já registrada."""

    def __init__(self, citizen_id: str) -> None:
        super().__init__(f"cidadão {citizen_id} já respondeu a pesquisa")
        self.citizen_id = citizen_id


class CitizenNotFoundError(OutreachError):
    """Cidadão não encontrado no repositório."""

    def __init__(self, citizen_id: str) -> None:
        super().__init__(f"cidadão {citizen_id} não encontrado")
        self.citizen_id = citizen_id


class ResendCooldownError(OutreachError):
    """Reenvio solicitado antes do intervalo mínimo."""

    def __init__(self, citizen_id: str, retry_after_minutes: int) -> None:
        super().__init__(
            f"aguarde {retry_after_minutes} minuto(s) antes de reenviar para {citizen_id}"
        )
        self.citizen_id = citizen_id
        self.retry_after_minutes = retry_after_minutes


class InvalidPhoneError(OutreachError):
    """Telefone que não forma um celular nacional válido após normalização."""

    def __init__(self) -> None:
        super().__init__("WhatsApp inválido; use o formato nacional (11999999999)")


class DuplicateCitizenError(OutreachError):
    """Telefone já cadastrado para outro cidadão."""

    def __init__(self, existing_id: str, existing_name: str) -> None:
        super().__init__(f"telefone já cadastrado para o cidadão {existing_id}")
        self.existing_id = existing_id
        self.existing_name = existing_name
