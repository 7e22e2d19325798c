"""Validação de assinatura HMAC-SHA256 de callbacks de status.

A verificação é feita sobre os bytes exatamente como recebidos; nunca sobre
um JSON re-serializado. Sem secret configurado a verificação falha (fail
closed).
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass

SIGNATURE_SCHEME_PREFIX = "sha256="


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da verificação, com motivo da falha para logging."""

    valid: bool
    error: str | None = None


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Calcula o header esperado (`sha256=<hex>`) para um corpo."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_SCHEME_PREFIX}{digest}"


def check_signature(
    raw_body: bytes,
    signature_header: str | None,
    secret: str | None,
) -> SignatureResult:
    """Verifica assinatura e informa o motivo quando inválida.

    Args:
        raw_body: Corpo bruto da requisição
        signature_header: Valor do header de assinatura (com ou sem `sha256=`)
        secret: Secret compartilhado com o provedor
    """
    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    if not signature_header:
        return SignatureResult(valid=False, error="missing_signature")

    provided = signature_header.strip()
    if not provided.isascii():
        return SignatureResult(valid=False, error="invalid_signature")
    if provided.lower().startswith(SIGNATURE_SCHEME_PREFIX):
        provided = provided[len(SIGNATURE_SCHEME_PREFIX):]

    expected = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    if not hmac.compare_digest(expected, provided.lower()):
        return SignatureResult(valid=False, error="invalid_signature")

    return SignatureResult(valid=True)


def verify_signature(
    raw_body: bytes,
    signature_header: str | None,
    secret: str | None,
) -> bool:
    """True somente se a assinatura confere; nunca levanta exceção."""
    return check_signature(raw_body, signature_header, secret).valid
