"""Conector WhatsApp (Meta Cloud API) — provedor primário.

Responsabilidades:
- Envio de texto/template via Graph API
- Interpretação de erros da Graph API
- Parsing de callbacks de status
- Handshake de verificação do webhook
"""

from .adapter import META_SIGNATURE_HEADER, MetaProviderAdapter
from .http_client import WhatsAppHttpClient
from .meta_errors import WhatsAppApiError, is_permanent_error, parse_meta_error
from .status import map_meta_status, parse_meta_status_events

__all__ = [
    "META_SIGNATURE_HEADER",
    "MetaProviderAdapter",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "is_permanent_error",
    "map_meta_status",
    "parse_meta_error",
    "parse_meta_status_events",
]
