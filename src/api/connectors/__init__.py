"""Connectors por provedor — adapters de borda para APIs de mensageria.

Estrutura:
- whatsapp/: Meta WhatsApp Cloud API (primário)
- twilio/: Twilio WhatsApp (secundário)
- signature.py: verificação HMAC dos callbacks
- http_base.py: cliente HTTP com timeout explícito
"""

__all__: list[str] = []
