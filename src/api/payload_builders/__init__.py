"""Payload builders por provedor.

Estrutura:
- whatsapp/: Meta WhatsApp Cloud API (texto e template)

O Twilio recebe formulário simples montado no próprio adapter.
"""

__all__: list[str] = []
