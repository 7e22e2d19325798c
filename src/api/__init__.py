"""API — camada de borda e adapters de provedores.

Responsabilidades:
- Receber callbacks de status dos provedores (webhooks)
- Validar assinaturas e payloads
- Construir payloads para as APIs externas

Subpastas:
- connectors/: adapters HTTP por provedor (Meta, Twilio) e assinatura HMAC
- payload_builders/: construção de payloads da Graph API
- routes/: endpoints HTTP (webhooks, health, painel)

NÃO PODE conter: regras de engajamento ou persistência.
"""
