"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso do outreach
- services/: gateway de mensageria, estatísticas e locks por cidadão
- domain/: agregado Citizen, status de entrega e telefones
- infra/: implementações concretas de IO
- protocols/: contratos/interfaces
- observability/: correlation_id dos logs
- constants/: constantes da aplicação

Padrão: app executa; api adapta; utils apoia.
"""
