"""App: orquestração, casos de uso e wiring.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos do evento normalizado e da mensagem composta
- use_cases/: casos de uso (sem IO direto)
- services/: composição, despacho e readiness
- protocols/: contratos/interfaces do cliente de mensagens
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
