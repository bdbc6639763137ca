"""API: camada de borda e adapters.

Responsabilidades:
- Receber o webhook do Jellyfin
- Normalizar o payload para o modelo interno
- Falar com a Graph API do WhatsApp e baixar mídia

Subpastas:
- connectors/: adapters HTTP externos (WhatsApp)
- normalizers/: payloads externos → modelos internos
- routes/: endpoints HTTP

NÃO PODE conter: orquestração de use cases ou regras de composição.
"""
