"""Connectors: adapters de borda para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Cloud API (Graph API) + download de mídia
"""

__all__: list[str] = []
