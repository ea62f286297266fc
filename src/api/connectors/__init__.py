"""Connectors: adapters de borda para APIs externas.

Estrutura:
- evolution/: Evolution API (gateway WhatsApp)
"""

__all__: list[str] = []
