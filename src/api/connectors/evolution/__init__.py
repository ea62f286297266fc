"""Conector Evolution API (gateway WhatsApp não oficial)."""

from api.connectors.evolution.http_client import EvolutionHttpClient

__all__ = ["EvolutionHttpClient"]
