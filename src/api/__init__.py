"""API: camada de borda e adapters do gateway.

Responsabilidades:
- Receber requests do gateway (webhooks) e do painel (envio manual)
- Validar e normalizar payloads para modelos internos
- Falar HTTP com a Evolution API

Subpastas:
- connectors/: cliente HTTP da Evolution API
- normalizers/: conversão de payloads externos para modelos internos
- routes/: endpoints HTTP (webhook, envio manual, cache, health)

NÃO PODE conter: regras de resposta automática nem estado de contatos.
"""
