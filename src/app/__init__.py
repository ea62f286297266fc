"""App: coração do sistema, com orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: valores imutáveis (telefone, perfil de contato, conteúdo)
- use_cases/: casos de uso (processamento inbound, envio manual)
- services/: detecção de idioma e motor de resposta automática
- infra/: implementações concretas de IO (diretório, stores, HTTP)
- protocols/: contratos/interfaces
- observability/: logs estruturados, correlação, métricas
- constants/: templates de resposta automática

Padrão: app executa; api adapta; utils apoia.
"""
