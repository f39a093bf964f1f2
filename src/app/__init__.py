"""App: casos de uso, serviços e infraestrutura do bridge.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos canônicos (TemplateRequest, bindings, envelope do CRM)
- use_cases/: dispatcher (envio) e forwarder (evento do CRM)
- services/: construção de template, extração de parâmetros, resolvedores
- infra/: implementações concretas de IO (Firestore, Dataverse, secrets)
- protocols/: contratos/interfaces
- observability/: correlation id e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
