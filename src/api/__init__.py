"""API: camada de borda e adapters externos.

Responsabilidades:
- Receber requests HTTP (dispatcher e entrada do forwarder)
- Traduzir erros da hierarquia BridgeError em respostas JSON
- Falar com APIs externas (ACS, dispatcher via HTTP)

Subpastas:
- connectors/: adapters de saída (ACS, cliente HTTP do dispatcher)
- routes/: endpoints HTTP (dispatch, crm, health)

NÃO PODE conter: regras de build de template nem extração de parâmetros.
"""
