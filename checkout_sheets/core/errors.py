"""
Error taxonomy for checkout-sheets.

Every failure that ends a relay request is a RelayError subclass carrying
the HTTP status and the JSON body returned to the checkout.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """Falha terminal de uma requisição"""

    status_code: int = 500
    message: str = "Erro ao processar requisição"
    reason: str = "error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail

    def to_body(self) -> Dict[str, Any]:
        return {"erro": self.message}


class MalformedBody(RelayError):
    status_code = 400
    message = "Body inválido — deve ser JSON"
    reason = "malformed_body"


class IncompleteData(RelayError):
    status_code = 400
    message = "Dados incompletos"
    reason = "incomplete_data"


class InvalidType(RelayError):
    status_code = 400
    message = "Tipo inválido"
    reason = "invalid_type"


class ConfigurationMissing(RelayError):
    status_code = 500
    message = "Configuração incompleta"
    reason = "configuration_missing"


class RemoteFailure(RelayError):
    """Falha na leitura/escrita da planilha ou nas credenciais"""

    status_code = 500
    message = "Erro ao processar requisição"
    reason = "remote_failure"

    def to_body(self) -> Dict[str, Any]:
        return {"erro": self.message, "detalhes": self.detail or self.message}
