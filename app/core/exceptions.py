"""Errores del pipeline de sincronización de productos."""

from typing import Optional

from fastapi import status


class ProductSyncError(Exception):
    """Base de todos los errores del pipeline."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SchemaValidationError(ProductSyncError):
    """El cuerpo no cumple el esquema del evento."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConsistencyError(ProductSyncError):
    """El campo languages no concuerda con los payloads recibidos."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, locale: str, reason: str):
        super().__init__(message)
        self.locale = locale
        self.reason = reason


class EnqueueError(ProductSyncError):
    """El evento era válido pero no se ha podido encolar."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamResolutionError(ProductSyncError):
    """Un alias de Typesense no se ha podido resolver a una colección."""

    def __init__(self, message: str, alias: str, alias_not_found: bool = False):
        super().__init__(message)
        self.alias = alias
        self.alias_not_found = alias_not_found


class UpstreamWriteError(ProductSyncError):
    """Fallo en una importación masiva o en un borrado contra Typesense."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = status_code
