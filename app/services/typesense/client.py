"""Typesense API client for the product collections."""

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from app.constants.typesense import (
    ALIAS_PATH,
    API_KEY_HEADER,
    DOCUMENTS_PATH,
    IMPORT_PATH,
    ODOO_ID_FILTER,
)
from app.core.config import settings
from app.core.exceptions import UpstreamResolutionError, UpstreamWriteError
from app.schemas.typesense import (
    AliasResponse,
    DeleteResponse,
    ErrorResponse,
    ImportResult,
)
from app.services.typesense.jsonl import load_jsonl

logger = logging.getLogger(__name__)


class TypesenseClient:
    """
    Thin client over the three Typesense endpoints the sync needs:
    alias resolution, bulk import and delete by filter.
    """

    def __init__(
        self,
        host: str,
        api_key: str,
        port: Optional[int] = 443,
        protocol: str = "https",
        timeout: float = 60.0,
        import_action: str = "create",
        session: Optional[requests.Session] = None,
    ):
        self.base_url = f"{protocol}://{host}"
        if port:
            self.base_url += f":{port}"
        self.api_key = api_key
        self.timeout = timeout
        self.import_action = import_action
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, session: Optional[requests.Session] = None) -> "TypesenseClient":
        return cls(
            host=settings.typesense_host,
            api_key=settings.typesense_admin_key,
            port=settings.typesense_port,
            protocol=settings.typesense_protocol,
            timeout=settings.typesense_timeout,
            import_action=settings.typesense_import_action,
            session=session,
        )

    def _request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> requests.Response:
        request_headers = {API_KEY_HEADER: self.api_key}
        if headers:
            request_headers.update(headers)
        logger.debug(f"Typesense request: {method} {path} params={kwargs.get('params')}")
        return self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=request_headers,
            timeout=self.timeout,
            **kwargs,
        )

    def resolve_collection(self, alias: str) -> str:
        """
        Resolve an alias to the collection it currently points to.

        Raises:
            UpstreamResolutionError: if the alias does not exist, the call
                fails or the response has an unexpected shape
        """
        try:
            response = self._request("GET", ALIAS_PATH.format(alias=alias))
        except requests.RequestException as e:
            raise UpstreamResolutionError(
                f"No se ha podido obtener la colección: {e}", alias=alias
            ) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            if response.ok:
                try:
                    return AliasResponse.model_validate(data).collection_name
                except ValidationError:
                    pass
            try:
                error = ErrorResponse.model_validate(data)
            except ValidationError:
                error = None
            if error and (response.ok or response.status_code == 404):
                logger.error(f"Typesense alias {alias} not found: {error.message}")
                raise UpstreamResolutionError(
                    f"No existe una colección para el alias: {alias}",
                    alias=alias,
                    alias_not_found=True,
                )

        if not response.ok:
            raise UpstreamResolutionError(
                f"No se ha podido obtener la colección: "
                f"{response.status_code} - {response.text}",
                alias=alias,
            )
        raise UpstreamResolutionError(
            f"Respuesta inválida al resolver el alias {alias}: {response.text}",
            alias=alias,
        )

    def bulk_import(
        self,
        collection: str,
        body: str,
        expected: Optional[int] = None,
        action: Optional[str] = None,
    ) -> List[ImportResult]:
        """
        POST a JSON Lines body to the collection's import endpoint.

        Args:
            collection: Concrete collection name
            body: Documents, one JSON object per line
            expected: Number of documents in body; checked against the
                number of result lines when given
            action: Import action, defaults to the client's import_action

        Returns:
            One ImportResult per document, in input order

        Raises:
            UpstreamWriteError: on a failed call, a malformed response or
                any document reported as not imported
        """
        try:
            response = self._request(
                "POST",
                IMPORT_PATH.format(collection=collection),
                headers={"Content-Type": "text/plain"},
                params={"action": action or self.import_action},
                data=body.encode("utf-8"),
            )
        except requests.RequestException as e:
            raise UpstreamWriteError(f"No se ha podido insertar el producto: {e}") from e

        if not response.ok:
            raise UpstreamWriteError(
                f"No se ha podido insertar el producto: "
                f"{response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            results = [ImportResult.model_validate(item) for item in load_jsonl(response.text)]
        except ValueError as e:
            raise UpstreamWriteError(
                f"Respuesta inválida: {e}", status_code=response.status_code
            ) from e

        if expected is not None and len(results) != expected:
            raise UpstreamWriteError(
                f"Respuesta inválida: se esperaban {expected} resultados "
                f"y se han recibido {len(results)}",
                status_code=response.status_code,
            )

        failed = [result for result in results if not result.success]
        if failed:
            raise UpstreamWriteError(
                f"No se ha podido insertar el producto: {len(failed)} de "
                f"{len(results)} documentos rechazados ({failed[0].error})",
                status_code=response.status_code,
            )

        logger.info(f"Imported {len(results)} documents into {collection}")
        return results

    def delete_by_filter(self, collection: str, odoo_id: int) -> int:
        """
        Delete every document of the collection whose odoo_id matches.

        Returns:
            Number of deleted documents

        Raises:
            UpstreamWriteError: on a failed call or a malformed response
        """
        try:
            response = self._request(
                "DELETE",
                DOCUMENTS_PATH.format(collection=collection),
                params={"filter_by": ODOO_ID_FILTER.format(odoo_id=odoo_id)},
            )
        except requests.RequestException as e:
            raise UpstreamWriteError(f"No se ha podido eliminar el producto: {e}") from e

        if not response.ok:
            raise UpstreamWriteError(
                f"No se ha podido eliminar el producto: "
                f"{response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            num_deleted = DeleteResponse.model_validate(response.json()).num_deleted
        except ValueError as e:
            raise UpstreamWriteError(
                f"Respuesta inválida: {response.text}", status_code=response.status_code
            ) from e

        logger.info(f"Deleted {num_deleted} documents with odoo_id {odoo_id} from {collection}")
        return num_deleted
