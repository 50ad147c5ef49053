"""
Aplicación HTTP (FastAPI).

Rutas, registradas una única vez al importar el módulo:
- GET /tree?url=<github-repo-url>  árbol del repositorio en JSON
- GET /health                      health check
- GET /*                           front-end estático (STATIC_DIR)

La ruta /tree es síncrona: FastAPI la ejecuta en su threadpool, un hilo
por request, sin estado compartido entre requests.

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

import os
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles

from app.core.constants import STATIC_DIR, SERVICE_NAME, SERVICE_VERSION
from app.core.logger import (
    get_logger,
    set_request_context,
    clear_request_context,
    log_request_lifecycle
)
from app.handlers.tree_handler import handle_get_tree
from app.utils.http_responses import create_health_check_response

logger = get_logger(__name__)


def to_http_response(response: Dict[str, Any]) -> Response:
    """Convierte un dict {statusCode, headers, body} en una respuesta de Starlette."""
    headers = dict(response.get("headers") or {})
    media_type = headers.pop("Content-Type", None)
    return Response(
        content=response.get("body", ""),
        status_code=response["statusCode"],
        headers=headers,
        media_type=media_type
    )


def create_app(static_dir: Optional[str] = STATIC_DIR) -> FastAPI:
    """
    Crea la aplicación y registra las rutas.

    Args:
        static_dir: Directorio del front-end; si no existe no se monta
    """
    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)

    @app.get("/tree")
    def get_tree(url: Optional[str] = None) -> Response:
        request_id = str(uuid.uuid4())
        set_request_context(request_id=request_id, environment="http")
        log_request_lifecycle("START", request_id, route="/tree")
        try:
            response = handle_get_tree(url)
            log_request_lifecycle("END", request_id, status_code=response["statusCode"])
            return to_http_response(response)
        finally:
            clear_request_context()

    @app.get("/health")
    def health() -> Response:
        return to_http_response(create_health_check_response())

    # El mount en "/" va al final: las rutas anteriores tienen prioridad
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="frontend")
    else:
        logger.warning("Directorio estático no encontrado; front-end deshabilitado",
                       extra={"static_dir": static_dir})

    return app


app = create_app()
