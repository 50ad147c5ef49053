"""
Parseo de requests para AWS Lambda y ejecución local.

- AWS Lambda: eventos proxy de API Gateway (REST v1 y HTTP API v2)
- Local: argumentos de línea de comandos

Author: Equipo de Ingeniería
Created: 2025
Version: 1.0.0
"""

import argparse
from typing import Any, Dict, List, Optional, Tuple

from app.core.constants import SERVER_HOST, SERVER_PORT
from app.core.exceptions import create_validation_error
from app.core.logger import get_logger, set_request_context, log_request_lifecycle

logger = get_logger(__name__)

# ========================================
# PARSERS PARA AWS LAMBDA
# ========================================

def parse_lambda_event(event: Dict[str, Any], context: Any) -> Tuple[str, str, Optional[str]]:
    """
    Extrae método, ruta y parámetro 'url' de un evento de API Gateway.

    Args:
        event: Evento de AWS Lambda
        context: Contexto de AWS Lambda

    Returns:
        Tuple[str, str, Optional[str]]: (method, path, repo_url). repo_url es
        None si el parámetro no viene; la validación la hace el handler.

    Raises:
        ValidationError: Si el evento no es un diccionario

    Example:
        >>> parse_lambda_event({"rawPath": "/tree", "queryStringParameters": {"url": "..."}}, ctx)
        ('GET', '/tree', '...')
    """
    request_id = getattr(context, 'aws_request_id', 'unknown')

    if not isinstance(event, dict):
        raise create_validation_error(
            "El evento debe ser un diccionario",
            field_name="event",
            received_value=type(event).__name__
        )

    # REST API (v1) usa httpMethod/path; HTTP API (v2) usa requestContext.http/rawPath
    http_context = (event.get("requestContext") or {}).get("http") or {}
    method = (event.get("httpMethod") or http_context.get("method") or "GET").upper()
    path = event.get("rawPath") or event.get("path") or http_context.get("path") or "/"

    params = event.get("queryStringParameters") or {}
    repo_url = params.get("url")

    set_request_context(request_id=request_id, environment="lambda", source="api_gateway")
    log_request_lifecycle("PARSE_SUCCESS", request_id, method=method, route=path,
                          has_url=bool(repo_url))

    return method, path, repo_url

# ========================================
# PARSERS PARA EJECUCIÓN LOCAL
# ========================================

def parse_local_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parsea argumentos de línea de comandos.

    Formatos esperados:
        python main.py                              # inicia el servidor HTTP
        python main.py --port 9000                  # servidor en otro puerto
        python main.py --url https://github.com/org/repo [--json]
    """
    parser = argparse.ArgumentParser(
        description="Servicio que devuelve el árbol de archivos de un repositorio público de GitHub"
    )
    parser.add_argument("--url", help="URL del repositorio; imprime su árbol y termina")
    parser.add_argument("--json", action="store_true",
                        help="Con --url, imprime el JSON en lugar del listado")
    parser.add_argument("--host", default=SERVER_HOST, help=f"Host del servidor (default: {SERVER_HOST})")
    parser.add_argument("--port", type=int, default=SERVER_PORT,
                        help=f"Puerto del servidor (default: {SERVER_PORT})")

    args = parser.parse_args(argv)
    logger.debug(f"Parsed command line args: {vars(args)}")
    return args
