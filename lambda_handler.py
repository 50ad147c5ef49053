"""
AWS Lambda Handler para el servicio de árbol de repositorios
============================================================

Router para eventos proxy de API Gateway. La lógica de negocio vive en
los módulos especializados:

- Parsing del evento:         app.utils.request_parser
- Lógica de negocio:          app.handlers.tree_handler
- Respuestas HTTP:            app.utils.http_responses
- Logging:                    app.core.logger
- Manejo de errores:          app.core.exceptions

Ejemplo de evento (HTTP API v2):
{
  "rawPath": "/tree",
  "requestContext": {"http": {"method": "GET", "path": "/tree"}},
  "queryStringParameters": {"url": "https://github.com/org/repo"}
}

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

from typing import Dict, Any

from app.core.logger import get_logger, set_request_context, clear_request_context
from app.handlers.tree_handler import handle_get_tree
from app.utils.http_responses import (
    create_exception_response,
    create_health_check_response,
    create_not_found_response
)
from app.utils.request_parser import parse_lambda_event

logger = get_logger(__name__)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Punto de entrada principal para AWS Lambda.

    Args:
        event (Dict[str, Any]): Evento de API Gateway
        context (Any): Objeto de contexto Lambda (contiene aws_request_id)

    Returns:
        Dict[str, Any]: Respuesta HTTP estándar (statusCode, headers, body)
    """
    request_id = getattr(context, 'aws_request_id', 'unknown')

    try:
        set_request_context(request_id=request_id, environment="lambda")
        logger.info("🚀 Lambda execution started", extra={"request_id": request_id})

        method, path, repo_url = parse_lambda_event(event, context)

        logger.info("🔁 Routing request", extra={
            "request_id": request_id,
            "method": method,
            "route": path
        })

        if method == "GET" and path == "/tree":
            return handle_get_tree(repo_url)

        elif method == "GET" and path == "/health":
            return create_health_check_response()

        return create_not_found_response()

    except Exception as e:
        logger.error("💥 Lambda execution failed", extra={
            "request_id": request_id,
            "error": str(e),
            "error_type": type(e).__name__
        })
        return create_exception_response(e)

    finally:
        clear_request_context()
        logger.info("✅ Lambda execution completed", extra={"request_id": request_id})
