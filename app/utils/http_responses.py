"""
Sistema de respuestas HTTP estandarizadas.

Las respuestas son diccionarios `{statusCode, headers, body}`, el formato de
API Gateway, para que el mismo handler sirva al servidor HTTP, a AWS Lambda
y a la ejecución local.

- Éxito: árbol serializado en JSON
- Error: texto plano con un mensaje genérico (la causa nunca se expone)

Author: Equipo de Ingeniería
Created: 2025
Version: 1.0.0
"""

import json
from typing import Dict, Any, Optional
from datetime import datetime, timezone

from app.core.constants import (
    JSON_HEADERS,
    TEXT_HEADERS,
    SERVICE_NAME,
    SERVICE_VERSION,
    ErrorMessages,
    MetricNames
)
from app.core.exceptions import TreeServiceError
from app.core.logger import get_logger, log_business_metric
from app.models.file_node import FileNode
from app.utils.serializers import serialize_tree

logger = get_logger(__name__)

# ========================================
# RESPUESTAS DE ÉXITO
# ========================================

def create_success_response(
    data: Dict[str, Any],
    status_code: int = 200,
    extra_headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Crea una respuesta JSON genérica.

    Args:
        data: Datos a incluir en la respuesta
        status_code: Código de estado HTTP (default: 200)
        extra_headers: Headers adicionales (opcional)
    """
    headers = JSON_HEADERS.copy()
    if extra_headers:
        headers.update(extra_headers)

    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(data, ensure_ascii=False)
    }


def create_tree_response(root: Optional[FileNode]) -> Dict[str, Any]:
    """
    Crea la respuesta de GET /tree: el árbol tal cual, sin envoltorio.

    Args:
        root: Raíz del árbol, o None si no pudo construirse (body "null")

    Example:
        >>> create_tree_response(FileNode("repo-main", True))["body"]
        '{"name": "repo-main", "is_dir": true}'
    """
    body = serialize_tree(root)
    log_business_metric("response_size", len(body.encode("utf-8")), "bytes")

    return {
        "statusCode": 200,
        "headers": JSON_HEADERS.copy(),
        "body": body
    }

# ========================================
# RESPUESTAS DE ERROR
# ========================================

def create_error_response(status_code: int, error_message: str,
                          error_code: Optional[str] = None) -> Dict[str, Any]:
    """
    Crea una respuesta de error en texto plano.

    Args:
        status_code: Código de estado HTTP
        error_message: Mensaje para el usuario
        error_code: Código de error (sólo para logs)
    """
    log_business_metric(MetricNames.ERRORS_TOTAL, 1, "count", error_code=error_code)

    logger.warning("Error response created", extra={
        "status_code": status_code,
        "error_code": error_code
    })

    return {
        "statusCode": status_code,
        "headers": TEXT_HEADERS.copy(),
        "body": error_message + "\n"
    }


def create_exception_response(exception: Exception) -> Dict[str, Any]:
    """
    Crea respuesta desde una excepción.

    Las excepciones del servicio usan su http_status y su mensaje público;
    cualquier otra se convierte en 500 con mensaje genérico.
    """
    if isinstance(exception, TreeServiceError):
        return create_error_response(
            status_code=exception.http_status,
            error_message=exception.message,
            error_code=exception.error_code
        )

    logger.error("Unhandled exception converted to response", exc_info=exception)
    return create_error_response(500, ErrorMessages.INTERNAL_ERROR)

# ========================================
# RESPUESTAS ESPECIALIZADAS
# ========================================

def create_health_check_response() -> Dict[str, Any]:
    """Respuesta 200 para health checks"""
    return create_success_response({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": SERVICE_VERSION,
        "service": SERVICE_NAME
    })


def create_not_found_response() -> Dict[str, Any]:
    """Respuesta 404 para rutas desconocidas"""
    return create_error_response(404, ErrorMessages.ROUTE_NOT_FOUND)
