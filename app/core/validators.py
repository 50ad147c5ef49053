"""
Validación de la URL de entrada y de las rutas dentro del archivo descargado.

Este módulo proporciona:
- Normalización de una URL web de GitHub a la URL del zip de la rama main
- Validación del parámetro 'url' del request
- Detección de path traversal en entradas del zip

Author: Equipo de Ingeniería
Created: 2025
Version: 1.0.0
"""

import os
from typing import Optional

from app.core.constants import (
    GITHUB_PREFIX,
    DEFAULT_BRANCH,
    ARCHIVE_URL_TEMPLATE,
    ErrorCodes,
    ErrorMessages
)
from app.core.exceptions import (
    UnsafeArchivePathError,
    create_validation_error
)
from app.core.logger import get_logger, log_security_event

logger = get_logger(__name__)

# ========================================
# NORMALIZACIÓN DE URL
# ========================================

def convert_github_to_zip_url(url: str) -> Optional[str]:
    """
    Deriva la URL de descarga del zip a partir de la URL web del repositorio.

    La rama se asume 'main'; no se consulta la rama por defecto real.
    Los segmentos posteriores a owner/repo se ignoran.

    Args:
        url: URL web del repositorio (ej: "https://github.com/owner/repo")

    Returns:
        Optional[str]: URL del zip, o None si la URL no es de GitHub o no tiene owner/repo

    Example:
        >>> convert_github_to_zip_url("https://github.com/owner/repo/tree/dev")
        'https://github.com/owner/repo/archive/refs/heads/main.zip'

        >>> convert_github_to_zip_url("https://example.com/x") is None
        True
    """
    if not isinstance(url, str) or not url.startswith(GITHUB_PREFIX):
        return None

    parts = url[len(GITHUB_PREFIX):].split("/")
    if len(parts) < 2:
        return None

    return ARCHIVE_URL_TEMPLATE.format(owner=parts[0], repo=parts[1], branch=DEFAULT_BRANCH)


def validate_repo_url(url: Optional[str]) -> str:
    """
    Valida el parámetro 'url' y devuelve la URL del zip derivada.

    Raises:
        ValidationError: Si falta el parámetro o no es una URL válida de GitHub
    """
    if not url:
        raise create_validation_error(
            ErrorMessages.MISSING_URL,
            field_name="url",
            error_code=ErrorCodes.MISSING_URL
        )

    zip_url = convert_github_to_zip_url(url)
    if zip_url is None:
        raise create_validation_error(
            ErrorMessages.INVALID_GITHUB_URL,
            field_name="url",
            received_value=url,
            error_code=ErrorCodes.INVALID_GITHUB_URL
        )

    logger.debug("Repository URL validated", extra={"repo_url": url, "zip_url": zip_url})
    return zip_url

# ========================================
# VALIDACIÓN DE RUTAS DEL ARCHIVO
# ========================================

def resolve_archive_member_path(dest_dir: str, member_name: str,
                                archive_path: Optional[str] = None) -> str:
    """
    Resuelve la ruta destino de una entrada del zip verificando que quede
    dentro de `dest_dir`.

    Args:
        dest_dir: Directorio destino de la extracción
        member_name: Nombre de la entrada tal como figura en el zip
        archive_path: Ruta del zip (sólo para contexto del error)

    Returns:
        str: Ruta absoluta y normalizada de la entrada

    Raises:
        UnsafeArchivePathError: Si la ruta resuelta sale de `dest_dir`

    Example:
        >>> resolve_archive_member_path("/tmp/x", "repo-main/src/")
        '/tmp/x/repo-main/src'

        >>> resolve_archive_member_path("/tmp/x", "../etc/passwd")
        UnsafeArchivePathError: Failed to unzip repo
    """
    base = os.path.realpath(dest_dir)
    target = os.path.realpath(os.path.join(base, member_name))

    if target != base and not target.startswith(base + os.sep):
        log_security_event(
            "zip_path_traversal",
            f"Entry '{member_name}' escapes extraction directory",
            "ERROR",
            archive_path=archive_path
        )
        raise UnsafeArchivePathError(member_name, archive_path=archive_path)

    return target
