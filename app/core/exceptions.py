"""
Excepciones personalizadas para el servicio de árbol de repositorios.

Este módulo define una jerarquía de excepciones tipadas que mapean
directamente a códigos HTTP:

- ValidationError          -> 400 (url faltante o inválida)
- ScratchDirectoryError    -> 500
- ArchiveDownloadError     -> 500
- ArchiveExtractionError   -> 500 (incluye UnsafeArchivePathError)
- EmptyRepositoryError     -> 500

El mensaje de cada excepción es el que se expone al cliente; la causa
interna queda en `details` y sólo se registra en logs.

Author: Equipo de Ingeniería
Created: 2025
Version: 1.0.0
"""

from typing import Optional, Dict, Any
from app.core.constants import ErrorCodes, ErrorMessages


class TreeServiceError(Exception):
    """
    Excepción base para todos los errores del servicio.

    Attributes:
        message: Mensaje descriptivo del error para el usuario
        error_code: Código de error estandarizado (ver ErrorCodes)
        details: Información adicional del error para debugging
        http_status: Código HTTP sugerido para la respuesta

    Example:
        raise TreeServiceError(
            "Error procesando repositorio",
            error_code=ErrorCodes.INTERNAL_ERROR,
            details={"repo_url": "https://github.com/org/repo"}
        )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        http_status: int = 500,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        self.original_error = original_error

        if original_error is not None:
            self.details['original_error'] = str(original_error)
            self.details['original_error_type'] = type(original_error).__name__

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte la excepción a diccionario para logging estructurado"""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "http_status": self.http_status
        }


class ValidationError(TreeServiceError):
    """
    Error de validación de entrada del usuario.

    HTTP Status: 400 Bad Request

    Common Scenarios:
        - Parámetro 'url' faltante o vacío
        - URL que no pertenece a https://github.com/
        - URL sin owner/repo
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        field_name: Optional[str] = None,
        received_value: Any = None
    ):
        enhanced_details = details or {}
        if field_name:
            enhanced_details['field_name'] = field_name
        if received_value is not None:
            enhanced_details['received_value'] = str(received_value)[:200]

        super().__init__(
            message=message,
            error_code=error_code,
            details=enhanced_details,
            http_status=400
        )

        self.field_name = field_name
        self.received_value = received_value


class ScratchDirectoryError(TreeServiceError):
    """No se pudo crear el directorio temporal del request."""

    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(
            ErrorMessages.SCRATCH_DIR_FAILED,
            error_code=ErrorCodes.SCRATCH_DIR_FAILED,
            original_error=original_error
        )


class ArchiveDownloadError(TreeServiceError):
    """
    Error descargando el archivo del repositorio.

    Agrupa fallos de DNS, conexión, timeout y escritura local; la
    categoría no se distingue hacia el cliente.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        enhanced_details = details or {}
        if url:
            enhanced_details['url'] = url

        super().__init__(
            ErrorMessages.DOWNLOAD_FAILED,
            error_code=ErrorCodes.DOWNLOAD_FAILED,
            details=enhanced_details,
            original_error=original_error
        )
        self.url = url


class ArchiveExtractionError(TreeServiceError):
    """
    Error expandiendo el archivo descargado.

    Common Scenarios:
        - Body descargado que no es un zip (página de error 404)
        - Zip corrupto
        - Disco lleno o permisos denegados al escribir
    """

    def __init__(
        self,
        archive_path: Optional[str] = None,
        error_code: str = ErrorCodes.EXTRACTION_FAILED,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        enhanced_details = details or {}
        if archive_path:
            enhanced_details['archive_path'] = archive_path

        super().__init__(
            ErrorMessages.EXTRACTION_FAILED,
            error_code=error_code,
            details=enhanced_details,
            original_error=original_error
        )
        self.archive_path = archive_path


class UnsafeArchivePathError(ArchiveExtractionError):
    """
    Entrada del zip cuya ruta resuelta sale del directorio destino
    (segmentos `../` o rutas absolutas).
    """

    def __init__(self, entry_name: str, archive_path: Optional[str] = None):
        super().__init__(
            archive_path=archive_path,
            error_code=ErrorCodes.PATH_TRAVERSAL,
            details={"entry_name": entry_name, "security_event": True}
        )
        self.entry_name = entry_name


class EmptyRepositoryError(TreeServiceError):
    """El directorio extraído no contiene una carpeta raíz utilizable."""

    def __init__(self, extract_dir: Optional[str] = None,
                 original_error: Optional[Exception] = None):
        details = {"extract_dir": extract_dir} if extract_dir else None
        super().__init__(
            ErrorMessages.EMPTY_REPOSITORY,
            error_code=ErrorCodes.EMPTY_REPOSITORY,
            details=details,
            original_error=original_error
        )


# ========================================
# FUNCIONES DE UTILIDAD PARA EXCEPCIONES
# ========================================

def create_validation_error(
    message: str,
    field_name: Optional[str] = None,
    received_value: Any = None,
    error_code: Optional[str] = None
) -> ValidationError:
    """Factory function para crear errores de validación consistentes."""
    return ValidationError(
        message=message,
        field_name=field_name,
        received_value=received_value,
        error_code=error_code
    )
