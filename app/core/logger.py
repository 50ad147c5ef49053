"""
Sistema de logging centralizado para el servicio de árbol de repositorios.

Este módulo proporciona:
- Configuración única por proceso (loggers cacheados por nombre)
- Logging estructurado separado por pipes
- Decorador para métricas de duración
- Contexto de request automático

Author: Equipo de Ingeniería
Created: 2025
Version: 1.0.0
"""

import logging
import time
import json
import functools
import threading
from typing import Dict, Any, Optional, Union, Callable
from datetime import datetime
from app.core.constants import (
    LOG_LEVEL,
    LOG_FORMAT,
    LOG_SIMPLE_FORMAT,
    IS_LAMBDA,
    ENABLE_DEBUG_METRICS,
    MetricNames
)

# ========================================
# CONFIGURACIÓN GLOBAL DE LOGGING
# ========================================

# Cache de loggers configurados para evitar reconfiguración
_configured_loggers: Dict[str, logging.Logger] = {}

# Contexto del request actual (uno por hilo: cada request corre en su propio hilo)
_context_local = threading.local()

# Campos estándar de LogRecord que no se repiten como extra
_STANDARD_FIELDS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'stack_info', 'exc_info', 'exc_text'
}


def get_logger(name: str = __name__) -> logging.Logger:
    """
    Obtiene o crea un logger con configuración única.

    Args:
        name: Nombre del logger (típicamente __name__ del módulo)

    Returns:
        logging.Logger: Logger configurado y listo para uso

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Message", extra={"key": "value"})
    """
    if name in _configured_loggers:
        return _configured_loggers[name]

    logger = logging.getLogger(name)

    if logger.handlers:
        _configured_loggers[name] = logger
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(_create_formatter())

    logger.addHandler(handler)
    logger.propagate = False  # Evitar logs duplicados

    _configured_loggers[name] = logger
    return logger


def _create_formatter() -> logging.Formatter:
    """Crea formatter apropiado según configuración"""
    if LOG_FORMAT == 'structured':
        return StructuredFormatter()
    return logging.Formatter(LOG_SIMPLE_FORMAT)


class StructuredFormatter(logging.Formatter):
    """
    Formatter personalizado para logging estructurado.

    Genera líneas `campo=valor` separadas por pipes, con el contexto
    del request y los campos extra del record.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{record.levelname}]",
            self._format_timestamp(record.created),
            f"function={record.funcName}",
            f"line={record.lineno}",
            f"module={record.name}"
        ]

        for key, value in get_request_context().items():
            parts.append(f"{key}={value}")

        for key, value in self._extract_extra_fields(record).items():
            parts.append(f"{key}={value}")

        parts.append(f"message={record.getMessage()}")

        if record.exc_info:
            parts.append(f"exception={self.formatException(record.exc_info)}")

        return " | ".join(parts)

    def _format_timestamp(self, created: float) -> str:
        dt = datetime.fromtimestamp(created)
        if IS_LAMBDA:
            # CloudWatch agrega la fecha
            return dt.strftime("%H:%M:%S.%f")[:-3]
        return dt.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

    def _extract_extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        extra = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_FIELDS:
                continue
            if isinstance(value, (dict, list)):
                extra[key] = json.dumps(value, default=str)
            else:
                extra[key] = str(value)
        return extra


# ========================================
# CONTEXTO DE REQUEST
# ========================================

def set_request_context(**kwargs) -> None:
    """
    Establece contexto para el request actual.

    Este contexto se incluye en todos los logs emitidos desde el mismo hilo.

    Example:
        >>> set_request_context(request_id="123-456")
        >>> logger.info("Processing")  # Incluirá request_id automáticamente
    """
    context = getattr(_context_local, "context", None)
    if context is None:
        context = {}
        _context_local.context = context
    context.update(kwargs)


def clear_request_context() -> None:
    """Limpia el contexto del request actual"""
    _context_local.context = {}


def get_request_context() -> Dict[str, Any]:
    """Obtiene una copia del contexto actual del request"""
    return dict(getattr(_context_local, "context", None) or {})


# ========================================
# DECORADORES DE PERFORMANCE
# ========================================

def log_performance(func: Optional[Callable] = None, *,
                    operation_name: Optional[str] = None,
                    log_level: int = logging.DEBUG) -> Callable:
    """
    Decorator para logging automático de duración.

    Args:
        func: Función a decorar (automático en uso como @log_performance)
        operation_name: Nombre personalizado para la operación
        log_level: Nivel de log para inicio y éxito

    Example:
        >>> @log_performance(operation_name="unzip")
        >>> def unzip(src, dest): ...
    """
    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = get_logger(f.__module__)
            op_name = operation_name or f.__name__
            start_time = time.time()
            context = {"operation": op_name, "caller_module": f.__module__}

            logger.log(log_level, "PERF_START", extra=context)

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error("PERF_ERROR", extra={
                    **context,
                    "duration_seconds": round(time.time() - start_time, 3),
                    "status": "error",
                    "error_type": type(e).__name__,
                    "error_message": str(e)
                })
                raise

            duration = time.time() - start_time
            logger.log(log_level, "PERF_SUCCESS", extra={
                **context,
                "duration_seconds": round(duration, 3),
                "status": "success"
            })
            log_business_metric(MetricNames.REQUEST_DURATION, round(duration, 3), "seconds",
                                metric_operation=op_name)
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)


# ========================================
# LOGGING ESPECIALIZADO
# ========================================

def log_api_call(target: str, operation: str, **kwargs) -> None:
    """
    Logea llamadas HTTP salientes con contexto estructurado.

    Example:
        >>> log_api_call("github", "download_archive", url="https://github.com/...")
    """
    get_logger("api_calls").info("External API call", extra={
        "event_type": "API_CALL",
        "target": target,
        "operation": operation,
        **kwargs
    })


def log_security_event(event_type: str, details: str, severity: str = "WARNING",
                       **kwargs) -> None:
    """
    Logea eventos de seguridad para auditoría.

    Example:
        >>> log_security_event("zip_path_traversal", "Entry '../x' escapes destination", "ERROR")
    """
    level = getattr(logging, severity.upper(), logging.WARNING)
    get_logger("security").log(level, f"Security event: {event_type}", extra={
        "event_type": "SECURITY_EVENT",
        "security_event_type": event_type,
        "details": details,
        "severity": severity,
        **kwargs
    })


def log_business_metric(metric_name: str, value: Union[int, float],
                        unit: str = "count", **kwargs) -> None:
    """
    Logea métricas de negocio. Sólo se emiten si ENABLE_DEBUG_METRICS está activo
    o el nivel del logger de métricas es DEBUG.

    Example:
        >>> log_business_metric("archive_size", 1024, "bytes")
    """
    logger = get_logger("metrics")
    if not (ENABLE_DEBUG_METRICS or logger.isEnabledFor(logging.DEBUG)):
        return
    logger.info(f"Metric: {metric_name}={value}{unit}", extra={
        "event_type": "BUSINESS_METRIC",
        "metric_name": metric_name,
        "metric_value": value,
        "metric_unit": unit,
        **kwargs
    })


def log_request_lifecycle(phase: str, request_id: str, **kwargs) -> None:
    """
    Logea fases del ciclo de vida del request (START, END, ERROR).

    Example:
        >>> log_request_lifecycle("END", "123-456", status_code=200, duration=1.5)
    """
    logger = get_logger("request_lifecycle")

    # Claves reservadas por LogRecord
    safe_context = {
        (f"context_{k}" if k in _STANDARD_FIELDS else k): v
        for k, v in kwargs.items()
    }

    context = {
        "event_type": "REQUEST_LIFECYCLE",
        "lifecycle_phase": phase,
        "request_id": request_id,
        **safe_context
    }

    if phase == "ERROR":
        logger.error(f"Request {phase}: {request_id}", extra=context)
    else:
        logger.info(f"Request {phase}: {request_id}", extra=context)


# ========================================
# CONFIGURACIÓN INICIAL
# ========================================

def configure_root_logger() -> None:
    """
    Configura el logger raíz para capturar logs de librerías externas
    (urllib3, uvicorn) a nivel WARNING.
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.setLevel(logging.WARNING)
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_SIMPLE_FORMAT))
        root_logger.addHandler(handler)


configure_root_logger()
