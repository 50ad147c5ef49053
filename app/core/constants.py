"""
Constantes globales para el servicio de árbol de repositorios.

Este módulo centraliza todas las constantes del sistema para facilitar
la configuración y mantenimiento. Separadas por categorías lógicas.

Author: Equipo de Ingeniería
Created: 2025
Version: 1.0.0
"""

import os

# ========================================
# SERVIDOR HTTP
# ========================================

SERVER_HOST = os.getenv('SERVER_HOST', '0.0.0.0')
SERVER_PORT = int(os.getenv('SERVER_PORT', '8080'))

# Directorio del front-end estático (index.html, style.css, script.js)
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
STATIC_DIR = os.getenv('STATIC_DIR', os.path.join(_PROJECT_ROOT, 'frontend'))

SERVICE_NAME = "repo-tree-service"
SERVICE_VERSION = "1.0.0"

# ========================================
# TIMEOUTS Y DESCARGA
# ========================================

# Timeouts para la descarga del archivo (evita requests colgados indefinidamente)
CONNECTION_TIMEOUT = int(os.getenv('CONNECTION_TIMEOUT', '10'))  # Default: 10 segundos
READ_TIMEOUT = int(os.getenv('READ_TIMEOUT', '60'))  # Default: 60 segundos

# Tamaño de bloque para escribir el body en disco
DOWNLOAD_CHUNK_SIZE = int(os.getenv('DOWNLOAD_CHUNK_SIZE', '65536'))  # Default: 64KB

# ========================================
# GITHUB
# ========================================

GITHUB_PREFIX = "https://github.com/"
DEFAULT_BRANCH = "main"
ARCHIVE_URL_TEMPLATE = "https://github.com/{owner}/{repo}/archive/refs/heads/{branch}.zip"

# ========================================
# DIRECTORIO TEMPORAL
# ========================================

SCRATCH_PREFIX = "repo"
ARCHIVE_FILENAME = "repo.zip"
EXTRACT_DIRNAME = "unzipped"

# Permisos por defecto cuando la entrada del zip no trae modo Unix
DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644

# ========================================
# CONFIGURACIÓN DE LOGGING
# ========================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = os.getenv('LOG_FORMAT', 'structured')  # 'structured' o 'simple'

LOG_SIMPLE_FORMAT = '[%(levelname)s] %(asctime)s - %(message)s'

# ========================================
# CÓDIGOS DE ERROR ESTANDARIZADOS
# ========================================

class ErrorCodes:
    """Códigos de error estandarizados para mejor categorización"""

    # Errores de validación (4xx)
    MISSING_URL = "MISSING_URL"
    INVALID_GITHUB_URL = "INVALID_GITHUB_URL"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"

    # Errores de infraestructura (5xx)
    SCRATCH_DIR_FAILED = "SCRATCH_DIR_FAILED"
    DOWNLOAD_FAILED = "DOWNLOAD_FAILED"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    PATH_TRAVERSAL = "PATH_TRAVERSAL_DETECTED"
    EMPTY_REPOSITORY = "EMPTY_REPOSITORY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Mensajes expuestos al cliente (nunca incluyen la causa interna)
class ErrorMessages:
    MISSING_URL = "Missing 'url' parameter"
    INVALID_GITHUB_URL = "Invalid GitHub URL"
    SCRATCH_DIR_FAILED = "Failed to create temp dir"
    DOWNLOAD_FAILED = "Failed to download repo"
    EXTRACTION_FAILED = "Failed to unzip repo"
    EMPTY_REPOSITORY = "Empty or invalid repo content"
    ROUTE_NOT_FOUND = "Not found"
    INTERNAL_ERROR = "Internal server error"

# ========================================
# HEADERS HTTP ESTANDARIZADOS
# ========================================

COMMON_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Cache-Control": "no-cache, no-store, must-revalidate"
}

JSON_HEADERS = {
    **COMMON_HEADERS,
    "Content-Type": "application/json"
}

TEXT_HEADERS = {
    **COMMON_HEADERS,
    "Content-Type": "text/plain; charset=utf-8"
}

# ========================================
# CONFIGURACIÓN DE ENTORNO
# ========================================

IS_LAMBDA = bool(os.getenv('AWS_LAMBDA_FUNCTION_NAME'))
IS_LOCAL = not IS_LAMBDA

if IS_LAMBDA:
    ENABLE_DEBUG_METRICS = False
else:
    ENABLE_DEBUG_METRICS = os.getenv('ENABLE_DEBUG_METRICS', 'false').lower() == 'true'

# ========================================
# MÉTRICAS Y MONITORING
# ========================================

class MetricNames:
    """Nombres estandarizados de métricas para observabilidad"""

    TREES_BUILT = "trees_built"
    REQUEST_DURATION = "request_duration"
    ARCHIVE_SIZE = "archive_size"
    ARCHIVE_ENTRIES = "archive_entries"
    TREE_NODES = "tree_nodes"
    TREE_FILES = "tree_files"
    TREE_FOLDERS = "tree_folders"
    ERRORS_TOTAL = "errors_total"
