"""
Manejador de la operación GET /tree.

Orquesta, para un único request, el flujo completo:

    validar url -> directorio temporal -> descargar -> expandir
    -> localizar raíz -> construir árbol -> responder

Cualquier fallo corta el flujo y produce una respuesta de error; nunca se
devuelve un resultado parcial. El directorio temporal se elimina en todos
los casos al salir del bloque `with`.

Autor: Equipo de Ingeniería
Versión: 1.0.0
Fecha: 2025
"""

import os
import logging
import json
import tempfile
from typing import Any, Dict, Optional

from app.core.constants import (
    SCRATCH_PREFIX,
    ARCHIVE_FILENAME,
    EXTRACT_DIRNAME,
    MetricNames
)
from app.core.exceptions import ScratchDirectoryError, TreeServiceError
from app.core.logger import get_logger, log_business_metric, log_performance
from app.core.validators import validate_repo_url
from app.models.file_node import FileNode
from app.services.archive_extractor import unzip
from app.services.archive_fetcher import download_file
from app.services.structure_formatter import format_tree
from app.services.tree_builder import build_tree, locate_repository_root
from app.utils.http_responses import create_tree_response, create_exception_response
from app.utils.serializers import serialize_node
from app.utils.tree_utils import calculate_tree_metrics

logger = get_logger(__name__)


@log_performance(operation_name="get_tree", log_level=logging.INFO)
def handle_get_tree(repo_url: Optional[str]) -> Dict[str, Any]:
    """
    Procesa un request GET /tree y devuelve la respuesta HTTP como dict.

    Argumentos:
        repo_url (Optional[str]): Valor del parámetro 'url'.

    Retorna:
        Dict[str, Any]: {statusCode, headers, body}. 200 con el árbol en JSON,
        400 si la url falta o no es de GitHub, 500 ante cualquier fallo de
        infraestructura.
    """
    logger.info("Iniciando obtención de árbol", extra={"repo_url": repo_url})

    try:
        root = build_repository_tree(repo_url)
        response = create_tree_response(root)

    except Exception as e:
        log_extra = {"repo_url": repo_url, "error": str(e), "error_type": type(e).__name__}
        if isinstance(e, TreeServiceError):
            log_extra.update(e.to_dict())
        logger.error("Error durante la obtención del árbol", extra=log_extra)
        return create_exception_response(e)

    _log_tree_metrics(root)
    return response


def build_repository_tree(repo_url: Optional[str]) -> Optional[FileNode]:
    """
    Ejecuta el pipeline completo y devuelve la raíz del árbol.

    Lanza:
        ValidationError: url faltante o inválida (antes de cualquier llamada de red).
        ScratchDirectoryError, ArchiveDownloadError, ArchiveExtractionError,
        EmptyRepositoryError: fallos de infraestructura.
    """
    zip_url = validate_repo_url(repo_url)

    with _create_scratch_dir() as tmp_dir:
        archive_path = download_file(zip_url, os.path.join(tmp_dir, ARCHIVE_FILENAME))

        extract_dir = os.path.join(tmp_dir, EXTRACT_DIRNAME)
        unzip(archive_path, extract_dir)

        root_path = locate_repository_root(extract_dir)
        return build_tree(root_path)


def _create_scratch_dir() -> tempfile.TemporaryDirectory:
    try:
        return tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX)
    except OSError as e:
        raise ScratchDirectoryError(original_error=e) from e


def _log_tree_metrics(root: Optional[FileNode]) -> None:
    metrics = calculate_tree_metrics(root)

    log_business_metric(MetricNames.TREES_BUILT, 1, "count")
    log_business_metric(MetricNames.TREE_NODES, metrics["total_nodes"], "count")
    log_business_metric(MetricNames.TREE_FILES, metrics["files"], "count")
    log_business_metric(MetricNames.TREE_FOLDERS, metrics["folders"], "count")

    logger.info("Árbol generado correctamente", extra={
        "root": root.name if root else None,
        **metrics
    })


def handle_get_tree_local(repo_url: str, as_json: bool = False) -> int:
    """
    Ejecuta GET /tree de forma local (CLI) e imprime el resultado.

    Argumentos:
        repo_url (str): URL web del repositorio.
        as_json (bool): Imprime el body JSON en lugar del listado con íconos.

    Retorna:
        int: Código de salida (0 éxito, 1 error).
    """
    logger.info("=== INICIANDO GET_TREE (LOCAL) ===")

    try:
        root = build_repository_tree(repo_url)
    except TreeServiceError as e:
        logger.error("Error en modo local", extra=e.to_dict())
        print(f"\n❌ Error {e.http_status}: {e.message}")
        return 1

    if as_json:
        print(json.dumps(serialize_node(root), indent=2, ensure_ascii=False))
        return 0

    metrics = calculate_tree_metrics(root)

    print("\n" + "=" * 60)
    print("📦 ESTRUCTURA DEL REPOSITORIO")
    print("=" * 60)
    print(f"🔗 Repositorio: {repo_url}")
    print(f"📄 Archivos: {metrics['files']}")
    print(f"📁 Carpetas: {metrics['folders']}")
    print(f"🏗️ Profundidad máxima: {metrics['max_depth']}")
    print("=" * 60)
    print(format_tree(root))
    print("\n✅ GET_TREE completado exitosamente")
    return 0
