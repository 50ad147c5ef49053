"""
Construcción del árbol de FileNode a partir del directorio extraído.

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

import os
import stat
from typing import List, Optional

from app.core.exceptions import EmptyRepositoryError
from app.core.logger import get_logger
from app.models.file_node import FileNode

logger = get_logger(__name__)


def _list_entries(path: str) -> List[str]:
    # Orden por nombre para que la salida sea reproducible
    return sorted(os.listdir(path))


def build_tree(path: str) -> Optional[FileNode]:
    """
    Construye recursivamente el nodo que representa `path`.

    Argumentos:
        path (str): Ruta de un archivo o directorio.

    Retorna:
        Optional[FileNode]: None si `path` no puede consultarse (no existe o
        sin permisos). Los hijos que resultan en None se omiten en silencio,
        por ejemplo un archivo que desaparece entre el listado y el stat.
    """
    path = os.path.normpath(path)
    try:
        st = os.stat(path)
    except OSError as e:
        logger.debug("Entrada omitida del árbol", extra={"path": path, "error": str(e)})
        return None

    is_dir = stat.S_ISDIR(st.st_mode)
    node = FileNode(name=os.path.basename(path), is_dir=is_dir)
    if not is_dir:
        return node

    try:
        entries = _list_entries(path)
    except OSError as e:
        # Directorio ilegible: se devuelve sin hijos
        logger.debug("No se pudo listar el directorio", extra={"path": path, "error": str(e)})
        return node

    for entry in entries:
        child = build_tree(os.path.join(path, entry))
        if child is not None:
            node.add_child(child)

    return node


def locate_repository_root(extract_dir: str) -> str:
    """
    Selecciona la carpeta raíz del repositorio dentro del directorio extraído.

    Los zips de GitHub contienen una única carpeta `{repo}-{branch}`. Se toma
    la primera entrada que sea directorio (en orden por nombre); si existen
    otras entradas de primer nivel se registra un warning.

    Lanza:
        EmptyRepositoryError: Listado fallido, directorio vacío o sin carpetas.
    """
    try:
        entries = _list_entries(extract_dir)
    except OSError as e:
        raise EmptyRepositoryError(extract_dir, original_error=e) from e

    if not entries:
        raise EmptyRepositoryError(extract_dir)

    directories = [entry for entry in entries if os.path.isdir(os.path.join(extract_dir, entry))]
    if not directories:
        raise EmptyRepositoryError(extract_dir)

    if len(entries) > 1:
        logger.warning("El archivo contiene más de una entrada de primer nivel", extra={
            "extract_dir": extract_dir,
            "entries": entries[:20],
            "selected_root": directories[0]
        })

    return os.path.join(extract_dir, directories[0])
