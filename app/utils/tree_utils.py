"""
Utilidades para recorrer un árbol de FileNode: aplanar rutas y calcular métricas.
"""

from typing import Dict, List, Optional
import posixpath

from app.models.file_node import FileNode

__all__ = ["flatten_file_paths", "calculate_tree_metrics"]


def flatten_file_paths(node: Optional[FileNode], base_path: str = "") -> List[str]:
    """
    Recorre recursivamente el árbol y devuelve las rutas relativas POSIX
    de los archivos, sin incluir el nombre de la raíz.

    Args:
        node: Raíz del árbol (o subárbol).
        base_path: Ruta base relativa (se unirá con separador POSIX '/').
    Returns:
        List[str]: Rutas de archivos, en el orden del árbol.
    """
    files: List[str] = []
    if node is None or not node.children:
        return files

    for child in node.children:
        current_path = posixpath.join(base_path, child.name) if base_path else child.name
        if child.is_dir:
            files.extend(flatten_file_paths(child, current_path))
        else:
            files.append(current_path)

    return files


def calculate_tree_metrics(node: Optional[FileNode]) -> Dict[str, int]:
    """
    Calcula total de nodos, archivos, carpetas y profundidad máxima.
    La raíz cuenta como profundidad 0.
    """
    metrics = {"total_nodes": 0, "files": 0, "folders": 0, "max_depth": 0}

    def traverse(current: FileNode, depth: int) -> None:
        metrics["total_nodes"] += 1
        metrics["max_depth"] = max(metrics["max_depth"], depth)
        if current.is_dir:
            metrics["folders"] += 1
        else:
            metrics["files"] += 1
        for child in current.children or []:
            traverse(child, depth + 1)

    if node is not None:
        traverse(node, 0)

    return metrics
