"""
Servicio de Formateo Textual del Árbol de Repositorio
=====================================================

Convierte un árbol de FileNode en un listado indentado legible, con el
mismo formato que muestra el front-end: 📁 para carpetas, 📄 para
archivos y dos espacios por nivel de profundidad.

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

from typing import List, Optional
from app.models.file_node import FileNode

INDENT = "  "


def format_tree(node: Optional[FileNode], depth: int = 0) -> str:
    """
    Convierte un árbol de nodos a un listado jerárquico en texto.

    Argumentos:
        node (Optional[FileNode]): Raíz del árbol.
        depth (int): Nivel de indentación inicial (para recursividad).

    Retorna:
        str: Listado, una entrada por línea. Cadena vacía si no hay raíz.

    Ejemplo de salida:
        📁 repo-main
          📄 README.md
          📁 src
            📄 main.go
    """
    if node is None:
        return ""

    lines: List[str] = []
    icon = "📁" if node.is_dir else "📄"
    lines.append(f"{INDENT * depth}{icon} {node.name}")

    for child in node.children or []:
        lines.append(format_tree(child, depth + 1))

    return "\n".join(lines)
