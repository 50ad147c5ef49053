import json
from typing import Optional
from app.models.file_node import FileNode

def serialize_node(node: Optional[FileNode]) -> Optional[dict]:
    """
    Convierte recursivamente un FileNode a dict serializable en JSON.

    La clave "children" se omite en archivos y en carpetas sin hijos.
    """
    if node is None:
        return None

    serialized = {
        "name": node.name,
        "is_dir": node.is_dir
    }
    if node.is_dir and node.children:
        serialized["children"] = [serialize_node(child) for child in node.children]

    return serialized


def serialize_tree(node: Optional[FileNode]) -> str:
    """JSON del árbol completo; "null" si la raíz no pudo construirse."""
    return json.dumps(serialize_node(node), ensure_ascii=False)
