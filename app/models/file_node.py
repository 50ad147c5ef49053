# app/models/file_node.py

from dataclasses import dataclass
from typing import List, Optional

@dataclass
class FileNode:
    """
    Modelo de datos que representa una entrada del sistema de archivos
    dentro del árbol del repositorio. Puede ser un archivo o una carpeta.

    Atributos:
    ----------
    name : str
        Nombre base del archivo o carpeta (ej: "main.go", "src").

    is_dir : bool
        True si la entrada es un directorio.

    children : Optional[List[FileNode]]
        Subnodos en orden de listado. Sólo para carpetas con al menos un
        hijo construido; None en cualquier otro caso (nunca lista vacía).
    """
    name: str
    is_dir: bool
    children: Optional[List["FileNode"]] = None

    def add_child(self, child: "FileNode") -> None:
        if not self.is_dir:
            raise ValueError(f"Un archivo no puede tener hijos: {self.name}")
        if self.children is None:
            self.children = []
        self.children.append(child)
