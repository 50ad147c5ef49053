"""
Ejecución local del servicio de árbol de repositorios
=====================================================

Sin argumentos levanta el servidor HTTP (GET /tree y el front-end
estático). Con --url obtiene el árbol de un repositorio, lo imprime en
consola y termina.

Uso:
-----
Servidor:
    python main.py
    python main.py --port 9000

Un repositorio:
    python main.py --url https://github.com/owner/repo
    python main.py --url https://github.com/owner/repo --json

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

import sys
from typing import List, Optional

import uvicorn

from app.core.logger import (
    get_logger,
    set_request_context,
    clear_request_context
)
from app.handlers.tree_handler import handle_get_tree_local
from app.utils.request_parser import parse_local_args

logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Función principal de ejecución local.

    Returns:
        int: Código de salida
    """
    args = parse_local_args(argv)

    if args.url:
        try:
            set_request_context(environment="local", source="main")
            logger.info("🧪 Inicio de ejecución local")
            return handle_get_tree_local(args.url, as_json=args.json)

        except KeyboardInterrupt:
            print("\n⏹️ Ejecución interrumpida por el usuario")
            return 0

        finally:
            clear_request_context()
            logger.info("✅ Ejecución local finalizada")

    logger.info(f"Server running at http://localhost:{args.port}")
    try:
        uvicorn.run("app.server:app", host=args.host, port=args.port)
    except Exception:
        logger.exception("🛑 Error starting server")
        return 1
    logger.info("Server stopped")
    return 0


# Entry point
if __name__ == "__main__":
    sys.exit(main())
