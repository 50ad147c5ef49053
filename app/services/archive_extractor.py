"""
Expansión del zip descargado en el directorio temporal del request.

Cada entrada se procesa de forma independiente: los directorios padre se
crean siempre antes de escribir un archivo. Los permisos se toman del modo
Unix registrado en el zip. Ninguna entrada puede escribir fuera del
directorio destino.

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

import os
import shutil
import stat
import zipfile

from app.core.constants import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, MetricNames
from app.core.exceptions import ArchiveExtractionError
from app.core.logger import get_logger, log_business_metric, log_performance
from app.core.validators import resolve_archive_member_path

logger = get_logger(__name__)


def _entry_mode(info: zipfile.ZipInfo, default: int) -> int:
    """Bits de permiso registrados en la entrada (0 si el zip no trae modo Unix)."""
    mode = stat.S_IMODE(info.external_attr >> 16)
    return mode or default


@log_performance(operation_name="unzip")
def unzip(src: str, dest: str) -> int:
    """
    Expande todas las entradas de `src` dentro de `dest`.

    Argumentos:
        src (str): Ruta del zip.
        dest (str): Directorio destino; se crea junto con sus ancestros.

    Retorna:
        int: Número de entradas procesadas.

    Lanza:
        UnsafeArchivePathError: Si alguna entrada resuelve fuera de `dest`.
        ArchiveExtractionError: Zip corrupto o inválido, o error de escritura.
    """
    try:
        archive = zipfile.ZipFile(src)
    except (zipfile.BadZipFile, OSError) as e:
        logger.error("El archivo descargado no es un zip válido", extra={
            "archive_path": src,
            "error": str(e),
            "error_type": type(e).__name__
        })
        raise ArchiveExtractionError(archive_path=src, original_error=e) from e

    with archive:
        try:
            os.makedirs(dest, mode=DEFAULT_DIR_MODE, exist_ok=True)

            entries = archive.infolist()
            for info in entries:
                target = resolve_archive_member_path(dest, info.filename, archive_path=src)

                if info.is_dir():
                    os.makedirs(target, exist_ok=True)
                    os.chmod(target, _entry_mode(info, DEFAULT_DIR_MODE))
                    continue

                os.makedirs(os.path.dirname(target), mode=DEFAULT_DIR_MODE, exist_ok=True)
                with archive.open(info) as source, open(target, "wb") as out:
                    shutil.copyfileobj(source, out)
                os.chmod(target, _entry_mode(info, DEFAULT_FILE_MODE))

        except ArchiveExtractionError:
            raise
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError) as e:
            logger.error("Error expandiendo el repositorio", extra={
                "archive_path": src,
                "dest": dest,
                "error": str(e),
                "error_type": type(e).__name__
            })
            raise ArchiveExtractionError(archive_path=src, original_error=e) from e

    log_business_metric(MetricNames.ARCHIVE_ENTRIES, len(entries), "count")
    logger.debug("Archivo expandido", extra={"archive_path": src, "dest": dest, "entries": len(entries)})
    return len(entries)
