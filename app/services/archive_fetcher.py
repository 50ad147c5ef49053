"""
Descarga del archivo zip del repositorio.

Un único GET sin reintentos; el body se escribe en disco por bloques.
El código de estado HTTP no interrumpe la descarga: una página de error
se guarda igual y falla después, al intentar descomprimirla.

Autor: Equipo de Ingeniería
Versión: 1.0.0
"""

import requests

from app.core.constants import (
    CONNECTION_TIMEOUT,
    READ_TIMEOUT,
    DOWNLOAD_CHUNK_SIZE,
    MetricNames
)
from app.core.exceptions import ArchiveDownloadError
from app.core.logger import get_logger, log_api_call, log_business_metric, log_performance

logger = get_logger(__name__)


@log_performance(operation_name="download_archive")
def download_file(url: str, dest: str) -> str:
    """
    Descarga `url` y escribe el body completo en `dest` (crea o trunca).

    Argumentos:
        url (str): URL del zip.
        dest (str): Ruta del archivo local.

    Retorna:
        str: `dest`.

    Lanza:
        ArchiveDownloadError: Fallo de red, DNS, timeout o escritura local.
    """
    log_api_call("github", "download_archive", url=url)

    try:
        with requests.get(url, stream=True, timeout=(CONNECTION_TIMEOUT, READ_TIMEOUT)) as response:
            if not response.ok:
                logger.warning("Archive download returned non-success status", extra={
                    "url": url,
                    "status_code": response.status_code
                })

            written = 0
            with open(dest, "wb") as out:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        out.write(chunk)
                        written += len(chunk)

    except requests.RequestException as e:
        logger.error("Error de red descargando el repositorio", extra={
            "url": url,
            "error": str(e),
            "error_type": type(e).__name__
        })
        raise ArchiveDownloadError(url=url, original_error=e) from e

    except OSError as e:
        logger.error("Error escribiendo el archivo descargado", extra={
            "url": url,
            "dest": dest,
            "error": str(e)
        })
        raise ArchiveDownloadError(url=url, details={"dest": dest}, original_error=e) from e

    log_business_metric(MetricNames.ARCHIVE_SIZE, written, "bytes")
    logger.debug("Archivo descargado", extra={"url": url, "dest": dest, "size_bytes": written})
    return dest
