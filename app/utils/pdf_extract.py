import io
import logging

from pypdf import PdfReader

logger = logging.getLogger(__name__)


def count_pdf_pages(data: bytes) -> int:
    """
    Nombre de pages d'un PDF en mémoire. 0 si illisible (on n'en fait pas une erreur d'upload).
    """
    if not data:
        return 0
    try:
        return len(PdfReader(io.BytesIO(data)).pages)
    except Exception as e:  # PDF corrompu ou non standard
        logger.warning("pdf page count failed: %s", e)
        return 0
