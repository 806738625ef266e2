"""
Conversion des erreurs du moteur alumni en réponses HTTP.
"""

import logging
from typing import NoReturn

from fastapi import HTTPException

from yearbook.services.exceptions import AlumniError, InternalInconsistencyError

logger = logging.getLogger(__name__)


def raise_http_error(exc: AlumniError) -> NoReturn:
    """
    Lève l'HTTPException correspondant à une erreur métier.
    Les incohérences internes sont masquées derrière un message générique.
    """
    if isinstance(exc, InternalInconsistencyError):
        logger.error("Incohérence interne du moteur alumni : %s", exc.detail)
        raise HTTPException(status_code=exc.status_code, detail=exc.public_detail) from exc
    raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
