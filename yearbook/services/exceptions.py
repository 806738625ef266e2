"""
Erreurs métier du moteur de vérification alumni.

Chaque erreur porte un message lisible (affiché tel quel dans les toasts de
l'interface) et le code HTTP équivalent utilisé par les routers.
Elles héritent de ValueError, comme les erreurs métier des autres services.
"""

from datetime import datetime
from typing import Optional


class AlumniError(ValueError):
    """Base des rejets du moteur alumni."""

    status_code = 400

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class AlumniValidationError(AlumniError):
    """Champ obligatoire manquant ou mal formé."""

    def __init__(self, detail: str, fields: Optional[list[str]] = None) -> None:
        super().__init__(detail)
        self.fields = fields or []


class NotFoundError(AlumniError):
    status_code = 404


class DuplicateRequestError(AlumniError):
    status_code = 409


class DuplicateSchoolBadgeError(AlumniError):
    status_code = 409


class BadgeLimitExceededError(AlumniError):
    status_code = 403


class BlockedError(AlumniError):
    status_code = 403

    def __init__(self, detail: str, blocked_until: datetime) -> None:
        super().__init__(detail)
        self.blocked_until = blocked_until


class RateLimitError(AlumniError):
    status_code = 429


class RequestAlreadyReviewedError(AlumniError):
    status_code = 409


class InternalInconsistencyError(AlumniError):
    """
    Un utilisateur ou une école référencé(e) a disparu.
    Indique un bug, pas une erreur utilisateur : le détail n'est pas exposé au client.
    """

    status_code = 500
    public_detail = "An internal error occurred while processing the alumni request."
