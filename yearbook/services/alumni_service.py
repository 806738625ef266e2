"""
Moteur de vérification alumni : cycle de vie des badges et des demandes.

Une demande crée immédiatement un badge "pending". L'admin de l'école
l'approuve (badge → verified + entrée dans l'annuaire students, la demande
est supprimée) ou la refuse (badge supprimé, la demande reste en "denied"
pour l'historique). Supprimer un badge bloque toute nouvelle demande vers
cette école pendant ALUMNI_BLOCK_MONTHS mois.

Les blocages et la limite hebdomadaire sont évalués à la soumission suivante,
jamais purgés en arrière-plan.
"""

import uuid
import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from yearbook.config import settings
from yearbook.models.alumni import AlumniBadge, AlumniRequest, AlumniRequestBlock
from yearbook.schemas.alumni import (
    AlumniApprovalResult,
    AlumniBadgeResponse,
    AlumniRequestCreate,
    AlumniRequestResponse,
)
from yearbook.services import directory_service, notification_service, student_service
from yearbook.services.exceptions import (
    AlumniValidationError,
    BadgeLimitExceededError,
    BlockedError,
    DuplicateRequestError,
    DuplicateSchoolBadgeError,
    InternalInconsistencyError,
    NotFoundError,
    RateLimitError,
    RequestAlreadyReviewedError,
)
from yearbook.services.graduation import Graduation
from yearbook.utils.datetime import add_months, utcnow

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "school_id", "full_name", "admission_year", "graduation_year")
BLOCK_REASON_BADGE_DELETED = "badge_deleted"


# ----------------------------------------------------------------
# Règles temporelles et correspondance badge ↔ demande
# ----------------------------------------------------------------

def active_block_until(blocks: Iterable[AlumniRequestBlock], now: datetime) -> Optional[datetime]:
    """
    Retourne la fin du blocage le plus long s'il est encore actif, sinon None.
    Un blocage qui expire exactement à `now` est inactif.
    """
    latest = max((b.blocked_until for b in blocks), default=None)
    if latest is not None and latest > now:
        return latest
    return None


def rate_limit_window_start(now: datetime) -> datetime:
    """Début de la fenêtre glissante (borne incluse)."""
    return now - timedelta(days=settings.ALUMNI_RATE_LIMIT_WINDOW_DAYS)


def block_expiry(now: datetime) -> datetime:
    return add_months(now, settings.ALUMNI_BLOCK_MONTHS)


def find_matching_badge(
    badges: Iterable[AlumniBadge],
    school_name: Optional[str],
    admission_year: str,
    graduation_year: str,
) -> Optional[AlumniBadge]:
    """Premier badge pending de l'école avec les mêmes années d'entrée et de sortie."""
    for badge in badges:
        if (
            badge.school == school_name
            and badge.status == "pending"
            and badge.admission_year == admission_year
            and badge.graduation_year == graduation_year
        ):
            return badge
    return None


# ----------------------------------------------------------------
# Soumission
# ----------------------------------------------------------------

def submit_request(
    db: Session,
    data: AlumniRequestCreate,
    now: Optional[datetime] = None,
) -> AlumniRequestResponse:
    """
    Enregistre une demande de vérification et le badge pending associé.

    Validations (la première qui échoue l'emporte) :
    1. Champs obligatoires présents
    2. Pas de demande pending pour (utilisateur, école)
    3. Pas de blocage actif pour (utilisateur, école)
    4. Pas de badge existant pour cette école
    5. Moins de ALUMNI_MAX_BADGES badges au total
    6. Moins de ALUMNI_WEEKLY_REQUEST_LIMIT demandes sur la fenêtre glissante
    """
    now = now or utcnow()

    # 1. Champs obligatoires
    missing = [f for f in REQUIRED_FIELDS if not str(getattr(data, f, None) or "").strip()]
    if missing:
        raise AlumniValidationError(f"Missing required fields: {', '.join(missing)}.", fields=missing)

    # Verrou sur la ligne utilisateur jusqu'au commit : deux soumissions
    # simultanées du même utilisateur ne peuvent pas s'entrelacer.
    user = directory_service.get_user(db, data.user_id, for_update=True)

    # 2. Demande déjà en attente pour cette école
    pending = db.execute(
        select(AlumniRequest.id)
        .where(
            AlumniRequest.user_id == data.user_id,
            AlumniRequest.school_id == data.school_id,
            AlumniRequest.status == "pending",
        )
        .limit(1)
    ).scalar()

    if pending:
        raise DuplicateRequestError("You already have a pending alumni request for this school.")

    # 3. Blocage après suppression d'un badge
    blocks = db.execute(
        select(AlumniRequestBlock)
        .where(
            AlumniRequestBlock.user_id == data.user_id,
            AlumniRequestBlock.school_id == data.school_id,
        )
    ).scalars().all()

    blocked_until = active_block_until(blocks, now)
    if blocked_until is not None:
        raise BlockedError(
            f"You cannot make alumni requests to this school until {blocked_until.date().isoformat()}.",
            blocked_until=blocked_until,
        )

    # 4. Badge déjà détenu pour cette école
    school = directory_service.get_school_by_id(db, data.school_id)
    if school is None:
        raise NotFoundError("School not found.")

    badges = db.execute(
        select(AlumniBadge).where(AlumniBadge.user_id == data.user_id)
    ).scalars().all()

    if any(b.school == school.name or b.school_id == school.id for b in badges):
        raise DuplicateSchoolBadgeError(
            f"You already have an alumni badge for {school.name}. "
            "You cannot have multiple badges from the same school."
        )

    # 5. Nombre de badges (pending + verified)
    if len(badges) >= settings.ALUMNI_MAX_BADGES:
        raise BadgeLimitExceededError(
            f"You have reached the maximum number of alumni badges ({settings.ALUMNI_MAX_BADGES}). "
            "Please upgrade your account to add more alumni statuses."
        )

    # 6. Limite de demandes sur la fenêtre glissante, toutes écoles confondues
    recent_count = db.execute(
        select(func.count())
        .select_from(AlumniRequest)
        .where(
            AlumniRequest.user_id == data.user_id,
            AlumniRequest.created_at >= rate_limit_window_start(now),
        )
    ).scalar() or 0

    if recent_count >= settings.ALUMNI_WEEKLY_REQUEST_LIMIT:
        raise RateLimitError("You've made too many requests, try again later.")

    if user is None:
        logger.error("Utilisateur %s introuvable à la création du badge alumni", data.user_id)
        raise InternalInconsistencyError(f"User {data.user_id} not found for alumni badge creation.")

    badge = AlumniBadge(
        user_id=data.user_id,
        school_id=school.id,
        school=school.name,
        full_name=user.full_name,
        admission_year=data.admission_year,
        graduation_year=data.graduation_year,
        status="pending",
        created_at=now,
    )
    db.add(badge)

    try:
        # Le badge doit exister avant la demande qui le référence
        db.flush()
        request = AlumniRequest(
            user_id=data.user_id,
            school_id=data.school_id,
            badge_id=badge.id,
            full_name=data.full_name,
            admission_year=data.admission_year,
            graduation_year=data.graduation_year,
            post_held=data.post_held,
            student_name=data.student_name,
            student_admission_year=data.student_admission_year,
            additional_info=data.additional_info,
            status="pending",
            created_at=now,
        )
        db.add(request)
        db.flush()
    except IntegrityError:
        # Index unique partiel : une demande concurrente a été insérée entre-temps
        db.rollback()
        raise DuplicateRequestError("You already have a pending alumni request for this school.")

    db.commit()
    db.refresh(request)
    response = AlumniRequestResponse.model_validate(request)

    logger.info(
        "Demande alumni %s créée : utilisateur %s → école %s (badge %s)",
        response.id, data.user_id, school.name, response.badge_id,
    )

    notification_service.send(
        db,
        user_id=data.user_id,
        type=notification_service.ALUMNI_REQUEST_SENT,
        title="Alumni Status Request Sent",
        message=f"Alumni status request successfully sent to {school.name}",
        related_id=response.id,
    )
    return response


# ----------------------------------------------------------------
# Revue par l'école
# ----------------------------------------------------------------

def approve_request(
    db: Session,
    request_id: uuid.UUID,
    reviewer_id: uuid.UUID,
    review_notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AlumniApprovalResult:
    """
    Approuve une demande : le badge pending passe à verified, une entrée
    students est créée et la demande est supprimée.

    Si aucun badge pending ne correspond (données incohérentes), la demande est
    quand même approuvée et supprimée, mais sans badge vérifié ni entrée
    students ; l'anomalie est journalisée.
    Le badge est commité avant l'envoi de la notification.
    """
    now = now or utcnow()
    request = _get_pending_request(db, request_id)

    school = directory_service.get_school_by_id(db, request.school_id)
    if school is None:
        logger.error("École %s introuvable pour la demande alumni %s", request.school_id, request_id)
        raise InternalInconsistencyError(f"School {request.school_id} vanished before review.")

    try:
        graduation = Graduation.parse(request.graduation_year)
    except ValueError:
        logger.error(
            "Année de sortie illisible '%s' sur la demande alumni %s",
            request.graduation_year, request_id,
        )
        raise InternalInconsistencyError(f"Unreadable graduation year on request {request_id}.")

    badge = _find_request_badge(db, request, school.name)
    student = None
    if badge is not None:
        badge.status = "verified"
        # L'annuaire alumni n'est alimenté que par un badge effectivement vérifié
        student = student_service.create_student_entry(
            db,
            school_id=request.school_id,
            full_name=request.full_name,
            graduation=graduation,
            admission_year=request.admission_year,
        )
    else:
        logger.warning(
            "Aucun badge pending pour la demande alumni %s (utilisateur %s, école %s), approbation sans badge",
            request_id, request.user_id, school.name,
        )

    request.status = "approved"
    request.reviewed_by = reviewer_id
    request.reviewed_at = now
    request.review_notes = review_notes
    db.flush()

    # Instantané avant suppression : la demande approuvée ne persiste pas
    snapshot = AlumniRequestResponse.model_validate(request)
    badge_response = AlumniBadgeResponse.model_validate(badge) if badge is not None else None
    student_id = student.id if student is not None else None
    user_id = request.user_id

    db.delete(request)
    db.commit()

    logger.info(
        "Demande alumni %s approuvée par %s, badge %s vérifié, entrée students %s",
        request_id, reviewer_id, badge_response.id if badge_response else None, student_id,
    )

    notification_service.send(
        db,
        user_id=user_id,
        type=notification_service.ALUMNI_APPROVED,
        title="Alumni Status Approved!",
        message=(
            f"Your alumni status request to {school.name} has been approved. "
            "You now have alumni access to memories and content."
        ),
        related_id=request_id,
    )

    return AlumniApprovalResult(
        message="Alumni request approved successfully",
        request=snapshot,
        badge=badge_response,
        student_id=student_id,
    )


def deny_request(
    db: Session,
    request_id: uuid.UUID,
    reviewer_id: uuid.UUID,
    review_notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AlumniRequestResponse:
    """
    Refuse une demande : elle est conservée en statut denied (historique)
    et le badge pending correspondant est supprimé.
    """
    now = now or utcnow()
    request = _get_pending_request(db, request_id)

    school = directory_service.get_school_by_id(db, request.school_id)
    school_name = school.name if school else None

    request.status = "denied"
    request.reviewed_by = reviewer_id
    request.reviewed_at = now
    request.review_notes = review_notes

    badge = _find_request_badge(db, request, school_name)
    request.badge_id = None
    if badge is not None:
        # Détacher la demande avant la suppression du badge référencé
        db.flush()
        db.delete(badge)
    else:
        logger.warning("Aucun badge pending à supprimer pour la demande alumni refusée %s", request_id)

    db.commit()
    db.refresh(request)
    response = AlumniRequestResponse.model_validate(request)

    logger.info("Demande alumni %s refusée par %s", request_id, reviewer_id)

    reason = f" Reason: {review_notes}" if review_notes else ""
    notification_service.send(
        db,
        user_id=response.user_id,
        type=notification_service.ALUMNI_DENIED,
        title="Alumni Status Denied",
        message=f"Your alumni request to {school_name or 'the school'} has been denied.{reason}",
        related_id=response.id,
    )
    return response


# ----------------------------------------------------------------
# Suppression de badge
# ----------------------------------------------------------------

def delete_badge(
    db: Session,
    badge_id: uuid.UUID,
    acting_user_id: uuid.UUID,
    now: Optional[datetime] = None,
) -> None:
    """
    Supprime un badge (pending ou verified) et bloque les nouvelles demandes
    de son propriétaire vers cette école pendant ALUMNI_BLOCK_MONTHS mois.

    Si l'école ne peut pas être retrouvée, le badge est quand même supprimé
    et aucun blocage n'est créé. Aucune notification n'est envoyée.
    """
    now = now or utcnow()
    badge = db.get(AlumniBadge, badge_id)
    if badge is None:
        raise NotFoundError("Alumni badge not found.")

    school = None
    if badge.school_id is not None:
        school = directory_service.get_school_by_id(db, badge.school_id)
    if school is None:
        school = directory_service.get_school_by_name(db, badge.school)

    owner_id = badge.user_id
    school_name = badge.school

    db.execute(
        update(AlumniRequest)
        .where(AlumniRequest.badge_id == badge.id)
        .values(badge_id=None)
    )
    db.delete(badge)

    if school is not None:
        db.add(AlumniRequestBlock(
            user_id=owner_id,
            school_id=school.id,
            blocked_until=block_expiry(now),
            reason=BLOCK_REASON_BADGE_DELETED,
            created_at=now,
        ))
    else:
        logger.warning(
            "Badge %s supprimé : école '%s' introuvable dans l'annuaire, aucun blocage créé",
            badge_id, school_name,
        )

    db.commit()
    logger.info(
        "Badge alumni %s (%s) de l'utilisateur %s supprimé par %s",
        badge_id, school_name, owner_id, acting_user_id,
    )


# ----------------------------------------------------------------
# Lectures
# ----------------------------------------------------------------

def list_badges_for_user(db: Session, user_id: uuid.UUID) -> list[AlumniBadgeResponse]:
    """Retourne tous les badges d'un utilisateur (pending et verified)."""
    badges = db.execute(
        select(AlumniBadge)
        .where(AlumniBadge.user_id == user_id)
        .order_by(AlumniBadge.created_at)
    ).scalars().all()
    return [AlumniBadgeResponse.model_validate(b) for b in badges]


def list_badges_for_school(
    db: Session,
    school_id: uuid.UUID,
    verified_only: bool = False,
) -> list[AlumniBadgeResponse]:
    """
    Retourne les badges rattachés à une école (par ID, ou par nom pour les
    badges créés sans school_id). Liste vide si l'école est inconnue.
    """
    school = directory_service.get_school_by_id(db, school_id)
    if school is None:
        return []

    stmt = (
        select(AlumniBadge)
        .where(or_(
            AlumniBadge.school_id == school.id,
            and_(AlumniBadge.school_id.is_(None), AlumniBadge.school == school.name),
        ))
        .order_by(AlumniBadge.full_name)
    )
    if verified_only:
        stmt = stmt.where(AlumniBadge.status == "verified")

    badges = db.execute(stmt).scalars().all()
    return [AlumniBadgeResponse.model_validate(b) for b in badges]


def list_requests_for_school(db: Session, school_id: uuid.UUID) -> list[AlumniRequestResponse]:
    """Retourne les demandes (pending et denied) d'une école, des plus récentes aux plus anciennes."""
    requests = db.execute(
        select(AlumniRequest)
        .where(AlumniRequest.school_id == school_id)
        .order_by(AlumniRequest.created_at.desc())
    ).scalars().all()
    return [AlumniRequestResponse.model_validate(r) for r in requests]


def count_pending_requests(db: Session, school_id: uuid.UUID) -> int:
    """Nombre de demandes en attente pour le compteur du dashboard école."""
    return db.execute(
        select(func.count())
        .select_from(AlumniRequest)
        .where(
            AlumniRequest.school_id == school_id,
            AlumniRequest.status == "pending",
        )
    ).scalar() or 0


def get_request(db: Session, request_id: uuid.UUID) -> Optional[AlumniRequestResponse]:
    """Retourne une demande par son ID, ou None si elle n'existe pas (ou a été approuvée)."""
    request = db.get(AlumniRequest, request_id)
    if request is None:
        return None
    return AlumniRequestResponse.model_validate(request)


# ----------------------------------------------------------------
# Helpers internes
# ----------------------------------------------------------------

def _get_pending_request(db: Session, request_id: uuid.UUID) -> AlumniRequest:
    request = db.get(AlumniRequest, request_id)
    if request is None:
        raise NotFoundError("Alumni request not found.")
    if request.status != "pending":
        raise RequestAlreadyReviewedError(
            f"This alumni request has already been reviewed (status: {request.status})."
        )
    return request


def _find_request_badge(
    db: Session,
    request: AlumniRequest,
    school_name: Optional[str],
) -> Optional[AlumniBadge]:
    """
    Retrouve le badge pending d'une demande : d'abord via badge_id,
    sinon par correspondance école + années (demandes sans lien explicite).
    """
    if request.badge_id is not None:
        badge = db.get(AlumniBadge, request.badge_id)
        if badge is not None and badge.status == "pending":
            return badge

    badges = db.execute(
        select(AlumniBadge).where(AlumniBadge.user_id == request.user_id)
    ).scalars().all()
    return find_matching_badge(badges, school_name, request.admission_year, request.graduation_year)
