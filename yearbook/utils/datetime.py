"""Horloge UTC et arithmétique de mois calendaires."""

from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta


def utcnow() -> datetime:
    """
    Retourne l'heure courante en UTC, sans tzinfo.
    Les colonnes DateTime de la base sont naïves et stockées en UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_months(moment: datetime, months: int) -> datetime:
    """
    Ajoute un nombre de mois calendaires à un datetime.
    Le jour est ramené au dernier jour du mois cible si nécessaire (30/11 + 3 mois → 28/02).
    """
    return moment + relativedelta(months=months)
