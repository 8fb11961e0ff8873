"""Acquisition des conges payes.

2,5 jours ouvrables acquis par periode traitee (une periode = un mois
complet; toute proratisation est faite par l'appelant). La periode de
reference va du 1er juin au 31 mai: une periode qui commence le 1er juin
repart de zero, sans report du solde.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal

ACQUISITION_MENSUELLE = Decimal("2.5")

ZERO = Decimal("0")


@dataclass(frozen=True)
class CongesPayes:
    """Solde de conges payes a la fin d'une periode."""

    acquis: Decimal
    pris: Decimal
    restant: Decimal


def est_debut_periode_reference(date_debut: datetime.date) -> bool:
    """Vrai si la date est un 1er juin."""
    return date_debut.month == 6 and date_debut.day == 1


def calculer_conges(
    periode_debut: datetime.date,
    precedent: CongesPayes | None = None,
) -> CongesPayes:
    """Calcule le solde de conges pour une nouvelle periode.

    - Premiere periode (aucun precedent): 2,5 acquis, rien de pris.
    - Periode commencant le 1er juin: remise a zero puis 2,5 acquis.
    - Sinon: +2,5 acquis et restants, jours pris inchanges.
    """
    if precedent is None or est_debut_periode_reference(periode_debut):
        return CongesPayes(
            acquis=ACQUISITION_MENSUELLE,
            pris=ZERO,
            restant=ACQUISITION_MENSUELLE,
        )

    return CongesPayes(
        acquis=precedent.acquis + ACQUISITION_MENSUELLE,
        pris=precedent.pris,
        restant=precedent.restant + ACQUISITION_MENSUELLE,
    )


def consommer(conges: CongesPayes, jours: Decimal) -> CongesPayes:
    """Enregistre des jours de conges pris. Le solde restant ne devient jamais negatif.

    Raises:
        ValueError: Si le nombre de jours est negatif ou non fini.
    """
    if not jours.is_finite():
        raise ValueError(f"Nombre de jours de conges non fini: {jours}")
    if jours < 0:
        raise ValueError(f"Nombre de jours de conges negatif: {jours}")

    return CongesPayes(
        acquis=conges.acquis,
        pris=conges.pris + jours,
        restant=max(ZERO, conges.restant - jours),
    )
