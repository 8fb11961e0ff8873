"""Cumuls annuels (YTD) du brut et du net, chaines d'une periode a l'autre.

Le bulletin precedent est passe explicitement par l'appelant; rien n'est
conserve entre deux appels.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Cumuls:
    """Cumuls brut/net et fenetre de cumul pour une periode."""

    brut: Decimal
    net: Decimal
    debut: datetime.date
    fin: datetime.date


def calculer_cumuls(
    annee: int,
    brut: Decimal,
    net: Decimal,
    precedent: Cumuls | None = None,
    annee_precedente: int | None = None,
) -> Cumuls:
    """Calcule les cumuls de la periode courante.

    Args:
        annee: Annee fiscale de la periode courante.
        brut: Salaire brut de la periode.
        net: Salaire net de la periode.
        precedent: Cumuls de la periode precedente, s'il y en a une.
        annee_precedente: Annee fiscale de la periode precedente.

    Returns:
        Cumuls remis a zero si aucun precedent ou si l'annee a change;
        sinon cumuls precedents + periode courante, avec le debut de
        fenetre reporte tel quel.
    """
    fin = datetime.date(annee, 12, 31)

    if precedent is None or annee_precedente != annee:
        return Cumuls(
            brut=brut,
            net=net,
            debut=datetime.date(annee, 1, 1),
            fin=fin,
        )

    return Cumuls(
        brut=precedent.brut + brut,
        net=precedent.net + net,
        debut=precedent.debut,
        fin=fin,
    )
