# paiefr.france.paie - Calcul d'un bulletin de paie par periode
#
# Modules:
#   cotisations.py   - Application du bareme annuel a un salaire brut
#   conges.py        - Acquisition et consommation des conges payes
#   cumuls.py        - Cumuls annuels brut/net chaines entre periodes
#   moteur.py        - Orchestration d'une periode (BulletinPaie)
#   serialisation.py - Export/import YAML d'un bulletin

from paiefr.france.paie.conges import CongesPayes
from paiefr.france.paie.cotisations import (
    LigneCotisation,
    ResultatCotisations,
    calculer_cotisations,
)
from paiefr.france.paie.moteur import (
    BulletinPaie,
    EntreePeriode,
    appliquer_conges_pris,
    calculer_periode,
    calculer_serie,
)

__all__ = [
    "BulletinPaie",
    "CongesPayes",
    "EntreePeriode",
    "LigneCotisation",
    "ResultatCotisations",
    "appliquer_conges_pris",
    "calculer_cotisations",
    "calculer_periode",
    "calculer_serie",
]
