"""Moteur de paie: orchestration de tous les calculs pour une periode.

Combine le brut, les cotisations (cotisations.py), les conges payes
(conges.py) et les cumuls annuels (cumuls.py) pour produire un BulletinPaie
complet. Le bulletin precedent, s'il existe, est le seul etat transmis d'une
periode a l'autre.
"""

from __future__ import annotations

import dataclasses
import datetime
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from paiefr.france.paie.conges import CongesPayes, calculer_conges, consommer
from paiefr.france.paie.cotisations import (
    ResultatCotisations,
    calculer_cotisations,
    en_decimal,
)
from paiefr.france.paie.cumuls import Cumuls, calculer_cumuls
from paiefr.france.taux import BaremeAnnuel

logger = logging.getLogger(__name__)

# 35h x 52 semaines / 12 mois
HEURES_MENSUELLES_STANDARD = Decimal("151.67")


@dataclass(frozen=True)
class Employeur:
    nom: str = ""
    adresse: str = ""
    siret: str = ""
    urssaf: str = ""


@dataclass(frozen=True)
class Salarie:
    nom: str = ""
    adresse: str = ""
    poste: str = ""
    numero_securite_sociale: str = ""
    cadre: bool = False


@dataclass(frozen=True)
class EntreePeriode:
    """Donnees brutes d'une periode de paie."""

    periode_debut: datetime.date
    periode_fin: datetime.date
    date_paiement: datetime.date
    taux_horaire: Decimal
    heures_travaillees: Decimal
    employeur: Employeur = field(default_factory=Employeur)
    salarie: Salarie = field(default_factory=Salarie)


@dataclass(frozen=True)
class BulletinPaie:
    """Resultat complet d'un calcul de paie pour une periode."""

    employeur: Employeur
    salarie: Salarie

    # Periode
    periode_debut: datetime.date
    periode_fin: datetime.date
    date_paiement: datetime.date
    annee_fiscale: int

    # Remuneration
    taux_horaire: Decimal
    heures_travaillees: Decimal
    salaire_brut: Decimal
    salaire_net: Decimal
    cout_employeur: Decimal

    cotisations: ResultatCotisations
    conges: CongesPayes

    # Cumuls
    cumul_brut: Decimal
    cumul_net: Decimal
    cumul_debut: datetime.date
    cumul_fin: datetime.date

    @property
    def cumuls(self) -> Cumuls:
        return Cumuls(
            brut=self.cumul_brut,
            net=self.cumul_net,
            debut=self.cumul_debut,
            fin=self.cumul_fin,
        )


def calculer_periode(
    entree: EntreePeriode,
    precedent: BulletinPaie | None = None,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> BulletinPaie:
    """Calcule un bulletin de paie complet pour une periode.

    Args:
        entree: Donnees de la periode (identites, dates, taux horaire, heures).
        precedent: Bulletin de la periode immediatement anterieure, s'il existe.
            L'ordre chronologique est de la responsabilite de l'appelant.
        tables: Baremes de cotisations (defaut: baremes integres).

    Returns:
        BulletinPaie avec brut, cotisations, net, cout employeur, conges
        et cumuls.

    Raises:
        ValueError: Si le taux horaire n'est pas strictement positif ou si
            les heures travaillees sont negatives.
    """
    taux_horaire = en_decimal(entree.taux_horaire)
    heures = en_decimal(entree.heures_travaillees)
    if taux_horaire <= 0:
        raise ValueError(f"Taux horaire invalide: {taux_horaire}")
    if heures < 0:
        raise ValueError(f"Heures travaillees negatives: {heures}")

    annee = entree.periode_debut.year

    brut = taux_horaire * heures
    cotisations = calculer_cotisations(brut, annee, entree.salarie.cadre, tables)
    net = brut - cotisations.total_salarial
    cout_employeur = brut + cotisations.total_patronal

    cumuls = calculer_cumuls(
        annee,
        brut,
        net,
        precedent.cumuls if precedent is not None else None,
        precedent.annee_fiscale if precedent is not None else None,
    )
    conges = calculer_conges(
        entree.periode_debut,
        precedent.conges if precedent is not None else None,
    )

    logger.debug(
        "Periode %s: brut=%s net=%s cout=%s cumul_brut=%s",
        entree.periode_debut, brut, net, cout_employeur, cumuls.brut,
    )

    return BulletinPaie(
        employeur=entree.employeur,
        salarie=entree.salarie,
        periode_debut=entree.periode_debut,
        periode_fin=entree.periode_fin,
        date_paiement=entree.date_paiement,
        annee_fiscale=annee,
        taux_horaire=taux_horaire,
        heures_travaillees=heures,
        salaire_brut=brut,
        salaire_net=net,
        cout_employeur=cout_employeur,
        cotisations=cotisations,
        conges=conges,
        cumul_brut=cumuls.brut,
        cumul_net=cumuls.net,
        cumul_debut=cumuls.debut,
        cumul_fin=cumuls.fin,
    )


def appliquer_conges_pris(
    bulletin: BulletinPaie,
    jours: Decimal | int | float | str,
) -> BulletinPaie:
    """Retourne une copie du bulletin avec des jours de conges pris en plus.

    Le brut, les cotisations et les cumuls ne sont pas recalcules.

    Raises:
        ValueError: Si le nombre de jours est negatif.
    """
    conges = consommer(bulletin.conges, en_decimal(jours))
    return dataclasses.replace(bulletin, conges=conges)


def calculer_serie(
    entrees: Iterable[EntreePeriode],
    precedent: BulletinPaie | None = None,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> list[BulletinPaie]:
    """Calcule une suite chronologique de periodes, chacune chainee a la precedente."""
    bulletins: list[BulletinPaie] = []
    for entree in entrees:
        precedent = calculer_periode(entree, precedent, tables)
        bulletins.append(precedent)
    return bulletins
