"""Baremes annuels des cotisations sociales (France).

Toutes les valeurs sont en Decimal -- jamais de float. Les taux sont exprimes
en pourcentage (6.90 = 6,90 %).

Chaque annee est derivee de la precedente: on clone le bareme et on ne
surcharge que ce qui change (plafond de la securite sociale, SMIC, rarement
un taux). Les baremes sont materialises a l'import du module; la selection
d'une annee est une simple lecture de dictionnaire.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

logger = logging.getLogger(__name__)


class ErreurConfiguration(Exception):
    """Bareme mal forme (ex: cotisation plafonnee sans plafond)."""


class Categorie(str, Enum):
    """Categorie d'une cotisation."""

    SANTE = "sante"
    RETRAITE = "retraite"
    CHOMAGE = "chomage"
    FAMILLE = "famille"
    AUTRES = "autres"


LIBELLES_CATEGORIES: dict[Categorie, str] = {
    Categorie.SANTE: "Santé",
    Categorie.RETRAITE: "Retraite",
    Categorie.CHOMAGE: "Chômage",
    Categorie.FAMILLE: "Famille",
    Categorie.AUTRES: "Autres cotisations",
}


class TypeAssiette(str, Enum):
    """Assiette de calcul d'une cotisation."""

    TOTAL_BRUT = "total_brut"
    PLAFONNE = "plafonne"


@dataclass(frozen=True)
class DefinitionCotisation:
    """Une cotisation sociale telle que publiee pour une annee."""

    identifiant: str
    nom: str
    taux_salarial: Decimal
    taux_patronal: Decimal
    categorie: Categorie
    type_assiette: TypeAssiette = TypeAssiette.TOTAL_BRUT
    plafond: Decimal | None = None  # Obligatoire si PLAFONNE
    actif: bool = True
    description: str = ""


@dataclass(frozen=True)
class Majoration:
    """Taux majores d'une categorie au-dela d'un multiple du SMIC mensuel.

    Un taux a None conserve le taux publie de la definition.
    """

    categorie: Categorie
    multiple_smic: Decimal
    taux_salarial: Decimal | None = None
    taux_patronal: Decimal | None = None

    def seuil(self, smic_mensuel: Decimal) -> Decimal:
        return self.multiple_smic * smic_mensuel


@dataclass(frozen=True)
class BaremeAnnuel:
    """Ensemble complet des cotisations pour une annee fiscale."""

    annee: int
    smic_mensuel: Decimal  # Salaire de reference pour les majorations
    cotisations: tuple[DefinitionCotisation, ...]
    majorations: tuple[Majoration, ...] = ()

    def par_categorie(self, categorie: Categorie) -> tuple[DefinitionCotisation, ...]:
        """Retourne les cotisations d'une categorie, dans l'ordre du bareme."""
        return tuple(c for c in self.cotisations if c.categorie == categorie)

    def majoration(self, categorie: Categorie) -> Majoration | None:
        for majoration in self.majorations:
            if majoration.categorie == categorie:
                return majoration
        return None


def deriver_bareme(
    precedent: BaremeAnnuel,
    annee: int,
    smic_mensuel: Decimal | None = None,
    surcharges: Mapping[str, Mapping[str, object]] | None = None,
    majorations: tuple[Majoration, ...] | None = None,
) -> BaremeAnnuel:
    """Clone le bareme precedent en ne surchargeant que les champs modifies.

    Args:
        precedent: Bareme de l'annee anterieure.
        annee: Annee du nouveau bareme.
        smic_mensuel: Nouveau SMIC mensuel (inchange si None).
        surcharges: {identifiant: {champ: valeur}} a appliquer.
        majorations: Nouvelles majorations (inchangees si None).

    Raises:
        ErreurConfiguration: Si une surcharge vise une cotisation inconnue.
    """
    surcharges = dict(surcharges or {})
    inconnues = set(surcharges) - {c.identifiant for c in precedent.cotisations}
    if inconnues:
        raise ErreurConfiguration(
            f"Surcharges {annee} sur des cotisations inconnues: {sorted(inconnues)}"
        )

    cotisations = tuple(
        dataclasses.replace(c, **surcharges[c.identifiant])
        if c.identifiant in surcharges
        else c
        for c in precedent.cotisations
    )
    return BaremeAnnuel(
        annee=annee,
        smic_mensuel=smic_mensuel if smic_mensuel is not None else precedent.smic_mensuel,
        cotisations=cotisations,
        majorations=majorations if majorations is not None else precedent.majorations,
    )


# =============================================================================
# 2023
# =============================================================================
BAREME_2023 = BaremeAnnuel(
    annee=2023,
    smic_mensuel=Decimal("1747.20"),
    cotisations=(
        DefinitionCotisation(
            identifiant="maladie",
            nom="Assurance Maladie",
            taux_salarial=Decimal("0"),
            taux_patronal=Decimal("7"),
            categorie=Categorie.SANTE,
            description="Couverture des frais de santé",
        ),
        DefinitionCotisation(
            identifiant="vieillesse_plafonnee",
            nom="Retraite de base (plafonnée)",
            taux_salarial=Decimal("6.90"),
            taux_patronal=Decimal("8.55"),
            categorie=Categorie.RETRAITE,
            type_assiette=TypeAssiette.PLAFONNE,
            plafond=Decimal("3666"),  # PMSS 2023
            description="Financement de la retraite de base (plafonnée)",
        ),
        DefinitionCotisation(
            identifiant="vieillesse_deplafonnee",
            nom="Retraite de base (déplafonnée)",
            taux_salarial=Decimal("0.40"),
            taux_patronal=Decimal("1.90"),
            categorie=Categorie.RETRAITE,
            description="Financement de la retraite de base (déplafonnée)",
        ),
        DefinitionCotisation(
            identifiant="retraite_complementaire",
            nom="Retraite complémentaire",
            taux_salarial=Decimal("3.15"),
            taux_patronal=Decimal("4.72"),
            categorie=Categorie.RETRAITE,
            description="Financement de la retraite complémentaire",
        ),
        DefinitionCotisation(
            identifiant="ceg",
            nom="Contribution d'équilibre général",
            taux_salarial=Decimal("0.86"),
            taux_patronal=Decimal("1.29"),
            categorie=Categorie.RETRAITE,
            description="Contribution d'équilibre général",
        ),
        DefinitionCotisation(
            identifiant="chomage",
            nom="Assurance chômage",
            taux_salarial=Decimal("0"),
            taux_patronal=Decimal("4.05"),
            categorie=Categorie.CHOMAGE,
            description="Financement de l'assurance chômage",
        ),
        DefinitionCotisation(
            identifiant="ags",
            nom="AGS",
            taux_salarial=Decimal("0"),
            taux_patronal=Decimal("0.15"),
            categorie=Categorie.CHOMAGE,
            description="Assurance garantie des salaires",
        ),
        DefinitionCotisation(
            identifiant="famille",
            nom="Allocations familiales",
            taux_salarial=Decimal("0"),
            taux_patronal=Decimal("3.45"),
            categorie=Categorie.FAMILLE,
            description="Financement des allocations familiales",
        ),
        DefinitionCotisation(
            identifiant="csg_deductible",
            nom="CSG déductible",
            taux_salarial=Decimal("6.80"),
            taux_patronal=Decimal("0"),
            categorie=Categorie.AUTRES,
            description="Contribution sociale généralisée déductible",
        ),
        DefinitionCotisation(
            identifiant="csg_non_deductible",
            nom="CSG non déductible",
            taux_salarial=Decimal("2.40"),
            taux_patronal=Decimal("0"),
            categorie=Categorie.AUTRES,
            description="Contribution sociale généralisée non déductible",
        ),
        DefinitionCotisation(
            identifiant="crds",
            nom="CRDS",
            taux_salarial=Decimal("0.50"),
            taux_patronal=Decimal("0"),
            categorie=Categorie.AUTRES,
            description="Contribution au remboursement de la dette sociale",
        ),
        DefinitionCotisation(
            identifiant="maladie_alsace_moselle",
            nom="Assurance Maladie - Régime local Alsace-Moselle",
            taux_salarial=Decimal("1.50"),
            taux_patronal=Decimal("0"),
            categorie=Categorie.SANTE,
            actif=False,  # Seulement pour les etablissements d'Alsace-Moselle
            description="Supplément pour le régime local d'Alsace-Moselle",
        ),
    ),
    majorations=(
        # Taux plein maladie au-dela de 2,5 SMIC
        Majoration(
            categorie=Categorie.SANTE,
            multiple_smic=Decimal("2.5"),
            taux_salarial=Decimal("0.40"),
            taux_patronal=Decimal("13.00"),
        ),
        # Taux plein allocations familiales au-dela de 3,5 SMIC
        Majoration(
            categorie=Categorie.FAMILLE,
            multiple_smic=Decimal("3.5"),
            taux_patronal=Decimal("5.25"),
        ),
    ),
)

BAREME_2024 = deriver_bareme(
    BAREME_2023,
    2024,
    smic_mensuel=Decimal("1766.92"),
    surcharges={"vieillesse_plafonnee": {"plafond": Decimal("3867")}},  # PMSS 2024
)

# Prevision
BAREME_2025 = deriver_bareme(
    BAREME_2024,
    2025,
    smic_mensuel=Decimal("1800"),
    surcharges={"vieillesse_plafonnee": {"plafond": Decimal("3950")}},
)

# Registre multi-annee
TABLES: dict[int, BaremeAnnuel] = {
    b.annee: b for b in (BAREME_2023, BAREME_2024, BAREME_2025)
}


def obtenir_bareme(
    annee: int,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> BaremeAnnuel:
    """Retourne le bareme publie pour une annee.

    Si l'annee n'est pas publiee, retourne le bareme le plus recent
    (repli volontaire, pas une erreur).

    Raises:
        ErreurConfiguration: Si aucun bareme n'est publie.
    """
    tables = TABLES if tables is None else tables
    if annee in tables:
        return tables[annee]
    if not tables:
        raise ErreurConfiguration("Aucun bareme de cotisations publie")

    plus_recente = max(tables)
    logger.info(
        "Bareme %d non publie, repli sur le bareme %d", annee, plus_recente,
    )
    return tables[plus_recente]


def selectionner_table(
    annee: int,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> tuple[DefinitionCotisation, ...]:
    """Retourne les definitions de cotisations en vigueur pour une annee."""
    return obtenir_bareme(annee, tables).cotisations
