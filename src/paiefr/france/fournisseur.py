"""Chargement des baremes de cotisations depuis un fichier YAML.

Le fichier liste les baremes par annee. Une annee peut etre complete
(`cotisations`) ou derivee d'une annee deja chargee (`derive_de` +
`surcharges`). Tout est materialise au chargement: le dictionnaire retourne
ne contient que des baremes complets.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from paiefr.france.taux import (
    BaremeAnnuel,
    Categorie,
    DefinitionCotisation,
    ErreurConfiguration,
    Majoration,
    TypeAssiette,
    deriver_bareme,
)

logger = logging.getLogger(__name__)


class ModeleCotisation(BaseModel):
    """Definition d'une cotisation dans le fichier de baremes."""

    identifiant: str
    nom: str
    taux_salarial: Decimal = Field(ge=0, description="Taux salarial (%)")
    taux_patronal: Decimal = Field(ge=0, description="Taux patronal (%)")
    categorie: Categorie
    type_assiette: TypeAssiette = TypeAssiette.TOTAL_BRUT
    plafond: Decimal | None = Field(default=None, gt=0)
    actif: bool = True
    description: str = ""

    @model_validator(mode="after")
    def _plafond_obligatoire(self) -> ModeleCotisation:
        if self.type_assiette is TypeAssiette.PLAFONNE and self.plafond is None:
            raise ValueError(f"Cotisation plafonnee sans plafond: {self.identifiant}")
        return self

    def vers_definition(self) -> DefinitionCotisation:
        return DefinitionCotisation(**self.model_dump())


class SurchargeCotisation(BaseModel):
    """Champs modifies d'une cotisation par rapport a l'annee de reference."""

    nom: str | None = None
    taux_salarial: Decimal | None = Field(default=None, ge=0)
    taux_patronal: Decimal | None = Field(default=None, ge=0)
    type_assiette: TypeAssiette | None = None
    plafond: Decimal | None = Field(default=None, gt=0)
    actif: bool | None = None
    description: str | None = None


class ModeleMajoration(BaseModel):
    """Taux majores d'une categorie au-dela d'un multiple du SMIC."""

    categorie: Categorie
    multiple_smic: Decimal = Field(gt=0)
    taux_salarial: Decimal | None = Field(default=None, ge=0)
    taux_patronal: Decimal | None = Field(default=None, ge=0)

    def vers_majoration(self) -> Majoration:
        return Majoration(**self.model_dump())


class ModeleBareme(BaseModel):
    """Un bareme annuel, complet ou derive."""

    annee: int
    smic_mensuel: Decimal | None = Field(default=None, gt=0)
    derive_de: int | None = None
    cotisations: list[ModeleCotisation] | None = None
    surcharges: dict[str, SurchargeCotisation] = Field(default_factory=dict)
    majorations: list[ModeleMajoration] | None = None

    @model_validator(mode="after")
    def _complet_ou_derive(self) -> ModeleBareme:
        if self.derive_de is None:
            if self.cotisations is None or self.smic_mensuel is None:
                raise ValueError(
                    f"Bareme {self.annee}: 'cotisations' et 'smic_mensuel' requis "
                    "sans 'derive_de'"
                )
            if self.surcharges:
                raise ValueError(f"Bareme {self.annee}: 'surcharges' requiert 'derive_de'")
        elif self.cotisations is not None:
            raise ValueError(
                f"Bareme {self.annee}: 'cotisations' et 'derive_de' sont exclusifs"
            )
        return self


class ConfigBaremes(BaseModel):
    """Contenu complet d'un fichier de baremes."""

    baremes: list[ModeleBareme] = Field(default_factory=list)


def materialiser(config: ConfigBaremes) -> dict[int, BaremeAnnuel]:
    """Construit les baremes complets, dans l'ordre du fichier.

    Raises:
        ErreurConfiguration: Annee en double, reference inconnue, ou bareme
            derive mal forme.
    """
    tables: dict[int, BaremeAnnuel] = {}

    for modele in config.baremes:
        if modele.annee in tables:
            raise ErreurConfiguration(f"Bareme {modele.annee} defini deux fois")

        majorations = (
            tuple(m.vers_majoration() for m in modele.majorations)
            if modele.majorations is not None
            else None
        )

        if modele.derive_de is None:
            bareme = BaremeAnnuel(
                annee=modele.annee,
                smic_mensuel=modele.smic_mensuel,
                cotisations=tuple(c.vers_definition() for c in modele.cotisations),
                majorations=majorations or (),
            )
        else:
            if modele.derive_de not in tables:
                raise ErreurConfiguration(
                    f"Bareme {modele.annee}: annee de reference {modele.derive_de} "
                    "absente ou definie plus loin dans le fichier"
                )
            surcharges = {
                identifiant: s.model_dump(exclude_none=True)
                for identifiant, s in modele.surcharges.items()
            }
            bareme = deriver_bareme(
                tables[modele.derive_de],
                modele.annee,
                smic_mensuel=modele.smic_mensuel,
                surcharges=surcharges,
                majorations=majorations,
            )

        for definition in bareme.cotisations:
            if definition.type_assiette is TypeAssiette.PLAFONNE and definition.plafond is None:
                raise ErreurConfiguration(
                    f"Bareme {bareme.annee}: cotisation plafonnee sans plafond: "
                    f"{definition.identifiant}"
                )

        tables[bareme.annee] = bareme

    return tables


def charger_baremes(chemin: Path) -> dict[int, BaremeAnnuel]:
    """Charge et materialise les baremes depuis un fichier YAML.

    Args:
        chemin: Chemin du fichier YAML.

    Returns:
        {annee: BaremeAnnuel}, pret a etre passe au moteur.

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ErreurConfiguration: Si le YAML est invalide ou ne respecte pas le schema.
    """
    if not chemin.exists():
        raise FileNotFoundError(f"Fichier de baremes introuvable: {chemin}")

    contenu = chemin.read_text(encoding="utf-8")
    try:
        donnees = yaml.safe_load(contenu)
    except yaml.YAMLError as e:
        raise ErreurConfiguration(f"Fichier de baremes illisible ({chemin}): {e}") from e

    if donnees is None:
        return {}

    try:
        config = ConfigBaremes.model_validate(donnees)
    except ValidationError as e:
        raise ErreurConfiguration(f"Fichier de baremes invalide ({chemin}): {e}") from e

    tables = materialiser(config)
    logger.info("Baremes charges depuis %s: %s", chemin, sorted(tables))
    return tables
