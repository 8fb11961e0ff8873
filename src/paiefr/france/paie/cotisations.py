"""Calcul des cotisations sociales salariales et patronales.

Fonctions pures: aucun effet de bord, Decimal en entree et en sortie.
Aucun arrondi intermediaire; l'arrondi au centime se fait a l'affichage.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from paiefr.france.taux import (
    BaremeAnnuel,
    Categorie,
    DefinitionCotisation,
    ErreurConfiguration,
    TypeAssiette,
    obtenir_bareme,
)

CENT = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class LigneCotisation:
    """Montants d'une cotisation pour un salaire brut."""

    definition: DefinitionCotisation
    base: Decimal
    taux_salarial: Decimal  # Taux effectifs (apres majoration)
    taux_patronal: Decimal
    montant_salarial: Decimal
    montant_patronal: Decimal


@dataclass(frozen=True)
class ResultatCotisations:
    """Ventilation complete des cotisations pour un salaire brut."""

    annee: int  # Annee du bareme effectivement applique
    lignes: tuple[LigneCotisation, ...]
    total_salarial: Decimal
    total_patronal: Decimal

    def totaux_par_categorie(self) -> dict[Categorie, tuple[Decimal, Decimal]]:
        """Sous-totaux (salarial, patronal) par categorie, dans l'ordre du bareme."""
        totaux: dict[Categorie, tuple[Decimal, Decimal]] = {}
        for ligne in self.lignes:
            salarial, patronal = totaux.get(ligne.definition.categorie, (ZERO, ZERO))
            totaux[ligne.definition.categorie] = (
                salarial + ligne.montant_salarial,
                patronal + ligne.montant_patronal,
            )
        return totaux


def en_decimal(valeur: Decimal | int | float | str) -> Decimal:
    """Convertit un montant en Decimal (les float passent par str).

    Raises:
        ValueError: Si la valeur n'est pas un nombre fini.
    """
    if isinstance(valeur, Decimal):
        resultat = valeur
    else:
        try:
            resultat = Decimal(str(valeur) if isinstance(valeur, float) else valeur)
        except InvalidOperation as e:
            raise ValueError(f"Montant invalide: {valeur!r}") from e
    if not resultat.is_finite():
        raise ValueError(f"Montant non fini: {valeur!r}")
    return resultat


def calculer_assiette(definition: DefinitionCotisation, brut: Decimal) -> Decimal:
    """Determine la base de calcul d'une cotisation.

    Raises:
        ErreurConfiguration: Si une cotisation plafonnee n'a pas de plafond.
    """
    if definition.type_assiette is TypeAssiette.PLAFONNE:
        if definition.plafond is None:
            raise ErreurConfiguration(
                f"Cotisation plafonnee sans plafond: {definition.identifiant}"
            )
        return min(brut, definition.plafond)
    return brut


def taux_effectifs(
    definition: DefinitionCotisation,
    brut: Decimal,
    bareme: BaremeAnnuel,
) -> tuple[Decimal, Decimal]:
    """Retourne les taux (salarial, patronal) applicables a ce brut.

    La majoration s'applique par categorie, strictement au-dessus du seuil.
    """
    taux_salarial = definition.taux_salarial
    taux_patronal = definition.taux_patronal

    majoration = bareme.majoration(definition.categorie)
    if majoration is not None and brut > majoration.seuil(bareme.smic_mensuel):
        if majoration.taux_salarial is not None:
            taux_salarial = majoration.taux_salarial
        if majoration.taux_patronal is not None:
            taux_patronal = majoration.taux_patronal

    return taux_salarial, taux_patronal


def calculer_cotisations(
    brut: Decimal | int | float | str,
    annee: int,
    cadre: bool = False,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> ResultatCotisations:
    """Applique le bareme de l'annee a un salaire brut.

    Args:
        brut: Salaire brut de la periode.
        annee: Annee fiscale (repli sur le bareme le plus recent si absente).
        cadre: Statut cadre. Reserve; ne modifie pas les taux actuellement.
        tables: Baremes fournis par l'appelant (defaut: baremes integres).

    Returns:
        ResultatCotisations avec une ligne par cotisation active, dans l'ordre
        du bareme.

    Raises:
        ValueError: Si le brut est negatif.
        ErreurConfiguration: Si le bareme est mal forme.
    """
    brut = en_decimal(brut)
    if brut < 0:
        raise ValueError(f"Salaire brut negatif: {brut}")

    bareme = obtenir_bareme(annee, tables)

    lignes: list[LigneCotisation] = []
    total_salarial = ZERO
    total_patronal = ZERO

    for definition in bareme.cotisations:
        if not definition.actif:
            continue

        base = calculer_assiette(definition, brut)
        taux_salarial, taux_patronal = taux_effectifs(definition, brut, bareme)

        montant_salarial = base * taux_salarial / CENT
        montant_patronal = base * taux_patronal / CENT

        total_salarial += montant_salarial
        total_patronal += montant_patronal

        lignes.append(
            LigneCotisation(
                definition=definition,
                base=base,
                taux_salarial=taux_salarial,
                taux_patronal=taux_patronal,
                montant_salarial=montant_salarial,
                montant_patronal=montant_patronal,
            )
        )

    return ResultatCotisations(
        annee=bareme.annee,
        lignes=tuple(lignes),
        total_salarial=total_salarial,
        total_patronal=total_patronal,
    )


def calculer_salaire_net(
    brut: Decimal | int | float | str,
    annee: int,
    cadre: bool = False,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> Decimal:
    """Salaire net = brut - cotisations salariales."""
    brut = en_decimal(brut)
    return brut - calculer_cotisations(brut, annee, cadre, tables).total_salarial


def calculer_cout_employeur(
    brut: Decimal | int | float | str,
    annee: int,
    cadre: bool = False,
    tables: Mapping[int, BaremeAnnuel] | None = None,
) -> Decimal:
    """Cout employeur = brut + cotisations patronales."""
    brut = en_decimal(brut)
    return brut + calculer_cotisations(brut, annee, cadre, tables).total_patronal
