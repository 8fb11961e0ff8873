"""Tests pour le module des baremes annuels (taux.py)."""

from decimal import Decimal

import pytest

from paiefr.france.taux import (
    BAREME_2023,
    TABLES,
    BaremeAnnuel,
    Categorie,
    ErreurConfiguration,
    TypeAssiette,
    deriver_bareme,
    obtenir_bareme,
    selectionner_table,
)


def _definition(table, identifiant):
    return next(c for c in table if c.identifiant == identifiant)


class TestSelectionnerTable:
    """Tests pour la selection du bareme d'une annee."""

    def test_annees_publiees(self) -> None:
        assert sorted(TABLES) == [2023, 2024, 2025]

    def test_selectionner_table_2024(self) -> None:
        table = selectionner_table(2024)
        assert table is TABLES[2024].cotisations
        assert table[0].identifiant == "maladie"

    def test_annee_future_repli_sur_plus_recente(self) -> None:
        assert obtenir_bareme(2031).annee == 2025
        assert selectionner_table(2031) == TABLES[2025].cotisations

    def test_annee_ancienne_repli_sur_plus_recente(self) -> None:
        assert obtenir_bareme(2019).annee == 2025

    def test_tables_fournies_par_l_appelant(self) -> None:
        tables = {2023: BAREME_2023}
        assert obtenir_bareme(2024, tables) is BAREME_2023

    def test_aucune_table_publiee_leve_erreur(self) -> None:
        with pytest.raises(ErreurConfiguration):
            obtenir_bareme(2024, {})

    def test_repli_journalise(self, caplog) -> None:
        with caplog.at_level("INFO", logger="paiefr.france.taux"):
            obtenir_bareme(2031)
        assert "repli sur le bareme 2025" in caplog.text


class TestBaremesPublies:
    """Valeurs des baremes materialises."""

    @pytest.mark.parametrize(
        "annee, plafond, smic",
        [
            (2023, Decimal("3666"), Decimal("1747.20")),
            (2024, Decimal("3867"), Decimal("1766.92")),
            (2025, Decimal("3950"), Decimal("1800")),
        ],
    )
    def test_plafond_et_smic(self, annee, plafond, smic) -> None:
        bareme = TABLES[annee]
        assert bareme.smic_mensuel == smic
        vieillesse = _definition(bareme.cotisations, "vieillesse_plafonnee")
        assert vieillesse.type_assiette is TypeAssiette.PLAFONNE
        assert vieillesse.plafond == plafond

    def test_ordre_identique_d_une_annee_a_l_autre(self) -> None:
        ordre_2023 = [c.identifiant for c in TABLES[2023].cotisations]
        ordre_2025 = [c.identifiant for c in TABLES[2025].cotisations]
        assert ordre_2023 == ordre_2025

    def test_definitions_non_modifiees_partagees(self) -> None:
        """Les cotisations sans surcharge sont reprises telles quelles."""
        assert _definition(TABLES[2024].cotisations, "csg_deductible") is _definition(
            TABLES[2023].cotisations, "csg_deductible"
        )

    def test_majorations_sante_et_famille(self) -> None:
        bareme = TABLES[2024]
        sante = bareme.majoration(Categorie.SANTE)
        famille = bareme.majoration(Categorie.FAMILLE)
        assert sante.multiple_smic == Decimal("2.5")
        assert sante.seuil(bareme.smic_mensuel) == Decimal("4417.30")
        assert famille.multiple_smic == Decimal("3.5")
        assert famille.taux_salarial is None
        assert famille.taux_patronal == Decimal("5.25")
        assert bareme.majoration(Categorie.RETRAITE) is None

    def test_par_categorie(self) -> None:
        retraite = TABLES[2024].par_categorie(Categorie.RETRAITE)
        assert [c.identifiant for c in retraite] == [
            "vieillesse_plafonnee",
            "vieillesse_deplafonnee",
            "retraite_complementaire",
            "ceg",
        ]

    def test_regime_alsace_moselle_inactif(self) -> None:
        assert not _definition(TABLES[2024].cotisations, "maladie_alsace_moselle").actif


class TestDeriverBareme:
    """Derivation d'une annee a partir de la precedente."""

    def test_surcharge_d_un_taux(self) -> None:
        bareme = deriver_bareme(
            BAREME_2023, 2026, surcharges={"ags": {"taux_patronal": Decimal("0.25")}},
        )
        assert bareme.annee == 2026
        assert _definition(bareme.cotisations, "ags").taux_patronal == Decimal("0.25")
        # Le bareme source n'est pas modifie
        assert _definition(BAREME_2023.cotisations, "ags").taux_patronal == Decimal("0.15")

    def test_smic_et_majorations_herites(self) -> None:
        bareme = deriver_bareme(BAREME_2023, 2026)
        assert bareme.smic_mensuel == BAREME_2023.smic_mensuel
        assert bareme.majorations == BAREME_2023.majorations
        assert isinstance(bareme, BaremeAnnuel)

    def test_surcharge_cotisation_inconnue_leve_erreur(self) -> None:
        with pytest.raises(ErreurConfiguration, match="inconnues"):
            deriver_bareme(BAREME_2023, 2026, surcharges={"inexistante": {"actif": False}})
