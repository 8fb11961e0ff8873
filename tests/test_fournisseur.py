"""Tests pour le chargement des baremes depuis YAML (fournisseur.py)."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from paiefr.france.fournisseur import charger_baremes
from paiefr.france.paie.cotisations import calculer_cotisations
from paiefr.france.taux import TABLES, Categorie, ErreurConfiguration

BAREMES_PATH = Path(__file__).parent.parent / "rules" / "baremes.yaml"

BAREME_MINIMAL = """\
baremes:
  - annee: 2024
    smic_mensuel: "1766.92"
    majorations:
      - categorie: sante
        multiple_smic: "2.5"
        taux_patronal: "13"
    cotisations:
      - identifiant: maladie
        nom: Assurance Maladie
        taux_salarial: "0"
        taux_patronal: "7"
        categorie: sante
      - identifiant: vieillesse
        nom: Retraite de base
        taux_salarial: "6.90"
        taux_patronal: "8.55"
        categorie: retraite
        type_assiette: plafonne
        plafond: "3867"
"""


def _ecrire(tmp_path: Path, contenu: str) -> Path:
    chemin = tmp_path / "baremes.yaml"
    chemin.write_text(contenu, encoding="utf-8")
    return chemin


class TestChargerBaremes:
    """Chargement du fichier livre et de fichiers personnalises."""

    def test_fichier_livre_identique_aux_baremes_integres(self) -> None:
        tables = charger_baremes(BAREMES_PATH)
        assert sorted(tables) == sorted(TABLES)
        for annee, bareme in TABLES.items():
            assert tables[annee] == bareme

    def test_bareme_minimal(self, tmp_path) -> None:
        tables = charger_baremes(_ecrire(tmp_path, BAREME_MINIMAL))
        bareme = tables[2024]
        assert [c.identifiant for c in bareme.cotisations] == ["maladie", "vieillesse"]
        assert bareme.cotisations[1].plafond == Decimal("3867")
        assert bareme.majoration(Categorie.SANTE).taux_salarial is None

    def test_baremes_charges_utilisables_par_le_moteur(self, tmp_path) -> None:
        tables = charger_baremes(_ecrire(tmp_path, BAREME_MINIMAL))
        resultat = calculer_cotisations(Decimal("5000"), 2024, tables=tables)
        maladie, vieillesse = resultat.lignes
        assert maladie.taux_patronal == Decimal("13")
        assert maladie.taux_salarial == Decimal("0")
        assert vieillesse.base == Decimal("3867")

    def test_derivation_avec_surcharges(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL + """\
  - annee: 2025
    derive_de: 2024
    surcharges:
      maladie:
        taux_patronal: "7.30"
"""
        tables = charger_baremes(_ecrire(tmp_path, contenu))
        assert tables[2025].smic_mensuel == Decimal("1766.92")
        assert tables[2025].cotisations[0].taux_patronal == Decimal("7.30")
        assert tables[2024].cotisations[0].taux_patronal == Decimal("7")

    def test_fichier_vide(self, tmp_path) -> None:
        assert charger_baremes(_ecrire(tmp_path, "")) == {}

    def test_fichier_introuvable(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            charger_baremes(tmp_path / "absent.yaml")

    def test_chargement_journalise(self, tmp_path, caplog) -> None:
        with caplog.at_level("INFO", logger="paiefr.france.fournisseur"):
            charger_baremes(_ecrire(tmp_path, BAREME_MINIMAL))
        assert "Baremes charges" in caplog.text


class TestBaremesInvalides:
    """Les erreurs de configuration sont detectees au chargement."""

    def test_yaml_illisible(self, tmp_path) -> None:
        with pytest.raises(ErreurConfiguration, match="illisible"):
            charger_baremes(_ecrire(tmp_path, "baremes: [annee: 2024\n"))

    def test_cotisation_plafonnee_sans_plafond(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL.replace('        plafond: "3867"\n', "")
        with pytest.raises(ErreurConfiguration, match="sans plafond"):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_taux_negatif(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL.replace('taux_patronal: "7"', 'taux_patronal: "-7"')
        with pytest.raises(ErreurConfiguration, match="invalide"):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_categorie_inconnue(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL.replace("categorie: retraite", "categorie: pension")
        with pytest.raises(ErreurConfiguration):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_bareme_ni_complet_ni_derive(self, tmp_path) -> None:
        contenu = "baremes:\n  - annee: 2024\n    smic_mensuel: \"1766.92\"\n"
        with pytest.raises(ErreurConfiguration, match="requis"):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_reference_inconnue(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL + "  - annee: 2025\n    derive_de: 2020\n"
        with pytest.raises(ErreurConfiguration, match="2020"):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_surcharge_cotisation_inconnue(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL + """\
  - annee: 2025
    derive_de: 2024
    surcharges:
      inexistante:
        actif: false
"""
        with pytest.raises(ErreurConfiguration, match="inexistante"):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_annee_en_double(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL + "  - annee: 2024\n    derive_de: 2024\n"
        with pytest.raises(ErreurConfiguration, match="deux fois"):
            charger_baremes(_ecrire(tmp_path, contenu))

    def test_passage_en_assiette_plafonnee_sans_plafond(self, tmp_path) -> None:
        contenu = BAREME_MINIMAL + """\
  - annee: 2025
    derive_de: 2024
    surcharges:
      maladie:
        type_assiette: plafonne
"""
        with pytest.raises(ErreurConfiguration, match="maladie"):
            charger_baremes(_ecrire(tmp_path, contenu))
