"""Tests pour l'export/import YAML des bulletins (serialisation.py)."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest
import yaml

from paiefr.france.paie.moteur import (
    EntreePeriode,
    Salarie,
    appliquer_conges_pris,
    calculer_periode,
)
from paiefr.france.paie.serialisation import (
    bulletin_depuis_dict,
    bulletin_vers_dict,
    ecrire_bulletin,
    lire_bulletin,
)


@pytest.fixture
def bulletin():
    entree = EntreePeriode(
        periode_debut=datetime.date(2024, 1, 1),
        periode_fin=datetime.date(2024, 1, 31),
        date_paiement=datetime.date(2024, 1, 31),
        taux_horaire=Decimal("20"),
        heures_travaillees=Decimal("151.67"),
        salarie=Salarie(nom="Jeanne Martin", cadre=True),
    )
    return appliquer_conges_pris(calculer_periode(entree), Decimal("1.5"))


class TestSerialisation:

    def test_montants_ecrits_en_chaines_exactes(self, bulletin) -> None:
        donnees = bulletin_vers_dict(bulletin)
        assert donnees["salaire_brut"] == "3033.40"
        assert donnees["salaire_net"] == "2396.08266"
        assert donnees["periode_debut"] == "2024-01-01"
        assert donnees["cotisations"]["lignes"][0]["definition"]["categorie"] == "sante"

    def test_aller_retour_dict(self, bulletin) -> None:
        assert bulletin_depuis_dict(bulletin_vers_dict(bulletin)) == bulletin

    def test_aller_retour_fichier(self, tmp_path, bulletin) -> None:
        chemin = tmp_path / "paie" / "2024-01.yaml"
        ecrire_bulletin(chemin, bulletin)
        relu = lire_bulletin(chemin)
        assert relu == bulletin
        assert relu.conges.pris == Decimal("1.5")

    def test_chainage_depuis_bulletin_relu(self, tmp_path, bulletin) -> None:
        chemin = tmp_path / "2024-01.yaml"
        ecrire_bulletin(chemin, bulletin)
        entree = EntreePeriode(
            periode_debut=datetime.date(2024, 2, 1),
            periode_fin=datetime.date(2024, 2, 29),
            date_paiement=datetime.date(2024, 2, 29),
            taux_horaire=Decimal("20"),
            heures_travaillees=Decimal("151.67"),
        )
        fevrier = calculer_periode(entree, lire_bulletin(chemin))
        assert fevrier.cumul_brut == Decimal("6066.80")
        assert fevrier.conges.acquis == Decimal("5.0")
        assert fevrier.conges.restant == Decimal("3.5")

    def test_fichier_introuvable(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            lire_bulletin(tmp_path / "absent.yaml")

    def test_contenu_non_mapping(self, tmp_path) -> None:
        chemin = tmp_path / "liste.yaml"
        chemin.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="invalide"):
            lire_bulletin(chemin)

    def test_champ_manquant(self, tmp_path, bulletin) -> None:
        donnees = bulletin_vers_dict(bulletin)
        del donnees["salaire_brut"]
        chemin = tmp_path / "incomplet.yaml"
        chemin.write_text(yaml.safe_dump(donnees), encoding="utf-8")
        with pytest.raises(ValueError, match="invalide"):
            lire_bulletin(chemin)
