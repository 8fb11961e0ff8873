"""Export et import d'un BulletinPaie en YAML.

Sert a rendre le bulletin precedent au moteur pour chainer les cumuls et
les conges. Les Decimal sont ecrits en chaines pour rester exacts.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from paiefr.france.paie.moteur import BulletinPaie

_ADAPTATEUR = TypeAdapter(BulletinPaie)


def bulletin_vers_dict(bulletin: BulletinPaie) -> dict:
    """Convertit un bulletin en dict compatible JSON/YAML."""
    return _ADAPTATEUR.dump_python(bulletin, mode="json")


def bulletin_depuis_dict(donnees: dict) -> BulletinPaie:
    """Reconstruit un bulletin depuis un dict.

    Raises:
        ValueError: Si les donnees ne respectent pas le format d'un bulletin.
    """
    try:
        return _ADAPTATEUR.validate_python(donnees)
    except ValidationError as e:
        raise ValueError(f"Bulletin de paie invalide: {e}") from e


def ecrire_bulletin(chemin: Path, bulletin: BulletinPaie) -> None:
    """Ecrit un bulletin dans un fichier YAML."""
    chemin.parent.mkdir(parents=True, exist_ok=True)
    with open(chemin, "w", encoding="utf-8") as f:
        yaml.dump(
            bulletin_vers_dict(bulletin), f,
            default_flow_style=False, allow_unicode=True, sort_keys=False,
        )


def lire_bulletin(chemin: Path) -> BulletinPaie:
    """Lit un bulletin depuis un fichier YAML.

    Raises:
        FileNotFoundError: Si le fichier n'existe pas.
        ValueError: Si le contenu est invalide.
    """
    if not chemin.exists():
        raise FileNotFoundError(f"Bulletin introuvable: {chemin}")

    with open(chemin, encoding="utf-8") as f:
        donnees = yaml.safe_load(f)
    if not isinstance(donnees, dict):
        raise ValueError(f"Bulletin de paie invalide ({chemin})")
    return bulletin_depuis_dict(donnees)
