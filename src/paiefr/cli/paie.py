"""Commandes CLI pour le calcul des bulletins de paie.

Usage:
    pfr paie calculer --taux-horaire 20 --debut 2024-01-01
    pfr paie calculer --taux-horaire 20 --debut 2024-02-01 --precedent jan.yaml --sortie fev.yaml
    pfr paie conges fev.yaml 1.5
"""

from __future__ import annotations

import calendar
import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from paiefr.france.paie.moteur import (
    HEURES_MENSUELLES_STANDARD,
    BulletinPaie,
    EntreePeriode,
    Salarie,
    appliquer_conges_pris,
    calculer_periode,
)
from paiefr.france.paie.serialisation import ecrire_bulletin, lire_bulletin
from paiefr.france.taux import LIBELLES_CATEGORIES, ErreurConfiguration

app = typer.Typer(no_args_is_help=True)
console = Console()

DEUX_DECIMALES = Decimal("0.01")


def _arrondir(montant: Decimal) -> Decimal:
    """Arrondit au centime pres (ROUND_HALF_UP), pour l'affichage seulement."""
    return montant.quantize(DEUX_DECIMALES, rounding=ROUND_HALF_UP)


def _formater_montant(montant: Decimal) -> str:
    return f"{_arrondir(montant):,.2f}"


def _lire_decimal(valeur: str, nom: str) -> Decimal:
    try:
        montant = Decimal(valeur)
    except InvalidOperation:
        montant = None
    if montant is None or not montant.is_finite():
        console.print(f"[red]Erreur: {nom} invalide: {valeur}[/red]")
        raise typer.Exit(1)
    return montant


def _lire_date(valeur: str, nom: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(valeur)
    except ValueError:
        console.print(f"[red]Erreur: {nom} invalide (AAAA-MM-JJ attendu): {valeur}[/red]")
        raise typer.Exit(1)


def _fin_de_mois(date_debut: datetime.date) -> datetime.date:
    dernier_jour = calendar.monthrange(date_debut.year, date_debut.month)[1]
    return date_debut.replace(day=dernier_jour)


@app.command("calculer")
def calculer(
    taux_horaire: str = typer.Option(
        ..., "--taux-horaire", "-t", help="Taux horaire brut",
    ),
    debut: str = typer.Option(
        ..., "--debut", "-d", help="Debut de la periode (AAAA-MM-JJ)",
    ),
    heures: str = typer.Option(
        str(HEURES_MENSUELLES_STANDARD), "--heures",
        help="Heures travaillees sur la periode",
    ),
    fin: Optional[str] = typer.Option(
        None, "--fin", help="Fin de la periode (defaut: fin du mois)",
    ),
    paiement: Optional[str] = typer.Option(
        None, "--paiement", help="Date de paiement (defaut: fin de periode)",
    ),
    cadre: bool = typer.Option(False, "--cadre", help="Salarie cadre"),
    nom_salarie: str = typer.Option("", "--salarie", help="Nom du salarie"),
    precedent: Optional[Path] = typer.Option(
        None, "--precedent", help="Bulletin YAML de la periode precedente",
    ),
    conges_pris: Optional[str] = typer.Option(
        None, "--conges-pris", help="Jours de conges pris sur la periode",
    ),
    sortie: Optional[Path] = typer.Option(
        None, "--sortie", "-o", help="Ecrire le bulletin calcule dans ce fichier YAML",
    ),
) -> None:
    """Calculer le bulletin de paie d'une periode."""
    from paiefr.cli.app import get_tables

    date_debut = _lire_date(debut, "date de debut")
    date_fin = _lire_date(fin, "date de fin") if fin else _fin_de_mois(date_debut)
    date_paiement = _lire_date(paiement, "date de paiement") if paiement else date_fin

    entree = EntreePeriode(
        periode_debut=date_debut,
        periode_fin=date_fin,
        date_paiement=date_paiement,
        taux_horaire=_lire_decimal(taux_horaire, "taux horaire"),
        heures_travaillees=_lire_decimal(heures, "heures"),
        salarie=Salarie(nom=nom_salarie, cadre=cadre),
    )

    try:
        bulletin_precedent = lire_bulletin(precedent) if precedent else None
        bulletin = calculer_periode(entree, bulletin_precedent, get_tables())
        if conges_pris is not None:
            bulletin = appliquer_conges_pris(
                bulletin, _lire_decimal(conges_pris, "conges pris"),
            )
    except (ValueError, ErreurConfiguration, FileNotFoundError) as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    _afficher_bulletin(bulletin)

    if sortie is not None:
        ecrire_bulletin(sortie, bulletin)
        console.print(f"\n[green]Bulletin enregistre dans {sortie}[/green]")


@app.command("conges")
def conges(
    fichier: Path = typer.Argument(..., help="Bulletin YAML a mettre a jour"),
    jours: str = typer.Argument(..., help="Jours de conges pris"),
) -> None:
    """Enregistrer des jours de conges pris sur un bulletin existant."""
    try:
        bulletin = appliquer_conges_pris(
            lire_bulletin(fichier), _lire_decimal(jours, "jours"),
        )
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    ecrire_bulletin(fichier, bulletin)
    _afficher_conges(bulletin)


def _afficher_bulletin(bulletin: BulletinPaie) -> None:
    """Affiche la ventilation complete du bulletin avec Rich."""
    table = Table(
        title=(
            f"Bulletin du {bulletin.periode_debut} au {bulletin.periode_fin} "
            f"- Brut: {_formater_montant(bulletin.salaire_brut)} EUR"
        ),
        show_header=True,
        header_style="bold",
    )
    table.add_column("Cotisation", style="cyan")
    table.add_column("Base", justify="right")
    table.add_column("Taux sal.", justify="right")
    table.add_column("Part salariale", justify="right")
    table.add_column("Taux pat.", justify="right")
    table.add_column("Part patronale", justify="right")

    categorie = None
    for ligne in bulletin.cotisations.lignes:
        if ligne.definition.categorie != categorie:
            categorie = ligne.definition.categorie
            table.add_section()
            table.add_row(f"[bold]{LIBELLES_CATEGORIES[categorie]}[/bold]", "", "", "", "", "")
        table.add_row(
            f"  {ligne.definition.nom}",
            _formater_montant(ligne.base),
            f"{ligne.taux_salarial}%",
            _formater_montant(ligne.montant_salarial),
            f"{ligne.taux_patronal}%",
            _formater_montant(ligne.montant_patronal),
        )

    table.add_section()
    table.add_row(
        "[bold]Total cotisations[/bold]", "", "",
        f"[bold red]{_formater_montant(bulletin.cotisations.total_salarial)}[/bold red]",
        "",
        f"[bold]{_formater_montant(bulletin.cotisations.total_patronal)}[/bold]",
    )
    console.print(table)

    totaux = Table(show_header=False)
    totaux.add_column("Element", style="cyan")
    totaux.add_column("Montant", justify="right")
    totaux.add_row(
        "[bold green]Salaire net[/bold green]",
        f"[bold green]{_formater_montant(bulletin.salaire_net)}[/bold green]",
    )
    totaux.add_row("Cout employeur", _formater_montant(bulletin.cout_employeur))
    totaux.add_section()
    totaux.add_row(
        f"Cumul brut ({bulletin.cumul_debut} - {bulletin.cumul_fin})",
        _formater_montant(bulletin.cumul_brut),
    )
    totaux.add_row("Cumul net", _formater_montant(bulletin.cumul_net))
    console.print(totaux)

    _afficher_conges(bulletin)


def _afficher_conges(bulletin: BulletinPaie) -> None:
    table = Table(title="Conges payes (jours)", show_header=True)
    table.add_column("Acquis", justify="right")
    table.add_column("Pris", justify="right")
    table.add_column("Restant", justify="right")
    table.add_row(
        str(bulletin.conges.acquis),
        str(bulletin.conges.pris),
        str(bulletin.conges.restant),
    )
    console.print(table)
