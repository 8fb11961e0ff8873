"""Regles de paie francaises: baremes de cotisations et calcul des bulletins."""
