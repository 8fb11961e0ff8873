"""PaieFR - Moteur de calcul de bulletins de paie (France)."""

__version__ = "0.1.0"
