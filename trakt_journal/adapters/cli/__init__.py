"""
Package CLI (Typer + Rich).

Expose la console Rich partagee par toutes les commandes.
"""

from rich.console import Console

# Console globale pour tous les affichages
console = Console()

__all__ = ["console"]
