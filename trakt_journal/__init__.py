"""
Trakt Journal - Synchronisation de l'historique Trakt vers une note Markdown.

Ce package recupere l'historique de visionnage et les notes d'un compte Trakt,
les reconcilie dans un arbre normalise (serie -> saison -> episode, films)
puis le rend dans un fichier de notes avec des liens vers les notes journalieres.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (reconciliation, rendu, orchestration)
- adapters/ : Couche infrastructure (CLI, clients API, fichiers)
"""

__version__ = "0.1.0"
