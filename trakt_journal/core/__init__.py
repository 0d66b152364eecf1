"""
Couche domaine (core).

Contient les entites, ports (interfaces abstraites), objets valeur et exceptions.
Cette couche n'a AUCUNE dependance vers l'infrastructure (adapters, HTTP, fichiers).

Sous-packages :
- entities/ : Contrats des reponses Trakt et arbre normalise
- ports/ : Interfaces abstraites pour les adaptateurs
- value_objects/ : Cles composites et options de rendu
"""
