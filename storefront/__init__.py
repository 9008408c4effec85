"""
Boutique de démonstration: catalogue statique, panier en mémoire et checkout simulé.
"""

__version__ = "1.0.0"
