"""
Couche services applicatifs (cas d'usage).

Les services orchestrent la logique du domaine : normalisation des chemins,
scan du dossier racine, calcul du diff disque / catalogue et application
des synchronisations.

Les services dependent des ports (interfaces) de core/, jamais des
implementations concretes de adapters/.
"""
