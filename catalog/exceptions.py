class PopulateError(Exception):
    """Erreur de base du remplissage du catalogue."""


class DetailPageError(PopulateError):
    """La page détail de la vitrine ne contient pas le bloc attendu."""


class UploadError(PopulateError):
    """Le endpoint d'upload a refusé le fichier."""
