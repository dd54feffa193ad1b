"""
Erreurs métier partagées par le domaine, le store et les routers.

Les routers les traduisent en HTTPException :
- NotFoundError     -> 404
- InvalidInputError -> 400
- StorageError      -> 500 (message court, le détail part dans les logs)
"""


class NotFoundError(LookupError):
    """Un id de projet / colonne / tâche référencé n'existe pas."""


class InvalidInputError(ValueError):
    """Payload mal formé (contrôle de forme uniquement)."""


class StorageError(RuntimeError):
    """Échec de transaction ou d'I/O sur la base."""
