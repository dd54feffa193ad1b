"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec les conventions de l'API.
"""

from fastapi.openapi.utils import get_openapi


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API du gestionnaire de projets (board Kanban + todos), FastAPI + SQLite.\n\n"
            "### Conventions\n"
            "- JSON en camelCase (`taskIds`, `columnId`, `activeProjectId`...).\n"
            "- Horodatages ISO-8601 UTC (`2025-01-01T10:00:00.000Z`).\n"
            "- Les opérations de board sur un id absent sont des no-op (réponse 200, projet inchangé).\n"
            "- `PUT /projects` remplace le projet entier : le dernier écrivain gagne.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
