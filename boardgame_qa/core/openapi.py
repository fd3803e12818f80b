"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec
les conventions de l'API (format des erreurs, heures en UTC).
"""

from fastapi.openapi.utils import get_openapi


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Assistant de règles de jeux de société : CRUD des jeux, questions posées à l'IA "
            "et historique des réponses.\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Toute erreur renvoie `{\"error\": <code>, \"message\": <texte>}`.\n"
            "- Historique : query param `limit` (50 par défaut).\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
