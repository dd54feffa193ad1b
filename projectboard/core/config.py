"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, chemin DB, logs, CORS...).

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from projectboard.core.config import settings
print(settings.APP_NAME)

Les tests construisent leur propre Settings(...) et le passent à create_app().
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "ProjectBoard"
    ENV: str = "dev"  # dev | prod | test
    API_PREFIX: str = "/api/v1"

    HOST: str = "127.0.0.1"
    PORT: int = 8080

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "data/projects.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: "sqlite://" en mémoire), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    DB_ECHO: Optional[bool] = None  # auto selon ENV si None

    # -----------------------------
    # HTTP
    # -----------------------------
    CORS_ORIGINS: List[str] = ["*"]  # en prod, mettre l'URL du front

    # -----------------------------
    # Logs
    # -----------------------------
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context):  # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # echo SQL seulement en dev pour ne pas polluer les logs en prod
        if self.DB_ECHO is None:
            object.__setattr__(self, "DB_ECHO", self.ENV == "dev")


# Instance globale importable partout
settings = Settings()
