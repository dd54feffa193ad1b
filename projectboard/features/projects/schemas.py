"""
➡️ But : Définir les formats d'entrée/sortie de la surface "projet entier" de l'API.

Les corps POST/PUT /projects sont des Project complets (voir domain.models).
Ici : les petits corps annexes et les réponses { success: true, ... }.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from projectboard.domain.models import Project


class _CamelIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActiveProjectIn(_CamelIn):
    active_project_id: Optional[str] = Field(None, examples=["2f1c6a0e-3b7e-4d0b-9d55-4a8f8b4f2c11"])


class ProjectDeleteIn(_CamelIn):
    project_id: str = Field(..., min_length=1)


class ProjectNewIn(BaseModel):
    name: str = Field(..., min_length=1, examples=["Site vitrine"])
    description: str = Field("", examples=["Refonte du site"])


class SuccessOut(BaseModel):
    success: bool = True


class ImportOut(SuccessOut):
    message: str = "Data imported successfully"


class ProjectCreatedOut(SuccessOut):
    project: Project
