"""Pydantic schemas for the marketplace REST payloads.

These schemas act as contracts at ingress points so we fail fast when
server payloads change shape. Wire names are camelCase; attributes are
snake_case. All models are frozen: the client only ever holds read-through
copies of server state.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Company(WireModel):
    id: int
    name: str = ""


class WorkflowStage(WireModel):
    id: int
    company_id: int
    name: str
    position: int
    color: str = "#6366f1"
    is_default: bool = False


class Application(WireModel):
    id: int
    campaign_id: int
    creator_id: int
    status: Literal["pending", "accepted", "rejected"] = "pending"
    workflow_status: Optional[str] = None
    creator_workflow_status: Optional[str] = None
    message: Optional[str] = None
    applied_at: Optional[datetime] = None

    @property
    def is_accepted(self) -> bool:
        return self.status == "accepted"


class Campaign(WireModel):
    id: int
    title: str
    status: str = "active"


class Creator(WireModel):
    id: int
    name: str
    email: str = ""
    avatar: Optional[str] = None
    instagram: Optional[str] = None

    @property
    def initials(self) -> str:
        """Avatar fallback text: first letter of up to two name words."""
        return "".join(word[0] for word in self.name.split())[:2].upper()


class Deliverable(WireModel):
    id: int
    application_id: int
    file_name: str = Field(
        default="",
        validation_alias=AliasChoices("fileName", "title", "file_name"),
    )
    file_url: str = ""
    file_type: Optional[str] = None
    deliverable_type: str = "other"
    description: Optional[str] = None
    uploaded_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("uploadedAt", "createdAt", "uploaded_at"),
    )

    @property
    def kind(self) -> str:
        file_type = self.file_type or ""
        if "image" in file_type:
            return "image"
        if "video" in file_type:
            return "video"
        return "file"


class Message(WireModel):
    id: int
    application_id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool = False
    created_at: Optional[datetime] = None


class CreatorStats(WireModel):
    id: int
    campaign_id: int
    creator_id: int
    points: int = 0
    rank: Optional[int] = None
    deliverables_completed: int = 0
    deliverables_on_time: int = 0
    total_views: int = 0
    total_engagement: int = 0
    total_sales: int = 0
    quality_score: Optional[float] = None


class MetricsUpdate(WireModel):
    views: Optional[int] = Field(default=None, ge=0)
    engagement: Optional[int] = Field(default=None, ge=0)
    sales: Optional[int] = Field(default=None, ge=0)
    quality_score: Optional[float] = Field(default=None, ge=0, le=5)

    def is_empty(self) -> bool:
        return not self.to_payload()

    def to_payload(self) -> Dict[str, float]:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class Card:
    """Display-ready join of an accepted application with its campaign and creator.

    Derived on every refresh; never persisted or mutated.
    """

    application: Application
    campaign: Campaign
    creator: Creator

    @property
    def id(self) -> int:
        return self.application.id


# Fixed creator-side production stages (not company-configurable)
CREATOR_WORKFLOW_STAGES: List[str] = [
    "aceito",
    "contrato",
    "aguardando_produto",
    "producao",
    "revisao",
    "entregue",
]

CREATOR_STATUS_LABELS: Dict[str, Dict[str, str]] = {
    "aceito": {"label": "Aceito", "color": "#22c55e"},
    "contrato": {"label": "Contrato", "color": "#f59e0b"},
    "aguardando_produto": {"label": "Aguardando Produto", "color": "#6366f1"},
    "producao": {"label": "Produção", "color": "#ec4899"},
    "revisao": {"label": "Revisão", "color": "#06b6d4"},
    "entregue": {"label": "Entregue", "color": "#14b8a6"},
}
