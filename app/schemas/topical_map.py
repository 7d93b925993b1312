# app/schemas/topical_map.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class KeywordRecord(BaseModel):
    """One keyword with the metrics reported by a keyword-data source.

    Identity is the lowercased keyword text; display keeps the original case.
    Missing metrics fall back to 0 (volume, difficulty) and 0.5 (connection strength).
    """

    model_config = ConfigDict(frozen=True)

    keyword: str = Field(min_length=1)
    search_volume: int = Field(default=0, ge=0)
    difficulty: int = Field(default=0, ge=0, le=100)
    connection_strength: float = Field(default=0.5, ge=0.0, le=1.0)

    @field_validator("search_volume", "difficulty", mode="before")
    @classmethod
    def _none_as_zero(cls, value):
        return 0 if value is None else value

    @field_validator("connection_strength", mode="before")
    @classmethod
    def _none_as_default_strength(cls, value):
        return 0.5 if value is None else value

    @property
    def key(self) -> str:
        return self.keyword.lower()


class Cluster(BaseModel):
    parent: KeywordRecord
    children: List[KeywordRecord] = []

    @property
    def is_singleton(self) -> bool:
        return not self.children

    def members(self) -> List[KeywordRecord]:
        return [self.parent, *self.children]


class TopicalMapResult(BaseModel):
    clusters: List[Cluster] = []
    orphans: List[KeywordRecord] = []


# -------------------------------------------------
# Request / response bodies
# -------------------------------------------------

class GenerateTopicalMapRequest(BaseModel):
    seed_keyword: str = Field(min_length=1, max_length=255)
    include_suggestions: bool = False
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class SuggestionsRequest(BaseModel):
    keyword: str = Field(min_length=1, max_length=255)
    existing_keywords: List[str] = []


class LabeledKeyword(BaseModel):
    keyword: str
    search_volume: int
    difficulty: int
    difficulty_label: str
    connection_strength: float


class LabeledCluster(BaseModel):
    parent: LabeledKeyword
    children: List[LabeledKeyword]
    children_count: int


class TopicalMapResponse(BaseModel):
    seed: str
    cluster_count: int
    total_keywords: int
    included_suggestions: bool
    clusters: List[LabeledCluster]
    orphans: List[LabeledKeyword]


class SuggestionsResponse(BaseModel):
    keyword: str
    keywords_added: int
    suggestions: List[LabeledKeyword]
