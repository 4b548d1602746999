
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

Score = Annotated[int, Field(ge=0, le=100)]
BadgeLevel = Literal["green", "yellow", "red"]

QUESTION_COUNT = 10
MIN_ANSWERED = 7


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SearchSnippet(BaseModel):
	title: str = ""
	content: str = ""
	url: str = ""


class IndividualScores(FrozenCamelModel):
	clarity: Score
	market_fit: Score
	feasibility: Score
	differentiation: Score


class CaseStudy(FrozenCamelModel):
	name: str
	reason: str


class PatternMatch(FrozenCamelModel):
	successful: CaseStudy
	failed: CaseStudy


class Badge(FrozenCamelModel):
	level: BadgeLevel
	text: str
	description: str


class SimilarStartup(FrozenCamelModel):
	name: str
	status: Literal["successful", "failed", "struggling"]
	description: str
	reason: str
	relevance: str


class EvaluationResult(FrozenCamelModel):
	executive_snapshot: str
	overall_score: Score
	individual_scores: IndividualScores
	strengths: List[str]
	weaknesses: List[str]
	opportunities: List[str]
	threats: List[str]
	pattern_match: PatternMatch
	recommendations: List[str]
	next_question: str
	business_valuation: Badge
	funding_readiness: Badge
	market_momentum: Badge
	risk_exposure: Badge
	similar_startups: Optional[List[SimilarStartup]] = None


class PublicEvaluation(FrozenCamelModel):
	# Shape returned by /api/evaluate: weaknesses -> concerns, nextQuestion -> nextSteps
	overall_score: Score
	individual_scores: IndividualScores
	strengths: List[str]
	concerns: List[str]
	opportunities: List[str]
	threats: List[str]
	recommendations: List[str]
	next_steps: List[str]
	pattern_match: PatternMatch
	business_valuation: Badge
	funding_readiness: Badge
	market_momentum: Badge
	risk_exposure: Badge
	executive_snapshot: str
	similar_startups: Optional[List[SimilarStartup]] = None


class MarketInsight(CamelModel):
	startup_name: str
	funding_round: str
	amount: str
	insight: str


class NewsItem(CamelModel):
	source: str
	title: str
	summary: str
	url: str = ""
	tags: List[str] = Field(default_factory=list)


class EvaluateRequest(CamelModel):
	answers: List[str] = Field(min_length=QUESTION_COUNT, max_length=QUESTION_COUNT)


class ChatRequest(CamelModel):
	message: str = Field(min_length=1)
	evaluation_data: Dict[str, Any]


class MarketRequest(CamelModel):
	answers: List[str]
	evaluation_data: Dict[str, Any]


class ProjectCreate(CamelModel):
	name: str = Field(min_length=1)
	description: str = ""
	answers: List[str]
	evaluation_data: Dict[str, Any]
	overall_score: int = 0


class Project(CamelModel):
	id: int
	owner: str
	name: str
	description: str
	answers: List[str]
	evaluation_data: Dict[str, Any]
	overall_score: int
	created_at: datetime
	updated_at: datetime


@dataclass(frozen=True)
class Outcome(Generic[T]):
	"""Result of one pipeline stage: either a value or the reason it failed."""
	value: Optional[T] = None
	error: Optional[str] = None

	@property
	def ok(self) -> bool:
		return self.error is None

	@classmethod
	def success(cls, value: T) -> "Outcome[T]":
		return cls(value=value)

	@classmethod
	def failure(cls, error: str) -> "Outcome[T]":
		return cls(error=error)
