
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple
from schemas import EvaluationResult, PublicEvaluation

# Keyword lookup for search query terms, first match wins
INDUSTRY_KEYWORDS = ["fintech", "healthtech", "edtech", "saas", "ecommerce", "ai", "blockchain", "iot"]
TECHNOLOGY_KEYWORDS = ["ai", "machine learning", "blockchain", "mobile app", "web platform", "api"]
MARKET_KEYWORDS = ["b2b", "b2c", "enterprise", "consumer", "small business", "startup"]

DEFAULT_TERMS = {
	"industry": "tech",
	"technology": "software",
	"market": "business",
}

MARKET_QUERY_TEMPLATES = [
	"{industry} startup market trends {year}",
	"{industry} startup failure rates statistics",
	"{market} venture capital funding trends {year}",
	"{technology} startup valuation benchmarks",
]

SIMILAR_STARTUP_QUERY_TEMPLATES = [
	"{industry} startup success stories",
	"{industry} startup failures",
	"{technology} startup case studies",
	"{market} startup funding news",
]

FUNDING_QUERY_TEMPLATES = [
	"{industry} startup funding round {year}",
	"{technology} startup raises seed series A {year}",
]

NEWS_QUERY_TEMPLATES = [
	"{industry} startup news {year}",
	"{market} {technology} market news",
]


def count_answered(answers: Sequence[str]) -> int:
	return sum(1 for a in answers if a and a.strip())


def extract_key_terms(answers: Sequence[str]) -> Dict[str, str]:
	text = " ".join(answers).lower()

	def first_match(keywords: List[str], field: str) -> str:
		for kw in keywords:
			if kw in text:
				return kw
		return DEFAULT_TERMS[field]

	return {
		"industry": first_match(INDUSTRY_KEYWORDS, "industry"),
		"technology": first_match(TECHNOLOGY_KEYWORDS, "technology"),
		"market": first_match(MARKET_KEYWORDS, "market"),
	}


def render_queries(templates: List[str], answers: Sequence[str], today: Optional[date] = None) -> List[str]:
	terms = extract_key_terms(answers)
	year = (today or date.today()).year
	return [t.format(year=year, **terms) for t in templates]


def market_queries(answers: Sequence[str], today: Optional[date] = None) -> List[str]:
	return render_queries(MARKET_QUERY_TEMPLATES, answers, today)


def similar_startup_queries(answers: Sequence[str]) -> List[str]:
	return render_queries(SIMILAR_STARTUP_QUERY_TEMPLATES, answers)


def score_band(score: int) -> Tuple[str, str]:
	if score >= 70:
		return ("green", "strong potential")
	elif score >= 50:
		return ("yellow", "moderate potential")
	else:
		return ("red", "significant areas for improvement")


def to_public_evaluation(result: EvaluationResult) -> PublicEvaluation:
	return PublicEvaluation(
		overall_score=result.overall_score,
		individual_scores=result.individual_scores,
		strengths=result.strengths,
		concerns=result.weaknesses,
		opportunities=result.opportunities,
		threats=result.threats,
		recommendations=result.recommendations,
		next_steps=[result.next_question],
		pattern_match=result.pattern_match,
		business_valuation=result.business_valuation,
		funding_readiness=result.funding_readiness,
		market_momentum=result.market_momentum,
		risk_exposure=result.risk_exposure,
		executive_snapshot=result.executive_snapshot,
		similar_startups=result.similar_startups,
	)
