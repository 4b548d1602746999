
import random
from typing import Any, Dict, List, Optional, Sequence
from schemas import (
	Badge, CaseStudy, EvaluationResult, IndividualScores, MarketInsight,
	NewsItem, PatternMatch, SimilarStartup,
)
from tools import count_answered, score_band

FALLBACK_SNAPSHOT = "Unable to generate AI evaluation. Please check API configuration."


def fallback_similar_startups() -> List[SimilarStartup]:
	return [
		SimilarStartup(
			name="TechFlow (Series A, $15M raised)",
			status="successful",
			description="Similar clarity score and market timing",
			reason="Strong execution focus led to successful Series A",
			relevance="Shows importance of clear execution strategy",
		),
		SimilarStartup(
			name="DataSync (Failed in 2 years)",
			status="failed",
			description="Weak go-to-market strategy despite good product",
			reason="Poor customer acquisition led to failure",
			relevance="Highlights need for strong customer acquisition",
		),
		SimilarStartup(
			name="CloudBase (Acquired for $50M)",
			status="successful",
			description="Strong differentiation and market fit",
			reason="Focused on enterprise customers from day one",
			relevance="Demonstrates value of clear market focus",
		),
		SimilarStartup(
			name="StartupX (Seed stage, struggling)",
			status="struggling",
			description="Good product but poor market timing",
			reason="Failed to adapt to changing customer needs",
			relevance="Shows importance of market timing and adaptability",
		),
	]


def fallback_evaluation(answers: Sequence[str], rng: Optional[random.Random] = None) -> EvaluationResult:
	"""Synthetic but well-formed evaluation, used when the model cannot be reached.

	Only the scores depend on the input: ``filled * 10`` plus up to 19, and each
	sub-score the overall score plus up to 9, all capped at 100. Text is fixed.
	"""
	rng = rng or random
	overall = min(100, count_answered(answers) * 10 + rng.randint(0, 19))

	def sub_score() -> int:
		return min(100, overall + rng.randint(0, 9))

	return EvaluationResult(
		executive_snapshot=FALLBACK_SNAPSHOT,
		overall_score=overall,
		individual_scores=IndividualScores(
			clarity=sub_score(),
			market_fit=sub_score(),
			feasibility=sub_score(),
			differentiation=sub_score(),
		),
		strengths=[
			"Clear value proposition identified",
			"Strong market timing awareness",
			"Well-defined customer persona",
		],
		weaknesses=[
			"Competitive advantage needs more clarity",
			"Revenue model could be more specific",
			"Risk mitigation strategies need development",
		],
		opportunities=[
			"Market expansion potential",
			"Technology advancement opportunities",
		],
		threats=[
			"Competitive pressure",
			"Market saturation risk",
		],
		pattern_match=PatternMatch(
			successful=CaseStudy(
				name="TechFlow (Series A, $15M raised)",
				reason="Similar clarity score and market timing. Strong execution focus led to successful Series A.",
			),
			failed=CaseStudy(
				name="DataSync (Failed in 2 years)",
				reason="Weak go-to-market strategy despite good product. Poor customer acquisition led to failure.",
			),
		),
		recommendations=[
			"Focus on building stronger moats around your competitive advantage",
			"Develop more detailed financial projections",
			"Create a comprehensive risk management plan",
		],
		next_question="What's your biggest concern about this startup idea?",
		business_valuation=Badge(level="yellow", text="40-70%", description="Needs more validation"),
		funding_readiness=Badge(level="yellow", text="40-70%", description="Needs more validation"),
		market_momentum=Badge(level="green", text=">15% CAGR", description="Fast-growing sector, hot"),
		risk_exposure=Badge(level="red", text="High", description="4+ risks, high fragility"),
		similar_startups=fallback_similar_startups(),
	)


def _first(items: Any, count: int) -> List[str]:
	if isinstance(items, list):
		return [str(i) for i in items[:count]]
	return []


def fallback_chat_response(message: str, evaluation: Dict[str, Any]) -> str:
	text = message.lower()
	score = evaluation.get("overallScore", 0)
	if any(k in text for k in ("score", "rating")):
		_, label = score_band(score if isinstance(score, (int, float)) else 0)
		return f"Your overall score is {score}/100. This indicates {label}."
	if any(k in text for k in ("strength", "good")):
		strengths = " and ".join(_first(evaluation.get("strengths"), 2)) or "Clear value proposition and market awareness"
		return f"Your main strengths are: {strengths}. Focus on building these further."
	if any(k in text for k in ("weakness", "problem", "concern")):
		concerns = " and ".join(_first(evaluation.get("concerns"), 2)) or "Competitive advantage and revenue model"
		return f"Key areas to improve: {concerns}. These should be your top priorities."
	if any(k in text for k in ("recommend", "next", "should")):
		recommendation = (_first(evaluation.get("recommendations"), 1) or ["Focus on building stronger competitive moats"])[0]
		return f"Based on your evaluation, I recommend: {recommendation}."
	return f"I've analyzed your startup idea and given it a {score}/100 score. What specific aspect would you like to discuss?"


def _score(scores: Dict[str, Any], key: str, default: int = 0) -> float:
	value = scores.get(key)
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		return default
	return value


def fallback_market_insights(evaluation: Dict[str, Any]) -> List[MarketInsight]:
	scores = evaluation.get("individualScores")
	if not isinstance(scores, dict):
		scores = {}
	insights = []
	if _score(scores, "clarity") > 60:
		insights.append(MarketInsight(
			startup_name="ClearVision AI",
			funding_round="Series A",
			amount="$12M",
			insight="Your startup shows strong clarity like ClearVision AI, which raised a $12M Series A by focusing on a single, well-defined problem and a value proposition that resonated with enterprise customers.",
		))
	if _score(scores, "marketFit") > 60:
		insights.append(MarketInsight(
			startup_name="MarketFit Solutions",
			funding_round="Seed",
			amount="$3.5M",
			insight="Like MarketFit Solutions' $3.5M seed round, your startup demonstrates strong market understanding. They won by building features that directly addressed validated customer pain points.",
		))
	if _score(scores, "feasibility") > 50:
		insights.append(MarketInsight(
			startup_name="FeasibleTech",
			funding_round="Series B",
			amount="$25M",
			insight="FeasibleTech's $25M Series B mirrors your feasibility score. They proved a robust technical foundation and scalability before seeking major funding rounds.",
		))
	if _score(scores, "differentiation", 100) < 40:
		insights.append(MarketInsight(
			startup_name="DifferentiateNow",
			funding_round="Series A",
			amount="$8M",
			insight="DifferentiateNow faced similar differentiation challenges but raised $8M by pivoting to a niche market with proprietary technology competitors could not easily replicate.",
		))
	insights.append(MarketInsight(
		startup_name="StartupFlow",
		funding_round="Seed",
		amount="$2.8M",
		insight="StartupFlow's $2.8M seed round shows the value of early customer validation: they had 100+ paying customers before raising, proving product-market fit.",
	))
	insights.append(MarketInsight(
		startup_name="InnovateCorp",
		funding_round="Series A",
		amount="$15M",
		insight="InnovateCorp's $15M Series A demonstrates the value of founding team experience. Previous exits gave them credibility with investors and a faster funding timeline.",
	))
	return insights[:4]


def fallback_market_news() -> List[NewsItem]:
	return [
		NewsItem(
			source="TechCrunch",
			title="Seed rounds concentrate on startups with early revenue",
			summary="Investors are favoring pre-seed and seed companies that can show paying customers, with median seed sizes rising for teams that demonstrate traction.",
			tags=["funding", "trends"],
		),
		NewsItem(
			source="Crunchbase",
			title="AI-native startups take a growing share of venture funding",
			summary="Companies building on large language models continue to attract a disproportionate share of early-stage capital across B2B and consumer markets.",
			tags=["funding", "AI"],
		),
		NewsItem(
			source="PitchBook",
			title="Valuations reset as investors focus on unit economics",
			summary="Later-stage valuations have compressed, pushing founders to prove efficient growth and clear paths to profitability before raising.",
			tags=["market", "valuation"],
		),
		NewsItem(
			source="VentureBeat",
			title="Vertical SaaS keeps outperforming horizontal tools",
			summary="Software built for a single industry shows higher retention and faster sales cycles than general-purpose tools in the same segments.",
			tags=["market", "saas"],
		),
	]
