
import logging
import random
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlparse
from agents import ChatCompletionError, EvaluationClient
from config import Settings
from fallback import (
	fallback_chat_response, fallback_evaluation, fallback_market_insights,
	fallback_market_news, fallback_similar_startups,
)
from normalizer import parse_chat_reply, parse_evaluation, parse_market_insights, parse_similar_startups
from prompts import build_chat_prompt, build_evaluation_prompt, build_market_insights_prompt, build_similar_startups_prompt
from schemas import EvaluationResult, MarketInsight, NewsItem, Outcome, SearchSnippet, SimilarStartup
from tools import (
	FUNDING_QUERY_TEMPLATES, NEWS_QUERY_TEMPLATES, count_answered, market_queries,
	render_queries, similar_startup_queries,
)

logger = logging.getLogger(__name__)

MARKET_CONTEXT_LIMIT = 12
SIMILAR_STARTUPS_LIMIT = 10
NEWS_LIMIT = 6


async def request_completion(client: EvaluationClient, prompt: str) -> Outcome[str]:
	try:
		return Outcome.success(await client.complete(prompt))
	except ChatCompletionError as e:
		return Outcome.failure(str(e))


async def generate_similar_startups(answers: Sequence[str], evaluation: EvaluationResult, client: EvaluationClient) -> Outcome[List[SimilarStartup]]:
	snippets = await client.search_many(similar_startup_queries(answers), SIMILAR_STARTUPS_LIMIT)
	completion = await request_completion(client, build_similar_startups_prompt(snippets, evaluation))
	if not completion.ok:
		return Outcome.failure(completion.error)
	return parse_similar_startups(completion.value)


async def evaluate_answers(
	answers: Sequence[str],
	settings: Settings,
	client: EvaluationClient,
	rng: Optional[random.Random] = None,
) -> EvaluationResult:
	"""Score an answer set. Never raises: every failed stage degrades to the fallback."""
	if not settings.chat_configured:
		logger.info("Chat-completion API key not configured, using fallback evaluation")
		return fallback_evaluation(answers, rng)

	logger.info("Evaluating startup with %d answered questions", count_answered(answers))
	snippets: List[SearchSnippet] = await client.search_many(market_queries(answers), MARKET_CONTEXT_LIMIT)
	logger.debug("Market context: %d snippets", len(snippets))
	prompt = build_evaluation_prompt(answers, snippets)

	completion = await request_completion(client, prompt)
	if not completion.ok:
		logger.warning("Evaluation call failed, using fallback: %s", completion.error)
		return fallback_evaluation(answers, rng)

	parsed = parse_evaluation(completion.value)
	if not parsed.ok:
		logger.warning("Evaluation response unusable, using fallback: %s", parsed.error)
		return fallback_evaluation(answers, rng)

	similar = await generate_similar_startups(answers, parsed.value, client)
	if not similar.ok:
		logger.warning("Similar startups unavailable, using fallback list: %s", similar.error)
	startups = similar.value if similar.ok else fallback_similar_startups()
	return parsed.value.model_copy(update={"similar_startups": startups})


async def generate_chat_response(message: str, evaluation: Dict[str, Any], settings: Settings, client: EvaluationClient) -> str:
	if not settings.chat_configured:
		return fallback_chat_response(message, evaluation)
	completion = await request_completion(client, build_chat_prompt(message, evaluation))
	if not completion.ok:
		logger.warning("Chat call failed, using fallback reply: %s", completion.error)
		return fallback_chat_response(message, evaluation)
	return parse_chat_reply(completion.value)


async def generate_market_insights(answers: Sequence[str], evaluation: Dict[str, Any], settings: Settings, client: EvaluationClient) -> List[MarketInsight]:
	if not settings.chat_configured:
		return fallback_market_insights(evaluation)
	snippets = await client.search_many(render_queries(FUNDING_QUERY_TEMPLATES, answers), SIMILAR_STARTUPS_LIMIT)
	completion = await request_completion(client, build_market_insights_prompt(snippets, evaluation))
	if not completion.ok:
		logger.warning("Market insights call failed, using fallback: %s", completion.error)
		return fallback_market_insights(evaluation)
	parsed = parse_market_insights(completion.value)
	if not parsed.ok:
		logger.warning("Market insights response unusable, using fallback: %s", parsed.error)
		return fallback_market_insights(evaluation)
	return parsed.value[:4]


async def generate_market_news(answers: Sequence[str], client: EvaluationClient) -> List[NewsItem]:
	snippets = await client.search_many(render_queries(NEWS_QUERY_TEMPLATES, answers), NEWS_LIMIT)
	if not snippets:
		return fallback_market_news()
	return [news_item(s) for s in snippets]


def news_item(snippet: SearchSnippet) -> NewsItem:
	source = urlparse(snippet.url).netloc.removeprefix("www.") or "Web"
	return NewsItem(source=source, title=snippet.title, summary=snippet.content, url=snippet.url, tags=["news"])
