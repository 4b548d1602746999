
import json
import re
from typing import Any, Dict, List
from pydantic import ValidationError
from schemas import EvaluationResult, MarketInsight, Outcome, SimilarStartup

# Greedy: first "{" through last "}", the model may wrap JSON in prose
JSON_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_object(text: str) -> Outcome[Dict[str, Any]]:
	if not isinstance(text, str):
		return Outcome.failure("response is not text")
	match = JSON_SPAN.search(text)
	if not match:
		return Outcome.failure("no JSON object found in response")
	try:
		data = json.loads(match.group(0))
	except json.JSONDecodeError as e:
		return Outcome.failure(f"invalid JSON in response: {e}")
	if not isinstance(data, dict):
		return Outcome.failure("JSON in response is not an object")
	return Outcome.success(data)


def parse_evaluation(text: str) -> Outcome[EvaluationResult]:
	extracted = extract_json_object(text)
	if not extracted.ok:
		return Outcome.failure(extracted.error)
	try:
		return Outcome.success(EvaluationResult.model_validate(extracted.value))
	except ValidationError as e:
		return Outcome.failure(f"evaluation does not match schema: {e.error_count()} error(s)")


def _parse_list(text: str, key: str, model) -> Outcome[List[Any]]:
	extracted = extract_json_object(text)
	if not extracted.ok:
		return Outcome.failure(extracted.error)
	items = extracted.value.get(key)
	if not isinstance(items, list) or not items:
		return Outcome.failure(f"response has no {key!r} list")
	try:
		return Outcome.success([model.model_validate(item) for item in items])
	except ValidationError as e:
		return Outcome.failure(f"{key} do not match schema: {e.error_count()} error(s)")


def parse_similar_startups(text: str) -> Outcome[List[SimilarStartup]]:
	return _parse_list(text, "startups", SimilarStartup)


def parse_market_insights(text: str) -> Outcome[List[MarketInsight]]:
	return _parse_list(text, "insights", MarketInsight)


def parse_chat_reply(text: str) -> str:
	extracted = extract_json_object(text)
	if extracted.ok:
		reply = extracted.value.get("response") or extracted.value.get("message")
		if isinstance(reply, str) and reply:
			return reply
	return text
