
import asyncio
import logging
from typing import List, Optional, Sequence
import httpx
from openai import AsyncOpenAI
from config import Settings
from prompts import SYSTEM_PROMPT
from schemas import SearchSnippet

logger = logging.getLogger(__name__)

SEARCH_DEPTH = "basic"
SEARCH_MAX_RESULTS = 3
SEARCH_TIMEOUT = 30.0


class ChatCompletionError(Exception):
	pass


class EvaluationClient:
	"""Chat-completion (DeepSeek, OpenAI-compatible) and web-search (Tavily) calls."""

	def __init__(self, settings: Settings, chat_client: Optional[AsyncOpenAI] = None):
		self.settings = settings
		self._chat = chat_client
		if self._chat is None and settings.chat_configured:
			self._chat = AsyncOpenAI(base_url=settings.chat_base_url, api_key=settings.deepseek_api_key)

	async def complete(self, prompt: str) -> str:
		if self._chat is None:
			raise ChatCompletionError("chat-completion API key is not configured")
		try:
			response = await self._chat.chat.completions.create(
				model=self.settings.model,
				messages=[
					{"role": "system", "content": SYSTEM_PROMPT},
					{"role": "user", "content": prompt},
				],
				temperature=self.settings.temperature,
				max_tokens=self.settings.max_tokens,
			)
		except Exception as e:
			raise ChatCompletionError(f"chat-completion request failed: {e}") from e
		if not response.choices or not response.choices[0].message.content:
			raise ChatCompletionError("chat-completion returned no content")
		return response.choices[0].message.content

	async def search(self, query: str) -> List[SearchSnippet]:
		if not self.settings.search_configured:
			return []
		headers = {
			"Authorization": f"Bearer {self.settings.tavily_api_key}",
			"Content-Type": "application/json",
		}
		payload = {"query": query, "search_depth": SEARCH_DEPTH, "max_results": SEARCH_MAX_RESULTS}
		try:
			async with httpx.AsyncClient(timeout=SEARCH_TIMEOUT) as client:
				response = await client.post(self.settings.search_url, headers=headers, json=payload)
				response.raise_for_status()
				results = response.json().get("results") or []
			return [SearchSnippet.model_validate(r) for r in results]
		except Exception as e:
			logger.warning("Search failed for %r: %s", query, e)
			return []

	async def search_many(self, queries: Sequence[str], limit: int) -> List[SearchSnippet]:
		results = await asyncio.gather(*(self.search(q) for q in queries))
		flat = [snippet for batch in results for snippet in batch]
		return flat[:limit]
