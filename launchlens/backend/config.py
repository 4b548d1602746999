
import os
from dataclasses import dataclass
from dotenv import load_dotenv

DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"
TAVILY_SEARCH_URL = "https://api.tavily.com/search"

# Placeholder values shipped in .env.example count as "not configured"
UNSET_SENTINELS = {"your_deepseek_api_key_here", "your_tavily_api_key_here"}


def is_configured(value: str) -> bool:
	return bool(value and value.strip()) and value.strip() not in UNSET_SENTINELS


@dataclass(frozen=True)
class Settings:
	deepseek_api_key: str = ""
	tavily_api_key: str = ""
	model: str = "deepseek-chat"
	temperature: float = 0.3
	max_tokens: int = 2000
	chat_base_url: str = DEEPSEEK_BASE_URL
	search_url: str = TAVILY_SEARCH_URL
	rate_limit_max: int = 100
	rate_limit_window_seconds: int = 900
	admin_token: str = ""
	log_level: str = "INFO"
	port: int = 8000

	@property
	def chat_configured(self) -> bool:
		return is_configured(self.deepseek_api_key)

	@property
	def search_configured(self) -> bool:
		return is_configured(self.tavily_api_key)


def load_settings() -> Settings:
	load_dotenv()
	return Settings(
		deepseek_api_key=os.getenv("DEEPSEEK_API_KEY", ""),
		tavily_api_key=os.getenv("TAVILY_API_KEY", ""),
		model=os.getenv("DEEPSEEK_MODEL", "deepseek-chat"),
		rate_limit_max=int(os.getenv("RATE_LIMIT_MAX", "100")),
		rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900")),
		admin_token=os.getenv("ADMIN_TOKEN", ""),
		log_level=os.getenv("LOG_LEVEL", "INFO"),
		port=int(os.getenv("PORT", "8000")),
	)
