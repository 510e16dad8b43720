from __future__ import annotations

import logging
from typing import Any, List, Optional

from .ai import Suggestion
from .board import Board
from .config import LLMConfig
from .errors import SuggesterUnavailableError, SuggestionPortError
from .moves import Move
from .pieces import Color
from .prompt import build_prompt, parse_response

logger = logging.getLogger(__name__)


def create_chat_client(config: LLMConfig) -> Any:
    """Builds a LangChain chat model for the configured provider."""
    if config.provider == 'ollama':
        try:
            from langchain_ollama import ChatOllama
        except ImportError as e:
            raise SuggesterUnavailableError('langchain_ollama not installed') from e
        return ChatOllama(model=config.ollama_model, temperature=config.temperature)
    if config.provider == 'groq':
        try:
            from langchain_groq import ChatGroq
        except ImportError as e:
            raise SuggesterUnavailableError('langchain_groq not installed') from e
        if not config.groq_api_key:
            raise SuggesterUnavailableError('GROQ_API_KEY not provided')
        return ChatGroq(
            api_key=config.groq_api_key,
            model=config.groq_model,
            temperature=config.temperature,
            timeout=config.timeout,
        )
    raise SuggesterUnavailableError(f'Unsupported LLM provider: {config.provider}')


class LLMSuggester:
    """
    Asks a chat model to pick one of the numbered legal moves.

    `client` is anything with an invoke(prompt) method returning a string or a
    message with a `.content` attribute (LangChain chat models fit).
    """

    def __init__(self, client: Any = None, config: Optional[LLMConfig] = None):
        self.config = config or LLMConfig.from_env()
        self.client = client if client is not None else create_chat_client(self.config)

    def suggest(self, board: Board, color: Color, legal: List[Move]) -> Suggestion:
        if not legal:
            raise SuggestionPortError('no legal moves to choose from')
        prompt = build_prompt(board, color, legal, lang=self.config.lang)
        try:
            response = self.client.invoke(prompt)
        except Exception as e:
            raise SuggestionPortError(f'LLM call failed: {e}') from e
        text = response.content if hasattr(response, 'content') else str(response)
        logger.debug('llm answer for %s: %r', color.value, text)
        return parse_response(text, legal)
