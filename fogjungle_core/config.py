from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .state import BindingPolicy, GameMode


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    return int(raw)


@dataclass
class GameConfig:
    """Per-game settings shared by the CLI, the HTTP app and the engine."""

    mode: GameMode = GameMode.PVE
    policy: BindingPolicy = BindingPolicy.FLIPPER_TAKES_REVEALED
    seed: Optional[int] = None
    history_limit: int = 50
    lang: str = 'en'
    strict: bool = False  # raise GameOverError instead of ignoring actions after the end

    @classmethod
    def from_env(cls) -> 'GameConfig':
        return cls(
            mode=GameMode(os.getenv('FOGJUNGLE_MODE', 'PVE').upper()),
            policy=BindingPolicy(os.getenv('FOGJUNGLE_POLICY', 'revealed').lower()),
            seed=_env_int('FOGJUNGLE_SEED'),
            history_limit=max(1, int(os.getenv('FOGJUNGLE_HISTORY_LIMIT', '50'))),
            lang=os.getenv('FOGJUNGLE_LANG', 'en'),
            strict=_env_bool('FOGJUNGLE_STRICT', 'false'),
        )


@dataclass
class LLMConfig:
    """Settings for the language-model move suggester."""

    provider: str = 'ollama'
    ollama_model: str = 'llama3'
    groq_model: str = 'llama-3.1-8b-instant'
    groq_api_key: str = ''
    temperature: float = 0.3
    timeout: int = 30
    lang: str = 'en'  # language the model should write its reasoning in

    @classmethod
    def from_env(cls) -> 'LLMConfig':
        return cls(
            provider=os.getenv('LLM_PROVIDER', 'ollama'),
            ollama_model=os.getenv('OLLAMA_MODEL', 'llama3'),
            groq_model=os.getenv('GROQ_MODEL', 'llama-3.1-8b-instant'),
            groq_api_key=os.getenv('GROQ_API_KEY', ''),
            temperature=float(os.getenv('LLM_TEMPERATURE', '0.3')),
            timeout=int(os.getenv('LLM_TIMEOUT', '30')),
            lang=os.getenv('FOGJUNGLE_LANG', 'en'),
        )
