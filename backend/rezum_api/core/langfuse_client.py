"""Prompt resolution and tracing through Langfuse.

``get_prompt_messages`` always returns a usable chat prompt: the versioned
copy from Langfuse when keys are configured and the fetch succeeds,
otherwise the embedded copy in ``fallback_prompts``. Config keys missing
from the Langfuse prompt are filled from the embedded config.

Env vars: LANGFUSE_PUBLIC_KEY, LANGFUSE_SECRET_KEY, LANGFUSE_HOST
"""

from dataclasses import dataclass, field
from functools import lru_cache

from langfuse import Langfuse, observe  # noqa: F401

from rezum_api.config import load_settings
from rezum_api.core.fallback_prompts import FALLBACK_PROMPTS
from rezum_api.core.logger import logger

PROMPT_CACHE_TTL_SECONDS = 300


@dataclass(frozen=True)
class ChatPrompt:
    system: str
    user: str
    config: dict = field(default_factory=dict)
    source: str = "fallback"  # "langfuse" | "fallback"


@lru_cache(maxsize=1)
def _get_client() -> Langfuse | None:
    """Langfuse client, or None when no keys are configured."""
    settings = load_settings()
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        logger.info("Langfuse: no keys configured, using embedded prompts")
        return None

    try:
        client = Langfuse(
            public_key=settings.langfuse_public_key,
            secret_key=settings.langfuse_secret_key,
            host=settings.langfuse_host,
        )
    except Exception as e:
        logger.warning(f"Langfuse: failed to initialize client: {e}")
        return None

    logger.info("Langfuse: client initialized")
    return client


def _fetch_langfuse_prompt(name: str, variables: dict) -> ChatPrompt | None:
    client = _get_client()
    if client is None:
        return None

    try:
        prompt = client.get_prompt(name, type="chat", cache_ttl_seconds=PROMPT_CACHE_TTL_SECONDS)
        messages = prompt.compile(**variables)
    except Exception as e:
        logger.warning(f"Langfuse: failed to fetch prompt '{name}': {e}")
        return None

    by_role = {msg.get("role", ""): msg.get("content", "") for msg in messages}
    if not by_role.get("user"):
        logger.warning(f"Langfuse: prompt '{name}' v{prompt.version} has no user message")
        return None

    logger.debug(f"Langfuse: fetched prompt '{name}' (v{prompt.version})")
    return ChatPrompt(
        system=by_role.get("system", ""),
        user=by_role["user"],
        config=dict(prompt.config or {}),
        source="langfuse",
    )


def _fallback_prompt(name: str, variables: dict) -> ChatPrompt:
    fb = FALLBACK_PROMPTS[name]
    return ChatPrompt(
        system=fb["system"],
        user=fb["user"].format(**variables),
        config=dict(fb["config"]),
    )


def get_prompt_messages(name: str, variables: dict) -> ChatPrompt:
    """Resolve chat prompt ``name`` with ``variables`` interpolated.

    Raises KeyError if ``name`` has no embedded fallback.
    """
    fallback = _fallback_prompt(name, variables)

    fetched = _fetch_langfuse_prompt(name, variables)
    if fetched is None:
        logger.info(f"Using embedded prompt for '{name}'")
        return fallback

    return ChatPrompt(
        system=fetched.system,
        user=fetched.user,
        config={**fallback.config, **fetched.config},
        source="langfuse",
    )


def flush() -> None:
    """Flush pending Langfuse traces, if Langfuse is configured."""
    client = _get_client()
    if client is None:
        return
    try:
        client.flush()
    except Exception as e:
        logger.warning(f"Langfuse: flush failed: {e}")
