"""Remote generation delegate."""

from noteorganizer.llm.client import LLMClient, LLMError, MissingCredentialError
from noteorganizer.llm.delegate import RemoteResponseError

__all__ = ["LLMClient", "LLMError", "MissingCredentialError", "RemoteResponseError"]
