from aiwiki.simplify.base import DEFAULT_SYSTEM_PROMPT, NOT_ENOUGH_INFO, Rewriter
from aiwiki.simplify.chain import SimplifierChain
from aiwiki.simplify.claude import ClaudeRewriter
from aiwiki.simplify.endpoint import EndpointRewriter
from aiwiki.simplify.local import simplify_locally
from aiwiki.simplify.ollama import OllamaRewriter

__all__ = [
    "ClaudeRewriter",
    "DEFAULT_SYSTEM_PROMPT",
    "EndpointRewriter",
    "NOT_ENOUGH_INFO",
    "OllamaRewriter",
    "Rewriter",
    "SimplifierChain",
    "simplify_locally",
]
