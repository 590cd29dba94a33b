"""AI text generation — README drafts, commit messages and code explanations.

Generation is best effort: every method returns a usable fallback string
when no LLM is configured or the provider fails, so a file operation is
never blocked by it.
"""

from __future__ import annotations

import logging
from typing import Sequence

from repo_workbench.domain.exceptions import LlmError
from repo_workbench.domain.ports.llm_gateway import LlmGateway
from repo_workbench.services.security_sentinel import redact
from repo_workbench.services.token_budget import truncate_to_budget

logger = logging.getLogger(__name__)

# ── Prompt templates ────────────────────────────────────────────────────────

README_SYSTEM_PROMPT = """\
You write professional README.md files for GitHub repositories.  Include a \
project title, a description, installation and usage instructions (make \
generic assumptions from the file types, e.g. .js means Node and .py means \
Python), a contributing section and a license section.

Output ONLY the markdown content.
"""

COMMIT_SYSTEM_PROMPT = """\
You write concise conventional commit messages for adding or updating a file.

Format: <type>(<scope>): <subject>
Example: feat(core): add initial logic for login

Return ONLY the commit message string, on a single line.
"""

EXPLAIN_SYSTEM_PROMPT = """\
You are an expert senior software engineer.  Explain the code file you are \
given using this structure:

1. **Summary**: a 1-2 sentence overview.
2. **Key Features**: bullet points of what the code does.
3. **Potential Improvements**: any bugs or bad practices you spot.

Keep the tone professional and helpful.
"""

README_FALLBACK = "# README\n\nGenerated automatically. (AI Service Unavailable)"
EXPLAIN_FALLBACK = "Failed to generate AI explanation. Check the OpenAI API key."

_MAX_KNOWN_FILES = 20
_COMMIT_PREVIEW_CHARS = 200


class TextGenerator:
    """Wraps an optional :class:`LlmGateway` with prompts and fallbacks."""

    def __init__(self, llm: LlmGateway | None, max_prompt_tokens: int = 2_000) -> None:
        self._llm = llm
        self._max_prompt_tokens = max_prompt_tokens

    @property
    def enabled(self) -> bool:
        return self._llm is not None

    async def draft_readme(
        self, repo_name: str, description: str, known_files: Sequence[str] = ()
    ) -> str:
        files = "\n".join(known_files[:_MAX_KNOWN_FILES]) or "(none yet)"
        prompt = f"Repo Name: {repo_name}\nDescription: {description}\n\nKnown Files:\n{files}"
        text = await self._complete(README_SYSTEM_PROMPT, prompt)
        return text or README_FALLBACK

    async def suggest_commit_message(self, filename: str, content: str) -> str:
        fallback = f"Update {filename}"
        preview = redact(content[:_COMMIT_PREVIEW_CHARS]).text
        text = await self._complete(
            COMMIT_SYSTEM_PROMPT, f'File: {filename}\nContent Preview: "{preview}..."'
        )
        for line in (text or "").splitlines():
            line = line.strip().strip("`").strip()
            if line:
                return line
        return fallback

    async def explain_code(self, filename: str, code: str) -> str:
        sanitized = redact(code)
        if sanitized.count:
            logger.warning(
                "Redacted %d potential secret(s) from %s before explanation",
                sanitized.count,
                filename,
            )
        snippet = truncate_to_budget(sanitized.text, self._max_prompt_tokens)
        text = await self._complete(
            EXPLAIN_SYSTEM_PROMPT, f"Filename: {filename}\n\nCode:\n{snippet}"
        )
        return text or EXPLAIN_FALLBACK

    async def _complete(self, system_prompt: str, user_prompt: str) -> str | None:
        if self._llm is None:
            return None
        try:
            text = await self._llm.complete(system_prompt, user_prompt)
        except LlmError as exc:
            logger.warning("Text generation failed, using fallback: %s", exc)
            return None
        return text.strip() or None
