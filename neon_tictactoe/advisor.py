"""Move hints from an external language model.

The advisor turns a board and the side to move into a prompt, hands it to a
collaborator (by default Gemini over HTTP) and normalizes whatever comes back
into a `HintSuggestion`. Every failure ends in `FALLBACK_SUGGESTION`, so
callers never see an exception from `HintAdvisor.request_hint`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import requests

from .config import Settings, load_settings
from .game_logic import BOARD_CELLS, EMPTY, Board

logger = logging.getLogger(__name__)

NO_SUGGESTION = -1
FALLBACK_REASONING = "System overload! Make your own move."

RESPONSE_FIELDS = ("suggestedIndex", "reasoning")

# structured-output schema in the Gemini API dialect
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "suggestedIndex": {
            "type": "NUMBER",
            "description": "The index of the best move (0-8)",
        },
        "reasoning": {
            "type": "STRING",
            "description": "Short strategic reasoning",
        },
    },
    "required": list(RESPONSE_FIELDS),
}

PROMPT_TEMPLATE = """\
You are an advanced AI battle strategist for Tic-Tac-Toe.
Current Board State (0-8): [{board}]
Current Player: {player}

Analyze the board.
1. Identify immediate winning moves.
2. Block immediate threats.
3. Control the center or corners if neutral.

Return the best move index (0-8) and a short, cool, cyberpunk-style reason (max 10 words).
"""

Collaborator = Callable[[str, Mapping[str, Any]], str]


class AdvisoryFailure(RuntimeError):
    """A hint could not be obtained or the answer had the wrong shape."""


@dataclass(frozen=True)
class HintSuggestion:
    suggested_index: int
    reasoning: str

    @property
    def is_fallback(self) -> bool:
        return self.suggested_index == NO_SUGGESTION

    def to_dict(self) -> Dict[str, Any]:
        return {"suggestedIndex": self.suggested_index, "reasoning": self.reasoning}


FALLBACK_SUGGESTION = HintSuggestion(NO_SUGGESTION, FALLBACK_REASONING)


def encode_board(board: Board) -> List[str]:
    """Occupied cells show their mark, empty cells show their own index."""
    return [cell if cell != EMPTY else str(index) for index, cell in enumerate(board)]


def build_prompt(board: Board, current_mark: str) -> str:
    return PROMPT_TEMPLATE.format(board=", ".join(encode_board(board)), player=current_mark)


def _coerce_index(value: Any) -> int:
    if isinstance(value, bool):
        raise AdvisoryFailure(f"suggestedIndex must be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise AdvisoryFailure(f"suggestedIndex must be whole, got {value!r}")
        value = int(value)
    if not isinstance(value, int):
        raise AdvisoryFailure(f"suggestedIndex must be a number, got {value!r}")
    if not 0 <= value < BOARD_CELLS:
        raise AdvisoryFailure(f"suggestedIndex {value} is outside 0-8")
    return value


def parse_suggestion(payload: Union[str, bytes, Mapping[str, Any], None]) -> HintSuggestion:
    """Validate a collaborator answer.

    Accepts the raw JSON text or an already decoded mapping. The object must
    have exactly the fields ``suggestedIndex`` and ``reasoning``.

    Raises:
        AdvisoryFailure: empty body, invalid JSON, or any other shape.
    """
    if payload is None or (isinstance(payload, (str, bytes)) and not payload.strip()):
        raise AdvisoryFailure("empty response from advisor")
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise AdvisoryFailure(f"advisor response is not JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise AdvisoryFailure(f"expected a JSON object, got {type(payload).__name__}")

    keys = set(payload)
    if keys != set(RESPONSE_FIELDS):
        raise AdvisoryFailure(f"expected fields {list(RESPONSE_FIELDS)}, got {sorted(keys)}")

    reasoning = payload["reasoning"]
    if not isinstance(reasoning, str):
        raise AdvisoryFailure(f"reasoning must be a string, got {reasoning!r}")
    return HintSuggestion(_coerce_index(payload["suggestedIndex"]), reasoning.strip())


class GeminiCollaborator:
    """Ask Gemini's ``generateContent`` endpoint for a structured JSON answer."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url}/models/{self.settings.model}:generateContent"

    def __call__(self, prompt: str, schema: Mapping[str, Any]) -> str:
        if not self.settings.has_api_key:
            raise AdvisoryFailure("no Gemini API key configured")

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": dict(schema),
            },
        }
        try:
            resp = self.session.post(
                self.endpoint,
                headers={
                    "x-goog-api-key": self.settings.api_key,
                    "Content-Type": "application/json",
                },
                json=body,
                timeout=(self.settings.connect_timeout, self.settings.read_timeout),
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            status = getattr(getattr(exc, "response", None), "status_code", "?")
            raise AdvisoryFailure(f"Gemini request failed (status={status}): {exc}") from exc
        except ValueError as exc:
            raise AdvisoryFailure(f"Gemini returned a non-JSON body: {exc}") from exc

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: Any) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise AdvisoryFailure(f"unexpected Gemini response layout: {exc!r}") from exc
        if not text.strip():
            raise AdvisoryFailure("No response from AI")
        return text


class HintAdvisor:
    """
    Client side of the hint contract.

    ``collaborator`` is any callable taking ``(prompt, schema)`` and returning
    the model's JSON text.
    """

    def __init__(self, collaborator: Collaborator):
        self.collaborator = collaborator

    def request_hint(self, board: Board, current_mark: str) -> HintSuggestion:
        """Ask for a move suggestion; degrade to `FALLBACK_SUGGESTION` on any failure.

        Terminal boards are not checked here, the caller only asks while the
        game is running. No retries and no caching.
        """
        try:
            prompt = build_prompt(board, current_mark)
            answer = self.collaborator(prompt, RESPONSE_SCHEMA)
            suggestion = parse_suggestion(answer)
        except AdvisoryFailure as exc:
            logger.warning("hint unavailable: %s", exc)
            return FALLBACK_SUGGESTION
        except Exception:
            # the collaborator is third-party code; nothing may escape
            logger.exception("hint collaborator raised")
            return FALLBACK_SUGGESTION
        logger.info("hint for %s: cell %d (%s)", current_mark, suggestion.suggested_index,
                    suggestion.reasoning)
        return suggestion


def default_advisor(settings: Optional[Settings] = None) -> HintAdvisor:
    return HintAdvisor(GeminiCollaborator(settings or load_settings()))
