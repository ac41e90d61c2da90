# app/services/insight_service.py
"""
Insight service: short narrative commentary from Google Gemini.

This is a best-effort side call. It never raises, never blocks geometry,
and on any failure returns a static fallback message.
"""

import logging
import os
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Optional

from google import genai

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from leonardo_rule.model import TreeParams


logger = logging.getLogger(__name__)


DEFAULT_MODEL = 'gemini-2.5-flash'

EMPTY_RESPONSE_FALLBACK = (
    "Nature follows many patterns. Explore the sliders to find the balance "
    "between math and biology."
)
ERROR_FALLBACK = (
    "The forest is quiet right now. Check your parameters to see how the "
    "geometry shifts!"
)


def build_insight_prompt(params: TreeParams) -> str:
    """Prompt describing the current tree for the botanist persona."""
    return f"""
You are an expert botanist teaching students about Leonardo da Vinci's Rule of Trees and plant hydraulic architecture.

Current Model Parameters:
- Species: {params.species.value}
- Trunk Girth (Starting Radius): {params.trunk_thickness}
- Branch Mass Scalar: {params.branch_thickness}x (multiplied against Leonardo's theoretical prediction)
- Leonardo Exponent (n): {params.exponent}

Leonardo's rule (exponent n=2) suggests area is conserved to optimize water flow.

Explain in 2 sentences how the current combination of trunk girth and branch mass affects the tree's structural "believability."
If the branch mass is high (>1.0) while the trunk is thin, note that the tree would likely collapse under its own weight in the real world.
Keep the tone educational, encouraging, and scientifically grounded.
""".strip()


def _api_key() -> Optional[str]:
    return os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")


def get_tree_insights(
    params: TreeParams,
    client: Any = None,
    model: str = DEFAULT_MODEL,
) -> str:
    """
    Ask the model for a two-sentence commentary on the current parameters.

    Args:
        params: Current tree parameters
        client: A google.genai.Client (or anything with the same
            models.generate_content interface). Built from the
            environment when None.
        model: Gemini model name

    Returns:
        The model's text, EMPTY_RESPONSE_FALLBACK if it returned no text,
        or ERROR_FALLBACK on any failure.
    """
    try:
        if client is None:
            api_key = _api_key()
            if not api_key:
                raise RuntimeError("GEMINI_API_KEY / GOOGLE_API_KEY not set")
            client = genai.Client(api_key=api_key)

        response = client.models.generate_content(
            model=model,
            contents=build_insight_prompt(params),
        )
        text = getattr(response, 'text', None)
        return text or EMPTY_RESPONSE_FALLBACK
    except Exception as e:
        logger.warning("Insight request failed: %s", e)
        return ERROR_FALLBACK


class InsightRequester:
    """
    Debounced, cancellable insight requests on a single background worker.

    Each call to request() supersedes the previous one: a pending request is
    cancelled before it reaches the network, and a stale one that already
    finished is ignored. Callers poll latest() and never wait on the result.
    """

    def __init__(
        self,
        delay_s: float = 1.5,
        client: Any = None,
        model: str = DEFAULT_MODEL,
    ):
        self.delay_s = delay_s
        self.client = client
        self.model = model
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._lock = threading.Lock()
        self._generation = 0
        self._cancel_event: Optional[threading.Event] = None
        self._future: Optional[Future] = None
        self._pending_params: Optional[TreeParams] = None
        self._latest_params: Optional[TreeParams] = None
        self._latest_text: Optional[str] = None

    def request(self, params: TreeParams) -> Future:
        """Schedule an insight for params, superseding any pending request."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._cancel_event is not None:
                self._cancel_event.set()
            if self._future is not None:
                self._future.cancel()
            cancel_event = threading.Event()
            self._cancel_event = cancel_event
            self._pending_params = params
            self._future = self._executor.submit(self._run, generation, params, cancel_event)
            return self._future

    def _run(self, generation: int, params: TreeParams, cancel_event: threading.Event) -> Optional[str]:
        # Debounce: wait out the quiet period unless superseded
        if cancel_event.wait(self.delay_s):
            return None

        text = get_tree_insights(params, client=self.client, model=self.model)

        with self._lock:
            if generation != self._generation:
                return None
            self._latest_params = params
            self._latest_text = text
        return text

    @property
    def pending_params(self) -> Optional[TreeParams]:
        """Params of the request that is still live (None after cancel)."""
        with self._lock:
            return self._pending_params

    def latest(self, params: Optional[TreeParams] = None) -> Optional[str]:
        """
        Most recent completed insight.

        If params is given, only return text that was produced for exactly
        those parameters.
        """
        with self._lock:
            if params is not None and params != self._latest_params:
                return None
            return self._latest_text

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            self._pending_params = None
            if self._cancel_event is not None:
                self._cancel_event.set()
            if self._future is not None:
                self._future.cancel()

    def shutdown(self) -> None:
        """Cancel pending work and release the worker thread."""
        self.cancel()
        self._executor.shutdown(wait=False)
