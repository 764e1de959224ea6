"""Assistant API client for thread-based conversations.

Core module for the widget's request/response orchestration.

A send goes through five steps against the hosted Assistants API:

1. Create a thread (first send only) and keep its id on the client.
2. Append the user's text as a ``user`` message.
3. Start a run of the configured assistant on the thread.
4. Poll the run until it completes, bounded by ``max_poll_attempts``.
5. List the thread's messages and return the first text block of the
   newest assistant message.

``ask`` raises on any failure. ``send_message`` is the caller-facing wrapper
that never raises and collapses failures into fixed reply strings.
"""

import logging
from types import TracebackType

import httpx
from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_after_attempt, wait_fixed

from src.assistant.config import AssistantConfig, get_assistant_config
from src.models.schemas import MessageList, Run, Thread

logger = logging.getLogger(__name__)

NO_RESPONSE_REPLY = "[No response]"
FALLBACK_REPLY = "Sorry, something went wrong."
TIMEOUT_REPLY = "Sorry, the assistant took too long to respond."

ASSISTANTS_BETA_HEADER = "assistants=v2"


class AssistantError(Exception):
    """Base class for assistant run failures."""


class RunTimeoutError(AssistantError):
    """Raised when a run does not complete within the polling bound."""

    def __init__(self, run_id: str, attempts: int) -> None:
        super().__init__(f"Run {run_id} did not complete after {attempts} status checks")
        self.run_id = run_id
        self.attempts = attempts


class RunFailedError(AssistantError):
    """Raised when a run ends in a status other than completed."""

    def __init__(self, run: Run) -> None:
        detail = run.last_error.message if run.last_error else None
        message = f"Run {run.id} ended with status '{run.status}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.run = run


def _is_pending(run: Run) -> bool:
    return not run.is_completed


class AssistantClient:
    """Client for one conversation with a hosted assistant.

    Owns the conversation (thread) identifier. It is created lazily on the
    first send and reused afterwards until ``reset`` is called.

    Concurrent sends on one instance are not coordinated; callers must
    serialize them.
    """

    def __init__(
        self,
        config: AssistantConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional assistant configuration.
                    Loads from environment if not provided.
            http_client: Optional preconfigured HTTP client. When omitted the
                    client creates (and later closes) its own.
        """
        self._config = config or get_assistant_config()
        self._owns_http_client = http_client is None
        self._http = http_client or self._create_http_client()
        self._thread_id: str | None = None

    def _create_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers={
                "Authorization": f"Bearer {self._config.api_key}",
                "Content-Type": "application/json",
                "OpenAI-Beta": ASSISTANTS_BETA_HEADER,
            },
            timeout=self._config.request_timeout,
        )

    @property
    def thread_id(self) -> str | None:
        """Identifier of the current conversation, or None before the first send."""
        return self._thread_id

    def reset(self) -> None:
        """Forget the current conversation so the next send starts a new one."""
        if self._thread_id is not None:
            logger.info(f"Discarding conversation thread {self._thread_id}")
        self._thread_id = None

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "AssistantClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        response = await self._http.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    async def create_thread(self) -> str:
        """Create a new remote conversation.

        Returns:
            The new thread identifier.
        """
        data = await self._request("POST", "/threads")
        thread = Thread.model_validate(data)
        logger.info(f"Created conversation thread {thread.id}")
        return thread.id

    async def add_message(self, thread_id: str, text: str) -> None:
        """Append a user message to a thread."""
        await self._request(
            "POST",
            f"/threads/{thread_id}/messages",
            json={"role": "user", "content": text},
        )

    async def create_run(self, thread_id: str) -> Run:
        """Start a run of the configured assistant on a thread."""
        data = await self._request(
            "POST",
            f"/threads/{thread_id}/runs",
            json={"assistant_id": self._config.assistant_id},
        )
        return Run.model_validate(data)

    async def get_run(self, thread_id: str, run_id: str) -> Run:
        data = await self._request("GET", f"/threads/{thread_id}/runs/{run_id}")
        return Run.model_validate(data)

    async def list_messages(self, thread_id: str) -> MessageList:
        """List the thread's messages, newest first."""
        data = await self._request(
            "GET",
            f"/threads/{thread_id}/messages",
            params={"order": "desc"},
        )
        return MessageList.model_validate(data)

    async def _check_run(self, thread_id: str, run_id: str) -> Run:
        run = await self.get_run(thread_id, run_id)
        logger.debug(f"Run {run_id} status: {run.status}")
        if run.is_terminal_failure:
            raise RunFailedError(run)
        return run

    async def wait_for_run(self, thread_id: str, run_id: str) -> Run:
        """Poll a run until it completes.

        Checks the status every ``poll_interval`` seconds, at most
        ``max_poll_attempts`` times.

        Returns:
            The completed run.

        Raises:
            RunTimeoutError: If the run is still pending after the last check.
            RunFailedError: If the run reaches a terminal failure status.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._config.max_poll_attempts),
            wait=wait_fixed(self._config.poll_interval),
            retry=retry_if_result(_is_pending),
        )
        try:
            run = await retrying(self._check_run, thread_id, run_id)
        except RetryError as e:
            raise RunTimeoutError(run_id, self._config.max_poll_attempts) from e

        logger.debug(f"Run {run_id} completed")
        return run

    async def ask(self, text: str) -> str:
        """Send user text and return the assistant's reply.

        Args:
            text: Non-empty user message. Callers reject blank input.

        Returns:
            The first text block of the newest assistant message, or
            NO_RESPONSE_REPLY when the thread holds none.

        Raises:
            httpx.HTTPError: On transport failures or error responses.
            pydantic.ValidationError: On unexpected response shapes.
            AssistantError: If the run times out or fails.
        """
        if self._thread_id is None:
            self._thread_id = await self.create_thread()
        thread_id = self._thread_id

        await self.add_message(thread_id, text)
        run = await self.create_run(thread_id)
        await self.wait_for_run(thread_id, run.id)

        messages = await self.list_messages(thread_id)
        latest = messages.latest_assistant()
        reply = latest.first_text() if latest else None
        return reply or NO_RESPONSE_REPLY

    async def send_message(self, text: str) -> str:
        """Send user text and return the reply, never raising.

        Returns:
            The assistant's reply, TIMEOUT_REPLY when the run did not finish
            in time, or FALLBACK_REPLY for any other failure.
        """
        try:
            return await self.ask(text)
        except RunTimeoutError as e:
            logger.warning(f"Chat timeout: {e}")
            return TIMEOUT_REPLY
        except httpx.HTTPStatusError as e:
            logger.error(f"Chat error: {e.response.status_code} {e.response.text}")
            return FALLBACK_REPLY
        except Exception as e:
            logger.error(f"Chat error: {e}")
            return FALLBACK_REPLY
