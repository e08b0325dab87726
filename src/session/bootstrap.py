"""Build a SessionController wired from environment configuration."""

from __future__ import annotations

import functools
from typing import Optional

from clients.github import GitHubClient
from clients.tokenizer import count_tokens
from config import (
    DEFAULT_OUTPUT_PATH,
    DEFAULT_SOURCE,
    EXTRA_BINARY_EXTENSIONS,
    EXTRA_TEXT_EXTENSIONS,
    GITHUB_TIMEOUT,
    GITHUB_USER_AGENT,
    HTTP_VERIFY,
    POLL_INTERVAL,
    TOKENIZER_ENCODING,
)
from core.models import FilterConfig, OutputDestination
from session.controller import SessionController
from session.state import SessionState
from sources.source_factory import create_text_source


def create_session_controller(
    *,
    source: Optional[str] = None,
    output_path: Optional[str] = None,
    destination: OutputDestination = OutputDestination.FILE_AND_CLIPBOARD,
    github_client: Optional[GitHubClient] = None,
) -> SessionController:
    client = github_client or GitHubClient(
        timeout=GITHUB_TIMEOUT,
        verify=HTTP_VERIFY,
        user_agent=GITHUB_USER_AGENT,
    )

    state = SessionState(
        source_path=source if source is not None else DEFAULT_SOURCE,
        output_path=output_path if output_path is not None else DEFAULT_OUTPUT_PATH,
        destination=destination,
        filter_config=FilterConfig.from_iterables(EXTRA_TEXT_EXTENSIONS, EXTRA_BINARY_EXTENSIONS),
    )

    controller = SessionController(
        state,
        source_factory=functools.partial(create_text_source, github_client=client),
        token_counter=functools.partial(count_tokens, encoding=TOKENIZER_ENCODING),
        poll_interval=POLL_INTERVAL,
    )
    # Load the initial source on the first tick
    controller.request_reload()
    return controller
