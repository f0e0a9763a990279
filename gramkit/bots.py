"""Requests for answering inline and callback queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_INLINE_CACHE_TIME = 60
DEFAULT_SWITCH_PM_START = "start"


@dataclass
class InlineSendOptions:
    """Options for answering an inline query."""

    gallery: bool = False
    next_offset: str = ""
    cache_time: int = 0
    private: bool = False
    switch_pm: str = ""
    switch_pm_text: str = ""


@dataclass
class CallbackOptions:
    """Options for answering a callback query."""

    alert: bool = False
    cache_time: int = 0
    url: str = ""


@dataclass(frozen=True)
class InlineBotSwitchPm:
    """A button offering to switch to a private chat with the bot."""

    text: str
    start_param: str


@dataclass
class SetInlineBotResultsRequest:
    """The request that answers an inline query."""

    query_id: int
    results: list[Any] = field(default_factory=list)
    gallery: bool = False
    private: bool = False
    cache_time: int = DEFAULT_INLINE_CACHE_TIME
    next_offset: str = ""
    switch_pm: InlineBotSwitchPm | None = None


@dataclass
class SetBotCallbackAnswerRequest:
    """The request that answers a callback query."""

    query_id: int
    message: str = ""
    alert: bool = False
    url: str = ""
    cache_time: int = 0


def build_inline_results_request(
    query_id: int, results: list[Any], options: InlineSendOptions | None = None
) -> SetInlineBotResultsRequest:
    """Build the request that answers inline query ``query_id`` with ``results``."""
    options = options or InlineSendOptions()
    switch_pm = None
    if options.switch_pm:
        switch_pm = InlineBotSwitchPm(
            text=options.switch_pm,
            start_param=options.switch_pm_text or DEFAULT_SWITCH_PM_START,
        )
    return SetInlineBotResultsRequest(
        query_id=query_id,
        results=list(results),
        gallery=options.gallery,
        private=options.private,
        cache_time=options.cache_time or DEFAULT_INLINE_CACHE_TIME,
        next_offset=options.next_offset,
        switch_pm=switch_pm,
    )


def build_callback_answer_request(
    query_id: int, text: str, options: CallbackOptions | None = None
) -> SetBotCallbackAnswerRequest:
    """Build the request that answers callback query ``query_id`` with ``text``."""
    options = options or CallbackOptions()
    return SetBotCallbackAnswerRequest(
        query_id=query_id,
        message=text,
        alert=options.alert,
        url=options.url,
        cache_time=options.cache_time,
    )