from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Union, assert_never

from ..schemas import Post


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    post: Post


@dataclass(frozen=True)
class Failure:
    message: str


Outcome = Union[Idle, Loading, Success, Failure]


def _text(value: object) -> str:
    return "" if value is None else escape(str(value))


def render_outcome(outcome: Outcome) -> str:
    """Render an outcome as an HTML fragment."""
    if isinstance(outcome, Loading):
        return '<div data-testid="loading">Loading...</div>'
    if isinstance(outcome, Failure):
        return f'<div data-testid="error">Error: {escape(outcome.message)}</div>'
    if isinstance(outcome, Success):
        return (
            '<div data-testid="post-display">'
            f'<h2 data-testid="post-title">{_text(outcome.post.title)}</h2>'
            f'<p data-testid="post-body">{_text(outcome.post.body)}</p>'
            "</div>"
        )
    if isinstance(outcome, Idle):
        return '<div data-testid="empty">No post data</div>'
    assert_never(outcome)
