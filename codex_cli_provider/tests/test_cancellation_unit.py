"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, callbacks, and raise_if_cancelled behavior.
"""
from __future__ import annotations

import pytest

from codex_cli_provider.base.cancellation import (
    CancellationToken,
    CancelledError,
)


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    # idempotent second call
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101


def test_cancelling_child_leaves_parent_alone():
    parent = CancellationToken()
    child = parent.child()
    child.cancel("local")
    assert child.cancelled is True  # nosec B101
    assert parent.cancelled is False  # nosec B101


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101


def test_callbacks_run_once_and_late_callbacks_run_immediately():
    token = CancellationToken()
    seen = []
    token.add_callback(seen.append)
    token.cancel("abort")
    token.cancel("again")
    token.add_callback(lambda reason: seen.append(f"late:{reason}"))
    assert seen == ["abort", "late:abort"]  # nosec B101


def test_failing_callback_does_not_block_others():
    token = CancellationToken()
    seen = []

    def _boom(_reason):
        raise RuntimeError("hook failed")

    token.add_callback(_boom)
    token.add_callback(seen.append)
    token.cancel("x")
    assert seen == ["x"]  # nosec B101


def test_raise_if_cancelled_raises_custom_error():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()
