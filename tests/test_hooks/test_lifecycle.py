"""Tests for lifecycle hooks on event contexts."""

from __future__ import annotations

import warnings

import pytest

from sqla_gate.config._config import GateConfig
from sqla_gate.context import EventContext
from sqla_gate.exceptions import ConfigurationError
from sqla_gate.hooks import Hook, HookResult, mount, run_hooks
from sqla_gate.testing import FailingRepository, RecordingHandler
from tests.conftest import Post, User


class TestMount:
    def test_default_stage(self) -> None:
        hooks = mount("load_resource", model=Post)
        assert [hook.stage for hook in hooks] == ["handle_params"]

    def test_both_stages(self) -> None:
        hooks = mount("authorize_resource", on=["handle_params", "handle_event"], model=Post)
        assert [hook.stage for hook in hooks] == ["handle_params", "handle_event"]

    def test_unknown_stages_dropped(self) -> None:
        hooks = mount("load_resource", on=["handle_event", "handle_info"], model=Post)
        assert [hook.stage for hook in hooks] == ["handle_event"]

    def test_no_valid_stage_warns(self) -> None:
        with pytest.warns(UserWarning, match="no valid stage"):
            hooks = mount("load_resource", on="handle_info", model=Post)
        assert hooks == []

    def test_valid_stage_does_not_warn(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            mount("load_resource", on="handle_event", model=Post)

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown hook kind"):
            mount("load_everything", model=Post)

    def test_options_validated_at_mount(self) -> None:
        with pytest.raises(ConfigurationError):
            mount("load_resource", model=Post, only="show", **{"except": "index"})

    def test_short_option_keys(self) -> None:
        (hook,) = mount("load_resource", model=Post, **{"as": "entry"})
        assert hook.options.as_ == "entry"


class TestHook:
    def test_params_stage_uses_live_action(self, config: GateConfig) -> None:
        (hook,) = mount("load_resource", model=Post, config=config)
        result = hook(EventContext.for_params({"id": "1"}, live_action="show"))
        assert result.action == "cont"
        assert result.context.assigns["post"].id == 1

    def test_event_stage_uses_event_name(self, config: GateConfig, user: User) -> None:
        (hook,) = mount("authorize_resource", on="handle_event", model=Post, config=config)
        ctx = EventContext.for_event("archive", {"id": "1"}, assigns={"current_user": user})
        result = hook(ctx)
        assert result == HookResult("cont", ctx)
        assert ctx.assigns["authorized"] is True

    def test_other_stage_is_skipped(self) -> None:
        (hook,) = mount(
            "load_resource",
            on="handle_event",
            model=Post,
            config=GateConfig(repository=FailingRepository()),
        )
        ctx = EventContext.for_params({"id": "1"}, live_action="show")
        assert hook(ctx) == HookResult("cont", ctx)
        assert ctx.assigns == {}

    def test_denial_halts(self, repository: object, user: User) -> None:
        from tests.conftest import can

        config = GateConfig(repository=repository, permission=can)  # type: ignore[arg-type]
        (hook,) = mount("load_and_authorize_resource", on="handle_event", model=Post, config=config)
        ctx = EventContext.for_event("delete", {"id": "2"}, assigns={"current_user": user})
        result = hook(ctx)
        assert result.action == "halt"
        assert result.context.redirected_to == "/"
        assert result.context.assigns["post"] is None

    def test_not_found_halts(self, repository: object) -> None:
        config = GateConfig(repository=repository)  # type: ignore[arg-type]
        (hook,) = mount("load_resource", model=Post, config=config)
        result = hook(EventContext.for_params({"id": "99"}, live_action="show"))
        assert result.action == "halt"

    def test_filtered_action_continues(self) -> None:
        (hook,) = mount(
            "load_resource",
            model=Post,
            only="show",
            config=GateConfig(repository=FailingRepository()),
        )
        ctx = EventContext.for_params({"id": "1"}, live_action="edit")
        assert hook(ctx).action == "cont"

    def test_is_hook(self) -> None:
        assert all(isinstance(h, Hook) for h in mount("load_resource", model=Post))


class TestRunHooks:
    def test_runs_in_order(self, config: GateConfig, user: User) -> None:
        hooks = [
            *mount("load_resource", on="handle_event", model=Post, config=config),
            *mount("authorize_resource", on="handle_event", model=Post, config=config),
        ]
        ctx = EventContext.for_event("show", {"id": "1"}, assigns={"current_user": user})
        result = run_hooks(hooks, ctx)
        assert result.action == "cont"
        assert ctx.assigns["post"].id == 1
        assert ctx.assigns["authorized"] is True

    def test_stops_at_first_halt(self, repository: object) -> None:
        handler = RecordingHandler(halt=True)
        config = GateConfig(repository=repository, error_handler=handler)  # type: ignore[arg-type]
        hooks = [
            *mount("load_resource", model=Post, config=config),
            *mount("load_resource", model=Post, **{"as": "again"}, config=config),
        ]
        result = run_hooks(hooks, EventContext.for_params({"id": "99"}, live_action="show"))
        assert result.action == "halt"
        assert handler.calls == ["not_found_handler"]
        assert "again" not in result.context.assigns

    def test_no_hooks(self) -> None:
        ctx = EventContext()
        assert run_hooks([], ctx) == HookResult("cont", ctx)
