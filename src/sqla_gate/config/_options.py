"""Per-call options for the load/authorize pipeline (the highest tier)."""

from __future__ import annotations

import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from sqla_gate._types import HandlerRef
from sqla_gate.exceptions import ConfigurationError

__all__ = ["ActionFilter", "ResourceOptions", "coerce_options", "validate_options"]

# A single action name or a collection of them.
ActionFilter = Union[str, Sequence[str]]

# Mapping keys that differ from the dataclass field names.
_KEY_ALIASES: dict[str, str] = {"as": "as_", "except": "except_"}


def _normalize_filter(value: ActionFilter | None) -> ActionFilter | None:
    if value is None or isinstance(value, str):
        return value
    return tuple(value)


@dataclass(frozen=True, slots=True)
class ResourceOptions:
    """Options for one pipeline call.

    Attributes:
        model: The model class the resource belongs to.
        as_: Explicit assigns key; derived from the model name if unset.
        only: Run only for this action (or these actions).
        except_: Skip this action (or these actions).
        preload: Association spec passed through to ``Repository.preload``.
        id_name: Parameter holding the identity value.
        id_field: Storage field matched against the identity value.
        required: ``None`` requires a resource for id actions only,
            ``True`` always requires one and loads a single instance,
            ``False`` never fires the not-found handler.
        persisted: Deprecated. Load a single instance for every action.
        current_user: Assigns key of the subject for this call.
        not_found_handler: Handler override for this call.
        unauthorized_handler: Handler override for this call.
        non_id_actions: Deprecated. Extra actions treated like
            ``index``/``new``/``create``.

    Example::

        opts = ResourceOptions(model=Post, only=("show", "edit"), preload="author")
        opts = ResourceOptions.from_mapping({"model": Post, "as": "entry"})
    """

    model: type | None = None
    as_: str | None = None
    only: ActionFilter | None = None
    except_: ActionFilter | None = None
    preload: Any = None
    id_name: str = "id"
    id_field: str = "id"
    required: bool | None = None
    persisted: bool = False
    current_user: str | None = None
    not_found_handler: HandlerRef | None = None
    unauthorized_handler: HandlerRef | None = None
    non_id_actions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        validate_options(self)
        object.__setattr__(self, "only", _normalize_filter(self.only))
        object.__setattr__(self, "except_", _normalize_filter(self.except_))

        if isinstance(self.non_id_actions, str) or not isinstance(
            self.non_id_actions, Sequence
        ):
            raise ConfigurationError(
                f"non_id_actions must be a list of action names, got {self.non_id_actions!r}"
            )
        object.__setattr__(self, "non_id_actions", tuple(self.non_id_actions))

        if self.non_id_actions:
            warnings.warn(
                "non_id_actions is deprecated. Use required=False instead.",
                DeprecationWarning,
                stacklevel=3,
            )
        if self.persisted:
            warnings.warn(
                "persisted is deprecated. Use required=True instead.",
                DeprecationWarning,
                stacklevel=3,
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ResourceOptions:
        """Build options from a plain mapping.

        Accepts the short keys ``"as"`` and ``"except"`` as well as the
        field names. Unknown keys raise ``ConfigurationError``.
        """
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def single_instance(self) -> bool:
        """Whether every action loads one persisted record."""
        return bool(self.persisted) or self.required is True


def validate_options(options: ResourceOptions | Mapping[str, Any]) -> None:
    """Fail fast on mutually exclusive action filters.

    Raises:
        ConfigurationError: If both ``only`` and ``except`` are present.
            A mapping key counts as present even when its value is ``None``.

    Example::

        validate_options({"model": Post, "only": "show", "except": "index"})
        # ConfigurationError
    """
    if isinstance(options, ResourceOptions):
        has_only = options.only is not None
        has_except = options.except_ is not None
    else:
        has_only = "only" in options
        has_except = "except" in options or "except_" in options
    if has_only and has_except:
        raise ConfigurationError("You can't use both only and except options")


def coerce_options(
    options: ResourceOptions | Mapping[str, Any] | None,
    *,
    need_model: bool = True,
) -> ResourceOptions:
    """Return *options* as a validated ``ResourceOptions``.

    Args:
        options: A ``ResourceOptions`` instance, a mapping, or ``None``.
        need_model: Raise if ``model`` is missing.

    Raises:
        ConfigurationError: On invalid or incomplete options.
    """
    if options is None:
        result = ResourceOptions()
    elif isinstance(options, ResourceOptions):
        validate_options(options)
        result = options
    elif isinstance(options, Mapping):
        validate_options(options)
        result = ResourceOptions.from_mapping(options)
    else:
        raise ConfigurationError(
            f"options must be ResourceOptions or a mapping, got {type(options).__name__}"
        )
    if need_model and result.model is None:
        raise ConfigurationError("The model option is required")
    return result
