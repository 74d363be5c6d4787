"""Derive the assigns key a resource is stored under."""

from __future__ import annotations

import re

from sqla_gate.config._options import ResourceOptions
from sqla_gate.exceptions import ConfigurationError

__all__ = ["derive_key", "underscore"]

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase name to snake_case.

    Example::

        underscore("BlogPost")     # "blog_post"
        underscore("HTTPRequest")  # "http_request"
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def derive_key(options: ResourceOptions, action: str) -> str:
    """Return the assigns key for the configured resource.

    The ``as_`` option is used verbatim. Otherwise the rightmost segment
    of the model's qualified name is converted to snake case, and ``"s"``
    is appended for the ``index`` action unless a single instance is
    loaded.

    Example::

        derive_key(ResourceOptions(model=BlogPost), "show")   # "blog_post"
        derive_key(ResourceOptions(model=BlogPost), "index")  # "blog_posts"
        derive_key(ResourceOptions(model=Post, as_="entry"), "index")  # "entry"
    """
    if options.as_ is not None:
        return options.as_
    if options.model is None:
        raise ConfigurationError("The model option is required to derive a resource key")

    name = underscore(options.model.__qualname__.rsplit(".", 1)[-1])
    if action == "index" and not options.single_instance:
        return name + "s"
    return name
