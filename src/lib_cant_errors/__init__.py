"""Public package surface for building "Can't X because Y" errors.

Define error kinds with :func:`cant` (or :class:`ErrorFactory`), raise them
like any exception, chain reasons with :data:`CAUSE`, and write JSON log
records with :meth:`CantError.log`. Severity routing lives in
:class:`SinkRegistry`, :func:`define_errors` and :func:`load_sink_registry`.
"""

from __future__ import annotations

from .application.factory import CAUSE, ErrorFactory, cant
from .application.kind import CantError, make_error_kind
from .application.registry import EMPTY_REGISTRY, SinkRegistry, define_errors
from .application.routing_config import load_sink_registry
from .adapters.sinks.default import DefaultSinkProvider, validate_sinks
from .domain.cause import Cause, ChainedInstance, ExternalFailure, as_cause
from .domain.errors import CantConfigError, InvalidFormat, InvalidSinkTypeError, NotFound
from .domain.formatting import count_placeholders, format_template
from .domain.template import ErrorTemplate
from .observability import bind_trace_id, get_logger
from .testing import i_should_fail

__all__ = [
    "CAUSE",
    "Cause",
    "CantConfigError",
    "CantError",
    "ChainedInstance",
    "DefaultSinkProvider",
    "EMPTY_REGISTRY",
    "ErrorFactory",
    "ErrorTemplate",
    "ExternalFailure",
    "InvalidFormat",
    "InvalidSinkTypeError",
    "NotFound",
    "SinkRegistry",
    "as_cause",
    "bind_trace_id",
    "cant",
    "count_placeholders",
    "define_errors",
    "format_template",
    "get_logger",
    "i_should_fail",
    "load_sink_registry",
    "make_error_kind",
    "validate_sinks",
]
