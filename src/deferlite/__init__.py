from deferlite.aggregate import check_all_resolved, get_values_ref, when_all
from deferlite.deferred import Deferred, State
from deferlite.env import ENV_DEFERLITE_STRICT, strict_settlement
from deferlite.errors import AlreadySettledError, DeferredError
from deferlite.promise import (
	Promise,
	PromiseLike,
	SupportsPromise,
	is_promise,
	noop,
	when,
)

__all__ = [
	"ENV_DEFERLITE_STRICT",
	"AlreadySettledError",
	"Deferred",
	"DeferredError",
	"Promise",
	"PromiseLike",
	"State",
	"SupportsPromise",
	"check_all_resolved",
	"get_values_ref",
	"is_promise",
	"noop",
	"strict_settlement",
	"when",
	"when_all",
]
