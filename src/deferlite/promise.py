from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Protocol, Self, TypeVar, runtime_checkable

from deferlite.deferred import Deferred, State

T = TypeVar("T")
R = TypeVar("R")
T_co = TypeVar("T_co", covariant=True)


def noop(*args: Any, **kwargs: Any) -> None:
	pass


@runtime_checkable
class SupportsPromise(Protocol):
	"""Anything that can hand out a promise view of itself."""

	def promise(self) -> Any: ...


class PromiseLike(Protocol[T_co]):
	"""
	The subscription interface shared by `Promise` and compatible foreign
	promise implementations.

	Only `done` produces a new promise carrying a transformed value. `fail` and
	`always` observe the outcome and return the same promise for chaining.
	"""

	def promise(self) -> PromiseLike[T_co]: ...
	def state(self) -> str: ...
	def done(self, cb: Callable[[T_co], Any]) -> PromiseLike[Any]: ...
	def fail(self, cb: Callable[[Any], Any]) -> Self: ...
	def always(self, cb: Callable[[], Any]) -> Self: ...
	def progress(self, *args: Any, **kwargs: Any) -> Any: ...


def is_promise(obj: object) -> bool:
	"""True for promise-shaped objects that are not a `Deferred` themselves."""
	return (
		obj is not None
		and not isinstance(obj, type)
		and isinstance(obj, SupportsPromise)
		and callable(obj.promise)
		and not Deferred.is_deferred(obj)
	)


class Promise(Generic[T]):
	"""Read-only view over a `Deferred`. Holds no state of its own."""

	__slots__: tuple[str, ...] = ("_dfd",)
	_dfd: Deferred[T]

	def __init__(self, dfd: Deferred[T]) -> None:
		self._dfd = dfd

	progress = staticmethod(noop)

	def promise(self) -> Self:
		return self

	def state(self) -> State:
		return self._dfd.state()

	def done(self, cb: Callable[[T], Any]) -> Promise[Any]:
		"""
		Subscribe to resolution. Returns a new promise resolved with the return
		value of `cb`, or following it if `cb` returns a promise.
		"""
		dfd = self._dfd
		chained: Deferred[Any] = Deferred()

		def on_resolved(data: T) -> None:
			result = cb(data)
			if is_promise(result):
				result.done(chained.resolve)
				result.fail(chained.reject)
			else:
				chained.resolve(result)

		dfd._add_resolved(on_resolved)  # pyright: ignore[reportPrivateUsage]
		if dfd.state() is State.RESOLVED:
			dfd._dispatch()  # pyright: ignore[reportPrivateUsage]

		return chained.promise()

	def fail(self, cb: Callable[[Any], Any]) -> Self:
		dfd = self._dfd
		dfd._add_rejected(cb)  # pyright: ignore[reportPrivateUsage]
		if dfd.state() is State.REJECTED:
			dfd._dispatch()  # pyright: ignore[reportPrivateUsage]
		return self

	def always(self, cb: Callable[[], Any]) -> Self:
		dfd = self._dfd
		dfd._add_always(cb)  # pyright: ignore[reportPrivateUsage]
		if dfd.state() is not State.PENDING:
			dfd._dispatch()  # pyright: ignore[reportPrivateUsage]
		return self

	def __repr__(self) -> str:
		return f"<Promise of {self._dfd!r}>"


def when(value: Any) -> PromiseLike[Any]:
	"""
	Adapt any value to the promise interface.

	- promise-shaped objects are returned unchanged
	- a `Deferred` is wrapped in a `Promise` view
	- anything else becomes an already resolved promise of that value
	"""
	if is_promise(value):
		return value
	dfd = value if Deferred.is_deferred(value) else Deferred().resolve(value)
	return Promise(dfd)


__all__ = [
	"Promise",
	"PromiseLike",
	"SupportsPromise",
	"is_promise",
	"noop",
	"when",
]
