from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, Self, TypeVar

from deferlite.env import strict_settlement
from deferlite.errors import AlreadySettledError

if TYPE_CHECKING:
	from deferlite.promise import Promise, PromiseLike

T = TypeVar("T")

logger = logging.getLogger(__name__)


class State(StrEnum):
	PENDING = "pending"
	RESOLVED = "resolved"
	REJECTED = "rejected"


class Deferred(Generic[T]):
	"""
	A value that is settled exactly once, from the outside, by calling
	`resolve` or `reject`.

	Consumers never subscribe on the deferred itself. They go through the
	read-only view returned by `promise()`, which exposes `done`, `fail` and
	`always`. All callbacks run synchronously, inside the call that settles
	the deferred or inside the registration call if it is already settled.

	```python
	dfd = Deferred()
	dfd.promise().done(lambda v: v + 1).done(print)
	dfd.resolve(41)  # prints 42
	```

	Settling twice is allowed by default: the second call overwrites the state
	and payload without notifying anyone. Pass `strict=True` (or set
	`DEFERLITE_STRICT=1`) to raise `AlreadySettledError` instead.
	"""

	__slots__: tuple[str, ...] = (
		"_state",
		"_data",
		"_strict",
		"_on_resolved",
		"_on_rejected",
		"_on_always",
		"_dispatching",
	)
	_state: State
	_data: Any
	_strict: bool
	_on_resolved: deque[Callable[[Any], Any]]
	_on_rejected: deque[Callable[[Any], Any]]
	_on_always: deque[Callable[[], Any]]
	_dispatching: bool

	def __init__(self, *, strict: bool | None = None) -> None:
		self._state = State.PENDING
		self._data = None
		self._strict = strict_settlement() if strict is None else strict
		# Insertion order is invocation order
		self._on_resolved = deque()
		self._on_rejected = deque()
		self._on_always = deque()
		self._dispatching = False

	@staticmethod
	def is_deferred(obj: object) -> bool:
		return isinstance(obj, Deferred)

	@staticmethod
	def when(value: Any) -> PromiseLike[Any]:
		from deferlite.promise import when

		return when(value)

	@staticmethod
	def all(items: Iterable[Any]) -> PromiseLike[list[Any]]:
		from deferlite.aggregate import when_all

		return when_all(items)

	@property
	def strict(self) -> bool:
		return self._strict

	def state(self) -> State:
		return self._state

	def promise(self) -> Promise[T]:
		from deferlite.promise import Promise

		return Promise(self)

	def resolve(self, value: T | None = None) -> Self:
		self._settle(State.RESOLVED, value)
		self._dispatch()
		return self

	def reject(self, reason: Any = None) -> Self:
		self._settle(State.REJECTED, reason)
		self._dispatch()
		return self

	def _settle(self, state: State, data: Any) -> None:
		if self._state is not State.PENDING:
			attempted = "resolve" if state is State.RESOLVED else "reject"
			if self._strict:
				raise AlreadySettledError(self._state.value, attempted)
			logger.warning(
				"Deferred already %s; %s overwrites its payload without notifying subscribers",
				self._state.value,
				attempted,
			)
		self._state = state
		self._data = data
		logger.debug("Deferred %s with %r", state.value, data)

	# Registration. Used by the promise view, which owns the "fire now if
	# already settled" check.
	def _add_resolved(self, cb: Callable[[Any], Any]) -> None:
		self._on_resolved.append(cb)

	def _add_rejected(self, cb: Callable[[Any], Any]) -> None:
		self._on_rejected.append(cb)

	def _add_always(self, cb: Callable[[], Any]) -> None:
		self._on_always.append(cb)

	# Dispatch. A nested call (a callback registering on this same settled
	# deferred) returns at once; the outer drain runs whatever it queued, so
	# the settlement queue still runs before the always queue and the queues
	# are cleared only once, at the end.
	def _dispatch(self) -> None:
		if self._dispatching:
			return
		self._dispatching = True
		try:
			queue = (
				self._on_resolved if self._state is State.RESOLVED else self._on_rejected
			)
			always = self._on_always
			while queue or always:
				# Pop before calling, so no callback runs twice
				if queue:
					queue.popleft()(self._data)
				else:
					always.popleft()()
			self._on_resolved.clear()
			self._on_rejected.clear()
			self._on_always.clear()
		finally:
			self._dispatching = False

	def __repr__(self) -> str:
		if self._state is State.PENDING:
			return "<Deferred pending>"
		return f"<Deferred {self._state.value} {self._data!r}>"


__all__ = ["Deferred", "State"]
