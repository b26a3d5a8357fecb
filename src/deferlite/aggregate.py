from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from deferlite.deferred import Deferred, State
from deferlite.promise import PromiseLike, is_promise, when

logger = logging.getLogger(__name__)


def _is_settleable(item: object) -> bool:
	return is_promise(item) or Deferred.is_deferred(item)


def check_all_resolved(items: Sequence[Any]) -> bool:
	"""Plain values always count as resolved."""
	for item in items:
		if _is_settleable(item) and item.state() != State.RESOLVED:
			return False
	return True


def get_values_ref(items: Sequence[Any]) -> list[Any]:
	"""
	Build the list of outcomes for `items`, position by position.

	Plain values are copied in right away. For deferreds and promises, the
	slot is filled in when they settle, with either the resolved value or the
	rejection reason. The returned list keeps being written to after this call
	returns; slots of items that have not settled yet hold `None`.
	"""
	values: list[Any] = [None] * len(items)

	def track(index: int, item: Any) -> None:
		def store(value: Any) -> None:
			values[index] = value

		p = when(item)
		p.done(store)
		p.fail(store)

	for index, item in enumerate(items):
		if _is_settleable(item):
			track(index, item)
		else:
			values[index] = item
	return values


def when_all(items: Iterable[Any]) -> PromiseLike[list[Any]]:
	"""
	Combine `items` into one promise.

	Resolves with the list of values once every deferred or promise among
	`items` has resolved. Rejects as soon as any of them rejects, with the same
	live list, which may still be incomplete at that point and keeps filling
	in as the remaining items settle.
	"""
	items = list(items)
	master: Deferred[list[Any]] = Deferred()
	values = get_values_ref(items)

	def on_fail(*_: Any) -> None:
		if master.state() is State.PENDING:
			logger.debug("Aggregate of %d item(s) rejected", len(items))
			master.reject(values)

	def on_done(*_: Any) -> None:
		if master.state() is State.PENDING and check_all_resolved(items):
			master.resolve(values)

	if check_all_resolved(items):
		master.resolve(values)

	for item in items:
		when(item).fail(on_fail).done(on_done)

	return when(master)


__all__ = ["check_all_resolved", "get_values_ref", "when_all"]
