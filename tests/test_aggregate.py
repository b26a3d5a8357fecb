from deferlite import (
	Deferred,
	State,
	check_all_resolved,
	get_values_ref,
	when,
	when_all,
)
from deferlite.test_helpers import ForeignPromise


def collect(p):
	outcome = {}
	p.done(lambda v: outcome.setdefault("done", v))
	p.fail(lambda r: outcome.setdefault("fail", r))
	return outcome


def test_empty_resolves_immediately():
	p = when_all([])
	assert p.state() is State.RESOLVED
	assert collect(p) == {"done": []}


def test_plain_values_resolve_immediately():
	p = when_all([1, 2, 3])
	assert p.state() is State.RESOLVED
	assert collect(p) == {"done": [1, 2, 3]}


def test_accepts_any_iterable():
	p = when_all(x for x in ("a", "b"))
	assert collect(p) == {"done": ["a", "b"]}


def test_waits_for_every_deferred():
	a = Deferred()
	b = Deferred()
	p = when_all([a, "plain", b.promise()])
	outcome = collect(p)

	assert p.state() is State.PENDING
	b.resolve("b")
	assert p.state() is State.PENDING
	a.resolve("a")
	assert p.state() is State.RESOLVED
	assert outcome == {"done": ["a", "plain", "b"]}


def test_already_resolved_inputs_resolve_immediately():
	a = Deferred().resolve(1)
	p = when_all([a, when(2)])
	assert collect(p) == {"done": [1, 2]}


def test_rejects_with_values_settled_so_far():
	a = Deferred()
	b = Deferred()
	p = when_all([a, b])
	outcome = collect(p)

	a.resolve("x")
	b.reject("y")
	assert p.state() is State.REJECTED
	assert outcome == {"fail": ["x", "y"]}


def test_rejection_does_not_wait_for_stragglers():
	a = Deferred()
	b = Deferred()
	p = when_all([a, b])
	outcome = collect(p)

	b.reject("y")
	assert p.state() is State.REJECTED
	rejected_values = outcome["fail"]
	assert rejected_values == [None, "y"]

	# The live list keeps filling in after rejection
	a.resolve("x")
	assert rejected_values == ["x", "y"]
	assert p.state() is State.REJECTED


def test_first_failure_wins():
	a = Deferred()
	b = Deferred()
	reasons = []
	p = when_all([a, b])
	p.fail(lambda values: reasons.append(list(values)))

	a.reject("first")
	b.reject("second")
	assert reasons == [["first", None]]


def test_already_rejected_input_rejects_immediately():
	a = Deferred().reject("no")
	p = when_all([1, a])
	assert p.state() is State.REJECTED
	assert collect(p) == {"fail": [1, "no"]}


def test_resolves_only_once():
	a = Deferred()
	calls = []
	when_all([a, 1]).done(calls.append)
	a.resolve("a")
	assert calls == [["a", 1]]


def test_check_all_resolved():
	pending = Deferred()
	assert check_all_resolved([])
	assert check_all_resolved([1, "two", None])
	assert check_all_resolved([Deferred().resolve(1), when(3)])
	assert not check_all_resolved([1, pending])
	assert not check_all_resolved([pending.promise()])
	assert not check_all_resolved([Deferred().reject(1)])


def test_get_values_ref_is_live():
	a = Deferred()
	b = Deferred()
	values = get_values_ref([a, 5, b.promise()])
	assert values == [None, 5, None]

	b.reject("r")
	a.resolve("v")
	assert values == ["v", 5, "r"]


def test_waits_for_foreign_promise():
	foreign = ForeignPromise()
	p = when_all([foreign, 1])
	outcome = collect(p)

	assert p.state() is State.PENDING
	foreign.resolve("f")
	assert p.state() is State.RESOLVED
	assert outcome == {"done": ["f", 1]}


def test_rejects_when_foreign_promise_rejects():
	foreign = ForeignPromise()
	other = Deferred()
	p = when_all([other, foreign])
	outcome = collect(p)

	foreign.reject("bad")
	assert p.state() is State.REJECTED
	assert outcome == {"fail": [None, "bad"]}


def test_already_resolved_foreign_promise_resolves_immediately():
	foreign = ForeignPromise()
	foreign.resolve("f")
	p = when_all([foreign, Deferred().resolve("d")])
	assert p.state() is State.RESOLVED
	assert collect(p) == {"done": ["f", "d"]}


def test_check_all_resolved_reads_foreign_string_states():
	foreign = ForeignPromise()
	assert not check_all_resolved([foreign])
	foreign.resolve(1)
	assert check_all_resolved([foreign])

	rejected = ForeignPromise()
	rejected.reject("r")
	assert not check_all_resolved([foreign, rejected])
