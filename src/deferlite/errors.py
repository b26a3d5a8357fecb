class DeferredError(RuntimeError):
	pass


class AlreadySettledError(DeferredError):
	def __init__(self, state: str, attempted: str) -> None:
		super().__init__(
			f"Cannot {attempted} a deferred that is already {state}. "
			"Strict settlement is enabled for this deferred."
		)
		self.state = state
		self.attempted = attempted


__all__ = ["AlreadySettledError", "DeferredError"]
