import os

ENV_DEFERLITE_STRICT = "DEFERLITE_STRICT"

_FALSY = {"", "0", "false", "False", "no"}


def strict_settlement() -> bool:
	"""
	Whether new deferreds refuse to be settled twice by default.

	Only "", "0", "false", "False" and "no" count as off; any other value,
	"off" included, turns strict settlement on.
	"""
	value = os.environ.get(ENV_DEFERLITE_STRICT)
	if value is None:
		return False
	return value not in _FALSY


__all__ = ["ENV_DEFERLITE_STRICT", "strict_settlement"]
