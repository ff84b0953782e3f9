class MixError(Exception):
	"""Base class for all errors raised by the mix and its proofs."""


class EntropyFailure(MixError):
	"""The secure random source failed."""


class ParseError(MixError, ValueError):
	"""Group parameters could not be parsed or are inconsistent."""


class MessageTooLarge(MixError, ValueError):
	"""A message does not fit into a single group element."""


class DecodeError(MixError, ValueError):
	"""A group element does not carry an encoded message."""


class LengthMismatch(MixError, ValueError):
	"""Two sequences that must have the same length do not."""


class NotAPermutation(MixError, ValueError):
	"""An array is not a bijection on [0, n)."""


class ProtocolError(MixError):
	"""A proof run was aborted. The run must be restarted from scratch."""


class PeerAborted(ProtocolError):
	"""The counterparty closed the channel or sent the absent message."""


class MalformedMessage(ProtocolError):
	"""The counterparty sent a message of the wrong shape."""


class DegenerateWitness(ProtocolError):
	"""A secret exponent is not invertible modulo Q."""


class InvalidBase(MixError, ValueError):
	"""A public blinding base is not a unit mod P."""
