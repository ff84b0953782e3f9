import re

from Crypto.Util import number

import config
from errors import ParseError, MessageTooLarge, DecodeError
from util import Constants, powm, randkey


class GroupParameters:
	"""Public parameters for Diffie-Hellman or ElGamal.

	A generator G and primes P and Q such that Q divides P - 1 and
	G^Q = 1 mod P, i.e. <G> is a cyclic subgroup of (Z/PZ)* of order Q.
	Instances are never mutated after construction.
	"""

	__slots__ = ('_p', '_g', '_q', '_one', '_q_minus_one')

	def __init__(self, p, g, q):
		if not (2 <= g <= p - 2):
			raise ParseError('generator out of range [2, P-2]')
		if q < 2 or (p - 1) % q != 0:
			raise ParseError('Q does not divide P - 1')
		if powm(g, q, p) != 1:
			raise ParseError('G does not generate a subgroup of order Q')
		self._p = p
		self._g = g
		self._q = q
		self._one = 1
		self._q_minus_one = q - 1

	@property
	def p(self):
		return self._p

	@property
	def g(self):
		return self._g

	@property
	def q(self):
		return self._q

	@property
	def one(self):
		return self._one

	@property
	def q_minus_one(self):
		return self._q_minus_one

	@property
	def max_msg_bytes(self):
		"""Maximum length of a message that may be encoded under P."""
		return self._p.bit_length() // 8 - Constants.CODEC_OVERHEAD

	def is_prime(self):
		"""Probabilistic primality check of P and Q."""
		return bool(number.isPrime(self._p) and number.isPrime(self._q))

	def sample(self):
		"""Samples a uniformly random exponent from [1, Q-1]."""
		# draw from [0, Q-1) and shift by one
		return randkey(0, self._q_minus_one - 1) + self._one

	def powm(self, base, exp):
		"""Modular exponentiation in Z/P."""
		return powm(base, exp, self._p)

	def encode(self, msg):
		"""Encodes the byte string msg as an element of Z/P.

		The payload is framed by two sentinel bytes and right-padded with
		zeros up to max_msg_bytes + 2 bytes before being read big-endian.
		"""
		max_msg_bytes = self.max_msg_bytes
		if len(msg) > max_msg_bytes:
			raise MessageTooLarge('message too big: {} > {} bytes'.format(
					len(msg), max(max_msg_bytes, 0)))
		padded = (bytes([Constants.SENTINEL]) + bytes(msg) +
				bytes([Constants.SENTINEL]) + bytes(max_msg_bytes - len(msg)))
		return int.from_bytes(padded, byteorder='big')

	def decode(self, M):
		"""Decodes an element produced by encode() back into bytes."""
		padded = M.to_bytes((M.bit_length() + 7) // 8, byteorder='big')
		padded = padded.rstrip(b'\x00')
		if (len(padded) < 2 or padded[0] != Constants.SENTINEL or
				padded[-1] != Constants.SENTINEL):
			raise DecodeError('element does not encode a message')
		return padded[1:-1]

	def __eq__(self, other):
		if not isinstance(other, GroupParameters):
			return NotImplemented
		return (self._p, self._g, self._q) == (other._p, other._g, other._q)

	def __hash__(self):
		return hash((self._p, self._g, self._q))

	def __repr__(self):
		return 'GroupParameters(p=0x{:x}, g=0x{:x}, q=0x{:x})'.format(
				self._p, self._g, self._q)


def parse_params(p_hex, g_hex, q_hex):
	"""Creates GroupParameters from hexadecimal strings encoding P, G and Q."""
	values = []
	for name, s in (('P', p_hex), ('G', g_hex), ('Q', q_hex)):
		if not isinstance(s, str) or not re.fullmatch('[0-9a-fA-F]+', s):
			raise ParseError('{} is not valid hexadecimal'.format(name))
		values.append(int(s, 16))
	return GroupParameters(*values)


DEFAULT_PARAMS = parse_params(*config.PARAMS_HEX)
